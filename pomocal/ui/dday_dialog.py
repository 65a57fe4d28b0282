
from PyQt6.QtCore import QDate
from PyQt6.QtWidgets import QDateEdit, QDialog, QFormLayout, QHBoxLayout, QLineEdit, QMessageBox, QPushButton

from pomocal.core.config import MAIN_STYLE
from pomocal.core.utils import now_local, start_of_day, to_date


class DDayDialog(QDialog):
    """Create or edit a D-Day."""
    def __init__(self, parent=None, dday=None):
        super().__init__(parent)
        self.dday = dday
        self.setWindowTitle("Edit D-Day" if dday else "New D-Day")
        self.setStyleSheet(MAIN_STYLE)

        layout = QFormLayout(self)
        self.title_edit = QLineEdit(dday.title if dday else "")
        layout.addRow("Title:", self.title_edit)

        day = to_date(dday.date if dday else now_local())
        self.date_edit = QDateEdit(QDate(day.year, day.month, day.day))
        self.date_edit.setCalendarPopup(True)
        layout.addRow("Date:", self.date_edit)

        buttons = QHBoxLayout()
        cancel_btn = QPushButton("Cancel")
        cancel_btn.clicked.connect(self.reject)
        buttons.addWidget(cancel_btn)
        save_btn = QPushButton("Save")
        save_btn.clicked.connect(self.confirm)
        buttons.addWidget(save_btn)
        layout.addRow(buttons)

    @property
    def title(self):
        return self.title_edit.text().strip()

    @property
    def date(self):
        return start_of_day(self.date_edit.date().toPyDate())

    def confirm(self):
        if not self.title:
            QMessageBox.warning(self, "Warning", "Title cannot be empty.")
            return
        self.accept()
