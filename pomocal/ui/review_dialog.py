from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QDialog, QHBoxLayout, QLabel, QPushButton, QTextEdit, QVBoxLayout

from pomocal.core.config import FONT_HEADER, FONT_HEADER_SIZE, MAIN_STYLE


class SessionReviewDialog(QDialog):
    """Asked after a work session: how did it go (1-5 stars) and a note."""
    def __init__(self, task_title=None, note="", parent=None):
        super().__init__(parent)
        self.rating = 0
        self.setWindowTitle("Session Complete!")
        self.setStyleSheet(MAIN_STYLE)
        self.setMinimumWidth(380)

        layout = QVBoxLayout(self)
        header = QLabel("Session Complete!")
        header.setFont(QFont(FONT_HEADER, FONT_HEADER_SIZE, QFont.Weight.Bold))
        header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(header)

        if task_title:
            title_label = QLabel(task_title)
            title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
            layout.addWidget(title_label)

        layout.addWidget(QLabel("How was your focus?"))
        stars_row = QHBoxLayout()
        self.star_buttons = []
        for value in range(1, 6):
            btn = QPushButton("☆")
            btn.setFixedWidth(44)
            btn.clicked.connect(lambda _, v=value: self.set_rating(v))
            stars_row.addWidget(btn)
            self.star_buttons.append(btn)
        layout.addLayout(stars_row)

        self.note_edit = QTextEdit()
        self.note_edit.setPlaceholderText("What did you work on?")
        self.note_edit.setPlainText(note)
        layout.addWidget(self.note_edit)

        save_btn = QPushButton("Save Session")
        save_btn.clicked.connect(self.accept)
        layout.addWidget(save_btn)

    def set_rating(self, value):
        self.rating = value
        for index, btn in enumerate(self.star_buttons, start=1):
            btn.setText("★" if index <= value else "☆")

    @property
    def note(self):
        return self.note_edit.toPlainText().strip()
