from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QComboBox, QDialog, QHBoxLayout, QLabel, QLineEdit, QListWidget, QMessageBox, QPushButton, QVBoxLayout
)

from pomocal.core.config import (
    DEFAULT_DIALOG_HEIGHT, DEFAULT_DIALOG_WIDTH, FONT_HEADER, FONT_HEADER_SIZE, FONT_LABEL, FONT_LABEL_SIZE,
    MAIN_STYLE
)
from pomocal.core.models import TodoItem
from pomocal.core.utils import format_minutes
from pomocal.ui.book_search_dialog import BookSearchDialog

NO_BOOK = "No book"


class TaskDialog(QDialog):
    """Dialog for creating and editing tasks."""
    def __init__(self, todo_manager, parent=None, on_confirm=None, task=None, book_api=None):
        super().__init__(parent)
        self.todo_manager = todo_manager
        self.on_confirm = on_confirm
        self.task = task
        self.book_api = book_api
        self.books = list(todo_manager.saved_books)

        self.setWindowTitle("Edit Task" if task else "Add Task")
        self.setStyleSheet(MAIN_STYLE)
        self.setMinimumSize(DEFAULT_DIALOG_WIDTH, DEFAULT_DIALOG_HEIGHT)

        self.init_ui()
        if task:
            self.populate_fields()

    def _label(self, text):
        label = QLabel(text)
        label.setFont(QFont(FONT_LABEL, FONT_LABEL_SIZE))
        return label

    def init_ui(self):
        """Create and arrange all dialog widgets."""
        main_layout = QVBoxLayout(self)
        main_layout.setSpacing(10)

        header_label = QLabel("Edit Task" if self.task else "Add New Task")
        header_font = QFont(FONT_HEADER, FONT_HEADER_SIZE)
        header_font.setBold(True)
        header_label.setFont(header_font)
        header_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        main_layout.addWidget(header_label)

        main_layout.addWidget(self._label("Title:"))
        self.title_edit = QLineEdit()
        main_layout.addWidget(self.title_edit)

        main_layout.addWidget(self._label("Category:"))
        self.category_combo = QComboBox()
        self.category_combo.setEditable(True)
        self.category_combo.addItem("")
        self.category_combo.addItems(self.todo_manager.saved_categories)
        main_layout.addWidget(self.category_combo)

        main_layout.addWidget(self._label("Book:"))
        book_row = QHBoxLayout()
        self.book_combo = QComboBox()
        self._fill_books()
        book_row.addWidget(self.book_combo, 1)
        search_btn = QPushButton("Search...")
        search_btn.setEnabled(self.book_api is not None)
        search_btn.clicked.connect(self.search_book)
        book_row.addWidget(search_btn)
        main_layout.addLayout(book_row)

        main_layout.addWidget(self._label("Goal (chapter / pages):"))
        self.goal_edit = QLineEdit()
        self.goal_edit.setPlaceholderText("e.g. Ch. 2, p. 30-58")
        main_layout.addWidget(self.goal_edit)

        main_layout.addWidget(self._label("Actually covered:"))
        self.actual_edit = QLineEdit()
        main_layout.addWidget(self.actual_edit)

        if self.task and self.task.sessions:
            main_layout.addWidget(self._label("Sessions:"))
            sessions = QListWidget()
            for session in sorted(self.task.sessions, key=lambda s: s.start_time, reverse=True):
                stars = "★" * (session.rating or 0)
                when = session.start_time.astimezone().strftime('%H:%M')
                note = f" - {session.note}" if session.note else ""
                sessions.addItem(f"{when}  {format_minutes(session.duration)}  {stars}{note}")
            main_layout.addWidget(sessions, 1)

        button_layout = QHBoxLayout()
        cancel_btn = QPushButton("Cancel")
        cancel_btn.clicked.connect(self.reject)
        button_layout.addWidget(cancel_btn)
        confirm_btn = QPushButton("Save" if self.task else "Add Task")
        confirm_btn.clicked.connect(self.confirm)
        button_layout.addWidget(confirm_btn)
        main_layout.addLayout(button_layout)

    def _fill_books(self, selected_id=None):
        self.book_combo.clear()
        self.book_combo.addItem(NO_BOOK, None)
        for book in self.books:
            self.book_combo.addItem(book.title, book.book_id)
        if selected_id is not None:
            index = self.book_combo.findData(selected_id)
            if index >= 0:
                self.book_combo.setCurrentIndex(index)

    def populate_fields(self):
        self.title_edit.setText(self.task.title)
        self.category_combo.setCurrentText(self.task.category or "")
        if self.task.book and not any(b.book_id == self.task.book.book_id for b in self.books):
            self.books.append(self.task.book)
        self._fill_books(self.task.book.book_id if self.task.book else None)
        self.goal_edit.setText(self.task.goal_range or "")
        self.actual_edit.setText(self.task.actual_range or "")

    def search_book(self):
        dialog = BookSearchDialog(self.book_api, parent=self)
        if dialog.exec() and dialog.selected_book:
            book = dialog.selected_book
            self.todo_manager.add_book_to_library(book)
            if not any(b.book_id == book.book_id for b in self.books):
                self.books.append(book)
            self._fill_books(book.book_id)

    def selected_book(self):
        book_id = self.book_combo.currentData()
        return next((b for b in self.books if b.book_id == book_id), None)

    def confirm(self):
        """Validate input and create/update the task."""
        title = self.title_edit.text().strip()
        if not title:
            QMessageBox.warning(self, "Warning", "Task title cannot be empty.")
            return

        category = self.category_combo.currentText().strip() or None
        goal_range = self.goal_edit.text().strip() or None
        actual_range = self.actual_edit.text().strip() or None

        if self.task:
            task = self.task.copy()
        else:
            task = TodoItem(title, date=self.todo_manager.selected_date)
        task.title = title
        task.category = category
        task.book = self.selected_book()
        task.goal_range = goal_range
        task.actual_range = actual_range

        if self.on_confirm:
            self.on_confirm(task)
        self.accept()
