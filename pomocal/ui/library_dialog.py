
from PyQt6.QtCore import QDate, Qt
from PyQt6.QtWidgets import (
    QDateEdit, QDialog, QFormLayout, QHBoxLayout, QInputDialog, QLabel, QListWidget, QListWidgetItem,
    QMessageBox, QPushButton, QVBoxLayout
)

from pomocal.core.config import DEFAULT_DIALOG_HEIGHT, DEFAULT_DIALOG_WIDTH, MAIN_STYLE
from pomocal.core.utils import now_local, start_of_day, to_date
from pomocal.ui.book_search_dialog import BookSearchDialog


def _to_qdate(value):
    day = to_date(value or now_local())
    return QDate(day.year, day.month, day.day)


def _from_qdate(qdate):
    return start_of_day(qdate.toPyDate())


class LibraryDialog(QDialog):
    """Lists saved books; set a study-goal period, add or remove books."""
    def __init__(self, todo_manager, book_api=None, parent=None):
        super().__init__(parent)
        self.todo_manager = todo_manager
        self.book_api = book_api
        self.setWindowTitle("Library")
        self.setStyleSheet(MAIN_STYLE)
        self.setMinimumSize(DEFAULT_DIALOG_WIDTH, DEFAULT_DIALOG_HEIGHT)
        self.init_ui()
        self.refresh()

    def init_ui(self):
        layout = QVBoxLayout(self)
        self.books_list = QListWidget()
        self.books_list.currentRowChanged.connect(self.show_book)
        layout.addWidget(self.books_list, 1)

        form = QFormLayout()
        self.goal_start = QDateEdit()
        self.goal_start.setCalendarPopup(True)
        self.goal_end = QDateEdit()
        self.goal_end.setCalendarPopup(True)
        form.addRow(QLabel("Goal start:"), self.goal_start)
        form.addRow(QLabel("Goal end:"), self.goal_end)
        layout.addLayout(form)

        buttons = QHBoxLayout()
        find_btn = QPushButton("Find Books")
        find_btn.setEnabled(self.book_api is not None)
        find_btn.clicked.connect(self.find_books)
        buttons.addWidget(find_btn)
        remove_btn = QPushButton("Remove")
        remove_btn.clicked.connect(self.remove_book)
        buttons.addWidget(remove_btn)
        save_btn = QPushButton("Save Goal")
        save_btn.clicked.connect(self.save_goal)
        buttons.addWidget(save_btn)
        layout.addLayout(buttons)

    def refresh(self):
        self.books_list.clear()
        for book in self.todo_manager.saved_books:
            authors = ", ".join(a for a in book.authors if a)
            item = QListWidgetItem(f"{book.title} - {authors}" if authors else book.title)
            item.setData(Qt.ItemDataRole.UserRole, book.book_id)
            self.books_list.addItem(item)
        if self.todo_manager.saved_books:
            self.books_list.setCurrentRow(0)

    def current_book(self):
        row = self.books_list.currentRow()
        books = self.todo_manager.saved_books
        return books[row] if 0 <= row < len(books) else None

    def show_book(self, _row):
        book = self.current_book()
        if book is None:
            return
        self.goal_start.setDate(_to_qdate(book.goal_start_date))
        self.goal_end.setDate(_to_qdate(book.goal_end_date))

    def save_goal(self):
        book = self.current_book()
        if book is None:
            return
        start = _from_qdate(self.goal_start.date())
        end = _from_qdate(self.goal_end.date())
        if end < start:
            QMessageBox.warning(self, "Warning", "Goal end must not be before its start.")
            return
        book.goal_start_date = start
        book.goal_end_date = end
        self.todo_manager.update_book(book)

    def remove_book(self):
        book = self.current_book()
        if book is not None:
            self.todo_manager.remove_book_from_library(book.book_id)
            self.refresh()

    def find_books(self):
        dialog = BookSearchDialog(self.book_api, parent=self)
        if dialog.exec() and dialog.selected_book:
            self.todo_manager.add_book_to_library(dialog.selected_book)
            self.refresh()


class CategoryManagerDialog(QDialog):
    """Rename or delete saved categories."""
    def __init__(self, todo_manager, parent=None):
        super().__init__(parent)
        self.todo_manager = todo_manager
        self.setWindowTitle("Manage Categories")
        self.setStyleSheet(MAIN_STYLE)
        self.setMinimumSize(320, 400)

        layout = QVBoxLayout(self)
        self.categories_list = QListWidget()
        layout.addWidget(self.categories_list, 1)

        buttons = QHBoxLayout()
        for text, slot in (("Add", self.add_category), ("Rename", self.rename_category),
                           ("Delete", self.delete_category), ("Done", self.accept)):
            btn = QPushButton(text)
            btn.clicked.connect(slot)
            buttons.addWidget(btn)
        layout.addLayout(buttons)
        self.refresh()

    def refresh(self):
        self.categories_list.clear()
        self.categories_list.addItems(self.todo_manager.saved_categories)

    def _current(self):
        item = self.categories_list.currentItem()
        return item.text() if item else None

    def add_category(self):
        name, ok = QInputDialog.getText(self, "Add Category", "Name:")
        if ok and name.strip():
            self.todo_manager.add_category(name.strip())
            self.refresh()

    def rename_category(self):
        old_name = self._current()
        if old_name is None:
            return
        new_name, ok = QInputDialog.getText(self, "Rename Category", "New name:", text=old_name)
        if ok and self.todo_manager.rename_category(old_name, new_name.strip()):
            self.refresh()

    def delete_category(self):
        name = self._current()
        if name is None:
            return
        answer = QMessageBox.question(self, "Delete Category", f"Stop suggesting '{name}'?")
        if answer == QMessageBox.StandardButton.Yes:
            self.todo_manager.delete_category(name)
            self.refresh()
