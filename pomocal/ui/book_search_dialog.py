from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog, QHBoxLayout, QLabel, QLineEdit, QListWidget, QListWidgetItem, QPushButton, QVBoxLayout
)

from pomocal.core.config import DEFAULT_DIALOG_HEIGHT, DEFAULT_DIALOG_WIDTH, MAIN_STYLE
from pomocal.workers.api_worker import APIWorker


class BookSearchDialog(QDialog):
    """Search the book API and pick one result."""
    def __init__(self, book_api, parent=None):
        super().__init__(parent)
        self.book_api = book_api
        self.results = []
        self.selected_book = None

        self.setWindowTitle("Find Books")
        self.setStyleSheet(MAIN_STYLE)
        self.setMinimumSize(DEFAULT_DIALOG_WIDTH, DEFAULT_DIALOG_HEIGHT)

        self.worker = APIWorker(self)
        self.worker.taskCompleted.connect(self.on_results)
        self.worker.taskError.connect(self.on_error)
        self.worker.loadingChanged.connect(self.on_loading_changed)

        self.init_ui()

    def init_ui(self):
        layout = QVBoxLayout(self)

        search_row = QHBoxLayout()
        self.query_edit = QLineEdit()
        self.query_edit.setPlaceholderText("Title, author or ISBN")
        self.query_edit.returnPressed.connect(self.search)
        search_row.addWidget(self.query_edit, 1)
        self.search_btn = QPushButton("Search")
        self.search_btn.clicked.connect(self.search)
        search_row.addWidget(self.search_btn)
        layout.addLayout(search_row)

        self.status_label = QLabel("")
        layout.addWidget(self.status_label)

        self.results_list = QListWidget()
        self.results_list.itemDoubleClicked.connect(lambda _: self.choose())
        layout.addWidget(self.results_list, 1)

        buttons = QHBoxLayout()
        cancel_btn = QPushButton("Cancel")
        cancel_btn.clicked.connect(self.reject)
        buttons.addWidget(cancel_btn)
        choose_btn = QPushButton("Add")
        choose_btn.clicked.connect(self.choose)
        buttons.addWidget(choose_btn)
        layout.addLayout(buttons)

    def search(self):
        query = self.query_edit.text().strip()
        if not query:
            return
        self.results_list.clear()
        self.worker.add_task("search_books", self.book_api.search_books, query=query)

    def on_loading_changed(self, is_loading):
        self.search_btn.setEnabled(not is_loading)
        if is_loading:
            self.status_label.setText("Searching...")

    def on_results(self, results, task_type):
        self.results = results
        self.status_label.setText("" if results else "No results found")
        for book in results:
            authors = ", ".join(a for a in book.authors if a)
            item = QListWidgetItem(f"{book.title}\n{authors}" if authors else book.title)
            item.setData(Qt.ItemDataRole.UserRole, book.book_id)
            self.results_list.addItem(item)

    def on_error(self, error, task_type):
        self.status_label.setText(str(error))

    def choose(self):
        row = self.results_list.currentRow()
        if 0 <= row < len(self.results):
            self.selected_book = self.results[row]
            self.accept()

    def done(self, result):
        self.worker.stop()
        super().done(result)
