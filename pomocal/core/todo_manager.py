import logging
from datetime import timedelta

from pomocal.core import todo_tree
from pomocal.core.config import DEFAULT_CATEGORIES, DEFAULT_SUBTASK_TITLE, WEEKLY_HISTORY_DAYS
from pomocal.core.models import DailyFocus, TodoItem
from pomocal.core.storage import JsonStore
from pomocal.core.utils import now_local, to_date

logger = logging.getLogger(__name__)

SYNC_PATH_KEY = 'syncFolder'


class TodoManager:
    """Holds the task tree of the selected day plus the category and book library.

    Task changes are written to the day's file, library changes to Library.json.
    """
    def __init__(self, store, preferences=None, on_todo_deleted=None):
        self.store = store
        self.preferences = preferences
        self.on_todo_deleted = on_todo_deleted
        self.todos = []
        self.saved_categories = list(DEFAULT_CATEGORIES)
        self.saved_books = []
        self.selected_date = now_local()
        self.sync_path = None

        self._restore_sync_folder()
        self.load()

    def _restore_sync_folder(self):
        """Use the sync folder remembered in preferences, if any."""
        if self.preferences is None:
            return
        path = self.preferences.get(SYNC_PATH_KEY)
        if path:
            self.store = JsonStore(path)
            self.sync_path = path
            logger.info("Restored sync folder: %s", path)

    # ---- loading & saving ----

    def load(self):
        """Load the library and the tasks of the selected date."""
        self.store.ensure_directories()
        categories, books = self.store.load_library()
        if categories is not None:
            self.saved_categories = categories
            self.saved_books = books
        self.load_todos(self.selected_date)

    def load_todos(self, day):
        self.todos = self.store.load_todos(day)

    def select_date(self, day):
        """Switch to another day and load its tasks."""
        self.selected_date = day
        self.load_todos(day)

    def save_todos(self):
        self.store.save_todos(self.selected_date, self.todos)

    def save_library(self):
        self.store.save_library(self.saved_categories, self.saved_books)

    def set_sync_folder(self, path):
        """Move storage to another folder.

        If the folder already holds a library it is loaded, otherwise the
        current data is written there.
        """
        self.store = JsonStore(path)
        self.sync_path = path
        if self.preferences is not None:
            self.preferences.set(SYNC_PATH_KEY, path)
        if self.store.has_library():
            logger.info("Data found in %s. Loading...", path)
            self.load()
        else:
            logger.info("Empty sync folder %s. Saving...", path)
            self.force_sync()

    def force_sync(self):
        """Write the library and the current day to the storage folder."""
        logger.info("Forcing sync to %s", self.store.root)
        self.save_library()
        self.save_todos()

    # ---- tasks ----

    def add_todo(self, item):
        """Add a root task; its category and book join the library."""
        if not item.title or not item.title.strip():
            raise ValueError("task title is required")
        self.todos.append(item)
        if item.category:
            self.add_category(item.category)
        if item.book:
            self.add_book_to_library(item.book)
        self.save_todos()
        return item

    def add_todo_titled(self, title):
        """Add a plain task on the selected date."""
        return self.add_todo(TodoItem(title, date=self.selected_date))

    def find(self, item_id):
        return todo_tree.find_item(self.todos, item_id)

    def parent_of(self, item_id):
        path = todo_tree.find_path(self.todos, item_id)
        return path[-2] if len(path) > 1 else None

    def add_subtask(self, parent_id, title=DEFAULT_SUBTASK_TITLE):
        """Append a new subtask under parent_id and return it."""
        parent = self.find(parent_id)
        if parent is None:
            raise ValueError(f"unknown task: {parent_id}")
        subtask = TodoItem(title, date=parent.date)
        parent.subtasks.append(subtask)
        self.save_todos()
        return subtask

    def update_todo(self, item):
        """Replace the task with the same id anywhere in the tree."""
        found = todo_tree.update_item(self.todos, item.item_id, lambda _: item)
        if found:
            if item.category:
                self.add_category(item.category)
            if item.book:
                self.add_book_to_library(item.book)
            self.save_todos()
        return found

    def toggle_completion(self, item_id):
        item = self.find(item_id)
        if item is None:
            return None
        item.is_completed = not item.is_completed
        self.save_todos()
        return item.is_completed

    def delete_todo(self, item_id):
        """Remove a task with its subtasks and return it.

        on_todo_deleted is called for the task and each of its subtasks so that
        their calendar events can be removed too.
        """
        removed = todo_tree.remove_item(self.todos, item_id)
        if removed is None:
            return None
        if self.on_todo_deleted:
            for item, _ in todo_tree.walk([removed]):
                try:
                    self.on_todo_deleted(item)
                except Exception:
                    logger.exception("Cleanup after deleting %s failed", item.title)
        self.save_todos()
        return removed

    def delete_todos_at(self, indexes):
        """Remove root tasks by position."""
        for index in sorted(set(indexes), reverse=True):
            if 0 <= index < len(self.todos):
                self.delete_todo(self.todos[index].item_id)

    def add_time(self, item_id, amount):
        """Add focus time to a task; parents receive it as well."""
        found = todo_tree.add_time(self.todos, item_id, amount)
        if found:
            self.save_todos()
        else:
            logger.warning("add_time: task %s is not loaded", item_id)
        return found

    def add_session(self, item_id, session):
        """Attach a finished work session to that task only."""
        item = self.find(item_id)
        if item is None:
            logger.warning("add_session: task %s is not loaded", item_id)
            return False
        item.sessions.append(session)
        self.save_todos()
        return True

    def batch_update_time(self, time_map):
        """Reconcile task totals with per-task durations taken from the calendar."""
        before = {item.item_id: item.time_spent for item, _ in todo_tree.walk(self.todos)}
        todo_tree.apply_time_map(self.todos, time_map)
        after = {item.item_id: item.time_spent for item, _ in todo_tree.walk(self.todos)}
        if before != after:
            self.save_todos()
            return True
        return False

    def flattened(self, expanded=()):
        return todo_tree.flatten(self.todos, expanded)

    def title_map(self):
        return todo_tree.title_map(self.todos)

    # ---- categories ----

    def add_category(self, name):
        if name and name not in self.saved_categories:
            self.saved_categories.append(name)
            self.save_library()

    def rename_category(self, old_name, new_name):
        """Rename a category in the library and on the loaded tasks."""
        if not new_name or old_name == new_name:
            return False
        if old_name in self.saved_categories:
            self.saved_categories[self.saved_categories.index(old_name)] = new_name
            self.save_library()
        if todo_tree.rename_category(self.todos, old_name, new_name):
            self.save_todos()
        return True

    def delete_category(self, name):
        """Stop suggesting a category; tasks keep their label."""
        if name in self.saved_categories:
            self.saved_categories.remove(name)
            self.save_library()

    # ---- library ----

    def add_book_to_library(self, book):
        if any(b.book_id == book.book_id and b.title == book.title for b in self.saved_books):
            return False
        self.saved_books.append(book)
        self.save_library()
        return True

    def update_book(self, book):
        for index, saved in enumerate(self.saved_books):
            if saved.book_id == book.book_id:
                self.saved_books[index] = book
                self.save_library()
                return True
        return False

    def remove_book_from_library(self, book_id):
        remaining = [b for b in self.saved_books if b.book_id != book_id]
        if len(remaining) != len(self.saved_books):
            self.saved_books = remaining
            self.save_library()

    # ---- history ----

    def weekly_focus_history(self, end_date=None, days=WEEKLY_HISTORY_DAYS):
        """Focus totals of the days up to end_date (the selected date by default), oldest first."""
        end_day = to_date(end_date or self.selected_date)
        selected_day = to_date(self.selected_date)
        history = []
        for offset in range(days - 1, -1, -1):
            day = end_day - timedelta(days=offset)
            todos = self.todos if day == selected_day else self.store.load_todos(day)
            history.append(DailyFocus(day, sum(todo.time_spent for todo in todos)))
        return history
