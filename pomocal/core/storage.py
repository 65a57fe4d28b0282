import json
import logging
import os

from pomocal.core.models import BookInfo, TodoItem
from pomocal.core.utils import format_date

logger = logging.getLogger(__name__)


def _read_json(path):
    """Read a JSON file; missing or unreadable files give None."""
    if not os.path.exists(path):
        return None
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, ValueError):
        logger.exception("Could not read %s", path)
        return None


def _write_json(path, data):
    """Write JSON atomically so a crash never leaves a half-written file."""
    os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
    tmp_path = f"{path}.tmp"
    try:
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, path)
    except OSError:
        logger.exception("Could not write %s", path)
        raise


class JsonStore:
    """Reads and writes the library file and one task file per day under a root folder."""
    def __init__(self, root):
        self.root = root

    @property
    def library_path(self):
        return os.path.join(self.root, 'Library.json')

    @property
    def tasks_dir(self):
        return os.path.join(self.root, 'Tasks')

    def task_path(self, day):
        """Path of the task file for a date."""
        return os.path.join(self.tasks_dir, f"{format_date(day)}.json")

    def ensure_directories(self):
        os.makedirs(self.tasks_dir, exist_ok=True)

    def has_library(self):
        return os.path.exists(self.library_path)

    def load_library(self):
        """Return (categories, books). categories is None when no library was saved yet."""
        data = _read_json(self.library_path)
        if not isinstance(data, dict):
            return None, []
        books = []
        for raw in data.get('savedBooks') or []:
            try:
                books.append(BookInfo.from_dict(raw))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed book entry in %s", self.library_path)
        return list(data.get('categories') or []), books

    def save_library(self, categories, books):
        self.ensure_directories()
        _write_json(self.library_path, {
            'todos': [],
            'categories': list(categories),
            'savedBooks': [book.to_dict() for book in books],
        })

    def load_todos(self, day):
        """Return the root tasks saved for a date (empty when there is no usable file)."""
        path = self.task_path(day)
        data = _read_json(path)
        if not isinstance(data, dict):
            return []
        todos = []
        for raw in data.get('todos') or []:
            try:
                todos.append(TodoItem.from_dict(raw))
            except (AttributeError, KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed task in %s: %r", path, raw)
        return todos

    def save_todos(self, day, todos):
        self.ensure_directories()
        _write_json(self.task_path(day), {
            'todos': [todo.to_dict() for todo in todos],
            'categories': [],
            'savedBooks': [],
        })


class Preferences:
    """Small JSON key/value file for settings that live outside the sync folder."""
    def __init__(self, path):
        self.path = path
        data = _read_json(path)
        self._values = data if isinstance(data, dict) else {}

    def get(self, key, default=None):
        return self._values.get(key, default)

    def set(self, key, value):
        self._values[key] = value
        _write_json(self.path, self._values)

    def remove(self, key):
        if key in self._values:
            del self._values[key]
            _write_json(self.path, self._values)
