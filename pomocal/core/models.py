from pomocal.core.utils import (
    format_stored_datetime, generate_id, now_local, parse_stored_datetime
)


class BookInfo:
    """A book from the library, with an optional study-goal period."""
    def __init__(self, book_id, title, authors=None, thumbnail_url=None, goal_start_date=None, goal_end_date=None):
        self.book_id = book_id
        self.title = title
        self.authors = list(authors or [])
        self.thumbnail_url = thumbnail_url
        self.goal_start_date = goal_start_date
        self.goal_end_date = goal_end_date

    def __eq__(self, other):
        if not isinstance(other, BookInfo):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self):
        return {
            'id': self.book_id,
            'title': self.title,
            'authors': list(self.authors),
            'thumbnailURL': self.thumbnail_url,
            'goalStartDate': format_stored_datetime(self.goal_start_date),
            'goalEndDate': format_stored_datetime(self.goal_end_date),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            data['id'],
            data.get('title', ''),
            authors=data.get('authors') or [],
            thumbnail_url=data.get('thumbnailURL'),
            goal_start_date=parse_stored_datetime(data.get('goalStartDate')),
            goal_end_date=parse_stored_datetime(data.get('goalEndDate')),
        )


class WorkSession:
    """One finished focus session recorded against a task."""
    def __init__(self, start_time, end_time, duration, note=None, rating=None, session_id=None):
        self.session_id = session_id or generate_id()
        self.start_time = start_time
        self.end_time = end_time
        self.duration = duration
        self.note = note
        self.rating = rating

    def to_dict(self):
        return {
            'id': self.session_id,
            'startTime': format_stored_datetime(self.start_time),
            'endTime': format_stored_datetime(self.end_time),
            'duration': self.duration,
            'note': self.note,
            'rating': self.rating,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            parse_stored_datetime(data.get('startTime')),
            parse_stored_datetime(data.get('endTime')),
            float(data.get('duration') or 0),
            note=data.get('note'),
            rating=data.get('rating'),
            session_id=data.get('id'),
        )


class TodoItem:
    """A task; subtasks are TodoItems themselves, so tasks form a tree."""
    def __init__(self, title, date=None, category=None, book=None, goal_range=None, actual_range=None,
                 time_spent=0, item_id=None, is_completed=False, subtasks=None, sessions=None):
        self.item_id = item_id or generate_id()
        self.title = title
        self.is_completed = is_completed
        self.date = date or now_local()
        self.category = category
        self.book = book
        self.goal_range = goal_range
        self.actual_range = actual_range
        self.time_spent = time_spent
        self.subtasks = list(subtasks or [])
        self.sessions = list(sessions or [])

    def __repr__(self):
        return f"TodoItem({self.title!r}, id={self.item_id}, time_spent={self.time_spent})"

    @property
    def has_subtasks(self):
        return bool(self.subtasks)

    def copy(self):
        """Return a deep copy that keeps the same ids."""
        return TodoItem.from_dict(self.to_dict())

    def to_dict(self):
        return {
            'id': self.item_id,
            'title': self.title,
            'isCompleted': self.is_completed,
            'date': format_stored_datetime(self.date),
            'category': self.category,
            'book': self.book.to_dict() if self.book else None,
            'goalRange': self.goal_range,
            'actualRange': self.actual_range,
            'timeSpent': self.time_spent,
            'subtasks': [sub.to_dict() for sub in self.subtasks],
            'sessions': [session.to_dict() for session in self.sessions],
        }

    @classmethod
    def from_dict(cls, data):
        book = data.get('book')
        return cls(
            data.get('title', ''),
            date=parse_stored_datetime(data.get('date')),
            category=data.get('category'),
            book=BookInfo.from_dict(book) if book else None,
            goal_range=data.get('goalRange'),
            actual_range=data.get('actualRange'),
            time_spent=float(data.get('timeSpent') or 0),
            item_id=(data.get('id') or '').lower() or None,
            is_completed=bool(data.get('isCompleted', False)),
            subtasks=[cls.from_dict(sub) for sub in data.get('subtasks') or []],
            sessions=[WorkSession.from_dict(s) for s in data.get('sessions') or []],
        )


class DDay:
    """A named target date counted down to."""
    def __init__(self, title, date, dday_id=None):
        self.dday_id = dday_id or generate_id()
        self.title = title
        self.date = date

    def to_dict(self):
        return {
            'id': self.dday_id,
            'title': self.title,
            'date': format_stored_datetime(self.date),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(data.get('title', ''), parse_stored_datetime(data.get('date')), dday_id=data.get('id'))


class DailyFocus:
    """Total focus time of one day."""
    def __init__(self, date, seconds):
        self.date = date
        self.seconds = seconds

    @property
    def hours(self):
        return self.seconds / 3600
