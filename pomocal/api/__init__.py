# API modules initialization
from pomocal.api.auth import AuthManager
from pomocal.api.books import BookAPIManager, BookSearchError
from pomocal.api.cache import EventCache
from pomocal.api.calendar import CalendarManager

__all__ = ['AuthManager', 'BookAPIManager', 'BookSearchError', 'CalendarManager', 'EventCache']
