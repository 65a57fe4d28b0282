# UI modules initialization
from pomocal.ui.book_search_dialog import BookSearchDialog
from pomocal.ui.dday_dialog import DDayDialog
from pomocal.ui.focus_app import FocusApp
from pomocal.ui.library_dialog import CategoryManagerDialog, LibraryDialog
from pomocal.ui.review_dialog import SessionReviewDialog
from pomocal.ui.task_dialog import TaskDialog

__all__ = [
    'BookSearchDialog', 'CategoryManagerDialog', 'DDayDialog', 'FocusApp', 'LibraryDialog',
    'SessionReviewDialog', 'TaskDialog'
]
