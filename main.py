import logging
import sys

from PyQt6.QtWidgets import QApplication

from pomocal.api.auth import AuthManager
from pomocal.api.books import BookAPIManager
from pomocal.api.calendar import CalendarManager
from pomocal.core.config import CONFIG_DIR, DATA_DIR, LOG_LEVEL, PREFERENCES_FILE
from pomocal.core.dday import DDayManager
from pomocal.core.logging_setup import setup_logging
from pomocal.core.storage import JsonStore, Preferences
from pomocal.core.timer import TimerManager
from pomocal.core.todo_manager import TodoManager
from pomocal.ui.focus_app import FocusApp

logger = logging.getLogger(__name__)


def main():
    """Main entry point for the application."""
    setup_logging(CONFIG_DIR, console_level=getattr(logging, LOG_LEVEL.upper(), logging.INFO))
    logger.info("Starting PomoCal, data folder %s", DATA_DIR)

    # Initialize services
    auth_manager = AuthManager()
    calendar_manager = CalendarManager(auth_manager)
    preferences = Preferences(PREFERENCES_FILE)
    todo_manager = TodoManager(JsonStore(DATA_DIR), preferences)
    dday_manager = DDayManager(preferences)
    book_api = BookAPIManager()
    timer_manager = TimerManager()

    # Create and start the application
    app = QApplication(sys.argv)

    # Set style to fusion for better appearance
    app.setStyle("Fusion")

    # Create and show main window
    main_window = FocusApp(todo_manager, timer_manager, calendar_manager, dday_manager, book_api)
    main_window.show()

    # Start the event loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
