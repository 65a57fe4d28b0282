import os
import sys

# API Configuration
SCOPES = ['https://www.googleapis.com/auth/calendar.events']
CONFIG_DIR = os.getenv('POMOCAL_CONFIG_DIR', 'config')
TOKEN_FILE = os.path.join(CONFIG_DIR, 'token.json')
CREDENTIALS_FILE = os.path.join(CONFIG_DIR, 'credentials.json')
PREFERENCES_FILE = os.path.join(CONFIG_DIR, 'preferences.json')
DEFAULT_CALENDAR_ID = 'primary'
API_MAX_RESULTS = 50
TOKEN_REFRESH_BUFFER = 300

# Task links stored on calendar events
TASK_LINK_PROPERTY = 'pomocalTaskId'
TASK_URL_PREFIX = 'pomocal://task/'

# Book search
NAVER_BOOK_URL = 'https://openapi.naver.com/v1/search/book.json'
NAVER_CLIENT_ID = os.getenv('POMOCAL_NAVER_CLIENT_ID', '')
NAVER_CLIENT_SECRET = os.getenv('POMOCAL_NAVER_CLIENT_SECRET', '')
BOOK_SEARCH_DISPLAY = 10
HTTP_TIMEOUT = 10


def _default_data_dir():
    if sys.platform == 'darwin':
        return os.path.expanduser('~/Library/Mobile Documents/com~apple~CloudDocs/PomodoroCalendar')
    return os.path.expanduser('~/.local/share/pomocal')


DATA_DIR = os.getenv('POMOCAL_DATA_DIR') or _default_data_dir()
LOG_LEVEL = os.getenv('POMOCAL_LOG_LEVEL', 'INFO')

# Timer
DEFAULT_WORK_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5
CALENDAR_REFRESH_MS = 60 * 1000

# Tasks
DEFAULT_CATEGORIES = ["Computer Science", "English", "Math", "Physics", "General"]
UNCATEGORIZED = "Uncategorized"
DEFAULT_SUBTASK_TITLE = "New Subtask"
POMODORO_SESSION_TITLE = "Pomodoro Session"
STOPWATCH_SESSION_TITLE = "Stopwatch Session"
WEEKLY_HISTORY_DAYS = 7

# Color Theme
BACKGROUND_COLOR = "#1E1E2F"
NAV_BG_COLOR = "#2A2A3B"
DROPDOWN_BG_COLOR = "#252639"
CARD_COLOR = "#1F6AA5"
TEXT_COLOR = "#E0E0E0"
HIGHLIGHT_COLOR = "#6060A0"
ACCENT_COLOR = "#5856D6"
URGENT_COLOR = "#E5534B"
SOON_COLOR = "#3FB950"

CATEGORY_PALETTE = [
    "#FF3B30", "#FF9500", "#FFCC00", "#34C759", "#007AFF", "#AF52DE",
    "#FF2D55", "#30B0C7", "#5856D6", "#00C7BE", "#32ADE6", "#A2845E",
]

# Fonts
FONT_HEADER = "Segoe UI Semibold"
FONT_HEADER_SIZE = 18
FONT_LABEL = "Segoe UI"
FONT_LABEL_SIZE = 14
FONT_TIMER = "Menlo"
FONT_TIMER_SIZE = 48
PADDING = 10

# UI Constants
DEFAULT_DIALOG_WIDTH = 400
DEFAULT_DIALOG_HEIGHT = 500
DEFAULT_WINDOW_SIZE = (1280, 800)
SUBTASK_INDENT = 20

# StyleSheets
MAIN_STYLE = f"""
QMainWindow, QDialog {{
    background-color: {BACKGROUND_COLOR};
}}
QLabel {{
    color: {TEXT_COLOR};
}}
QPushButton {{
    background-color: {CARD_COLOR};
    color: white;
    border: none;
    border-radius: 4px;
    padding: 8px 16px;
    font-weight: bold;
}}
QPushButton:hover {{
    background-color: #2980b9;
}}
QPushButton:disabled {{
    background-color: #3D3D5C;
    color: #888888;
}}
QLineEdit, QTextEdit, QSpinBox, QDateEdit {{
    background-color: {DROPDOWN_BG_COLOR};
    color: {TEXT_COLOR};
    border: 1px solid #3D3D5C;
    border-radius: 4px;
    padding: 6px;
}}
QTreeWidget, QListWidget {{
    background-color: {DROPDOWN_BG_COLOR};
    color: {TEXT_COLOR};
    border: none;
}}
QTreeWidget::item:selected, QListWidget::item:selected {{
    background-color: {HIGHLIGHT_COLOR};
}}
QProgressBar {{
    background-color: {DROPDOWN_BG_COLOR};
    border: none;
    border-radius: 4px;
    height: 8px;
}}
QProgressBar::chunk {{
    background-color: {ACCENT_COLOR};
    border-radius: 4px;
}}
QCalendarWidget {{
    background-color: {DROPDOWN_BG_COLOR};
}}
QCalendarWidget QWidget {{
    alternate-background-color: {DROPDOWN_BG_COLOR};
}}
QComboBox {{
    background-color: {DROPDOWN_BG_COLOR};
    color: {TEXT_COLOR};
    border: 1px solid #3D3D5C;
    border-radius: 4px;
    padding: 6px;
}}
QComboBox QAbstractItemView {{
    background-color: {DROPDOWN_BG_COLOR};
    color: {TEXT_COLOR};
    selection-background-color: {HIGHLIGHT_COLOR};
}}
"""
