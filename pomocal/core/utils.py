from datetime import date, datetime, time, timedelta, timezone
import uuid

from pomocal.core.config import CATEGORY_PALETTE

APPLE_EPOCH = datetime(2001, 1, 1, tzinfo=timezone.utc)

APP_EMOJIS = [
    "📚", "📖", "📝", "💻", "💡", "🎯", "🔥", "🚀", "🎓", "🧠", "💼", "🔬", "🎨", "🎵", "🎹", "🥁",
    "🏃", "🧘", "🏋️", "🚴", "🍎", "🥗", "🍳", "☕", "🍺", "🍷", "🏠", "🛌", "🚿", "🧹", "🧺", "🛒",
    "🚗", "🚌", "✈️", "🗺️", "🏝️", "⛺", "📷", "🎥", "🎬", "🎮", "🎲", "🧩", "🧸", "🐶", "🐱", "🌿",
    "☀️", "🌧️", "❄️", "⚡", "🌈", "⭐", "🌙", "🌊", "💧", "💨", "🌍", "🪐", "⚛️", "🦠", "🧬",
]

_MASK_64 = (1 << 64) - 1


def localize(naive):
    """Attach the local zone to a naive local datetime, using the UTC offset in force on that date."""
    return naive.astimezone()


def now_local():
    """Return the current time as an aware local datetime."""
    return datetime.now().astimezone()


def to_date(value):
    """Return the local calendar date of a date or datetime."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().date()
        return value.date()
    return value


def start_of_day(value):
    """Return local midnight (aware) of the given date or datetime."""
    return localize(datetime.combine(to_date(value), time.min))


def day_bounds(value):
    """Return (start, end) of the local day containing value; end is exclusive."""
    start = start_of_day(value)
    return start, start_of_day(to_date(start) + timedelta(days=1))


def format_date(dt):
    """Format date as YYYY-MM-DD."""
    return to_date(dt).strftime('%Y-%m-%d')


def format_iso_for_api(dt):
    """Format datetime as ISO format for Google API."""
    return dt.astimezone(timezone.utc).isoformat().replace('+00:00', 'Z')


def parse_iso_from_api(iso_str):
    """Parse ISO datetime string from Google API."""
    return datetime.fromisoformat(iso_str.replace('Z', '+00:00'))


def parse_stored_datetime(value):
    """Parse a datetime read from a JSON file.

    Strings are ISO-8601. Numbers are seconds since 2001-01-01 UTC, which is how
    the files of the macOS version of the app store dates.
    """
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return APPLE_EPOCH + timedelta(seconds=value)
    dt = parse_iso_from_api(value)
    if dt.tzinfo is None:
        dt = localize(dt)
    return dt


def format_stored_datetime(dt):
    """Format a datetime for a JSON file."""
    if dt is None:
        return None
    if isinstance(dt, datetime):
        if dt.tzinfo is None:
            dt = localize(dt)
        return dt.isoformat()
    return start_of_day(dt).isoformat()


def parse_event_datetime(event, field='start'):
    """Parse the start or end of a Google Calendar event as an aware datetime."""
    value = event.get(field) or {}
    if 'dateTime' in value:
        return parse_iso_from_api(value['dateTime'])
    if 'date' in value:
        return start_of_day(date.fromisoformat(value['date']))
    return datetime.now(timezone.utc)


def event_duration(event):
    """Return the length of an event in seconds."""
    return (parse_event_datetime(event, 'end') - parse_event_datetime(event, 'start')).total_seconds()


def generate_id():
    """Generate a unique ID for tasks."""
    return str(uuid.uuid4())


def _split_seconds(seconds):
    seconds = int(seconds)
    return seconds // 3600, (seconds % 3600) // 60, seconds % 60


def format_timer(seconds, with_hours=False):
    """Format a countdown as MM:SS, or a stopwatch as HH:MM:SS."""
    hours, minutes, secs = _split_seconds(seconds)
    if with_hours:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{int(seconds) // 60:02d}:{secs:02d}"


def format_total_time(seconds):
    """Format as 1h 05m 09s."""
    hours, minutes, secs = _split_seconds(seconds)
    return f"{hours}h {minutes:02d}m {secs:02d}s"


def format_short_time(seconds):
    """Format as 1h 05m 09s, or 05m 09s under an hour."""
    hours, minutes, secs = _split_seconds(seconds)
    if hours > 0:
        return f"{hours}h {minutes:02d}m {secs:02d}s"
    return f"{minutes:02d}m {secs:02d}s"


def format_hours_minutes(seconds):
    """Format as 1h 05m, or 05m under an hour."""
    hours, minutes, _ = _split_seconds(seconds)
    if hours > 0:
        return f"{hours}h {minutes:02d}m"
    return f"{minutes:02d}m"


def format_minutes(seconds):
    """Format as whole minutes, e.g. 25min."""
    return f"{int(seconds) // 60}min"


def stable_hash(text):
    """DJB2 hash of the UTF-8 bytes, wrapped like a signed 64-bit integer."""
    h = 5381
    for byte in text.encode('utf-8'):
        h = ((h << 5) + h + byte) & _MASK_64
    if h >= 1 << 63:
        h -= 1 << 64
    return abs(h)


def category_color(category):
    """Return a colour that stays the same for a category across runs."""
    return CATEGORY_PALETTE[stable_hash(category) % len(CATEGORY_PALETTE)]


def emoji_for(text):
    """Return a decorative emoji that stays the same for a text across runs."""
    return APP_EMOJIS[stable_hash(text) % len(APP_EMOJIS)]


def strip_bold_tags(text):
    """Remove the <b></b> highlighting the book API puts around matches."""
    if not text:
        return ""
    return text.replace('<b>', '').replace('</b>', '')
