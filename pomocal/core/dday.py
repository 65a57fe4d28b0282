import logging

from pomocal.core.models import DDay
from pomocal.core.utils import now_local, to_date

logger = logging.getLogger(__name__)

STORAGE_KEY = 'SavedDDays'


def format_dday(days):
    """D-Day on the day itself, D-n before it, D+n after it."""
    if days == 0:
        return "D-Day"
    if days > 0:
        return f"D-{days}"
    return f"D+{abs(days)}"


def dday_urgency(days):
    """'urgent' within a week, 'soon' within two weeks, otherwise 'normal'."""
    if 0 <= days <= 7:
        return 'urgent'
    if 7 < days <= 14:
        return 'soon'
    return 'normal'


class DDayManager:
    """Keeps D-Days sorted by date and persisted in the preferences file."""
    def __init__(self, preferences):
        self.preferences = preferences
        self.ddays = []
        self.load()

    def load(self):
        raw = self.preferences.get(STORAGE_KEY) or []
        ddays = []
        for entry in raw:
            try:
                ddays.append(DDay.from_dict(entry))
            except (AttributeError, KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed D-Day entry: %r", entry)
        self.ddays = sorted((d for d in ddays if d.date is not None), key=lambda d: d.date)

    def save(self):
        self.preferences.set(STORAGE_KEY, [d.to_dict() for d in self.ddays])

    def _sort_and_save(self):
        self.ddays.sort(key=lambda d: d.date)
        self.save()

    def add_dday(self, title, date):
        dday = DDay(title, date)
        self.ddays.append(dday)
        self._sort_and_save()
        return dday

    def update_dday(self, dday_id, title, date):
        for dday in self.ddays:
            if dday.dday_id == dday_id:
                dday.title = title
                dday.date = date
                self._sort_and_save()
                return True
        return False

    def delete_dday(self, dday_id):
        self.ddays = [d for d in self.ddays if d.dday_id != dday_id]
        self.save()

    @staticmethod
    def days_remaining(date, today=None):
        """Whole calendar days from today to date (negative once passed)."""
        today = to_date(today or now_local())
        return (to_date(date) - today).days
