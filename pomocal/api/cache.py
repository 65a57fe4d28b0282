import threading

from pomocal.core.utils import parse_event_datetime, to_date


class EventCache:
    """Thread-safe cache of raw calendar events, grouped by local day."""
    def __init__(self):
        self.events_by_date = {}
        self.cache_lock = threading.Lock()

    def set_events_for_date(self, day, events):
        """Replace the cached events of a day."""
        with self.cache_lock:
            self.events_by_date[to_date(day)] = list(events)

    def get_events_for_date(self, day):
        """Get a copy of the cached events of a day (empty if not cached)."""
        with self.cache_lock:
            return self.events_by_date.get(to_date(day), [])[:]

    def has_date(self, day):
        """Check if a day's events are cached."""
        with self.cache_lock:
            return to_date(day) in self.events_by_date

    def add_event(self, event):
        """Add or update an event in the cache of the day it starts on."""
        day = to_date(parse_event_datetime(event, 'start'))
        event_id = event.get('id')
        with self.cache_lock:
            events = self.events_by_date.get(day)
            if events is None:
                return
            if event_id:
                events[:] = [e for e in events if e.get('id') != event_id]
            events.append(event)
            events.sort(key=lambda e: parse_event_datetime(e, 'start'))

    def delete_event(self, event_id):
        """Delete an event from all cached days."""
        with self.cache_lock:
            for day, events in self.events_by_date.items():
                self.events_by_date[day] = [e for e in events if e.get('id') != event_id]

    def clear_date(self, day):
        """Clear the cache of one day to force a refresh."""
        with self.cache_lock:
            self.events_by_date.pop(to_date(day), None)

    def clear(self):
        with self.cache_lock:
            self.events_by_date.clear()
