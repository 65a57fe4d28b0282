import logging
import re
import threading
from datetime import timedelta

from googleapiclient.errors import HttpError

from pomocal.api.cache import EventCache
from pomocal.core.config import API_MAX_RESULTS, DEFAULT_CALENDAR_ID, TASK_LINK_PROPERTY, TASK_URL_PREFIX
from pomocal.core.utils import (
    day_bounds, event_duration, format_iso_for_api, now_local, parse_event_datetime, to_date
)

logger = logging.getLogger(__name__)

_TASK_URL_RE = re.compile(re.escape(TASK_URL_PREFIX) + r'([0-9A-Fa-f-]{36})')


def task_id_from_event(event):
    """Return the task id a focus-session event is linked to, or None."""
    private = (event.get('extendedProperties') or {}).get('private') or {}
    task_id = private.get(TASK_LINK_PROPERTY)
    if task_id:
        return task_id.lower()
    match = _TASK_URL_RE.search(event.get('description') or '')
    if match:
        return match.group(1).lower()
    return None


class CalendarManager:
    """Records focus sessions in Google Calendar and reads them back.

    Sessions are linked to their task through a private extended property, so
    time spent per task can be rebuilt from the calendar at any time.
    """

    def __init__(self, auth_manager=None, service=None, calendar_id=DEFAULT_CALENDAR_ID):
        """Initialize with an auth manager, or directly with a calendar service."""
        self.auth_service = auth_manager
        self.service = service
        self.calendar_id = calendar_id
        self.cache = EventCache()
        self.fetch_lock = threading.Lock()
        self.events = []
        self.current_date = now_local()
        self.listeners = []
        if self.service is None and self.auth_service is not None:
            self.service = self.auth_service.get_calendar_service()

    @property
    def has_access(self):
        return self.service is not None

    def add_listener(self, callback):
        """Register callback(events), called whenever the day's events were refreshed."""
        self.listeners.append(callback)

    def _notify(self):
        for callback in list(self.listeners):
            try:
                callback(list(self.events))
            except Exception:
                logger.exception("Calendar listener failed")

    def request_access(self):
        """Ask the user for calendar access, then load today's events."""
        if self.auth_service is None:
            return self.has_access
        if self.auth_service.authorize():
            self.service = self.auth_service.get_calendar_service()
        if self.has_access:
            self.fetch_events(self.current_date)
        else:
            logger.warning("Calendar access denied")
        return self.has_access

    def _ensure_valid_token(self):
        """Ensure the token is valid before making API calls."""
        if self.auth_service is None:
            return
        try:
            if self.auth_service.refresh_token_if_needed():
                self.service = self.auth_service.get_calendar_service()
        except Exception:
            logger.exception("Error ensuring valid token")

    def _list_events(self, start, end):
        """List all single events between start and end, following pagination."""
        self._ensure_valid_token()
        events = []
        page_token = None
        while True:
            params = {
                'calendarId': self.calendar_id,
                'timeMin': format_iso_for_api(start),
                'timeMax': format_iso_for_api(end),
                'maxResults': API_MAX_RESULTS,
                'singleEvents': True,
                'orderBy': 'startTime',
            }
            if page_token:
                params['pageToken'] = page_token
            result = self.service.events().list(**params).execute()
            events.extend(result.get('items', []))
            page_token = result.get('nextPageToken')
            if not page_token:
                break
        return events

    def _events_for_day(self, day):
        start, end = day_bounds(day)
        events = self._list_events(start, end)
        events.sort(key=lambda e: parse_event_datetime(e, 'start'))
        self.cache.set_events_for_date(day, events)
        return events

    def fetch_events(self, day=None):
        """Load the events of a local day, keep them as the current list and notify listeners."""
        if not self.has_access:
            return []
        day = day or now_local()
        with self.fetch_lock:
            try:
                events = self._events_for_day(day)
            except (HttpError, OSError):
                logger.exception("Error fetching events for %s", to_date(day))
                return self.cache.get_events_for_date(day)
            self.current_date = day
            self.events = events
        self._notify()
        return events

    def _refresh(self):
        self.cache.clear_date(self.current_date)
        self.fetch_events(self.current_date)

    def save_pomodoro_event(self, duration, title, task_id=None, note=None, end=None):
        """Create an event covering the session that just ended."""
        if not self.has_access:
            return None
        self._ensure_valid_token()

        end = end or now_local()
        start = end - timedelta(seconds=duration)
        body = {
            'summary': title,
            'start': {'dateTime': format_iso_for_api(start)},
            'end': {'dateTime': format_iso_for_api(end)},
        }
        lines = [note] if note else []
        if task_id:
            body['extendedProperties'] = {'private': {TASK_LINK_PROPERTY: str(task_id)}}
            lines.append(f"{TASK_URL_PREFIX}{task_id}")
        if lines:
            body['description'] = "\n".join(lines)

        try:
            result = self.service.events().insert(calendarId=self.calendar_id, body=body).execute()
        except HttpError:
            logger.exception("Failed to save event '%s'", title)
            raise
        logger.info("Saved Pomodoro event '%s' to calendar", title)
        self.cache.add_event(result)
        self._refresh()
        return result

    def _delete(self, event):
        self.service.events().delete(calendarId=self.calendar_id, eventId=event['id']).execute()
        self.cache.delete_event(event['id'])

    def _delete_all(self, events):
        deleted = 0
        for event in events:
            try:
                self._delete(event)
            except (HttpError, OSError):
                logger.exception("Failed to delete event '%s'", event.get('summary', ''))
                continue
            logger.info("Deleted calendar event: %s", event.get('summary', ''))
            deleted += 1
        return deleted

    def delete_pomodoro_events(self, title, day, task_id=None):
        """Delete a task's session events on a day.

        Events linked to task_id are preferred; when none are linked, unlinked
        events with the same title are removed instead. Events linked to
        another task are never touched.
        """
        if not self.has_access:
            return 0
        try:
            events = self._events_for_day(day)
        except (HttpError, OSError):
            logger.exception("Error listing events for %s", to_date(day))
            return 0

        matching = []
        if task_id:
            matching = [e for e in events if task_id_from_event(e) == str(task_id).lower()]
        if not matching:
            matching = [e for e in events
                        if task_id_from_event(e) is None and e.get('summary') == title]

        deleted = self._delete_all(matching)
        self._refresh()
        return deleted

    def calculate_time_spent(self, day, legacy_titles=None):
        """Total seconds per task id recorded on a day.

        Linked events count for their task; unlinked events count for the task
        whose title matches (legacy_titles maps title to task id). Returns None
        when the calendar could not be read.
        """
        if not self.has_access:
            return {}
        legacy_titles = legacy_titles or {}
        try:
            events = self._events_for_day(day)
        except (HttpError, OSError):
            logger.exception("Error reading events for %s", to_date(day))
            return None

        time_map = {}
        for event in events:
            task_id = task_id_from_event(event)
            if task_id is None:
                task_id = legacy_titles.get(event.get('summary'))
            if task_id is None:
                continue
            time_map[task_id] = time_map.get(task_id, 0) + event_duration(event)
        return time_map

    def find_events_matching(self, title, years=2, now=None):
        """Events with exactly this title within +/- years of now."""
        if not self.has_access or not title:
            return []
        now = now or now_local()
        span = timedelta(days=365 * years)
        logger.info("Searching for events with title '%s' from %s to %s", title, now - span, now + span)
        events = self._list_events(now - span, now + span)
        return [e for e in events if e.get('summary') == title]

    def delete_events_matching(self, title, years=2, now=None):
        """Delete every event with this title within +/- years of now."""
        try:
            matching = self.find_events_matching(title, years=years, now=now)
        except (HttpError, OSError):
            logger.exception("Error searching events titled '%s'", title)
            return 0
        logger.info("Found %d events.", len(matching))
        deleted = self._delete_all(matching)
        if matching:
            self._refresh()
        return deleted

    def delete_event(self, event):
        """Delete a single event."""
        if not self.has_access:
            return
        try:
            self._delete(event)
        except (HttpError, OSError):
            logger.exception("Failed to delete event '%s'", event.get('summary', ''))
            raise
        logger.info("Deleted event: %s", event.get('summary', ''))
        self._refresh()
