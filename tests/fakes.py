# tests/fakes.py

from datetime import timedelta

from googleapiclient.errors import HttpError

from pomocal.core.utils import format_iso_for_api, parse_iso_from_api


class FakeHttpResponse(dict):
    """The parts of an httplib2 response that HttpError reads."""

    def __init__(self, status, reason="error"):
        super().__init__(status=str(status))
        self.status = status
        self.reason = reason


def http_error(status=500, content=b'boom'):
    return HttpError(FakeHttpResponse(status), content)


class FakeRequest:
    """Mimics a googleapiclient request: the call happens on execute()."""

    def __init__(self, func):
        self._func = func

    def execute(self):
        return self._func()


class FakeEventsResource:
    """
    In-memory stand-in for service.events().

    - list() filters by start time and pages through results
    - insert()/delete() mutate the stored events
    - every call is captured for assertions
    """

    def __init__(self, service):
        self.service = service
        self.calls = []

    def list(self, **params):
        self.calls.append(('list', params))
        service = self.service

        def run():
            if service.fail_list is not None:
                raise service.fail_list
            start = parse_iso_from_api(params['timeMin'])
            end = parse_iso_from_api(params['timeMax'])
            items = [
                e for e in service.stored
                if start <= parse_iso_from_api(e['start']['dateTime']) < end
            ]
            items.sort(key=lambda e: parse_iso_from_api(e['start']['dateTime']))
            offset = int(params.get('pageToken') or 0)
            page = items[offset:offset + service.page_size]
            result = {'items': page}
            if offset + service.page_size < len(items):
                result['nextPageToken'] = str(offset + service.page_size)
            return result

        return FakeRequest(run)

    def insert(self, calendarId, body):
        self.calls.append(('insert', body))
        service = self.service

        def run():
            if service.fail_insert is not None:
                raise service.fail_insert
            event = dict(body, id=f"evt{len(service.stored) + 1}")
            service.stored.append(event)
            return event

        return FakeRequest(run)

    def delete(self, calendarId, eventId):
        self.calls.append(('delete', eventId))
        service = self.service

        def run():
            if eventId in service.fail_delete:
                raise service.fail_delete[eventId]
            service.stored = [e for e in service.stored if e['id'] != eventId]
            return ''

        return FakeRequest(run)


class FakeCalendarService:
    """Minimal Google Calendar service: only events() is used by the app."""

    def __init__(self, page_size=2):
        self.stored = []
        self.page_size = page_size
        self.fail_list = None
        self.fail_insert = None
        self.fail_delete = {}
        self.resource = FakeEventsResource(self)

    def events(self):
        return self.resource

    def calls(self, kind):
        return [args for name, args in self.resource.calls if name == kind]

    def add_event(self, summary, start, minutes, task_id=None, description=None, event_id=None):
        end = start + timedelta(minutes=minutes)
        event = {
            'id': event_id or f"seed{len(self.stored) + 1}",
            'summary': summary,
            'start': {'dateTime': format_iso_for_api(start)},
            'end': {'dateTime': format_iso_for_api(end)},
        }
        if task_id:
            event['extendedProperties'] = {'private': {'pomocalTaskId': task_id}}
        if description:
            event['description'] = description
        self.stored.append(event)
        return event


class FakeResponse:
    def __init__(self, status_code=200, payload=None, invalid_json=False):
        self.status_code = status_code
        self._payload = payload if payload is not None else {}
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("not json")
        return self._payload


class FakeSession:
    """
    Fake requests.Session for the book search client.

    Returns a canned response (or raises a canned error) and captures calls.
    """

    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({'url': url, 'params': params, 'headers': headers, 'timeout': timeout})
        if self.error is not None:
            raise self.error
        return self.response
