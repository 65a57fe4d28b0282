# tests/test_calendar.py

from datetime import timedelta

import pytest
from googleapiclient.errors import HttpError

from pomocal.api.cache import EventCache
from pomocal.api.calendar import CalendarManager, task_id_from_event
from pomocal.core.utils import parse_event_datetime, to_date

from .fakes import http_error

TASK_ID = "6f1c2b7e-3a4d-4e5f-8a9b-0c1d2e3f4a5b"
OTHER_ID = "0a9b8c7d-6e5f-4a3b-2c1d-0e9f8a7b6c5d"


def test_task_id_from_event():
    assert task_id_from_event({'extendedProperties': {'private': {'pomocalTaskId': TASK_ID.upper()}}}) == TASK_ID
    assert task_id_from_event({'description': f"Focus\npomocal://task/{TASK_ID.upper()}"}) == TASK_ID
    assert task_id_from_event({'summary': "Lunch"}) is None
    assert task_id_from_event({'description': "pomocal://task/not-a-uuid"}) is None


def test_no_access_without_service():
    manager = CalendarManager()
    assert not manager.has_access
    assert manager.fetch_events() == []
    assert manager.save_pomodoro_event(60, "x") is None
    assert manager.calculate_time_spent(None) == {}
    assert manager.delete_pomodoro_events("x", None) == 0


def test_fetch_events_follows_pages_and_notifies(calendar, service, at, day):
    for hour in (8, 10, 12, 14, 16):
        service.add_event(f"Block {hour}", at(hour), 30)
    service.add_event("Tomorrow", at(9) + timedelta(days=1), 30)
    seen = []
    calendar.add_listener(seen.append)

    events = calendar.fetch_events(day)

    assert [e['summary'] for e in events] == ["Block 8", "Block 10", "Block 12", "Block 14", "Block 16"]
    assert len(service.calls('list')) == 3
    assert seen == [events]
    assert calendar.cache.has_date(day)


def test_fetch_events_falls_back_to_cache(calendar, service, at, day):
    service.add_event("Cached", at(9), 30)
    calendar.fetch_events(day)
    service.fail_list = http_error()

    assert [e['summary'] for e in calendar.fetch_events(day)] == ["Cached"]


def test_save_pomodoro_event_body(calendar, service, at, day):
    calendar.fetch_events(day)
    event = calendar.save_pomodoro_event(1500, "Essay", task_id=TASK_ID, note="intro", end=at(10))

    body = service.calls('insert')[0]
    assert body['summary'] == "Essay"
    assert body['extendedProperties'] == {'private': {'pomocalTaskId': TASK_ID}}
    assert body['description'] == f"intro\npomocal://task/{TASK_ID}"
    assert parse_event_datetime(body, 'start') == at(9, 35)
    assert parse_event_datetime(body, 'end') == at(10)
    assert event['id']
    assert [e['summary'] for e in calendar.events] == ["Essay"]


def test_save_pomodoro_event_reraises_api_errors(calendar, service, at):
    service.fail_insert = http_error()
    with pytest.raises(HttpError):
        calendar.save_pomodoro_event(60, "Essay", end=at(10))


def test_calculate_time_spent(calendar, service, at, day):
    service.add_event("Essay", at(8), 25, task_id=TASK_ID)
    service.add_event("Essay (renamed)", at(9), 25, description=f"pomocal://task/{TASK_ID}")
    service.add_event("Old title", at(10), 10)
    service.add_event("Lunch", at(12), 60)

    time_map = calendar.calculate_time_spent(day, legacy_titles={"Old title": "legacy-id"})

    assert time_map == {TASK_ID: 50 * 60, "legacy-id": 10 * 60}


def test_calculate_time_spent_read_error(calendar, service, day):
    service.fail_list = http_error()
    assert calendar.calculate_time_spent(day) is None


def test_delete_pomodoro_events_prefers_linked_events(calendar, service, at, day):
    service.add_event("Essay", at(8), 25, task_id=TASK_ID, event_id="linked")
    service.add_event("Essay", at(9), 25, event_id="same-title")

    assert calendar.delete_pomodoro_events("Essay", day, task_id=TASK_ID) == 1
    assert [e['id'] for e in service.stored] == ["same-title"]


def test_delete_pomodoro_events_falls_back_to_title(calendar, service, at, day):
    service.add_event("Essay", at(8), 25, event_id="a")
    service.add_event("Essay", at(9), 25, event_id="b")
    service.add_event("Other", at(10), 25, event_id="c")

    assert calendar.delete_pomodoro_events("Essay", day, task_id=TASK_ID) == 2
    assert [e['id'] for e in service.stored] == ["c"]


def test_title_fallback_leaves_events_of_other_tasks(calendar, service, at, day):
    service.add_event("New Subtask", at(8), 25, task_id=OTHER_ID, event_id="other-task")
    service.add_event("New Subtask", at(9), 25, event_id="unlinked")

    assert calendar.delete_pomodoro_events("New Subtask", day, task_id=TASK_ID) == 1
    assert [e['id'] for e in service.stored] == ["other-task"]

    assert calendar.delete_pomodoro_events("New Subtask", day, task_id=TASK_ID) == 0
    assert [e['id'] for e in service.stored] == ["other-task"]


def test_delete_skips_events_that_fail_with_os_errors(calendar, service, at, day):
    service.add_event("Essay", at(8), 25, event_id="a")
    service.add_event("Essay", at(9), 25, event_id="b")
    service.fail_delete["a"] = ConnectionResetError("reset")

    assert calendar.delete_pomodoro_events("Essay", day) == 1
    assert [e['id'] for e in service.stored] == ["a"]


def test_http_error_helper_reports_status():
    error = http_error(404)
    assert error.resp.status == 404


def test_delete_continues_after_failure(calendar, service, at, day):
    service.add_event("Essay", at(8), 25, event_id="a")
    service.add_event("Essay", at(9), 25, event_id="b")
    service.fail_delete["a"] = http_error(404)

    assert calendar.delete_pomodoro_events("Essay", day) == 1
    assert [e['id'] for e in service.stored] == ["a"]


def test_events_matching_within_years(calendar, service, day):
    service.add_event("Old Habit", day - timedelta(days=200), 30, event_id="recent")
    service.add_event("Old Habit", day + timedelta(days=300), 30, event_id="planned")
    service.add_event("Old Habit", day - timedelta(days=400), 30, event_id="too-old")
    service.add_event("Old Habits", day, 30, event_id="other-title")

    found = calendar.find_events_matching("Old Habit", years=1, now=day)
    assert sorted(e['id'] for e in found) == ["planned", "recent"]

    assert calendar.delete_events_matching("Old Habit", years=1, now=day) == 2
    assert sorted(e['id'] for e in service.stored) == ["other-title", "too-old"]


def test_delete_event(calendar, service, at):
    event = service.add_event("Lunch", at(12), 60)
    calendar.delete_event(event)
    assert service.stored == []

    service.fail_delete["missing"] = http_error(404)
    with pytest.raises(HttpError):
        calendar.delete_event({'id': "missing", 'summary': "Gone"})


def test_event_cache(at, day):
    cache = EventCache()
    first = {'id': "1", 'start': {'dateTime': at(10).isoformat()}}
    second = {'id': "2", 'start': {'dateTime': at(9).isoformat()}}

    cache.add_event(first)
    assert not cache.has_date(day)

    cache.set_events_for_date(day, [first])
    cache.add_event(second)
    cache.add_event(dict(first, summary="updated"))
    events = cache.get_events_for_date(day)
    assert [e['id'] for e in events] == ["2", "1"]
    assert events[1]['summary'] == "updated"

    events.clear()
    assert len(cache.get_events_for_date(to_date(day))) == 2

    cache.delete_event("2")
    assert [e['id'] for e in cache.get_events_for_date(day)] == ["1"]
    cache.clear_date(day)
    assert not cache.has_date(day)
    cache.set_events_for_date(day, [first])
    cache.clear()
    assert cache.get_events_for_date(day) == []
