# tests/test_utils.py

import os
from datetime import date, datetime, timezone

import pytest

from pomocal.core.config import CATEGORY_PALETTE
from pomocal.core.utils import (
    APP_EMOJIS, category_color, day_bounds, emoji_for, event_duration, format_hours_minutes,
    format_iso_for_api, format_minutes, format_short_time, format_stored_datetime, format_timer,
    format_total_time, parse_stored_datetime, stable_hash, start_of_day, strip_bold_tags, to_date
)
from pomocal.core.storage import JsonStore
from pomocal.core.todo_manager import TodoManager


@pytest.mark.parametrize("seconds, expected", [
    (1500, "25:00"), (59, "00:59"), (0, "00:00"),
])
def test_format_timer_countdown(seconds, expected):
    assert format_timer(seconds) == expected


def test_format_durations():
    assert format_timer(3725, with_hours=True) == "01:02:05"
    assert format_total_time(3909) == "1h 05m 09s"
    assert format_total_time(0) == "0h 00m 00s"
    assert format_short_time(309) == "05m 09s"
    assert format_short_time(3909) == "1h 05m 09s"
    assert format_hours_minutes(300) == "05m"
    assert format_hours_minutes(3900) == "1h 05m"
    assert format_minutes(1530) == "25min"


def test_stable_hash_is_djb2():
    assert stable_hash("") == 5381
    assert stable_hash("a") == 5381 * 33 + ord("a")
    # long inputs wrap around like a signed 64-bit integer and stay positive
    assert 0 <= stable_hash("x" * 200) < 2 ** 63 + 1


def test_colours_and_emojis_are_stable():
    assert category_color("Math") == category_color("Math")
    assert category_color("Math") in CATEGORY_PALETTE
    assert emoji_for("Algorithms") in APP_EMOJIS
    assert emoji_for("Algorithms") == APP_EMOJIS[stable_hash("Algorithms") % len(APP_EMOJIS)]


def test_stored_datetimes():
    assert parse_stored_datetime(None) is None
    assert parse_stored_datetime(0) == datetime(2001, 1, 1, tzinfo=timezone.utc)
    assert parse_stored_datetime("2025-03-12T09:30:00Z") == datetime(2025, 3, 12, 9, 30, tzinfo=timezone.utc)
    assert parse_stored_datetime("2025-03-12T09:30:00").tzinfo is not None

    aware = datetime(2025, 3, 12, 9, 30, tzinfo=timezone.utc)
    assert parse_stored_datetime(format_stored_datetime(aware)) == aware
    assert format_stored_datetime(None) is None
    assert parse_stored_datetime(format_stored_datetime(date(2025, 3, 12))).date() == date(2025, 3, 12)


def test_api_datetimes_and_event_duration():
    dt = datetime(2025, 3, 12, 9, 30, tzinfo=timezone.utc)
    assert format_iso_for_api(dt) == "2025-03-12T09:30:00Z"

    event = {'start': {'dateTime': "2025-03-12T09:00:00Z"}, 'end': {'dateTime': "2025-03-12T09:25:00+00:00"}}
    assert event_duration(event) == 1500

    all_day = {'start': {'date': "2025-03-12"}, 'end': {'date': "2025-03-13"}}
    assert event_duration(all_day) == 86400


def test_day_bounds(day):
    start, end = day_bounds(day)
    assert start.hour == 0 and start.minute == 0
    assert start.date() == day.date()
    assert (end - start).total_seconds() == 86400


def test_strip_bold_tags():
    assert strip_bold_tags("<b>Deep</b> Work") == "Deep Work"
    assert strip_bold_tags(None) == ""


@pytest.mark.parametrize("day_value", [date(2026, 1, 15), date(2026, 7, 15)])
def test_start_of_day_uses_offset_of_that_date(berlin_tz, day_value):
    start = start_of_day(day_value)
    assert start.hour == 0
    assert to_date(start) == day_value
    expected_offset = 1 if day_value.month == 1 else 2
    assert start.utcoffset().total_seconds() == expected_offset * 3600


def test_day_bounds_across_dst_switch(berlin_tz):
    start, end = day_bounds(date(2026, 3, 29))
    assert to_date(start) == date(2026, 3, 29)
    assert to_date(end) == date(2026, 3, 30)
    assert (end - start).total_seconds() == 23 * 3600


def test_naive_stored_datetimes_get_the_offset_of_their_date(berlin_tz):
    winter = parse_stored_datetime("2026-01-15T09:30:00")
    summer = parse_stored_datetime("2026-07-15T09:30:00")
    assert winter.utcoffset().total_seconds() == 3600
    assert summer.utcoffset().total_seconds() == 7200
    assert format_stored_datetime(datetime(2026, 1, 15, 9, 30)) == "2026-01-15T09:30:00+01:00"


def test_selecting_a_day_opens_its_own_file(berlin_tz, tmp_path):
    manager = TodoManager(JsonStore(str(tmp_path / "data")))
    for day_value in (date(2026, 1, 15), date(2026, 7, 15)):
        manager.select_date(start_of_day(day_value))
        manager.add_todo_titled(f"Task {day_value}")
        assert manager.store.task_path(manager.selected_date).endswith(f"{day_value.isoformat()}.json")
        assert os.path.exists(manager.store.task_path(day_value))
