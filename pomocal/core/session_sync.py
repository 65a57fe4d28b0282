"""Glue between finished focus sessions, the calendar and the task tree."""
import logging
from datetime import timedelta

from pomocal.core.config import POMODORO_SESSION_TITLE
from pomocal.core.models import WorkSession
from pomocal.core.utils import now_local

logger = logging.getLogger(__name__)


def credit_work_session(todo_manager, task_id, duration, note=None, rating=None, end=None):
    """Add a session's time to its task (and ancestors) and keep it in the task's history."""
    if task_id is None:
        return None
    end = end or now_local()
    if not todo_manager.add_time(task_id, duration):
        return None
    session = WorkSession(end - timedelta(seconds=duration), end, duration, note=note or None, rating=rating)
    todo_manager.add_session(task_id, session)
    return session


def record_work_session(todo_manager, calendar_manager, duration, task_title, book_title, task_id,
                        note, rating, now=None):
    """Store a reviewed session as a calendar event and credit it to its task."""
    end = now or now_local()
    title = task_title or POMODORO_SESSION_TITLE
    try:
        calendar_manager.save_pomodoro_event(duration, title, task_id=task_id, note=note, end=end)
    except Exception:
        logger.exception("Saving session '%s' to the calendar failed", title)

    session = credit_work_session(todo_manager, task_id, duration, note=note, rating=rating, end=end)
    logger.info("Recorded %ss on '%s'%s", int(duration), title, f" ({book_title})" if book_title else "")
    return session


def sync_time_from_calendar(todo_manager, calendar_manager):
    """Recompute the selected day's task times from the calendar events."""
    if not calendar_manager.has_access:
        return False
    time_map = calendar_manager.calculate_time_spent(
        todo_manager.selected_date, legacy_titles=todo_manager.title_map()
    )
    if time_map is None:
        return False
    return todo_manager.batch_update_time(time_map)
