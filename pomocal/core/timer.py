import logging

from pomocal.core.config import (
    DEFAULT_BREAK_MINUTES, DEFAULT_WORK_MINUTES, POMODORO_SESSION_TITLE, STOPWATCH_SESSION_TITLE
)
from pomocal.core.utils import format_timer

logger = logging.getLogger(__name__)

POMODORO = 'pomodoro'
STOPWATCH = 'stopwatch'


class TimerManager:
    """Pomodoro countdown and stopwatch state.

    The timer does not own a clock: the GUI calls tick() once per second while
    it is running. A finished work session waits for review; finalize_session()
    reports it through on_work_session_completed(duration, task_title,
    book_title, task_id, note, rating).
    """
    def __init__(self, work_minutes=DEFAULT_WORK_MINUTES, break_minutes=DEFAULT_BREAK_MINUTES):
        self.work_duration = work_minutes * 60
        self.break_duration = break_minutes * 60
        self.time_remaining = self.work_duration
        self.stopwatch_seconds = 0
        self.is_running = False
        self.is_work_mode = True
        self.mode = POMODORO
        self.selected_task = None
        self.current_note = ""
        self.review_pending = False
        self.on_work_session_completed = None
        self.on_change = None

    def _changed(self):
        if self.on_change:
            self.on_change()

    def _phase_duration(self):
        return self.work_duration if self.is_work_mode else self.break_duration

    def set_work_duration(self, minutes):
        self.pause_timer()
        self.work_duration = minutes * 60
        if self.mode == POMODORO and self.is_work_mode:
            self.time_remaining = self.work_duration
        self._changed()

    def set_mode(self, mode):
        if mode not in (POMODORO, STOPWATCH):
            raise ValueError(f"unknown timer mode: {mode}")
        self.pause_timer()
        self.mode = mode
        if mode == POMODORO:
            self.time_remaining = self._phase_duration()
        else:
            self.stopwatch_seconds = 0
        self._changed()

    def start_timer(self):
        if self.review_pending:
            return
        self.is_running = True
        self._changed()

    def pause_timer(self):
        self.is_running = False
        self._changed()

    def toggle(self):
        if self.is_running:
            self.pause_timer()
        else:
            self.start_timer()

    def reset_timer(self):
        self.pause_timer()
        if self.mode == POMODORO:
            self.time_remaining = self._phase_duration()
        else:
            self.stopwatch_seconds = 0
        self._changed()

    def switch_mode(self):
        """Flip between work and break (pomodoro only)."""
        if self.mode != POMODORO:
            return
        self.pause_timer()
        self.is_work_mode = not self.is_work_mode
        self.time_remaining = self._phase_duration()
        self._changed()

    def tick(self):
        """Advance one second."""
        if not self.is_running:
            return
        if self.mode == STOPWATCH:
            self.stopwatch_seconds += 1
        elif self.time_remaining > 0:
            self.time_remaining -= 1
            if self.time_remaining <= 0:
                self.time_remaining = 0
                self._complete_session()
        else:
            self._complete_session()
        self._changed()

    def _complete_session(self):
        self.pause_timer()
        if self.is_work_mode:
            self.review_pending = True
            logger.info("Work session finished, waiting for review")
        else:
            self.switch_mode()

    def finish_stopwatch(self):
        if self.mode != STOPWATCH:
            return
        self.pause_timer()
        if self.stopwatch_seconds > 0:
            self.review_pending = True

    def session_duration(self):
        return self.work_duration if self.mode == POMODORO else self.stopwatch_seconds

    def finalize_session(self, rating, note):
        """Report the reviewed session, then move on to the next phase."""
        task = self.selected_task
        default_title = POMODORO_SESSION_TITLE if self.mode == POMODORO else STOPWATCH_SESSION_TITLE
        task_title = task.title if task else default_title
        book_title = task.book.title if task and task.book else None
        task_id = task.item_id if task else None
        duration = self.session_duration()

        if self.on_work_session_completed:
            self.on_work_session_completed(duration, task_title, book_title, task_id, note, rating)

        self.current_note = ""
        self.review_pending = False
        if self.mode == POMODORO:
            self.switch_mode()
        else:
            self.stopwatch_seconds = 0
        self._changed()

    def skip_break(self):
        """Return to work without recording anything."""
        if self.mode != POMODORO or self.is_work_mode:
            return
        self.pause_timer()
        self.switch_mode()

    def update_time_remaining(self, seconds):
        """Set the countdown; in work mode this also becomes the recorded duration."""
        self.pause_timer()
        self.time_remaining = seconds
        if self.mode == POMODORO and self.is_work_mode:
            self.work_duration = seconds
        self._changed()

    def select_task(self, item, force=False):
        """Focus on another task. Refused while running unless forced, which resets progress."""
        if self.is_running and not force:
            return False
        if force:
            self.reset_timer()
        self.selected_task = item
        self._changed()
        return True

    def formatted_time(self):
        if self.mode == POMODORO:
            return format_timer(self.time_remaining)
        return format_timer(self.stopwatch_seconds, with_hours=True)

    @property
    def progress(self):
        if self.mode != POMODORO:
            return 0.0
        total = self._phase_duration()
        return self.time_remaining / total if total else 0.0
