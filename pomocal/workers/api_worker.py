import logging
import queue

from PyQt6.QtCore import QThread, pyqtSignal

logger = logging.getLogger(__name__)

QUIET_TASK_TYPES = ('background_fetch', 'sync_time')


class APIWorker(QThread):
    """Worker thread for calendar and book API calls so the UI never blocks."""
    taskCompleted = pyqtSignal(object, object)
    taskError = pyqtSignal(Exception, object)
    loadingChanged = pyqtSignal(bool)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.queue = queue.Queue()
        self.running = True

    def add_task(self, task_type, func, **kwargs):
        """Add a task to the queue."""
        self.queue.put((task_type, func, kwargs))

        if not self.isRunning():
            self.start()

    def run(self):
        """Main worker loop that processes queued tasks."""
        while self.running:
            try:
                task_type, func, kwargs = self.queue.get(block=True, timeout=0.5)
            except queue.Empty:
                continue
            if not self.running:
                self.queue.task_done()
                break

            loud = task_type not in QUIET_TASK_TYPES
            try:
                if loud:
                    self.loadingChanged.emit(True)
                result = func(**kwargs)
                self.taskCompleted.emit(result, task_type)
            except Exception as e:
                logger.exception("Error in worker thread (%s)", task_type)
                self.taskError.emit(e, task_type)
            finally:
                if loud:
                    self.loadingChanged.emit(False)
                self.queue.task_done()

        logger.debug("Worker thread stopped")

    def stop(self):
        """Stop the worker thread.

        Pending tasks are dropped; a task already running is allowed to finish,
        so the thread is never destroyed while it still runs.
        """
        self.running = False
        while True:
            try:
                self.queue.get_nowait()
            except queue.Empty:
                break
            self.queue.task_done()
        self.wait()
