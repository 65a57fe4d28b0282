# tests/test_api_worker.py

import pytest

pytest.importorskip("PyQt6.QtCore")

from pomocal.workers.api_worker import APIWorker  # noqa: E402


def test_tasks_queued_behind_a_stop_are_not_run():
    worker = APIWorker()
    calls = []

    def first():
        calls.append("first")
        worker.running = False
        return "done"

    worker.queue.put(("search_books", first, {}))
    worker.queue.put(("search_books", lambda: calls.append("second"), {}))
    worker.run()

    assert calls == ["first"]


def test_results_and_errors_are_emitted():
    worker = APIWorker()
    completed, errors, loading = [], [], []
    worker.taskCompleted.connect(lambda result, kind: completed.append((result, kind)))
    worker.taskError.connect(lambda error, kind: errors.append((str(error), kind)))
    worker.loadingChanged.connect(loading.append)

    def fail():
        raise RuntimeError("no network")

    def last():
        worker.running = False
        return 3

    worker.queue.put(("search_books", lambda: ["book"], {}))
    worker.queue.put(("sync_time", fail, {}))
    worker.queue.put(("search_books", last, {}))
    worker.run()

    assert completed == [(["book"], "search_books"), (3, "search_books")]
    assert errors == [("no network", "sync_time")]
    assert loading == [True, False, True, False]


def test_stop_drops_pending_tasks():
    worker = APIWorker()
    calls = []
    for n in range(3):
        worker.queue.put(("search_books", lambda n=n: calls.append(n), {}))

    worker.stop()

    assert worker.queue.empty()
    assert worker.queue.unfinished_tasks == 0
    assert not worker.running
    assert calls == []
