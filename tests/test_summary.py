# tests/test_summary.py

from pomocal.core.config import UNCATEGORIZED
from pomocal.core.models import TodoItem
from pomocal.core.summary import DaySummary


def test_summary_counts_only_root_tasks():
    sub = TodoItem("Part A", category="Math", time_spent=600)
    math = TodoItem("Calculus", category="Math", time_spent=1200, subtasks=[sub])
    essay = TodoItem("Essay", category="English", time_spent=1800)
    loose = TodoItem("Misc", time_spent=600)
    idle = TodoItem("Idle", category="Art")

    summary = DaySummary.from_todos([math, essay, loose, idle])

    assert summary.total == 3600
    assert not summary.is_empty
    assert summary.categories == [("English", 1800), ("Math", 1200), (UNCATEGORIZED, 600)]
    assert [(todo.title, share) for todo, share in summary.tasks] == [
        ("Calculus", 1 / 3), ("Essay", 0.5), ("Misc", 1 / 6),
    ]


def test_empty_day():
    summary = DaySummary.from_todos([TodoItem("Nothing yet")])
    assert summary.is_empty
    assert summary.categories == []
    assert summary.tasks == []
