"""PomoCal: focus timer, task tree and study tracker backed by Google Calendar."""

__version__ = "0.1.0"
