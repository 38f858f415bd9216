"""In-memory, bounded undo/redo history for a single value."""

from undo_history.history import (
    History,
    HistoryObserver,
    HistoryOptions,
    MISSING,
    with_history,
)

__all__ = [
    "History",
    "HistoryObserver",
    "HistoryOptions",
    "MISSING",
    "adapters",
    "history",
    "runtime",
    "with_history",
]

__version__ = "0.1.0"
