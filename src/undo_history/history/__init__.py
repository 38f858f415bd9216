"""Bounded undo/redo history engine."""

from .buffer import HistoryBuffer, SnapshotSlot
from .controller import History, with_history
from .options import (
    CALLBACK_KINDS,
    DEFAULT_CAPACITY,
    MISSING,
    CallbackKind,
    HistoryObserver,
    HistoryOptions,
)
from .validation import HistoryInvariantError

__all__ = [
    "CALLBACK_KINDS",
    "CallbackKind",
    "DEFAULT_CAPACITY",
    "History",
    "HistoryBuffer",
    "HistoryInvariantError",
    "HistoryObserver",
    "HistoryOptions",
    "MISSING",
    "SnapshotSlot",
    "with_history",
]
