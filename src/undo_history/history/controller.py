"""Undo/redo controller wrapping a ``HistoryBuffer``."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, List, Optional, Set, Tuple

from undo_history.runtime.telemetry import span

from .buffer import HistoryBuffer
from .options import (
    CALLBACK_KINDS,
    MISSING,
    CallbackKind,
    HistoryObserver,
    HistoryOptions,
    TransitionCallback,
    resolve_capacity,
    resolve_equality,
)


class History:
    """Bounded undo/redo history for a single value.

    The value under the cursor is the current value. Writes that compare equal
    to it are dropped. Undo and redo move the cursor and notify the callbacks
    registered for that kind with ``(current_value, previous_value)``.
    """

    def __init__(
        self,
        initial: Any = MISSING,
        *,
        options: Optional[HistoryOptions] = None,
        observer: Optional[HistoryObserver] = None,
        logger_name: str | None = None,
    ) -> None:
        opts = options or HistoryOptions()
        self._buffer = HistoryBuffer(
            capacity=resolve_capacity(opts.capacity), initial=initial
        )
        self._equals = resolve_equality(opts.equals)
        self._pending_redo = 0
        self._callbacks: Dict[str, Set[TransitionCallback]] = {
            kind: set() for kind in CALLBACK_KINDS
        }
        self._observer = observer
        self._logger_name = logger_name
        if opts.on_undo is not None:
            self.register_callback("undo", opts.on_undo)
        if opts.on_redo is not None:
            self.register_callback("redo", opts.on_redo)

    @property
    def value(self) -> Any:
        """Current value, ``None`` while the history is empty."""

        current = self._buffer.current
        return None if current is MISSING else current

    @property
    def capacity(self) -> int:
        return self._buffer.capacity

    @property
    def pending_redo(self) -> int:
        return self._pending_redo

    def write(self, value: Any) -> Any:
        """Record ``value`` unless it equals the current value.

        A callable is treated as an updater and called with the current value.
        Returns the resolved value whether or not it was recorded.
        """

        if callable(value):
            value = value(self.value)

        if not self._buffer.is_empty and self._equals(self._buffer.current, value):
            return value

        with span(
            "history::write",
            logger_name=self._logger_name,
            component="history",
            metadata={"size": self._buffer.size, "pending_redo": self._pending_redo},
        ):
            if self._pending_redo:
                self._buffer.shrink(self._pending_redo)
                self._pending_redo = 0
            self._buffer.append(value)
        self._notify()
        return value

    def undo(self) -> None:
        if not self._buffer.has_previous():
            return
        self._transition("undo", self._buffer.move_back, 1)

    def redo(self) -> None:
        if not self._buffer.has_next():
            return
        self._transition("redo", self._buffer.move_forward, -1)

    def clear(self, clear_current: bool = False) -> None:
        """Drop all history, keeping the current value unless ``clear_current``."""

        with span(
            "history::clear",
            logger_name=self._logger_name,
            component="history",
            metadata={"size": self._buffer.size, "clear_current": clear_current},
        ):
            self._buffer.reset(MISSING if clear_current else self._buffer.current)
            self._pending_redo = 0
        self._notify()

    def dispose(self) -> None:
        """Forget every callback and the whole history, then detach the observer."""

        for listeners in self._callbacks.values():
            listeners.clear()
        self.clear(clear_current=True)
        self._observer = None

    def register_callback(self, kind: CallbackKind, callback: TransitionCallback) -> None:
        self._listeners(kind).add(callback)

    def remove_callback(self, kind: CallbackKind, callback: TransitionCallback) -> None:
        self._listeners(kind).discard(callback)

    def attach(self, observer: HistoryObserver) -> None:
        self._observer = observer

    def detach(self) -> None:
        self._observer = None

    def is_undo_possible(self) -> bool:
        return self._buffer.has_previous()

    def is_redo_possible(self) -> bool:
        return self._buffer.has_next()

    def size(self) -> int:
        return self._buffer.size

    def to_sequence(self) -> Iterator[Any]:
        return self._buffer.traverse()

    def to_list(self) -> List[Any]:
        return list(self._buffer.traverse())

    def __iter__(self) -> Iterator[Any]:
        return self.to_sequence()

    def __len__(self) -> int:
        return self._buffer.size

    def __repr__(self) -> str:
        return (
            f"History(value={self.value!r}, size={self._buffer.size}, "
            f"capacity={self._buffer.capacity})"
        )

    def _listeners(self, kind: str) -> Set[TransitionCallback]:
        try:
            return self._callbacks[kind]
        except KeyError as exc:
            raise ValueError(
                f"Unknown callback kind '{kind}', expected one of {CALLBACK_KINDS}"
            ) from exc

    def _transition(self, kind: str, move: Callable[[], bool], step: int) -> None:
        with span(
            f"history::{kind}",
            logger_name=self._logger_name,
            component="history",
            metadata={"size": self._buffer.size, "pending_redo": self._pending_redo},
        ):
            previous = self._buffer.current
            move()
            self._pending_redo += step
            current = self._buffer.current
            try:
                for callback in tuple(self._callbacks[kind]):
                    callback(current, previous)
            finally:
                self._notify()

    def _notify(self) -> None:
        if self._observer is not None:
            self._observer.history_changed(self)


def with_history(
    initial: Any = MISSING,
    *,
    options: Optional[HistoryOptions] = None,
    observer: Optional[HistoryObserver] = None,
) -> Tuple[Callable[[], Any], Callable[[Any], Any], History]:
    """Return ``(read, write, history)`` for a value with undo/redo."""

    history = History(initial, options=options, observer=observer)
    return (lambda: history.value), history.write, history


__all__ = ["History", "with_history"]
