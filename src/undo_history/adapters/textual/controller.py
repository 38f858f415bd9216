"""Textual-free adapter relaying ``History`` changes into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from undo_history.history import History


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class HistoryMirror:
    """Host-friendly snapshot of a history after a change."""

    value: Any
    entries: Tuple[Any, ...]
    size: int
    capacity: int
    can_undo: bool
    can_redo: bool


@dataclass(slots=True)
class TextualHistoryHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_history: Callable[[HistoryMirror], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualHistoryAdapter:
    """Observer that pushes a fresh ``HistoryMirror`` on every change.

    Also exposes the counter actions the demo app binds to keys and buttons.
    """

    ACTIONS = ("increment", "decrement", "undo", "redo", "clear")

    def __init__(self, history: History, hooks: TextualHistoryHooks) -> None:
        self.history = history
        self.hooks = hooks
        history.register_callback("undo", self._on_undo)
        history.register_callback("redo", self._on_redo)
        history.attach(self)
        self._refresh()

    def history_changed(self, history: History) -> None:
        self._log_state("changed ->", size=history.size())
        self._refresh()

    def handle_action(self, name: str) -> bool:
        """Run a named demo action; returns ``False`` for unknown names."""

        if name not in self.ACTIONS:
            self._log_state("action ?", action=name)
            return False
        self._log_state("action ->", action=name)
        if name == "increment":
            self.history.write(_step(1))
        elif name == "decrement":
            self.history.write(_step(-1))
        elif name == "undo":
            self.history.undo()
        elif name == "redo":
            self.history.redo()
        else:
            self.history.clear()
        return True

    def close(self) -> None:
        self.history.remove_callback("undo", self._on_undo)
        self.history.remove_callback("redo", self._on_redo)
        self.history.detach()

    def mirror(self) -> HistoryMirror:
        history = self.history
        return HistoryMirror(
            value=history.value,
            entries=tuple(history.to_sequence()),
            size=history.size(),
            capacity=history.capacity,
            can_undo=history.is_undo_possible(),
            can_redo=history.is_redo_possible(),
        )

    def _on_undo(self, current: Any, previous: Any) -> None:
        self.hooks.update_status(f"undo: {current!r} <- {previous!r}")

    def _on_redo(self, current: Any, previous: Any) -> None:
        self.hooks.update_status(f"redo: {current!r} <- {previous!r}")

    def _refresh(self) -> None:
        self.hooks.update_history(self.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        parts: List[str] = [prefix, f"value={self.history.value!r}"]
        parts.extend(f"{key}={value!r}" for key, value in fields.items())
        self.hooks.log(" ".join(parts))


def _step(delta: int) -> Callable[[Optional[int]], int]:
    def update(value: Optional[int]) -> int:
        return (value or 0) + delta

    return update


__all__ = ["HistoryMirror", "TextualHistoryAdapter", "TextualHistoryHooks"]
