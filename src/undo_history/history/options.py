"""Configuration and host-facing protocols for history controllers."""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Literal, Optional, Protocol

from undo_history.runtime import telemetry

if TYPE_CHECKING:
    from .controller import History

DEFAULT_CAPACITY = 100

CallbackKind = Literal["undo", "redo"]
CALLBACK_KINDS: tuple[str, ...] = ("undo", "redo")

# (current_value, previous_value)
TransitionCallback = Callable[[Any, Any], None]
Equality = Callable[[Any, Any], bool]


class _Missing:
    """Marker for "no value held", distinct from a stored ``None``."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class HistoryObserver(Protocol):
    """Reactive invalidation hook supplied by the host.

    Called once per completed state change (accepted write, undo, redo,
    clear, dispose). The host decides how to fan it out.
    """

    def history_changed(self, history: "History") -> None:
        ...


@dataclass(slots=True)
class HistoryOptions:
    """Controller configuration.

    ``equals=None`` disables write suppression so every write is recorded.
    """

    capacity: int = DEFAULT_CAPACITY
    equals: Optional[Equality] = operator.eq
    on_undo: Optional[TransitionCallback] = None
    on_redo: Optional[TransitionCallback] = None

    @classmethod
    def from_env(
        cls, *, default_capacity: int = DEFAULT_CAPACITY, **overrides: Any
    ) -> "HistoryOptions":
        """Build options with ``capacity`` read from ``UNDO_HISTORY_CAPACITY``.

        Falls back to ``default_capacity`` when the variable is unset or not an
        integer. Other fields come from ``overrides``.
        """

        capacity = default_capacity
        raw = telemetry.env("CAPACITY")
        if raw is not None:
            try:
                capacity = int(raw)
            except ValueError:
                telemetry.record_event(
                    "history.capacity_unparsable",
                    level="warning",
                    data={"raw": raw, "fallback": default_capacity},
                )
        return cls(capacity=capacity, **overrides)


def resolve_capacity(capacity: int) -> int:
    """Return ``capacity``, or ``DEFAULT_CAPACITY`` when it is not positive."""

    if capacity > 0:
        return capacity
    telemetry.record_event(
        "history.capacity_clamped",
        level="warning",
        data={"requested": capacity, "fallback": DEFAULT_CAPACITY},
    )
    return DEFAULT_CAPACITY


def never_equal(_prev: Any, _next: Any) -> bool:
    return False


def resolve_equality(equals: Optional[Equality]) -> Equality:
    return never_equal if equals is None else equals


__all__ = [
    "CALLBACK_KINDS",
    "CallbackKind",
    "DEFAULT_CAPACITY",
    "Equality",
    "HistoryObserver",
    "HistoryOptions",
    "MISSING",
    "TransitionCallback",
    "resolve_capacity",
    "resolve_equality",
]
