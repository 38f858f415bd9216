"""Invariant guards shared by the history buffer."""

from __future__ import annotations

NIL = -1


class HistoryInvariantError(RuntimeError):
    """Raised when the snapshot chain is found in an impossible state.

    Never caught internally: continuing would corrupt history ordering.
    """

    def __init__(self, message: str, *, slot: int | None = None) -> None:
        super().__init__(message)
        self.slot = slot


def ensure_slot(index: int, *, what: str) -> int:
    if index == NIL:
        raise HistoryInvariantError(f"{what} is unset on a populated buffer", slot=index)
    return index
