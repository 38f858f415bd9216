"""Textual host binding; ``app`` holds the runnable demo."""

from .controller import HistoryMirror, TextualHistoryAdapter, TextualHistoryHooks

__all__ = ["HistoryMirror", "TextualHistoryAdapter", "TextualHistoryHooks"]
