"""Executable Textual demo: a counter with undo/redo history."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence

from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Footer, Header, Static

from undo_history.history import History, HistoryOptions
from undo_history.runtime import telemetry

from .controller import HistoryMirror, TextualHistoryAdapter, TextualHistoryHooks

DEMO_CAPACITY = 5


@dataclass
class UIState:
    value_text: str = ""
    history_text: str = ""
    status_text: str = ""


def create_demo_history(capacity: int = DEMO_CAPACITY) -> History:
    """History seeded the way the demo starts: empty, then ``1`` and ``2``."""

    history = History(options=HistoryOptions(capacity=capacity))
    history.write(1)
    history.write(2)
    return history


class HistoryDemoApp(App[None]):
    """Counter whose every change can be undone and redone."""

    CSS = """
	Screen {
		layout: vertical;
		align: center top;
	}

	#value-view {
		height: 3;
		content-align: center middle;
		text-style: bold;
	}

	#history-view {
		height: 3;
		border: round $accent;
		content-align: center middle;
	}

	#actions {
		height: 3;
		align: center middle;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("up", "history('increment')", "Increment"),
        ("down", "history('decrement')", "Decrement"),
        ("u", "history('undo')", "Undo"),
        ("r", "history('redo')", "Redo"),
        ("c", "history('clear')", "Clear history"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, *, capacity: int = DEMO_CAPACITY) -> None:
        super().__init__()
        self._state = UIState()
        self._capacity = capacity
        self.adapter: TextualHistoryAdapter | None = None
        self._value_widget: Static | None = None
        self._history_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical():
            self._value_widget = Static("", id="value-view")
            yield self._value_widget
            with Horizontal(id="actions"):
                yield Button("Increment", id="increment")
                yield Button("Decrement", id="decrement")
                yield Button("Undo", id="undo")
                yield Button("Redo", id="redo")
                yield Button("Clear history", id="clear")
            self._history_widget = Static("", id="history-view")
            yield self._history_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualHistoryHooks(
            update_history=self._update_history,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualHistoryAdapter(create_demo_history(self._capacity), hooks)

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.close()
            self.adapter.history.dispose()
            self.adapter = None

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id:
            self.action_history(event.button.id)

    def action_history(self, name: str) -> None:
        if self.adapter:
            self.adapter.handle_action(name)

    def _update_history(self, mirror: HistoryMirror) -> None:
        self._state.value_text = "" if mirror.value is None else str(mirror.value)
        self._state.history_text = (
            f"[{', '.join(str(entry) for entry in mirror.entries)}]  "
            f"size {mirror.size}/{mirror.capacity}"
        )
        if self._value_widget:
            self._value_widget.update(self._state.value_text)
        if self._history_widget:
            self._history_widget.update(self._state.history_text)
        for button_id, enabled in (("undo", mirror.can_undo), ("redo", mirror.can_redo)):
            for button in self.query(f"#{button_id}").results(Button):
                button.disabled = not enabled

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        telemetry.record_event("demo.log", level="debug", data={"line": line})


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the undo/redo history demo.")
    parser.add_argument(
        "--capacity",
        type=int,
        default=None,
        help=f"Retained history entries (env UNDO_HISTORY_CAPACITY, default {DEMO_CAPACITY})",
    )
    parser.add_argument(
        "--preset",
        choices=telemetry.PRESETS,
        default=None,
        help="Telemetry preset to use instead of UNDO_HISTORY_* variables",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.preset:
        telemetry.configure(preset=args.preset)
    capacity = args.capacity
    if capacity is None:
        capacity = HistoryOptions.from_env(default_capacity=DEMO_CAPACITY).capacity
    HistoryDemoApp(capacity=capacity).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
