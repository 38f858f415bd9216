import pytest

from undo_history.history import DEFAULT_CAPACITY, HistoryOptions
from undo_history.history.options import resolve_capacity, resolve_equality
from undo_history.runtime import telemetry


def test_defaults() -> None:
    options = HistoryOptions()

    assert options.capacity == DEFAULT_CAPACITY
    assert options.equals is not None
    assert options.equals(1, 1) is True
    assert options.on_undo is None
    assert options.on_redo is None


def test_from_env_reads_capacity(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UNDO_HISTORY_CAPACITY", "7")

    assert HistoryOptions.from_env().capacity == 7
    assert HistoryOptions.from_env(default_capacity=3).capacity == 7


def test_from_env_falls_back_when_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("UNDO_HISTORY_CAPACITY", raising=False)

    assert HistoryOptions.from_env().capacity == DEFAULT_CAPACITY
    assert HistoryOptions.from_env(default_capacity=5).capacity == 5


def test_from_env_ignores_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UNDO_HISTORY_CAPACITY", "lots")

    assert HistoryOptions.from_env(default_capacity=5).capacity == 5


def test_from_env_passes_other_fields(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("UNDO_HISTORY_CAPACITY", raising=False)

    options = HistoryOptions.from_env(equals=None)

    assert options.equals is None


def test_resolve_capacity() -> None:
    assert resolve_capacity(3) == 3
    assert resolve_capacity(0) == DEFAULT_CAPACITY
    assert resolve_capacity(-5) == DEFAULT_CAPACITY


def test_resolve_equality_none_never_matches() -> None:
    equals = resolve_equality(None)

    assert equals(1, 1) is False


def test_configure_rejects_config_and_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_env_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UNDO_HISTORY_LOG_JSON", "Yes")
    monkeypatch.delenv("UNDO_HISTORY_NO_COLOR", raising=False)

    assert telemetry.env_flag("LOG_JSON", False) is True
    assert telemetry.env_flag("NO_COLOR", True) is True
    assert telemetry.env_flag("NO_COLOR", False) is False
