# tests/test_console.py

from __future__ import annotations

from types import SimpleNamespace

from todo_keeper.cli.bootstrap import create_initial_state
from todo_keeper.connectors.console_connector import ConsoleNotifier, run_console_loop

from .fakes import MemorySlot


def _scripted(lines: list[str]):
    it = iter(lines)

    def read(prompt: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read


def test_console_quick_add_and_exit(state) -> None:
    out: list[str] = []

    run_console_loop(state, read=_scripted(["buy milk", "", "/list", "/exit", "/add never"]), out=out.append)

    assert [t.title for t in state.store.snapshot()] == ["buy milk"]
    assert any("buy milk (medium)" in line for line in out)


def test_console_stops_on_eof_and_shows_load_warning(settings: SimpleNamespace) -> None:
    slot = MemorySlot({settings.storage_key: "{broken"})
    state = create_initial_state(settings=settings, slot=slot)
    out: list[str] = []

    run_console_loop(state, read=_scripted([]), out=out.append)

    assert state.load_warning is not None
    assert any("[WARN]" in line for line in out)
    assert state.store.snapshot() == ()


def test_console_notifier_formats_toasts() -> None:
    out: list[str] = []
    notifier = ConsoleNotifier(out=out.append)

    notifier.notify("Todo added", "ok")
    notifier.notify("Error adding todo", "Title is required.", destructive=True)

    assert "[OK] Todo added: ok" in out[0]
    assert "[ERROR] Error adding todo: Title is required." in out[1]
