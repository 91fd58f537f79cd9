# src/todo_keeper/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import format_todo
from ..cli.commands import registry as command_registry
from ..core.models import TodoInput
from ..core.state import AppState

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


class ConsoleNotifier:
    """Notifier that prints pipeline toasts as console lines."""

    def __init__(self, out: OutputFn = print) -> None:
        self._out = out

    def notify(self, title: str, description: str, *, destructive: bool = False) -> None:
        tag = "ERROR" if destructive else "OK"
        self._out(f"[{_ts_local()}] [{tag}] {title}: {description}")


def run_console_loop(state: AppState, *, read: InputFn = input, out: OutputFn = print) -> None:
    logger.info("Console connector started.")
    out(f"[{_ts_local()}] [CONSOLE] Use /help for commands. Use /exit to quit.\n")

    if state.load_warning:
        out(f"[{_ts_local()}] [WARN] {state.load_warning}")

    todos = state.store.snapshot()
    if todos:
        out("\n".join(format_todo(t) for t in todos))

    def emit(text: str) -> None:
        out(f"[{_ts_local()}] {text}")

    while True:
        try:
            user_input = read(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            out("")
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = command_registry.handle(state, user_input, emit=emit)
            if response is None:
                # Bare text is a quick add with default fields.
                result = state.pipeline.submit_add(TodoInput(title=user_input))
                response = format_todo(result.todo) if result.todo else f"Could not add todo: {result.error}"
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        out(response)

    logger.info("Console connector finished.")
