# src/todo_keeper/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (restoring saved todos), then runs the
console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import ConsoleNotifier, run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)
    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings, notifier=ConsoleNotifier())
    try:
        run_console_loop(state)
    finally:
        # Every mutation is already written through; nothing to flush here.
        logger.info("Bye.")


if __name__ == "__main__":
    main()
