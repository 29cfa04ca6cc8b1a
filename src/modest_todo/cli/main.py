# src/modest_todo/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (restoring tasks from disk), then runs
the console REPL in the main thread. The task list is saved once more on
the way out, whatever ends the loop.
"""

from __future__ import annotations

import logging
import signal

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Best-effort synchronous save before exit (no exceptions should escape)."""
    err = state.controller.flush()
    if err is not None:
        print(f"[ERROR] Error saving tasks: {err}")


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    setup_logging(
        log_dir=settings.data_dir,
        console_level=console_level,
        log_to_file=settings.log_to_file,
    )

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    def _handle_sigterm(signum, _frame) -> None:
        # Unwind through the finally below so the save still runs.
        logger.info("Signal %s received, shutting down...", signum)
        raise KeyboardInterrupt

    try:
        signal.signal(signal.SIGTERM, _handle_sigterm)
    except (ValueError, OSError, AttributeError):
        # Not the main thread, or no SIGTERM on this platform.
        logger.debug("SIGTERM handler not installed.", exc_info=True)

    try:
        run_console_loop(state)
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
