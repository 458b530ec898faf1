# src/todolist/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime
from typing import cast

from ..cli.commands import format_listing
from ..cli.commands import registry as command_registry
from ..core.ports import UIEvent
from ..core.state import AppState
from .console_ui import ConsoleUI

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(state: AppState, line: str) -> str | None:
    """
    One console line -> one reply.

    Slash commands go through the registry; any other non-empty text is a new task.
    """
    line = line.strip()
    if not line:
        return None

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    try:
        cmd_response = command_registry.handle(state, line, emit=emit)
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."

    if cmd_response is not None:
        return cmd_response

    cast(ConsoleUI, state.ui).dispatch(UIEvent.SUBMIT, line)
    return format_listing(state)


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")
    _print_ts(format_listing(state))

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        reply = handle_line(state, user_input)
        if reply is not None:
            _print_ts(reply)

    logger.info("Console connector finished.")
