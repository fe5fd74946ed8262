"""
ConsoleOutputHook: request lifecycle callbacks for console output.

- on_request_start: resolve EnableOutputToConsole from settings into the context.
- on_unhandled_error: forward the exception message as a console.error entry.
"""

import logging
from typing import Any

from console_output.core.config import read_output_to_console
from console_output.core.console.context import ConsoleContext
from console_output.core.console.encoder import to_text
from console_output.core.console.writer import log_error

_LOG = logging.getLogger(__name__)

UNHANDLED_PREFIX = "Unhandled Exception: "


def exception_message(error: BaseException) -> str:
    """Message text of an exception; falls back to the class name when empty."""
    text = to_text(error)
    return text or type(error).__name__


class ConsoleOutputHook:
    """
    Bridges the request pipeline to the console writer.

    settings is any object with ENABLE_OUTPUT_TO_CONSOLE (Settings) or a dict
    keyed EnableOutputToConsole. It is read on every request start.
    """

    def __init__(self, settings: Any) -> None:
        self._settings = settings

    def on_request_start(self, context: ConsoleContext) -> None:
        enabled = read_output_to_console(self._settings)
        context.resolve(enabled)

    def on_unhandled_error(
        self, context: ConsoleContext | None, error: BaseException | None
    ) -> None:
        if error is None or context is None:
            return
        try:
            log_error(context, f"{UNHANDLED_PREFIX}{exception_message(error)}")
        except Exception as e:
            _LOG.debug("Unhandled error not forwarded to console: %s", e)
