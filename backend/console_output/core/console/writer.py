"""
Console writer: log_info, log_error, log_variable.

Each call renders one <script>console.<level>(...)</script> fragment and appends
it to the request's response body when EnableOutputToConsole is on. Calls never
raise; without a context, with the flag off, or after the response completed
they do nothing.
"""

import logging
from typing import Any

from console_output.core.console.context import ConsoleContext
from console_output.core.console.encoder import render_script, to_text

_LOG = logging.getLogger(__name__)


def _write(console: ConsoleContext | None, level: str, message: Any) -> None:
    if console is None or not console.enabled or console.closed:
        return
    try:
        console.write(render_script(level, message))
    except Exception as e:
        _LOG.debug("Console %s entry dropped: %s", level, e)


def log_info(console: ConsoleContext | None, message: Any) -> None:
    """console.info(message)"""
    _write(console, "info", message)


def log_error(console: ConsoleContext | None, message: Any) -> None:
    """console.error(message)"""
    _write(console, "error", message)


def log_variable(console: ConsoleContext | None, name: Any, value: Any) -> None:
    """console.log("name: value"); None name or value becomes ""."""
    _write(console, "log", f"{to_text(name)}: {to_text(value)}")
