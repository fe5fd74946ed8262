"""
ConsoleContext: request-scoped state for console output.

Holds the resolved EnableOutputToConsole flag and the script fragments waiting
to be appended to the response body. One instance per request, never shared.
"""

import logging
from typing import Any

from console_output.core.config import ENABLE_OUTPUT_TO_CONSOLE_KEY

_LOG = logging.getLogger(__name__)


class ConsoleContext:
    """
    Per-request state container.

    States: flag-unresolved (new) -> flag-resolved (after resolve()) -> closed
    (response completed). Writes are accepted only while resolved, enabled and
    not closed.
    """

    def __init__(self, *, path: str = "", method: str = "") -> None:
        self.path = path
        self.method = method
        self.state: dict[str, Any] = {}
        self._fragments: list[str] = []
        self._closed = False

    @property
    def resolved(self) -> bool:
        return ENABLE_OUTPUT_TO_CONSOLE_KEY in self.state

    @property
    def enabled(self) -> bool:
        return self.state.get(ENABLE_OUTPUT_TO_CONSOLE_KEY) is True

    @property
    def closed(self) -> bool:
        return self._closed

    def resolve(self, enabled: bool) -> None:
        """Store the flag for this request. Later calls do not change it."""
        if self.resolved:
            return
        self.state[ENABLE_OUTPUT_TO_CONSOLE_KEY] = bool(enabled)

    def write(self, fragment: str) -> bool:
        """Append a fragment in call order. Returns False when the write was dropped."""
        if self._closed:
            _LOG.debug("Console output after response completed on %s %s", self.method, self.path)
            return False
        if not self.enabled:
            return False
        self._fragments.append(fragment)
        return True

    def drain(self) -> str:
        """Return pending fragments joined and clear them."""
        out = "".join(self._fragments)
        self._fragments.clear()
        return out

    @property
    def pending(self) -> list[str]:
        return list(self._fragments)

    def close(self) -> None:
        self._closed = True
        self._fragments.clear()
