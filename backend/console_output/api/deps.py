from typing import Annotated

from fastapi import Depends, Request

from console_output.core.console.context import ConsoleContext
from console_output.core.console.middleware import STATE_KEY


def get_console(request: Request) -> ConsoleContext | None:
    """Request-scoped console context; None when ConsoleOutputMiddleware is not installed."""
    return getattr(request.state, STATE_KEY, None)


ConsoleDep = Annotated[ConsoleContext | None, Depends(get_console)]
