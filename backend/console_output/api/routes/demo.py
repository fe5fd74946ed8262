import getpass
import html

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from console_output.api.deps import ConsoleDep
from console_output.core.config import settings
from console_output.core.console.writer import log_error, log_info, log_variable

router = APIRouter(tags=["demo"])

SAMPLE_EXCEPTION_MESSAGE = "Sample exception thrown"

_PAGE = """<!DOCTYPE html>
<html>
<head><title>{title}</title></head>
<body>
<h1>{title}</h1>
<p>{status}</p>
<form method="post" action="/button"><button type="submit">Test</button></form>
<form method="get" action="/boom"><button type="submit">Unhandled error</button></form>
</body>
</html>
"""


def _render_page(status: str) -> str:
    return _PAGE.format(
        title=html.escape(settings.PROJECT_NAME), status=html.escape(status)
    )


def _current_user() -> str | None:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return None


@router.get("/", response_class=HTMLResponse)
def index() -> str:
    """
    Demo page. Open the browser console, then press the buttons.
    """
    return _render_page("Open the browser console and press Test.")


@router.post("/button", response_class=HTMLResponse)
def button_clicked(console: ConsoleDep) -> str:
    log_info(console, "Button clicked")
    log_variable(console, "CurrentUser", _current_user())
    try:
        raise ValueError(SAMPLE_EXCEPTION_MESSAGE)
    except ValueError as e:
        log_error(console, str(e))
    return _render_page("Button clicked.")


@router.get("/boom", response_class=HTMLResponse)
def boom() -> str:
    raise RuntimeError(SAMPLE_EXCEPTION_MESSAGE)
