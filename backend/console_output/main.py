import html
import logging

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.routing import APIRoute

from console_output.api.main import api_router
from console_output.core.config import settings
from console_output.core.console.middleware import ConsoleOutputMiddleware

_logger = logging.getLogger(__name__)


def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0]}-{route.name}"


if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
    sentry_sdk.init(dsn=str(settings.SENTRY_DSN), enable_tracing=True)

fastapi_app = FastAPI(
    title=settings.PROJECT_NAME,
    generate_unique_id_function=custom_generate_unique_id,
)


# ---------------------------------------------------------------------------
# Global exception handlers
# ---------------------------------------------------------------------------


@fastapi_app.exception_handler(Exception)
async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> HTMLResponse:
    """Catch-all: log and return a 500 page. The exception text is shown only locally."""
    _logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    detail = "Internal server error"
    if settings.ENVIRONMENT == "local":
        detail = f"Internal server error: {exc}"
    return HTMLResponse(
        status_code=500,
        content=f"<!DOCTYPE html><html><body><h1>{html.escape(detail)}</h1></body></html>",
    )


fastapi_app.include_router(api_router)

# Outermost, so 500 pages from the catch-all handler carry the console.error entry.
app = ConsoleOutputMiddleware(fastapi_app)
