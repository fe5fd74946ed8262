"""
ConsoleOutputMiddleware: pure ASGI middleware driving ConsoleOutputHook.

Per HTTP request:
- Build a ConsoleContext, publish it as request.state.console, run on_request_start.
- When output is enabled and the response is uncompressed text/html with a body,
  pending console fragments are appended to the final body chunk. Responses
  without Content-Length are streamed through chunk by chunk; responses with one
  are held (up to MAX_BUFFERED_BODY) so the length can be corrected. Anything
  else passes through untouched.
- The context is closed as soon as the final chunk is sent, so writes from
  background tasks are no-ops.
- The final chunk of a 5xx response is held until the app returns or raises, so
  an error page produced further in (Starlette's ServerErrorMiddleware) carries
  the console.error entry from on_unhandled_error. The exception is re-raised.

Wrap the whole application (ConsoleOutputMiddleware(app)) to sit outside
ServerErrorMiddleware; app.add_middleware also works but then 500 pages
rendered by the framework do not pass through it.
"""

import logging
from typing import Any

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from console_output.core.console.context import ConsoleContext
from console_output.core.console.hook import ConsoleOutputHook

_LOG = logging.getLogger(__name__)

STATE_KEY = "console"

# Largest fixed-length body held in memory for rewriting.
MAX_BUFFERED_BODY = 1024 * 1024

_NO_BODY_STATUS = frozenset({204, 205, 304})


def _is_rewritable(message: Message, *, method: str, max_buffer: int) -> bool:
    status = message.get("status", 200)
    if method == "HEAD" or status < 200 or status in _NO_BODY_STATUS:
        return False
    headers = Headers(raw=message.get("headers") or [])
    content_type = (headers.get("content-type") or "").split(";")[0].strip().lower()
    if content_type != "text/html" or "content-encoding" in headers:
        return False
    content_length = headers.get("content-length")
    if content_length is None:
        return True
    try:
        return int(content_length) <= max_buffer
    except ValueError:
        return False


class _ResponseAppender:
    """Wraps send: appends console fragments to the final chunk of an HTML response."""

    def __init__(
        self,
        context: ConsoleContext,
        send: Send,
        *,
        method: str,
        max_buffer: int = MAX_BUFFERED_BODY,
    ) -> None:
        self.context = context
        self._send = send
        self._method = method
        self._max_buffer = max_buffer
        self._status = 200
        self._rewriting = False
        self._start: Message | None = None  # held only for fixed-length bodies
        self._body: list[bytes] = []
        self._buffered = 0
        self._final: bytes | None = None  # held last chunk of a 5xx response

    async def send(self, message: Message) -> None:
        message_type = message["type"]
        if message_type == "http.response.start":
            await self._on_start(message)
            return
        if message_type == "http.response.body" and self._rewriting:
            await self._on_body(message)
            return
        if self._rewriting:
            await self._stop_rewriting()
        await self._send(message)

    async def _on_start(self, message: Message) -> None:
        self._status = message.get("status", 200)
        if not self.context.enabled or not _is_rewritable(
            message, method=self._method, max_buffer=self._max_buffer
        ):
            if self.context.enabled:
                _LOG.debug(
                    "Response on %s %s not rewritable; console output dropped",
                    self.context.method,
                    self.context.path,
                )
            await self._send(message)
            return
        self._rewriting = True
        if "content-length" in Headers(raw=message.get("headers") or []):
            self._start = message
            return
        await self._send(message)

    async def _on_body(self, message: Message) -> None:
        body = message.get("body", b"")
        more_body = message.get("more_body", False)

        if self._start is None:
            # Streamed: forward every chunk except the last one as it arrives.
            if more_body:
                await self._send(message)
                return
        else:
            self._body.append(body)
            self._buffered += len(body)
            if self._buffered > self._max_buffer:
                await self._stop_rewriting()
                if not more_body:
                    await self._send({"type": "http.response.body", "body": b"", "more_body": False})
                return
            if more_body:
                return
            body = b"".join(self._body)
            self._body.clear()

        if self._status >= 500:
            self._final = body
            return
        await self._finish(body)

    async def _finish(self, body: bytes) -> None:
        self._rewriting = False
        self._final = None
        body += self.context.drain().encode("utf-8")
        self.context.close()
        if self._start is not None:
            headers = MutableHeaders(scope=self._start)
            headers["content-length"] = str(len(body))
            await self._send(self._start)
            self._start = None
        await self._send({"type": "http.response.body", "body": body, "more_body": False})

    async def _stop_rewriting(self) -> None:
        """Forward whatever is held unchanged and pass the rest through."""
        if self._final is not None:
            await self._finish(self._final)
            return
        self._rewriting = False
        _LOG.debug(
            "Stopped rewriting response on %s %s; console output dropped",
            self.context.method,
            self.context.path,
        )
        self.context.close()
        if self._start is not None:
            await self._send(self._start)
            self._start = None
        if self._body:
            body = b"".join(self._body)
            self._body.clear()
            await self._send({"type": "http.response.body", "body": body, "more_body": True})

    async def release(self) -> None:
        """Once the app has returned or raised: send a held 5xx final chunk, or
        forward a response the app left unfinished as it stands."""
        if self._final is not None:
            await self._finish(self._final)
        elif self._rewriting:
            await self._stop_rewriting()


class ConsoleOutputMiddleware:
    def __init__(
        self,
        app: ASGIApp,
        *,
        hook: ConsoleOutputHook | None = None,
        settings: Any = None,
        max_buffer: int = MAX_BUFFERED_BODY,
    ) -> None:
        self.app = app
        if hook is None:
            if settings is None:
                from console_output.core.config import settings as default_settings

                settings = default_settings
            hook = ConsoleOutputHook(settings)
        self.hook = hook
        self.max_buffer = max_buffer

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "")
        context = ConsoleContext(path=scope.get("path", ""), method=method)
        scope.setdefault("state", {})[STATE_KEY] = context
        self.hook.on_request_start(context)

        appender = _ResponseAppender(
            context, send, method=method, max_buffer=self.max_buffer
        )
        try:
            await self.app(scope, receive, appender.send)
        except Exception as exc:
            self.hook.on_unhandled_error(context, exc)
            try:
                await appender.release()
            except Exception as e:
                _LOG.debug("Held response not released after error: %s", e)
            raise
        else:
            await appender.release()
        finally:
            context.close()
