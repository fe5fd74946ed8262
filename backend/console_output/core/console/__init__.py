"""
Console output: render server-side diagnostics as browser console calls.

encoder, context, writer (log_info, log_error, log_variable), hook, middleware.
"""

from console_output.core.console.context import ConsoleContext
from console_output.core.console.encoder import encode_js_string, render_script
from console_output.core.console.hook import ConsoleOutputHook
from console_output.core.console.middleware import ConsoleOutputMiddleware
from console_output.core.console.writer import log_error, log_info, log_variable

__all__ = [
    "ConsoleContext",
    "ConsoleOutputHook",
    "ConsoleOutputMiddleware",
    "encode_js_string",
    "log_error",
    "log_info",
    "log_variable",
    "render_script",
]
