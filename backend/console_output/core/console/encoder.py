"""
Script-safe encoding of diagnostic messages and rendering of console fragments.

- encode_js_string: JSON string literal with HTML-significant characters escaped,
  so the result can sit inside <script>...</script> without closing it.
- render_script: <script>console.<level>("...");</script>
"""

import json
from typing import Any

CONSOLE_LEVELS = frozenset({"info", "error", "log"})

# json.dumps leaves these alone; inside an HTML script element they can end the
# element (</script>), open a comment (<!--) or break a JS line (U+2028/9).
_SCRIPT_UNSAFE = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}

_UNPRINTABLE = "<unprintable value>"


def to_text(value: Any) -> str:
    """str(value) with None as "" and never raising."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    try:
        return str(value)
    except Exception:
        pass
    try:
        return repr(value)
    except Exception:
        return _UNPRINTABLE


def encode_js_string(value: Any) -> str:
    """
    Return the body of a double-quoted JS string literal (without the quotes).

    Quotes, backslashes and control characters are escaped by json.dumps;
    characters in _SCRIPT_UNSAFE are replaced by \\uXXXX escapes.
    Lone surrogates are kept as escapes so the output is always valid UTF-8.
    """
    text = to_text(value)
    literal = json.dumps(text, ensure_ascii=False)
    try:
        literal.encode("utf-8")
    except UnicodeEncodeError:
        literal = json.dumps(text, ensure_ascii=True)
    if any(ch in literal for ch in _SCRIPT_UNSAFE):
        literal = "".join(_SCRIPT_UNSAFE.get(ch, ch) for ch in literal)
    return literal[1:-1]


def render_script(level: str, message: Any) -> str:
    """Build <script>console.<level>("<escaped>");</script>. Unknown levels fall back to log."""
    if level not in CONSOLE_LEVELS:
        level = "log"
    return f'<script>console.{level}("{encode_js_string(message)}");</script>'
