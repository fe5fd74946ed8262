"""Unit tests for console writer and context: log_info, log_error, log_variable."""

from console_output.core.console.context import ConsoleContext
from console_output.core.console.writer import log_error, log_info, log_variable


def _context(enabled: bool = True) -> ConsoleContext:
    ctx = ConsoleContext(path="/", method="GET")
    ctx.resolve(enabled)
    return ctx


# --- ConsoleContext ---


def test_context_starts_unresolved() -> None:
    ctx = ConsoleContext()
    assert ctx.resolved is False
    assert ctx.enabled is False


def test_context_resolve_stores_flag_under_config_key() -> None:
    ctx = _context(True)
    assert ctx.resolved is True
    assert ctx.state == {"EnableOutputToConsole": True}


def test_context_resolve_only_once() -> None:
    """The flag is not changed mid-request."""
    ctx = _context(True)
    ctx.resolve(False)
    assert ctx.enabled is True


def test_context_drain_clears() -> None:
    ctx = _context()
    log_info(ctx, "a")
    assert ctx.drain() == '<script>console.info("a");</script>'
    assert ctx.drain() == ""


# --- writer ---


def test_log_info_enabled() -> None:
    ctx = _context()
    log_info(ctx, "Button clicked")
    assert ctx.pending == ['<script>console.info("Button clicked");</script>']


def test_log_error_enabled() -> None:
    ctx = _context()
    log_error(ctx, "boom")
    assert ctx.pending == ['<script>console.error("boom");</script>']


def test_log_variable_enabled() -> None:
    ctx = _context()
    log_variable(ctx, "User", "livedcode")
    assert ctx.pending == ['<script>console.log("User: livedcode");</script>']


def test_log_variable_non_string_value() -> None:
    ctx = _context()
    log_variable(ctx, "count", 3)
    log_variable(ctx, "items", [1, "a"])
    assert ctx.pending == [
        '<script>console.log("count: 3");</script>',
        "<script>console.log(\"items: [1, 'a']\");</script>",
    ]


def test_log_variable_none_name_and_value() -> None:
    ctx = _context()
    log_variable(ctx, None, None)
    assert ctx.pending == ['<script>console.log(": ");</script>']


def test_log_none_message() -> None:
    ctx = _context()
    log_info(ctx, None)
    log_error(ctx, None)
    assert ctx.pending == [
        '<script>console.info("");</script>',
        '<script>console.error("");</script>',
    ]


def test_calls_appended_in_order() -> None:
    ctx = _context()
    log_info(ctx, "one")
    log_variable(ctx, "two", 2)
    log_error(ctx, "three")
    log_info(ctx, "one")
    assert ctx.pending == [
        '<script>console.info("one");</script>',
        '<script>console.log("two: 2");</script>',
        '<script>console.error("three");</script>',
        '<script>console.info("one");</script>',
    ]


def test_disabled_writes_nothing() -> None:
    ctx = _context(False)
    log_info(ctx, "a")
    log_error(ctx, "b")
    log_variable(ctx, "c", "d")
    assert ctx.pending == []


def test_unresolved_writes_nothing() -> None:
    ctx = ConsoleContext()
    log_info(ctx, "a")
    assert ctx.pending == []


def test_no_context_is_noop() -> None:
    log_info(None, "a")
    log_error(None, "b")
    log_variable(None, "c", object())


def test_closed_context_is_noop() -> None:
    ctx = _context()
    ctx.close()
    log_info(ctx, "late")
    assert ctx.pending == []


def test_attacker_content_stays_inside_script() -> None:
    ctx = _context()
    log_error(ctx, '"); alert(1); //</script><script>alert(2)</script>')
    (fragment,) = ctx.pending
    assert fragment.startswith('<script>console.error("')
    assert fragment.endswith('");</script>')
    assert fragment.count("</script>") == 1
    assert '\\"); alert(1);' in fragment


def test_package_exports() -> None:
    import console_output.core.console as console_pkg

    assert sorted(console_pkg.__all__) == [
        "ConsoleContext",
        "ConsoleOutputHook",
        "ConsoleOutputMiddleware",
        "encode_js_string",
        "log_error",
        "log_info",
        "log_variable",
        "render_script",
    ]
