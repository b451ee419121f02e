"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from shapecheck.output.console import create_console, get_output

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from shapecheck.services.result import ServiceResult

ROOT_LOCATION = "(root)"


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: one line per violation."""
    violations = result.data.get("violations") or []
    if violations:
        return "\n".join(_violation_line(v) for v in violations)
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _violation_line(violation: dict[str, Any]) -> str:
    location = violation.get("location") or ROOT_LOCATION
    return f"{location}: {violation.get('message', '')}"


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="sc.ok")
    op = Text(f"  {result.op}", style="sc.op")
    console.print(label, op, sep="", end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="sc.key")
    console.print(k, Text(str(value)), sep="", end="")
    console.print()


def _violation_table(violations: list[dict[str, Any]]) -> Table:
    """Build a Rich Table listing violations in reported order."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Location", style="sc.location", no_wrap=True)
    table.add_column("Violation")
    for violation in violations:
        table.add_row(
            escape(violation.get("location") or ROOT_LOCATION),
            escape(str(violation.get("message", ""))),
        )
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="sc.error")
    op = Text(f"  {result.op}", style="sc.op")
    dash = Text(" — ")
    console.print(label, op, dash, escape(msg), sep="")

    violations = result.data.get("violations") or []
    if violations:
        console.print(_violation_table(violations))

    if verbose and err and err.detail:
        for key, value in err.detail.items():
            _field(console, key, value)


# ── Success renderers ─────────────────────────────────────────────────


def _render_validation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a passing validate/check result."""
    _status_line(console, result)
    _field(console, "schema", result.data.get("schema", ""))
    if "document" in result.data:
        _field(console, "document", result.data["document"])
    if verbose and "deep" in result.data:
        _field(console, "deep", result.data["deep"])


def _render_patterns(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the named-pattern table."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Name", style="bold", no_wrap=True)
    table.add_column("Pattern", style="sc.pattern")
    for name, source in result.data.get("patterns", {}).items():
        table.add_row(escape(name), escape(source))
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "validate": _render_validation,
    "check": _render_validation,
    "patterns": _render_patterns,
}
