"""Operation-specific Rich renderers for ServiceResult and fixture plans.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Result renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from fixturectl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from fixturectl.domain.plan import FixturePlan
    from fixturectl.services.result import ServiceResult


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
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    fixtures = result.data.get("fixtures")
    if isinstance(fixtures, list) and fixtures:
        return "\n".join(str(f) for f in fixtures)
    status = result.data.get("status")
    if status:
        return f"OK: {result.op} ({status})"
    return f"OK: {result.op}"


def render_plan(plan: FixturePlan) -> str:
    """The listing shown right before the confirmation question."""
    console = create_console()
    verb = _verb(plan)
    _namespace_block(console, plan.namespace)
    if plan.global_fixtures:
        _heading(console, "Global fixtures will be used:")
        _output_list(console, plan.global_fixtures, style="fx.global")
    if plan.fixtures:
        _heading(console, f"Fixtures below will be {verb}ed:")
        _output_list(console, plan.fixtures)
    if plan.excluded:
        _heading(console, f"Fixtures that will NOT be {verb}ed:")
        _output_list(console, plan.excluded)
    return get_output(console).rstrip("\n")


def render_not_found(plan: FixturePlan) -> str:
    console = create_console()
    console.print(Text("Some fixtures were not found under path:", style="fx.warning"))
    console.print(Text(f"    {plan.namespace_dir}", style="fx.path"))
    console.print(
        Text(f'Check that they have correct namespace "{plan.namespace}"', style="fx.warning")
    )
    _output_list(console, plan.not_found)
    return get_output(console).rstrip("\n")


def render_unresolved(plan: FixturePlan) -> str:
    console = create_console()
    console.print(
        Text("These fixtures have no loadable definition and will be skipped:", style="fx.warning")
    )
    _output_list(console, plan.unresolved)
    return get_output(console).rstrip("\n")


def render_nothing_to_process(plan: FixturePlan, found: list[str]) -> str:
    console = create_console()
    verb = _verb(plan)
    console.print(
        Text(
            f"Fixtures to {verb} could not be found according to given conditions.",
            style="fx.error",
        )
    )
    _namespace_block(console, plan.namespace)
    if found:
        _heading(console, "Fixtures found under the namespace:")
        _output_list(console, found)
    if plan.excluded:
        _heading(console, f"Fixtures that will NOT be {verb}ed:")
        _output_list(console, plan.excluded)
    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _verb(plan: FixturePlan) -> str:
    return str(plan.action)


def _heading(console: Console, text: str) -> None:
    console.print()
    console.print(Text(text, style="fx.heading"))


def _namespace_block(console: Console, namespace: str) -> None:
    console.print(Text("Fixtures namespace is:", style="fx.heading"))
    console.print(Text(f"    {namespace}", style="fx.namespace"))


def _output_list(console: Console, items: list[str], *, style: str = "fx.item") -> None:
    for index, item in enumerate(items, start=1):
        console.print(Text(f"    {index}. {item}", style=style))


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="fx.ok")
    op = Text(f"  {result.op}", style="fx.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="fx.key")
    if isinstance(value, (dict, list)):
        v = Text(_json.dumps(value, separators=(",", ":")))
    elif key == "path" or key.endswith("_dir"):
        v = Text(str(value), style="fx.path")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


# ── Op renderers ──────────────────────────────────────────────────────


def _render_lifecycle(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render load/unload results, including notices."""
    data = result.data
    status = data.get("status")
    if status in ("loaded", "unloaded"):
        console.print(
            Text(f"Fixtures were successfully {status} from namespace:", style="fx.heading")
        )
        console.print(Text(f'    "{data.get("namespace", "")}"', style="fx.namespace"))
        console.print()
        _output_list(console, data.get("fixtures", []))
        if verbose:
            console.print()
            for step in data.get("steps", []):
                console.print(Text(f"    {step['action']:<7} {step['identifier']}", style="dim"))
    elif status == "declined":
        console.print(Text(f"Cancelled. No fixtures were {result.op}ed.", style="fx.notice"))
    elif status == "nothing_to_process":
        console.print(Text(f"Nothing to {result.op}.", style="fx.notice"))
    else:
        _render_generic(result, console, verbose=verbose)
        return
    if verbose:
        _render_meta(console, result)


def _render_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    items: list[dict[str, Any]] = data.get("items", [])
    _namespace_block(console, str(data.get("namespace", "")))
    if not items:
        console.print()
        console.print(Text("No fixtures found.", style="fx.notice"))
        return
    console.print()
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Name", style="fx.item", no_wrap=True)
    table.add_column("Identifier")
    table.add_column("Loadable")
    if verbose:
        table.add_column("Path", style="fx.path")
    for item in items:
        row = [
            str(item.get("name", "")),
            str(item.get("identifier", "")),
            "yes" if item.get("loadable") else "no",
        ]
        if verbose:
            row.append(str(item.get("path", "")))
        table.add_row(*row)
    console.print(table)
    globals_ = data.get("global_fixtures") or []
    if globals_:
        _heading(console, "Global fixtures:")
        _output_list(console, globals_, style="fx.global")


def _render_upload(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("key", "path", "team", "uploaded_by"):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _field(console, "uploaded_at", result.data.get("uploaded_at", ""))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="fx.error")
    op = Text(f"  {result.op}", style="fx.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)
    if verbose and err and err.detail:
        for key, value in err.detail.items():
            _field(console, key, value)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "load": _render_lifecycle,
    "unload": _render_lifecycle,
    "list": _render_list,
    "upload": _render_upload,
}
