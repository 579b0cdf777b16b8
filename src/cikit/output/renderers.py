"""Target-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers are
dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from cikit.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from cikit.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
        if verbose and result.meta:
            _render_meta(result.meta, console)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Targets producing artifacts list them one per line so the output can
    be piped into other tools.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} - {msg}"

    if result.op == "packages":
        return "\n".join(p["archive"] for p in result.data.get("packages", []))
    if result.op in ("docker_build", "docker_push") and result.data.get("images"):
        return "\n".join(result.data["images"])
    if result.op == "codecov":
        return str(result.data.get("url", ""))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult, note: str | None = None) -> None:
    line = Text("OK", style="ci.ok")
    line.append(f"  {result.op}", style="ci.op")
    if note:
        line.append(f"  ({note})", style="ci.skipped")
    console.print(line)


def _format_value(value: Any) -> str:
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return ", ".join(value) if value else "-"
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    if value is None:
        return "-"
    return str(value)


def _key_values(console: Console, data: dict[str, Any], *, skip: tuple[str, ...] = ()) -> None:
    for key, value in data.items():
        if key in skip:
            continue
        line = Text(f"  {key}: ", style="ci.key")
        line.append(_format_value(value))
        console.print(line)


def _render_meta(meta: dict[str, Any], console: Console) -> None:
    """Flatten one level of nesting: ``build.version: v1.0.0``."""
    flat: dict[str, Any] = {}
    for key, value in meta.items():
        if isinstance(value, dict):
            flat.update({f"{key}.{sub}": item for sub, item in value.items()})
        else:
            flat[key] = value
    _key_values(console, flat)


# ── Renderers ─────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _key_values(console, result.data)


def _render_packages(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Platform", style="ci.platform")
    table.add_column("Archive", style="ci.path")
    table.add_column("Binaries")
    for pkg in result.data.get("packages", []):
        table.add_row(pkg["platform"], pkg["archive"], ", ".join(pkg["binaries"]))
    console.print(table)
    _key_values(console, result.data, skip=("packages",))


def _render_images(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    if result.data.get("skipped"):
        _status_line(console, result, note=f"skipped on {result.data.get('branch')}")
        return
    _status_line(console, result)
    for image in result.data.get("images", []):
        console.print(Text(f"  {image}", style="ci.image"))
    _key_values(console, result.data, skip=("images", "skipped"))


def _render_tests(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    skip: tuple[str, ...] = () if verbose else ("packages",)
    _key_values(console, result.data, skip=skip)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    line = Text("ERROR", style="ci.error")
    line.append(f"  {result.op}", style="ci.op")
    msg = result.error.message if result.error else "Unknown error"
    line.append(f" - {msg}")
    console.print(line)
    if result.error is None:
        return

    detail = result.error.detail
    if detail.get("files"):
        for path in detail["files"]:
            console.print(Text(f"  M {path}", style="ci.warning"))
    if detail.get("diff"):
        console.print(Text(detail["diff"].rstrip("\n")))
    if verbose:
        _key_values(console, detail, skip=("files", "diff"))


_Renderer = Callable[..., None]

_OP_RENDERERS: dict[str, _Renderer] = {
    "packages": _render_packages,
    "docker_build": _render_images,
    "docker_push": _render_images,
    "test": _render_tests,
    "test_race": _render_tests,
    "test_coverage": _render_tests,
}
