"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from cpdeploy.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from cpdeploy.services.result import ServiceResult


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


# Ops whose quiet output is a single data value instead of ``OK: op``.
_QUIET_KEYS: dict[str, str] = {
    "validate_domain": "domain",
    "derive_identifier": "site_user",
    "deploy_site": "url",
}


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    key = _QUIET_KEYS.get(result.op)
    if key and key in result.data:
        return str(result.data[key])

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item.get("version", "")) for item in items if isinstance(item, dict))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="cp.ok")
    op = Text(f"  {result.op}", style="cp.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="cp.key")
    if key == "domain" or key == "url":
        v = Text(str(value), style="cp.domain")
    elif key.endswith("path") or key == "document_root":
        v = Text(str(value), style="cp.path")
    elif key in ("status", "certificate"):
        v = Text(str(value), style=style_for_status(str(value)))
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = Text(prefix)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {name}")

    if span_data.get("annotations"):
        extras = [f"{ak}={av}" for ak, av in span_data["annotations"].items()]
        line.append(f"  ({', '.join(extras)})")

    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _records_table(records: list[dict[str, str]]) -> Table:
    """Build a table of DNS records the operator should create."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Type", no_wrap=True)
    table.add_column("Name", style="cp.domain")
    table.add_column("Value")
    for record in records:
        table.add_row(record.get("type", ""), record.get("name", ""), record.get("value", ""))
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="cp.error")
    op = Text(f"  {result.op}", style="cp.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if err is None:
        return

    # Control-plane output and DNS records are shown even without --verbose.
    output = err.detail.get("output")
    if output:
        console.print(Text(f"  {output}", style="dim"))
    records = err.detail.get("records")
    if records:
        if err.detail.get("domain_ip"):
            _field(console, "domain_ip", err.detail["domain_ip"])
        console.print()
        console.print("  Add these DNS records (only the A record is required):")
        console.print(_records_table(records))

    if verbose and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            if k in ("output", "records"):
                continue
            console.print(Text(f"    {k}: {v}"))


# ── Domain renderers ──────────────────────────────────────────────────


def _render_identifier(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("domain", "site_user", "database_name", "database_user"):
        _field(console, key, result.data[key])
    if verbose:
        _field(console, "subdomain", result.data.get("subdomain", ""))
        _field(console, "main_domain", result.data.get("main_domain", ""))
        _render_meta(console, result)


# ── Environment renderers ─────────────────────────────────────────────


def _render_php_versions(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    latest = result.data.get("latest")
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right")
    table.add_column("PHP")
    for item in result.data.get("items", []):
        version = str(item.get("version", ""))
        suffix = " (latest)" if version == latest else ""
        table.add_row(str(item.get("index", "")), f"PHP {version}{suffix}")
    console.print(table)
    console.print(f"\n{result.data.get('count', 0)} versions")
    if verbose:
        _render_meta(console, result)


def _render_templates(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "builtin", ", ".join(result.data.get("builtin", [])))
    listing = result.data.get("listing", "")
    if listing:
        console.print()
        console.print(listing, markup=False)
    if verbose:
        _render_meta(console, result)


# ── DNS and site renderers ────────────────────────────────────────────


def _render_dns(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("domain", "status", "domain_ip", "server_ipv4", "server_ipv6"):
        value = result.data.get(key)
        if value:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


def _render_site_exists(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "domain", d["domain"])
    _field(console, "site_user", d["site_user"])
    _field(console, "exists", "yes" if d.get("exists") else "no")
    if d.get("listed"):
        _field(console, "listed", "clpctl site:list")
    for path in d.get("artifacts", []):
        _field(console, "artifact_path", path)
    if verbose:
        _render_meta(console, result)


def _render_deploy(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the finished deployment as a credentials panel."""
    d = result.data
    creds = d.get("credentials", {})
    lines = [
        f"IP Address IPv4: {creds.get('server_ipv4') or ''}",
        f"IP Address IPv6: {creds.get('server_ipv6') or ''}",
        f"Domain Name: {d['url']}",
        f"Site User: {d['site_user']}",
        f"Password: [cp.secret]{creds.get('site_password', '')}[/cp.secret]",
        "",
        f"Database Host: {creds.get('database_host', '')}",
        f"Database Port: {creds.get('database_port', '')}",
        f"Database Name: {d['database_name']}",
        f"Database User Name: {d['database_user']}",
        f"Database User Password: [cp.secret]{creds.get('database_password', '')}[/cp.secret]",
        "",
        f"Installation Date: {creds.get('installed_at', '')}",
        f"Document Root: {d['document_root']}",
    ]
    _status_line(console, result)
    _field(console, "php_version", d.get("php_version", ""))
    _field(console, "vhost_template", d.get("vhost_template", ""))
    _field(console, "certificate", d.get("certificate", ""))
    console.print()
    console.print(Panel("\n".join(lines), title="Site Credentials", expand=False))
    _field(console, "credentials_path", d["credentials_path"])
    console.print(f"\nYour site is ready at: {d['url']}")
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            import json as _json

            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Domain
    "validate_domain": _render_generic,
    "derive_identifier": _render_identifier,
    # Environment
    "preflight": _render_generic,
    "php_versions": _render_php_versions,
    "vhost_templates": _render_templates,
    "check_template": _render_generic,
    # DNS
    "dns_check": _render_dns,
    # Site
    "site_exists": _render_site_exists,
    "delete_site": _render_generic,
    "deploy_site": _render_deploy,
}
