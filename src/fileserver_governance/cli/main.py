"""CLI entry point for fileserver-governance.

Invoked as::

    fileserver-gov [OPTIONS] COMMAND [ARGS]...

or during development::

    python -m fileserver_governance.cli.main

Commands
--------
- check          Resolve read/write access for a role set and a path
- filters list   Show the configured access filters
- audit show     Query the audit log
- audit export   Export audit records to CSV or JSON
- version        Show version information
"""
from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

import click
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fileserver_governance.access.policy import RoleId
from fileserver_governance.audit.query import AuditQuery
from fileserver_governance.audit.store import AuditStore
from fileserver_governance.config import (
    ConfigLoader,
    FileServerConfig,
    build_access_resolver,
    build_audit_store,
)
from fileserver_governance.errors import FileServerGovernanceError

console = Console()
err_console = Console(stderr=True)

_DEFAULT_CONFIG = Path("fileserver.yaml")


def _load_config(config_path: str) -> FileServerConfig:
    loader = ConfigLoader()
    cfg_path = Path(config_path)
    try:
        return loader.load(cfg_path) if cfg_path.exists() else loader.defaults()
    except FileServerGovernanceError as exc:
        err_console.print(f"[red]Invalid config:[/red] {exc}")
        sys.exit(2)


def _offline_audit_store(config: FileServerConfig) -> AuditStore:
    # An in-memory store lives inside the server process; a fresh one is always empty.
    if config.audit.store != "file":
        err_console.print(
            "[red]Audit log not available:[/red] only the 'file' audit store can be "
            "read offline; set audit.store to 'file' in the config."
        )
        sys.exit(1)
    return build_audit_store(config)


def _config_option(func):  # type: ignore[no-untyped-def]
    return click.option(
        "--config",
        "-c",
        "config_path",
        default=str(_DEFAULT_CONFIG),
        show_default=True,
        type=click.Path(),
        help="Path to fileserver.yaml.",
    )(func)


# ---------------------------------------------------------------------------
# Root command group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="fileserver-governance")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """File server governance CLI — access checks and audit trail tools."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from fileserver_governance import __version__

    console.print(
        Panel(
            f"[bold]fileserver-governance[/bold]  v[cyan]{__version__}[/cyan]\n"
            "Access control and audit trail for a self-hosted file server.",
            title="Version",
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("path")
@click.option("--role", "-r", "roles", multiple=True, required=True, help="Role held by the caller.")
@_config_option
def check_command(path: str, roles: tuple[str, ...], config_path: str) -> None:
    """Resolve read and read+write access to PATH."""
    config = _load_config(config_path)
    resolver = build_access_resolver(config)
    decision = resolver.resolve({RoleId(r) for r in roles}, path)

    if decision.can_read_and_write:
        status_str = "[green]READ_WRITE[/green]"
    elif decision.can_read:
        status_str = "[yellow]READ[/yellow]"
    else:
        status_str = "[red]DENIED[/red]"

    console.print(Panel(status_str, title=f"Access to {path}", border_style="blue"))

    if decision.matched_policies:
        table = Table(title="Matched Filters", box=box.SIMPLE)
        table.add_column("Path", style="cyan")
        table.add_column("Access", style="magenta")
        table.add_column("Roles")
        for policy in decision.matched_policies:
            table.add_row(policy.path_pattern, policy.access_level.value, ", ".join(sorted(policy.roles)))
        console.print(table)

    sys.exit(0 if decision.can_read else 1)


# ---------------------------------------------------------------------------
# filters group
# ---------------------------------------------------------------------------


@cli.group(name="filters")
def filters_group() -> None:
    """Access filter commands."""


@filters_group.command(name="list")
@_config_option
def filters_list_command(config_path: str) -> None:
    """Show the configured access filters."""
    config = _load_config(config_path)
    if not config.filters:
        console.print("[yellow]No access filters configured; every path is denied.[/yellow]")
        return

    table = Table(title="Access Filters", box=box.SIMPLE)
    table.add_column("Path", style="cyan")
    table.add_column("Access", style="magenta")
    table.add_column("Roles")
    for policy in config.policies():
        table.add_row(policy.path_pattern, policy.access_level.value, ", ".join(sorted(policy.roles)))
    console.print(table)


# ---------------------------------------------------------------------------
# audit group
# ---------------------------------------------------------------------------


@cli.group(name="audit")
def audit_group() -> None:
    """Audit trail commands."""


@audit_group.command(name="show")
@click.option("--category", default=None, help="Exact category.")
@click.option("--action", default=None, help="Exact action.")
@click.option("--user", "user_id", default=None, help="Exact user id.")
@click.option("--resource", default=None, help="Glob pattern the resource must match.")
@click.option("--message", default=None, help="Regular expression the message must match.")
@click.option("--from", "from_ts", default=None, type=int, help="Inclusive start (epoch seconds).")
@click.option("--to", "to_ts", default=None, type=int, help="Inclusive end (epoch seconds).")
@click.option(
    "--last",
    "-n",
    default=20,
    show_default=True,
    type=click.IntRange(min=1),
    help="Maximum entries to show.",
)
@_config_option
def audit_show_command(
    category: str | None,
    action: str | None,
    user_id: str | None,
    resource: str | None,
    message: str | None,
    from_ts: int | None,
    to_ts: int | None,
    last: int,
    config_path: str,
) -> None:
    """Query the audit log."""
    config = _load_config(config_path)
    try:
        query = AuditQuery(
            from_ts=from_ts,
            to_ts=to_ts,
            category=category,
            action=action,
            user_id=user_id,
            resource_pattern=resource,
            message_pattern=message,
        )
        records = _offline_audit_store(config).query(query)
    except FileServerGovernanceError as exc:
        err_console.print(f"[red]Audit query failed:[/red] {exc}")
        sys.exit(1)

    if not records:
        console.print("[yellow]No audit entries found.[/yellow]")
        return

    shown = records[-last:] if last < len(records) else records
    table = Table(title=f"Audit Events ({len(shown)} of {len(records)})", box=box.SIMPLE)
    table.add_column("Timestamp", style="dim", no_wrap=True)
    table.add_column("Category", style="cyan")
    table.add_column("Action", style="magenta")
    table.add_column("User")
    table.add_column("Resource")
    table.add_column("Message")

    for record in shown:
        ts = datetime.fromtimestamp(record.timestamp, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        table.add_row(ts, record.category, record.action, record.user_id, record.resource, record.message)

    console.print(table)


@audit_group.command(name="export")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["csv", "json"]),
    default="csv",
    show_default=True,
    help="Export format.",
)
@click.option("--output", "-o", "output_file", required=True, type=click.Path(), help="Output file path.")
@_config_option
def audit_export_command(output_format: str, output_file: str, config_path: str) -> None:
    """Export audit data to CSV or JSON."""
    from fileserver_governance.audit.exporter import AuditExporter

    config = _load_config(config_path)
    exporter = AuditExporter(_offline_audit_store(config))
    out_path = Path(output_file)

    try:
        if output_format == "csv":
            count = exporter.to_csv(out_path)
        else:
            count = exporter.to_json(out_path)
    except FileServerGovernanceError as exc:
        err_console.print(f"[red]Export failed:[/red] {exc}")
        sys.exit(1)

    console.print(f"[green]Exported[/green] {count} records to [bold]{out_path}[/bold] ({output_format.upper()}).")


if __name__ == "__main__":
    cli()
