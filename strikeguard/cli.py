"""Strikeguard CLI: moderate content and inspect account standing."""

from __future__ import annotations

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from strikeguard import __version__
from strikeguard.config import Settings, get_guidelines, load_settings
from strikeguard.errors import ContentTooLargeError, StrikeguardError
from strikeguard.log import configure_logging

console = Console()

LEVEL_STYLES = {"none": "green", "low": "cyan", "medium": "yellow", "high": "red"}
STANDING_STYLES = {"Good Standing": "green", "Warning": "cyan", "Serious": "yellow", "Critical": "red"}


@click.group()
@click.version_option(version=__version__)
@click.option("--settings", "settings_path", default=None, help="Path to a settings YAML file")
@click.option("--data-dir", default=None, help="Directory holding user records and audit logs")
@click.pass_context
def main(ctx: click.Context, settings_path: str | None, data_dir: str | None):
    """Strikeguard: content moderation and strike escalation.

    Scans user content against the rule catalog, adds weighted strikes
    for high-severity violations and escalates accounts through warning,
    restriction and suspension.
    """
    settings = load_settings(settings_path, data_dir=data_dir)
    configure_logging(settings.log_level)
    ctx.obj = settings


def _engine(settings: Settings):
    from strikeguard.moderation.engine import ModerationEngine
    from strikeguard.security.audit_log import AuditLogger
    from strikeguard.store.json_store import JsonFileUserStore

    store = JsonFileUserStore(settings.users_dir)
    return ModerationEngine(store, settings=settings, audit=AuditLogger(settings.audit_dir))


# ── Scan ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("user_id")
@click.argument("content")
@click.option("--dry-run", is_flag=True, help="Show the decision without recording it")
@click.pass_obj
def scan(settings: Settings, user_id: str, content: str, dry_run: bool):
    """Moderate CONTENT submitted by USER_ID."""
    try:
        engine = _engine(settings)
        result = engine.preview(content, user_id) if dry_run else engine.moderate(content, user_id)
    except ContentTooLargeError as e:
        console.print(f"[red]Content rejected:[/] {e}")
        raise SystemExit(1)
    except StrikeguardError as e:
        console.print("[red]Content could not be verified, please retry.[/]")
        console.print(f"  [dim]{e}[/]")
        raise SystemExit(1)

    level = result.warning_level.value
    console.print(f"\n[bold blue]Strikeguard[/] — {'Preview' if dry_run else 'Moderated'} content from {user_id}\n")
    console.print(f"  Warning level: [{LEVEL_STYLES[level]}]{level}[/]")
    for description in result.descriptions:
        console.print(f"  [yellow]![/] {description}")
    if result.strike_added:
        console.print(f"  Strike: +{result.strike_weight:g} (total {result.total_strikes:g})")
        console.print(f"  Action: [bold]{result.action_taken.value}[/]")
    console.print(f"\n  {'[green]Approved[/]' if result.is_approved else '[red]Blocked[/]'}")


# ── Status ───────────────────────────────────────────────────────────


@main.command()
@click.argument("user_id")
@click.pass_obj
def status(settings: Settings, user_id: str):
    """Show strike total, flags and history for USER_ID."""
    from strikeguard.moderation.escalation import POINTS_SCALE, standing_for

    try:
        record = _engine(settings).status(user_id)
    except StrikeguardError as e:
        console.print(f"[red]Cannot read account:[/] {e}")
        raise SystemExit(1)
    standing = standing_for(record.strikes, settings.thresholds)

    flags = []
    if record.suspended:
        flags.append("[red]Account Suspended[/]")
    if record.restricted:
        flags.append("[yellow]Features Restricted[/]")
    body = (
        f"Strike points: {record.strikes:g} / {POINTS_SCALE}\n"
        f"Standing: [{STANDING_STYLES[standing]}]{standing}[/]\n"
        f"Last action: {record.last_action_taken.value}"
        + (f" ({record.last_action_date})" if record.last_action_date else "")
    )
    if flags:
        body += "\n" + "  ".join(flags)
    console.print(Panel(body, title=f"User {user_id}"))

    if not record.strike_history and not record.warning_history:
        console.print("[green]No strikes or warnings have been issued to this account.[/]")
        return

    if record.strike_history:
        table = Table(title=f"Strikes ({len(record.strike_history)})")
        table.add_column("When", style="dim")
        table.add_column("Points", justify="right", style="red")
        table.add_column("Violations")
        table.add_column("Content")
        for strike in reversed(record.strike_history):
            table.add_row(strike.timestamp, f"{strike.count:g}", "; ".join(strike.violations), strike.content[:60])
        console.print(table)

    if record.warning_history:
        table = Table(title=f"Warnings ({len(record.warning_history)})")
        table.add_column("When", style="dim")
        table.add_column("Level")
        table.add_column("Violations")
        for warning in reversed(record.warning_history):
            table.add_row(
                warning.timestamp,
                f"[{LEVEL_STYLES.get(warning.level, 'white')}]{warning.level}[/]",
                "; ".join(warning.violations),
            )
        console.print(table)


# ── Sweep ────────────────────────────────────────────────────────────


@main.command()
@click.argument("user_id")
@click.pass_obj
def sweep(settings: Settings, user_id: str):
    """Lift expired restrictions and suspensions for USER_ID."""
    try:
        outcome = _engine(settings).sweep(user_id)
    except StrikeguardError as e:
        console.print(f"[red]Sweep failed:[/] {e}")
        raise SystemExit(1)
    if not outcome.changed:
        console.print("[dim]Nothing to lift.[/]")
        return
    if outcome.lifted_restriction:
        console.print("[green]v[/] Restriction lifted")
    if outcome.lifted_suspension:
        console.print("[green]v[/] Suspension lifted")


# ── Catalog & policy ─────────────────────────────────────────────────


@main.command()
@click.option("--catalog", "catalog_path", default=None, help="YAML catalog to show instead of the built-in one")
@click.pass_obj
def rules(settings: Settings, catalog_path: str | None):
    """List the detection rule catalog."""
    from strikeguard.catalog import default_catalog, load_catalog

    path = catalog_path or settings.catalog_path
    try:
        catalog = load_catalog(path) if path else default_catalog()
    except StrikeguardError as e:
        console.print(f"[red]Failed to load catalog:[/] {e}")
        raise SystemExit(1)

    table = Table(title=f"Rule catalog '{catalog.name}' v{catalog.version}")
    table.add_column("Category", style="cyan")
    table.add_column("Severity")
    table.add_column("Weight", justify="right")
    table.add_column("Level")
    table.add_column("Rules", justify="right")
    for r in catalog.rules:
        table.add_row(
            r.category.value,
            r.severity.value,
            f"{r.weight:g}",
            r.level.value if not r.escalated_level else f"{r.level.value} / {r.escalated_level.value} at {r.escalate_at}+",
            str(len(r.patterns) or len(r.words)),
        )
    console.print(table)


@main.command()
def guidelines():
    """Print the community guidelines and strike policy."""
    g = get_guidelines()
    console.print(f"\n[bold]{g['title']}[/]\n")
    for rule in g["rules"]:
        console.print(f"  - {rule}")
    console.print("\n[bold]Strike points[/]")
    for line in g["strike_points"].values():
        console.print(f"  - {line}")
    console.print("\n[bold]Consequences[/]")
    for line in g["consequences"]:
        console.print(f"  - {line}")
    console.print(f"\n{g['appeals']}")


@main.command()
@click.argument("total", type=float)
@click.pass_obj
def tier(settings: Settings, total: float):
    """Show the action tier for a cumulative strike TOTAL."""
    from strikeguard.moderation.escalation import standing_for, tier_for

    console.print(f"{tier_for(total, settings.thresholds).value} ({standing_for(total, settings.thresholds)})")


# ── Audit ────────────────────────────────────────────────────────────


@main.command()
@click.option("--user", "user_id", default=None, help="Only events for this user")
@click.option("--action", default=None, type=click.Choice(["moderation.strike", "moderation.warning", "moderation.sweep"]))
@click.option("--format", "fmt", default="table", type=click.Choice(["table", "json", "csv"]))
@click.option("--limit", default=50, show_default=True)
@click.pass_obj
def audit(settings: Settings, user_id: str | None, action: str | None, fmt: str, limit: int):
    """Show recorded moderation events."""
    from strikeguard.security.audit_log import AuditLogger

    audit_log = AuditLogger(settings.audit_dir)
    try:
        if fmt != "table":
            click.echo(audit_log.export(fmt, user_id=user_id, action=action, limit=limit))
            return
        events = audit_log.events(user_id=user_id, action=action, limit=limit)
    except StrikeguardError as e:
        console.print(f"[red]Cannot read audit log:[/] {e}")
        raise SystemExit(1)

    if not events:
        console.print("[yellow]No audit events found.[/]")
        return
    table = Table(title=f"Audit events ({len(events)})")
    table.add_column("When", style="dim")
    table.add_column("Action", style="cyan")
    table.add_column("User")
    table.add_column("Details")
    for e in events:
        summary = ", ".join(f"{k}={v}" for k, v in e.details.items() if k in ("warning_level", "strike_weight", "action_taken", "lifted_restriction", "lifted_suspension"))
        table.add_row(e.timestamp, e.action, e.user_id, summary)
    console.print(table)


if __name__ == "__main__":
    main()
