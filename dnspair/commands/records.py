"""Record management commands."""

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dnspair.config import load_config, load_env_settings
from dnspair.errors import DnspairError
from dnspair.listing import RecordPages
from dnspair.providers.dns.base import ZoneProvider
from dnspair.sync.models import ChangeRequest, Operation, RecordType
from dnspair.sync.orchestrator import ChangeOrchestrator, build_orchestrator
from dnspair.sync.resolver import ZoneResolver

console = Console()


def get_zone_provider(profile: str | None = None) -> ZoneProvider:
    """Get the Route 53 provider for the selected AWS profile."""
    from dnspair.providers.dns import Route53Provider

    settings = load_env_settings()
    return Route53Provider(
        profile=profile or settings.aws_profile,
        region=settings.aws_region,
    )


def fqdn(name: str) -> str:
    """Return ``name`` with a trailing dot, the form Route 53 stores."""
    return name if name.endswith(".") else f"{name}."


def _options(ctx: typer.Context) -> dict:
    return ctx.obj or {}


def _get_orchestrator(ctx: typer.Context) -> ChangeOrchestrator:
    options = _options(ctx)

    try:
        config = load_config(options.get("conf"))
    except FileNotFoundError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(1)
    except (yaml.YAMLError, ValidationError) as e:
        console.print(f"[red]✗[/red] Invalid configuration: {escape(str(e))}")
        raise typer.Exit(1)

    provider = get_zone_provider(options.get("profile"))
    try:
        return build_orchestrator(
            provider, config.reverse_zones, dry_run=options.get("dry_run", False)
        )
    except DnspairError as e:
        console.print(f"[red]✗[/red] Failed to load reverse zones: {escape(str(e))}")
        raise typer.Exit(1)


def _run(ctx: typer.Context, request: ChangeRequest) -> None:
    orchestrator = _get_orchestrator(ctx)
    outcome = orchestrator.apply(request)

    if outcome.ok:
        return

    console.print(f"[red]✗[/red] {escape(str(outcome.error))}")
    if outcome.compensated:
        console.print("[yellow]![/yellow] Forward record change was rolled back")
    elif outcome.compensated is False:
        console.print(
            "[red]✗[/red] Rollback failed: forward and reverse records may be inconsistent"
        )
    raise typer.Exit(1)


def add(
    ctx: typer.Context,
    hostname: str = typer.Option(..., "--hostname", "-H", help="Hostname"),
    zone: str = typer.Option(..., "--zone", "-z", help="Hosted zone name"),
    ip: str | None = typer.Option(None, "--ip", "-i", help="IP address (A record)"),
    cname: str | None = typer.Option(None, "--cname", "-c", help="CNAME target"),
) -> None:
    """Add an A record with its PTR record, or a CNAME record."""
    if bool(ip) == bool(cname):
        console.print("[red]✗[/red] choose ip or cname")
        raise typer.Exit(1)

    try:
        request = ChangeRequest(
            operation=Operation.ADD,
            record_kind=RecordType.A if ip else RecordType.CNAME,
            hostname=fqdn(hostname),
            zone_name=zone,
            ip=ip,
            cname=fqdn(cname) if cname else None,
        )
    except ValidationError as e:
        console.print(f"[red]✗[/red] Invalid request: {e.errors()[0]['msg']}")
        raise typer.Exit(1)

    _run(ctx, request)

    if _options(ctx).get("dry_run"):
        console.print(f"[yellow]![/yellow] Dry run: nothing was added for {request.hostname}")
        return

    target = request.ip or request.cname
    console.print(f"[green]✓[/green] {request.record_kind.value} record added: {request.hostname} → {target}")
    if request.record_kind == RecordType.A:
        console.print(f"[green]✓[/green] PTR record added for {request.ip}")


def delete(
    ctx: typer.Context,
    hostname: str = typer.Option(..., "--hostname", "-H", help="Hostname"),
    zone: str = typer.Option(..., "--zone", "-z", help="Hosted zone name"),
    record_type: RecordType | None = typer.Option(
        None, "--type", "-t", help="Only delete if the record is of this type"
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Delete a record, and its PTR record for A records."""
    try:
        request = ChangeRequest(
            operation=Operation.REMOVE,
            record_kind=record_type,
            hostname=fqdn(hostname),
            zone_name=zone,
        )
    except ValidationError as e:
        console.print(f"[red]✗[/red] Invalid request: {e.errors()[0]['msg']}")
        raise typer.Exit(1)

    if not force:
        confirm = typer.confirm(f"Delete DNS records for {request.hostname}?")
        if not confirm:
            raise typer.Abort()

    _run(ctx, request)

    if _options(ctx).get("dry_run"):
        console.print(f"[yellow]![/yellow] Dry run: nothing was deleted for {request.hostname}")
        return

    console.print(f"[green]✓[/green] Records deleted: {request.hostname}")


def list_records(
    ctx: typer.Context,
    zone: str = typer.Option(..., "--zone", "-z", help="Hosted zone name"),
) -> None:
    """List all records in a hosted zone."""
    provider = get_zone_provider(_options(ctx).get("profile"))

    try:
        zone_id = ZoneResolver(provider).resolve(zone)

        table = Table()
        table.add_column("Type")
        table.add_column("Name")
        table.add_column("Value")
        table.add_column("TTL")

        for record in RecordPages(provider, zone_id).records():
            values = "\n".join(record.values) or record.value
            ttl = "-" if record.ttl is None else str(record.ttl)
            table.add_row(record.type, record.name, values, ttl)
    except DnspairError as e:
        console.print(f"[red]✗[/red] Failed to list records: {escape(str(e))}")
        raise typer.Exit(1)

    console.print(table)
