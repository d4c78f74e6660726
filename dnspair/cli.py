"""CLI entry point for dnspair."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from dnspair import __version__
from dnspair.commands import records

app = typer.Typer(
    name="dnspair",
    help="Manage Route 53 A/CNAME records together with their PTR records.",
    no_args_is_help=True,
)
console = Console()

app.command("add")(records.add)
app.command("delete")(records.delete)
app.command("list")(records.list_records)
app.command("a", hidden=True)(records.add)
app.command("del", hidden=True)(records.delete)
app.command("l", hidden=True)(records.list_records)


@app.command()
def version() -> None:
    """Show the dnspair version."""
    console.print(f"dnspair v{__version__}")


def setup_logging(verbose: bool = False, dry_run: bool = False) -> None:
    """Send log records to stderr through rich."""
    if verbose:
        level = logging.DEBUG
    elif dry_run:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    profile: str | None = typer.Option(None, "--profile", help="AWS profile"),
    conf: Path | None = typer.Option(None, "--conf", help="Path to config file"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Log changes without submitting them"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """dnspair - keep forward and reverse DNS records in step."""
    setup_logging(verbose=verbose, dry_run=dry_run)
    ctx.obj = {
        "profile": profile,
        "conf": conf,
        "dry_run": dry_run,
    }


if __name__ == "__main__":
    app()
