"""PriceClock CLI.

Commands:
- check: Build an index from an offer file and show its summary
- query: Build an index from an offer file and look one price up
- web serve: Run the HTTP API
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from priceclock.catalog.holder import Catalog
from priceclock.core.logging import configure_logging
from priceclock.errors import ValidationFailed
from priceclock.ingestion.sources import iter_file_lines
from priceclock.models import Priced
from priceclock.service import PriceService, ReplaceResult

app = typer.Typer(
    name="priceclock",
    help="PriceClock - point-in-time price lookups over time-bounded offers",
    no_args_is_help=True,
)

web_cli = typer.Typer(help="Web API")
app.add_typer(web_cli, name="web")

console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show ingestion logs on stderr"),
):
    """PriceClock command line."""
    # Failures are already reported on the console; logs only when asked for
    configure_logging(level="INFO" if verbose else "ERROR", stream=sys.stderr)


def _load(file: Path) -> tuple[PriceService, ReplaceResult]:
    """Load an offer file into a private catalog."""
    if not file.exists():
        console.print(f"[red]✗[/red] File not found: {escape(str(file))}")
        raise typer.Exit(1)

    service = PriceService(catalog=Catalog())
    try:
        result = service.replace(iter_file_lines(file))
    except UnicodeDecodeError as e:
        console.print(f"[red]✗[/red] File must be UTF-8 text: {escape(str(e))}")
        raise typer.Exit(1)

    if not result.success:
        details = result.error_details or {}
        console.print(f"[red]✗[/red] {escape(result.message)}")
        if details.get("raw_line") is not None:
            console.print(f"    line {details['line_number']}: {details['raw_line']}", style="dim", markup=False)
        raise typer.Exit(1)

    return service, result


@app.command()
def check(
    file: Path = typer.Argument(..., help="Offer file (pipe-delimited, header first)"),
):
    """Validate an offer file and summarise the resulting index."""
    service, result = _load(file)
    summary = service.catalog.current().summary()

    table = Table(title=f"Offer index: {file.name}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Identifiers", str(summary["identifiers_total"]))
    table.add_row("Offers", str(summary["offers_total"]))
    table.add_row("Max offers per identifier", str(summary["max_offers_per_identifier"]))
    table.add_row("Overlapping pairs", str(summary["overlapping_pairs"]))
    console.print(table)

    console.print(f"[bold green]✓[/bold green] {escape(result.message)} in {result.duration_seconds:.3f}s")


@app.command()
def query(
    file: Path = typer.Argument(..., help="Offer file (pipe-delimited, header first)"),
    skuid: str = typer.Argument(..., help="SKU identifier"),
    time: str | None = typer.Option(None, "--time", "-t", help="Time in HH:mm format"),
):
    """Look up the price for a SKU at a time."""
    service, _ = _load(file)

    try:
        result = service.get_price(skuid, time)
    except ValidationFailed as e:
        raise typer.BadParameter(e.message, param_hint=f"'--{e.field}'" if e.field == "time" else "'SKUID'")

    if isinstance(result, Priced):
        console.print(str(result.value))
    else:
        console.print("NOT SET")


@web_cli.command("serve")
def web_serve(
    host: str = typer.Option("0.0.0.0", help="Host to bind"),
    port: int = typer.Option(8080, help="Port to bind"),
    reload: bool = typer.Option(False, help="Enable autoreload (dev only)"),
):
    """Run the FastAPI price service."""
    import uvicorn

    typer.echo(f"Starting PriceClock on http://{host}:{port}")
    uvicorn.run("priceclock.web.app:app", host=host, port=port, reload=reload, workers=1)


if __name__ == "__main__":
    app()
