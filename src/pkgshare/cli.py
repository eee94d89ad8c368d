"""CLI entry point for pkgshare."""

import asyncio
import json
import logging
from pathlib import Path

# Load .env file if it exists
from dotenv import load_dotenv
load_dotenv()

import httpx
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from pkgshare.adapters.base import PackageNotFoundError
from pkgshare.adapters.npm import NpmAdapter
from pkgshare.analyzers.filter_state import FilterState
from pkgshare.analyzers.session import QuerySession
from pkgshare.config import Settings
from pkgshare.models.schemas import FilterSelection, Tag
from pkgshare.render import entries_table, summary_table

app = typer.Typer(help="Rank npm package versions by download share.")

console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def build_selection(
    tags: list[str] | None,
    majors: list[str] | None,
    all_tags: bool,
    threshold: int,
) -> FilterSelection:
    """Build a filter selection from CLI options.

    Args:
        tags: Tag names to keep (defaults to stable only).
        majors: Major lines to keep, with or without the "v" prefix.
        all_tags: Disable tag filtering entirely.
        threshold: Cumulative share threshold in percent.

    Raises:
        typer.BadParameter: If a tag name is unknown.
    """
    if all_tags:
        selected_tags: frozenset[Tag] = frozenset()
    elif tags:
        try:
            selected_tags = frozenset(Tag(t.lower()) for t in tags)
        except ValueError:
            valid = ", ".join(t.value for t in Tag)
            raise typer.BadParameter(f"Unknown tag in {tags}. Valid tags: {valid}")
    else:
        selected_tags = frozenset({Tag.STABLE})

    selected_majors = frozenset(
        m if m.startswith("v") or m == "unknown" else f"v{m}" for m in (majors or [])
    )
    return FilterSelection(
        selected_tags=selected_tags,
        selected_majors=selected_majors,
        threshold_percent=threshold,
    )


def _load_state(package: str, selection: FilterSelection, period: str, settings: Settings) -> FilterState:
    """Fetch records for a package and project them through a FilterState."""
    session = QuerySession(NpmAdapter(settings=settings), FilterState(selection))

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task(f"Fetching {package} downloads...", total=None)
        try:
            asyncio.run(session.load(package, period))
        except PackageNotFoundError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)
        except (httpx.HTTPError, ValueError) as e:
            console.print(f"[red]Error fetching package: {e}[/red]")
            raise typer.Exit(1)

    return session.state


def _write_output(output: Path, package: str, state: FilterState) -> None:
    summary = state.get_threshold_summary()
    data = {
        "package": package,
        "selection": state.selection.model_dump(mode="json"),
        "entries": [e.model_dump(mode="json") for e in state.get_ranked_entries()],
        "summary": summary.model_dump(mode="json") if summary else None,
    }
    output.write_text(json.dumps(data, indent=2, default=str))
    console.print(f"\n[green]Saved to {output}[/green]")


@app.command()
def versions(
    package: str = typer.Argument(..., help="Package name"),
    tag: list[str] | None = typer.Option(None, "--tag", "-t", help="Release tag to include (repeatable)"),
    major: list[str] | None = typer.Option(None, "--major", "-m", help="Major line to include, e.g. v2 (repeatable)"),
    all_tags: bool = typer.Option(False, "--all-tags", help="Include every release tag"),
    threshold: int | None = typer.Option(None, "--threshold", "-p", min=50, max=100, help="Cumulative download share (%)"),
    period: str | None = typer.Option(None, "--period", help="Download window"),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Number of versions to show"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output JSON file"),
) -> None:
    """Rank versions by downloads and mark the threshold."""
    settings = Settings.from_env()
    selection = build_selection(tag, major, all_tags, threshold or settings.threshold)
    state = _load_state(package, selection, period or settings.period, settings)

    entries = state.get_ranked_entries()
    if not entries:
        console.print("[yellow]No data[/yellow] for the selected filters")
        available = ", ".join(t.value for t in state.available_tags()) or "-"
        console.print(f"[dim]Tags present: {available}[/dim]")
    else:
        console.print(entries_table(f"{package} versions by downloads", entries, limit))
        console.print(f"[bold]Total downloads:[/bold] {state.total_downloads:,}")
        summary = state.get_threshold_summary()
        if summary:
            console.print()
            console.print(summary_table(summary))

    if output:
        _write_output(output, package, state)


@app.command()
def golden(
    package: str = typer.Argument(..., help="Package name"),
    tag: list[str] | None = typer.Option(None, "--tag", "-t", help="Release tag to include (repeatable)"),
    major: list[str] | None = typer.Option(None, "--major", "-m", help="Major line to include, e.g. v2 (repeatable)"),
    all_tags: bool = typer.Option(False, "--all-tags", help="Include every release tag"),
    threshold: int | None = typer.Option(None, "--threshold", "-p", min=50, max=100, help="Cumulative download share (%)"),
    period: str | None = typer.Option(None, "--period", help="Download window"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output JSON file"),
) -> None:
    """Show the minimum version per major line covering the threshold."""
    settings = Settings.from_env()
    selection = build_selection(tag, major, all_tags, threshold or settings.threshold)
    state = _load_state(package, selection, period or settings.period, settings)

    summary = state.get_threshold_summary()
    if summary is None:
        console.print("[yellow]No data[/yellow] for the selected filters")
    else:
        console.print(summary_table(summary))

    if output:
        _write_output(output, package, state)


@app.command()
def search(
    query: str = typer.Argument(..., help="Partial package name"),
    limit: int = typer.Option(10, "--limit", "-n", help="Number of suggestions"),
) -> None:
    """Suggest package names matching a query."""
    adapter = NpmAdapter(settings=Settings.from_env())
    try:
        suggestions = asyncio.run(adapter.search_packages(query, limit=limit))
    except httpx.HTTPError as e:
        console.print(f"[red]Search failed: {e}[/red]")
        raise typer.Exit(1)

    if not suggestions:
        console.print("[yellow]No packages found[/yellow]")
        return

    table = Table(title=f"Packages matching '{query}'")
    table.add_column("Package", style="cyan")
    table.add_column("Version", style="dim")
    table.add_column("Description", style="white", max_width=60)
    for suggestion in suggestions:
        table.add_row(suggestion.name, suggestion.version or "-", suggestion.description[:60])
    console.print(table)


@app.command()
def browse(
    package: str = typer.Argument(..., help="Package name"),
    period: str | None = typer.Option(None, "--period", help="Download window"),
) -> None:
    """Open an interactive view to adjust filters and threshold.

    Controls:
      s/a/b/r/c/n/d/p - toggle stable/alpha/beta/rc/canary/next/dev/prerelease
      m - cycle major line filter
      +/- - raise/lower threshold
      q - quit
    """
    from pkgshare.browser import run_browser

    settings = Settings.from_env()
    state = _load_state(package, FilterSelection(threshold_percent=settings.threshold), period or settings.period, settings)
    run_browser(package, state)


@app.command()
def version() -> None:
    """Show version information."""
    from pkgshare import __version__

    console.print(f"pkgshare v{__version__}")


if __name__ == "__main__":
    app()
