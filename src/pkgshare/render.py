"""Rich renderables shared by the CLI and the browser."""

from rich.table import Table

from pkgshare.models.schemas import FilterSelection, RankedEntry, Tag, ThresholdSummary


def threshold_marker(entry: RankedEntry) -> str:
    """Markup for an entry's threshold membership (★ marks the boundary)."""
    if entry.is_boundary:
        return "[bold yellow]★[/bold yellow]"
    if entry.within_threshold:
        return "[green]✓[/green]"
    return "[dim]-[/dim]"


def describe_selection(selection: FilterSelection) -> str:
    """One-line description of the active filters."""
    tags = ", ".join(t.value for t in Tag if t in selection.selected_tags) or "all tags"
    majors = ", ".join(sorted(selection.selected_majors)) or "all majors"
    return f"{tags} | {majors} | {selection.threshold_percent}%"


def entries_table(title: str, entries: list[RankedEntry], limit: int | None = None) -> Table:
    """Ranked entries with share, cumulative share and threshold marker."""
    table = Table(title=title)
    table.add_column("Rank", style="dim", justify="right")
    table.add_column("Version", style="cyan")
    table.add_column("Tag")
    table.add_column("Downloads", justify="right", style="green")
    table.add_column("Share", justify="right")
    table.add_column("Cumulative", justify="right")
    table.add_column("In", justify="center")

    shown = entries[:limit] if limit else entries
    for entry in shown:
        version = entry.version + (" [dim](latest)[/dim]" if entry.is_latest else "")
        table.add_row(
            str(entry.rank),
            version,
            entry.tag.value,
            f"{entry.downloads:,}",
            f"{entry.share_percent:.2f}%",
            f"{entry.cumulative_share_percent:.2f}%",
            threshold_marker(entry),
        )
    return table


def summary_table(summary: ThresholdSummary) -> Table:
    """Golden version of each major line, newest major first."""
    table = Table(title=f"Minimum version per major line ({summary.threshold_percent}% of downloads)")
    table.add_column("Major", style="bold")
    table.add_column("Golden Version", style="cyan")
    table.add_column("Rank", justify="right", style="dim")
    table.add_column("Downloads", justify="right", style="green")
    table.add_column("Cumulative", justify="right")

    for line in summary.lines:
        table.add_row(
            line.major,
            line.version,
            str(line.rank),
            f"{line.downloads:,}",
            f"{line.cumulative_share_percent:.2f}%",
        )
    return table
