"""TUI for exploring version download shares interactively."""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import Footer, Header, Static

from .analyzers.filter_state import FilterState
from .models.schemas import MAX_THRESHOLD, MIN_THRESHOLD, Tag
from .render import describe_selection, entries_table, summary_table

THRESHOLD_STEP = 5


def next_major_selection(available: list[str], selected: frozenset[str]) -> frozenset[str]:
    """Cycle the major filter: all -> first major -> ... -> last major -> all."""
    if not available:
        return frozenset()
    if len(selected) != 1:
        return frozenset({available[0]})
    current = next(iter(selected))
    if current not in available:
        return frozenset({available[0]})
    index = available.index(current) + 1
    if index >= len(available):
        return frozenset()
    return frozenset({available[index]})


def step_threshold(current: int, delta: int) -> int:
    """Move the threshold by delta, staying inside [50, 100]."""
    return min(max(current + delta, MIN_THRESHOLD), MAX_THRESHOLD)


class SelectionPanel(Static):
    """Shows the active filters and download total."""

    def update_state(self, state: FilterState) -> None:
        tags = "  ".join(
            f"[green]{tag.value}[/green]" if tag in state.selection.selected_tags else f"[dim]{tag.value}[/dim]"
            for tag in state.available_tags()
        )
        content = f"""[bold]FILTERS[/bold]  {describe_selection(state.selection)}
[bold]Tags:[/bold]   {tags or "[dim]none[/dim]"}
[bold]Majors:[/bold] {", ".join(state.available_majors()) or "-"}
[bold]Total:[/bold]  {state.total_downloads:,} downloads"""
        self.update(content)


class SummaryPanel(Static):
    """Shows the golden version of each major line."""

    def update_state(self, state: FilterState) -> None:
        summary = state.get_threshold_summary()
        if summary is None:
            self.update("[bold]GOLDEN VERSIONS[/bold]\n\n[dim]No data[/dim]")
        else:
            self.update(summary_table(summary))


class EntriesPanel(Static):
    """Shows the ranked versions."""

    def update_state(self, state: FilterState, title: str) -> None:
        entries = state.get_ranked_entries()
        if not entries:
            self.update("[dim]No versions match the selected filters[/dim]")
        else:
            self.update(entries_table(title, entries))


class VersionBrowser(App):
    """Interactive ranked view of one package's version downloads."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #selection-panel {
        height: 6;
        border: solid green;
        padding: 0 1;
    }

    #summary-panel {
        height: auto;
        max-height: 14;
        border: solid cyan;
        padding: 0 1;
    }

    #entries-panel {
        height: 1fr;
        border: solid white;
        padding: 0 1;
        overflow-y: auto;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("s", "toggle_tag('stable')", "Stable"),
        ("a", "toggle_tag('alpha')", "Alpha"),
        ("b", "toggle_tag('beta')", "Beta"),
        ("r", "toggle_tag('rc')", "RC"),
        ("c", "toggle_tag('canary')", "Canary"),
        ("n", "toggle_tag('next')", "Next"),
        ("d", "toggle_tag('dev')", "Dev"),
        ("x", "toggle_tag('snapshot')", "Snapshot"),
        ("p", "toggle_tag('prerelease')", "Prerelease"),
        ("i", "toggle_tag('invalid')", "Invalid"),
        ("m", "cycle_major", "Major"),
        ("plus,equals_sign", "threshold(5)", "+5%"),
        ("minus", "threshold(-5)", "-5%"),
    ]

    def __init__(self, package: str, state: FilterState):
        super().__init__()
        self.package = package
        self.state = state
        self.title = f"pkgshare - {package}"

    def compose(self) -> ComposeResult:
        """Create browser layout."""
        yield Header()

        with Container():
            yield SelectionPanel(id="selection-panel")
            yield SummaryPanel(id="summary-panel")
            yield EntriesPanel(id="entries-panel")

        yield Footer()

    def on_mount(self) -> None:
        self.refresh_panels()

    def refresh_panels(self) -> None:
        """Redraw every panel from the current state."""
        self.query_one("#selection-panel", SelectionPanel).update_state(self.state)
        self.query_one("#summary-panel", SummaryPanel).update_state(self.state)
        self.query_one("#entries-panel", EntriesPanel).update_state(
            self.state, f"{self.package} versions by downloads"
        )

    def action_toggle_tag(self, tag: str) -> None:
        self.state.toggle_tag(Tag(tag))
        self.refresh_panels()

    def action_cycle_major(self) -> None:
        majors = next_major_selection(self.state.available_majors(), self.state.selection.selected_majors)
        self.state.set_filter(self.state.selection.model_copy(update={"selected_majors": majors}))
        self.refresh_panels()

    def action_threshold(self, delta: int) -> None:
        self.state.set_threshold(step_threshold(self.state.selection.threshold_percent, delta))
        self.refresh_panels()


def run_browser(package: str, state: FilterState) -> None:
    """Run the browser app."""
    app = VersionBrowser(package, state)
    app.run()
