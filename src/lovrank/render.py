"""Terminal rendering of ranked vocabularies."""

from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .models import RankedEntry
from .ranking.scoring import parse_count

SUGGESTED_TERMS = ("metadata", "person", "organization", "location", "time")

_METER_WIDTH = 10


def meter_style(score: float) -> str:
    if score >= 0.7:
        return "green"
    if score >= 0.4:
        return "yellow"
    return "red"


def format_meter(score: float) -> str:
    """Render the score as a ten-cell bar followed by a rounded percentage."""

    filled = round(score * _METER_WIDTH)
    style = meter_style(score)
    bar = "█" * filled + "░" * (_METER_WIDTH - filled)
    return f"[{style}]{bar}[/{style}] {score * 100:.0f}%"


def _design_cell(item: RankedEntry) -> str:
    design = item.design
    return (
        f"Extends: {design.extends}\n"
        f"Equivalences: {design.has_equivalences_with}\n"
        f"Dependencies: {design.relies_on}"
    )


def _adoption_cell(item: RankedEntry) -> str:
    adoption = item.adoption
    occurrences = parse_count(adoption.occurrences_in_datasets)
    return (
        f"Vocab Reuses: {adoption.reused_by_vocabularies}\n"
        f"Dataset Uses: {adoption.reused_by_datasets}\n"
        f"Occurrences: {occurrences:,}"
    )


def build_results_table(results: Sequence[RankedEntry], term: Optional[str] = None) -> Table:
    title = f"Search Results ({len(results)} found)"
    if term:
        title = f"{title} for '{term}'"
    table = Table(title=title, show_lines=True)
    table.add_column("#", justify="right", style="bold")
    table.add_column("Vocabulary", style="bold blue")
    table.add_column("Connectivity", justify="left")
    table.add_column("Design Convergence")
    table.add_column("Adoption Convergence")
    table.add_column("Namespace", overflow="fold")
    for rank, item in enumerate(results, start=1):
        entry = item.entry
        name = escape(entry.display_title)
        if entry.homepage:
            name = f"[link={entry.homepage}]{name}[/link]"
        table.add_row(
            str(rank),
            f"{name}\n[dim]{escape(entry.display_description)}[/dim]",
            format_meter(item.connectivity_score),
            _design_cell(item),
            _adoption_cell(item),
            escape(entry.uri) if entry.uri else "N/A",
        )
    return table


def render_results(results: Sequence[RankedEntry], *, term: Optional[str] = None, console: Optional[Console] = None) -> None:
    console = console or Console()
    if not results:
        console.print(Panel.fit("No results found. Try different search terms.", style="yellow"))
        return
    console.print(build_results_table(results, term))


def render_suggestions(console: Optional[Console] = None) -> None:
    console = console or Console()
    console.print(
        Panel.fit(
            "Enter a search term to find vocabularies ranked by connectivity evidence.\n"
            "Try: " + ", ".join(SUGGESTED_TERMS),
            title="Search LOV Vocabularies",
            style="bold blue",
        )
    )


def render_error(message: str, console: Optional[Console] = None) -> None:
    console = console or Console(stderr=True)
    console.print(Panel.fit(message, style="bold red"))


__all__ = [
    "SUGGESTED_TERMS",
    "build_results_table",
    "format_meter",
    "meter_style",
    "render_error",
    "render_results",
    "render_suggestions",
]
