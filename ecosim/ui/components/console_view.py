"""
Console rendering for the predator-prey grid.

Draws a state as a coloured character grid using Rich:
  - C carnivore (red), H herbivore (green), X obstacle (grey),
    P plant (yellow), . empty
  - When several things share a cell the first in that order wins
  - A header with turn and population counts, and the turn's events below

Rendering is read-only; the state is never touched.
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console, Group
from rich.text import Text

from ecosim.core.animal import Species
from ecosim.core.world import SimulationState


LEGEND = "H=Herbivore, C=Carnivore, P=Plant, X=Obstacle, .=Empty"

GLYPH_STYLES: dict[str, str] = {
    "C": "bold red",
    "H": "bold green",
    "X": "grey50",
    "P": "yellow",
    ".": "default",
}

COLLAPSE_MESSAGE = "All animals died! Ecosystem collapsed."


def grid_symbols(state: SimulationState) -> list[list[str]]:
    """
    Build the glyph grid, one list per row (y), one glyph per column (x).
    """
    herbivores = {a.position.as_tuple() for a in state.animals if a.species is Species.HERBIVORE}
    carnivores = {a.position.as_tuple() for a in state.animals if a.species is Species.CARNIVORE}
    obstacles = {o.position.as_tuple() for o in state.obstacles}
    plants = {p.position.as_tuple() for p in state.plants}

    rows = []
    for y in range(state.height):
        row = []
        for x in range(state.width):
            cell = (x, y)
            if cell in carnivores:
                row.append("C")
            elif cell in herbivores:
                row.append("H")
            elif cell in obstacles:
                row.append("X")
            elif cell in plants:
                row.append("P")
            else:
                row.append(".")
        rows.append(row)
    return rows


def header_line(state: SimulationState) -> str:
    return (
        f"=== Turn {state.turn} | Herbivores: {state.herbivore_count} | "
        f"Carnivores: {state.carnivore_count} | Plants: {state.plant_count} ==="
    )


def grid_text(state: SimulationState) -> Text:
    """The glyph grid as styled Rich text, cells separated by a space."""
    text = Text()
    for row in grid_symbols(state):
        for glyph in row:
            text.append(glyph, style=GLYPH_STYLES[glyph])
            text.append(" ")
        text.append("\n")
    return text


def render_state(state: SimulationState) -> Group:
    """Header, grid and event list as one renderable."""
    parts = [Text(header_line(state), style="bold"), grid_text(state)]
    if state.events:
        parts.append(Text("Events:", style="bold"))
        for event in state.events:
            parts.append(Text(f"- {event.message}"))
    return Group(*parts)


def print_state(state: SimulationState, console: Optional[Console] = None) -> None:
    console = console or Console()
    console.print()
    console.print(render_state(state))


def print_legend(console: Optional[Console] = None) -> None:
    console = console or Console()
    console.print(f" {LEGEND}")


def print_collapse_banner(console: Optional[Console] = None) -> None:
    console = console or Console()
    rule = "=" * 47
    console.print()
    console.print(rule, style="red")
    console.print(COLLAPSE_MESSAGE, style="bold red")
    console.print(rule, style="red")
