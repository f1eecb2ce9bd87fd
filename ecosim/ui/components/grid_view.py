"""
2D Grid View component for the web viewer.

Renders a state of the predator-prey grid using Plotly:
  - Obstacles as grey squares
  - Plants as yellow diamonds
  - Herbivores as green dots, carnivores as red dots (hover shows id and energy)
  - Supports both SimulationState objects and snapshot dicts
"""

from typing import Optional

import plotly.graph_objects as go

from ecosim.core.world import SimulationState


_STYLES = {
    "obstacle": dict(symbol="square", size=14, color="rgba(127, 140, 141, 0.9)"),
    "plant": dict(symbol="diamond", size=9, color="rgba(241, 196, 15, 0.8)"),
    "herbivore": dict(symbol="circle", size=12, color="rgba(46, 204, 113, 0.9)"),
    "carnivore": dict(symbol="circle", size=12, color="rgba(231, 76, 60, 0.9)"),
}


def _layout(fig: go.Figure, title: str, grid_w: int, grid_h: int, width: int, height: int) -> None:
    fig.update_layout(
        title=title,
        width=width,
        height=height,
        xaxis=dict(
            range=[-0.5, grid_w - 0.5],
            title="X",
            scaleanchor="y",
            scaleratio=1,
            constrain="domain",
            dtick=1 if grid_w <= 30 else None,
        ),
        # Row 0 at the top, as in the console view.
        yaxis=dict(range=[grid_h - 0.5, -0.5], title="Y", dtick=1 if grid_h <= 30 else None),
        template="plotly_white",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        margin=dict(l=40, r=40, t=60, b=40),
    )


def _add_points(fig: go.Figure, kind: str, points: list[dict], label: str) -> None:
    if not points:
        return
    hover = [p.get("hover", f"{label} ({p['x']}, {p['y']})") for p in points]
    fig.add_trace(go.Scatter(
        x=[p["x"] for p in points],
        y=[p["y"] for p in points],
        mode="markers",
        marker=dict(line=dict(width=0), **_STYLES[kind]),
        name=f"{label} ({len(points)})",
        text=hover,
        hovertemplate="%{text}<extra></extra>",
    ))


def render_snapshot_grid(
    snapshot: dict,
    title: Optional[str] = None,
    width: int = 700,
    height: int = 700,
) -> go.Figure:
    """
    Render a grid from a snapshot dict (as produced by SimulationState.to_dict()).

    Returns:
        Plotly figure.
    """
    fig = go.Figure()

    grid_w = snapshot.get("width", 20)
    grid_h = snapshot.get("height", 20)
    turn = snapshot.get("turn", "?")

    if title is None:
        title = f"Ecosystem ({grid_w}×{grid_h}) | Turn {turn}"

    _add_points(fig, "obstacle", snapshot.get("obstacles", []), "Obstacles")
    _add_points(fig, "plant", snapshot.get("plants", []), "Plants")

    for kind, label in (("herbivore", "Herbivore"), ("carnivore", "Carnivore")):
        animals = [a for a in snapshot.get("animals", []) if a.get("species") == label]
        points = [
            {"x": a["x"], "y": a["y"],
             "hover": f"{label} #{a['id']} ({a['x']}, {a['y']})<br>Energy: {a['energy']}"}
            for a in animals
        ]
        _add_points(fig, kind, points, f"{label}s")

    _layout(fig, title, grid_w, grid_h, width, height)
    return fig


def render_state_grid(
    state: SimulationState,
    title: Optional[str] = None,
    width: int = 700,
    height: int = 700,
) -> go.Figure:
    """Render a live SimulationState."""
    return render_snapshot_grid(state.to_dict(), title=title, width=width, height=height)
