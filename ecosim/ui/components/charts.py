"""
Reusable chart components for the web viewer.

Provides helper functions that return Plotly figures for:
  - Population (herbivores, carnivores, plants) over turns
  - Energy distribution histogram
  - Births and deaths per turn
"""

import numpy as np
import pandas as pd
import plotly.graph_objects as go


def population_over_time(
    df: pd.DataFrame,
    title: str = "Population Over Time",
) -> go.Figure:
    """
    Line chart of population counts over turns.

    Args:
        df: DataFrame of per-turn KPIs (see MetricsCollector.kpi_names()).
        title: Chart title.

    Returns:
        Plotly figure.
    """
    fig = go.Figure()

    pop_cols = {
        "herbivores": ("Herbivores", "#2ecc71"),
        "carnivores": ("Carnivores", "#e74c3c"),
        "plants": ("Plants", "#f1c40f"),
    }

    x = df["turn"] if "turn" in df.columns else df.index
    for col, (label, color) in pop_cols.items():
        if col in df.columns:
            fig.add_trace(go.Scatter(
                x=x,
                y=df[col],
                mode="lines",
                name=label,
                line=dict(color=color, width=2),
            ))

    fig.update_layout(
        title=title,
        xaxis_title="Turn",
        yaxis_title="Count",
        template="plotly_white",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
    )
    return fig


def energy_distribution(
    energies: list[int] | np.ndarray,
    title: str = "Energy Distribution",
    bins: int = 20,
) -> go.Figure:
    """Histogram of animal energy levels."""
    fig = go.Figure(data=[
        go.Histogram(
            x=energies,
            nbinsx=bins,
            marker_color="#f39c12",
            opacity=0.75,
        )
    ])
    fig.update_layout(
        title=title,
        xaxis_title="Energy",
        yaxis_title="Count",
        template="plotly_white",
    )
    return fig


def births_and_deaths(
    df: pd.DataFrame,
    title: str = "Births, Meals and Deaths per Turn",
) -> go.Figure:
    """Bar chart of per-turn births, herbivores eaten and starvation deaths."""
    fig = go.Figure()

    cols = {
        "births_total": ("Births", "#3498db"),
        "herbivores_eaten": ("Herbivores eaten", "#e67e22"),
        "deaths_starvation": ("Starved", "#7f8c8d"),
    }

    x = df["turn"] if "turn" in df.columns else df.index
    for col, (label, color) in cols.items():
        if col in df.columns:
            fig.add_trace(go.Bar(x=x, y=df[col], name=label, marker_color=color))

    fig.update_layout(
        title=title,
        barmode="group",
        xaxis_title="Turn",
        yaxis_title="Count",
        template="plotly_white",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
    )
    return fig
