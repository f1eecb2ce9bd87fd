"""
KPI metrics collection for the predator-prey grid.

MetricsCollector turns each post-turn SimulationState into a flat dict of
Key Performance Indicators, suitable for CSV export and charting.
"""

from __future__ import annotations

import numpy as np

from ecosim.core.animal import Animal
from ecosim.core.world import SimulationState


_KPI_NAMES = [
    "turn",
    "herbivores",
    "carnivores",
    "animals",
    "plants",
    "obstacles",
    "avg_energy",
    "min_energy",
    "max_energy",
    "avg_herbivore_energy",
    "avg_carnivore_energy",
    "plants_eaten",
    "herbivores_eaten",
    "births_herbivore",
    "births_carnivore",
    "births_total",
    "deaths_starvation",
    "plants_spawned",
    "moves",
    "moves_blocked",
    "collapsed",
]


class MetricsCollector:
    """
    Collects and computes KPIs per turn.

    Usage:
      1. After each turn, call `collect(state)`
      2. Resulting dict is appended to `history`

    Attributes:
        history: List of KPI dicts, one per collected turn.
    """

    def __init__(self):
        self.history: list[dict] = []

    @staticmethod
    def kpi_names() -> list[str]:
        """Ordered KPI column names."""
        return list(_KPI_NAMES)

    def collect(self, state: SimulationState) -> dict:
        """
        Compute all KPIs for a state and append them to history.

        Args:
            state: State returned by the most recent turn (or the initial state).

        Returns:
            Dict of KPI_name -> value.
        """
        herbivores = state.herbivores
        carnivores = state.carnivores

        kpis: dict = {
            "turn": state.turn,
            "herbivores": len(herbivores),
            "carnivores": len(carnivores),
            "animals": state.alive_count,
            "plants": state.plant_count,
            "obstacles": len(state.obstacles),
        }

        # --- Energy statistics ---
        if state.animals:
            energies = np.array([a.energy for a in state.animals])
            kpis["avg_energy"] = float(np.mean(energies))
            kpis["min_energy"] = int(np.min(energies))
            kpis["max_energy"] = int(np.max(energies))
        else:
            kpis["avg_energy"] = 0.0
            kpis["min_energy"] = 0
            kpis["max_energy"] = 0
        kpis["avg_herbivore_energy"] = _mean_energy(herbivores)
        kpis["avg_carnivore_energy"] = _mean_energy(carnivores)

        # --- Turn counters ---
        kpis.update(state.stats.to_dict())

        kpis["collapsed"] = state.is_collapsed

        self.history.append(kpis)
        return kpis

    def get_history(self) -> list[dict]:
        return list(self.history)

    def reset(self) -> None:
        self.history = []


def _mean_energy(animals: tuple[Animal, ...]) -> float:
    if not animals:
        return 0.0
    return float(np.mean([a.energy for a in animals]))
