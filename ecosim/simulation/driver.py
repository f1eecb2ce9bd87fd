"""
Simulation Driver — owns the current state and runs turns until collapse.

The driver holds the run's random generator, calls the step engine once
per turn, replaces its state with the result, and moves from RUNNING to
the terminal COLLAPSED status as soon as a turn leaves no animal alive.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

import numpy as np

from ecosim.core.config import SimConfig
from ecosim.core.events import SimulationEvent
from ecosim.core.world import SimulationState, initialize_from_config, is_collapsed
from ecosim.simulation.engine import step


class DriverStatus(Enum):
    RUNNING = "running"
    COLLAPSED = "collapsed"


# ---------------------------------------------------------------------------
# Run result
# ---------------------------------------------------------------------------

@dataclass
class RunResult:
    """Result of a complete simulation run."""
    seed: Optional[int]
    total_turns: int = 0
    final_herbivores: int = 0
    final_carnivores: int = 0
    final_plants: int = 0
    collapsed: bool = False
    collapse_turn: Optional[int] = None
    population_history: list[tuple[int, int]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "seed": self.seed,
            "total_turns": self.total_turns,
            "final_herbivores": self.final_herbivores,
            "final_carnivores": self.final_carnivores,
            "final_plants": self.final_plants,
            "collapsed": self.collapsed,
            "collapse_turn": self.collapse_turn,
        }


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------

class Simulation:
    """
    Turn-by-turn driver around the step engine.

    Attributes:
        config: Simulation configuration.
        rng: The run's random generator (seeded).
        state: Current SimulationState.
        status: RUNNING or COLLAPSED.
        on_turn: Optional callback invoked after each turn(turn_number, simulation).
    """

    def __init__(
        self,
        config: Optional[SimConfig] = None,
        seed: Optional[int] = None,
        state: Optional[SimulationState] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Create a driver.

        Args:
            config: Simulation configuration. None = defaults.
            seed: Random seed override. None = use config.world.seed.
            state: Start from this state instead of a random initial one.
            rng: Use this generator instead of one built from the seed.
        """
        self.config = config if config is not None else SimConfig()

        if seed is not None:
            self.config.world.seed = seed

        self.rng = rng if rng is not None else np.random.default_rng(self.config.world.seed)
        self.state = state if state is not None else initialize_from_config(self.config, self.rng)
        self.status = DriverStatus.RUNNING

        self.on_turn: Optional[Callable[[int, "Simulation"], None]] = None

    # ------------------------------------------------------------------
    # Turns
    # ------------------------------------------------------------------

    def step(self) -> tuple[SimulationEvent, ...]:
        """
        Run one turn and return its events.

        Raises:
            RuntimeError: If the ecosystem has already collapsed.
        """
        if self.status is DriverStatus.COLLAPSED:
            raise RuntimeError(f"Ecosystem collapsed at turn {self.state.turn}; no further turns")

        self.state, events = step(self.state, self.rng, self.config)

        if is_collapsed(self.state):
            self.status = DriverStatus.COLLAPSED

        if self.on_turn is not None:
            self.on_turn(self.state.turn, self)

        return events

    def run(self, max_turns: Optional[int] = None) -> RunResult:
        """
        Run until collapse or until `max_turns` turns have been taken.

        Args:
            max_turns: Turn limit for this call. None = config.run.max_turns,
                       and if that is None too, run until collapse.

        Returns:
            RunResult with summary statistics.
        """
        if max_turns is None:
            max_turns = self.config.run.max_turns

        result = RunResult(seed=self.config.world.seed)

        turns_run = 0
        while self.status is DriverStatus.RUNNING:
            if max_turns is not None and turns_run >= max_turns:
                break
            self.step()
            turns_run += 1
            result.population_history.append(
                (self.state.herbivore_count, self.state.carnivore_count)
            )

        result.total_turns = turns_run
        result.final_herbivores = self.state.herbivore_count
        result.final_carnivores = self.state.carnivore_count
        result.final_plants = self.state.plant_count
        result.collapsed = self.is_collapsed
        if result.collapsed:
            result.collapse_turn = self.state.turn
        return result

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def is_collapsed(self) -> bool:
        return self.status is DriverStatus.COLLAPSED

    @property
    def current_turn(self) -> int:
        return self.state.turn

    @property
    def alive_count(self) -> int:
        return self.state.alive_count

    def __repr__(self) -> str:
        return (
            f"Simulation(turn={self.current_turn}, status={self.status.value}, "
            f"alive={self.alive_count}, plants={self.state.plant_count})"
        )
