"""
World state for the predator-prey grid.

A SimulationState is one immutable snapshot of the ecosystem between two
turns: grid size, the animal, plant and obstacle collections, the turn
counter, and what happened during the turn that produced it. The step
engine consumes one state and returns the next; nothing is edited in
place. The obstacle tuple is created once by `initialize()` and handed
unchanged from state to state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Iterable, Optional

import numpy as np

from ecosim.core.animal import Animal, Species
from ecosim.core.config import SimConfig
from ecosim.core.events import SimulationEvent
from ecosim.core.obstacle import Obstacle
from ecosim.core.plant import Plant
from ecosim.core.population import count_species, next_id_after, partition_by_species
from ecosim.core.position import Position
from ecosim.utils.spatial import in_bounds, random_position


DEFAULT_INITIAL_ENERGY = 50


class InvalidArgumentError(ValueError):
    """Raised when a world is requested with impossible dimensions or counts."""


# ---------------------------------------------------------------------------
# Turn statistics
# ---------------------------------------------------------------------------

@dataclass
class TurnStats:
    """Counters collected during a single turn."""
    moves: int = 0
    moves_blocked: int = 0
    plants_eaten: int = 0
    herbivores_eaten: int = 0
    births_herbivore: int = 0
    births_carnivore: int = 0
    deaths_starvation: int = 0
    plants_spawned: int = 0

    @property
    def births_total(self) -> int:
        return self.births_herbivore + self.births_carnivore

    def to_dict(self) -> dict[str, int]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["births_total"] = self.births_total
        return data


# ---------------------------------------------------------------------------
# Simulation state
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SimulationState:
    """
    The ecosystem between two turns.

    Attributes:
        width: Grid width.
        height: Grid height.
        animals: Live animals in population order.
        plants: Plants on the grid (duplicates per cell allowed).
        obstacles: Obstacles, fixed for the whole run.
        turn: Number of completed turns.
        events: Events of the turn that produced this state (not cumulative).
        stats: Counters of the turn that produced this state.
        next_animal_id: Lowest id never handed out so far in this run.
    """
    width: int
    height: int
    animals: tuple[Animal, ...] = ()
    plants: tuple[Plant, ...] = ()
    obstacles: tuple[Obstacle, ...] = ()
    turn: int = 0
    events: tuple[SimulationEvent, ...] = ()
    stats: TurnStats = field(default_factory=TurnStats)
    next_animal_id: int = 0

    def __post_init__(self) -> None:
        # Accept any iterable from callers, store tuples.
        for name in ("animals", "plants", "obstacles", "events"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

    # ------------------------------------------------------------------
    # Population queries
    # ------------------------------------------------------------------

    @property
    def herbivores(self) -> tuple[Animal, ...]:
        return partition_by_species(self.animals)[0]

    @property
    def carnivores(self) -> tuple[Animal, ...]:
        return partition_by_species(self.animals)[1]

    @property
    def herbivore_count(self) -> int:
        return count_species(self.animals, Species.HERBIVORE)

    @property
    def carnivore_count(self) -> int:
        return count_species(self.animals, Species.CARNIVORE)

    @property
    def alive_count(self) -> int:
        return len(self.animals)

    @property
    def plant_count(self) -> int:
        return len(self.plants)

    @property
    def is_collapsed(self) -> bool:
        """True if no animal is left alive."""
        return len(self.animals) == 0

    def animal_by_id(self, animal_id: int) -> Optional[Animal]:
        for animal in self.animals:
            if animal.id == animal_id:
                return animal
        return None

    # ------------------------------------------------------------------
    # Spatial queries
    # ------------------------------------------------------------------

    @property
    def obstacle_positions(self) -> frozenset[Position]:
        return frozenset(o.position for o in self.obstacles)

    def contains(self, position: Position) -> bool:
        return in_bounds(position.x, position.y, self.width, self.height)

    def animals_at(self, position: Position) -> list[Animal]:
        return [a for a in self.animals if a.position == position]

    def plants_at(self, position: Position) -> list[Plant]:
        return [p for p in self.plants if p.position == position]

    def has_obstacle(self, position: Position) -> bool:
        return any(o.position == position for o in self.obstacles)

    # ------------------------------------------------------------------
    # Representation
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Serialize the full state for snapshots."""
        return {
            "turn": self.turn,
            "width": self.width,
            "height": self.height,
            "next_animal_id": self.next_animal_id,
            "herbivore_count": self.herbivore_count,
            "carnivore_count": self.carnivore_count,
            "plant_count": self.plant_count,
            "animals": [a.to_dict() for a in self.animals],
            "plants": [p.to_dict() for p in self.plants],
            "obstacles": [o.to_dict() for o in self.obstacles],
            "events": [e.message for e in self.events],
            "stats": self.stats.to_dict(),
        }

    def __repr__(self) -> str:
        return (
            f"SimulationState(size={self.width}x{self.height}, turn={self.turn}, "
            f"herbivores={self.herbivore_count}, carnivores={self.carnivore_count}, "
            f"plants={self.plant_count}, obstacles={len(self.obstacles)})"
        )


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def initialize(
    width: int,
    height: int,
    herbivore_count: int,
    carnivore_count: int,
    plant_count: int,
    obstacle_count: int,
    rng: Optional[np.random.Generator] = None,
    initial_energy: int = DEFAULT_INITIAL_ENERGY,
) -> SimulationState:
    """
    Build the turn-0 state with every entity at a uniformly random cell.

    Placement is independent per entity: animals, plants and obstacles may
    overlap each other and themselves. Draw order is herbivores, then
    carnivores, then plants, then obstacles (x before y for each).
    Herbivores receive ids 0..h-1 and carnivores h..h+c-1.

    Args:
        width, height: Grid dimensions (> 0).
        herbivore_count, carnivore_count, plant_count, obstacle_count: Counts (>= 0).
        rng: Random generator. None = fresh unseeded generator.
        initial_energy: Starting energy of every animal.

    Returns:
        The initial SimulationState.

    Raises:
        InvalidArgumentError: On non-positive dimensions or negative counts.
    """
    if width <= 0 or height <= 0:
        raise InvalidArgumentError(f"Grid dimensions must be positive, got {width}x{height}")
    counts = {
        "herbivore_count": herbivore_count,
        "carnivore_count": carnivore_count,
        "plant_count": plant_count,
        "obstacle_count": obstacle_count,
    }
    for name, value in counts.items():
        if value < 0:
            raise InvalidArgumentError(f"{name} must be >= 0, got {value}")

    if rng is None:
        rng = np.random.default_rng()

    animals: list[Animal] = []
    for species, count in ((Species.HERBIVORE, herbivore_count),
                           (Species.CARNIVORE, carnivore_count)):
        for _ in range(count):
            animals.append(Animal(
                position=random_position(width, height, rng),
                energy=initial_energy,
                id=len(animals),
                species=species,
            ))

    plants = [Plant(random_position(width, height, rng)) for _ in range(plant_count)]
    obstacles = [Obstacle(random_position(width, height, rng)) for _ in range(obstacle_count)]

    return SimulationState(
        width=width,
        height=height,
        animals=tuple(animals),
        plants=tuple(plants),
        obstacles=tuple(obstacles),
        turn=0,
        next_animal_id=len(animals),
    )


def initialize_from_config(config: SimConfig, rng: Optional[np.random.Generator] = None) -> SimulationState:
    """Build the initial state from a SimConfig."""
    pop = config.population
    return initialize(
        width=config.world.width,
        height=config.world.height,
        herbivore_count=pop.herbivore_count,
        carnivore_count=pop.carnivore_count,
        plant_count=pop.plant_count,
        obstacle_count=pop.obstacle_count,
        rng=rng,
        initial_energy=pop.initial_energy,
    )


def is_collapsed(state: SimulationState) -> bool:
    """Termination query: True iff the animal collection is empty."""
    return state.is_collapsed


def state_from_entities(
    width: int,
    height: int,
    animals: Iterable[Animal] = (),
    plants: Iterable[Plant] = (),
    obstacles: Iterable[Obstacle] = (),
    turn: int = 0,
) -> SimulationState:
    """Assemble a state from hand-placed entities (scenarios, replays)."""
    animals = tuple(animals)
    return SimulationState(
        width=width,
        height=height,
        animals=animals,
        plants=tuple(plants),
        obstacles=tuple(obstacles),
        turn=turn,
        next_animal_id=next_id_after(animals),
    )
