"""
Narrative events produced by a simulation turn.

Each turn produces a fresh, ordered list: herbivore meals, then carnivore
meals, then births, then the plant regrowth summary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ecosim.core.animal import Animal
from ecosim.core.position import Position


class EventKind(Enum):
    HERBIVORE_ATE = "herbivore_ate"
    CARNIVORE_ATE = "carnivore_ate"
    REPRODUCED = "reproduced"
    PLANTS_SPAWNED = "plants_spawned"


@dataclass(frozen=True, slots=True)
class SimulationEvent:
    """One human-readable transition message."""
    kind: EventKind
    message: str

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}


def plant_eaten(herbivore: Animal, at: Position) -> SimulationEvent:
    return SimulationEvent(
        EventKind.HERBIVORE_ATE,
        f"Herbivore #{herbivore.id} ate a plant at {at}.",
    )


def herbivore_eaten(carnivore: Animal, prey: Animal, at: Position) -> SimulationEvent:
    return SimulationEvent(
        EventKind.CARNIVORE_ATE,
        f"Carnivore #{carnivore.id} ate Herbivore #{prey.id} at {at}.",
    )


def offspring_born(parent: Animal, offspring: Animal) -> SimulationEvent:
    return SimulationEvent(
        EventKind.REPRODUCED,
        f"{parent.species.label} #{parent.id} reproduced an offspring "
        f"with id (#{offspring.id}) at {parent.position}.",
    )


def plants_spawned(count: int) -> SimulationEvent:
    return SimulationEvent(EventKind.PLANTS_SPAWNED, f"{count} new plant(s) spawned.")
