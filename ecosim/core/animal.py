"""
Animal (Agent) for the predator-prey grid.

Animals are immutable records. Every change a turn makes (moving,
spending or gaining energy) produces a new Animal with the same id, so
a state handed to the step engine is never modified behind its back.

Energy is an integer and may dip to zero or below during a turn; such
animals are purged before the turn's state is returned.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from ecosim.core.position import Position


class Species(Enum):
    """The two kinds of animal on the grid."""
    HERBIVORE = "Herbivore"
    CARNIVORE = "Carnivore"

    @property
    def label(self) -> str:
        """Human-readable name used in event messages."""
        return self.value


@dataclass(frozen=True, slots=True)
class Animal:
    """
    An animal on the simulation grid.

    Attributes:
        position: Current grid cell.
        energy: Current energy (integer).
        id: Unique identifier, never reused within a run.
        species: Herbivore or Carnivore.
    """
    position: Position
    energy: int
    id: int
    species: Species

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def x(self) -> int:
        return self.position.x

    @property
    def y(self) -> int:
        return self.position.y

    @property
    def is_herbivore(self) -> bool:
        return self.species is Species.HERBIVORE

    @property
    def is_carnivore(self) -> bool:
        return self.species is Species.CARNIVORE

    @property
    def is_dead(self) -> bool:
        """True once energy has run out (energy <= 0)."""
        return self.energy <= 0

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def moved_to(self, position: Position) -> Animal:
        """Copy of this animal standing on `position`."""
        return replace(self, position=position)

    def with_energy_delta(self, delta: int) -> Animal:
        """Copy of this animal with `delta` added to its energy."""
        return replace(self, energy=self.energy + delta)

    # ------------------------------------------------------------------
    # Representation
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"Animal(id={self.id}, species={self.species.label}, "
            f"pos=({self.x},{self.y}), energy={self.energy})"
        )

    def to_dict(self) -> dict:
        """Serialize animal state for snapshots/logging."""
        return {
            "id": self.id,
            "species": self.species.value,
            "x": self.x,
            "y": self.y,
            "energy": self.energy,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Animal:
        """Rebuild an animal from `to_dict` output."""
        return cls(
            position=Position(int(data["x"]), int(data["y"])),
            energy=int(data["energy"]),
            id=int(data["id"]),
            species=Species(data["species"]),
        )
