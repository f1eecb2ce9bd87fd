"""
Population bookkeeping for the predator-prey grid.

Collections are plain tuples; every helper returns a new tuple and leaves
its input untouched. Offspring ids come from an IdIssuer seeded once per
turn and advanced once per birth, in population-scan order.
"""

from __future__ import annotations

from typing import Callable, Iterable, TypeVar

from ecosim.core.animal import Animal, Species


T = TypeVar("T")


def add_animal(animals: tuple[Animal, ...], animal: Animal) -> tuple[Animal, ...]:
    """Append an animal to the end of the collection."""
    return animals + (animal,)


def remove_where(items: Iterable[T], predicate: Callable[[T], bool]) -> tuple[T, ...]:
    """Drop every item matching `predicate`, keeping the order of the rest."""
    return tuple(item for item in items if not predicate(item))


def partition_by_species(
    animals: Iterable[Animal],
) -> tuple[tuple[Animal, ...], tuple[Animal, ...]]:
    """
    Split animals into (herbivores, carnivores), each in population order.
    """
    herbivores = []
    carnivores = []
    for animal in animals:
        if animal.species is Species.HERBIVORE:
            herbivores.append(animal)
        else:
            carnivores.append(animal)
    return tuple(herbivores), tuple(carnivores)


def count_species(animals: Iterable[Animal], species: Species) -> int:
    """Number of animals of a given species."""
    return sum(1 for a in animals if a.species is species)


def next_id_after(animals: Iterable[Animal]) -> int:
    """`max(id) + 1` over the collection, or 0 when it is empty."""
    return max((a.id for a in animals), default=-1) + 1


class IdIssuer:
    """
    Monotonic id counter.

    Attributes:
        next_id: The id the next call to `issue()` will return.
    """

    __slots__ = ("next_id",)

    def __init__(self, start: int = 0):
        self.next_id = start

    @classmethod
    def seeded_from(cls, animals: Iterable[Animal], floor: int = 0) -> IdIssuer:
        """
        Start after the largest id in `animals`, but never below `floor`.

        `floor` is the run's high-water mark, which keeps ids of animals
        that have already died from being handed out again.
        """
        return cls(max(next_id_after(animals), floor))

    def issue(self) -> int:
        """Return the next id and advance the counter."""
        aid = self.next_id
        self.next_id += 1
        return aid

    def __repr__(self) -> str:
        return f"IdIssuer(next_id={self.next_id})"
