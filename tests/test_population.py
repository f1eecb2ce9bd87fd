"""
Unit tests for the population model.

Tests cover:
- Position value semantics
- Animal record transitions (move, energy) and serialization
- Collection helpers (add, remove-by-predicate, partition-by-species)
- Id issuance (seeding from max id, high-water floor, monotonic)
- Event message formats
"""

import pytest

from ecosim.core.animal import Animal, Species
from ecosim.core.events import (
    EventKind,
    herbivore_eaten,
    offspring_born,
    plant_eaten,
    plants_spawned,
)
from ecosim.core.position import Position
from ecosim.core.population import (
    IdIssuer,
    add_animal,
    count_species,
    next_id_after,
    partition_by_species,
    remove_where,
)


def herb(aid: int, x: int = 0, y: int = 0, energy: int = 50) -> Animal:
    return Animal(Position(x, y), energy, aid, Species.HERBIVORE)


def carn(aid: int, x: int = 0, y: int = 0, energy: int = 50) -> Animal:
    return Animal(Position(x, y), energy, aid, Species.CARNIVORE)


# ---------------------------------------------------------------------------
# Position
# ---------------------------------------------------------------------------

class TestPosition:
    def test_equality_by_value(self):
        assert Position(2, 3) == Position(2, 3)
        assert Position(2, 3) is not Position(2, 3)

    def test_hashable(self):
        assert len({Position(1, 1), Position(1, 1), Position(1, 2)}) == 2

    def test_immutable(self):
        p = Position(1, 1)
        with pytest.raises(AttributeError):
            p.x = 5

    def test_str(self):
        assert str(Position(4, 7)) == "(4, 7)"

    def test_as_tuple(self):
        assert Position(4, 7).as_tuple() == (4, 7)


# ---------------------------------------------------------------------------
# Animal
# ---------------------------------------------------------------------------

class TestAnimal:
    def test_basic_fields(self):
        a = herb(3, 1, 2, energy=40)
        assert a.id == 3
        assert a.x == 1 and a.y == 2
        assert a.energy == 40
        assert a.is_herbivore is True
        assert a.is_carnivore is False

    def test_moved_to_returns_copy(self):
        a = herb(0, 1, 1)
        b = a.moved_to(Position(2, 1))
        assert b.position == Position(2, 1)
        assert a.position == Position(1, 1)
        assert b.id == a.id and b.energy == a.energy

    def test_energy_delta(self):
        a = carn(1, energy=50)
        assert a.with_energy_delta(-1).energy == 49
        assert a.with_energy_delta(30).energy == 80
        assert a.energy == 50

    def test_is_dead(self):
        assert herb(0, energy=0).is_dead is True
        assert herb(0, energy=-3).is_dead is True
        assert herb(0, energy=1).is_dead is False

    def test_frozen(self):
        a = herb(0)
        with pytest.raises(AttributeError):
            a.energy = 10

    def test_dict_roundtrip(self):
        a = carn(9, 4, 5, energy=77)
        d = a.to_dict()
        assert d == {"id": 9, "species": "Carnivore", "x": 4, "y": 5, "energy": 77}
        assert Animal.from_dict(d) == a

    def test_repr(self):
        assert "Herbivore" in repr(herb(0))

    def test_species_label(self):
        assert Species.HERBIVORE.label == "Herbivore"
        assert Species.CARNIVORE.label == "Carnivore"


# ---------------------------------------------------------------------------
# Collection helpers
# ---------------------------------------------------------------------------

class TestCollections:
    def test_add_appends(self):
        animals = (herb(0),)
        result = add_animal(animals, carn(1))
        assert [a.id for a in result] == [0, 1]
        assert len(animals) == 1

    def test_remove_where_keeps_order(self):
        animals = (herb(0), carn(1), herb(2), carn(3))
        result = remove_where(animals, lambda a: a.id in {1, 2})
        assert [a.id for a in result] == [0, 3]

    def test_remove_where_nothing_matches(self):
        animals = (herb(0), herb(1))
        assert remove_where(animals, lambda a: False) == animals

    def test_partition_preserves_population_order(self):
        animals = (carn(5), herb(1), carn(2), herb(7))
        herbivores, carnivores = partition_by_species(animals)
        assert [a.id for a in herbivores] == [1, 7]
        assert [a.id for a in carnivores] == [5, 2]

    def test_partition_empty(self):
        assert partition_by_species(()) == ((), ())

    def test_count_species(self):
        animals = (carn(0), herb(1), herb(2))
        assert count_species(animals, Species.HERBIVORE) == 2
        assert count_species(animals, Species.CARNIVORE) == 1


# ---------------------------------------------------------------------------
# Id issuance
# ---------------------------------------------------------------------------

class TestIdIssuer:
    def test_next_id_after_empty(self):
        assert next_id_after(()) == 0

    def test_next_id_after_max(self):
        assert next_id_after((herb(4), carn(11), herb(2))) == 12

    def test_seeded_from_empty_population(self):
        assert IdIssuer.seeded_from(()).issue() == 0

    def test_seeded_from_max_id(self):
        issuer = IdIssuer.seeded_from((herb(3), carn(8)))
        assert issuer.issue() == 9

    def test_floor_wins_when_higher(self):
        issuer = IdIssuer.seeded_from((herb(3),), floor=20)
        assert issuer.issue() == 20

    def test_max_wins_when_higher(self):
        issuer = IdIssuer.seeded_from((herb(30),), floor=20)
        assert issuer.issue() == 31

    def test_monotonic(self):
        issuer = IdIssuer(5)
        assert [issuer.issue() for _ in range(4)] == [5, 6, 7, 8]
        assert issuer.next_id == 9


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

class TestEventMessages:
    def test_plant_eaten(self):
        e = plant_eaten(herb(4), Position(3, 3))
        assert e.kind is EventKind.HERBIVORE_ATE
        assert e.message == "Herbivore #4 ate a plant at (3, 3)."

    def test_herbivore_eaten(self):
        e = herbivore_eaten(carn(7), herb(2), Position(1, 0))
        assert e.kind is EventKind.CARNIVORE_ATE
        assert e.message == "Carnivore #7 ate Herbivore #2 at (1, 0)."

    def test_offspring_born(self):
        parent = carn(7, 5, 6)
        child = carn(12, 5, 6, energy=30)
        e = offspring_born(parent, child)
        assert e.kind is EventKind.REPRODUCED
        assert e.message == "Carnivore #7 reproduced an offspring with id (#12) at (5, 6)."

    def test_plants_spawned(self):
        e = plants_spawned(4)
        assert e.kind is EventKind.PLANTS_SPAWNED
        assert str(e) == "4 new plant(s) spawned."

    def test_to_dict(self):
        assert plants_spawned(1).to_dict() == {
            "kind": "plants_spawned",
            "message": "1 new plant(s) spawned.",
        }
