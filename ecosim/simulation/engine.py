"""
Step Engine — the per-turn state transition of the predator-prey grid.

`step(state, rng)` consumes one SimulationState and returns the next one
together with that turn's events. Phases always run in this order:

  1. Movement            every animal steps to a random legal neighbor
                         (or stays put when boxed in) and pays the move cost
  2. Herbivore feeding   each herbivore eats at most one plant on its cell,
                         the most recently added one when several share it
  3. Carnivore feeding   each carnivore eats at most one herbivore on its cell
  4. Reproduction        every survivor over its threshold spawns one offspring
  5. Mortality/regrowth  animals at energy <= 0 are removed, new plants spawn

The input state is never modified. All random draws come from the
generator passed in, in a fixed order (one movement draw per animal that
has a legal neighbor, in population order; then the regrowth count; then
x and y for each new plant), so a seeded generator reproduces a turn
exactly.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ecosim.core.animal import Animal, Species
from ecosim.core.config import EnergyConfig, RegrowthConfig, SimConfig
from ecosim.core.events import (
    SimulationEvent,
    herbivore_eaten,
    offspring_born,
    plant_eaten,
    plants_spawned,
)
from ecosim.core.plant import Plant
from ecosim.core.population import IdIssuer, add_animal, remove_where
from ecosim.core.position import Position
from ecosim.core.world import SimulationState, TurnStats
from ecosim.utils.spatial import choose, neighbors, random_position


# ---------------------------------------------------------------------------
# Phase 1: Movement
# ---------------------------------------------------------------------------

def move_animal(
    animal: Animal,
    width: int,
    height: int,
    blocked: frozenset[Position],
    rng: np.random.Generator,
    move_cost: int = 1,
) -> Animal:
    """
    Move one animal to a random legal neighbor and charge the move cost.

    An animal with no legal neighbor stays where it is and still pays.
    """
    options = neighbors(animal.position, width, height, blocked)
    if options:
        animal = animal.moved_to(choose(options, rng))
    return animal.with_energy_delta(-move_cost)


def _move_all(
    animals: tuple[Animal, ...],
    state: SimulationState,
    rng: np.random.Generator,
    energy: EnergyConfig,
    stats: TurnStats,
) -> list[Animal]:
    # Destinations depend only on each animal's own pre-move cell and the
    # obstacle set, never on where other animals ended up.
    blocked = state.obstacle_positions
    moved = []
    for animal in animals:
        after = move_animal(animal, state.width, state.height, blocked, rng, energy.move_cost)
        if after.position == animal.position:
            stats.moves_blocked += 1
        else:
            stats.moves += 1
        moved.append(after)
    return moved


# ---------------------------------------------------------------------------
# Phase 2: Herbivore feeding
# ---------------------------------------------------------------------------

def _feed_herbivores(
    animals: list[Animal],
    plants: list[Plant],
    energy: EnergyConfig,
    stats: TurnStats,
    events: list[SimulationEvent],
) -> tuple[list[Animal], list[Plant]]:
    fed = list(animals)
    remaining = list(plants)

    for i, animal in enumerate(fed):
        if animal.species is not Species.HERBIVORE:
            continue
        # Newest plant on the cell goes first.
        for j in range(len(remaining) - 1, -1, -1):
            if remaining[j].position == animal.position:
                del remaining[j]
                fed[i] = animal.with_energy_delta(energy.plant_gain)
                events.append(plant_eaten(animal, animal.position))
                stats.plants_eaten += 1
                break

    return fed, remaining


# ---------------------------------------------------------------------------
# Phase 3: Carnivore feeding
# ---------------------------------------------------------------------------

def _feed_carnivores(
    animals: list[Animal],
    energy: EnergyConfig,
    stats: TurnStats,
    events: list[SimulationEvent],
) -> list[Animal]:
    fed = list(animals)
    eaten_ids: set[int] = set()

    for i, carnivore in enumerate(fed):
        if carnivore.species is not Species.CARNIVORE:
            continue
        prey = next(
            (a for a in fed
             if a.species is Species.HERBIVORE
             and a.position == carnivore.position
             and a.id not in eaten_ids),
            None,
        )
        if prey is None:
            continue
        eaten_ids.add(prey.id)
        fed[i] = carnivore.with_energy_delta(energy.prey_gain)
        events.append(herbivore_eaten(carnivore, prey, carnivore.position))
        stats.herbivores_eaten += 1

    return list(remove_where(fed, lambda a: a.id in eaten_ids))


# ---------------------------------------------------------------------------
# Phase 4: Reproduction
# ---------------------------------------------------------------------------

def reproduction_threshold(species: Species, energy: EnergyConfig) -> int:
    if species is Species.HERBIVORE:
        return energy.herbivore_repro_threshold
    return energy.carnivore_repro_threshold


def _reproduce(
    animals: list[Animal],
    issuer: IdIssuer,
    energy: EnergyConfig,
    stats: TurnStats,
    events: list[SimulationEvent],
) -> list[Animal]:
    parents: list[Animal] = []
    offspring: tuple[Animal, ...] = ()

    for animal in animals:
        if animal.energy < reproduction_threshold(animal.species, energy):
            parents.append(animal)
            continue
        child = Animal(
            position=animal.position,
            energy=energy.offspring_energy,
            id=issuer.issue(),
            species=animal.species,
        )
        parents.append(animal.with_energy_delta(-energy.repro_cost))
        offspring = add_animal(offspring, child)
        events.append(offspring_born(animal, child))
        if animal.species is Species.HERBIVORE:
            stats.births_herbivore += 1
        else:
            stats.births_carnivore += 1

    # Offspring join after the scan so they cannot breed this turn.
    return parents + list(offspring)


# ---------------------------------------------------------------------------
# Phase 5: Mortality and plant regrowth
# ---------------------------------------------------------------------------

def _purge_dead(animals: list[Animal], stats: TurnStats) -> tuple[Animal, ...]:
    alive = remove_where(animals, lambda a: a.is_dead)
    stats.deaths_starvation += len(animals) - len(alive)
    return alive


def _regrow_plants(
    plants: list[Plant],
    width: int,
    height: int,
    rng: np.random.Generator,
    regrowth: RegrowthConfig,
    stats: TurnStats,
    events: list[SimulationEvent],
) -> tuple[Plant, ...]:
    # Plants may land on obstacles; only movement is blocked by them.
    count = int(rng.integers(regrowth.min_plants, regrowth.max_plants + 1))
    new_plants = [Plant(random_position(width, height, rng)) for _ in range(count)]
    stats.plants_spawned = count
    events.append(plants_spawned(count))
    return tuple(plants) + tuple(new_plants)


# ---------------------------------------------------------------------------
# Step
# ---------------------------------------------------------------------------

def step(
    state: SimulationState,
    rng: np.random.Generator,
    config: Optional[SimConfig] = None,
) -> tuple[SimulationState, tuple[SimulationEvent, ...]]:
    """
    Advance the simulation by one turn.

    Args:
        state: Current state (left untouched).
        rng: Random generator owned by the run.
        config: Rule constants. None = defaults.

    Returns:
        (new_state, events). `new_state.events` is the same tuple.
    """
    if config is None:
        config = SimConfig()
    energy = config.energy

    stats = TurnStats()
    events: list[SimulationEvent] = []

    # Seeded from the pre-turn population before anything can die.
    issuer = IdIssuer.seeded_from(state.animals, floor=state.next_animal_id)

    moved = _move_all(state.animals, state, rng, energy, stats)
    fed, plants = _feed_herbivores(moved, list(state.plants), energy, stats, events)
    fed = _feed_carnivores(fed, energy, stats, events)
    grown = _reproduce(fed, issuer, energy, stats, events)
    alive = _purge_dead(grown, stats)
    all_plants = _regrow_plants(
        plants, state.width, state.height, rng, config.regrowth, stats, events,
    )

    turn_events = tuple(events)
    new_state = SimulationState(
        width=state.width,
        height=state.height,
        animals=alive,
        plants=all_plants,
        obstacles=state.obstacles,
        turn=state.turn + 1,
        events=turn_events,
        stats=stats,
        next_animal_id=issuer.next_id,
    )
    return new_state, turn_events
