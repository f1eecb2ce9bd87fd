"""
Settings for a predator-prey run.

One dataclass per concern (grid, starting population, energy rules, plant
regrowth, run length, presentation), nested under SimConfig. Every section
checks itself with validate(); JSON files only need the keys they change.
"""

from __future__ import annotations

import json
import warnings
from copy import deepcopy
from dataclasses import asdict, dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Optional


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

@dataclass
class WorldConfig:
    """Grid and randomness settings."""
    width: int = 20
    height: int = 20
    seed: Optional[int] = 42   # None = fresh entropy every run

    def validate(self) -> list[str]:
        errors = []
        if self.width < 1:
            errors.append(f"world.width must be >= 1, got {self.width}")
        if self.height < 1:
            errors.append(f"world.height must be >= 1, got {self.height}")
        if self.seed is not None and self.seed < 0:
            errors.append(f"world.seed must be >= 0 or null, got {self.seed}")
        return errors


@dataclass
class PopulationConfig:
    """Turn-0 counts and starting energy."""
    herbivore_count: int = 15
    carnivore_count: int = 5
    plant_count: int = 30
    obstacle_count: int = 15
    initial_energy: int = 50

    def validate(self) -> list[str]:
        errors = []
        for name in ("herbivore_count", "carnivore_count", "plant_count", "obstacle_count"):
            value = getattr(self, name)
            if value < 0:
                errors.append(f"population.{name} must be >= 0, got {value}")
        if self.initial_energy < 1:
            errors.append(f"population.initial_energy must be >= 1, got {self.initial_energy}")
        return errors


@dataclass
class EnergyConfig:
    """Energy mechanics: costs, gains and reproduction thresholds."""
    move_cost: int = 1
    plant_gain: int = 20
    prey_gain: int = 30
    herbivore_repro_threshold: int = 60
    carnivore_repro_threshold: int = 80
    repro_cost: int = 30
    offspring_energy: int = 30

    def validate(self) -> list[str]:
        errors = []
        for name in ("move_cost", "plant_gain", "prey_gain", "repro_cost"):
            value = getattr(self, name)
            if value < 0:
                errors.append(f"energy.{name} must be >= 0, got {value}")
        if self.offspring_energy < 1:
            errors.append(f"energy.offspring_energy must be >= 1, got {self.offspring_energy}")
        for name in ("herbivore_repro_threshold", "carnivore_repro_threshold"):
            value = getattr(self, name)
            if value <= self.repro_cost:
                errors.append(
                    f"energy.{name} must be > energy.repro_cost ({self.repro_cost}), got {value}"
                )
        return errors


@dataclass
class RegrowthConfig:
    """Plant regrowth: a uniform count in [min_plants, max_plants] per turn."""
    min_plants: int = 1
    max_plants: int = 7

    def validate(self) -> list[str]:
        errors = []
        if self.min_plants < 0:
            errors.append(f"regrowth.min_plants must be >= 0, got {self.min_plants}")
        if self.max_plants < self.min_plants:
            errors.append(
                f"regrowth.max_plants must be >= min_plants ({self.min_plants}), got {self.max_plants}"
            )
        return errors


@dataclass
class RunConfig:
    """Run length settings."""
    max_turns: Optional[int] = None   # None = run until collapse

    def validate(self) -> list[str]:
        errors = []
        if self.max_turns is not None and self.max_turns < 1:
            errors.append(f"run.max_turns must be >= 1 or null, got {self.max_turns}")
        return errors


@dataclass
class VizConfig:
    """Visualization, pacing and output settings."""
    mode: str = "console"               # "console" or "headless"
    turn_delay_seconds: float = 2.0
    wait_for_key: bool = True
    output_dir: str = "runs"
    snapshot_every_n_turns: int = 0     # 0 = no snapshots

    def validate(self) -> list[str]:
        errors = []
        if self.mode not in ("console", "headless"):
            errors.append(f"viz.mode must be 'console' or 'headless', got '{self.mode}'")
        if self.turn_delay_seconds < 0:
            errors.append(f"viz.turn_delay_seconds must be >= 0, got {self.turn_delay_seconds}")
        if self.snapshot_every_n_turns < 0:
            errors.append(
                f"viz.snapshot_every_n_turns must be >= 0, got {self.snapshot_every_n_turns}"
            )
        return errors


# ---------------------------------------------------------------------------
# SimConfig
# ---------------------------------------------------------------------------

@dataclass
class SimConfig:
    """
    All settings of a run. Defaults reproduce the classic 20x20 ecosystem.
    """
    world: WorldConfig = field(default_factory=WorldConfig)
    population: PopulationConfig = field(default_factory=PopulationConfig)
    energy: EnergyConfig = field(default_factory=EnergyConfig)
    regrowth: RegrowthConfig = field(default_factory=RegrowthConfig)
    run: RunConfig = field(default_factory=RunConfig)
    viz: VizConfig = field(default_factory=VizConfig)

    def validate(self) -> list[str]:
        """Problems found in every section; empty when the config is usable."""
        return [error for f in fields(self) for error in getattr(self, f.name).validate()]

    def to_dict(self) -> dict[str, Any]:
        """Plain nested dict, ready for json.dump."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SimConfig:
        """Defaults overlaid with whatever `data` provides."""
        config = cls()
        _overlay(config, data)
        return config

    def copy(self) -> SimConfig:
        """Independent copy; nested sections are not shared."""
        return deepcopy(self)


# ---------------------------------------------------------------------------
# Files and overrides
# ---------------------------------------------------------------------------

def _overlay(target: Any, source: dict[str, Any]) -> None:
    """
    Overlay `source` onto a (nested) dataclass in place.
    Keys the dataclass does not have are reported with a UserWarning and skipped.
    """
    if not isinstance(source, dict):
        return

    names = {f.name for f in fields(target)}
    for key, value in source.items():
        if key not in names:
            warnings.warn(
                f"{type(target).__name__} has no setting '{key}'; ignored.",
                UserWarning,
                stacklevel=3,
            )
        elif is_dataclass(getattr(target, key)) and isinstance(value, dict):
            _overlay(getattr(target, key), value)
        else:
            setattr(target, key, value)


def load_config(path: str | Path) -> SimConfig:
    """
    Read a JSON settings file. Keys it omits keep their defaults.

    Args:
        path: JSON file.

    Returns:
        A SimConfig that passed validate().

    Raises:
        FileNotFoundError: No such file.
        json.JSONDecodeError: Not valid JSON.
        ValueError: One or more settings out of range (all are listed).
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"No config file at {path}")

    config = SimConfig.from_dict(json.loads(path.read_text(encoding="utf-8")))

    problems = config.validate()
    if problems:
        raise ValueError(f"{path}: invalid settings\n" + "\n".join(f"  - {p}" for p in problems))
    return config


def save_config(config: SimConfig, path: str | Path) -> None:
    """Write `config` as indented JSON, creating parent folders."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)


def get_default_config() -> SimConfig:
    """A new SimConfig with every default."""
    return SimConfig()


def apply_param_override(config: SimConfig, dotted_key: str, value: Any) -> None:
    """
    Set one setting addressed as "section.field".

    Example:
        apply_param_override(config, "population.herbivore_count", 40)
        apply_param_override(config, "energy.plant_gain", 25)

    Raises:
        KeyError: The section or field does not exist.
    """
    parts = dotted_key.split(".")
    target: Any = config
    for depth, part in enumerate(parts, start=1):
        if not is_dataclass(target) or part not in {f.name for f in fields(target)}:
            raise KeyError(f"Unknown setting '{dotted_key}': no '{part}' in {type(target).__name__}")
        if depth < len(parts):
            target = getattr(target, part)

    setattr(target, parts[-1], value)
