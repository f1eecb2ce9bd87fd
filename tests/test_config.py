"""
Unit tests for the configuration system.

Tests cover:
- Default values
- Validation of each section
- JSON save/load round trip and partial files
- Unknown key warnings
- Dotted parameter overrides
"""

import json
import warnings
from pathlib import Path

import pytest

from ecosim.core.config import (
    SimConfig,
    apply_param_override,
    get_default_config,
    load_config,
    save_config,
)


@pytest.fixture
def config() -> SimConfig:
    return get_default_config()


class TestDefaults:
    def test_world(self, config):
        assert config.world.width == 20
        assert config.world.height == 20
        assert config.world.seed == 42

    def test_population(self, config):
        assert config.population.herbivore_count == 15
        assert config.population.carnivore_count == 5
        assert config.population.plant_count == 30
        assert config.population.obstacle_count == 15
        assert config.population.initial_energy == 50

    def test_energy(self, config):
        e = config.energy
        assert (e.move_cost, e.plant_gain, e.prey_gain) == (1, 20, 30)
        assert e.herbivore_repro_threshold == 60
        assert e.carnivore_repro_threshold == 80
        assert e.repro_cost == 30
        assert e.offspring_energy == 30

    def test_regrowth(self, config):
        assert (config.regrowth.min_plants, config.regrowth.max_plants) == (1, 7)

    def test_run_until_collapse(self, config):
        assert config.run.max_turns is None

    def test_valid(self, config):
        assert config.validate() == []

    def test_default_file_matches(self):
        cfg = load_config(Path(__file__).parent.parent / "config" / "default_config.json")
        assert cfg.to_dict() == SimConfig().to_dict()


class TestValidation:
    def test_bad_width(self, config):
        config.world.width = 0
        assert any("world.width" in e for e in config.validate())

    def test_negative_seed(self, config):
        config.world.seed = -5
        assert any("world.seed" in e for e in config.validate())

    def test_null_seed_ok(self, config):
        config.world.seed = None
        assert config.validate() == []

    def test_negative_count(self, config):
        config.population.plant_count = -1
        assert any("population.plant_count" in e for e in config.validate())

    def test_threshold_must_exceed_cost(self, config):
        config.energy.herbivore_repro_threshold = 30
        errors = config.validate()
        assert any("herbivore_repro_threshold" in e for e in errors)

    def test_regrowth_range(self, config):
        config.regrowth.min_plants = 5
        config.regrowth.max_plants = 2
        assert any("regrowth.max_plants" in e for e in config.validate())

    def test_max_turns(self, config):
        config.run.max_turns = 0
        assert any("run.max_turns" in e for e in config.validate())

    def test_viz_mode(self, config):
        config.viz.mode = "fancy"
        assert any("viz.mode" in e for e in config.validate())

    def test_errors_accumulate(self, config):
        config.world.width = 0
        config.viz.turn_delay_seconds = -1
        assert len(config.validate()) == 2


class TestJsonIO:
    def test_round_trip(self, config, tmp_path):
        config.world.seed = 7
        config.energy.plant_gain = 25
        path = tmp_path / "cfg.json"
        save_config(config, path)
        loaded = load_config(path)
        assert loaded.to_dict() == config.to_dict()

    def test_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"world": {"width": 9}}))
        cfg = load_config(path)
        assert cfg.world.width == 9
        assert cfg.world.height == 20
        assert cfg.population.herbivore_count == 15

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.json")

    def test_invalid_values_rejected(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"world": {"height": 0}}))
        with pytest.raises(ValueError, match="world.height"):
            load_config(path)

    def test_unknown_key_warns(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            cfg = SimConfig.from_dict({"world": {"width": 5, "depth": 3}})
        assert cfg.world.width == 5
        assert any("depth" in str(w.message) for w in caught)

    def test_copy_is_independent(self, config):
        clone = config.copy()
        clone.population.herbivore_count = 99
        assert config.population.herbivore_count == 15


class TestParamOverride:
    def test_override(self, config):
        apply_param_override(config, "population.herbivore_count", 40)
        assert config.population.herbivore_count == 40

    def test_bad_section(self, config):
        with pytest.raises(KeyError):
            apply_param_override(config, "weather.rain", 1)

    def test_bad_field(self, config):
        with pytest.raises(KeyError):
            apply_param_override(config, "energy.teleport_cost", 1)
