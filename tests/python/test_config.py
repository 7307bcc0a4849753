from __future__ import annotations

import pytest

from herd.sim.core.config import (
    DEFAULT_VACCINATED_PERCENTAGE,
    ConfigError,
    ContagionConfig,
    LifecycleConfig,
    SimulationConfig,
    load_config,
)


def test_defaults_match_documented_values():
    config = SimulationConfig()
    assert (config.world_width, config.world_height) == (1500, 700)
    assert config.initial_population == 500
    assert config.center == (750.0, 350.0)
    assert config.contagion.contact_radius == 10.0
    assert config.contagion.vaccinated_percentage == DEFAULT_VACCINATED_PERCENTAGE == 80
    assert config.contagion.seed_interval == 10_000.0
    assert config.lifecycle.growth_interval == 500.0
    assert (config.lifecycle.fertile_age_min, config.lifecycle.fertile_age_max) == (18, 50)
    assert (config.lifecycle.death_age_min, config.lifecycle.death_age_max) == (50, 99)


@pytest.mark.parametrize(
    "factory, field_name",
    [
        (lambda: SimulationConfig(world_width=0), "world_width"),
        (lambda: SimulationConfig(world_height=-5), "world_height"),
        (lambda: SimulationConfig(initial_population=-1), "initial_population"),
        (lambda: SimulationConfig(time_step=0.0), "time_step"),
        (lambda: ContagionConfig(vaccinated_percentage=101), "vaccinated_percentage"),
        (lambda: ContagionConfig(contact_radius=0.0), "contact_radius"),
        (lambda: ContagionConfig(seed_interval=-1.0), "seed_interval"),
        (lambda: LifecycleConfig(death_age_min=90, death_age_max=60), "death_age_min"),
        (lambda: LifecycleConfig(fertile_age_min=40, fertile_age_max=20), "fertile_age_min"),
        (lambda: LifecycleConfig(max_children=-1), "max_children"),
        (lambda: LifecycleConfig(growth_interval=0.0), "growth_interval"),
        (lambda: SimulationConfig(world_width=1500.5), "world_width"),
        (lambda: SimulationConfig(initial_population=10.0), "initial_population"),
        (lambda: SimulationConfig(seed=1.5), "seed"),
        (lambda: LifecycleConfig(death_age_max=99.5), "death_age_max"),
        (lambda: LifecycleConfig(fertile_age_min=True), "fertile_age_min"),
        (lambda: LifecycleConfig(max_children=2.0), "max_children"),
    ],
)
def test_invalid_values_are_rejected_eagerly(factory, field_name):
    with pytest.raises(ConfigError, match=field_name):
        factory()


def test_config_error_is_a_value_error():
    with pytest.raises(ValueError):
        SimulationConfig(world_width=0)


def test_load_config_merges_sections():
    config = load_config(
        {
            "world_width": 800,
            "seed": 9,
            "contagion": {"vaccinated_percentage": 90},
            "lifecycle": {"max_children": 3},
        }
    )
    assert config.world_width == 800
    assert config.world_height == 700
    assert config.seed == 9
    assert config.contagion.vaccinated_percentage == 90
    assert config.contagion.contact_radius == 10.0
    assert config.lifecycle.max_children == 3


def test_load_config_rejects_unknown_keys():
    with pytest.raises(ConfigError, match="population_size"):
        load_config({"population_size": 10})
    with pytest.raises(ConfigError, match="radius"):
        load_config({"contagion": {"radius": 3.0}})


def test_from_yaml(tmp_path):
    path = tmp_path / "herd.yaml"
    path.write_text(
        "initial_population: 25\n"
        "contagion:\n"
        "  seed_interval: 2000\n"
        "lifecycle:\n"
        "  growth_interval: 100\n"
    )
    config = SimulationConfig.from_yaml(path)
    assert config.initial_population == 25
    assert config.contagion.seed_interval == 2000
    assert config.lifecycle.growth_interval == 100


def test_from_yaml_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert SimulationConfig.from_yaml(path) == SimulationConfig()


def test_from_yaml_invalid_value(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("world_height: 0\n")
    with pytest.raises(ConfigError, match="world_height"):
        SimulationConfig.from_yaml(path)


def test_from_yaml_rejects_fractional_arena(tmp_path):
    path = tmp_path / "fractional.yaml"
    path.write_text("world_width: 1500.5\nlifecycle:\n  death_age_min: 50.0\n")
    with pytest.raises(ConfigError, match="must be an integer"):
        SimulationConfig.from_yaml(path)
