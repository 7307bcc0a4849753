from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

DEFAULT_VACCINATED_PERCENTAGE = 80


class ConfigError(ValueError):
    """Raised when a configuration value is out of range or unknown."""


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def _require_int(owner: object, *names: str) -> None:
    for name in names:
        value = getattr(owner, name)
        _require(
            isinstance(value, int) and not isinstance(value, bool),
            f"{name} must be an integer, got {value!r}",
        )


@dataclass
class LifecycleConfig:
    death_age_min: int = 50
    death_age_max: int = 99
    fertile_age_min: int = 18
    fertile_age_max: int = 50
    max_children: int = 2
    growth_interval: float = 500.0
    # Drift speed is drift_speed * u1 / (u2 * drift_skew + 1), skewed towards slow movers.
    drift_speed: float = 3.0
    drift_skew: float = 5.0

    def __post_init__(self) -> None:
        _require_int(
            self, "death_age_min", "death_age_max", "fertile_age_min", "fertile_age_max", "max_children"
        )
        _require(self.death_age_min >= 1, f"death_age_min must be >= 1, got {self.death_age_min}")
        _require(
            self.death_age_min <= self.death_age_max,
            f"death_age_min ({self.death_age_min}) must not exceed death_age_max ({self.death_age_max})",
        )
        _require(self.fertile_age_min >= 0, f"fertile_age_min must be >= 0, got {self.fertile_age_min}")
        _require(
            self.fertile_age_min <= self.fertile_age_max,
            f"fertile_age_min ({self.fertile_age_min}) must not exceed fertile_age_max ({self.fertile_age_max})",
        )
        _require(self.max_children >= 0, f"max_children must be >= 0, got {self.max_children}")
        _require(self.growth_interval > 0, f"growth_interval must be positive, got {self.growth_interval}")
        _require(self.drift_speed >= 0, f"drift_speed must be >= 0, got {self.drift_speed}")
        _require(self.drift_skew >= 0, f"drift_skew must be >= 0, got {self.drift_skew}")


@dataclass
class ContagionConfig:
    contact_radius: float = 10.0
    vaccinated_percentage: int = DEFAULT_VACCINATED_PERCENTAGE
    seed_interval: float = 10_000.0

    def __post_init__(self) -> None:
        _require(self.contact_radius > 0, f"contact_radius must be positive, got {self.contact_radius}")
        _require(
            0 <= self.vaccinated_percentage <= 100,
            f"vaccinated_percentage must be within 0..100, got {self.vaccinated_percentage}",
        )
        _require(self.seed_interval > 0, f"seed_interval must be positive, got {self.seed_interval}")


@dataclass
class SimulationConfig:
    world_width: int = 1500
    world_height: int = 700
    initial_population: int = 500
    # Milliseconds of simulated time per tick (60 frames per second).
    time_step: float = 1000.0 / 60.0
    seed: int = 42
    config_version: str = "v1"
    lifecycle: LifecycleConfig = field(default_factory=LifecycleConfig)
    contagion: ContagionConfig = field(default_factory=ContagionConfig)

    def __post_init__(self) -> None:
        _require_int(self, "world_width", "world_height", "initial_population", "seed")
        _require(self.world_width > 0, f"world_width must be positive, got {self.world_width}")
        _require(self.world_height > 0, f"world_height must be positive, got {self.world_height}")
        _require(
            self.initial_population >= 0,
            f"initial_population must be >= 0, got {self.initial_population}",
        )
        _require(self.time_step > 0, f"time_step must be positive, got {self.time_step}")

    @property
    def center(self) -> tuple[float, float]:
        return self.world_width / 2, self.world_height / 2

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        data = yaml.safe_load(Path(path).read_text()) or {}
        return load_config(data)


def _section(cls: type, raw: Any, name: str) -> Any:
    if raw is None:
        return cls()
    _require(isinstance(raw, dict), f"'{name}' section must be a mapping, got {type(raw).__name__}")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(raw) - known)
    _require(not unknown, f"Unknown keys in '{name}': {', '.join(unknown)}")
    return cls(**raw)


def load_config(raw: dict) -> SimulationConfig:
    _require(isinstance(raw, dict), f"configuration must be a mapping, got {type(raw).__name__}")
    lifecycle = _section(LifecycleConfig, raw.get("lifecycle"), "lifecycle")
    contagion = _section(ContagionConfig, raw.get("contagion"), "contagion")
    sim_values = {k: v for k, v in raw.items() if k not in {"lifecycle", "contagion"}}
    known = {f.name for f in fields(SimulationConfig)}
    unknown = sorted(set(sim_values) - known)
    _require(not unknown, f"Unknown configuration keys: {', '.join(unknown)}")
    return SimulationConfig(lifecycle=lifecycle, contagion=contagion, **sim_values)
