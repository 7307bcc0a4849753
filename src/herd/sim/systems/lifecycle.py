from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pygame.math import Vector2

from ..core.agent import MAX_RADIUS, Age, Cell, CellState, Health, Vaccination
from ..core.config import SimulationConfig
from ..core.rng import DeterministicRng

if TYPE_CHECKING:
    from ..core.world import World

logger = logging.getLogger(__name__)


class CellFactory:
    """Creates cells with independently drawn lifespan, vaccination, drift and child quota.

    Every draw goes through the injected RNG in a fixed order, so a seeded
    generator reproduces the same population.
    """

    def __init__(self, config: SimulationConfig, rng: DeterministicRng):
        self._config = config
        self._rng = rng
        self._next_id = 0

    def reset(self) -> None:
        self._next_id = 0

    def make(self, x: float, y: float, health: Health, now: float) -> Cell:
        lifecycle = self._config.lifecycle
        rng = self._rng
        death_years = rng.next_int_inclusive(lifecycle.death_age_min, lifecycle.death_age_max)
        vaccination = (
            Vaccination.VACCINATED
            if rng.next_percent_chance(self._config.contagion.vaccinated_percentage)
            else Vaccination.NOT_VACCINATED
        )
        velocity = Vector2(self._drift_component(), self._drift_component())
        children = rng.next_int_inclusive(0, lifecycle.max_children)
        cell = Cell(
            id=self._next_id,
            state=CellState(
                position=Vector2(x, y),
                age=Age(0, death_years),
                health=health,
                vaccination=vaccination,
            ),
            velocity=velocity,
            last_growth_timestamp=now,
            min_time_between_growths=lifecycle.growth_interval,
            children_remaining=children,
        )
        self._next_id += 1
        return cell

    def _drift_component(self) -> float:
        lifecycle = self._config.lifecycle
        rng = self._rng
        magnitude = rng.next_float() * lifecycle.drift_speed / (rng.next_float() * lifecycle.drift_skew + 1)
        return magnitude * rng.next_sign()


def bootstrap_population(world: World) -> None:
    config = world._config
    rng = world._rng
    max_x = max(1, config.world_width - MAX_RADIUS - 1)
    max_y = max(1, config.world_height - MAX_RADIUS - 1)
    for _ in range(config.initial_population):
        x = rng.next_int(max_x)
        y = rng.next_int(max_y)
        world._cells.append(world._factory.make(x, y, Health.SOUND, world._start_time))
    logger.info(
        "Bootstrapped %d cells in a %dx%d arena (seed=%d)",
        len(world._cells),
        config.world_width,
        config.world_height,
        config.seed,
    )


def maybe_seed_infection(world: World, now: float) -> Cell | None:
    config = world._config
    if now - world._last_seed_time <= config.contagion.seed_interval:
        return None
    center_x, center_y = config.center
    seed = world._factory.make(center_x, center_y, Health.ILL, now)
    world._cells.append(seed)
    world._last_seed_time = now
    logger.debug("Seeded ill cell %d at (%.1f, %.1f), t=%.1f", seed.id, center_x, center_y, now)
    return seed
