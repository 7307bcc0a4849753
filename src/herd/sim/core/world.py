from __future__ import annotations

import logging
from time import perf_counter
from typing import Iterator, List, Sequence, Set, Tuple

from .agent import Cell, Health
from .config import SimulationConfig
from .rng import DeterministicRng
from .stats import PopulationStats
from ..systems import boundaries, contagion, lifecycle, metrics as metrics_system
from ..types.metrics import TickMetrics
from ..types.snapshot import CellView, Snapshot, SnapshotMetadata, SnapshotWorld

logger = logging.getLogger(__name__)


class World:
    """Owns the live cells and advances them one tick at a time.

    A tick reads a stable snapshot of the cell list: every cell moves and ages,
    exposures are detected against the illness state from previous ticks,
    then deaths, bounces and births are collected. Infections, removals and
    insertions are applied only once that read phase is over.
    """

    def __init__(self, config: SimulationConfig, rng: DeterministicRng | None = None, start_time: float = 0.0):
        self._config = config
        self._rng = rng if rng is not None else DeterministicRng(config.seed)
        self._factory = lifecycle.CellFactory(config, self._rng)
        self._stats = PopulationStats()
        self._cells: List[Cell] = []
        self._start_time = start_time
        self._last_seed_time = start_time
        self._tick = 0
        self._metrics: TickMetrics | None = None
        lifecycle.bootstrap_population(self)

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def cells(self) -> Sequence[Cell]:
        return tuple(self._cells)

    @property
    def stats(self) -> PopulationStats:
        return self._stats

    @property
    def metrics(self) -> TickMetrics | None:
        return self._metrics

    @property
    def last_seed_time(self) -> float:
        return self._last_seed_time

    @property
    def start_time(self) -> float:
        return self._start_time

    def reset(self, start_time: float | None = None) -> None:
        if start_time is not None:
            self._start_time = start_time
        self._cells.clear()
        self._stats.reset()
        self._rng.reset()
        self._factory.reset()
        self._last_seed_time = self._start_time
        self._tick = 0
        self._metrics = None
        logger.debug("World reset (seed=%d)", self._config.seed)
        lifecycle.bootstrap_population(self)

    def spawn(self, x: float, y: float, health: Health = Health.SOUND, now: float = 0.0) -> Cell:
        cell = self._factory.make(x, y, health, now)
        self._cells.append(cell)
        return cell

    def step(self, tick: int) -> TickMetrics:
        return self._advance(tick, self._start_time + tick * self._config.time_step)

    def update(self, now: float) -> TickMetrics:
        return self._advance(self._tick, now)

    def _advance(self, tick: int, now: float) -> TickMetrics:
        start = perf_counter()
        config = self._config
        lifecycle_config = config.lifecycle
        cells = list(self._cells)

        for cell in cells:
            cell.animate(now)

        exposed, contact_checks = contagion.detect_exposures(cells, config.contagion.contact_radius)

        dead_ids: Set[int] = set()
        born: List[Cell] = []
        bounces = 0
        for cell in cells:
            if cell.is_dead():
                dead_ids.add(cell.id)
                continue
            if boundaries.bounce(cell, config.world_width, config.world_height):
                bounces += 1
            if cell.is_fertile(lifecycle_config.fertile_age_min, lifecycle_config.fertile_age_max):
                born.append(cell.deliver_child(self._factory, now))

        newly_ill = contagion.apply_infections(cells, exposed)
        for cell in newly_ill:
            # Illness can shorten the lifespan down to the current age.
            if cell.is_dead():
                dead_ids.add(cell.id)

        self._cells = [cell for cell in cells if cell.id not in dead_ids]
        self._cells.extend(born)

        seeded = lifecycle.maybe_seed_infection(self, now) is not None

        counts = metrics_system.count_cells(self._cells)
        population, ill, _ = counts
        self._stats.update_population_count(population)
        if ill > 0:
            self._stats.update_ill_count(ill)

        self._tick = tick + 1
        elapsed_ms = (perf_counter() - start) * 1000.0
        metrics = metrics_system.create_metrics(
            tick,
            now,
            births=len(born),
            deaths=len(dead_ids),
            infections=len(newly_ill),
            seeded=seeded,
            contact_checks=contact_checks,
            bounces=bounces,
            duration_ms=elapsed_ms,
            counts=counts,
        )
        self._metrics = metrics
        return metrics

    def iter_drawables(self) -> Iterator[Tuple[Tuple[float, float], float, str]]:
        for cell in self._cells:
            state = cell.state
            yield (state.x, state.y), state.radius, state.color

    def snapshot(self, tick: int) -> Snapshot:
        metrics = self._metrics if self._metrics is not None else self._metrics_from_state(tick)
        config = self._config
        cells = [CellView(x=x, y=y, radius=radius, color=color) for (x, y), radius, color in self.iter_drawables()]
        metadata = SnapshotMetadata(
            sim_dt=config.time_step,
            tick_rate=1000.0 / config.time_step,
            seed=config.seed,
            config_version=config.config_version,
        )
        return Snapshot(
            tick=tick,
            metrics=metrics,
            cells=cells,
            stats=self._stats.snapshot(),
            world=SnapshotWorld(width=config.world_width, height=config.world_height),
            metadata=metadata,
        )

    def key_pressed(self, key: int) -> None:
        pass

    def key_released(self, key: int) -> None:
        pass

    def _metrics_from_state(self, tick: int) -> TickMetrics:
        return metrics_system.create_metrics(
            tick,
            self._start_time + tick * self._config.time_step,
            births=0,
            deaths=0,
            infections=0,
            seeded=False,
            contact_checks=0,
            bounces=0,
            duration_ms=0.0,
            counts=metrics_system.count_cells(self._cells),
        )
