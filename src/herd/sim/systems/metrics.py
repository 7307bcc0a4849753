from __future__ import annotations

from typing import Sequence

from ..core.agent import Cell
from ..types.metrics import TickMetrics


def count_cells(cells: Sequence[Cell]) -> tuple[int, int, int]:
    ill = 0
    vaccinated = 0
    for cell in cells:
        if cell.is_ill():
            ill += 1
        if cell.is_vaccinated():
            vaccinated += 1
    return len(cells), ill, vaccinated


def create_metrics(
    tick: int,
    time: float,
    births: int,
    deaths: int,
    infections: int,
    seeded: bool,
    contact_checks: int,
    bounces: int,
    duration_ms: float,
    counts: tuple[int, int, int],
) -> TickMetrics:
    population, ill, vaccinated = counts
    return TickMetrics(
        tick=tick,
        time=time,
        population=population,
        ill=ill,
        vaccinated=vaccinated,
        births=births,
        deaths=deaths,
        infections=infections,
        seeded=seeded,
        contact_checks=contact_checks,
        bounces=bounces,
        tick_duration_ms=duration_ms,
    )
