from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TickMetrics:
    tick: int
    time: float
    population: int
    ill: int
    vaccinated: int
    births: int
    deaths: int
    infections: int
    seeded: bool
    contact_checks: int
    bounces: int
    tick_duration_ms: float = 0.0
