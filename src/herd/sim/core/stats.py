from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Tuple

UNSET = -1


@dataclass(frozen=True, slots=True)
class StatsExport:
    pop_min: int
    pop_max: int
    ill_min: int
    ill_max: int
    population_counts: Tuple[int, ...]
    ill_counts: Tuple[int, ...]


@dataclass(slots=True)
class _Series:
    values: List[int] = field(default_factory=list)
    minimum: int = UNSET
    maximum: int = UNSET

    def record(self, value: int) -> bool:
        if self.values and self.values[-1] == value:
            return False
        self.minimum = value if self.minimum == UNSET else min(self.minimum, value)
        self.maximum = value if self.maximum == UNSET else max(self.maximum, value)
        self.values.append(value)
        return True


class PopulationStats:
    """Run-length compressed population and illness series with running extrema.

    A value is only appended when it differs from the last recorded one, so the
    series hold change points rather than one entry per tick. Extrema stay at
    ``UNSET`` until the first value arrives.
    """

    def __init__(self) -> None:
        self._population = _Series()
        self._ill = _Series()

    def update_population_count(self, count: int) -> bool:
        return self._population.record(count)

    def update_ill_count(self, count: int) -> bool:
        return self._ill.record(count)

    @property
    def pop_min(self) -> int:
        return self._population.minimum

    @property
    def pop_max(self) -> int:
        return self._population.maximum

    @property
    def ill_min(self) -> int:
        return self._ill.minimum

    @property
    def ill_max(self) -> int:
        return self._ill.maximum

    def snapshot(self) -> StatsExport:
        return StatsExport(
            pop_min=self._population.minimum,
            pop_max=self._population.maximum,
            ill_min=self._ill.minimum,
            ill_max=self._ill.maximum,
            population_counts=tuple(self._population.values),
            ill_counts=tuple(self._ill.values),
        )

    def export(self, consumer: Callable[[StatsExport], None]) -> None:
        consumer(self.snapshot())

    def reset(self) -> None:
        self._population = _Series()
        self._ill = _Series()
