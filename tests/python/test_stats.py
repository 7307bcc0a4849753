from __future__ import annotations

import dataclasses

import pytest

from herd.sim.core.stats import UNSET, PopulationStats, StatsExport


def test_extrema_are_unset_until_first_value():
    stats = PopulationStats()
    exported = stats.snapshot()
    assert (exported.pop_min, exported.pop_max, exported.ill_min, exported.ill_max) == (UNSET,) * 4
    assert exported.population_counts == ()
    assert exported.ill_counts == ()


def test_consecutive_duplicates_are_dropped():
    stats = PopulationStats()
    recorded = [stats.update_population_count(n) for n in [5, 5, 6, 6, 6, 5, 7, 7]]
    assert recorded == [True, False, True, False, False, True, True, False]
    assert stats.snapshot().population_counts == (5, 6, 5, 7)


def test_series_never_repeat_and_extrema_track_series():
    stats = PopulationStats()
    values = [500, 500, 498, 502, 502, 480, 480, 481, 600, 600, 599]
    ill_values = [1, 1, 2, 3, 3, 2, 1, 1]
    for value in values:
        stats.update_population_count(value)
    for value in ill_values:
        stats.update_ill_count(value)

    exported = stats.snapshot()
    for series in (exported.population_counts, exported.ill_counts):
        assert all(a != b for a, b in zip(series, series[1:]))
    assert exported.pop_min == min(exported.population_counts) == 480
    assert exported.pop_max == max(exported.population_counts) == 600
    assert exported.ill_min == min(exported.ill_counts) == 1
    assert exported.ill_max == max(exported.ill_counts) == 3


def test_export_hands_read_only_views_to_consumer():
    stats = PopulationStats()
    stats.update_population_count(10)
    stats.update_ill_count(2)
    received: list[StatsExport] = []

    stats.export(received.append)

    assert len(received) == 1
    exported = received[0]
    assert exported.population_counts == (10,)
    assert exported.ill_counts == (2,)
    with pytest.raises(dataclasses.FrozenInstanceError):
        exported.pop_min = 0  # type: ignore[misc]

    stats.update_population_count(11)
    assert exported.population_counts == (10,)


def test_reset_clears_series_and_extrema():
    stats = PopulationStats()
    stats.update_population_count(3)
    stats.update_ill_count(1)
    stats.reset()
    assert stats.pop_min == UNSET
    assert stats.ill_max == UNSET
    assert stats.snapshot().population_counts == ()
