from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..core.stats import StatsExport
from .metrics import TickMetrics


@dataclass(slots=True)
class Snapshot:
    tick: int
    metrics: TickMetrics
    cells: List["CellView"]
    stats: StatsExport
    world: "SnapshotWorld"
    metadata: "SnapshotMetadata"


@dataclass(frozen=True, slots=True)
class CellView:
    x: float
    y: float
    radius: float
    color: str


@dataclass(slots=True)
class SnapshotWorld:
    width: int
    height: int


@dataclass(slots=True)
class SnapshotMetadata:
    sim_dt: float
    tick_rate: float
    seed: int
    config_version: str
