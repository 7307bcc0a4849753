from __future__ import annotations

import argparse
import csv
import json
import logging
import math
from pathlib import Path
from typing import Optional

from ..sim.core.config import SimulationConfig
from ..sim.core.world import World
from ..sim.types.metrics import TickMetrics

logger = logging.getLogger(__name__)

_BASIC_HEADER = [
    "tick",
    "time_ms",
    "population",
    "ill",
    "vaccinated",
    "births",
    "deaths",
    "infections",
    "seeded",
    "contact_checks",
    "tick_ms",
]

_DETAILED_HEADER = _BASIC_HEADER + [
    "bounces",
    "ill_ratio",
    "vaccinated_ratio",
    "births_per_cell",
    "deaths_per_cell",
    "contact_checks_per_cell",
    "avg_age",
    "max_age",
    "avg_radius",
    "avg_speed",
]


def _format_basic_row(metrics: TickMetrics, tick_ms: float) -> list[object]:
    return [
        metrics.tick,
        f"{metrics.time:.3f}",
        metrics.population,
        metrics.ill,
        metrics.vaccinated,
        metrics.births,
        metrics.deaths,
        metrics.infections,
        int(metrics.seeded),
        metrics.contact_checks,
        f"{tick_ms:.3f}",
    ]


def _format_detailed_row(world: World, metrics: TickMetrics, tick_ms: float) -> list[object]:
    population = metrics.population
    if population <= 0:
        ill_ratio = 0.0
        vaccinated_ratio = 0.0
        births_per_cell = 0.0
        deaths_per_cell = 0.0
        contact_checks_per_cell = 0.0
        avg_age = 0.0
        max_age = 0
        avg_radius = 0.0
        avg_speed = 0.0
    else:
        ill_ratio = metrics.ill / population
        vaccinated_ratio = metrics.vaccinated / population
        births_per_cell = metrics.births / population
        deaths_per_cell = metrics.deaths / population
        contact_checks_per_cell = metrics.contact_checks / population

        age_sum = 0
        max_age = 0
        radius_sum = 0.0
        speed_sum = 0.0
        cells = world.cells
        for cell in cells:
            years = cell.age.years
            age_sum += years
            if years > max_age:
                max_age = years
            radius_sum += cell.state.radius
            speed_sum += math.hypot(cell.velocity.x, cell.velocity.y)
        count = len(cells)
        avg_age = age_sum / count
        avg_radius = radius_sum / count
        avg_speed = speed_sum / count

    return _format_basic_row(metrics, tick_ms) + [
        metrics.bounces,
        f"{ill_ratio:.4f}",
        f"{vaccinated_ratio:.4f}",
        f"{births_per_cell:.4f}",
        f"{deaths_per_cell:.4f}",
        f"{contact_checks_per_cell:.4f}",
        f"{avg_age:.4f}",
        max_age,
        f"{avg_radius:.4f}",
        f"{avg_speed:.4f}",
    ]


def _percentile(sorted_values: list[float], percentile: float) -> float:
    if not sorted_values:
        return 0.0
    if len(sorted_values) == 1:
        return float(sorted_values[0])
    pos = (len(sorted_values) - 1) * percentile
    low = int(math.floor(pos))
    high = int(math.ceil(pos))
    if low == high:
        return float(sorted_values[low])
    weight = pos - low
    return float(sorted_values[low] + (sorted_values[high] - sorted_values[low]) * weight)


def _summary_stats(values: list[float]) -> dict[str, float]:
    if not values:
        return {"min": 0.0, "max": 0.0, "avg": 0.0, "p50": 0.0, "p90": 0.0}
    sorted_values = sorted(values)
    return {
        "min": float(sorted_values[0]),
        "max": float(sorted_values[-1]),
        "avg": float(sum(values) / len(values)),
        "p50": _percentile(sorted_values, 0.50),
        "p90": _percentile(sorted_values, 0.90),
    }


def run_headless(
    steps: int,
    seed: Optional[int],
    log_path: Optional[Path],
    deterministic_log: bool = False,
    log_format: str = "detailed",
    summary_path: Optional[Path] = None,
    config_path: Optional[Path] = None,
) -> World:
    log_mode = log_format.lower().strip()
    if log_mode not in {"basic", "detailed"}:
        raise ValueError(f"Unknown log format: {log_format}")

    config = SimulationConfig.from_yaml(config_path) if config_path else SimulationConfig()
    if seed is not None:
        config.seed = seed
    world = World(config)

    writer = None
    csv_file = None
    if log_path:
        csv_file = Path(log_path).open("w", newline="")
        writer = csv.writer(csv_file)
        writer.writerow(_DETAILED_HEADER if log_mode == "detailed" else _BASIC_HEADER)

    population_series: list[float] = []
    ill_series: list[float] = []
    seeds = 0
    try:
        for tick in range(steps):
            metrics = world.step(tick)
            population_series.append(float(metrics.population))
            ill_series.append(float(metrics.ill))
            seeds += int(metrics.seeded)
            if writer:
                tick_ms = 0.0 if deterministic_log else metrics.tick_duration_ms
                if log_mode == "detailed":
                    writer.writerow(_format_detailed_row(world, metrics, tick_ms))
                else:
                    writer.writerow(_format_basic_row(metrics, tick_ms))
    finally:
        if csv_file:
            csv_file.close()

    final = world.metrics
    logger.info(
        "Ran %d ticks (seed=%d): population=%d ill=%d seeds=%d",
        steps,
        config.seed,
        final.population if final else len(world.cells),
        final.ill if final else 0,
        seeds,
    )

    if summary_path:
        exported = world.stats.snapshot()
        summary = {
            "steps": steps,
            "seed": config.seed,
            "log_format": log_mode,
            "deterministic_log": deterministic_log,
            "final": {
                "population": final.population if final else len(world.cells),
                "ill": final.ill if final else 0,
            },
            "seed_infections": seeds,
            "population": _summary_stats(population_series),
            "ill": _summary_stats(ill_series),
            "tracker": {
                "pop_min": exported.pop_min,
                "pop_max": exported.pop_max,
                "ill_min": exported.ill_min,
                "ill_max": exported.ill_max,
                "population_changes": len(exported.population_counts),
                "ill_changes": len(exported.ill_counts),
            },
        }
        Path(summary_path).write_text(json.dumps(summary, indent=2))
    return world


def main() -> None:
    parser = argparse.ArgumentParser(description="Headless herd immunity simulation")
    parser.add_argument("--steps", type=int, default=3000)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--config", type=Path, default=None, help="YAML file overriding the default configuration")
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write per-tick metrics")
    parser.add_argument(
        "--log-format",
        choices=["basic", "detailed"],
        default="detailed",
        help="CSV format to write when --log is provided (basic omits the per-cell averages).",
    )
    parser.add_argument(
        "--summary",
        type=Path,
        default=None,
        help="Optional JSON file to write summary stats for the run.",
    )
    parser.add_argument(
        "--deterministic-log",
        action="store_true",
        help="Write deterministic CSV (tick_ms is forced to 0.000 so identical seeds match).",
    )
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_headless(
        args.steps,
        args.seed,
        args.log,
        deterministic_log=args.deterministic_log,
        log_format=args.log_format,
        summary_path=args.summary,
        config_path=args.config,
    )


if __name__ == "__main__":
    main()
