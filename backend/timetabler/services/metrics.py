from __future__ import annotations

import math
import random
from dataclasses import dataclass

EFFICIENCY_BASE = 95
CONFLICT_PENALTY = 10
EFFICIENCY_NOISE = 10
EFFICIENCY_WEIGHT = 0.6
UTILIZATION_WEIGHT = 0.4


@dataclass(frozen=True)
class ScheduleMetrics:
    utilization: int
    efficiency: int
    conflicts: int
    score: int


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_percent(value: int) -> int:
    return max(0, min(100, value))


def evaluate_metrics(*, total_cells: int, occupied_cells: int, conflicts: int, rng: random.Random) -> ScheduleMetrics:
    """Score one candidate.

    Efficiency carries uniform noise in [0, EFFICIENCY_NOISE) on top of the
    conflict penalty, so it ranks candidates loosely and says nothing about
    optimality.
    """
    if total_cells > 0:
        utilization = clamp_percent(round_half_up(occupied_cells / total_cells * 100))
    else:
        utilization = 0

    noise = rng.random() * EFFICIENCY_NOISE
    efficiency = clamp_percent(round_half_up(EFFICIENCY_BASE - CONFLICT_PENALTY * conflicts + noise))
    score = clamp_percent(round_half_up(EFFICIENCY_WEIGHT * efficiency + UTILIZATION_WEIGHT * utilization))

    return ScheduleMetrics(
        utilization=utilization,
        efficiency=efficiency,
        conflicts=conflicts,
        score=score,
    )
