from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from pettrail.core.constants import SPEED_DECIMALS
from pettrail.core.time_utils import whole_seconds_between
from pettrail.services.geo import path_length_m


@dataclass(frozen=True)
class WalkMetrics:
    distance_m: float
    duration_s: int
    avg_speed_kmh: float


def round_half_up(value: float, decimals: int = SPEED_DECIMALS) -> float:
    """Round half away from zero on the decimal form of `value`.

    Goes through `str` so 5.655 rounds to 5.66 even though its binary
    representation is slightly below 5.655.
    """
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def average_speed_kmh(distance_m: float, duration_s: int) -> float:
    if duration_s == 0:
        return 0.0
    speed = (distance_m / 1000.0) / (duration_s / 3600.0)
    return round_half_up(speed)


def compute_walk_metrics(
    points: Sequence,
    started_at: datetime,
    finished_at: datetime,
) -> WalkMetrics:
    """Derive distance, duration and average speed for a finished walk.

    `points` is the accepted trajectory in timestamp order. Points are used
    as stored; filtering already happened at ingestion. Duration comes from
    the server start/stop times, not from the point timestamps.
    """
    distance = path_length_m(list(points))
    duration = whole_seconds_between(started_at, finished_at)
    return WalkMetrics(
        distance_m=distance,
        duration_s=duration,
        avg_speed_kmh=average_speed_kmh(distance, duration),
    )
