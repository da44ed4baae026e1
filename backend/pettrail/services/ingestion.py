"""Batch ingestion of GPS samples for an active walk.

Each batch is sorted by timestamp (stable, so equal timestamps keep their
submission order) and filtered against the previous accepted point of the
same batch: samples that do not move forward in time, or that imply a speed
above the configured threshold, are discarded. The accepted subset is stored
in one transaction.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from pettrail.core.config import settings
from pettrail.core.errors import WalkFinished, WalkNotFound
from pettrail.core.time_utils import ensure_utc, whole_seconds_between
from pettrail.models.walk import Walk
from pettrail.models.walk_point import WalkPoint
from pettrail.services.geo import distance_m

logger = logging.getLogger(__name__)


class DiscardReason(str, Enum):
    NON_INCREASING_TIMESTAMP = "non-increasing timestamp"
    SPEED_OUTLIER = "speed outlier"


@dataclass(frozen=True)
class GpsSample:
    latitude: float
    longitude: float
    timestamp: datetime
    elevation: Optional[float] = None

    @classmethod
    def from_point(cls, p) -> "GpsSample":
        return cls(
            latitude=float(p.latitude),
            longitude=float(p.longitude),
            timestamp=ensure_utc(p.timestamp),
            elevation=float(p.elevation) if p.elevation is not None else None,
        )


@dataclass
class IngestResult:
    received: int
    accepted: list[GpsSample] = field(default_factory=list)
    discarded: list[tuple[GpsSample, DiscardReason]] = field(default_factory=list)

    @property
    def accepted_count(self) -> int:
        return len(self.accepted)

    @property
    def discarded_count(self) -> int:
        return self.received - len(self.accepted)


def filter_trajectory(
    samples: Iterable[GpsSample],
    max_speed_mps: float,
    seed: Optional[GpsSample] = None,
) -> IngestResult:
    """Sort and filter one batch. Pure; nothing is stored.

    `seed` is the point the first sample is compared against. With no seed the
    first sample (after sorting) is always accepted.
    """
    samples = list(samples)
    result = IngestResult(received=len(samples))
    last = seed

    # sorted() is stable: ties keep submission order
    for p in sorted(samples, key=lambda s: s.timestamp):
        if last is None:
            result.accepted.append(p)
            last = p
            continue

        dt = whole_seconds_between(last.timestamp, p.timestamp)
        if dt <= 0:
            result.discarded.append((p, DiscardReason.NON_INCREASING_TIMESTAMP))
            continue

        speed = distance_m(last, p) / dt
        if speed > max_speed_mps:
            result.discarded.append((p, DiscardReason.SPEED_OUTLIER))
            continue

        result.accepted.append(p)
        last = p

    return result


class TrajectoryIngestor:
    def __init__(
        self,
        db: Session,
        max_speed_mps: Optional[float] = None,
        seed_from_stored: Optional[bool] = None,
    ):
        self.db = db
        self.max_speed_mps = settings.max_speed_mps if max_speed_mps is None else max_speed_mps
        self.seed_from_stored = (
            settings.ingest_seed_from_stored if seed_from_stored is None else seed_from_stored
        )

    def _last_stored(self, walk_id) -> Optional[GpsSample]:
        row = (
            self.db.query(WalkPoint)
            .filter(WalkPoint.walk_id == walk_id)
            .order_by(WalkPoint.timestamp.desc(), WalkPoint.id.desc())
            .first()
        )
        return GpsSample.from_point(row) if row else None

    def ingest(self, walk_id, raw_points) -> IngestResult:
        """Filter and store one batch of points for an active walk.

        Raises WalkNotFound / WalkFinished. On any failure the transaction is
        rolled back and no point of the batch is stored.
        """
        try:
            # Row lock serializes batches (and stop) for the same walk
            walk = self.db.query(Walk).filter(Walk.id == walk_id).with_for_update().populate_existing().first()
            if walk is None:
                raise WalkNotFound(walk_id)
            if not walk.is_active:
                raise WalkFinished(walk_id)

            seed = self._last_stored(walk_id) if self.seed_from_stored else None
            samples = [GpsSample.from_point(p) for p in raw_points]
            result = filter_trajectory(samples, self.max_speed_mps, seed=seed)

            for p, reason in result.discarded:
                logger.info(
                    "Discarded point for walk %s: %s (lat=%s, lon=%s, ts=%s)",
                    walk_id, reason.value, p.latitude, p.longitude, p.timestamp.isoformat(),
                )

            self.db.add_all([
                WalkPoint(
                    walk_id=walk_id,
                    latitude=p.latitude,
                    longitude=p.longitude,
                    timestamp=p.timestamp,
                    elevation=p.elevation,
                )
                for p in result.accepted
            ])
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Walk %s batch processed: received=%d accepted=%d discarded=%d",
            walk_id, result.received, result.accepted_count, result.discarded_count,
        )
        return result
