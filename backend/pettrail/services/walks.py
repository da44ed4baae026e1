"""Walk lifecycle: ACTIVE -> FINISHED.

Both transitions are guarded by the database rather than by read-then-write
logic: a partial unique index allows a single active walk per pet, and
stopping is a conditional UPDATE that only matches an unfinished walk.
"""
import logging
import math
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pettrail.core.errors import ActiveWalkExists, PetNotFound, WalkFinished, WalkNotFound
from pettrail.core.time_utils import Clock, ensure_utc, utc_now
from pettrail.models.pet import Pet
from pettrail.models.walk import Walk
from pettrail.models.walk_point import WalkPoint
from pettrail.services.metrics import compute_walk_metrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartedWalk:
    walk_id: uuid.UUID
    started_at: datetime


@dataclass(frozen=True)
class StoppedWalk:
    walk_id: uuid.UUID
    distance_m: float
    duration_s: int
    avg_speed_kmh: float
    started_at: datetime
    finished_at: datetime


@dataclass(frozen=True)
class WalkPage:
    items: list
    page: int
    size: int
    total_pages: int
    total_elements: int


class WalkService:
    def __init__(self, db: Session, clock: Clock = utc_now):
        self.db = db
        self.clock = clock

    def _require_pet(self, pet_id) -> Pet:
        pet = self.db.get(Pet, pet_id)
        if pet is None:
            raise PetNotFound(pet_id)
        return pet

    def _active_walk(self, pet_id) -> Optional[Walk]:
        return (
            self.db.query(Walk)
            .filter(Walk.pet_id == pet_id, Walk.finished_at.is_(None))
            .first()
        )

    def points(self, walk_id) -> list[WalkPoint]:
        """Accepted points of a walk in timestamp order."""
        return (
            self.db.query(WalkPoint)
            .filter(WalkPoint.walk_id == walk_id)
            .order_by(WalkPoint.timestamp, WalkPoint.id)
            .all()
        )

    def start_walk(self, pet_id) -> StartedWalk:
        pet = self._require_pet(pet_id)

        # Fast path only; the unique index below is what makes this atomic
        if self._active_walk(pet_id) is not None:
            logger.warning("Pet %s already has an active walk", pet_id)
            raise ActiveWalkExists(pet_id)

        walk = Walk(pet_id=pet.id, owner_id=pet.owner_id, started_at=self.clock())
        self.db.add(walk)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            # Backend error text does not reliably name the index, so re-read
            if self.db.get(Pet, pet_id) is None:
                logger.warning("Pet %s removed while starting a walk", pet_id)
                raise PetNotFound(pet_id) from None
            if self._active_walk(pet_id) is None:
                raise
            logger.warning("Concurrent start rejected for pet %s", pet_id)
            raise ActiveWalkExists(pet_id) from None
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(walk)
        logger.info("Walk %s started for pet %s", walk.id, pet_id)
        return StartedWalk(walk_id=walk.id, started_at=ensure_utc(walk.started_at))

    def stop_walk(self, walk_id) -> StoppedWalk:
        """Finish an active walk and store its metrics exactly once."""
        try:
            walk = self.db.query(Walk).filter(Walk.id == walk_id).with_for_update().populate_existing().first()
            if walk is None:
                raise WalkNotFound(walk_id)
            if not walk.is_active:
                raise WalkFinished(walk_id)

            started_at = ensure_utc(walk.started_at)
            finished_at = self.clock()
            metrics = compute_walk_metrics(self.points(walk_id), started_at, finished_at)

            updated = (
                self.db.query(Walk)
                .filter(Walk.id == walk_id, Walk.finished_at.is_(None))
                .update(
                    {
                        Walk.finished_at: finished_at,
                        Walk.distance_m: metrics.distance_m,
                        Walk.duration_s: metrics.duration_s,
                        Walk.avg_speed_kmh: metrics.avg_speed_kmh,
                    },
                    synchronize_session=False,
                )
            )
            if updated == 0:
                raise WalkFinished(walk_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Walk %s stopped: distance=%.1fm duration=%ds avg_speed=%.2fkm/h",
            walk_id, metrics.distance_m, metrics.duration_s, metrics.avg_speed_kmh,
        )
        return StoppedWalk(
            walk_id=walk_id,
            distance_m=metrics.distance_m,
            duration_s=metrics.duration_s,
            avg_speed_kmh=metrics.avg_speed_kmh,
            started_at=started_at,
            finished_at=ensure_utc(finished_at),
        )

    def get_active_walk(self, pet_id) -> Optional[StartedWalk]:
        self._require_pet(pet_id)
        walk = self._active_walk(pet_id)
        if walk is None:
            return None
        return StartedWalk(walk_id=walk.id, started_at=ensure_utc(walk.started_at))

    def list_walks(self, pet_id, page: int, size: int) -> WalkPage:
        """Walks of a pet, most recent first."""
        self._require_pet(pet_id)
        query = self.db.query(Walk).filter(Walk.pet_id == pet_id)
        total = query.count()
        items = (
            query.order_by(Walk.started_at.desc())
            .offset(page * size)
            .limit(size)
            .all()
        )
        return WalkPage(
            items=items,
            page=page,
            size=size,
            total_pages=math.ceil(total / size) if size else 0,
            total_elements=total,
        )

    def route(self, walk_id) -> list[WalkPoint]:
        if self.db.get(Walk, walk_id) is None:
            raise WalkNotFound(walk_id)
        return self.points(walk_id)
