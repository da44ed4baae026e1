from fastapi import Depends
from sqlalchemy.orm import Session

from pettrail.core.time_utils import Clock, utc_now
from pettrail.db import get_db
from pettrail.services.ingestion import TrajectoryIngestor
from pettrail.services.walks import WalkService


def get_clock() -> Clock:
    # Overridden in tests to pin "now"
    return utc_now


def get_walk_service(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> WalkService:
    return WalkService(db, clock=clock)


def get_ingestor(db: Session = Depends(get_db)) -> TrajectoryIngestor:
    return TrajectoryIngestor(db)
