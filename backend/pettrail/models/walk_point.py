from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, Uuid
from sqlalchemy.sql import func
from pettrail.db import Base


class WalkPoint(Base):
    __tablename__ = "walk_points"

    id = Column(Integer, primary_key=True, index=True)
    walk_id = Column(Uuid, ForeignKey("walks.id", ondelete="CASCADE"), nullable=False)

    latitude = Column(Float, nullable=False)   # WGS84 degrees
    longitude = Column(Float, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False)
    elevation = Column(Float, nullable=True)   # meters, not used for distance

    # Server receipt time
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_walk_points_walk_id_timestamp", "walk_id", "timestamp"),
    )
