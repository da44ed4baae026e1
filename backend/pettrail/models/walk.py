import uuid

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String, Uuid
from pettrail.db import Base


class Walk(Base):
    __tablename__ = "walks"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    pet_id = Column(Uuid, ForeignKey("pets.id", ondelete="CASCADE"), nullable=False, index=True)
    owner_id = Column(String, nullable=True)

    # Server time; finished_at stays NULL while the walk is active
    started_at = Column(DateTime(timezone=True), nullable=False)
    finished_at = Column(DateTime(timezone=True), nullable=True)

    # Written once, together with finished_at
    distance_m = Column(Float, nullable=True)
    duration_s = Column(Integer, nullable=True)
    avg_speed_kmh = Column(Float, nullable=True)

    __table_args__ = (
        # At most one active walk per pet
        Index(
            "uq_walks_one_active_per_pet",
            "pet_id",
            unique=True,
            postgresql_where=finished_at.is_(None),
            sqlite_where=finished_at.is_(None),
        ),
    )

    @property
    def is_active(self) -> bool:
        return self.finished_at is None
