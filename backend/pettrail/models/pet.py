import uuid

from sqlalchemy import Column, Integer, String, DateTime, Uuid
from sqlalchemy.sql import func
from pettrail.db import Base


class Pet(Base):
    __tablename__ = "pets"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    name = Column(String(60), nullable=False)
    species = Column(String(10), nullable=False)  # dog, cat
    age = Column(Integer, nullable=False)
    breed = Column(String(50), nullable=False)

    # Opaque owner reference; accounts live outside this service
    owner_id = Column(String, nullable=True, index=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
