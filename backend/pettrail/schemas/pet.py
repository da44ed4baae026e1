from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import Field

from pettrail.schemas.common import CamelModel


class Species(str, Enum):
    dog = "dog"
    cat = "cat"


class PetCreate(CamelModel):
    name: str = Field(min_length=1, max_length=60)
    species: Species
    age: int = Field(ge=0, le=30)
    breed: str = Field(min_length=1, max_length=50)
    owner_id: Optional[str] = None


class PetRead(CamelModel):
    id: UUID
    name: str
    species: Species
    age: int
    breed: str
    owner_id: Optional[str] = None
    created_at: Optional[datetime] = None
