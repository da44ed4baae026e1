from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pettrail.core.errors import PetNotFound
from pettrail.db import get_db
from pettrail.models.pet import Pet
from pettrail.schemas.pet import PetCreate, PetRead

router = APIRouter(prefix="/api/pets", tags=["pets"])


@router.post("", response_model=PetRead, status_code=201)
def create_pet(payload: PetCreate, db: Session = Depends(get_db)):
    pet = Pet(
        name=payload.name.strip(),
        species=payload.species.value,
        age=payload.age,
        breed=payload.breed.strip(),
        owner_id=payload.owner_id,
    )
    db.add(pet)
    db.commit()
    db.refresh(pet)
    return pet


@router.get("/{pet_id}", response_model=PetRead)
def get_pet(pet_id: UUID, db: Session = Depends(get_db)):
    pet = db.get(Pet, pet_id)
    if pet is None:
        raise PetNotFound(pet_id)
    return pet
