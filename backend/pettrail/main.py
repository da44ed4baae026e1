import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pettrail.api.errors import register_error_handlers
from pettrail.api.pets import router as pets_router
from pettrail.api.walks import router as walks_router
from pettrail.db import Base, engine
from pettrail.models.pet import Pet  # noqa: F401  (import ensures table is registered)
from pettrail.models.walk import Walk  # noqa: F401
from pettrail.models.walk_point import WalkPoint  # noqa: F401
from pettrail.core.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="PetTrail")

# Allow CORS for the mobile/web clients
origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Create DB tables (pets, walks, walk_points) on startup
Base.metadata.create_all(bind=engine)

app.include_router(pets_router)
app.include_router(walks_router)


@app.get("/")
def root():
    return {"message": "PetTrail backend is running"}
