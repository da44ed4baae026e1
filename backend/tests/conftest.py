import os
from datetime import datetime, timedelta, timezone

import pytest

# Use in-memory sqlite for tests; must be set before the app/engine import
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"

from pettrail.main import app  # noqa: E402
from pettrail.api.deps import get_clock  # noqa: E402
from pettrail.db import SessionLocal  # noqa: E402
from pettrail.models.pet import Pet  # noqa: E402
from pettrail.models.walk import Walk  # noqa: E402
from pettrail.models.walk_point import WalkPoint  # noqa: E402

T0 = datetime(2025, 8, 14, 22, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock pinned to a settable instant."""

    def __init__(self, now: datetime = T0):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture(autouse=True)
def _clean_tables():
    yield
    with SessionLocal() as s:
        s.query(WalkPoint).delete()
        s.query(Walk).delete()
        s.query(Pet).delete()
        s.commit()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def pet(db):
    p = Pet(name="Rex", species="dog", age=4, breed="Labrador", owner_id="owner-1")
    db.add(p)
    db.commit()
    db.refresh(p)
    return p


@pytest.fixture
def client(clock):
    from fastapi.testclient import TestClient

    app.dependency_overrides[get_clock] = lambda: clock
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
