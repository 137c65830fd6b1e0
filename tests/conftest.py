import os

# Keep the module-level engine off PostgreSQL; every test builds its own SQLite file.
os.environ.setdefault("DATABASE_URL", "sqlite:///./studiobook-test.db")

import uuid
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from studiobook.db.base import Base
from studiobook.db.session import build_engine, get_db
from studiobook.main import app
from studiobook.models import Studio

OWNER_ID = uuid.UUID("00000000-0000-4000-8000-00000000000a")
REQUESTER_ID = uuid.UUID("00000000-0000-4000-8000-00000000000b")
STRANGER_ID = uuid.UUID("00000000-0000-4000-8000-00000000000c")


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'studiobook.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def studio(db):
    studio = Studio(
        owner_id=OWNER_ID,
        name="Blue Room",
        location="Brooklyn, NY",
        hourly_rate=Decimal("50.00"),
    )
    db.add(studio)
    db.commit()
    return studio


@pytest.fixture
def client(db):
    # One session for the whole test so the SQLite write lock is never contended
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth(user_id):
    return {"X-User-Id": str(user_id)}
