import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.api.app import app, get_geocoder
from src.db.database import Base, UserDB, get_db
from src.models.account import Actor, Role

from helpers import FakeGeocoder


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def geocoder():
    return FakeGeocoder()


def _seed_user(session_factory, user_id, role):
    session = session_factory()
    try:
        session.add(UserDB(id=user_id, name=user_id, email=f"{user_id}@example.com", role=role.value))
        session.commit()
    finally:
        session.close()
    return Actor(id=user_id, role=role)


@pytest.fixture
def alice(session_factory):
    return _seed_user(session_factory, "alice", Role.USER)


@pytest.fixture
def bob(session_factory):
    return _seed_user(session_factory, "bob", Role.USER)


@pytest.fixture
def admin(session_factory):
    return _seed_user(session_factory, "root", Role.ADMIN)


def _serve(session_factory, geocoder, **client_options):
    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_geocoder] = lambda: geocoder

    with TestClient(app, **client_options) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def client(session_factory, geocoder):
    yield from _serve(session_factory, geocoder)


@pytest.fixture
def unraised_client(session_factory, geocoder):
    """Client that returns the 500 response instead of re-raising server errors."""
    yield from _serve(session_factory, geocoder, raise_server_exceptions=False)

