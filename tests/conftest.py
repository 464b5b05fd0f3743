import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import exam_builder.db.models  # noqa: F401
from exam_builder.composition import CompositionManager
from exam_builder.db.models.enums import EntityKind
from exam_builder.db.session import Base, get_db
from exam_builder.main import app
from exam_builder.navigation import registry
from exam_builder.ordering import QuestionOrderingEngine
from exam_builder.store import EntityStore


@pytest.fixture
def engine():
    """In-memory SQLite shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def store(db_session):
    return EntityStore(db_session)


@pytest.fixture
def manager(store):
    return CompositionManager(store)


@pytest.fixture
def ordering(store):
    return QuestionOrderingEngine(store)


@pytest.fixture
def make(store):
    """Create and commit an entity, returning its id."""
    def _make(kind: EntityKind, **payload) -> str:
        with store.transaction():
            return store.create(kind, payload)
    return _make


@pytest.fixture(autouse=True)
def fresh_navigation():
    registry.clear()
    yield
    registry.clear()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _login(client, email, role):
    client.post("/auth/register", json={"email": email, "password": "s3cret-pass", "name": "Staff", "role": role})
    response = client.post("/auth/login", json={"email": email, "password": "s3cret-pass"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def auth_headers(client):
    return _login(client, "teacher@example.com", "teacher")


@pytest.fixture
def student_headers(client):
    return _login(client, "student@example.com", "student")
