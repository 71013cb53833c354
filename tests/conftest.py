"""
Shared pytest fixtures.
Every test gets a fresh in-memory SQLite database.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bizdesk.infrastructure.db.database import Base, get_db
from bizdesk.infrastructure.db.models import ClientModel
from bizdesk.main import create_application


@pytest.fixture
def engine():
    """In-memory database shared by every session of a test."""
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
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client_id(db_session):
    """A stored client to invoice."""
    client = ClientModel(name="Acme Corp", email="billing@acme.test")
    db_session.add(client)
    db_session.commit()
    return client.id


@pytest.fixture
def api_client(session_factory):
    """TestClient whose requests use the in-memory database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app = create_application()
    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)
