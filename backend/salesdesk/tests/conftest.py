import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session, create_engine
from sqlmodel.pool import StaticPool

from salesdesk.main import app
from salesdesk.api.deps import get_db


@pytest.fixture(scope="function")
def test_engine():
    # Fresh in-memory SQLite database per test
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool  # required to reuse the same memory db
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()

@pytest.fixture(scope="function")
def db_session(test_engine):
    with Session(test_engine) as session:
        yield session

@pytest.fixture(scope="function")
def client(db_session):
    # Override the get_db dependency to use the test session
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
