import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from strategia.database import Base, SessionLocal, engine  # noqa: E402
from strategia.main import app  # noqa: E402
from strategia.services.container import build_services  # noqa: E402
from strategia.tests.helpers import API, ManualScheduler  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def oauth_transport():
    return None


@pytest.fixture
def services(scheduler, oauth_transport):
    container = build_services(SessionLocal, scheduler=scheduler, oauth_transport=oauth_transport)
    previous = app.state.services
    app.state.services = container
    yield container
    container.shutdown()
    app.state.services = previous


@pytest.fixture
def client(services) -> TestClient:
    return TestClient(app)


@pytest.fixture
def credentials() -> dict:
    return {"email": "ana@example.com", "password": "s3cret-pass", "full_name": "Ana Torres"}


@pytest.fixture
def auth_client(client, credentials) -> TestClient:
    response = client.post(f"{API}/auth/sign-up", json=credentials)
    assert response.status_code == 201
    response = client.post(
        f"{API}/auth/sign-in",
        json={"email": credentials["email"], "password": credentials["password"]},
    )
    assert response.status_code == 200
    return client
