import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from models.store import InMemoryUserStore


@pytest.fixture
def store():
    return InMemoryUserStore()


@pytest.fixture
def client(store):
    with TestClient(create_app(store=store)) as c:
        yield c


@pytest.fixture
def user_id(client):
    """Id of a freshly created user named alice."""
    r = client.post("/api/users", json={"username": "alice"})
    assert r.status_code == 200
    return r.json()["_id"]
