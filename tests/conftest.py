import pytest

from app import create_app
from store import UserStore


@pytest.fixture
def store():
    return UserStore.seeded()


@pytest.fixture
def client(store):
    """Flask test client over a fresh seeded store."""
    app = create_app(store)
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c
