import pytest
from fastapi.testclient import TestClient

from main import PORT, app


@pytest.fixture
def site():
    with TestClient(app) as c:
        yield c


def test_home(site):
    resp = site.get("/")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert 'href="/about"' in resp.text


def test_about(site):
    resp = site.get("/about")
    assert resp.status_code == 200
    assert "About This Application" in resp.text


def test_api_data(site):
    resp = site.get("/api/data")
    assert resp.status_code == 200
    assert resp.json() == {
        "status": "success",
        "endpoint": "/api/data",
        "message": "Data successfully retrieved from the server route.",
        "users": 5,
    }


def test_startup_logs_routes(caplog):
    with caplog.at_level("INFO", logger="main"):
        with TestClient(app):
            pass
    assert f"http://localhost:{PORT}/api/data" in caplog.text


def test_unknown_route(site):
    assert site.get("/nope").status_code == 404
