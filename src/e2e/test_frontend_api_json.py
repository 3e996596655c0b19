from pathlib import Path
import pytest
from csvigo.engine import Engine
import frontend.web as webmod
from frontend.web import app as flask_app

def _seed(tmp: Path) -> str:
    p = tmp / "people.csv"
    p.write_bytes(b"id,name\r\n1,alice\r\n2,bob\r\n")
    return str(p)

@pytest.fixture
def client(tmp_path: Path, monkeypatch):
    eng = Engine(); eng.build(_seed(tmp_path))
    monkeypatch.setattr(webmod, "_engine", eng)
    yield flask_app.test_client()
    eng.shutdown()

@pytest.mark.e2e
def test_health_and_stats(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.get_json()["ok"] is True

    st = client.get("/api/stats").get_json()
    assert st["lines"] == 3
    assert st["bytes"] == 25

@pytest.mark.e2e
def test_single_line(client):
    r = client.get("/api/line?i=1")
    assert r.status_code == 200
    assert r.get_json() == {"line": 1, "offset": 9, "length": 7, "text": "1,alice"}

    r = client.get("/api/line?i=2&fields=1")
    assert r.get_json()["fields"] == ["2", "bob"]

    assert client.get("/api/line?i=10").status_code == 404
    assert client.get("/api/line").status_code == 400
    assert client.get("/api/line?i=1&sep=").status_code == 400

@pytest.mark.e2e
def test_page_of_lines(client):
    data = client.get("/api/lines?start=1&count=5").get_json()
    assert data["lines"] == 3
    assert [r["text"] for r in data["rows"]] == ["1,alice", "2,bob"]
    assert client.get("/api/lines?start=-1").status_code == 400

@pytest.mark.e2e
def test_home_page_renders(client):
    r = client.get("/")
    assert r.status_code == 200
    assert b"csvigo" in r.data

def test_not_ready_without_engine(monkeypatch):
    monkeypatch.setattr(webmod, "_engine", None)
    c = flask_app.test_client()
    assert c.get("/api/health").status_code == 503
    assert c.get("/api/line?i=0").status_code == 503
    assert c.get("/api/stats").get_json()["error"]
