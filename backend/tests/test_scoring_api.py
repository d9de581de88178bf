import os
import sys

import pytest
from fastapi.testclient import TestClient

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:3000")
os.environ.setdefault("ALLOW_CREDENTIALS", "false")
from rydercup.main import app  # noqa: E402
from rydercup.config import API_PREFIX  # noqa: E402

BASE = f"{API_PREFIX}/v0/scoring"


@pytest.fixture
def client():
    return TestClient(app)


def _holes(*winners):
    return [{"holeNumber": i, "winner": w} for i, w in enumerate(winners, start=1)]


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}
    assert client.get(f"{API_PREFIX}/healthz").json() == {"status": "ok"}


def test_state_for_empty_match(client):
    resp = client.post(f"{BASE}/state", json={"holes": []})
    assert resp.status_code == 200
    data = resp.json()
    assert data["displayScore"] == "AS"
    assert data["status"] == "scheduled"
    assert data["holesRemaining"] == 18
    assert data["winningTeam"] is None


def test_state_for_dormie_match(client):
    holes = _holes(*(["halved"] * 14 + ["teamA", "teamA"]))
    data = client.post(f"{BASE}/state", json={"holes": holes}).json()
    assert data["currentScore"] == 2
    assert data["isDormie"] is True
    assert data["isClosedOut"] is False
    assert data["status"] == "in_progress"
    assert data["leadingTeam"] == "teamA"


def test_state_with_custom_round_length(client):
    body = {"totalHoles": 9, "holes": _holes("teamB", "teamB", "teamB", "teamB", "teamB", "teamB")}
    data = client.post(f"{BASE}/state", json=body).json()
    assert data["totalHoles"] == 9
    assert data["displayScore"] == "6&3"
    assert data["winningTeam"] == "teamB"


def test_state_rejects_hole_outside_round(client):
    body = {"totalHoles": 9, "holes": [{"holeNumber": 10, "winner": "teamA"}]}
    resp = client.post(f"{BASE}/state", json=body)
    assert resp.status_code == 400
    assert resp.headers["content-type"].startswith("application/problem+json")
    assert resp.json()["code"] == "invalid_hole_result"


def test_state_rejects_duplicate_holes(client):
    holes = [{"holeNumber": 1, "winner": "teamA"}, {"holeNumber": 1, "winner": "teamB"}]
    resp = client.post(f"{BASE}/state", json={"holes": holes})
    assert resp.status_code == 400
    assert "more than once" in resp.json()["detail"]
    assert resp.json()["code"] == "scoring_duplicate_holes"
    assert resp.headers["content-type"].startswith("application/problem+json")


@pytest.mark.parametrize("total", [0, 40, "abc"])
def test_state_rejects_bad_round_length(client, total):
    resp = client.post(f"{BASE}/state", json={"totalHoles": total, "holes": []})
    assert resp.status_code == 422


def test_state_rejects_unknown_winner(client):
    resp = client.post(f"{BASE}/state", json={"holes": [{"holeNumber": 1, "winner": "teamC"}]})
    assert resp.status_code == 422


def test_dormie_endpoint(client):
    resp = client.get(f"{BASE}/dormie", params={"score": -3, "holesRemaining": 3})
    assert resp.json() == {"teamADormie": False, "teamBDormie": True}


def test_would_close_out_endpoint(client):
    resp = client.get(
        f"{BASE}/would-close-out",
        params={"currentScore": 2, "holesRemaining": 2, "winner": "teamA"},
    )
    assert resp.json() == {"closesOut": True}

    resp = client.get(
        f"{BASE}/would-close-out",
        params={"currentScore": 1, "holesRemaining": 3, "winner": "none"},
    )
    assert resp.json() == {"closesOut": False}


def test_result_for_closeout(client):
    body = {
        "holes": _holes(*(["halved"] * 13 + ["teamB"] * 3)),
        "teamAName": "USA",
        "teamBName": "Europe",
    }
    data = client.post(f"{BASE}/result", json=body).json()
    assert data["result"] == "threeAndTwo"
    assert data["points"] == {"teamAPoints": 0, "teamBPoints": 1}
    assert data["finalResult"] == "Europe won 3&2"
    assert data["state"]["displayScore"] == "3&2"


def test_result_for_halved_match(client):
    body = {
        "holes": _holes(*(["halved"] * 18)),
        "teamAName": " USA ",
        "teamBName": "Europe",
    }
    data = client.post(f"{BASE}/result", json=body).json()
    assert data["result"] == "halved"
    assert data["points"] == {"teamAPoints": 0.5, "teamBPoints": 0.5}
    assert data["finalResult"] == "Match Halved"


def test_result_incomplete(client):
    body = {"holes": _holes("teamA"), "teamAName": "USA", "teamBName": "Europe"}
    data = client.post(f"{BASE}/result", json=body).json()
    assert data["result"] == "incomplete"
    assert data["points"] == {"teamAPoints": 0, "teamBPoints": 0}


def test_result_requires_team_names(client):
    resp = client.post(f"{BASE}/result", json={"holes": []})
    assert resp.status_code == 422
