"""Tests for the Flask JSON API."""

import csv
import io
from unittest.mock import patch

import pytest

from fencing_scout.services import MatchService, PersistenceService
from fencing_scout.ui.web_app import WebAppState, create_app, run_web_app
from fencing_scout.utils import AppConfig


@pytest.fixture
def match(scheduler, store):
    return MatchService(
        persistence_service=PersistenceService(store, scheduler=scheduler),
        scheduler=scheduler,
    )


@pytest.fixture
def client(match):
    app = create_app(WebAppState(AppConfig(), match_service=match))
    app.config["TESTING"] = True
    return app.test_client()


def test_state_endpoint(client):
    response = client.get("/api/state")
    data = response.get_json()

    assert response.status_code == 200
    assert data["success"] is True
    assert data["state"]["scores"] == {"A": 0, "B": 0}
    assert data["state"]["clock"]["display"] == "01:00"
    assert data["log"] == []


def test_record_actions_points_and_report(client):
    client.post("/api/athletes", json={"A": "Alice", "B": "Bob"})
    assert client.post("/api/actions", json={"action": "Attack"}).status_code == 200

    response = client.post("/api/points", json={"athlete": "A"})
    data = response.get_json()
    assert data["entry"] == {
        "id": 2, "action": "Point for A", "zone": "Home",
        "scoreA": 0, "scoreB": 0, "pointFor": "A",
    }
    assert data["state"]["scores"] == {"A": 1, "B": 0}

    report = client.get("/api/report").get_json()["report"]
    assert report.split("\n") == [
        "--- Match Scouting Report (Alice vs Bob) ---",
        "0:0 - Home - Attack",
        "Point for Alice",
        "--- End of Report ---",
    ]

    log_rows = client.get("/api/state").get_json()["log"]
    assert [row["action"] for row in log_rows] == ["Point A", "Attack"]


def test_invalid_requests_return_400(client):
    assert client.post("/api/zone", json={"zone": "Lounge"}).status_code == 400
    assert client.post("/api/points", json={"athlete": "C"}).status_code == 400
    assert client.post("/api/score", json={"athlete": "A", "delta": "x"}).status_code == 400
    assert client.post("/api/actions", json={}).status_code == 400
    assert client.post("/api/athletes", json={}).status_code == 400


def test_score_zone_and_invert(client):
    data = client.post("/api/score", json={"athlete": "B", "delta": -1}).get_json()
    assert data["score"] == 0

    client.post("/api/zone", json={"zone": "House"})
    data = client.post("/api/zones/invert").get_json()
    assert data["zone_order"] == ["House", "Square", "Home"]

    entry = client.post("/api/actions", json={"action": "Retreat"}).get_json()["entry"]
    assert entry["zone"] == "House"


def test_timer_commands(client, scheduler):
    data = client.post("/api/timer/start").get_json()
    assert data["clock"]["is_running"] is True

    scheduler.advance(2)
    data = client.post("/api/timer/pause").get_json()
    assert data["clock"] == {"remaining_seconds": 58, "is_running": False, "display": "00:58"}

    client.post("/api/timer/toggle")
    data = client.post("/api/timer/reset").get_json()
    assert data["clock"]["remaining_seconds"] == 60
    assert data["clock"]["is_running"] is False

    assert client.post("/api/timer/rewind").status_code == 404


def test_analysis_endpoints(client):
    client.post("/api/actions", json={"action": "Defense"})
    client.post("/api/zone", json={"zone": "Square"})
    client.post("/api/points", json={"athlete": "B"})

    analysis = client.get("/api/analysis").get_json()["analysis"]
    assert analysis["total_events"] == 2
    assert analysis["per_zone"]["Square"]["count_by_action"]["Point for B"] == 1
    assert analysis["per_zone"]["Home"]["percentage"] == 50.0

    response = client.get("/api/analysis/export")
    assert response.mimetype == "text/csv"
    rows = list(csv.reader(io.StringIO(response.get_data(as_text=True))))
    assert ["Total Events", "2"] in rows


def test_archive_flow(client):
    response = client.post("/api/archive")
    assert response.status_code == 400
    assert response.get_json()["success"] is False

    for _ in range(3):
        client.post("/api/actions", json={"action": "Attack"})
        data = client.post("/api/archive").get_json()
        assert data["success"] is True

    client.post("/api/actions", json={"action": "Attack"})
    response = client.post("/api/archive")
    assert response.status_code == 400
    assert "3" in response.get_json()["error"]

    reports = client.get("/api/archive").get_json()["reports"]
    assert len(reports) == 3
    assert client.get("/api/archive/1").get_json()["report"] == reports[0]
    assert client.get("/api/archive/4").status_code == 404


def test_reset_requires_confirmation(client):
    client.post("/api/points", json={"athlete": "A"})

    assert client.post("/api/reset", json={}).status_code == 400
    assert client.get("/api/state").get_json()["state"]["scores"]["A"] == 1

    data = client.post("/api/reset", json={"confirm": True}).get_json()
    assert data["state"]["scores"] == {"A": 0, "B": 0}
    assert data["state"]["log_size"] == 0


def test_session_binding_restores_and_enables_saves(client, store, scheduler):
    path = "artifacts/app-1/users/u-9/fencing_scout_matches/current_match"
    store.documents[path] = {"scoreA": 2, "athleteAName": "Alice"}

    assert client.post("/api/session", json={}).status_code == 400

    data = client.post("/api/session", json={"app_id": "app-1", "user_id": "u-9"}).get_json()
    assert data["restored"] is True
    assert data["state"]["scores"]["A"] == 2
    assert data["state"]["persistence_ready"] is True

    client.post("/api/points", json={"athlete": "A"})
    scheduler.advance(1)
    assert store.documents[path]["scoreA"] == 3


def test_non_object_json_body_is_rejected(client):
    response = client.post("/api/points", json=["A"])
    assert response.status_code == 400
    assert response.get_json()["success"] is False

    assert client.post("/api/actions", json="Attack").status_code == 400
    assert client.post("/api/reset", json=[True]).status_code == 400
    assert client.get("/api/state").get_json()["state"]["log_size"] == 0


def test_non_text_athlete_name_is_rejected_without_change(client):
    response = client.post("/api/athletes", json={"A": "Alice", "B": 5})

    assert response.status_code == 400
    assert response.get_json()["success"] is False
    assert client.get("/api/state").get_json()["state"]["athletes"] == {
        "A": "Athlete A", "B": "Athlete B",
    }

    assert client.post("/api/athletes", json={"A": 5}).status_code == 400


def test_run_web_app_flushes_pending_save_on_exit():
    with patch("fencing_scout.ui.web_app.atexit.register") as register, \
            patch("fencing_scout.ui.web_app.configure_logging"), \
            patch("flask.Flask.run") as run:
        run_web_app(AppConfig(store_dir="unused"))

    run.assert_called_once()
    hook = register.call_args[0][0]
    assert hook.__name__ == "shutdown"
    assert isinstance(hook.__self__, MatchService)
