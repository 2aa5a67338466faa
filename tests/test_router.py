"""HTTP tests for the americano and mexicano routers."""

import pytest
from fastapi.testclient import TestClient

from americano.schemas import ScheduleConfigIn
from main import app


@pytest.fixture
def client():
    return TestClient(app)


def _players(count, **extra):
    return [{"id": f"p{i}", "name": f"Player {i}", **extra} for i in range(1, count + 1)]


def _match(mid, court, team_a, team_b, status="completed", **extra):
    return {"id": mid, "court": court, "team_a": team_a, "team_b": team_b, "status": status, **extra}


class TestIndex:

    def test_index(self, client):
        response = client.get('/')
        assert response.status_code == 200
        assert response.json()["policies"] == ["americano", "balanced", "mixed", "mexicano"]


class TestAmericanoRoutes:
    """/americano endpoints."""

    def test_round(self, client):
        response = client.post('/americano/round', json={"players": _players(9), "courts": 2})
        assert response.status_code == 200
        data = response.json()
        assert len(data["matches"]) == 2
        assert len(data["sitting_out"]) == 1
        assert data["matches"][0]["status"] == "upcoming"

    def test_mixed_round_rejected(self, client):
        players = [{"id": f"m{i}", "name": f"M{i}", "sex": "M"} for i in range(3)]
        players.append({"id": "w1", "name": "W1", "sex": "F"})
        response = client.post('/americano/round', json={"players": players, "courts": 1, "policy": "mixed"})
        assert response.status_code == 400
        assert "женщин: 1" in response.json()["detail"]

    def test_validate_mixed(self, client):
        players = [{"id": f"m{i}", "name": f"M{i}", "sex": "M"} for i in range(4)]
        response = client.post('/americano/validate-mixed', json={"players": players})
        assert response.json()["error"] is not None

    def test_unknown_policy_rejected(self, client):
        response = client.post('/americano/round', json={"players": _players(4), "courts": 1, "policy": "chaos"})
        assert response.status_code == 422

    def test_schedule(self, client):
        body = {"players": _players(6), "config": {"courts": 1, "rounds": 4}}
        response = client.post('/americano/schedule', json=body)
        assert response.status_code == 200
        rounds = response.json()["rounds"]
        assert [r["number"] for r in rounds] == [1, 2, 3, 4]
        assert all(r["completed"] is False for r in rounds)

    def test_regenerate_keeps_played_round(self, client):
        played = {"number": 1, "matches": [_match("x", 1, ["p1", "p2"], ["p3", "p4"], score_a=11, score_b=10)],
                  "sitting_out": ["p5"]}
        body = {
            "players": _players(5), "config": {"courts": 1, "rounds": 3},
            "existing_schedule": [played], "current_round": 2,
        }
        rounds = client.post('/americano/schedule/regenerate', json=body).json()["rounds"]
        assert [r["number"] for r in rounds] == [1, 2, 3]
        assert rounds[0]["matches"][0]["id"] == "x"
        assert rounds[0]["completed"] is True
        assert "p5" in rounds[1]["matches"][0]["team_a"] + rounds[1]["matches"][0]["team_b"]

    def test_repeated_player_in_match_rejected(self, client):
        broken = {"number": 1, "matches": [_match("x", 1, ["p1", "p1"], ["p2", "p3"])]}
        body = {"players": _players(4), "courts": 1, "prior_rounds": [broken], "round_number": 2}
        response = client.post('/americano/round', json=body)
        assert response.status_code == 422

    def test_schedule_config_fields(self):
        assert set(ScheduleConfigIn.model_fields) == {"courts", "rounds", "policy", "rest_rule"}

    def test_reshuffle(self, client):
        body = {"players": _players(6), "candidate_pool": ["p1", "p2", "p3", "p4"], "court": 2}
        response = client.post('/americano/reshuffle', json=body)
        assert response.status_code == 200
        assert response.json()["match"]["court"] == 2

    def test_reshuffle_too_few(self, client):
        body = {"players": _players(6), "candidate_pool": ["p1", "p2", "p3"], "court": 1}
        response = client.post('/americano/reshuffle', json=body)
        assert response.status_code == 400

    def test_players(self, client):
        body = {"player_names": "Anna\n\nBoris\n", "existing": [{"id": "a", "name": "Anna"}], "current_round": 3}
        created = client.post('/americano/players', json=body).json()["players"]
        assert [p["name"] for p in created] == ["Anna (2)", "Boris"]
        assert all(p["joined_at_round"] == 3 for p in created)
        assert created[0]["skill_label"] == "Intermediate"

    def test_players_empty(self, client):
        response = client.post('/americano/players', json={"player_names": "  \n "})
        assert response.status_code == 400

    def test_plan(self, client):
        body = {"active_players": 10, "courts": 2, "session_minutes": 90}
        data = client.post('/americano/plan', json=body).json()
        assert data == {"rounds": 10, "step": 5, "matches_per_player": 8, "match_minutes": 10}

    def test_score(self, client):
        body = {
            "players": _players(4),
            "match": _match("x", 1, ["p1", "p2"], ["p3", "p4"], status="in_progress"),
            "score_a": 15, "score_b": 10,
        }
        data = client.post('/americano/score', json=body).json()
        assert (data["match"]["score_a"], data["match"]["score_b"]) == (11, 10)
        assert data["match"]["status"] == "completed"
        assert data["players"][0]["points"] == 11
        assert data["players"][2]["games_lost"] == 1

    def test_score_twice_rejected(self, client):
        body = {
            "players": _players(4),
            "match": _match("x", 1, ["p1", "p2"], ["p3", "p4"]),
            "score_a": 11, "score_b": 10,
        }
        assert client.post('/americano/score', json=body).status_code == 400


class TestMexicanoRoutes:
    """/mexicano endpoints."""

    def _pending_round(self):
        return {"number": 1, "matches": [_match("x", 1, ["p1", "p2"], ["p3", "p4"], status="in_progress")]}

    def test_indeterminate(self, client):
        body = {"schedule": [self._pending_round()], "round_number": 2}
        assert client.post('/mexicano/indeterminate', json=body).json()["indeterminate"] is True

    def test_round_blocked_until_previous_done(self, client):
        body = {"players": _players(4), "courts": 1, "prior_rounds": [self._pending_round()], "round_number": 2}
        assert client.post('/mexicano/round', json=body).status_code == 400

    def test_round_seeded(self, client):
        players = [{"id": f"p{i}", "name": f"P{i}", "points": 10 * i} for i in range(1, 5)]
        done = {"number": 1, "matches": [_match("x", 1, ["p1", "p2"], ["p3", "p4"])]}
        body = {"players": players, "courts": 1, "prior_rounds": [done], "round_number": 2}
        match = client.post('/mexicano/round', json=body).json()["matches"][0]
        assert (match["team_a"], match["team_b"]) == (["p4", "p1"], ["p3", "p2"])

    def test_standings(self, client):
        players = [
            {"id": "a", "name": "A", "points": 10},
            {"id": "b", "name": "B", "points": 20},
            {"id": "c", "name": "C", "points": 99, "status": "removed"},
        ]
        standings = client.post('/mexicano/standings', json={"players": players}).json()["standings"]
        assert [s["id"] for s in standings] == ["b", "a"]
