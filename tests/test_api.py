"""Tests for the FastAPI AlphaCala interface."""

from __future__ import annotations

from fastapi.testclient import TestClient

from alphacala import ui
from alphacala.ui import app


client = TestClient(app)
ui.AI_THINK_DELAY = (0.0, 0.0)


def test_create_game_and_first_move():
    response = client.post("/api/game", json={"depth": 2})
    assert response.status_code == 200
    payload = response.json()
    assert payload["alphacalaTurn"] is False
    assert payload["moveLog"] == []
    assert payload["board"] == [4, 4, 4, 4, 4, 4, 0, 4, 4, 4, 4, 4, 4, 0]
    assert payload["availableMoves"] == [12, 11, 10, 9, 8, 7]

    game_id = payload["id"]
    # Row 2 is pit 10: sows 11, 12, 13 and lands on AlphaCala's pit 0
    move_response = client.post(f"/api/game/{game_id}/move", json={"row": 2})
    assert move_response.status_code == 200
    state = move_response.json()
    assert state["moveLog"][0] == {"player": "Opponent", "pit": 10, "extraTurn": False}
    assert state["board"][0] == 5
    assert state["board"][13] == 1
    assert state["alphacalaTurn"] is True
    assert state["aiPending"] is True

    follow_up = client.get(f"/api/game/{game_id}")
    assert follow_up.status_code == 200
    final_state = follow_up.json()
    assert final_state["alphacalaTurn"] is False
    assert final_state["aiPending"] is False
    assert final_state["moveLog"][-1]["player"] == "AlphaCala"
    assert final_state["evaluation"] is not None
    assert sum(final_state["board"]) == 48


def test_extra_turn_keeps_human_on_move():
    game_id = client.post("/api/game", json={"depth": 2}).json()["id"]
    # Row 3 is pit 9: the last of its four seeds lands in the store
    state = client.post(f"/api/game/{game_id}/move", json={"row": 3}).json()
    assert state["lastMove"] == {"player": "Opponent", "pit": 9, "extraTurn": True}
    assert state["alphacalaTurn"] is False
    assert state["aiPending"] is False


def test_empty_pit_rejected():
    game_id = client.post("/api/game", json={"depth": 2}).json()["id"]
    first_move = client.post(f"/api/game/{game_id}/move", json={"row": 3})
    assert first_move.status_code == 200

    repeat = client.post(f"/api/game/{game_id}/move", json={"row": 3})
    assert repeat.status_code == 400
    assert "empty" in repeat.json()["detail"]


def test_alphacala_first_moves_in_background():
    response = client.post("/api/game", json={"depth": 2, "alphacalaFirst": True})
    assert response.status_code == 200
    payload = response.json()
    assert payload["alphacalaTurn"] is True
    assert payload["aiPending"] is True

    state = client.get(f"/api/game/{payload['id']}").json()
    assert state["moveLog"][0]["player"] == "AlphaCala"
    assert state["alphacalaTurn"] is False


def test_rejects_unsupported_depth():
    response = client.post("/api/game", json={"depth": 3})
    assert response.status_code == 422


def test_rejects_out_of_range_row():
    game_id = client.post("/api/game", json={"depth": 2}).json()["id"]
    response = client.post(f"/api/game/{game_id}/move", json={"row": 6})
    assert response.status_code == 422


def test_missing_game_returns_404():
    assert client.get("/api/game/unknown").status_code == 404
    assert client.post("/api/game/unknown/move", json={"row": 0}).status_code == 404


def test_index_serves_board_page():
    response = client.get("/")
    assert response.status_code == 200
    assert "AlphaCala" in response.text
