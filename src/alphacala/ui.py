"""FastAPI-powered web UI for playing against AlphaCala in the browser."""

from __future__ import annotations

import logging
import random
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .ai import MinimaxAI
from .config import EngineConfig
from .game import AC_STORE, OPP_STORE, MancalaGame, new_board, row_to_pit

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Container for an active game and the AlphaCala player."""

    game: MancalaGame
    ai: MinimaxAI
    ai_pending: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="AlphaCala", description="Kalah against a minimax engine")


ALLOWED_DEPTHS: Tuple[int, ...] = (2, 6, 10)
AI_THINK_DELAY: Tuple[float, float] = (0.5, 1.0)


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    model_config = ConfigDict(populate_by_name=True)

    depth: int = Field(
        default=6,
        ge=1,
        le=20,
        description="Search depth in plies controlling AlphaCala's strength",
    )
    alphacala_first: bool = Field(default=False, alias="alphacalaFirst")

    @field_validator("depth")
    @classmethod
    def ensure_supported_depth(cls, value: int) -> int:
        if value not in ALLOWED_DEPTHS:
            raise ValueError(
                f"Unsupported difficulty depth {value}. "
                f"Choose one of {', '.join(map(str, ALLOWED_DEPTHS))}."
            )
        return value


class MoveRequest(BaseModel):
    """Request payload for the human's move, given as a row on their side."""

    row: int = Field(ge=0, le=5)


def _create_session(depth: int, alphacala_first: bool) -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    base = EngineConfig.from_env()
    config = EngineConfig(depth=depth, start_seeds=base.start_seeds)
    game = MancalaGame(board=new_board(config.start_seeds), is_ac_turn=alphacala_first)
    session = GameSession(game=game, ai=MinimaxAI(config=config))
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info(
        "Created game %s (depth=%d, alphacala_first=%s)",
        session_id,
        depth,
        alphacala_first,
    )
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _run_ai_turn(game_id: str) -> None:
    session = SESSIONS.get(game_id)
    if not session:
        return

    time.sleep(max(0.0, random.uniform(*AI_THINK_DELAY)))

    with session.lock:
        try:
            game = session.game
            # Extra turns keep AlphaCala on the move
            while game.is_ac_turn and not game.is_over:
                pit = session.ai.choose(game)
                go_again = game.play_move(pit)
                logger.info(
                    "Game %s: AlphaCala plays %d (eval = %s, extra turn = %s)",
                    game_id,
                    pit,
                    session.ai.last_evaluation,
                    go_again,
                )
        finally:
            session.ai_pending = False


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        game = session.game
        state: Dict[str, object] = {
            "id": game_id,
            "board": list(game.board),
            "stores": {"alphacala": game.board[AC_STORE], "opponent": game.board[OPP_STORE]},
            "alphacalaTurn": game.is_ac_turn,
            "availableMoves": game.available_moves(),
            "gameOver": game.is_over,
            "winner": game.winner,
            "score": game.score(),
            "evaluation": session.ai.last_evaluation,
            "depth": session.ai.depth,
            "moveLog": [dict(entry) for entry in game.move_log],
            "aiPending": session.ai_pending,
        }
        if game.move_log:
            state["lastMove"] = dict(game.move_log[-1])
        return state


def _schedule_ai(
    game_id: str, session: GameSession, background_tasks: Optional[BackgroundTasks]
) -> None:
    with session.lock:
        game = session.game
        should_schedule_ai = game.is_ac_turn and not game.is_over
        if should_schedule_ai:
            session.ai_pending = True

    if should_schedule_ai and background_tasks is not None:
        background_tasks.add_task(_run_ai_turn, game_id)


def _apply_player_move(
    game_id: str,
    session: GameSession,
    row: int,
    background_tasks: Optional[BackgroundTasks] = None,
) -> None:
    with session.lock:
        game = session.game
        if game.is_over:
            raise HTTPException(status_code=400, detail="Game already finished")

        if session.ai_pending:
            raise HTTPException(status_code=400, detail="AlphaCala is completing its move")

        if game.is_ac_turn:
            raise HTTPException(status_code=400, detail="It is AlphaCala's turn")

        try:
            game.play_move(row_to_pit(row))
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    _schedule_ai(game_id, session, background_tasks)


@app.post("/api/game")
def create_game(
    request: NewGameRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    game_id, session = _create_session(int(request.depth), request.alphacala_first)
    _schedule_ai(game_id, session, background_tasks)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(
    game_id: str, request: MoveRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(game_id, session, request.row, background_tasks)
    return _serialize_session(game_id, session)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>AlphaCala</title>
    <style>
      body {
        font-family: system-ui, sans-serif;
        background: #1f1b16;
        color: #f4ead5;
        display: flex;
        flex-direction: column;
        align-items: center;
        margin: 0;
        padding: 2rem 1rem;
      }
      h1 { margin: 0 0 1rem; letter-spacing: 0.05em; }
      .controls { display: flex; gap: 0.75rem; align-items: center; margin-bottom: 1.5rem; }
      select, button {
        font: inherit;
        padding: 0.4rem 0.8rem;
        border-radius: 0.5rem;
        border: none;
      }
      button { background: #c98a3d; color: #1f1b16; cursor: pointer; }
      button:disabled { opacity: 0.4; cursor: default; }
      .board {
        display: grid;
        grid-template-columns: repeat(2, 4.5rem);
        gap: 0.6rem;
        background: #6b4423;
        padding: 1rem;
        border-radius: 2rem;
      }
      .store {
        grid-column: span 2;
        justify-self: center;
        width: 6rem;
        height: 4rem;
        border-radius: 2rem;
        background: #3b2513;
        display: flex;
        align-items: center;
        justify-content: center;
        font-size: 1.6rem;
      }
      .pit {
        height: 4.5rem;
        border-radius: 50%;
        background: #3b2513;
        color: #f4ead5;
        font-size: 1.3rem;
      }
      .pit.playable { background: #8c5a2b; }
      .label { font-size: 0.8rem; opacity: 0.7; text-align: center; }
      #status { margin-top: 1.25rem; min-height: 1.5rem; }
      #log { margin-top: 1rem; font-size: 0.85rem; opacity: 0.8; max-width: 22rem; }
    </style>
  </head>
  <body>
    <h1>AlphaCala</h1>
    <div class=\"controls\">
      <label>Depth
        <select id=\"depth\">
          <option value=\"2\">2</option>
          <option value=\"6\" selected>6</option>
          <option value=\"10\">10</option>
        </select>
      </label>
      <label><input type=\"checkbox\" id=\"acFirst\" /> AlphaCala first</label>
      <button id=\"newGame\">New game</button>
    </div>
    <div class=\"label\">Your store</div>
    <div class=\"board\" id=\"board\"></div>
    <div class=\"label\">AlphaCala's store</div>
    <div id=\"status\"></div>
    <div id=\"log\"></div>
    <script>
      let state = null;
      let poll = null;

      async function api(path, options) {
        const response = await fetch(path, {
          headers: { \"Content-Type\": \"application/json\" },
          ...options,
        });
        const payload = await response.json();
        if (!response.ok) {
          throw new Error(payload.detail || \"Request failed\");
        }
        return payload;
      }

      function render() {
        const board = document.getElementById(\"board\");
        board.innerHTML = \"\";
        if (!state) return;

        const top = document.createElement(\"div\");
        top.className = \"store\";
        top.textContent = state.board[13];
        board.appendChild(top);

        for (let row = 0; row < 6; row++) {
          const left = document.createElement(\"div\");
          left.className = \"pit\";
          left.textContent = state.board[row];
          board.appendChild(left);

          const pit = 12 - row;
          const right = document.createElement(\"button\");
          right.className = \"pit\";
          right.textContent = state.board[pit];
          const playable =
            !state.alphacalaTurn && !state.aiPending && state.availableMoves.includes(pit);
          right.disabled = !playable;
          if (playable) {
            right.classList.add(\"playable\");
            right.onclick = () => play(row);
          }
          board.appendChild(right);
        }

        const bottom = document.createElement(\"div\");
        bottom.className = \"store\";
        bottom.textContent = state.board[6];
        board.appendChild(bottom);

        const status = document.getElementById(\"status\");
        if (state.gameOver) {
          status.textContent = state.winner
            ? `${state.winner} wins (${state.score > 0 ? \"+\" : \"\"}${state.score})`
            : \"Tie game\";
        } else if (state.aiPending || state.alphacalaTurn) {
          status.textContent = \"AlphaCala is thinking...\";
        } else {
          status.textContent =
            state.evaluation === null ? \"Your move\" : `Your move (eval ${state.evaluation})`;
        }

        document.getElementById(\"log\").textContent = state.moveLog
          .map((m) => `${m.player}: ${m.pit}${m.extraTurn ? \" (again)\" : \"\"}`)
          .join(\" | \");
      }

      function schedulePoll() {
        clearTimeout(poll);
        if (state && state.aiPending) {
          poll = setTimeout(async () => {
            state = await api(`/api/game/${state.id}`);
            render();
            schedulePoll();
          }, 400);
        }
      }

      async function newGame() {
        state = await api(\"/api/game\", {
          method: \"POST\",
          body: JSON.stringify({
            depth: Number(document.getElementById(\"depth\").value),
            alphacalaFirst: document.getElementById(\"acFirst\").checked,
          }),
        });
        render();
        schedulePoll();
      }

      async function play(row) {
        try {
          state = await api(`/api/game/${state.id}/move`, {
            method: \"POST\",
            body: JSON.stringify({ row }),
          });
        } catch (err) {
          document.getElementById(\"status\").textContent = err.message;
          return;
        }
        render();
        schedulePoll();
      }

      document.getElementById(\"newGame\").onclick = newGame;
      newGame();
    </script>
  </body>
</html>
"""
