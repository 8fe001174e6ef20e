"""Depth-limited minimax with alpha-beta pruning for AlphaCala."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Sequence

from .config import EngineConfig
from .game import (
    AC_PITS,
    AC_STORE,
    OPP_PITS,
    OPP_STORE,
    Board,
    MancalaGame,
    apply_move,
)

logger = logging.getLogger(__name__)


class SearchResult(NamedTuple):
    """Evaluation from AlphaCala's point of view plus the move that earns it.

    ``move`` is None at the depth limit and when the side to move has no seeds.
    """

    score: int
    move: Optional[int]


def evaluate(
    board: Board,
    is_ac_turn: bool,
    depth: int,
    alpha: float = -math.inf,
    beta: float = math.inf,
    ac_pits: Sequence[int] = AC_PITS,
    opp_pits: Sequence[int] = OPP_PITS,
) -> SearchResult:
    """Score ``board`` with ``depth`` plies of minimax.

    Positive scores favour AlphaCala. The board is never mutated; every
    child node works on its own copy.
    """
    # Leaf: store difference
    if depth == 0:
        return SearchResult(board[AC_STORE] - board[OPP_STORE], None)

    best_move: Optional[int] = None

    if is_ac_turn:
        best_score = -math.inf
        for pit in ac_pits:
            if board[pit] == 0:
                continue
            child = board.copy()
            go_again = apply_move(child, pit)
            score, _ = evaluate(
                child, go_again, depth - 1, alpha, beta, ac_pits, opp_pits
            )
            if score > best_score:
                best_score, best_move = score, pit
            alpha = max(alpha, score)
            if beta <= alpha:
                break
    else:
        best_score = math.inf
        for pit in opp_pits:
            if board[pit] == 0:
                continue
            child = board.copy()
            go_again = apply_move(child, pit)
            score, _ = evaluate(
                child, not go_again, depth - 1, alpha, beta, ac_pits, opp_pits
            )
            if score < best_score:
                best_score, best_move = score, pit
            beta = min(beta, score)
            if beta <= alpha:
                break

    if best_move is None:
        # No seeds on the side to move: the other side banks what it has left
        score = board[AC_STORE] - board[OPP_STORE]
        if is_ac_turn:
            score -= sum(board[i] for i in opp_pits)
        else:
            score += sum(board[i] for i in ac_pits)
        return SearchResult(score, None)

    return SearchResult(int(best_score), best_move)


def best_move(board: Board, is_ac_turn: bool, depth: int) -> SearchResult:
    """Root query: full alpha-beta window over ``depth`` plies."""
    result = evaluate(board, is_ac_turn, depth)
    logger.debug(
        "search depth=%d ac_turn=%s -> eval=%d move=%s",
        depth,
        is_ac_turn,
        result.score,
        result.move,
    )
    return result


@dataclass
class MinimaxAI:
    """AlphaCala player bound to an engine configuration.

    Public surface used by the CLI and web UI:
      - MinimaxAI(config=EngineConfig(depth=8))
      - analyse(game) -> SearchResult
      - choose(game) -> pit index
    """

    config: EngineConfig = field(default_factory=EngineConfig)
    last_evaluation: Optional[int] = None

    @property
    def depth(self) -> int:
        return self.config.depth

    def analyse(self, game: MancalaGame) -> SearchResult:
        result = evaluate(
            game.board,
            game.is_ac_turn,
            self.config.depth,
            ac_pits=self.config.ac_pits,
            opp_pits=self.config.opp_pits,
        )
        logger.debug(
            "AlphaCala analysed depth=%d -> eval=%d move=%s",
            self.config.depth,
            result.score,
            result.move,
        )
        return result

    def choose(self, game: MancalaGame) -> int:
        if not game.is_ac_turn:
            raise ValueError("It is not AlphaCala's turn")
        result = self.analyse(game)
        self.last_evaluation = result.score
        if result.move is not None:
            return result.move

        moves = game.available_moves()
        if not moves:
            raise RuntimeError("No valid moves available")
        # Depth 0 gives no preference; fall back to the first scanned pit
        return moves[0]
