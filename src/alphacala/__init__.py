"""AlphaCala package exposing the Kalah rules, the minimax engine, and the web application."""

from .ai import MinimaxAI, SearchResult, best_move, evaluate
from .config import EngineConfig
from .game import MancalaGame, apply_move, next_pit_index
from .ui import app

__all__ = [
    "EngineConfig",
    "MancalaGame",
    "MinimaxAI",
    "SearchResult",
    "app",
    "apply_move",
    "best_move",
    "evaluate",
    "next_pit_index",
]
