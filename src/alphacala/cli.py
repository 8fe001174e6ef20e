"""Console game loop: AlphaCala against a human entering rows."""

from __future__ import annotations

from typing import Callable, Optional

from .ai import MinimaxAI
from .config import EngineConfig
from .game import MancalaGame, new_board, row_to_pit


def _read_row(input_fn: Callable[[str], str]) -> int:
    raw = input_fn("Opponent move row (0-5): ").strip()
    try:
        row = int(raw)
    except ValueError as exc:
        raise ValueError(f"Row must be a number, got {raw!r}") from exc
    return row_to_pit(row)


def run_console(
    config: Optional[EngineConfig] = None,
    input_fn: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
) -> MancalaGame:
    config = config or EngineConfig.from_env()
    ai = MinimaxAI(config=config)

    choice = input_fn("Is AlphaCala playing first (y/n)? ").strip().lower()
    game = MancalaGame(
        board=new_board(config.start_seeds), is_ac_turn=choice.startswith("y")
    )

    while True:
        output(str(game))

        if game.is_ac_turn:
            score, move = ai.analyse(game)
            if move is None:
                break
            output(f"AlphaCala plays {move} (eval = {score})")
            game.play_move(move)
            continue

        if game.is_over:
            break
        try:
            game.play_move(_read_row(input_fn))
        except ValueError as exc:
            output(f"Illegal move: {exc}")

    winner = game.winner
    result = f"{winner} wins" if winner else "Tie"
    output(f"Game over: {result} (final score {game.score():+d})")
    return game


def main() -> None:
    run_console()


if __name__ == "__main__":
    main()
