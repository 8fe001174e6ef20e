"""Core rules for AlphaCala (Kalah, 6 pits per side, 4 seeds per pit).

A board is a list of 14 pits laid out as::

        13
      00  12
      01  11
      02  10
      03  09
      04  08
      05  07
        06

Pits 0-5 belong to AlphaCala and 6 is its store. Pits 7-12 belong to the
opponent and 13 is the opponent's store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

Board = List[int]

PIT_COUNT = 14
AC_STORE = 6
OPP_STORE = 13
START_SEEDS = 4

# Scan order used by the search; earlier pits win ties.
AC_PITS: Tuple[int, ...] = (5, 4, 3, 2, 1, 0)
OPP_PITS: Tuple[int, ...] = (12, 11, 10, 9, 8, 7)

AC_NAME = "AlphaCala"
OPP_NAME = "Opponent"


# ---------- Board helpers ----------


def new_board(start_seeds: int = START_SEEDS) -> Board:
    board = [start_seeds] * PIT_COUNT
    board[AC_STORE] = 0
    board[OPP_STORE] = 0
    return board


def is_ac_pit(pit_index: int) -> bool:
    return pit_index <= 5


def facing_pit(pit_index: int) -> int:
    return 12 - pit_index


def store_index(is_ac: bool) -> int:
    return AC_STORE if is_ac else OPP_STORE


def side_pits(is_ac: bool) -> Tuple[int, ...]:
    return AC_PITS if is_ac else OPP_PITS


def side_seeds(board: Board, is_ac: bool) -> int:
    return sum(board[i] for i in side_pits(is_ac))


def legal_moves(board: Board, is_ac_turn: bool) -> List[int]:
    """Non-empty pits of the side to move, in scan order."""
    return [i for i in side_pits(is_ac_turn) if board[i] > 0]


def final_score(board: Board) -> int:
    """Store difference once each side's leftover seeds are banked."""
    ac_total = board[AC_STORE] + side_seeds(board, True)
    opp_total = board[OPP_STORE] + side_seeds(board, False)
    return ac_total - opp_total


def row_to_pit(row: int) -> int:
    """Translate an opponent row (0 at the top) to its pit index."""
    if not 0 <= row <= 5:
        raise ValueError(f"Row must be between 0 and 5, got {row}")
    return 12 - row


def format_board(board: Board) -> str:
    lines = [f"  {board[OPP_STORE]:02d}"]
    for i in range(6):
        lines.append(f"{board[i]:02d}  {board[12 - i]:02d}")
    lines.append(f"  {board[AC_STORE]:02d}")
    return "\n".join(lines)


# ---------- Rules ----------


def next_pit_index(pit_index: int, is_mover_ac: bool) -> int:
    """Next pit to drop a seed into, skipping the opposing player's store."""
    if pit_index == 12 and is_mover_ac:
        return 0
    if pit_index == 5 and not is_mover_ac:
        return 7
    return (pit_index + 1) % PIT_COUNT


def apply_move(board: Board, pit_index: int) -> bool:
    """Play ``pit_index`` on ``board`` in place.

    The pit must belong to the mover and hold at least one seed; nothing is
    checked here. Returns True when the mover gets another turn.
    """
    is_ac_move = is_ac_pit(pit_index)

    seeds = board[pit_index]
    board[pit_index] = 0

    cursor = pit_index
    while seeds > 1:
        cursor = next_pit_index(cursor, is_ac_move)
        board[cursor] += 1
        seeds -= 1

    cursor = next_pit_index(cursor, is_ac_move)

    # Last seed in a store
    if cursor in (AC_STORE, OPP_STORE):
        board[cursor] += 1
        return True

    # Last seed in an empty own pit steals the facing pit
    if board[cursor] == 0 and is_ac_pit(cursor) == is_ac_move:
        facing = facing_pit(cursor)
        if board[facing] > 0:
            board[store_index(is_ac_move)] += 1 + board[facing]
            board[facing] = 0
            return False

    board[cursor] += 1
    return False


# ---------- Game ----------


@dataclass
class MancalaGame:
    board: Board = field(default_factory=new_board)
    is_ac_turn: bool = True
    move_log: List[Dict[str, object]] = field(default_factory=list)

    # ---- API used by UI & CLI ----

    def available_moves(self) -> List[int]:
        return legal_moves(self.board, self.is_ac_turn)

    @property
    def is_over(self) -> bool:
        return not self.available_moves()

    @property
    def current_player(self) -> str:
        return AC_NAME if self.is_ac_turn else OPP_NAME

    def play_move(self, pit_index: int) -> bool:
        """Apply a legal move for the side to move and update the turn flag."""
        if self.is_over:
            raise ValueError("Game already finished")
        if pit_index not in side_pits(self.is_ac_turn):
            raise ValueError(f"Pit {pit_index} does not belong to {self.current_player}")
        if self.board[pit_index] == 0:
            raise ValueError(f"Pit {pit_index} is empty")

        player = self.current_player
        go_again = apply_move(self.board, pit_index)
        self.move_log.append(
            {"player": player, "pit": pit_index, "extraTurn": go_again}
        )
        if not go_again:
            self.is_ac_turn = not self.is_ac_turn
        return go_again

    def score(self) -> int:
        if self.is_over:
            return final_score(self.board)
        return self.board[AC_STORE] - self.board[OPP_STORE]

    @property
    def winner(self) -> Optional[str]:
        if not self.is_over:
            return None
        result = self.score()
        if result > 0:
            return AC_NAME
        if result < 0:
            return OPP_NAME
        return None

    def clone(self) -> "MancalaGame":
        return MancalaGame(
            board=self.board.copy(),
            is_ac_turn=self.is_ac_turn,
            move_log=[dict(entry) for entry in self.move_log],
        )

    def __str__(self) -> str:
        return format_board(self.board)
