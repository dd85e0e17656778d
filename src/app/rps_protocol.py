from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

Outcome = Literal["Win", "Lose", "Draw"]
MoveSet = tuple[str, ...]
RelationMatrix = tuple[tuple[Outcome, ...], ...]

MIN_MOVES = 3


class InvalidMoveSet(ValueError):
    pass


def validate_moves(moves: Sequence[str]) -> MoveSet:
    """Return the moves as an immutable MoveSet or raise InvalidMoveSet.

    Names are compared exactly: "rock" and "Rock" are different moves and
    no whitespace is trimmed.
    """
    move_set = tuple(moves)
    n = len(move_set)
    if n < MIN_MOVES:
        raise InvalidMoveSet(f"need at least {MIN_MOVES} moves, got {n}")
    if n % 2 == 0:
        raise InvalidMoveSet(f"need an odd number of moves, got {n}")

    seen: set[str] = set()
    duplicates: list[str] = []
    for move in move_set:
        if move in seen and move not in duplicates:
            duplicates.append(move)
        seen.add(move)
    if duplicates:
        raise InvalidMoveSet("duplicate moves: " + ", ".join(repr(m) for m in duplicates))

    return move_set


def build_relation_table(moves: Sequence[str]) -> RelationMatrix:
    """Build the N x N relation matrix, read as matrix[row][col] from row's side.

    Moves sit on a circle. Each move loses to the N // 2 moves that follow it
    and beats the N // 2 moves that precede it.
    """
    move_set = validate_moves(moves)
    n = len(move_set)
    half = n // 2

    rows: list[tuple[Outcome, ...]] = []
    for i in range(n):
        loses_to = {(i + step) % n for step in range(1, half + 1)}
        beats = {(i - step) % n for step in range(1, half + 1)}

        row: list[Outcome] = []
        for j in range(n):
            if j in beats:
                row.append("Win")
            elif j in loses_to:
                row.append("Lose")
            else:
                row.append("Draw")
        rows.append(tuple(row))

    return tuple(rows)


def determine_outcome(matrix: RelationMatrix, player: int, opponent: int) -> Outcome:
    """Outcome of a round from the player's point of view."""
    return matrix[player][opponent]


def invert(outcome: Outcome) -> Outcome:
    if outcome == "Win":
        return "Lose"
    if outcome == "Lose":
        return "Win"
    return "Draw"
