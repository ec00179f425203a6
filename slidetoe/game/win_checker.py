"""Line scanning for completed rows, columns and diagonals."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from .board import Board
from .types import Player, Point


@lru_cache(maxsize=None)
def winning_lines(size: int) -> tuple[tuple[Point, ...], ...]:
    """All lines of a size x size board in scan order.

    Rows top to bottom, then columns left to right, then the main diagonal
    (top-left to bottom-right), then the anti-diagonal. When two lines
    complete at once the earlier one is reported; the order carries no
    other meaning.
    """
    rows = [tuple(Point(x, y) for x in range(size)) for y in range(size)]
    cols = [tuple(Point(x, y) for y in range(size)) for x in range(size)]
    diagonal = tuple(Point(i, i) for i in range(size))
    anti_diagonal = tuple(Point(size - 1 - i, i) for i in range(size))
    return tuple(rows + cols + [diagonal, anti_diagonal])


def _line_owner(board: Board, line: tuple[Point, ...]) -> Optional[Player]:
    owner = board.get(line[0])
    if owner is None:
        return None
    for point in line[1:]:
        if board.get(point) is not owner:
            return None
    return owner


def winning_line(board: Board) -> Optional[tuple[Point, ...]]:
    """Return the first completed line, or None."""
    for line in winning_lines(board.size):
        if _line_owner(board, line) is not None:
            return line
    return None


def find_winner(board: Board) -> Optional[Player]:
    """Return the player owning every cell of some line, or None."""
    for line in winning_lines(board.size):
        owner = _line_owner(board, line)
        if owner is not None:
            return owner
    return None
