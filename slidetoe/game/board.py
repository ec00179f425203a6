from __future__ import annotations

import string
from collections import deque
from dataclasses import dataclass
from typing import Optional

from .types import Player, Point

GRID_SIZE = 3
MAX_MARKS = 3  # marks a player may hold before the oldest is evicted

COL_LABELS = string.ascii_uppercase


def parse_coordinate(text: str, size: int = GRID_SIZE) -> Optional[Point]:
    """Parse a coordinate string like 'A1' or 'C3' into a Point.

    Column is a letter (A = left), row is a number (1 = top).
    Returns None if the string is invalid or off the grid.
    """
    text = text.strip().upper()
    if len(text) < 2:
        return None
    col_char = text[0]
    row_str = text[1:]
    if col_char not in COL_LABELS[:size]:
        return None
    try:
        row = int(row_str)
    except ValueError:
        return None
    if not (1 <= row <= size):
        return None
    return Point(COL_LABELS.index(col_char), row - 1)


def format_point(point: Point) -> str:
    """Format a Point as a coordinate string like 'B2'."""
    return f"{COL_LABELS[point.x]}{point.y + 1}"


@dataclass(frozen=True)
class Move:
    point: Point
    player: Player
    evicted: Optional[Point] = None

    def __str__(self) -> str:
        text = f"{self.player}: {format_point(self.point)}"
        if self.evicted is not None:
            text += f" (removes {format_point(self.evicted)})"
        return text


class Board:
    """Square grid of cells. A cell holds a Player or nothing."""

    def __init__(self, size: int = GRID_SIZE) -> None:
        self.size = size
        self._grid: dict[Point, Player] = {}

    def place(self, point: Point, player: Player) -> None:
        assert self.is_empty(point), f"{format_point(point)} is occupied"
        self._grid[point] = player

    def remove(self, point: Point) -> None:
        del self._grid[point]

    def get(self, point: Point) -> Optional[Player]:
        return self._grid.get(point)

    def is_empty(self, point: Point) -> bool:
        return point not in self._grid

    def is_on_grid(self, point: Point) -> bool:
        return 0 <= point.x < self.size and 0 <= point.y < self.size

    def empty_points(self) -> list[Point]:
        return [
            Point(x, y)
            for x in range(self.size)
            for y in range(self.size)
            if Point(x, y) not in self._grid
        ]

    def owned_by(self, player: Player) -> set[Point]:
        return {p for p, owner in self._grid.items() if owner is player}

    def rows(self) -> tuple[tuple[Optional[Player], ...], ...]:
        """Read-only snapshot, indexed as rows()[y][x]."""
        return tuple(
            tuple(self._grid.get(Point(x, y)) for x in range(self.size))
            for y in range(self.size)
        )

    def copy(self) -> Board:
        clone = Board(self.size)
        clone._grid = dict(self._grid)
        return clone

    @property
    def occupied_count(self) -> int:
        return len(self._grid)


class GameState:
    """Board, one FIFO move queue per player, and the turn counter.

    The player to move is derived from the parity of ``turn`` so nothing
    else has to be kept in sync.
    """

    def __init__(self, size: int = GRID_SIZE) -> None:
        assert size * size > 2 * MAX_MARKS, "board could fill up"
        self.board = Board(size)
        self.queues: dict[Player, deque[Point]] = {p: deque() for p in Player}
        self.turn = 0

    @property
    def size(self) -> int:
        return self.board.size

    @property
    def current_player(self) -> Player:
        return Player.for_turn(self.turn)

    def legal_moves(self) -> list[Point]:
        return self.board.empty_points()

    def apply_move(self, point: Point, player: Optional[Player] = None) -> Move:
        """Place a mark for the current player, evict its oldest mark if it
        now holds more than MAX_MARKS, and advance the turn."""
        assert self.board.is_on_grid(point), f"Point {point} is off the grid"
        if player is None:
            player = self.current_player
        assert player is self.current_player, f"It is not {player}'s turn"

        self.board.place(point, player)
        queue = self.queues[player]
        queue.append(point)
        evicted = None
        if len(queue) > MAX_MARKS:
            evicted = queue.popleft()
            self.board.remove(evicted)
        self.turn += 1
        return Move(point=point, player=player, evicted=evicted)

    def undo_move(self, move: Move) -> None:
        """Reverse ``move``, which must be the most recently applied one."""
        queue = self.queues[move.player]
        assert queue and queue[-1] == move.point, "Can only undo the last move"
        queue.pop()
        self.board.remove(move.point)
        if move.evicted is not None:
            queue.appendleft(move.evicted)
            self.board.place(move.evicted, move.player)
        self.turn -= 1

    def copy(self) -> GameState:
        clone = GameState.__new__(GameState)
        clone.board = self.board.copy()
        clone.queues = {p: deque(q) for p, q in self.queues.items()}
        clone.turn = self.turn
        return clone

    def reset(self) -> None:
        self.board = Board(self.size)
        self.queues = {p: deque() for p in Player}
        self.turn = 0

    def oldest_mark(self, player: Player) -> Optional[Point]:
        """The mark ``player`` loses on its next placement, if its queue is full."""
        queue = self.queues[player]
        if len(queue) < MAX_MARKS:
            return None
        return queue[0]


def apply(state: GameState, side: Player, point: Point) -> Move:
    return state.apply_move(point, side)
