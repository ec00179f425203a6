from __future__ import annotations

import enum
from typing import NamedTuple


class Player(enum.Enum):
    X = 0
    O = 1

    @property
    def other(self) -> Player:
        return Player.O if self is Player.X else Player.X

    @classmethod
    def for_turn(cls, turn: int) -> Player:
        """Even turns belong to X, odd turns to O."""
        return cls(turn % 2)

    def __str__(self) -> str:
        return self.name


class Point(NamedTuple):
    x: int  # 0-indexed column, 0 = left
    y: int  # 0-indexed row, 0 = top
