from __future__ import annotations

import abc

from slidetoe.game.board import GameState
from slidetoe.game.types import Point


class Agent(abc.ABC):
    """Something that can choose a move for the side to move.

    Implementations may explore ``game_state`` but must hand it back
    unchanged; the caller applies the returned point itself.
    """

    @abc.abstractmethod
    def select_move(self, game_state: GameState) -> Point:
        """Return an empty cell for ``game_state.current_player``."""

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def __str__(self) -> str:
        return self.name
