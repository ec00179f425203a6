from __future__ import annotations

import random
from typing import Optional

from slidetoe.game.board import GameState
from slidetoe.game.types import Point

from .base import Agent


class RandomAgent(Agent):
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def select_move(self, game_state: GameState) -> Point:
        moves = game_state.legal_moves()
        assert moves, "No legal moves available"
        return self.rng.choice(moves)
