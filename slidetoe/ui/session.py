"""Controller session: one human, one agent, a running win tally."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from slidetoe.agent.base import Agent
from slidetoe.agent.search import SearchAgent
from slidetoe.game.board import GameState, Move
from slidetoe.game.types import Player, Point
from slidetoe.game.win_checker import find_winner

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Everything a front end needs between moves.

    The tally survives board resets; it only goes back to zero on
    ``new_match``.
    """

    state: GameState = field(default_factory=GameState)
    agent: Agent = field(default_factory=SearchAgent)
    human_player: Player = Player.X
    scores: dict[Player, int] = field(default_factory=lambda: {p: 0 for p in Player})
    last_move: Optional[Move] = None
    last_winner: Optional[Player] = None
    finished_state: Optional[GameState] = None  # board as it stood at the last win

    @property
    def ai_player(self) -> Player:
        return self.human_player.other

    @property
    def is_human_turn(self) -> bool:
        return self.state.current_player is self.human_player

    def can_play(self, point: Point) -> bool:
        """True if the human may play ``point`` right now."""
        return (
            self.is_human_turn
            and self.state.board.is_on_grid(point)
            and self.state.board.is_empty(point)
        )

    def initiate_move(self, point: Point) -> Optional[Player]:
        """Apply a validated human move. Returns the winner, if any."""
        assert self.can_play(point), f"Human cannot play {point}"
        return self._play(point)

    def request_automated_move(self) -> Point:
        """Let the agent choose and play a move for the side to move."""
        point = self.agent.select_move(self.state)
        self._play(point)
        return point

    def _play(self, point: Point) -> Optional[Player]:
        self.last_winner = None
        self.finished_state = None
        self.last_move = self.state.apply_move(point)
        winner = find_winner(self.state.board)
        if winner is not None:
            self._record_win(winner)
        return winner

    def _record_win(self, winner: Player) -> None:
        self.scores[winner] += 1
        self.last_winner = winner
        self.last_move = None
        self.finished_state = self.state.copy()
        self.state.reset()
        logger.info(
            "%s wins; score X %d - O %d",
            winner, self.scores[Player.X], self.scores[Player.O],
        )

    def snapshot(self) -> tuple[tuple[Optional[Player], ...], ...]:
        return self.state.board.rows()

    def new_match(self, human_player: Optional[Player] = None) -> None:
        self.state.reset()
        self.scores = {p: 0 for p in Player}
        self.last_move = None
        self.last_winner = None
        self.finished_state = None
        if human_player is not None:
            self.human_player = human_player
