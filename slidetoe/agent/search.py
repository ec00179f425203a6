"""Search agent: fixed-horizon exhaustive search with summed leaf scores.

Marks are evicted after three placements, so games never end by filling the
board. Instead of searching to terminal positions the engine explores every
line of play up to a fixed horizon and scores each root move by summing the
depth-weighted wins and losses found below it. Summing (rather than taking
min/max) favours moves that lead into many good continuations; it is a
heuristic, not a minimax guarantee.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence

from slidetoe.agent.base import Agent
from slidetoe.game.board import GameState
from slidetoe.game.types import Player, Point
from slidetoe.game.win_checker import find_winner

logger = logging.getLogger(__name__)

DEFAULT_HORIZON = 5

INF = math.inf


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScoringPolicy:
    """Terminal scores as a function of the plies left before the horizon.

    Both are increasing in ``remaining`` so nearer outcomes weigh more. The
    loss exponent should be at least the win exponent so avoiding a quick
    loss outweighs chasing a quick win.
    """

    win_exponent: int = 3
    loss_exponent: int = 4

    def win(self, remaining: int) -> int:
        return (remaining + 1) ** self.win_exponent

    def loss(self, remaining: int) -> int:
        return (remaining + 1) ** self.loss_exponent


DEFAULT_POLICY = ScoringPolicy()


class ScoredMove(NamedTuple):
    score: int
    x: int
    y: int

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


class SearchResult(NamedTuple):
    score: int
    moves: list[ScoredMove]  # tied-best root moves, in board scan order

    @property
    def points(self) -> list[Point]:
        return [m.point for m in self.moves]


# ---------------------------------------------------------------------------
# Recursive evaluation
# ---------------------------------------------------------------------------

def score_subtree(
    game_state: GameState,
    depth: int,
    horizon: int,
    root_player: Player,
    policy: ScoringPolicy = DEFAULT_POLICY,
    stats: Optional[dict] = None,
) -> int:
    """Sum of terminal scores reachable from ``game_state`` before the horizon.

    ``game_state`` is the position after ``depth`` plies from the root. It is
    mutated while exploring and restored before returning.
    """
    if stats is not None:
        stats["nodes"] = stats.get("nodes", 0) + 1

    remaining = horizon - depth
    winner = find_winner(game_state.board)
    if winner is root_player:
        return policy.win(remaining)
    if winner is not None:
        return -policy.loss(remaining)
    if depth >= horizon:
        return 0

    total = 0
    for point in game_state.legal_moves():
        move = game_state.apply_move(point)
        total += score_subtree(game_state, depth + 1, horizon, root_player, policy, stats)
        game_state.undo_move(move)
    return total


def search(
    game_state: GameState,
    horizon: int = DEFAULT_HORIZON,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> SearchResult:
    """Score every legal root move and return those tied for the best score.

    The search runs on a private copy, so ``game_state`` is left untouched.
    """
    assert horizon >= 1, "Horizon must be at least one ply"
    work = game_state.copy()
    root_player = work.current_player
    candidates = work.legal_moves()
    assert candidates, "No empty cell to play"

    stats: dict = {}
    best_score = -INF
    best_moves: list[ScoredMove] = []

    for point in candidates:
        move = work.apply_move(point)
        score = score_subtree(work, 1, horizon, root_player, policy, stats)
        work.undo_move(move)

        if score > best_score:
            best_score = score
            best_moves = [ScoredMove(score, point.x, point.y)]
        elif score == best_score:
            best_moves.append(ScoredMove(score, point.x, point.y))

    logger.debug(
        "search: player=%s horizon=%d best=%s tied=%d nodes=%d",
        root_player, horizon, best_score, len(best_moves), stats.get("nodes", 0),
    )
    return SearchResult(best_score, best_moves)


# ---------------------------------------------------------------------------
# Tie-break
# ---------------------------------------------------------------------------

def select_move(
    moves: Sequence[ScoredMove],
    rng: Optional[random.Random] = None,
) -> Point:
    """Pick one of the tied-best moves uniformly at random."""
    assert moves, "No moves to choose from"
    chooser = rng if rng is not None else random
    return chooser.choice(list(moves)).point


# ---------------------------------------------------------------------------
# SearchAgent
# ---------------------------------------------------------------------------

class SearchAgent(Agent):
    """Exhaustive fixed-horizon search with a random tie-break."""

    def __init__(
        self,
        depth: int = DEFAULT_HORIZON,
        policy: ScoringPolicy = DEFAULT_POLICY,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.depth = depth
        self.policy = policy
        self.rng = rng

    @property
    def name(self) -> str:
        return f"SearchAgent(d={self.depth})"

    def select_move(self, game_state: GameState) -> Point:
        result = search(game_state, self.depth, self.policy)
        return select_move(result.moves, self.rng)
