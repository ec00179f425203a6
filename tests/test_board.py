import random

import pytest

from slidetoe.game.board import (
    GRID_SIZE,
    MAX_MARKS,
    Board,
    GameState,
    Move,
    apply,
    format_point,
    parse_coordinate,
)
from slidetoe.game.types import Player, Point


def play(game: GameState, *points: Point) -> None:
    for p in points:
        game.apply_move(p)


def assert_queues_match_board(game: GameState) -> None:
    for player in Player:
        owned = game.board.owned_by(player)
        assert len(owned) <= MAX_MARKS
        assert owned == set(game.queues[player])
        assert len(game.queues[player]) == len(owned)


class TestParseCoordinate:
    def test_valid(self):
        assert parse_coordinate("A1") == Point(0, 0)
        assert parse_coordinate("C3") == Point(2, 2)
        assert parse_coordinate("B1") == Point(1, 0)
        assert parse_coordinate(" b2 ") == Point(1, 1)  # case insensitive

    def test_invalid(self):
        assert parse_coordinate("") is None
        assert parse_coordinate("A") is None
        assert parse_coordinate("D1") is None
        assert parse_coordinate("A0") is None
        assert parse_coordinate("A4") is None
        assert parse_coordinate("AA") is None

    def test_larger_grid(self):
        assert parse_coordinate("D4", size=4) == Point(3, 3)
        assert parse_coordinate("E1", size=4) is None


class TestFormatPoint:
    def test_basic(self):
        assert format_point(Point(0, 0)) == "A1"
        assert format_point(Point(1, 1)) == "B2"
        assert format_point(Point(2, 0)) == "C1"


class TestBoard:
    def test_place_and_get(self):
        b = Board()
        p = Point(1, 2)
        b.place(p, Player.X)
        assert b.get(p) is Player.X
        assert not b.is_empty(p)

    def test_remove(self):
        b = Board()
        p = Point(1, 2)
        b.place(p, Player.O)
        b.remove(p)
        assert b.is_empty(p)
        assert b.get(p) is None

    def test_place_on_occupied_fails(self):
        b = Board()
        b.place(Point(0, 0), Player.X)
        with pytest.raises(AssertionError):
            b.place(Point(0, 0), Player.O)

    def test_is_on_grid(self):
        b = Board()
        assert b.is_on_grid(Point(0, 0))
        assert b.is_on_grid(Point(2, 2))
        assert not b.is_on_grid(Point(-1, 0))
        assert not b.is_on_grid(Point(0, 3))

    def test_empty_points_scan_order(self):
        b = Board()
        b.place(Point(0, 1), Player.X)
        points = b.empty_points()
        assert len(points) == GRID_SIZE * GRID_SIZE - 1
        assert points[:3] == [Point(0, 0), Point(0, 2), Point(1, 0)]

    def test_rows_snapshot(self):
        b = Board()
        b.place(Point(2, 0), Player.X)
        b.place(Point(0, 1), Player.O)
        rows = b.rows()
        assert rows[0] == (None, None, Player.X)
        assert rows[1] == (Player.O, None, None)
        assert rows[2] == (None, None, None)


class TestGameState:
    def test_initial_state(self):
        g = GameState()
        assert g.turn == 0
        assert g.current_player is Player.X
        assert len(g.legal_moves()) == GRID_SIZE * GRID_SIZE
        assert all(len(q) == 0 for q in g.queues.values())

    def test_alternating_turns(self):
        g = GameState()
        g.apply_move(Point(1, 1))
        assert g.current_player is Player.O
        g.apply_move(Point(0, 0))
        assert g.current_player is Player.X
        assert g.turn == 2

    def test_apply_returns_move(self):
        g = GameState()
        move = g.apply_move(Point(1, 1))
        assert move == Move(point=Point(1, 1), player=Player.X, evicted=None)
        assert str(move) == "X: B2"

    def test_module_level_apply(self):
        g = GameState()
        apply(g, Player.X, Point(2, 2))
        assert g.board.get(Point(2, 2)) is Player.X
        assert g.current_player is Player.O

    def test_wrong_side_fails(self):
        g = GameState()
        with pytest.raises(AssertionError):
            g.apply_move(Point(0, 0), Player.O)

    def test_cannot_play_on_occupied(self):
        g = GameState()
        g.apply_move(Point(1, 1))
        with pytest.raises(AssertionError):
            g.apply_move(Point(1, 1))

    def test_cannot_play_off_grid(self):
        g = GameState()
        with pytest.raises(AssertionError):
            g.apply_move(Point(3, 0))

    def test_fourth_mark_evicts_oldest(self):
        g = GameState()
        c1, c2, c3, c4 = Point(0, 0), Point(2, 1), Point(1, 2), Point(1, 1)
        play(g, c1, Point(1, 0), c2, Point(0, 1), c3, Point(2, 2))
        assert list(g.queues[Player.X]) == [c1, c2, c3]

        move = g.apply_move(c4)

        assert move.evicted == c1
        assert g.board.is_empty(c1)
        for p in (c2, c3, c4):
            assert g.board.get(p) is Player.X
        assert list(g.queues[Player.X]) == [c2, c3, c4]
        assert g.turn == 7
        assert str(move) == "X: B2 (removes A1)"

    def test_evicted_cell_is_playable_again(self):
        g = GameState()
        play(g, Point(0, 0), Point(1, 0), Point(2, 1), Point(0, 1), Point(1, 2), Point(2, 2))
        g.apply_move(Point(1, 1))  # X evicts A1
        assert Point(0, 0) in g.legal_moves()
        g.apply_move(Point(0, 0))  # O takes it, evicting B1
        assert g.board.get(Point(0, 0)) is Player.O
        assert g.board.is_empty(Point(1, 0))

    def test_oldest_mark(self):
        g = GameState()
        assert g.oldest_mark(Player.X) is None
        play(g, Point(0, 0), Point(1, 0), Point(2, 1), Point(0, 1), Point(1, 2))
        assert g.oldest_mark(Player.X) == Point(0, 0)
        assert g.oldest_mark(Player.O) is None

    def test_board_never_fills(self):
        g = GameState()
        rng = random.Random(11)
        for _ in range(100):
            assert g.legal_moves()
            g.apply_move(rng.choice(g.legal_moves()))
        assert g.board.occupied_count == 2 * MAX_MARKS

    def test_sliding_window_invariant_random_play(self):
        rng = random.Random(2024)
        for _ in range(20):
            g = GameState()
            for _ in range(40):
                g.apply_move(rng.choice(g.legal_moves()))
                assert_queues_match_board(g)

    def test_reset(self):
        g = GameState()
        play(g, Point(0, 0), Point(1, 1), Point(2, 2))
        g.reset()
        assert g.turn == 0
        assert g.board.occupied_count == 0
        assert all(len(q) == 0 for q in g.queues.values())


class TestUndoMove:
    def test_undo_plain_move(self):
        g = GameState()
        g.apply_move(Point(0, 0))
        move = g.apply_move(Point(1, 1))
        g.undo_move(move)
        assert g.board.is_empty(Point(1, 1))
        assert g.current_player is Player.O
        assert list(g.queues[Player.O]) == []

    def test_undo_restores_evicted_mark(self):
        g = GameState()
        play(g, Point(0, 0), Point(1, 0), Point(2, 1), Point(0, 1), Point(1, 2), Point(2, 2))
        before_rows = g.board.rows()
        before_queues = {p: list(q) for p, q in g.queues.items()}

        move = g.apply_move(Point(1, 1))
        g.undo_move(move)

        assert g.board.rows() == before_rows
        assert {p: list(q) for p, q in g.queues.items()} == before_queues
        assert g.turn == 6

    def test_undo_out_of_order_fails(self):
        g = GameState()
        first = g.apply_move(Point(0, 0))
        g.apply_move(Point(1, 1))
        g.apply_move(Point(2, 2))
        with pytest.raises(AssertionError):
            g.undo_move(first)

    def test_apply_undo_random_sequences(self):
        rng = random.Random(5)
        g = GameState()
        for _ in range(60):
            rows = g.board.rows()
            queues = {p: list(q) for p, q in g.queues.items()}
            turn = g.turn
            probe = g.apply_move(rng.choice(g.legal_moves()))
            g.undo_move(probe)
            assert g.board.rows() == rows
            assert {p: list(q) for p, q in g.queues.items()} == queues
            assert g.turn == turn
            g.apply_move(rng.choice(g.legal_moves()))


class TestCopy:
    def test_copy_is_independent(self):
        g = GameState()
        play(g, Point(0, 0), Point(1, 1), Point(2, 2))
        rows = g.board.rows()
        queues = {p: list(q) for p, q in g.queues.items()}

        clone = g.copy()
        clone.apply_move(Point(0, 2))
        clone.apply_move(Point(2, 0))
        clone.apply_move(Point(1, 0))
        clone.apply_move(Point(2, 1))  # X evicts A1 on the clone only

        assert g.board.rows() == rows
        assert {p: list(q) for p, q in g.queues.items()} == queues
        assert g.turn == 3
        assert clone.board.is_empty(Point(0, 0))

    def test_copy_matches_original(self):
        g = GameState()
        play(g, Point(0, 0), Point(1, 1))
        clone = g.copy()
        assert clone.board.rows() == g.board.rows()
        assert clone.turn == g.turn
        assert clone.queues == g.queues
        assert clone.queues[Player.X] is not g.queues[Player.X]
