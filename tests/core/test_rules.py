"""Tests for Rules: checkmate, stalemate, draw detection."""

from fenboard.core.enums import GameResult
from fenboard.core.memento import STARTING_FEN, position_from_fen
from fenboard.core.rules import Rules

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


class TestCheck:
    def test_starting_not_in_check(self) -> None:
        assert not Rules.is_in_check(position_from_fen(STARTING_FEN))

    def test_fools_mate_in_check(self) -> None:
        # After 1.f3 e5 2.g4 Qh4# white is in check
        assert Rules.is_in_check(position_from_fen(FOOLS_MATE))


class TestCheckmate:
    def test_fools_mate(self) -> None:
        pos = position_from_fen(FOOLS_MATE)
        assert Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.BLACK_WINS

    def test_back_rank_mate(self) -> None:
        # R on a8 checks black king d8; white king d6 covers all escapes
        pos = position_from_fen("R2k4/8/3K4/8/8/8/8/8 b - - 0 1")
        assert Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.WHITE_WINS

    def test_not_checkmate_when_can_escape(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4R2K b - - 0 1")
        assert Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.IN_PROGRESS


class TestStalemate:
    def test_queen_stalemate(self) -> None:
        pos = position_from_fen("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")
        assert Rules.is_stalemate(pos)
        assert not Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.DRAW

    def test_starting_not_stalemate(self) -> None:
        assert not Rules.is_stalemate(position_from_fen(STARTING_FEN))


class TestInsufficientMaterial:
    def test_kings_only(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
        assert Rules.is_insufficient_material(pos)
        assert Rules.game_result(pos) == GameResult.DRAW

    def test_king_and_knight(self) -> None:
        pos = position_from_fen("8/8/8/4k3/8/8/8/4KN2 w - - 0 1")
        assert Rules.is_insufficient_material(pos)

    def test_same_colour_bishops(self) -> None:
        pos = position_from_fen("5b2/8/8/4k3/8/8/8/2B1K3 w - - 0 1")
        assert Rules.is_insufficient_material(pos)

    def test_opposite_colour_bishops(self) -> None:
        pos = position_from_fen("2b5/8/8/4k3/8/8/8/2B1K3 w - - 0 1")
        assert not Rules.is_insufficient_material(pos)

    def test_rook_is_enough(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w Q - 0 1")
        assert not Rules.is_insufficient_material(pos)


class TestFiftyMoveRule:
    def test_hundred_half_moves(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w Q - 100 80")
        assert Rules.is_fifty_move_rule(pos)
        assert Rules.game_result(pos) == GameResult.DRAW

    def test_one_short(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w Q - 99 80")
        assert not Rules.is_fifty_move_rule(pos)
        assert Rules.game_result(pos) == GameResult.IN_PROGRESS
