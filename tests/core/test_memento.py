"""Tests for position snapshots and their text encoding."""

import dataclasses

import pytest

from fenboard.core.enums import CastlingRights, Color, PieceType
from fenboard.core.errors import FormatError
from fenboard.core.memento import (
    STARTING_FEN,
    Memento,
    position_from_fen,
    position_to_fen,
)
from fenboard.core.piece import Piece
from fenboard.core.position import Position
from fenboard.core.types import E1, E3, E8


class TestDecoding:
    def test_starting_fields(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.side_to_move == Color.WHITE
        assert pos.castling == CastlingRights.ALL
        assert pos.en_passant is None
        assert pos.halfmove_clock == 0
        assert pos.fullmove_number == 1

    def test_starting_kings(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[E8] == Piece(Color.BLACK, PieceType.KING)
        assert pos.board.king_square(Color.BLACK) == E8

    def test_en_passant_square(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        assert position_from_fen(fen).en_passant == E3

    def test_castling_mask_bits(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w Kq - 0 1"
        assert int(position_from_fen(fen).castling) == 0b1001

    def test_no_castling(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w - - 0 1"
        assert position_from_fen(fen).castling == CastlingRights.NONE

    def test_counters(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K3 b - - 37 112")
        assert pos.halfmove_clock == 37
        assert pos.fullmove_number == 112

    def test_zero_fullmove(self) -> None:
        assert position_from_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 0").fullmove_number == 0

    def test_board_without_kings(self) -> None:
        pos = position_from_fen("8/8/8/8/8/8/8/8 w - - 0 1")
        assert not pos.board.has_king(Color.WHITE)
        assert not pos.board.has_king(Color.BLACK)

    @pytest.mark.parametrize(
        ("fen", "match"),
        [
            ("", "6 fields"),
            ("invalid", "6 fields"),
            ("4k3/8/8/8/8/8/8/4K3 w - - 0", "6 fields"),
            ("4k3/8/8/8/8/8/4K3 w - - 0 1", "8 ranks"),
            ("4k4/8/8/8/8/8/8/4K3 w - - 0 1", "rank width"),
            ("4k2/8/8/8/8/8/8/4K3 w - - 0 1", "rank width"),
            ("9/4k3/8/8/8/8/8/4K3 w - - 0 1", "Invalid FEN"),
            ("4k3/8/8/8/8/8/8/4KX2 w - - 0 1", "piece character"),
            ("4k3/8/8/8/8/8/8/3KK3 w - - 0 1", "more than one white king"),
            ("4k3/8/8/8/8/8/8/4K3 x - - 0 1", "side-to-move"),
            ("4k3/8/8/8/8/8/8/4K3 w KX - 0 1", "castling"),
            ("4k3/8/8/8/8/8/8/4K3 w KK - 0 1", "castling"),
            ("4k3/8/8/8/8/8/8/4K3 w - e9 0 1", "square name"),
            ("4k3/8/8/8/8/8/8/4K3 w - e3 0 1", "en-passant"),
            ("4k3/8/8/8/8/8/8/4K3 w - - -1 1", "halfmove"),
            ("4k3/8/8/8/8/8/8/4K3 w - - x 1", "halfmove"),
            ("4k3/8/8/8/8/8/8/4K3 w - - 0 -1", "fullmove"),
            ("4k3/8/8/8/8/8/8/4K3 w - - 0 one", "fullmove"),
        ],
    )
    def test_rejects(self, fen: str, match: str) -> None:
        with pytest.raises(FormatError, match=match):
            position_from_fen(fen)


class TestEncoding:
    def test_starting_position(self) -> None:
        assert position_to_fen(Position()) == STARTING_FEN

    def test_no_castling_keeps_other_fields(self) -> None:
        fen = "4k3/8/8/8/8/8/8/4K3 b - - 5 40"
        assert position_to_fen(position_from_fen(fen)) == fen

    def test_castling_order(self) -> None:
        pos = Position(castling=CastlingRights.BLACK_QUEENSIDE | CastlingRights.WHITE_KINGSIDE)
        assert position_to_fen(pos).split()[2] == "Kq"

    def test_en_passant_after_double_push(self) -> None:
        pos = Position()
        pos.list_possible_moves()
        pos.make_move("e2e4")
        assert position_to_fen(pos) == (
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )

    def test_cleared_board(self) -> None:
        pos = Position()
        pos.clear()
        assert position_to_fen(pos).split()[0] == "8/8/8/8/8/8/8/8"


class TestRoundTrip:
    GAME = ("e2e4", "c7c5", "g1f3", "d7d6", "f1b5", "c8d7", "e1g1", "d7b5",
            "b1c3", "b5e2", "d1e2", "g8f6", "e4e5", "d6e5", "f3e5", "e7e6",
            "d2d3", "f8e7", "c1f4", "e8g8")

    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
            "rnbqkbnr/ppp1p1pp/8/3pPp2/8/8/PPPP1PPP/RNBQKBNR w KQkq f6 0 3",
        ],
    )
    def test_text_round_trip(self, fen: str) -> None:
        assert position_to_fen(position_from_fen(fen)) == fen

    def test_every_reached_position(self) -> None:
        pos = Position()
        for text in self.GAME:
            pos.list_possible_moves()
            pos.make_move(text)
            restored = Position()
            restored.restore(pos.create_memento())
            assert restored == pos, f"Mismatch after {text}"


class TestMementoValue:
    def test_str_is_encoded_text(self) -> None:
        assert str(Position().create_memento()) == STARTING_FEN

    def test_unaffected_by_later_moves(self) -> None:
        pos = Position()
        memento = pos.create_memento()
        pos.list_possible_moves()
        pos.make_move("e2e4")
        assert memento.fen == STARTING_FEN

    def test_frozen(self) -> None:
        memento = Position().create_memento()
        with pytest.raises(dataclasses.FrozenInstanceError):
            memento.fen = "x"  # type: ignore[misc]

    def test_to_position(self) -> None:
        assert Memento(STARTING_FEN).to_position() == Position()


class TestRestore:
    def test_restores_all_fields(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b Kq e3 3 10"
        pos = Position()
        pos.restore(Memento(fen))
        assert position_to_fen(pos) == fen
        assert pos.board.king_square(Color.WHITE) == E1

    def test_cleared_board_round_trip(self) -> None:
        cleared = position_from_fen(
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )
        cleared.clear()
        pos = Position()
        pos.restore(cleared.create_memento())
        assert pos == cleared
        assert pos.list_possible_moves() == ""

    def test_failed_restore_keeps_state(self) -> None:
        pos = Position()
        pos.list_possible_moves()
        pos.make_move("e2e4")
        before = pos.create_memento()
        with pytest.raises(FormatError):
            pos.restore(Memento("rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 x"))
        assert pos.create_memento() == before

    def test_restore_discards_stale_listing(self) -> None:
        pos = Position()
        pos.list_possible_moves()
        pos.restore(Memento(STARTING_FEN))
        with pytest.raises(ValueError):
            pos.make_move("e2e4")
