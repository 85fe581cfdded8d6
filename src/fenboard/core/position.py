"""Position — complete game state (board + metadata) with move application."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fenboard.core.board import Board
from fenboard.core.enums import CastlingRights, Color, MoveFlag, PieceType
from fenboard.core.errors import IllegalMoveError
from fenboard.core.move import Move
from fenboard.core.piece import EMPTY, Piece
from fenboard.core.types import (
    A1,
    A8,
    H1,
    H8,
    Square,
    file_of,
    make_square,
    rank_of,
)

if TYPE_CHECKING:
    from fenboard.core.memento import Memento

_LOGGER = logging.getLogger(__name__)

MOVE_SEPARATOR = "/"


@dataclass(slots=True)
class _PositionState:
    """Snapshot saved before each move so we can undo it."""

    move: Move
    castling: CastlingRights
    en_passant: Square | None
    halfmove_clock: int
    captured_piece: Piece | None
    listed: dict[str, Move] | None


class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    ``push`` / ``pop`` apply and undo :class:`Move` objects through an
    internal history stack. ``list_possible_moves`` / ``make_move`` are the
    text surface used by a command loop: a move text is only accepted if it
    appeared in the most recent listing for the current state.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "_history",
        "_listed",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self._history: list[_PositionState] = []
        self._listed: dict[str, Move] | None = None

    @classmethod
    def from_fen(cls, fen: str) -> Position:
        """Build a position from its encoded text."""
        from fenboard.core.memento import position_from_fen

        return position_from_fen(fen)

    # ── Queries ──────────────────────────────────────────────────────────

    def piece_at(self, rank: int, file: int) -> str:
        """Piece code at (*rank*, *file*), or :data:`EMPTY`."""
        piece = self.board[make_square(rank, file)]
        return str(piece) if piece is not None else EMPTY

    def list_possible_moves(self) -> str:
        """Slash-separated text of every legal move for the side to move.

        The listing is remembered; :meth:`make_move` only accepts its entries
        until the position changes again.
        """
        from fenboard.core.move_generator import MoveGenerator

        moves = MoveGenerator(self).generate_legal_moves()
        self._listed = {str(move): move for move in moves}
        return MOVE_SEPARATOR.join(self._listed)

    # ── Text move application ────────────────────────────────────────────

    def make_move(self, move_text: str) -> str:
        """Apply a previously listed move and describe what happened."""
        if self._listed is None:
            raise IllegalMoveError(
                f"No move list derived for the current position: {move_text!r}"
            )
        move = self._listed.get(move_text)
        if move is None:
            raise IllegalMoveError(f"Move not in current move list: {move_text!r}")

        description = self._describe(move)
        self.push(move)

        from fenboard.core.move_generator import MoveGenerator

        if MoveGenerator(self).is_in_check(self.side_to_move):
            description += ", check"
        _LOGGER.debug("Applied %s: %s", move_text, description)
        return description

    def _describe(self, move: Move) -> str:
        piece = self.board[move.from_sq]
        assert piece is not None
        parts = [f"{piece.name} {move}"]

        captured = self.board[move.to_sq]
        if move.flag == MoveFlag.EN_PASSANT:
            captured = self.board[self._en_passant_victim(move)]
        if captured is not None:
            parts.append(f"captures {captured.name}")
            if move.flag == MoveFlag.EN_PASSANT:
                parts.append("en passant")

        if move.flag == MoveFlag.CASTLE_KINGSIDE:
            parts.append("castles kingside")
        elif move.flag == MoveFlag.CASTLE_QUEENSIDE:
            parts.append("castles queenside")
        elif move.promotion is not None:
            if captured is not None:
                parts.append("and")
            parts.append(f"promotes to {move.promotion.name.lower()}")
        return " ".join(parts)

    # ── Core move operations ─────────────────────────────────────────────

    def push(self, move: Move) -> None:
        """Apply *move* without list validation, recording undo state."""
        piece = self.board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        captured = self.board[move.to_sq]
        capture_sq = move.to_sq

        # En passant: the captured pawn sits beside the origin square
        if move.flag == MoveFlag.EN_PASSANT:
            capture_sq = self._en_passant_victim(move)
            captured = self.board[capture_sq]

        self._history.append(
            _PositionState(
                move=move,
                castling=self.castling,
                en_passant=self.en_passant,
                halfmove_clock=self.halfmove_clock,
                captured_piece=captured,
                listed=self._listed,
            )
        )
        self._listed = None

        self.board[move.from_sq] = None
        if captured is not None:
            self.board[capture_sq] = None

        placed_piece = piece
        if move.flag == MoveFlag.PROMOTION and move.promotion is not None:
            placed_piece = Piece(piece.color, move.promotion)
        self.board[move.to_sq] = placed_piece

        # Slide the rook for castling
        if move.is_castle:
            rook_from, rook_to = self._castle_rook_squares(move)
            self.board[rook_to] = self.board[rook_from]
            self.board[rook_from] = None

        # En passant target for the opponent
        if move.flag == MoveFlag.DOUBLE_PAWN:
            self.en_passant = make_square(
                (rank_of(move.from_sq) + rank_of(move.to_sq)) // 2,
                file_of(move.from_sq),
            )
        else:
            self.en_passant = None

        self._update_castling(move, piece)

        if piece.piece_type == PieceType.PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1

        self.side_to_move = self.side_to_move.opposite

    def pop(self) -> Move:
        """Undo the last :meth:`push` and return its move."""
        state = self._history.pop()
        move = state.move
        self._listed = state.listed

        self.side_to_move = self.side_to_move.opposite
        if self.side_to_move == Color.BLACK:
            self.fullmove_number -= 1

        piece = self.board[move.to_sq]
        assert piece is not None

        # Restore pawn for promotion
        if move.flag == MoveFlag.PROMOTION:
            piece = Piece(piece.color, PieceType.PAWN)

        self.board[move.from_sq] = piece
        if move.flag == MoveFlag.EN_PASSANT:
            self.board[move.to_sq] = None
            self.board[self._en_passant_victim(move)] = state.captured_piece
        else:
            self.board[move.to_sq] = state.captured_piece

        if move.is_castle:
            rook_from, rook_to = self._castle_rook_squares(move)
            self.board[rook_from] = self.board[rook_to]
            self.board[rook_to] = None

        self.castling = state.castling
        self.en_passant = state.en_passant
        self.halfmove_clock = state.halfmove_clock
        return move

    @staticmethod
    def _en_passant_victim(move: Move) -> Square:
        return make_square(rank_of(move.from_sq), file_of(move.to_sq))

    @staticmethod
    def _castle_rook_squares(move: Move) -> tuple[Square, Square]:
        r = rank_of(move.from_sq)
        if move.flag == MoveFlag.CASTLE_KINGSIDE:
            return make_square(r, 7), make_square(r, 5)
        return make_square(r, 0), make_square(r, 3)

    # ── Castling bookkeeping ─────────────────────────────────────────────

    _ROOK_CORNERS: dict[Square, CastlingRights] = {
        A1: CastlingRights.WHITE_QUEENSIDE,
        H1: CastlingRights.WHITE_KINGSIDE,
        A8: CastlingRights.BLACK_QUEENSIDE,
        H8: CastlingRights.BLACK_KINGSIDE,
    }

    def _update_castling(self, move: Move, piece: Piece) -> None:
        if piece.piece_type == PieceType.KING:
            if piece.color == Color.WHITE:
                self.castling &= ~CastlingRights.WHITE_BOTH
            else:
                self.castling &= ~CastlingRights.BLACK_BOTH

        for sq in (move.from_sq, move.to_sq):
            if sq in self._ROOK_CORNERS:
                self.castling &= ~self._ROOK_CORNERS[sq]

    # ── Bulk state ───────────────────────────────────────────────────────

    def clear(self) -> None:
        """Empty every square; turn, castling, en passant and clocks stay."""
        self.board.clear()
        self._history.clear()
        self._listed = None

    def create_memento(self) -> Memento:
        """Snapshot the position as encoded text."""
        from fenboard.core.memento import Memento

        return Memento.of(self)

    def restore(self, memento: Memento) -> None:
        """Replace the whole state with the one encoded in *memento*.

        The text is decoded completely before anything is assigned, so a
        :class:`~fenboard.core.errors.FormatError` leaves this position as it
        was.
        """
        from fenboard.core.memento import position_from_fen

        decoded = position_from_fen(str(memento))
        self.board = decoded.board
        self.side_to_move = decoded.side_to_move
        self.castling = decoded.castling
        self.en_passant = decoded.en_passant
        self.halfmove_clock = decoded.halfmove_clock
        self.fullmove_number = decoded.fullmove_number
        self._history.clear()
        self._listed = None
        _LOGGER.debug("Restored position %s", memento)

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Deep copy without history."""
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
        )

    def __str__(self) -> str:
        rows: list[str] = []
        for rank in range(8):
            tiles = [self.piece_at(rank, file) for file in range(8)]
            rows.append("|" + " ".join("-" if t == EMPTY else t for t in tiles) + "|")
        return "\n".join(rows)

    def __repr__(self) -> str:
        from fenboard.core.memento import position_to_fen

        return f"Position({position_to_fen(self)!r})"
