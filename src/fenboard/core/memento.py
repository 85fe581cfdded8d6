"""Position snapshots: FEN-like encoding and decoding.

A :class:`Memento` wraps one line of six space-separated fields::

    <placement> <side> <castling> <en passant> <halfmove clock> <fullmove number>

The encoded line is split into its fields up front and every field is decoded
on its own, so a bad field is reported as a :class:`FormatError` without any
partially-built state escaping.
"""

from __future__ import annotations

from dataclasses import dataclass

from fenboard.core.board import Board
from fenboard.core.enums import CastlingRights, Color, PieceType
from fenboard.core.errors import FormatError
from fenboard.core.piece import Piece
from fenboard.core.position import Position
from fenboard.core.types import Square, make_square, parse_square, rank_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)
_SIDE_CHARS: dict[str, Color] = {"w": Color.WHITE, "b": Color.BLACK}

# En-passant rank index expected for each side to move.
_EP_RANK: dict[Color, int] = {Color.WHITE: 2, Color.BLACK: 5}


@dataclass(frozen=True, slots=True)
class Memento:
    """Immutable snapshot of a :class:`Position`."""

    fen: str

    @classmethod
    def of(cls, position: Position) -> Memento:
        return cls(position_to_fen(position))

    def to_position(self) -> Position:
        """Decode into a fresh :class:`Position`."""
        return position_from_fen(self.fen)

    def __str__(self) -> str:
        return self.fen


# ── Decoding ─────────────────────────────────────────────────────────────────


def position_from_fen(fen: str) -> Position:
    """Parse encoded text into a new :class:`Position`."""
    if not isinstance(fen, str):
        raise FormatError(f"Encoded position must be text: {fen!r}")
    fields = fen.split()
    if len(fields) != 6:
        raise FormatError(f"Invalid FEN (need 6 fields, got {len(fields)}): {fen!r}")

    placement, side_part, castling_part, ep_part, halfmove_part, fullmove_part = (
        fields
    )
    board = _decode_placement(placement)
    side = _decode_side(side_part)
    castling = _decode_castling(castling_part)
    en_passant = _decode_en_passant(ep_part, side)
    halfmove = _decode_counter(halfmove_part, "halfmove clock")
    fullmove = _decode_counter(fullmove_part, "fullmove number")

    return Position(board, side, castling, en_passant, halfmove, fullmove)


def _decode_placement(placement: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise FormatError(f"Invalid FEN board (must contain 8 ranks): {placement!r}")

    board = Board()
    for rank, rank_text in enumerate(ranks):
        file = 0
        for ch in rank_text:
            if ch in "0123456789":
                step = int(ch)
                if not 1 <= step <= 8:
                    raise FormatError(f"Invalid FEN digit {ch!r}: {placement!r}")
                file += step
            else:
                if file >= 8:
                    raise FormatError(f"Invalid FEN rank width: {rank_text!r}")
                board[make_square(rank, file)] = Piece.from_char(ch)
                file += 1
            if file > 8:
                raise FormatError(f"Invalid FEN rank width: {rank_text!r}")
        if file != 8:
            raise FormatError(f"Invalid FEN rank width: {rank_text!r}")

    for color in Color:
        kings = board.pieces(color, PieceType.KING)
        if len(kings) > 1:
            raise FormatError(
                f"FEN board holds more than one {color.name.lower()} king: {len(kings)}"
            )
    return board


def _decode_side(side_part: str) -> Color:
    try:
        return _SIDE_CHARS[side_part]
    except KeyError:
        raise FormatError(f"Invalid FEN side-to-move field: {side_part!r}") from None


def _decode_castling(castling_part: str) -> CastlingRights:
    castling = CastlingRights.NONE
    if castling_part == "-":
        return castling

    rights = dict(_CASTLING_CHARS)
    seen: set[str] = set()
    for ch in castling_part:
        right = rights.get(ch)
        if right is None or ch in seen:
            raise FormatError(f"Invalid FEN castling field: {castling_part!r}")
        seen.add(ch)
        castling |= right
    return castling


def _decode_en_passant(ep_part: str, side: Color) -> Square | None:
    if ep_part == "-":
        return None
    ep = parse_square(ep_part)
    if rank_of(ep) != _EP_RANK[side]:
        raise FormatError(f"Invalid FEN en-passant square for side-to-move: {ep_part!r}")
    return ep


def _decode_counter(text: str, label: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise FormatError(f"Invalid FEN {label}: {text!r}")
    return int(text)


# ── Encoding ─────────────────────────────────────────────────────────────────


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to its six-field text."""
    # 1. Board
    rows: list[str] = []
    for rank in range(8):
        empty = 0
        row = ""
        for file in range(8):
            piece = pos.board[make_square(rank, file)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if pos.castling & right)
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return f"{board_str} {side_str} {castling_str} {ep_str} {pos.halfmove_clock} {pos.fullmove_number}"
