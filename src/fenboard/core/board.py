"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from fenboard.core.enums import Color, PieceType
from fenboard.core.piece import Piece
from fenboard.core.types import Square, make_square

_COLOR_COUNT = 2

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 64-square grid with a cached king square per color."""

    __slots__ = ("_squares", "_king_squares")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None] * _COLOR_COUNT

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        old_piece = self._squares[sq]
        if old_piece == piece:
            return

        if (
            old_piece is not None
            and old_piece.piece_type == PieceType.KING
            and self._king_squares[int(old_piece.color)] == sq
        ):
            self._king_squares[int(old_piece.color)] = None

        self._squares[sq] = piece

        if piece is not None and piece.piece_type == PieceType.KING:
            self._king_squares[int(piece.color)] = sq

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*, in index order."""
        target = Piece(color, piece_type)
        return [sq for sq, piece in enumerate(self._squares) if piece == target]

    def has_piece(self, color: Color, piece_type: PieceType) -> bool:
        """Whether *color* has at least one piece of *piece_type*."""
        target = Piece(color, piece_type)
        return target in self._squares

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [
            sq
            for sq, piece in enumerate(self._squares)
            if piece is not None and piece.color == color
        ]

    def has_king(self, color: Color) -> bool:
        return self._king_squares[int(color)] is not None

    def king_square(self, color: Color) -> Square:
        """Return the cached king square for *color*."""
        sq = self._king_squares[int(color)]
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._king_squares = self._king_squares.copy()
        return b

    def clear(self) -> None:
        self._squares = [None] * 64
        self._king_squares = [None] * _COLOR_COUNT

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f, pt in enumerate(_BACK_RANK):
            b[make_square(0, f)] = Piece(Color.BLACK, pt)
            b[make_square(1, f)] = Piece(Color.BLACK, PieceType.PAWN)
            b[make_square(6, f)] = Piece(Color.WHITE, PieceType.PAWN)
            b[make_square(7, f)] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(8):
            row = []
            for file in range(8):
                p = self[make_square(rank, file)]
                row.append(str(p) if p else ".")
            rows.append(f"{8 - rank} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
