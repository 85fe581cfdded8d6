"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from fenboard.core.enums import Color, PieceType
from fenboard.core.errors import FormatError

# Piece code ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_CODES: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}

EMPTY = " "


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """Piece code (uppercase = white, lowercase = black)."""
        return _CODES[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from its code, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise FormatError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    @property
    def name(self) -> str:
        """Readable name, e.g. 'black knight'."""
        return f"{self.color.name.lower()} {self.piece_type.name.lower()}"
