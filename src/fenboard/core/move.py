"""Move value object (coordinate-pair representation)."""

from __future__ import annotations

from dataclasses import dataclass

from fenboard.core.enums import MoveFlag, PieceType
from fenboard.core.types import Square, square_name

PROMO_CHARS: dict[PieceType, str] = {
    PieceType.QUEEN: "q",
    PieceType.ROOK: "r",
    PieceType.BISHOP: "b",
    PieceType.KNIGHT: "n",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move."""

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    def __str__(self) -> str:
        """Origin and destination coordinates, plus a promotion letter."""
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += PROMO_CHARS[self.promotion]
        return base

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)
