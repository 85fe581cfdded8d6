"""Square type alias and coordinate helpers.

Board layout (rank index 0 is the eighth rank, file varies fastest):
    a8=0,  b8=1,  ..., h8=7
    a7=8,  b7=9,  ..., h7=15
    ...
    a1=56, b1=57, ..., h1=63
"""

from __future__ import annotations

from typing import TypeAlias

from fenboard.core.errors import FormatError, RangeError

Square: TypeAlias = int  # 0–63

FILES = "abcdefgh"
RANKS = "87654321"  # digit for rank index 0..7


def is_valid_square(sq: object) -> bool:
    """Check whether *sq* is an integer square index."""
    return isinstance(sq, int) and not isinstance(sq, bool) and 0 <= sq < 64


def _check_square(sq: object) -> None:
    if not is_valid_square(sq):
        raise RangeError(f"Square index outside board: {sq!r}")


def file_of(sq: Square) -> int:
    """File index 0–7 (a–h)."""
    return sq & 7


def rank_of(sq: Square) -> int:
    """Rank index 0–7, counted from the top (8th rank) down."""
    return sq >> 3


def _is_index(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < 8


def make_square(rank: int, file: int) -> Square:
    """Create square from rank index (0–7) and file index (0–7)."""
    if not _is_index(rank):
        raise RangeError(f"Rank is outside range: {rank!r}")
    if not _is_index(file):
        raise RangeError(f"File is outside range: {file!r}")
    return rank * 8 + file


def square_to_coordinate(sq: Square) -> tuple[str, str]:
    """Split *sq* into its file letter and rank digit, e.g. 36 → ('e', '4')."""
    _check_square(sq)
    return FILES[file_of(sq)], RANKS[rank_of(sq)]


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. 0 → 'a8', 63 → 'h1'."""
    return "".join(square_to_coordinate(sq))


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → 36."""
    if (
        not isinstance(name, str)
        or len(name) != 2
        or name[0] not in FILES
        or name[1] not in RANKS
    ):
        raise FormatError(f"Invalid square name: {name!r}")
    return RANKS.index(name[1]) * 8 + FILES.index(name[0])


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = range(0, 8)
A7, B7, C7, D7, E7, F7, G7, H7 = range(8, 16)
A6, B6, C6, D6, E6, F6, G6, H6 = range(16, 24)
A5, B5, C5, D5, E5, F5, G5, H5 = range(24, 32)
A4, B4, C4, D4, E4, F4, G4, H4 = range(32, 40)
A3, B3, C3, D3, E3, F3, G3, H3 = range(40, 48)
A2, B2, C2, D2, E2, F2, G2, H2 = range(48, 56)
A1, B1, C1, D1, E1, F1, G1, H1 = range(56, 64)
