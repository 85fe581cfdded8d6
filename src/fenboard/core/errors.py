"""Error kinds raised by the core domain layer."""

from __future__ import annotations


class ChessError(Exception):
    """Base class for every error raised by :mod:`fenboard`."""


class RangeError(ChessError, IndexError):
    """A square, rank or file index lies outside the 8x8 board."""


class FormatError(ChessError, ValueError):
    """A coordinate or encoded position could not be parsed."""


class IllegalMoveError(ChessError, ValueError):
    """A move is not among the moves listed for the current position."""
