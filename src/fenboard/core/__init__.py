"""Core domain layer — pure chess rules and state, no I/O.

Quick start::

    from fenboard.core import Position

    pos = Position()
    moves = pos.list_possible_moves().split("/")
    print(pos.make_move("e2e4"))
    snapshot = pos.create_memento()
"""

from fenboard.core.board import Board
from fenboard.core.enums import CastlingRights, Color, GameResult, MoveFlag, PieceType
from fenboard.core.errors import ChessError, FormatError, IllegalMoveError, RangeError
from fenboard.core.memento import (
    STARTING_FEN,
    Memento,
    position_from_fen,
    position_to_fen,
)
from fenboard.core.move import Move
from fenboard.core.move_generator import MoveGenerator
from fenboard.core.piece import EMPTY, Piece
from fenboard.core.position import MOVE_SEPARATOR, Position
from fenboard.core.rules import Rules
from fenboard.core.types import (
    Square,
    file_of,
    is_valid_square,
    make_square,
    parse_square,
    rank_of,
    square_name,
    square_to_coordinate,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Errors
    "ChessError",
    "FormatError",
    "IllegalMoveError",
    "RangeError",
    # Types / helpers
    "Square",
    "file_of",
    "is_valid_square",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    "square_to_coordinate",
    # Domain objects
    "EMPTY",
    "MOVE_SEPARATOR",
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    # Snapshots
    "STARTING_FEN",
    "Memento",
    "position_from_fen",
    "position_to_fen",
]
