"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fenboard.core.enums import CastlingRights, Color, MoveFlag, PieceType
from fenboard.core.errors import RangeError
from fenboard.core.move import Move
from fenboard.core.piece import Piece
from fenboard.core.types import Square, file_of, is_valid_square, make_square, rank_of

if TYPE_CHECKING:
    from fenboard.core.position import Position


# (rank delta, file delta); rank index 0 is the eighth rank.
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

# White pawns advance towards rank index 0, black pawns towards 7.
_PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
_PAWN_START_RANK: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
_PAWN_LAST_RANK: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}
_HOME_RANK: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}

_KINGSIDE_RIGHT: dict[Color, CastlingRights] = {
    Color.WHITE: CastlingRights.WHITE_KINGSIDE,
    Color.BLACK: CastlingRights.BLACK_KINGSIDE,
}
_QUEENSIDE_RIGHT: dict[Color, CastlingRights] = {
    Color.WHITE: CastlingRights.WHITE_QUEENSIDE,
    Color.BLACK: CastlingRights.BLACK_QUEENSIDE,
}


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        rank_idx = rank_of(sq)
        file_idx = file_of(sq)
        moves: list[Square] = []
        for dr, df in offsets:
            ar = rank_idx + dr
            af = file_idx + df
            if 0 <= ar < 8 and 0 <= af < 8:
                moves.append(make_square(ar, af))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        square_rays: list[tuple[Square, ...]] = []
        for dr, df in directions:
            ar = rank_of(sq) + dr
            af = file_of(sq) + df
            ray: list[Square] = []
            while 0 <= ar < 8 and 0 <= af < 8:
                ray.append(make_square(ar, af))
                ar += dr
                af += df
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


def _build_pawn_attackers(color: Color) -> tuple[tuple[Square, ...], ...]:
    """Squares from which a *color* pawn attacks each square."""
    back = -_PAWN_DIRECTION[color]
    return _build_targets(((back, -1), (back, 1)))


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_PAWN_ATTACKERS: dict[Color, tuple[tuple[Square, ...], ...]] = {
    color: _build_pawn_attackers(color) for color in Color
}

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)


class MoveGenerator:
    """Generates moves for a given :class:`Position`.

    Legal-move filtering plays each candidate with ``push`` / ``pop``
    but always restores the position before returning.
    """

    __slots__ = ("_pos",)

    def __init__(self, position: Position) -> None:
        self._pos = position

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """All moves for the side to move that keep its own king safe."""
        legal: list[Move] = []
        moving_color = self._pos.side_to_move

        for move in self.generate_pseudo_legal_moves():
            self._pos.push(move)
            try:
                if not self.is_in_check(moving_color):
                    legal.append(move)
            finally:
                self._pos.pop()
        return legal

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check), by square."""
        moves: list[Move] = []
        color = self._pos.side_to_move
        board = self._pos.board
        for sq in range(64):
            piece = board[sq]
            if piece is not None and piece.color == color:
                moves.extend(self.moves_from(sq))
        return moves

    def moves_from(self, sq: Square) -> list[Move]:
        """Pseudo-legal moves of whichever piece stands on *sq*."""
        if not is_valid_square(sq):
            raise RangeError(f"Square index outside board: {sq!r}")
        piece = self._pos.board[sq]
        if piece is None:
            return []

        moves: list[Move] = []
        color = piece.color
        match piece.piece_type:
            case PieceType.PAWN:
                self._gen_pawn(sq, color, moves)
            case PieceType.KNIGHT:
                self._gen_steps(sq, color, _KNIGHT_TARGETS[sq], moves)
            case PieceType.BISHOP:
                self._gen_sliding(sq, color, _BISHOP_RAYS[sq], moves)
            case PieceType.ROOK:
                self._gen_sliding(sq, color, _ROOK_RAYS[sq], moves)
            case PieceType.QUEEN:
                self._gen_sliding(sq, color, _QUEEN_RAYS[sq], moves)
            case PieceType.KING:
                self._gen_steps(sq, color, _KING_TARGETS[sq], moves)
                self._gen_castling(sq, color, moves)
        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked? A side without a king never is."""
        board = self._pos.board
        if not board.has_king(color):
            return False
        return self.is_square_attacked(board.king_square(color), color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        board = self._pos.board

        pawn = Piece(by_color, PieceType.PAWN)
        if any(board[from_sq] == pawn for from_sq in _PAWN_ATTACKERS[by_color][sq]):
            return True

        knight = Piece(by_color, PieceType.KNIGHT)
        if any(board[from_sq] == knight for from_sq in _KNIGHT_TARGETS[sq]):
            return True

        king = Piece(by_color, PieceType.KING)
        if any(board[from_sq] == king for from_sq in _KING_TARGETS[sq]):
            return True

        diagonal = (PieceType.BISHOP, PieceType.QUEEN)
        if self._ray_hits(sq, by_color, _BISHOP_RAYS[sq], diagonal):
            return True

        straight = (PieceType.ROOK, PieceType.QUEEN)
        return self._ray_hits(sq, by_color, _ROOK_RAYS[sq], straight)

    def _ray_hits(
        self,
        sq: Square,
        by_color: Color,
        rays: tuple[tuple[Square, ...], ...],
        attackers: tuple[PieceType, ...],
    ) -> bool:
        board = self._pos.board
        for ray in rays:
            for to_sq in ray:
                piece = board[to_sq]
                if piece is None:
                    continue
                if piece.color == by_color and piece.piece_type in attackers:
                    return True
                break
        return False

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._pos.board
        rank_idx = rank_of(sq)
        file_idx = file_of(sq)
        step = _PAWN_DIRECTION[color]
        next_rank = rank_idx + step
        if not 0 <= next_rank < 8:
            return
        promotes = next_rank == _PAWN_LAST_RANK[color]

        one_step = make_square(next_rank, file_idx)
        if board.is_empty(one_step):
            if promotes:
                self._add_promotions(sq, one_step, moves)
            else:
                moves.append(Move(sq, one_step))
                if rank_idx == _PAWN_START_RANK[color]:
                    two_step = make_square(next_rank + step, file_idx)
                    if board.is_empty(two_step):
                        moves.append(Move(sq, two_step, MoveFlag.DOUBLE_PAWN))

        for df in (-1, 1):
            cap_file = file_idx + df
            if not 0 <= cap_file < 8:
                continue
            cap_sq = make_square(next_rank, cap_file)
            target = board[cap_sq]
            if target is not None and target.color != color:
                if promotes:
                    self._add_promotions(sq, cap_sq, moves)
                else:
                    moves.append(Move(sq, cap_sq))
            elif target is None and cap_sq == self._pos.en_passant:
                moves.append(Move(sq, cap_sq, MoveFlag.EN_PASSANT))

    @staticmethod
    def _add_promotions(from_sq: Square, to_sq: Square, moves: list[Move]) -> None:
        for pt in _PROMOTION_TYPES:
            moves.append(Move(from_sq, to_sq, MoveFlag.PROMOTION, pt))

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._pos.board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._pos.board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        pos = self._pos
        home = _HOME_RANK[color]
        if king_sq != make_square(home, 4):
            return
        if not pos.castling & (_KINGSIDE_RIGHT[color] | _QUEENSIDE_RIGHT[color]):
            return
        if self.is_in_check(color):
            return

        board = pos.board
        opponent = color.opposite
        rook = Piece(color, PieceType.ROOK)

        if pos.castling & _KINGSIDE_RIGHT[color]:
            f_sq = make_square(home, 5)
            g_sq = make_square(home, 6)
            if (
                board[make_square(home, 7)] == rook
                and board.is_empty(f_sq)
                and board.is_empty(g_sq)
                and not self.is_square_attacked(f_sq, opponent)
                and not self.is_square_attacked(g_sq, opponent)
            ):
                moves.append(Move(king_sq, g_sq, MoveFlag.CASTLE_KINGSIDE))

        if pos.castling & _QUEENSIDE_RIGHT[color]:
            b_sq = make_square(home, 1)
            c_sq = make_square(home, 2)
            d_sq = make_square(home, 3)
            if (
                board[make_square(home, 0)] == rook
                and board.is_empty(b_sq)
                and board.is_empty(c_sq)
                and board.is_empty(d_sq)
                and not self.is_square_attacked(c_sq, opponent)
                and not self.is_square_attacked(d_sq, opponent)
            ):
                moves.append(Move(king_sq, c_sq, MoveFlag.CASTLE_QUEENSIDE))
