"""Game session — memento caretaker with undo/redo and repetition tracking."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass

from fenboard.core.enums import Color, GameResult
from fenboard.core.errors import IllegalMoveError
from fenboard.core.memento import STARTING_FEN, Memento
from fenboard.core.position import MOVE_SEPARATOR, Position
from fenboard.core.rules import Rules

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move_text: str
    result: str
    before: Memento
    after: Memento


def _repetition_key(memento: Memento) -> str:
    """Placement, side, castling and en passant; clocks are ignored."""
    return " ".join(memento.fen.split()[:4])


class GameSession:
    """Owns one :class:`Position` and the snapshots taken while playing it.

    This is a pure data/logic class — no threading, no I/O.
    """

    __slots__ = ("start_fen", "position", "history", "_redo", "_seen")

    def __init__(self, fen: str | None = None) -> None:
        self.start_fen = fen if fen is not None else STARTING_FEN
        self.position = Position.from_fen(self.start_fen)
        self.history: list[MoveRecord] = []
        self._redo: list[MoveRecord] = []
        self._seen: Counter[str] = Counter()
        self._seen[_repetition_key(self.position.create_memento())] += 1

    # ── Move application ─────────────────────────────────────────────────

    def possible_moves(self) -> list[str]:
        """Move texts available to the side to move."""
        listing = self.position.list_possible_moves()
        return listing.split(MOVE_SEPARATOR) if listing else []

    def play(self, move_text: str) -> MoveRecord:
        """Apply *move_text* if it is listed for the current position."""
        if self.is_game_over:
            raise IllegalMoveError(f"Game is over, cannot play {move_text!r}")

        before = self.position.create_memento()
        self.position.list_possible_moves()
        result = self.position.make_move(move_text)
        after = self.position.create_memento()

        record = MoveRecord(move_text, result, before, after)
        self.history.append(record)
        self._redo.clear()
        self._seen[_repetition_key(after)] += 1
        return record

    def undo(self) -> MoveRecord | None:
        """Step back one move. Returns the undone record, or None if empty."""
        if not self.history:
            return None
        record = self.history.pop()
        self._forget(record.after)
        self.position.restore(record.before)
        self._redo.append(record)
        _LOGGER.debug("Undid %s", record.move_text)
        return record

    def redo(self) -> MoveRecord | None:
        """Replay the last undone move. Returns it, or None if nothing to redo."""
        if not self._redo:
            return None
        record = self._redo.pop()
        self.position.restore(record.after)
        self.history.append(record)
        self._seen[_repetition_key(record.after)] += 1
        _LOGGER.debug("Redid %s", record.move_text)
        return record

    def _forget(self, memento: Memento) -> None:
        key = _repetition_key(memento)
        self._seen[key] -= 1
        if self._seen[key] <= 0:
            del self._seen[key]

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.history)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def repetition_count(self) -> int:
        """How many times the current position occurred in this session."""
        return self._seen[_repetition_key(self.position.create_memento())]

    @property
    def result(self) -> GameResult:
        if self.repetition_count() >= 3:
            return GameResult.DRAW
        return Rules.game_result(self.position)

    @property
    def is_game_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS
