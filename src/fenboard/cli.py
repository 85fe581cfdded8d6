"""Interactive two-player game loop on the terminal."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable

from fenboard.core.enums import GameResult
from fenboard.core.errors import FormatError, IllegalMoveError
from fenboard.core.move import PROMO_CHARS
from fenboard.core.types import parse_square
from fenboard.game.session import GameSession

_LOGGER = logging.getLogger(__name__)

Reader = Callable[[str], str]
Writer = Callable[[str], None]

_COMMANDS = ("undo", "redo", "fen", "moves", "quit")
_PROMOTION_PROMPT = f"Promote to ({'/'.join(PROMO_CHARS.values())}): "
_RESULT_TEXT: dict[GameResult, str] = {
    GameResult.WHITE_WINS: "White wins",
    GameResult.BLACK_WINS: "Black wins",
    GameResult.DRAW: "Draw",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fenboard",
        description="Play chess on the terminal, entering moves as squares.",
    )
    parser.add_argument(
        "--fen",
        default=None,
        help="start from this encoded position instead of the initial one",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="logging verbosity (default: %(default)s)",
    )
    return parser


def _read_square(prompt: str, read: Reader, write: Writer) -> str | None:
    text = read(prompt).strip().lower()
    try:
        parse_square(text)
    except FormatError as exc:
        _LOGGER.debug("Rejected square input: %s", exc)
        write(f"Not a square: {text!r}")
        return None
    return text


def ask_move(moves: list[str], read: Reader, write: Writer) -> str:
    """Prompt until a listed move or a command word is entered."""
    while True:
        origin = read("Pick a location: ").strip().lower()
        if origin in _COMMANDS:
            return origin
        try:
            parse_square(origin)
        except FormatError as exc:
            _LOGGER.debug("Rejected square input: %s", exc)
            write(f"Not a square: {origin!r}")
            continue

        destination = _read_square("Pick a destination: ", read, write)
        if destination is None:
            continue

        pair = origin + destination
        candidates = [move for move in moves if move.startswith(pair)]
        if not candidates:
            write(f"{pair} is not a possible move")
            continue
        if len(candidates) == 1:
            return candidates[0]

        choice = pair + read(_PROMOTION_PROMPT).strip().lower()
        if choice in candidates:
            return choice
        write(f"{choice} is not a possible move")


def _run_command(command: str, session: GameSession, write: Writer) -> None:
    if command == "undo":
        record = session.undo()
        write(f"Took back {record.move_text}" if record else "Nothing to undo")
    elif command == "redo":
        record = session.redo()
        write(f"Replayed {record.move_text}" if record else "Nothing to redo")
    elif command == "fen":
        write(str(session.position.create_memento()))
    elif command == "moves":
        write(" ".join(session.possible_moves()))


def run_game(
    session: GameSession,
    read: Reader = input,
    write: Writer = print,
) -> GameResult | None:
    """Drive turns until the game ends (returns the result) or the user quits."""
    while True:
        write(str(session.position))
        result = session.result
        if result != GameResult.IN_PROGRESS:
            write(_RESULT_TEXT[result])
            return result

        write(f"{session.side_to_move.name.capitalize()} to move")
        choice = ask_move(session.possible_moves(), read, write)
        if choice == "quit":
            return None
        if choice in _COMMANDS:
            _run_command(choice, session, write)
            continue

        try:
            record = session.play(choice)
        except IllegalMoveError as exc:
            _LOGGER.warning("Listed move was refused: %s", exc)
            write(str(exc))
            continue
        write(record.result)


def main(argv: list[str] | None = None) -> int:
    """Console entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        session = GameSession(args.fen)
    except FormatError as exc:
        parser.error(str(exc))

    try:
        run_game(session)
    except (EOFError, KeyboardInterrupt):
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
