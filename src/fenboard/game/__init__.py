"""Game management layer — session history on top of the core position.

Quick start::

    from fenboard.game import GameSession

    session = GameSession()
    session.play("e2e4")
    session.undo()
"""

from fenboard.game.session import GameSession, MoveRecord

__all__ = [
    "GameSession",
    "MoveRecord",
]
