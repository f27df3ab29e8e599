"""Game management layer — sessions, move history, the engine state machine.

Quick start::

    from chesslaw.core.types import E2, E4
    from chesslaw.game import new_game, submit_move

    session = new_game()
    record = submit_move(session, E2, E4)
    print(record.san)  # e4
"""

from chesslaw.game.config import EngineConfig
from chesslaw.game.engine import (
    BoardSnapshot,
    Engine,
    GameEvents,
    board_snapshot,
    is_game_over,
    legal_destinations,
    new_game,
    side_to_move,
    submit_move,
)
from chesslaw.game.state import GameSession, MoveRecord

__all__ = [
    # Concrete
    "BoardSnapshot",
    "Engine",
    "EngineConfig",
    "GameEvents",
    "GameSession",
    "MoveRecord",
    # Functional API
    "board_snapshot",
    "is_game_over",
    "legal_destinations",
    "new_game",
    "side_to_move",
    "submit_move",
]
