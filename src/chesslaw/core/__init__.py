"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chesslaw.core import Board, is_legal
    from chesslaw.core.types import E2, E4

    board = Board.initial()
    move = is_legal(board, E2, E4)
"""

from chesslaw.core.board import Board, apply_move
from chesslaw.core.check import (
    has_legal_move,
    is_checkmate,
    is_in_check,
    is_legal,
    is_square_attacked,
    legal_moves_from,
)
from chesslaw.core.enums import (
    Color,
    GameStatus,
    MovedFlags,
    MoveKind,
    PieceType,
    RejectReason,
)
from chesslaw.core.errors import (
    IllegalMoveError,
    KingMissingError,
    MoveRejected,
    OutOfBoundsError,
)
from chesslaw.core.fen import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    parse_fen,
    placement_to_fen,
)
from chesslaw.core.move import Move
from chesslaw.core.notation import disambiguation, move_to_san, movetext_lines
from chesslaw.core.piece import Piece
from chesslaw.core.types import Square, make_square, parse_square, square_name
from chesslaw.core.validator import validate

__all__ = [
    # Enums / flags
    "Color",
    "GameStatus",
    "MoveKind",
    "MovedFlags",
    "PieceType",
    "RejectReason",
    # Types / helpers
    "Square",
    "make_square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "Piece",
    "apply_move",
    # Errors
    "IllegalMoveError",
    "KingMissingError",
    "MoveRejected",
    "OutOfBoundsError",
    # Rules
    "validate",
    "has_legal_move",
    "is_checkmate",
    "is_in_check",
    "is_legal",
    "is_square_attacked",
    "legal_moves_from",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
    "disambiguation",
    "move_to_san",
    "movetext_lines",
    "parse_fen",
    "placement_to_fen",
]
