"""Check detection, full legality and checkmate search.

Everything here is a pure function of a :class:`Board`: probes run on
copies produced by :func:`apply_move`, so the caller's board is never
altered, not even transiently.
"""

from __future__ import annotations

import logging

from chesslaw.core.board import Board, apply_move
from chesslaw.core.enums import Color, PieceType
from chesslaw.core.move import Move
from chesslaw.core.piece import Piece
from chesslaw.core.types import Square, all_squares
from chesslaw.core.validator import validate

_LOGGER = logging.getLogger(__name__)


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    A piece attacks a square when its validator, with king safety
    disabled, lets it move there. The target is treated as enemy-occupied:
    pawns then only count their diagonal captures, and castling (which
    needs an empty landing square) never counts.
    """
    probe = board
    occupant = board[sq]
    if occupant is None or occupant.color == by_color:
        probe = board.copy()
        probe[sq] = Piece(by_color.opposite, PieceType.PAWN)

    for from_sq, piece in probe.occupied():
        if piece.color != by_color:
            continue
        if validate(probe, from_sq, sq, check_king_safety=False) is not None:
            return True
    return False


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?

    A board without such a king is an invariant violation. It is logged
    and reported as check so that no move is ever considered safe on it.
    """
    king_sq = board.king_square(color)
    if king_sq is None:
        _LOGGER.error("No %s king on board; treating as in check", color.name)
        return True
    return is_square_attacked(board, king_sq, color.opposite)


def is_legal(
    board: Board,
    from_sq: Square,
    to_sq: Square,
    *,
    strict_castling: bool = False,
) -> Move | None:
    """Geometry plus "does not leave the mover's own king in check"."""
    move = validate(board, from_sq, to_sq, strict_castling=strict_castling)
    if move is None:
        return None
    piece = board[from_sq]
    assert piece is not None
    if leaves_king_in_check(board, move, piece.color):
        return None
    return move


def leaves_king_in_check(board: Board, move: Move, color: Color) -> bool:
    """Would playing *move* leave *color*'s king attacked?"""
    return is_in_check(apply_move(board, move), color)


def legal_moves_from(
    board: Board, from_sq: Square, *, strict_castling: bool = False
) -> list[Move]:
    """Every legal move for the piece on *from_sq*."""
    if not from_sq.is_on_board() or board[from_sq] is None:
        return []
    moves: list[Move] = []
    for to_sq in all_squares():
        move = is_legal(board, from_sq, to_sq, strict_castling=strict_castling)
        if move is not None:
            moves.append(move)
    return moves


def has_legal_move(board: Board, color: Color, *, strict_castling: bool = False) -> bool:
    """Does *color* have at least one legal move? Stops at the first found."""
    for from_sq in board.all_pieces(color):
        for to_sq in all_squares():
            if is_legal(board, from_sq, to_sq, strict_castling=strict_castling):
                return True
    return False


def is_checkmate(board: Board, color: Color, *, strict_castling: bool = False) -> bool:
    """*color* is in check and no legal move gets it out."""
    if not is_in_check(board, color):
        return False
    return not has_legal_move(board, color, strict_castling=strict_castling)
