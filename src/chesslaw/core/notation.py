"""SAN (Standard Algebraic Notation) rendering and movetext formatting."""

from __future__ import annotations

from collections.abc import Iterable

from chesslaw.core.board import Board
from chesslaw.core.check import is_legal
from chesslaw.core.enums import MoveKind, PieceType
from chesslaw.core.move import Move
from chesslaw.core.types import FILES

# Pieces whose SAN may need an origin hint; pawns use their file on
# captures and kings are unique.
_DISAMBIGUATED: frozenset[PieceType] = frozenset(
    {PieceType.KNIGHT, PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN}
)


def is_capture(board: Board, move: Move) -> bool:
    """Whether *move* takes a piece on the board it is played from."""
    return move.kind == MoveKind.EN_PASSANT or board[move.to_sq] is not None


def disambiguation(board: Board, move: Move, *, strict_castling: bool = False) -> str:
    """Origin hint needed to tell *move* apart from same-kind rivals.

    Every other piece of the mover's kind and color that could legally go
    to the same square is a rival. A rival on the mover's file forces the
    rank, one on the mover's rank forces the file, and one on neither
    forces both. A single rival forcing both is settled by the file alone.
    """
    piece = board[move.from_sq]
    if piece is None or piece.piece_type not in _DISAMBIGUATED:
        return ""

    rivals = 0
    needs_file = needs_rank = False
    for sq in board.pieces(piece.color, piece.piece_type):
        if sq == move.from_sq:
            continue
        if is_legal(board, sq, move.to_sq, strict_castling=strict_castling) is None:
            continue
        rivals += 1
        if sq.file == move.from_sq.file:
            needs_rank = True
        if sq.rank == move.from_sq.rank:
            needs_file = True
        if sq.file != move.from_sq.file and sq.rank != move.from_sq.rank:
            needs_file = needs_rank = True

    if rivals == 0:
        return ""
    if rivals == 1 and needs_file and needs_rank:
        needs_rank = False

    if needs_file and needs_rank:
        return move.from_sq.name
    if needs_file:
        return FILES[move.from_sq.file]
    if needs_rank:
        return str(move.from_sq.rank + 1)
    return ""


def move_to_san(board: Board, move: Move, *, strict_castling: bool = False) -> str:
    """SAN for a legal *move* given the *board* before it, without suffix.

    The ``+``/``#`` suffix depends on the opponent's replies and is added
    by :func:`with_check_suffix` once the move is committed.
    """
    if move.kind == MoveKind.CASTLE_KINGSIDE:
        return "O-O"
    if move.kind == MoveKind.CASTLE_QUEENSIDE:
        return "O-O-O"

    piece = board[move.from_sq]
    assert piece is not None
    capture = is_capture(board, move)

    if piece.piece_type == PieceType.PAWN:
        san = FILES[move.from_sq.file] if capture else ""
    else:
        san = piece.letter + disambiguation(
            board, move, strict_castling=strict_castling
        )

    if capture:
        san += "x"
    san += move.to_sq.name

    if move.kind == MoveKind.PROMOTION:
        san += "=Q"
    return san


def with_check_suffix(san: str, *, is_check: bool, is_checkmate: bool) -> str:
    if is_checkmate:
        return san + "#"
    if is_check:
        return san + "+"
    return san


def movetext_lines(
    sans: Iterable[str],
    limit: int | None = None,
    *,
    start_number: int = 1,
    black_first: bool = False,
) -> list[str]:
    """Pair SAN moves into numbered lines: ``["1. e4 e5", "2. Nf3"]``.

    A game that opens with a black move starts with an ellipsis line,
    e.g. ``["5... Kd7", "6. Ke2"]``. With *limit* only the most recent
    *limit* lines are kept.
    """
    lines: list[str] = []
    number = start_number
    for ply, san in enumerate(sans):
        white = (ply % 2 == 0) != black_first
        if white:
            lines.append(f"{number}. {san}")
            continue
        if ply == 0:
            lines.append(f"{number}... {san}")
        else:
            lines[-1] += f" {san}"
        number += 1
    if limit is not None:
        return lines[-limit:] if limit > 0 else []
    return lines
