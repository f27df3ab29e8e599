"""Per-piece move geometry.

Each validator answers one question: can the piece on ``from_sq`` of
*color* go to ``to_sq`` on this board? On success it returns the
classified :class:`Move`, otherwise ``None``. Validators never mutate the
board; the only one that looks beyond geometry is the king's, which
(unless told otherwise) refuses steps into an attacked square.
"""

from __future__ import annotations

from collections.abc import Callable

from chesslaw.core.board import Board
from chesslaw.core.enums import Color, MovedFlags, MoveKind, PieceType, RejectReason
from chesslaw.core.move import Move
from chesslaw.core.types import Square

KNIGHT_DELTAS: frozenset[tuple[int, int]] = frozenset({(1, 2), (2, 1)})

# Castling: king file, and per side (rook file, file the king lands on).
_KING_FILE = 4
_CASTLE_FILES: dict[MoveKind, tuple[int, int]] = {
    MoveKind.CASTLE_KINGSIDE: (7, 6),
    MoveKind.CASTLE_QUEENSIDE: (0, 2),
}


def _lands_on_friend(board: Board, from_sq: Square, to_sq: Square) -> bool:
    return board.is_occupied_by_same_color(from_sq, to_sq)


def _deltas(from_sq: Square, to_sq: Square) -> tuple[int, int]:
    return abs(to_sq.file - from_sq.file), abs(to_sq.rank - from_sq.rank)


# -- Pawn ---------------------------------------------------------------------


def pawn_move(board: Board, from_sq: Square, to_sq: Square, color: Color) -> Move | None:
    direction = color.forward
    start_rank = 1 if color == Color.WHITE else 6
    last_rank = 7 if color == Color.WHITE else 0
    df = to_sq.file - from_sq.file
    dr = to_sq.rank - from_sq.rank
    kind: MoveKind | None = None

    if df == 0 and dr == direction and board.is_empty(to_sq):
        kind = MoveKind.NORMAL
    elif (
        df == 0
        and dr == 2 * direction
        and from_sq.rank == start_rank
        and board.is_empty(from_sq.offset(0, direction))
        and board.is_empty(to_sq)
    ):
        kind = MoveKind.DOUBLE_PAWN
    elif abs(df) == 1 and dr == direction:
        target = board[to_sq]
        if target is not None:
            if target.color != color:
                kind = MoveKind.NORMAL
        elif to_sq == board.en_passant:
            passed = board[Square(to_sq.file, from_sq.rank)]
            if (
                passed is not None
                and passed.piece_type == PieceType.PAWN
                and passed.color != color
            ):
                kind = MoveKind.EN_PASSANT

    if kind is None:
        return None
    if to_sq.rank == last_rank:
        kind = MoveKind.PROMOTION
    return Move(from_sq, to_sq, kind)


# -- Sliders and leapers -------------------------------------------------------


def rook_move(board: Board, from_sq: Square, to_sq: Square, color: Color) -> Move | None:
    if from_sq.file != to_sq.file and from_sq.rank != to_sq.rank:
        return None
    if not board.is_path_clear(from_sq, to_sq):
        return None
    if _lands_on_friend(board, from_sq, to_sq):
        return None
    return Move(from_sq, to_sq)


def bishop_move(
    board: Board, from_sq: Square, to_sq: Square, color: Color
) -> Move | None:
    df, dr = _deltas(from_sq, to_sq)
    if df != dr:
        return None
    if not board.is_path_clear(from_sq, to_sq):
        return None
    if _lands_on_friend(board, from_sq, to_sq):
        return None
    return Move(from_sq, to_sq)


def queen_move(board: Board, from_sq: Square, to_sq: Square, color: Color) -> Move | None:
    return rook_move(board, from_sq, to_sq, color) or bishop_move(
        board, from_sq, to_sq, color
    )


def knight_move(
    board: Board, from_sq: Square, to_sq: Square, color: Color
) -> Move | None:
    if _deltas(from_sq, to_sq) not in KNIGHT_DELTAS:
        return None
    if _lands_on_friend(board, from_sq, to_sq):
        return None
    return Move(from_sq, to_sq)


# -- King ------------------------------------------------------------------------


def king_move(
    board: Board,
    from_sq: Square,
    to_sq: Square,
    color: Color,
    *,
    check_king_safety: bool = True,
    strict_castling: bool = False,
) -> Move | None:
    df, dr = _deltas(from_sq, to_sq)
    if df <= 1 and dr <= 1:
        if _lands_on_friend(board, from_sq, to_sq):
            return None
        move = Move(from_sq, to_sq)
        if check_king_safety and _exposes_king(board, move, color):
            return None
        return move

    if dr == 0 and df == 2:
        return castling_move(
            board, from_sq, to_sq, color, strict_castling=strict_castling
        )
    return None


def castling_move(
    board: Board,
    from_sq: Square,
    to_sq: Square,
    color: Color,
    *,
    strict_castling: bool = False,
) -> Move | None:
    """Two-file king move along the home rank, if its preconditions hold.

    Only the landing square is guarded by the caller's king-safety check.
    Squares the king starts on or crosses are checked for attacks only
    with *strict_castling*.
    """
    rank = color.home_rank
    if from_sq != Square(_KING_FILE, rank) or to_sq.rank != rank:
        return None
    kingside = to_sq.file > from_sq.file
    kind = MoveKind.CASTLE_KINGSIDE if kingside else MoveKind.CASTLE_QUEENSIDE
    rook_file, king_to_file = _CASTLE_FILES[kind]
    if to_sq.file != king_to_file:
        return None

    if board.moved & (MovedFlags.king(color) | MovedFlags.rook(color, kingside)):
        return None

    rook_sq = Square(rook_file, rank)
    if not board.is_path_clear(from_sq, rook_sq):
        return None
    rook = board[rook_sq]
    if rook is None or rook.piece_type != PieceType.ROOK or rook.color != color:
        return None

    if strict_castling:
        from chesslaw.core.check import is_square_attacked

        crossed = Square((from_sq.file + to_sq.file) // 2, rank)
        for sq in (from_sq, crossed):
            if is_square_attacked(board, sq, color.opposite):
                return None

    return Move(from_sq, to_sq, kind)


def _exposes_king(board: Board, move: Move, color: Color) -> bool:
    from chesslaw.core.board import apply_move
    from chesslaw.core.check import is_in_check

    return is_in_check(apply_move(board, move), color)


# -- Dispatch ------------------------------------------------------------------

Validator = Callable[[Board, Square, Square, Color], Move | None]

VALIDATORS: dict[PieceType, Validator] = {
    PieceType.PAWN: pawn_move,
    PieceType.KNIGHT: knight_move,
    PieceType.BISHOP: bishop_move,
    PieceType.ROOK: rook_move,
    PieceType.QUEEN: queen_move,
    PieceType.KING: king_move,
}


def validate(
    board: Board,
    from_sq: Square,
    to_sq: Square,
    *,
    check_king_safety: bool = True,
    strict_castling: bool = False,
) -> Move | None:
    """Geometric legality of moving the piece on *from_sq* to *to_sq*.

    Returns ``None`` for an empty origin, a null move or squares off board.
    With *check_king_safety* off the king validator skips its attacked-
    square test; the check oracle uses that to ask "could this piece
    reach the king" without recursing.
    """
    if not (from_sq.is_on_board() and to_sq.is_on_board()) or from_sq == to_sq:
        return None
    piece = board[from_sq]
    if piece is None:
        return None
    if piece.piece_type == PieceType.KING:
        return king_move(
            board,
            from_sq,
            to_sq,
            piece.color,
            check_king_safety=check_king_safety,
            strict_castling=strict_castling,
        )
    return VALIDATORS[piece.piece_type](board, from_sq, to_sq, piece.color)


def rejection_reason(board: Board, from_sq: Square, to_sq: Square) -> RejectReason:
    """Classify a move :func:`validate` refused."""
    piece = board[from_sq]
    if (
        piece is not None
        and piece.piece_type == PieceType.KING
        and from_sq == Square(_KING_FILE, piece.color.home_rank)
        and _deltas(from_sq, to_sq) == (2, 0)
    ):
        return RejectReason.CASTLING_PRECONDITION_FAILED
    return RejectReason.ILLEGAL_GEOMETRY
