"""FEN parsing and serialization for a :class:`Board`.

Halfmove clocks are accepted but ignored: this engine has no draw rules.
The castling field maps onto :class:`MovedFlags` (a missing right marks the
corresponding rook as moved).
"""

from __future__ import annotations

from dataclasses import dataclass

from chesslaw.core.board import Board
from chesslaw.core.enums import Color, MovedFlags
from chesslaw.core.piece import Piece
from chesslaw.core.types import Square, parse_square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, MovedFlags] = {
    "K": MovedFlags.WHITE_KINGSIDE_ROOK,
    "Q": MovedFlags.WHITE_QUEENSIDE_ROOK,
    "k": MovedFlags.BLACK_KINGSIDE_ROOK,
    "q": MovedFlags.BLACK_QUEENSIDE_ROOK,
}


@dataclass(slots=True)
class ParsedFen:
    """Board plus the FEN fields the engine keeps."""

    board: Board
    side_to_move: Color
    fullmove_number: int = 1


def parse_placement(placement: str) -> Board:
    """Parse the piece-placement field (``rnbqkbnr/pppppppp/...``)."""
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {placement!r}")
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {placement!r}")
                file += step
            else:
                if file >= 8:
                    raise ValueError(f"Invalid FEN rank width: {placement!r}")
                board[Square(file, rank)] = Piece.from_char(ch)
                file += 1
            if file > 8:
                raise ValueError(f"Invalid FEN rank width: {placement!r}")
        if file != 8:
            raise ValueError(f"Invalid FEN rank width: {placement!r}")
    return board


def parse_fen(fen: str) -> ParsedFen:
    """Parse a FEN string (4-6 fields)."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]
    board = parse_placement(placement)

    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    moved = MovedFlags.ALL & ~(MovedFlags.WHITE_KING | MovedFlags.BLACK_KING)
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            flag = _CASTLING_CHARS.get(ch)
            if flag is None or ch in seen:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            moved &= ~flag
    # A king with no castling rights left is recorded as moved.
    if moved & MovedFlags.WHITE_ALL == MovedFlags.WHITE_ALL & ~MovedFlags.WHITE_KING:
        moved |= MovedFlags.WHITE_KING
    if moved & MovedFlags.BLACK_ALL == MovedFlags.BLACK_ALL & ~MovedFlags.BLACK_KING:
        moved |= MovedFlags.BLACK_KING
    board.moved = moved

    if ep_part != "-":
        ep = parse_square(ep_part)
        expected_ep_rank = 5 if side == Color.WHITE else 2
        if ep.rank != expected_ep_rank:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        board.en_passant = ep

    fullmove = 1
    if len(parts) > 5:
        fullmove = int(parts[5])
        if fullmove < 1:
            raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")

    return ParsedFen(board, side, fullmove)


def board_from_fen(fen: str) -> Board:
    """Board only; accepts either a full FEN or a bare placement field."""
    if " " in fen.strip():
        return parse_fen(fen).board
    return parse_placement(fen.strip())


def placement_to_fen(board: Board) -> str:
    """Serialise piece placement only."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = board[Square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def board_to_fen(board: Board, side_to_move: Color, fullmove_number: int = 1) -> str:
    """Serialise *board* to FEN. The halfmove clock is always 0."""
    side_str = "w" if side_to_move == Color.WHITE else "b"

    castling_str = ""
    for ch, rook_flag in _CASTLING_CHARS.items():
        king_flag = MovedFlags.king(Color.WHITE if ch.isupper() else Color.BLACK)
        if not board.moved & (rook_flag | king_flag):
            castling_str += ch
    castling_str = castling_str or "-"

    ep_str = board.en_passant.name if board.en_passant is not None else "-"
    return (
        f"{placement_to_fen(board)} {side_str} {castling_str} {ep_str} "
        f"0 {fullmove_number}"
    )
