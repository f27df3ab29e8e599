"""Board - piece placement on an 8x8 board plus castling/en passant state."""

from __future__ import annotations

from collections.abc import Iterator

from chesslaw.core.enums import Color, MovedFlags, MoveKind, PieceType
from chesslaw.core.errors import OutOfBoundsError
from chesslaw.core.move import Move
from chesslaw.core.piece import Piece
from chesslaw.core.types import BOARD_SIZE, Square, all_squares, step_toward

_BACK_RANK = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

# Rook home squares and the flag raised once anything moves from/to them.
_ROOK_CORNERS: dict[Square, MovedFlags] = {
    Square(0, 0): MovedFlags.WHITE_QUEENSIDE_ROOK,
    Square(7, 0): MovedFlags.WHITE_KINGSIDE_ROOK,
    Square(0, 7): MovedFlags.BLACK_QUEENSIDE_ROOK,
    Square(7, 7): MovedFlags.BLACK_KINGSIDE_ROOK,
}


def _index(sq: Square) -> int:
    if not sq.is_on_board():
        raise OutOfBoundsError(f"Square off board: ({sq.file}, {sq.rank})")
    return sq.rank * BOARD_SIZE + sq.file


class Board:
    """Mutable 64-square board.

    Besides piece placement the board carries the two pieces of history the
    rules need: which castling participants have moved, and the square a
    pawn skipped on the previous half-move (the en passant target).
    """

    __slots__ = ("_squares", "moved", "en_passant")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * (BOARD_SIZE * BOARD_SIZE)
        self.moved = MovedFlags.NONE
        self.en_passant: Square | None = None

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[_index(sq)]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._squares[_index(sq)] = piece

    def square_at(self, sq: Square) -> Piece | None:
        """Same as ``board[sq]``; raises :class:`OutOfBoundsError` off board."""
        return self[sq]

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    # -- Query helpers ------------------------------------------------------

    def is_occupied_by_same_color(self, a: Square, b: Square) -> bool:
        """Whether both squares hold pieces of one color."""
        first, second = self[a], self[b]
        if first is None or second is None:
            return False
        return first.color == second.color

    def is_path_clear(self, from_sq: Square, to_sq: Square) -> bool:
        """No piece strictly between two squares on a shared line.

        Walks the unit step from *from_sq* toward *to_sq*; the squares must
        share a rank, file or diagonal. Adjacent squares are always clear.
        """
        df = step_toward(from_sq.file, to_sq.file)
        dr = step_toward(from_sq.rank, to_sq.rank)
        sq = from_sq.offset(df, dr)
        while sq != to_sq:
            if self[sq] is not None:
                return False
            sq = sq.offset(df, dr)
        return True

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """``(square, piece)`` for every occupied square, a1 to h8."""
        for sq in all_squares():
            piece = self[sq]
            if piece is not None:
                yield sq, piece

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        target = Piece(color, piece_type)
        return [sq for sq, piece in self.occupied() if piece == target]

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [sq for sq, piece in self.occupied() if piece.color == color]

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` if there is none."""
        kings = self.pieces(color, PieceType.KING)
        return kings[0] if kings else None

    # -- Mutation primitives -------------------------------------------------

    def place(self, sq: Square, piece: Piece) -> None:
        self[sq] = piece

    def remove(self, sq: Square) -> Piece | None:
        piece = self[sq]
        self[sq] = None
        return piece

    def move_piece(self, from_sq: Square, to_sq: Square) -> Piece | None:
        """Move whatever stands on *from_sq*; returns the piece it displaced."""
        captured = self[to_sq]
        self[to_sq] = self.remove(from_sq)
        return captured

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b.moved = self.moved
        b.en_passant = self.en_passant
        return b

    def clear(self) -> None:
        self._squares = [None] * (BOARD_SIZE * BOARD_SIZE)
        self.moved = MovedFlags.NONE
        self.en_passant = None

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f in range(BOARD_SIZE):
            b[Square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[Square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)
        for f, pt in enumerate(_BACK_RANK):
            b[Square(f, 0)] = Piece(Color.WHITE, pt)
            b[Square(f, 7)] = Piece(Color.BLACK, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._squares == other._squares
            and self.moved == other.moved
            and self.en_passant == other.en_passant
        )

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(BOARD_SIZE):
                p = self[Square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)


def apply_move(board: Board, move: Move) -> Board:
    """Return a new board with *move* played on a copy of *board*.

    The move must already be validated. Handles the en passant capture,
    the castling rook hop, queen promotion, moved flags and the next en
    passant target. *board* itself is never touched.
    """
    piece = board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on {move.from_sq}")

    after = board.copy()
    if move.kind == MoveKind.EN_PASSANT:
        after.remove(move.captured_square)
    after.move_piece(move.from_sq, move.to_sq)

    hop = move.rook_hop
    if hop is not None:
        after.move_piece(*hop)

    if move.kind == MoveKind.PROMOTION:
        after[move.to_sq] = Piece(piece.color, PieceType.QUEEN)

    moved = after.moved
    if piece.piece_type == PieceType.KING:
        moved |= MovedFlags.king(piece.color)
    for sq in (move.from_sq, move.to_sq):
        if sq in _ROOK_CORNERS:
            moved |= _ROOK_CORNERS[sq]
    after.moved = moved

    if move.kind == MoveKind.DOUBLE_PAWN:
        after.en_passant = Square(
            move.from_sq.file, (move.from_sq.rank + move.to_sq.rank) // 2
        )
    else:
        after.en_passant = None
    return after
