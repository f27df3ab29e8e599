"""Core enumerations and flags for the rules engine."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def forward(self) -> int:
        """Rank direction a pawn of this color advances in."""
        return 1 if self == Color.WHITE else -1

    @property
    def home_rank(self) -> int:
        """Rank index of the back rank (0 for white, 7 for black)."""
        return 0 if self == Color.WHITE else 7

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveKind(IntEnum):
    """Special move classification."""

    NORMAL = 0
    DOUBLE_PAWN = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4
    PROMOTION = 5


class MovedFlags(IntFlag):
    """Which castling participants have left their home squares.

    Bits are only ever set; a new game starts from ``NONE``.
    """

    NONE = 0
    WHITE_KING = auto()
    WHITE_QUEENSIDE_ROOK = auto()
    WHITE_KINGSIDE_ROOK = auto()
    BLACK_KING = auto()
    BLACK_QUEENSIDE_ROOK = auto()
    BLACK_KINGSIDE_ROOK = auto()

    WHITE_ALL = WHITE_KING | WHITE_QUEENSIDE_ROOK | WHITE_KINGSIDE_ROOK
    BLACK_ALL = BLACK_KING | BLACK_QUEENSIDE_ROOK | BLACK_KINGSIDE_ROOK
    ALL = WHITE_ALL | BLACK_ALL

    @classmethod
    def king(cls, color: Color) -> MovedFlags:
        return cls.WHITE_KING if color == Color.WHITE else cls.BLACK_KING

    @classmethod
    def rook(cls, color: Color, kingside: bool) -> MovedFlags:
        if color == Color.WHITE:
            return cls.WHITE_KINGSIDE_ROOK if kingside else cls.WHITE_QUEENSIDE_ROOK
        return cls.BLACK_KINGSIDE_ROOK if kingside else cls.BLACK_QUEENSIDE_ROOK


class GameStatus(IntEnum):
    """Where a game session stands after the last committed move."""

    IN_PROGRESS = 0
    CHECK = 1
    CHECKMATE = 2


class RejectReason(IntEnum):
    """Why a proposed move was not applied."""

    OUT_OF_BOUNDS = auto()
    NO_PIECE_AT_SOURCE = auto()
    WRONG_SIDE_TO_MOVE = auto()
    ILLEGAL_GEOMETRY = auto()
    MOVES_INTO_CHECK = auto()
    CASTLING_PRECONDITION_FAILED = auto()
    GAME_OVER = auto()
