"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesslaw.core.enums import MoveKind
from chesslaw.core.types import Square

_CASTLE_KINDS = (MoveKind.CASTLE_KINGSIDE, MoveKind.CASTLE_QUEENSIDE)


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable, classified move produced by the validators."""

    from_sq: Square
    to_sq: Square
    kind: MoveKind = MoveKind.NORMAL

    @property
    def is_castling(self) -> bool:
        return self.kind in _CASTLE_KINDS

    @property
    def captured_square(self) -> Square:
        """Square a capture removes a piece from.

        Differs from the destination only for en passant, where the passed
        pawn sits beside the mover's origin.
        """
        if self.kind == MoveKind.EN_PASSANT:
            return Square(self.to_sq.file, self.from_sq.rank)
        return self.to_sq

    @property
    def rook_hop(self) -> tuple[Square, Square] | None:
        """``(rook_from, rook_to)`` for castling, ``None`` otherwise."""
        rank = self.from_sq.rank
        if self.kind == MoveKind.CASTLE_KINGSIDE:
            return Square(7, rank), Square(5, rank)
        if self.kind == MoveKind.CASTLE_QUEENSIDE:
            return Square(0, rank), Square(3, rank)
        return None

    def __str__(self) -> str:
        return f"{self.from_sq}{self.to_sq}"
