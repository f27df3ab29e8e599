"""Rejection values and exceptions raised by the rules engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chesslaw.core.enums import Color, RejectReason

if TYPE_CHECKING:
    from chesslaw.core.types import Square


class OutOfBoundsError(ValueError):
    """A coordinate or square name does not address a board square."""


class KingMissingError(RuntimeError):
    """The board has no king of a color that must have one.

    This never happens in a game built through the engine; seeing it means
    some earlier code broke the board invariants.
    """

    def __init__(self, color: Color) -> None:
        super().__init__(f"No {color.name} king on board")
        self.color = color


@dataclass(frozen=True, slots=True)
class MoveRejected:
    """A proposed move that was not applied. The session is unchanged."""

    reason: RejectReason
    from_sq: Square
    to_sq: Square
    detail: str = ""

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        text = f"{self.reason.name.lower()}: ({self.from_sq.file}, {self.from_sq.rank})"
        text += f" -> ({self.to_sq.file}, {self.to_sq.rank})"
        if self.detail:
            text += f" ({self.detail})"
        return text


class IllegalMoveError(ValueError):
    """Raised when replaying a move sequence hits a move that does not apply."""

    def __init__(self, rejection: MoveRejected, ply: int) -> None:
        super().__init__(f"Move {ply} could not be replayed: {rejection}")
        self.rejection = rejection
        self.ply = ply
