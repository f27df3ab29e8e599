"""Game session: the board, whose turn it is, and what has been played."""

from __future__ import annotations

from dataclasses import dataclass, field

from chesslaw.core.board import Board
from chesslaw.core.enums import Color, GameStatus
from chesslaw.core.fen import placement_to_fen
from chesslaw.core.move import Move
from chesslaw.core.piece import Piece
from chesslaw.core.types import Square


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single committed move in the history."""

    move: Move
    piece: Piece
    color: Color
    ply: int
    san: str
    fen_after: str
    is_check: bool = False
    is_checkmate: bool = False
    is_capture: bool = False
    is_castling: bool = False
    is_en_passant: bool = False
    is_promotion: bool = False

    @property
    def from_sq(self) -> Square:
        return self.move.from_sq

    @property
    def to_sq(self) -> Square:
        return self.move.to_sq


@dataclass
class GameSession:
    """Everything one game owns.

    Only :meth:`Engine.submit_move` and :meth:`Engine.reset` change a
    session; a new game is a new session.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    history: list[MoveRecord] = field(default_factory=list)
    move_number: int = 1
    status: GameStatus = GameStatus.IN_PROGRESS
    # Where the game was set up, for numbering its movetext.
    start_move_number: int = 1
    start_side: Color = Color.WHITE

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_game_over(self) -> bool:
        return self.status == GameStatus.CHECKMATE

    @property
    def winner(self) -> Color | None:
        """Color that delivered mate, if the game is over.

        A game set up in a mated position has no history; the mated side
        is the one to move and the other side wins.
        """
        if not self.is_game_over:
            return None
        if self.history:
            return self.history[-1].color
        return self.side_to_move.opposite

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.history)

    @property
    def last_move(self) -> MoveRecord | None:
        return self.history[-1] if self.history else None

    def sans(self) -> list[str]:
        return [record.san for record in self.history]

    def placement(self) -> str:
        """FEN piece-placement field of the current board."""
        return placement_to_fen(self.board)
