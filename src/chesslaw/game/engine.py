"""Engine — the orchestrator that turns proposed moves into game history.

Coordinates: validators, check oracle, notation, GameSession.
Emits events via simple callbacks so a UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from chesslaw.core.board import Board, apply_move
from chesslaw.core.check import is_checkmate, is_in_check, leaves_king_in_check
from chesslaw.core.check import legal_moves_from as _legal_moves_from
from chesslaw.core.enums import Color, GameStatus, MoveKind, RejectReason
from chesslaw.core.errors import IllegalMoveError, KingMissingError, MoveRejected
from chesslaw.core.fen import STARTING_FEN, parse_fen, placement_to_fen
from chesslaw.core.move import Move
from chesslaw.core.notation import (
    is_capture,
    move_to_san,
    movetext_lines,
    with_check_suffix,
)
from chesslaw.core.piece import Piece
from chesslaw.core.types import Square
from chesslaw.core.validator import rejection_reason, validate
from chesslaw.game.config import EngineConfig
from chesslaw.game.state import GameSession, MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameSession], None]
RejectedCallback = Callable[[MoveRejected, GameSession], None]
GameOverCallback = Callable[[GameSession], None]

BoardSnapshot = tuple[tuple[Piece | None, ...], ...]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_rejected: list[RejectedCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


# ── Engine ───────────────────────────────────────────────────────────────────


class Engine:
    """Validates and applies moves on :class:`GameSession` objects.

    The engine holds no game state of its own: every call works on the
    session it is given, so one engine can serve any number of games.
    Sessions are meant for single-threaded, single-owner use.
    """

    __slots__ = ("config", "events")

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config if config is not None else EngineConfig()
        self.events = GameEvents()

    # ── Session lifecycle ────────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> GameSession:
        """Standard starting position, or the position described by *fen*."""
        parsed = parse_fen(fen or STARTING_FEN)
        session = GameSession(
            board=parsed.board,
            side_to_move=parsed.side_to_move,
            move_number=parsed.fullmove_number,
            start_move_number=parsed.fullmove_number,
            start_side=parsed.side_to_move,
        )
        session.status = self._status_of(session.board, session.side_to_move)
        _LOGGER.info("New game: %s", fen or "standard position")
        return session

    def reset(self, session: GameSession) -> None:
        """Put *session* back to the standard starting position."""
        session.board = Board.initial()
        session.side_to_move = Color.WHITE
        session.history = []
        session.move_number = 1
        session.status = GameStatus.IN_PROGRESS
        session.start_move_number = 1
        session.start_side = Color.WHITE
        _LOGGER.info("Game reset")

    # ── Queries ──────────────────────────────────────────────────────────

    @staticmethod
    def side_to_move(session: GameSession) -> Color:
        return session.side_to_move

    @staticmethod
    def is_game_over(session: GameSession) -> bool:
        return session.is_game_over

    @staticmethod
    def board_snapshot(session: GameSession) -> BoardSnapshot:
        """Read-only copy of the placement: 8 rank tuples, rank 1 first."""
        board = session.board
        return tuple(
            tuple(board[Square(file, rank)] for file in range(8)) for rank in range(8)
        )

    def legal_moves(self, session: GameSession, sq: Square) -> list[Move]:
        """Legal moves for the piece on *sq* if it belongs to the side to move.

        Raises:
            KingMissingError: the session's board lacks a king.
        """
        if session.is_game_over or not sq.is_on_board():
            return []
        piece = session.board[sq]
        if piece is None or piece.color != session.side_to_move:
            return []
        _require_kings(session.board)
        return _legal_moves_from(
            session.board, sq, strict_castling=self.config.strict_castling
        )

    def legal_destinations(self, session: GameSession, sq: Square) -> set[Square]:
        """Squares the piece on *sq* may legally move to. Never mutates."""
        return {move.to_sq for move in self.legal_moves(session, sq)}

    def movetext(self, session: GameSession) -> list[str]:
        """Numbered move lines, e.g. ``["1. e4 e5", "2. Nf3"]``."""
        return movetext_lines(
            session.sans(),
            self.config.history_limit,
            start_number=session.start_move_number,
            black_first=session.start_side == Color.BLACK,
        )

    # ── Move application ─────────────────────────────────────────────────

    def submit_move(
        self, session: GameSession, from_sq: Square, to_sq: Square
    ) -> MoveRecord | MoveRejected:
        """Validate and, if legal, commit a move.

        Returns the :class:`MoveRecord` of the committed move, or a
        :class:`MoveRejected` (falsy) leaving the session untouched.

        Raises:
            KingMissingError: the session's board lacks a king.
        """
        rejection = self._precheck(session, from_sq, to_sq)
        if rejection is not None:
            return self._reject(session, rejection)

        board = session.board
        mover = session.side_to_move
        _require_kings(board)

        strict = self.config.strict_castling
        move = validate(
            board, from_sq, to_sq, check_king_safety=False, strict_castling=strict
        )
        if move is None:
            reason = rejection_reason(board, from_sq, to_sq)
            return self._reject(session, MoveRejected(reason, from_sq, to_sq))
        if leaves_king_in_check(board, move, mover):
            return self._reject(
                session,
                MoveRejected(RejectReason.MOVES_INTO_CHECK, from_sq, to_sq),
            )

        record, after, status = self._play(session, move)

        # Commit: every field is replaced together, after all computation.
        session.board = after
        session.history.append(record)
        session.status = status
        if mover == Color.BLACK:
            session.move_number += 1
        if status != GameStatus.CHECKMATE:
            session.side_to_move = mover.opposite

        _LOGGER.debug("%s played %s", mover, record.san)
        self._emit_move(record, session)
        if status == GameStatus.CHECKMATE:
            _LOGGER.info("Checkmate: %s wins after %s", mover, record.san)
            self._emit_game_over(session)
        return record

    def replay(
        self,
        moves: Iterable[MoveRecord | tuple[Square, Square]],
        fen: str | None = None,
    ) -> GameSession:
        """Rebuild a session by submitting *moves* in order.

        Raises:
            IllegalMoveError: a move is rejected; carries the rejection.
        """
        session = self.new_game(fen)
        for ply, item in enumerate(moves, start=1):
            if isinstance(item, MoveRecord):
                from_sq, to_sq = item.from_sq, item.to_sq
            else:
                from_sq, to_sq = item
            result = self.submit_move(session, from_sq, to_sq)
            if isinstance(result, MoveRejected):
                raise IllegalMoveError(result, ply)
        return session

    # ── Internal helpers ─────────────────────────────────────────────────

    @staticmethod
    def _precheck(
        session: GameSession, from_sq: Square, to_sq: Square
    ) -> MoveRejected | None:
        if session.is_game_over:
            return MoveRejected(RejectReason.GAME_OVER, from_sq, to_sq)
        if not (from_sq.is_on_board() and to_sq.is_on_board()):
            return MoveRejected(RejectReason.OUT_OF_BOUNDS, from_sq, to_sq)
        piece = session.board[from_sq]
        if piece is None:
            return MoveRejected(RejectReason.NO_PIECE_AT_SOURCE, from_sq, to_sq)
        if piece.color != session.side_to_move:
            return MoveRejected(
                RejectReason.WRONG_SIDE_TO_MOVE,
                from_sq,
                to_sq,
                f"{session.side_to_move} to move",
            )
        if from_sq == to_sq:
            return MoveRejected(RejectReason.ILLEGAL_GEOMETRY, from_sq, to_sq)
        return None

    def _play(
        self, session: GameSession, move: Move
    ) -> tuple[MoveRecord, Board, GameStatus]:
        """Compute the record, resulting board and status without committing."""
        board = session.board
        piece = board[move.from_sq]
        assert piece is not None
        strict = self.config.strict_castling

        san = move_to_san(board, move, strict_castling=strict)
        captured = is_capture(board, move)
        after = apply_move(board, move)

        opponent = piece.color.opposite
        check = is_in_check(after, opponent)
        mate = check and is_checkmate(after, opponent, strict_castling=strict)

        record = MoveRecord(
            move=move,
            piece=piece,
            color=piece.color,
            ply=session.ply_count + 1,
            san=with_check_suffix(san, is_check=check, is_checkmate=mate),
            fen_after=placement_to_fen(after),
            is_check=check,
            is_checkmate=mate,
            is_capture=captured,
            is_castling=move.is_castling,
            is_en_passant=move.kind == MoveKind.EN_PASSANT,
            is_promotion=move.kind == MoveKind.PROMOTION,
        )
        if mate:
            status = GameStatus.CHECKMATE
        elif check:
            status = GameStatus.CHECK
        else:
            status = GameStatus.IN_PROGRESS
        return record, after, status

    def _status_of(self, board: Board, color: Color) -> GameStatus:
        if board.king_square(color) is None:
            return GameStatus.IN_PROGRESS
        if not is_in_check(board, color):
            return GameStatus.IN_PROGRESS
        if is_checkmate(board, color, strict_castling=self.config.strict_castling):
            return GameStatus.CHECKMATE
        return GameStatus.CHECK

    def _reject(self, session: GameSession, rejection: MoveRejected) -> MoveRejected:
        _LOGGER.debug("Rejected move: %s", rejection)
        for cb in self.events.on_rejected:
            cb(rejection, session)
        return rejection

    def _emit_move(self, record: MoveRecord, session: GameSession) -> None:
        for cb in self.events.on_move:
            cb(record, session)

    def _emit_game_over(self, session: GameSession) -> None:
        for cb in self.events.on_game_over:
            cb(session)


def _require_kings(board: Board) -> None:
    for color in Color:
        if board.king_square(color) is None:
            _LOGGER.error("Board invariant broken: no %s king", color.name)
            raise KingMissingError(color)


# ── Module-level API backed by a default engine ──────────────────────────────

_DEFAULT_ENGINE = Engine()


def new_game(fen: str | None = None) -> GameSession:
    return _DEFAULT_ENGINE.new_game(fen)


def submit_move(
    session: GameSession, from_sq: Square, to_sq: Square
) -> MoveRecord | MoveRejected:
    return _DEFAULT_ENGINE.submit_move(session, from_sq, to_sq)


def legal_destinations(session: GameSession, sq: Square) -> set[Square]:
    return _DEFAULT_ENGINE.legal_destinations(session, sq)


def is_game_over(session: GameSession) -> bool:
    return Engine.is_game_over(session)


def side_to_move(session: GameSession) -> Color:
    return Engine.side_to_move(session)


def board_snapshot(session: GameSession) -> BoardSnapshot:
    return Engine.board_snapshot(session)
