"""Tests for GameSession and MoveRecord."""

from collections.abc import Callable

from chesslaw.core.board import Board
from chesslaw.core.enums import Color, GameStatus
from chesslaw.core.fen import STARTING_FEN
from chesslaw.core.types import E1
from chesslaw.game.state import GameSession, MoveRecord

PlayFn = Callable[..., list[MoveRecord]]


class TestGameSessionDefaults:
    def test_starts_at_initial_position(self) -> None:
        session = GameSession()
        assert session.board == Board.initial()
        assert session.side_to_move == Color.WHITE
        assert session.status == GameStatus.IN_PROGRESS
        assert session.move_number == 1
        assert session.ply_count == 0
        assert session.last_move is None

    def test_not_over(self) -> None:
        session = GameSession()
        assert not session.is_game_over
        assert session.winner is None

    def test_sessions_do_not_share_state(self) -> None:
        first, second = GameSession(), GameSession()
        first.board.remove(E1)
        assert second.board == Board.initial()
        assert first.history is not second.history

    def test_placement(self) -> None:
        assert GameSession().placement() == STARTING_FEN.split()[0]


class TestGameSessionHistory:
    def test_records_accumulate(self, play: PlayFn, session: GameSession) -> None:
        records = play(session, "e2e4", "e7e5", "g1f3")
        assert session.ply_count == 3
        assert session.sans() == ["e4", "e5", "Nf3"]
        assert session.last_move is records[-1]
        assert [r.ply for r in records] == [1, 2, 3]
        assert [r.color for r in records] == [Color.WHITE, Color.BLACK, Color.WHITE]

    def test_move_number_advances_after_black(self, play: PlayFn, session: GameSession) -> None:
        play(session, "e2e4")
        assert session.move_number == 1
        play(session, "e7e5")
        assert session.move_number == 2

    def test_record_squares_and_fen(self, play: PlayFn, session: GameSession) -> None:
        (record,) = play(session, "e2e4")
        assert record.from_sq.name == "e2"
        assert record.to_sq.name == "e4"
        assert record.fen_after == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR"


class TestGameSessionWinner:
    def test_mated_setup_position(self) -> None:
        session = GameSession(side_to_move=Color.WHITE, status=GameStatus.CHECKMATE)
        assert session.winner == Color.BLACK

    def test_mate_played_in_game(self, play: PlayFn, session: GameSession) -> None:
        play(session, "f2f3", "e7e5", "g2g4", "d8h4")
        assert session.winner == Color.BLACK
        assert session.winner == session.history[-1].color
