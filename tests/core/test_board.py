"""Tests for Board, squares and the move-commit function."""

import pytest

from chesslaw.core.board import Board, apply_move
from chesslaw.core.enums import Color, MovedFlags, MoveKind, PieceType
from chesslaw.core.errors import OutOfBoundsError
from chesslaw.core.fen import board_from_fen
from chesslaw.core.move import Move
from chesslaw.core.piece import Piece
from chesslaw.core.types import (
    A1, B1, C1, D1, E1, F1, G1, H1,
    A2, E2, E3, E4,
    A8, B8, C8, D8, E8, F8, G8, H8,
    D5, D6, E5, F4,
    Square,
    parse_square,
)


class TestSquare:
    def test_parse(self) -> None:
        assert parse_square("e4") == Square(4, 3)
        assert parse_square("a1") == A1
        assert parse_square("h8") == H8

    def test_name(self) -> None:
        assert E4.name == "e4"
        assert str(H8) == "h8"

    @pytest.mark.parametrize("name", ["", "e", "e9", "i1", "e44", "E4"])
    def test_parse_invalid(self, name: str) -> None:
        with pytest.raises(OutOfBoundsError):
            parse_square(name)

    def test_off_board(self) -> None:
        assert not Square(8, 0).is_on_board()
        assert not Square(0, -1).is_on_board()
        assert Square(7, 7).is_on_board()

    def test_off_board_has_no_name(self) -> None:
        with pytest.raises(OutOfBoundsError):
            _ = Square(-1, 3).name


class TestBoardInitial:
    def test_piece_counts(self) -> None:
        board = Board.initial()
        assert len(board.all_pieces(Color.WHITE)) == 16
        assert len(board.all_pieces(Color.BLACK)) == 16

    def test_pawn_ranks(self) -> None:
        board = Board.initial()
        for file in range(8):
            assert board[Square(file, 1)] == Piece(Color.WHITE, PieceType.PAWN)
            assert board[Square(file, 6)] == Piece(Color.BLACK, PieceType.PAWN)

    def test_back_ranks(self) -> None:
        board = Board.initial()
        expected = [
            PieceType.ROOK, PieceType.KNIGHT, PieceType.BISHOP, PieceType.QUEEN,
            PieceType.KING, PieceType.BISHOP, PieceType.KNIGHT, PieceType.ROOK,
        ]
        white = [A1, B1, C1, D1, E1, F1, G1, H1]
        black = [A8, B8, C8, D8, E8, F8, G8, H8]
        for sq, pt in zip(white, expected):
            assert board[sq] == Piece(Color.WHITE, pt), f"Mismatch at {sq}"
        for sq, pt in zip(black, expected):
            assert board[sq] == Piece(Color.BLACK, pt), f"Mismatch at {sq}"

    def test_empty_middle(self) -> None:
        board = Board.initial()
        for rank in range(2, 6):
            for file in range(8):
                assert board[Square(file, rank)] is None

    def test_no_history(self) -> None:
        board = Board.initial()
        assert board.moved == MovedFlags.NONE
        assert board.en_passant is None

    def test_king_squares(self) -> None:
        board = Board.initial()
        assert board.king_square(Color.WHITE) == E1
        assert board.king_square(Color.BLACK) == E8


class TestBoardQueries:
    def test_square_at_bounds_checked(self) -> None:
        board = Board.initial()
        assert board.square_at(E1) == Piece(Color.WHITE, PieceType.KING)
        with pytest.raises(OutOfBoundsError):
            board.square_at(Square(8, 8))

    @pytest.mark.parametrize(
        "sq", [Square(8, 0), Square(-1, 1), Square(0, 8), Square(3, -1)]
    )
    def test_item_access_off_board_raises(self, sq: Square) -> None:
        board = Board.initial()
        with pytest.raises(OutOfBoundsError):
            board[sq]
        with pytest.raises(OutOfBoundsError):
            board[sq] = Piece(Color.WHITE, PieceType.QUEEN)
        assert board == Board.initial()

    def test_same_color(self) -> None:
        board = Board.initial()
        assert board.is_occupied_by_same_color(A1, B1)
        assert not board.is_occupied_by_same_color(A1, A8)
        assert not board.is_occupied_by_same_color(A1, E4)

    def test_path_blocked(self) -> None:
        board = Board.initial()
        assert not board.is_path_clear(A1, A8)
        assert not board.is_path_clear(C1, F4)

    def test_path_adjacent_always_clear(self) -> None:
        board = Board.initial()
        assert board.is_path_clear(A1, B1)
        assert board.is_path_clear(A1, A2)

    def test_path_clear_on_empty_board(self) -> None:
        board = Board()
        assert board.is_path_clear(A1, H8)
        assert board.is_path_clear(H1, A8)
        assert board.is_path_clear(A1, A8)

    def test_king_missing(self) -> None:
        assert Board().king_square(Color.WHITE) is None

    def test_pieces(self) -> None:
        board = Board.initial()
        assert board.pieces(Color.WHITE, PieceType.ROOK) == [A1, H1]


class TestBoardMutation:
    def test_move_piece_returns_capture(self) -> None:
        board = Board()
        board.place(A1, Piece(Color.WHITE, PieceType.ROOK))
        board.place(A8, Piece(Color.BLACK, PieceType.ROOK))
        captured = board.move_piece(A1, A8)
        assert captured == Piece(Color.BLACK, PieceType.ROOK)
        assert board[A1] is None
        assert board[A8] == Piece(Color.WHITE, PieceType.ROOK)

    def test_remove(self) -> None:
        board = Board.initial()
        assert board.remove(E2) == Piece(Color.WHITE, PieceType.PAWN)
        assert board.is_empty(E2)

    def test_copy_is_independent(self) -> None:
        board = Board.initial()
        clone = board.copy()
        clone.remove(E2)
        clone.moved |= MovedFlags.WHITE_KING
        assert board[E2] is not None
        assert board.moved == MovedFlags.NONE
        assert clone != board

    def test_clear(self) -> None:
        board = Board.initial()
        board.clear()
        assert board == Board()


class TestApplyMove:
    def test_original_untouched(self) -> None:
        board = Board.initial()
        after = apply_move(board, Move(E2, E4, MoveKind.DOUBLE_PAWN))
        assert board == Board.initial()
        assert after[E4] == Piece(Color.WHITE, PieceType.PAWN)
        assert after[E2] is None

    def test_double_step_sets_en_passant(self) -> None:
        after = apply_move(Board.initial(), Move(E2, E4, MoveKind.DOUBLE_PAWN))
        assert after.en_passant == E3

    def test_other_moves_clear_en_passant(self) -> None:
        board = apply_move(Board.initial(), Move(E2, E4, MoveKind.DOUBLE_PAWN))
        after = apply_move(board, Move(parse_square("g8"), parse_square("f6")))
        assert after.en_passant is None

    def test_en_passant_removes_passed_pawn(self) -> None:
        board = board_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        after = apply_move(board, Move(E5, D6, MoveKind.EN_PASSANT))
        assert after[D6] == Piece(Color.WHITE, PieceType.PAWN)
        assert after[D5] is None
        assert after[E5] is None

    def test_kingside_castle_moves_rook(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K2R w K - 0 1")
        after = apply_move(board, Move(E1, G1, MoveKind.CASTLE_KINGSIDE))
        assert after[G1] == Piece(Color.WHITE, PieceType.KING)
        assert after[F1] == Piece(Color.WHITE, PieceType.ROOK)
        assert after[H1] is None
        assert after.moved & MovedFlags.WHITE_KING

    def test_queenside_castle_moves_rook(self) -> None:
        board = board_from_fen("r3k3/8/8/8/8/8/8/4K3 b q - 0 1")
        after = apply_move(board, Move(E8, C8, MoveKind.CASTLE_QUEENSIDE))
        assert after[C8] == Piece(Color.BLACK, PieceType.KING)
        assert after[D8] == Piece(Color.BLACK, PieceType.ROOK)
        assert after[A8] is None

    def test_promotion_makes_queen(self) -> None:
        board = board_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        after = apply_move(board, Move(Square(0, 6), A8, MoveKind.PROMOTION))
        assert after[A8] == Piece(Color.WHITE, PieceType.QUEEN)

    def test_rook_move_sets_flag(self) -> None:
        after = apply_move(
            board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"),
            Move(H1, Square(7, 1)),
        )
        assert after.moved & MovedFlags.WHITE_KINGSIDE_ROOK
        assert not after.moved & MovedFlags.WHITE_QUEENSIDE_ROOK

    def test_capturing_on_corner_sets_flag(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        after = apply_move(board, Move(A1, A8))
        assert after.moved & MovedFlags.BLACK_QUEENSIDE_ROOK
        assert after.moved & MovedFlags.WHITE_QUEENSIDE_ROOK

    def test_empty_origin_raises(self) -> None:
        with pytest.raises(ValueError):
            apply_move(Board(), Move(E2, E4))

