"""Tests for FEN validation and the attack detector."""

import chess
import pytest

from variant_engine.attacks import adjacent_squares, is_attacked
from variant_engine.validation import validate_fen

WILD0_START = "rnbkqbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


class TestValidateFen:
    def test_starting_position_is_valid(self):
        assert validate_fen(chess.STARTING_FEN) is None

    def test_garbage(self):
        assert validate_fen("not a fen") == "Invalid FEN format."

    def test_too_few_fields(self):
        assert validate_fen("4k3/8/8/8/8/8/8/4K3 w -") == "Invalid FEN format."

    def test_waiting_side_in_check(self):
        # Black to move, white king on e1 attacked by the a1 rook
        assert validate_fen("8/8/8/8/8/8/6k1/r3K3 b - - 0 1") == "Black's turn but white is in check."
        assert validate_fen("4k3/8/8/8/8/8/8/4RK2 w - - 0 1") == "White's turn but black is in check."

    def test_missing_king(self):
        assert validate_fen("8/8/8/8/8/8/8/4K3 w - - 0 1") == "Missing king."

    def test_too_many_kings(self):
        assert validate_fen("4k3/8/8/8/8/8/8/3KK3 w - - 0 1") == "Too many kings."

    def test_pawn_on_back_rank(self):
        assert validate_fen("P3k3/8/8/8/8/8/8/4K3 w - - 0 1") == "Pawn on 1st or 8th rank."
        assert validate_fen("4k3/8/8/8/8/8/8/p3K3 w - - 0 1") == "Pawn on 1st or 8th rank."

    def test_castling_right_without_rook(self):
        assert validate_fen("4k3/8/8/8/8/8/8/4K3 w K - 0 1") == (
            "White's king or rooks aren't in valid locations for castling."
        )
        assert validate_fen("4k2r/8/8/8/8/8/8/4K3 w q - 0 1") == (
            "Black's king or rooks aren't in valid locations for castling."
        )

    def test_castling_right_with_rook(self):
        assert validate_fen("r3k3/8/8/8/8/8/8/4K3 w q - 0 1") is None

    def test_castling_depends_on_category(self):
        """A d-file black king may hold castling rights only in wild/0 and wild/1."""
        assert validate_fen(WILD0_START, "wild/0") is None
        assert validate_fen(WILD0_START, "standard") == (
            "Black's king or rooks aren't in valid locations for castling."
        )

    def test_repeatable(self):
        fen = "4k3/8/8/8/8/8/8/4K3 w K - 0 1"
        assert validate_fen(fen) == validate_fen(fen)


class TestIsAttacked:
    def test_rook_file(self):
        board = chess.Board("r3k3/8/8/8/8/8/8/4K3 w - - 0 1")
        assert is_attacked(board, chess.A1, chess.WHITE)
        assert not is_attacked(board, chess.B1, chess.WHITE)

    def test_king_does_not_shield_its_own_line(self):
        """A square behind the king on an attacked line counts as attacked."""
        board = chess.Board("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert is_attacked(board, chess.F1, chess.WHITE)

    def test_other_pieces_still_block(self):
        board = chess.Board("4k3/8/8/8/8/8/8/r2RK3 w - - 0 1")
        assert is_attacked(board, chess.C1, chess.WHITE)
        assert not is_attacked(board, chess.F1, chess.WHITE)

    def test_vacated_square_opens_line(self):
        board = chess.Board("4k3/8/8/8/8/8/8/rR3K2 w - - 0 1")
        assert not is_attacked(board, chess.C1, chess.WHITE)
        assert is_attacked(board, chess.C1, chess.WHITE, vacate=(chess.B1,))


class TestAdjacentSquares:
    @pytest.mark.parametrize("square, count", [(chess.A1, 3), (chess.E4, 8), (chess.H5, 5)])
    def test_counts(self, square, count):
        assert len(adjacent_squares(square)) == count

    def test_corner(self):
        assert set(adjacent_squares(chess.A1)) == {chess.A2, chess.B1, chess.B2}
