"""Tests for castling anchors, castling targets and rights revocation."""

import chess

from variant_engine.castling import (
    KINGSIDE,
    QUEENSIDE,
    CastlingAnchor,
    adjust_castling_rights,
    castle_plan,
    castling_anchor,
)
from variant_engine.fen import split_fen

WILD0_START = "rnbkqbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
FR_START_0 = "bbqnnrkr/pppppppp/8/8/8/8/PPPPPPPP/BBQNNRKR w KQkq - 0 1"
# Three white rooks on the back rank; a8 mirrors a1
THREE_ROOKS_MIRRORED = "r1k4r/pppppppp/8/8/8/8/PPPPPPPP/RRK4R w KQkq - 0 1"
THREE_ROOKS_UNMIRRORED = "2k4r/pppppppp/8/8/8/8/PPPPPPPP/RRK4R w KQkq - 0 1"


class TestCastlingAnchor:
    def test_standard_start(self):
        assert castling_anchor(chess.STARTING_FEN, chess.WHITE) == CastlingAnchor(
            king=chess.E1, left_rook=chess.A1, right_rook=chess.H1,
        )
        assert castling_anchor(chess.STARTING_FEN, chess.BLACK, "standard") == CastlingAnchor(
            king=chess.E8, left_rook=chess.A8, right_rook=chess.H8,
        )

    def test_chess960_any_files(self):
        anchor = castling_anchor(FR_START_0, chess.WHITE, "wild/fr")
        assert anchor == CastlingAnchor(king=chess.G1, left_rook=chess.F1, right_rook=chess.H1)

    def test_chess960_files_ignored_outside_wild_fr(self):
        """Outside wild/fr a g-file king and f-file rook can't castle."""
        anchor = castling_anchor(FR_START_0, chess.WHITE, "standard")
        assert anchor == CastlingAnchor(king=None, left_rook=None, right_rook=chess.H1)

    def test_extra_rook_prefers_mirrored(self):
        anchor = castling_anchor(THREE_ROOKS_MIRRORED, chess.WHITE, "wild/fr")
        assert anchor.left_rook == chess.A1
        assert anchor.right_rook == chess.H1

    def test_extra_rook_falls_back_to_nearest_king(self):
        anchor = castling_anchor(THREE_ROOKS_UNMIRRORED, chess.WHITE, "wild/fr")
        assert anchor.left_rook == chess.B1

    def test_wild0_black_king_on_d_file(self):
        assert castling_anchor(WILD0_START, chess.BLACK, "wild/0").king == chess.D8
        assert castling_anchor(WILD0_START, chess.BLACK, "standard").king is None

    def test_wild1_d_file_either_color(self):
        fen = "rnbkqbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBKQBNR w KQkq - 0 1"
        assert castling_anchor(fen, chess.WHITE, "wild/1").king == chess.D1

    def test_malformed_start(self):
        assert castling_anchor("garbage", chess.WHITE) == CastlingAnchor()


class TestCastlePlan:
    def test_orthodox_targets(self):
        anchor = castling_anchor(chess.STARTING_FEN, chess.WHITE)
        plan = castle_plan(anchor, chess.WHITE, KINGSIDE)
        assert (plan.king_to, plan.rook_from, plan.rook_to, plan.right) == (
            chess.G1, chess.H1, chess.F1, "K",
        )

    def test_black_queenside(self):
        anchor = castling_anchor(chess.STARTING_FEN, chess.BLACK)
        plan = castle_plan(anchor, chess.BLACK, QUEENSIDE)
        assert (plan.king_to, plan.rook_from, plan.rook_to, plan.right) == (
            chess.C8, chess.A8, chess.D8, "q",
        )

    def test_d_file_king_is_mirrored(self):
        """A d-file king castles short toward the a-file."""
        anchor = castling_anchor(WILD0_START, chess.BLACK, "wild/0")
        short = castle_plan(anchor, chess.BLACK, KINGSIDE, "wild/0")
        assert (short.king_to, short.rook_from, short.rook_to, short.right) == (
            chess.B8, chess.A8, chess.C8, "q",
        )
        long = castle_plan(anchor, chess.BLACK, QUEENSIDE, "wild/0")
        assert (long.king_to, long.rook_from, long.rook_to, long.right) == (
            chess.F8, chess.H8, chess.E8, "k",
        )

    def test_no_king_no_plan(self):
        assert castle_plan(CastlingAnchor(), chess.WHITE, KINGSIDE) is None


class TestAdjustCastlingRights:
    def test_king_moved(self):
        fen = "rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPPKPPP/RNBQ1BNR b KQkq - 1 2"
        assert split_fen(adjust_castling_rights(fen, chess.STARTING_FEN)).castling == "kq"

    def test_rook_gone(self):
        fen = "rnbqkbn1/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
        assert split_fen(adjust_castling_rights(fen, chess.STARTING_FEN)).castling == "KQq"

    def test_all_rights_gone(self):
        fen = "1nbqkbn1/pppppppp/8/8/8/8/PPPPPPPP/1NBQKBN1 w KQkq - 0 1"
        assert split_fen(adjust_castling_rights(fen, chess.STARTING_FEN)).castling == "-"

    def test_untouched_rights_kept(self):
        assert adjust_castling_rights(chess.STARTING_FEN, chess.STARTING_FEN) == chess.STARTING_FEN
