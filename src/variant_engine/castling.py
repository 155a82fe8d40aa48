"""Castling anchors: where the castle-able king and rooks started the game.

Anchors are computed from the game's starting position and used move by
move to decide whether castling is still possible and which rights have
to be revoked. Chess960 and the FICS "wild" categories put kings and
rooks on files python-chess doesn't castle from, so none of this can be
left to the library.
"""

from __future__ import annotations

from dataclasses import dataclass

import chess

from variant_engine.categories import Category, parse_category
from variant_engine.fen import split_fen, with_castling

KINGSIDE = "O-O"
QUEENSIDE = "O-O-O"


@dataclass(frozen=True)
class CastlingAnchor:
    """Starting squares of one color's castle-able king and rooks."""
    king: chess.Square | None = None
    left_rook: chess.Square | None = None    # a-side
    right_rook: chess.Square | None = None   # h-side


@dataclass(frozen=True)
class CastlePlan:
    """Squares touched by one castling move, and the right it consumes."""
    side: str                   # "O-O" or "O-O-O"
    king_from: chess.Square
    king_to: chess.Square
    rook_from: chess.Square
    rook_to: chess.Square
    right: str                  # castling-rights letter, e.g. "K" or "q"


def _placement(fen: str) -> chess.BaseBoard | None:
    board_field = split_fen(fen).board
    if not board_field:
        return None
    try:
        return chess.BaseBoard(board_field)
    except ValueError:
        return None


def _king_file_allowed(file: int, color: chess.Color, category: Category | None) -> bool:
    if file == 4 or category is Category.CHESS960:
        return True
    if file == 3:
        return category is Category.WILD_1 or (category is Category.WILD_0 and color == chess.BLACK)
    return False


def _pick_rook(board: chess.BaseBoard, candidates: list[chess.Square], color: chess.Color) -> chess.Square | None:
    # Best effort for back ranks with more than two rooks: a rook mirrored by
    # an enemy rook on the far back rank is most likely a real castling rook.
    mirrored = [
        sq for sq in candidates
        if board.piece_at(chess.square_mirror(sq)) == chess.Piece(chess.ROOK, not color)
    ]
    chosen = mirrored or candidates
    return chosen[0] if chosen else None


def castling_anchor(start_fen: str, color: chess.Color, category: str | Category | None = None) -> CastlingAnchor:
    """Locate the castle-able king and rooks of `color` in a starting position.

    Rooks count only on the a- and h-files, except under wild/fr where any
    back-rank rook may castle; there the rook nearest the king on each side
    wins unless another is mirrored by an opposing rook. The king counts on
    the e-file, on any file under wild/fr, and on the d-file for wild/1 and
    for Black in wild/0.
    """
    category = parse_category(category)
    board = _placement(start_fen)
    if board is None:
        return CastlingAnchor()

    rank = 0 if color == chess.WHITE else 7
    king = None
    king_seen = False
    before: list[chess.Square] = []
    after: list[chess.Square] = []
    for file in range(8):
        square = chess.square(file, rank)
        piece = board.piece_at(square)
        if piece is None or piece.color != color:
            continue
        if piece.piece_type == chess.ROOK:
            (after if king_seen else before).append(square)
        elif piece.piece_type == chess.KING:
            king_seen = True
            if _king_file_allowed(file, color, category):
                king = square

    if category is Category.CHESS960:
        if not king_seen:
            rooks = before
            return CastlingAnchor(
                king=None,
                left_rook=rooks[0] if rooks else None,
                right_rook=rooks[-1] if len(rooks) > 1 else None,
            )
        return CastlingAnchor(
            king=king,
            left_rook=_pick_rook(board, list(reversed(before)), color),
            right_rook=_pick_rook(board, after, color),
        )

    rooks = before + after
    a_file, h_file = chess.square(0, rank), chess.square(7, rank)
    return CastlingAnchor(
        king=king,
        left_rook=a_file if a_file in rooks else None,
        right_rook=h_file if h_file in rooks else None,
    )


def castle_plan(anchor: CastlingAnchor, color: chess.Color, side: str,
                category: str | Category | None = None) -> CastlePlan | None:
    """Target squares for castling `side`, or None if the anchors can't castle there.

    A king anchored on the d-file (outside wild/fr) castles mirrored: O-O
    goes toward the a-side. The rights letter follows the rook used.
    """
    if anchor.king is None:
        return None
    category = parse_category(category)
    rank = chess.square_rank(anchor.king)
    mirrored = chess.square_file(anchor.king) == 3 and category is not Category.CHESS960
    toward_h = (side == KINGSIDE) != mirrored

    if toward_h:
        rook = anchor.right_rook
        king_file, rook_file, right = (6, 5, "K") if side == KINGSIDE else (5, 4, "K")
    else:
        rook = anchor.left_rook
        king_file, rook_file, right = (2, 3, "Q") if side == QUEENSIDE else (1, 2, "Q")
    if rook is None:
        return None
    if color == chess.BLACK:
        right = right.lower()
    return CastlePlan(
        side=side,
        king_from=anchor.king,
        king_to=chess.square(king_file, rank),
        rook_from=rook,
        rook_to=chess.square(rook_file, rank),
        right=right,
    )


def adjust_castling_rights(fen: str, start_fen: str, category: str | Category | None = None) -> str:
    """Drop castling rights whose anchored king or rook has left its starting square."""
    fields = split_fen(fen)
    board = _placement(fen)
    if board is None or fields.castling is None:
        return fen
    rights = fields.castling.replace("-", "")

    for color, king_rights, left, right in (
        (chess.WHITE, "KQ", "Q", "K"),
        (chess.BLACK, "kq", "q", "k"),
    ):
        anchor = castling_anchor(start_fen, color, category)
        if anchor.king is not None and board.piece_at(anchor.king) != chess.Piece(chess.KING, color):
            rights = "".join(r for r in rights if r not in king_rights)
        if anchor.left_rook is not None and board.piece_at(anchor.left_rook) != chess.Piece(chess.ROOK, color):
            rights = rights.replace(left, "")
        if anchor.right_rook is not None and board.piece_at(anchor.right_rook) != chess.Piece(chess.ROOK, color):
            rights = rights.replace(right, "")

    return with_castling(fen, rights)
