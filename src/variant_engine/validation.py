"""Structural and chess-specific FEN validation."""

import chess

from variant_engine.castling import castling_anchor
from variant_engine.categories import Category
from variant_engine.fen import parse_board, split_fen


def validate_fen(fen: str, category: str | Category | None = None) -> str | None:
    """Check a position for validity.

    Returns None if the position is usable, otherwise a message naming the
    first rule it breaks. Castling rights are checked against the position
    itself treated as a starting position, so rights on a king or rook that
    could never castle under `category` are rejected.
    """
    board = parse_board(fen)
    if board is None:
        return "Invalid FEN format."

    fields = split_fen(fen)
    waiting = board.copy(stack=False)
    waiting.turn = not board.turn
    if waiting.is_check():
        if board.turn == chess.WHITE:
            return "White's turn but black is in check."
        return "Black's turn but white is in check."

    white_kings = len(board.pieces(chess.KING, chess.WHITE))
    black_kings = len(board.pieces(chess.KING, chess.BLACK))
    if not white_kings or not black_kings:
        return "Missing king."
    if white_kings > 1 or black_kings > 1:
        return "Too many kings."

    if board.pawns & chess.BB_BACKRANKS:
        return "Pawn on 1st or 8th rank."

    rights = fields.castling
    for color, name, kingside, queenside in (
        (chess.WHITE, "White", "K", "Q"),
        (chess.BLACK, "Black", "k", "q"),
    ):
        if kingside not in rights and queenside not in rights:
            continue
        anchor = castling_anchor(fen, color, category)
        if (anchor.king is None
                or (anchor.left_rook is None and queenside in rights)
                or (anchor.right_rook is None and kingside in rights)):
            return f"{name}'s king or rooks aren't in valid locations for castling."

    return None
