"""Square-attack queries used by castling legality and mate-block detection."""

from __future__ import annotations

from collections.abc import Iterable

import chess


def is_attacked(board: chess.Board, square: chess.Square, color: chess.Color,
                vacate: Iterable[chess.Square] = ()) -> bool:
    """Would a king of `color` standing on `square` be in check?

    The king's current square is vacated first, so a king stepping along a
    line it currently shields is still seen as attacked. Squares in
    `vacate` are emptied as well; castling passes its rook here. Whatever
    occupies `square` is ignored.
    """
    probe = board.copy(stack=False)
    for king in probe.pieces(chess.KING, color):
        probe.remove_piece_at(king)
    for lifted in vacate:
        probe.remove_piece_at(lifted)
    return probe.is_attacked_by(not color, square)


def adjacent_squares(square: chess.Square) -> list[chess.Square]:
    """Squares a king on `square` could step to, ignoring occupancy."""
    return list(chess.SquareSet(chess.BB_KING_ATTACKS[square]))
