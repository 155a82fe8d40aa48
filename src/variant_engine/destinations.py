"""Legal destination squares per origin square, under variant rules."""

from __future__ import annotations

import chess

from variant_engine.castling import KINGSIDE, QUEENSIDE
from variant_engine.categories import ORTHODOX, WILD, Category, parse_category
from variant_engine.fen import parse_board, split_fen
from variant_engine.holdings import Holdings
from variant_engine.interpreter import interpret, plan_castling, rules_board
from variant_engine.standard import legal_destinations


def destinations(
    fen: str,
    start_fen: str,
    category: str | Category,
    holdings: Holdings | None = None,
) -> dict[str, set[str]] | None:
    """Map each origin square to the squares its piece may legally move to.

    Castling is reported as a king move: to the king's target square, or
    under wild/fr to the castling rook's square. In losers, captures are
    compulsory, so when any exists only captures are listed. Drops are not
    included. Returns None for an unsupported category or malformed FEN.
    """
    cat = parse_category(category)
    board = parse_board(fen)
    if cat is None or board is None:
        return None
    if cat in ORTHODOX:
        return legal_destinations(board)

    castling = split_fen(fen).castling
    library = rules_board(fen, castling, cat)
    moves = [m for m in library.legal_moves if not library.is_castling(m)]
    if cat is Category.LOSERS:
        captures = [m for m in moves if library.is_capture(m)]
        if captures:
            return legal_destinations(library, captures)

    dests = legal_destinations(library, moves)
    for side in (KINGSIDE, QUEENSIDE):
        if cat in WILD:
            plan = plan_castling(board, castling, side, start_fen, cat)
            if plan is None:
                continue
            origin = chess.square_name(plan.king_from)
            target = plan.rook_from if cat is Category.CHESS960 else plan.king_to
            dests.setdefault(origin, set()).add(chess.square_name(target))
        else:
            result = interpret(fen, side, start_fen, cat, holdings)
            if result is not None:
                dests.setdefault(result.move.from_square, set()).add(result.move.to_square)
    return dests
