"""Crazyhouse/bughouse holdings: pieces in hand, keyed by colored piece symbol."""

from __future__ import annotations

from collections.abc import Mapping

import chess

from variant_engine.categories import Category, parse_category
from variant_engine.fen import color_of, split_fen
from variant_engine.moves import MoveFlag, MoveRecord

Holdings = Mapping[str, int]

DROPPABLE = "PNBRQ"


def held_count(holdings: Holdings | None, symbol: str) -> int:
    if not holdings:
        return 0
    return max(holdings.get(symbol, 0), 0)


def held_pieces(holdings: Holdings | None, color: chess.Color) -> list[str]:
    """Symbols of the pieces `color` can drop right now."""
    symbols = DROPPABLE if color == chess.WHITE else DROPPABLE.lower()
    return [s for s in symbols if held_count(holdings, s) > 0]


def update_holdings(fen_before: str, record: MoveRecord, holdings: Holdings | None,
                    category: str | Category) -> dict[str, int]:
    """Holdings after `record` was played from `fen_before`.

    In crazyhouse a captured piece changes sides and joins the capturer's
    hand. Bughouse captures go to the partner's board, so only drops count
    here. Promoted pieces are not tracked and return to hand as captured.
    """
    updated = dict(holdings or {})
    category = parse_category(category)
    if category not in (Category.CRAZYHOUSE, Category.BUGHOUSE):
        return updated

    mover = color_of(split_fen(fen_before).color)
    if record.is_drop:
        symbol = record.piece.upper() if mover == chess.WHITE else record.piece.lower()
        updated[symbol] = max(updated.get(symbol, 0) - 1, 0)
    elif (category is Category.CRAZYHOUSE and MoveFlag.CAPTURE in record.flags
            and record.captured):
        symbol = record.captured.swapcase()
        updated[symbol] = updated.get(symbol, 0) + 1
    return updated
