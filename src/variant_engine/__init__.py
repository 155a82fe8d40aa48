"""Move and position engine for chess variants (crazyhouse, bughouse, losers, Chess960, wild)."""

from variant_engine.castling import CastlingAnchor, adjust_castling_rights, castling_anchor
from variant_engine.categories import Category, UnsupportedCategoryError
from variant_engine.chess960 import chess960_fen
from variant_engine.destinations import destinations
from variant_engine.fen import join_fen, move_number, ply_count, split_fen, turn_color
from variant_engine.holdings import update_holdings
from variant_engine.interpreter import interpret
from variant_engine.moves import (
    BoardMove,
    DropMove,
    MoveFlag,
    MoveRecord,
    MoveResult,
    RemoveMove,
    parse_move_text,
    to_coordinate_string,
)
from variant_engine.validation import validate_fen

__all__ = [
    "BoardMove",
    "CastlingAnchor",
    "Category",
    "DropMove",
    "MoveFlag",
    "MoveRecord",
    "MoveResult",
    "RemoveMove",
    "UnsupportedCategoryError",
    "adjust_castling_rights",
    "castling_anchor",
    "chess960_fen",
    "destinations",
    "interpret",
    "join_fen",
    "move_number",
    "parse_move_text",
    "ply_count",
    "split_fen",
    "to_coordinate_string",
    "turn_color",
    "update_holdings",
    "validate_fen",
]
