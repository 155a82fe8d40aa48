"""Variant move interpreter.

Turns a proposed move into the resulting position and a canonical move
record, under the rules of the game's category. Orthodox categories go
straight to python-chess. Variant categories still lean on it for
ordinary moves, and add what it cannot do: castling from the anchors of
Chess960 and the wild starting positions, crazyhouse/bughouse drops, and
the drop variants' softened notion of checkmate.

Every function here is pure. A rejected move is None, never an exception.
"""

from __future__ import annotations

import logging
from dataclasses import replace

import chess

from variant_engine.attacks import adjacent_squares, is_attacked
from variant_engine.castling import (
    KINGSIDE,
    QUEENSIDE,
    CastlePlan,
    adjust_castling_rights,
    castle_plan,
    castling_anchor,
)
from variant_engine.categories import DROP_VARIANTS, ORTHODOX, WILD, Category, parse_category
from variant_engine.fen import join_fen, parse_board, split_fen, with_castling
from variant_engine.holdings import Holdings, held_count, held_pieces
from variant_engine.moves import (
    BoardMove,
    DropMove,
    Move,
    MoveFlag,
    MoveRecord,
    MoveResult,
    RemoveMove,
    parse_move_text,
)
from variant_engine.standard import make_move

logger = logging.getLogger(__name__)

_SIDE_RIGHTS = {chess.WHITE: "KQ", chess.BLACK: "kq"}


def interpret(
    fen: str,
    move: Move | str,
    start_fen: str,
    category: str | Category,
    holdings: Holdings | None = None,
) -> MoveResult | None:
    """Legalize `move` in position `fen`.

    `start_fen` is the game's starting position, used to locate castling
    anchors. `holdings` is consulted (never modified) for drops and for
    deciding whether a crazyhouse mate can be blocked. Returns None for
    an unsupported category, a malformed position, an illegal move, or a
    move that leaves the board unchanged.
    """
    cat = parse_category(category)
    if cat is None:
        logger.debug("Rejecting move in unsupported category %r", category)
        return None
    board = parse_board(fen)
    if board is None:
        logger.debug("Rejecting move in malformed position %r", fen)
        return None
    if isinstance(move, str):
        move = parse_move_text(move)
    if isinstance(move, RemoveMove):
        logger.debug("Removing %s is only valid when setting up a board", move.from_square)
        return None

    if cat in ORTHODOX:
        made = None if isinstance(move, DropMove) else make_move(board, move)
        if made is None:
            return None
        after_fen, record = made[0].fen(), made[1]
    else:
        fields = split_fen(fen)
        if isinstance(move, DropMove):
            made = _drop(board, fields.castling, move, cat, holdings)
        else:
            side = _castling_side(board, move, start_fen, cat)
            if side is not None:
                made = _castle(board, fields.castling, side, start_fen, cat)
            else:
                made = _standard(fen, board, fields.castling, move, cat)
        if made is None:
            logger.debug("Illegal move %r in %r (%s)", move, fen, cat.value)
            return None
        after_fen, record = made

        if cat in DROP_VARIANTS:
            after_fen = join_fen(replace(split_fen(after_fen), halfmove="0"))
            if record.san.endswith("#") and _mate_blockable(chess.Board(after_fen), cat, holdings):
                record.san = record.san[:-1] + "+"
        if cat in WILD:
            if not record.is_castle:
                after_fen = with_castling(after_fen, fields.castling)
            after_fen = adjust_castling_rights(after_fen, start_fen, cat)

    if split_fen(after_fen).board == board.board_fen():
        logger.debug("Move %r leaves the board unchanged", move)
        return None
    return MoveResult(fen=after_fen, move=record)


def plan_castling(
    board: chess.Board,
    castling: str | None,
    side: str,
    start_fen: str,
    category: str | Category,
) -> CastlePlan | None:
    """Check castling `side` for the side to move against its anchors.

    The mover must still hold the right, the anchored king and rook must be
    in place, nothing but the two castling pieces may stand on either
    piece's path, and no square the king crosses (ends included) may be
    attacked once both castling pieces have left their squares.
    """
    mover = board.turn
    plan = castle_plan(castling_anchor(start_fen, mover, category), mover, side, category)
    if plan is None or plan.right not in (castling or ""):
        return None
    if (board.piece_at(plan.king_from) != chess.Piece(chess.KING, mover)
            or board.piece_at(plan.rook_from) != chess.Piece(chess.ROOK, mover)):
        return None

    castling_pieces = (plan.king_from, plan.rook_from)
    for square in _span(plan.king_from, plan.king_to):
        if square not in castling_pieces and board.piece_at(square) is not None:
            return None
        if is_attacked(board, square, mover, vacate=(plan.rook_from,)):
            return None
    for square in _span(plan.rook_from, plan.rook_to):
        if square not in castling_pieces and board.piece_at(square) is not None:
            return None
    return plan


def rules_board(fen: str, castling: str | None, category: Category) -> chess.Board:
    """Board handed to python-chess for ordinary moves.

    In wild categories the opponent's castling rights are withheld: their
    king need not stand where the library expects, and the rights are
    restored from the anchors once the move is made.
    """
    if category not in WILD:
        return chess.Board(fen)
    opponent = _SIDE_RIGHTS[not chess.Board(fen).turn]
    kept = "".join(r for r in (castling or "") if r not in opponent)
    return chess.Board(with_castling(fen, kept))


def _span(a: chess.Square, b: chess.Square) -> list[chess.Square]:
    """Back-rank squares from a to b inclusive."""
    rank = chess.square_rank(a)
    lo, hi = sorted((chess.square_file(a), chess.square_file(b)))
    return [chess.square(f, rank) for f in range(lo, hi + 1)]


def _castling_side(board: chess.Board, move: BoardMove | str, start_fen: str, category: Category) -> str | None:
    """Which castling a move spells, if any, under wild castling rules.

    Outside the wild categories castling is ordinary and left to the
    library. Inside them a king moving from its anchor onto its own
    castling rook, or onto a castling target two or more files away,
    is castling.
    """
    if category not in WILD:
        return None
    if isinstance(move, str):
        return move if move in (KINGSIDE, QUEENSIDE) else None

    try:
        from_square = chess.parse_square(move.from_square)
        to_square = chess.parse_square(move.to_square)
    except ValueError:
        return None
    mover = board.turn
    if board.piece_at(from_square) != chess.Piece(chess.KING, mover):
        return None
    anchor = castling_anchor(start_fen, mover, category)
    if anchor.king != from_square:
        return None

    onto_rook = board.piece_at(to_square) == chess.Piece(chess.ROOK, mover)
    wide = (chess.square_rank(from_square) == chess.square_rank(to_square)
            and chess.square_distance(from_square, to_square) >= 2)
    if not onto_rook and not wide:
        return None
    for side in (KINGSIDE, QUEENSIDE):
        plan = castle_plan(anchor, mover, side, category)
        if plan is None:
            continue
        if (onto_rook and plan.rook_from == to_square) or (not onto_rook and plan.king_to == to_square):
            return side
    return None


def _check_suffix(board: chess.Board) -> str:
    if board.is_checkmate():
        return "#"
    if board.is_check():
        return "+"
    return ""


def _advance(board: chess.Board, halfmove_reset: bool) -> None:
    mover = board.turn
    board.turn = not mover
    board.ep_square = None
    board.halfmove_clock = 0 if halfmove_reset else board.halfmove_clock + 1
    if mover == chess.BLACK:
        board.fullmove_number += 1


def _castle(board: chess.Board, castling: str | None, side: str, start_fen: str,
            category: Category) -> tuple[str, MoveRecord] | None:
    plan = plan_castling(board, castling, side, start_fen, category)
    if plan is None:
        return None
    mover = board.turn

    after = board.copy(stack=False)
    after.remove_piece_at(plan.king_from)
    after.remove_piece_at(plan.rook_from)
    after.set_piece_at(plan.king_to, chess.Piece(chess.KING, mover))
    after.set_piece_at(plan.rook_to, chess.Piece(chess.ROOK, mover))
    _advance(after, halfmove_reset=False)

    # Only a king that actually moved forfeits the other side's right too;
    # a rook-only castle may castle again (FICS behaviour).
    rights = castling.replace(plan.right, "")
    if plan.king_from != plan.king_to:
        rights = "".join(r for r in rights if r not in _SIDE_RIGHTS[mover])

    flag = MoveFlag.KINGSIDE_CASTLE if side == KINGSIDE else MoveFlag.QUEENSIDE_CASTLE
    record = MoveRecord(
        san=side + _check_suffix(after),
        from_square=chess.square_name(plan.king_from),
        to_square=chess.square_name(plan.king_to),
        piece="k",
        flags=frozenset({flag}),
    )
    return with_castling(after.fen(), rights), record


def _drop(board: chess.Board, castling: str | None, move: DropMove, category: Category,
          holdings: Holdings | None) -> tuple[str, MoveRecord] | None:
    if category not in DROP_VARIANTS:
        return None
    try:
        to_square = chess.parse_square(move.to_square)
        piece_type = chess.PIECE_SYMBOLS.index(move.piece.lower())
    except ValueError:
        return None
    if piece_type == chess.KING or board.piece_at(to_square) is not None:
        return None
    if piece_type == chess.PAWN and chess.square_rank(to_square) in (0, 7):
        return None

    mover = board.turn
    piece = chess.Piece(piece_type, mover)
    if holdings is not None and held_count(holdings, piece.symbol()) < 1:
        return None

    after = board.copy(stack=False)
    after.set_piece_at(to_square, piece)
    if after.is_check():
        # the drop leaves the mover's own king in check
        return None
    _advance(after, halfmove_reset=True)

    name = chess.square_name(to_square)
    record = MoveRecord(
        san=f"{piece.symbol().upper()}@{name}{_check_suffix(after)}",
        to_square=name,
        piece=chess.piece_symbol(piece_type),
        flags=frozenset({MoveFlag.DROP}),
    )
    return with_castling(after.fen(), castling or "-"), record


def _standard(fen: str, board: chess.Board, castling: str | None, move: BoardMove | str,
              category: Category) -> tuple[str, MoveRecord] | None:
    library = rules_board(fen, castling, category)
    made = make_move(library, move)
    if made is None:
        return None
    after, record = made
    if category in WILD and record.is_castle:
        # castling in wild categories only ever happens from the anchors
        return None
    if (category is Category.LOSERS and MoveFlag.CAPTURE not in record.flags
            and any(library.is_capture(m) for m in library.legal_moves)):
        return None
    return after.fen(), record


def _mate_blockable(board: chess.Board, category: Category, holdings: Holdings | None) -> bool:
    """Could the checkmated side interpose a dropped piece next to its king?

    A friendly pawn is tried on each empty square around the king. In
    bughouse any such square is enough, since the partner may still send a
    piece; in crazyhouse the piece must be in hand already, and a pawn
    cannot go to the first or last rank.
    """
    defender = board.turn
    king = board.king(defender)
    if king is None:
        return False
    for square in adjacent_squares(king):
        if board.piece_at(square) is not None:
            continue
        probe = board.copy(stack=False)
        probe.set_piece_at(square, chess.Piece(chess.PAWN, defender))
        if probe.is_checkmate():
            continue
        if category is Category.BUGHOUSE:
            return True
        back_rank = chess.square_rank(square) in (0, 7)
        if any(s.upper() != "P" or not back_rank for s in held_pieces(holdings, defender)):
            return True
    return False
