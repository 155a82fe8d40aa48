"""Plain chess moves, delegated to python-chess."""

from __future__ import annotations

from collections.abc import Iterable

import chess

from variant_engine.moves import BoardMove, MoveFlag, MoveRecord


def library_move(board: chess.Board, move: BoardMove) -> chess.Move | None:
    """Convert a coordinate move; unpromoted pawn moves to the last rank promote to a queen."""
    try:
        from_square = chess.parse_square(move.from_square)
        to_square = chess.parse_square(move.to_square)
        promotion = chess.PIECE_SYMBOLS.index(move.promotion.lower()) if move.promotion else None
    except ValueError:
        return None

    piece = board.piece_at(from_square)
    if (promotion is None and piece is not None and piece.piece_type == chess.PAWN
            and chess.square_rank(to_square) in (0, 7)):
        promotion = chess.QUEEN
    return chess.Move(from_square, to_square, promotion=promotion)


def record_for(board: chess.Board, move: chess.Move) -> MoveRecord:
    """Describe a legal move in canonical form. `board` is the position before the move."""
    piece = board.piece_at(move.from_square)
    flags: set[MoveFlag] = set()
    captured = None

    if board.is_en_passant(move):
        flags |= {MoveFlag.CAPTURE, MoveFlag.EN_PASSANT}
        captured = chess.Piece(chess.PAWN, not board.turn).symbol()
    elif board.is_capture(move):
        flags.add(MoveFlag.CAPTURE)
        captured = board.piece_at(move.to_square).symbol()
    if board.is_kingside_castling(move):
        flags.add(MoveFlag.KINGSIDE_CASTLE)
    elif board.is_queenside_castling(move):
        flags.add(MoveFlag.QUEENSIDE_CASTLE)
    if move.promotion:
        flags.add(MoveFlag.PROMOTION)
    if piece.piece_type == chess.PAWN and chess.square_distance(move.from_square, move.to_square) == 2:
        flags.add(MoveFlag.BIG_PAWN)

    return MoveRecord(
        san=board.san(move),
        from_square=chess.square_name(move.from_square),
        to_square=chess.square_name(move.to_square),
        piece=chess.piece_symbol(piece.piece_type),
        promotion=chess.piece_symbol(move.promotion) if move.promotion else None,
        captured=captured,
        flags=frozenset(flags),
    )


def make_move(board: chess.Board, move: BoardMove | str) -> tuple[chess.Board, MoveRecord] | None:
    """Play a coordinate or SAN move under standard rules.

    Returns the new board and the move record, or None if the move is not
    legal. The input board is left untouched.
    """
    if isinstance(move, str):
        try:
            lib_move = board.parse_san(move)
        except ValueError:
            return None
        if not lib_move:
            # "--" parses to a null move, which leaves the board unchanged
            return None
    else:
        lib_move = library_move(board, move)
        if lib_move is None or not board.is_legal(lib_move):
            return None

    record = record_for(board, lib_move)
    after = board.copy(stack=False)
    after.push(lib_move)
    return after, record


def legal_destinations(board: chess.Board, moves: Iterable[chess.Move] | None = None) -> dict[str, set[str]]:
    """Group moves (default: all legal moves) by origin square."""
    dests: dict[str, set[str]] = {}
    for move in board.legal_moves if moves is None else moves:
        dests.setdefault(chess.square_name(move.from_square), set()).add(
            chess.square_name(move.to_square)
        )
    return dests
