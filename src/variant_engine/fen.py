"""FEN codec: split/join the six FEN fields and derive move counters.

The raw castling field is read here rather than from chess.Board because
python-chess drops rights whose king/rook are not on orthodox squares,
which variant starting positions routinely have.
"""

from __future__ import annotations

import re
from dataclasses import astuple, dataclass, replace

import chess

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class FenFields:
    board: str | None
    color: str | None
    castling: str | None
    en_passant: str | None
    halfmove: str | None
    fullmove: str | None

    @property
    def complete(self) -> bool:
        """True when all six fields were present."""
        return all(f is not None for f in astuple(self))


def split_fen(fen: str) -> FenFields:
    """Split a FEN on whitespace. Missing trailing fields come back as None."""
    words = _WHITESPACE.split(fen.strip())
    words += [None] * (6 - len(words))
    return FenFields(*words[:6])


def join_fen(fields: FenFields) -> str:
    return " ".join(str(f) for f in astuple(fields) if f is not None)


def ply_count(fen: str) -> int | None:
    """Ply of the move about to be played: 1 for White's first move."""
    fields = split_fen(fen)
    if not fields.complete:
        return None
    return int(fields.fullmove) * 2 - (1 if fields.color == "w" else 0)


def move_number(fen: str) -> int | None:
    fields = split_fen(fen)
    return int(fields.fullmove) if fields.complete else None


def turn_color(fen: str) -> str | None:
    fields = split_fen(fen)
    return fields.color if fields.complete else None


def swap_color(color: str) -> str:
    return "b" if color == "w" else "w"


def color_of(letter: str) -> chess.Color:
    return chess.WHITE if letter == "w" else chess.BLACK


def color_letter(color: chess.Color) -> str:
    return "w" if color == chess.WHITE else "b"


def parse_board(fen: str) -> chess.Board | None:
    """Load a six-field FEN into a standard-rules board, or None if malformed."""
    if not split_fen(fen).complete:
        return None
    try:
        return chess.Board(fen)
    except ValueError:
        return None


def with_castling(fen: str, castling: str) -> str:
    return join_fen(replace(split_fen(fen), castling=castling or "-"))


def with_color(fen: str, color: str) -> str:
    return join_fen(replace(split_fen(fen), color=color))
