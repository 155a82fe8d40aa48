"""Move descriptors: what callers propose, and what the engine hands back.

Proposed moves are one of three shapes (a board move, a crazyhouse drop,
or a setup-mode removal) or a SAN string. The engine answers with a
MoveRecord in canonical form.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Union

_COORDINATE_RE = re.compile(r"^([a-h][1-8])-?([a-h][1-8])(?:=?([qrbnkQRBNK]))?$")
_DROP_RE = re.compile(r"^([pnbrqkPNBRQK])@([a-h][1-8])$")
_REMOVE_RE = re.compile(r"^x([a-h][1-8])$")
_CASTLE_RE = re.compile(r"^([O0])-\1(-\1)?$")


@dataclass(frozen=True)
class BoardMove:
    from_square: str
    to_square: str
    promotion: str | None = None    # piece letter, any case


@dataclass(frozen=True)
class DropMove:
    piece: str                      # piece letter; color comes from the side to move
    to_square: str


@dataclass(frozen=True)
class RemoveMove:
    """Take a piece off the board (setup mode only, never legal in play)."""
    from_square: str


Move = Union[BoardMove, DropMove, RemoveMove]


class MoveFlag(enum.Enum):
    CAPTURE = "capture"
    EN_PASSANT = "en_passant"
    BIG_PAWN = "big_pawn"
    PROMOTION = "promotion"
    KINGSIDE_CASTLE = "kingside_castle"
    QUEENSIDE_CASTLE = "queenside_castle"
    DROP = "drop"


@dataclass
class MoveRecord:
    """A legal move in canonical form."""
    san: str
    from_square: str | None = None
    to_square: str | None = None
    piece: str | None = None        # lowercase piece type, e.g. "n"
    promotion: str | None = None
    captured: str | None = None     # symbol of the captured piece, colored
    flags: frozenset[MoveFlag] = field(default_factory=frozenset)

    @property
    def is_castle(self) -> bool:
        return bool(self.flags & {MoveFlag.KINGSIDE_CASTLE, MoveFlag.QUEENSIDE_CASTLE})

    @property
    def is_drop(self) -> bool:
        return MoveFlag.DROP in self.flags

    def to_dict(self) -> dict:
        return {
            "san": self.san,
            "from": self.from_square,
            "to": self.to_square,
            "piece": self.piece,
            "promotion": self.promotion,
            "captured": self.captured,
            "flags": sorted(f.value for f in self.flags),
        }


@dataclass
class MoveResult:
    fen: str
    move: MoveRecord

    def to_dict(self) -> dict:
        return {"fen": self.fen, "move": self.move.to_dict()}


def parse_move_text(text: str) -> Move | str:
    """Turn move text into a move descriptor.

    Coordinate moves (`e2-e4`, `e2e4`, `e7-e8=q`), drops (`N@f3`) and
    removals (`xa1`) become descriptors. Castling is normalized to
    `O-O`/`O-O-O`. Anything else is returned as SAN with annotations
    stripped, for the rules library to resolve.
    """
    text = text.strip().rstrip("+#!?")
    m = _COORDINATE_RE.match(text)
    if m:
        return BoardMove(m.group(1), m.group(2), m.group(3).lower() if m.group(3) else None)
    m = _DROP_RE.match(text)
    if m:
        return DropMove(m.group(1), m.group(2))
    m = _REMOVE_RE.match(text)
    if m:
        return RemoveMove(m.group(1))
    m = _CASTLE_RE.match(text)
    if m:
        return "O-O-O" if m.group(2) else "O-O"
    return text


def to_coordinate_string(move: MoveRecord | Move) -> str:
    """Coordinate text for sending a move to a server: `e2-e4`, `N@f3`, `xa1`, `O-O`."""
    if isinstance(move, MoveRecord):
        if move.san.startswith("O-O"):
            return move.san
        if move.from_square is None:
            return f"{move.piece.upper()}@{move.to_square}"
        move = BoardMove(move.from_square, move.to_square, move.promotion)

    if isinstance(move, DropMove):
        return f"{move.piece.upper()}@{move.to_square}"
    if isinstance(move, RemoveMove):
        return f"x{move.from_square}"
    promotion = f"={move.promotion}" if move.promotion else ""
    return f"{move.from_square}-{move.to_square}{promotion}"


def in_check(san: str) -> bool:
    return san.endswith("+")
