"""Chess960 starting positions from an identification number (0-959)."""

from __future__ import annotations

import random

# Queen, knights, rooks and king over the six files the bishops leave
# free, indexed by idn // 16. The king always stands between the rooks.
KING_TABLE = (
    "QNNRKR", "NQNRKR", "NNQRKR", "NNRQKR", "NNRKQR", "NNRKRQ",
    "QNRNKR", "NQRNKR", "NRQNKR", "NRNQKR", "NRNKQR", "NRNKRQ",
    "QNRKNR", "NQRKNR", "NRQKNR", "NRKQNR", "NRKNQR", "NRKNRQ",
    "QNRKRN", "NQRKRN", "NRQKRN", "NRKQRN", "NRKRQN", "NRKRNQ",
    "QRNNKR", "RQNNKR", "RNQNKR", "RNNQKR", "RNNKQR", "RNNKRQ",
    "QRNKNR", "RQNKNR", "RNQKNR", "RNKQNR", "RNKNQR", "RNKNRQ",
    "QRNKRN", "RQNKRN", "RNQKRN", "RNKQRN", "RNKRQN", "RNKRNQ",
    "QRKNNR", "RQKNNR", "RKQNNR", "RKNQNR", "RKNNQR", "RKNNRQ",
    "QRKNRN", "RQKNRN", "RKQNRN", "RKNQRN", "RKNRQN", "RKNRNQ",
    "QRKRNN", "RQKRNN", "RKQRNN", "RKRQNN", "RKRNQN", "RKRNNQ",
)

# Bishop files (one light, one dark square), indexed by idn % 16
BISHOP_TABLE = (
    (0, 1), (0, 3), (0, 5), (0, 7),
    (1, 2), (2, 3), (2, 5), (2, 7),
    (1, 4), (3, 4), (4, 5), (4, 7),
    (1, 6), (3, 6), (5, 6), (6, 7),
)

POSITION_COUNT = 960


def back_rank(idn: int) -> str:
    """White's back rank, a-file first, for a given position number."""
    pieces = iter(KING_TABLE[idn // 16])
    bishops = BISHOP_TABLE[idn % 16]
    return "".join("B" if f in bishops else next(pieces) for f in range(8))


def chess960_fen(idn: int | None = None, rng: random.Random | None = None) -> str:
    """Starting FEN for position `idn`; a random one if idn is missing or out of range."""
    if idn is None or not 0 <= idn < POSITION_COUNT:
        idn = (rng or random).randrange(POSITION_COUNT)
    white = back_rank(idn)
    return f"{white.lower()}/pppppppp/8/8/8/8/PPPPPPPP/{white} w KQkq - 0 1"
