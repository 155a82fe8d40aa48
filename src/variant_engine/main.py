import logging
import random

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from variant_engine.categories import Category, UnsupportedCategoryError, require_supported
from variant_engine.chess960 import chess960_fen
from variant_engine.config import Settings
from variant_engine.destinations import destinations
from variant_engine.fen import parse_board
from variant_engine.interpreter import interpret
from variant_engine.validation import validate_fen

logger = logging.getLogger(__name__)

settings = Settings()
_rng = random.Random(settings.chess960_seed) if settings.chess960_seed is not None else None

app = FastAPI(title="Chess Variant Engine")


# --- Request/Response models ---

class ValidateRequest(BaseModel):
    fen: str
    category: str | None = None


class PositionRequest(BaseModel):
    fen: str
    start_fen: str | None = None
    category: str | None = None
    holdings: dict[str, int] | None = None


class MoveRequest(PositionRequest):
    move: str


class Chess960Request(BaseModel):
    idn: int | None = None


def _category(name: str | None) -> Category:
    try:
        return require_supported(name or settings.default_category)
    except UnsupportedCategoryError as e:
        logger.warning("%s", e)
        raise HTTPException(status_code=400, detail=str(e)) from e


def _require_position(fen: str) -> None:
    if parse_board(fen) is None:
        logger.warning("Invalid FEN: %s", fen)
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {fen}")


# --- Endpoints ---

@app.get("/api/health")
async def health():
    return {"status": "ok"}


@app.post("/api/position/validate")
async def position_validate(req: ValidateRequest):
    error = validate_fen(req.fen, _category(req.category))
    return {"valid": error is None, "error": error}


@app.post("/api/move")
async def move(req: MoveRequest):
    category = _category(req.category)
    _require_position(req.fen)
    result = interpret(req.fen, req.move, req.start_fen or req.fen, category, req.holdings)
    if result is None:
        logger.warning("Illegal move %s in %s (%s)", req.move, req.fen, category.value)
        raise HTTPException(status_code=422, detail=f"Illegal move: {req.move}")
    return result.to_dict()


@app.post("/api/destinations")
async def position_destinations(req: PositionRequest):
    category = _category(req.category)
    _require_position(req.fen)
    dests = destinations(req.fen, req.start_fen or req.fen, category, req.holdings)
    return {sq: sorted(targets) for sq, targets in sorted(dests.items())}


@app.post("/api/chess960")
async def chess960(req: Chess960Request | None = None):
    idn = req.idn if req else None
    return {"fen": chess960_fen(idn, rng=_rng)}
