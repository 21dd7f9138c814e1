# sudoku_tool_api.py
# Optional FastAPI wrapper for the engine functions.
# Run with: uvicorn apps.api.sudoku_tool_api:app --reload

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from sudoku_engine import (
    create_game_board,
    difficulty_label,
    generate_puzzle,
    get_hint,
    is_solved,
    solve_puzzle,
    update_conflicts,
)
from sudoku_engine.board import board_from_dicts, board_to_dicts, sanity_check

app = FastAPI(title="Sudoku Engine API")


class GridModel(BaseModel):
    grid: list[list[int]]


class CellModel(BaseModel):
    value: int = 0
    is_fixed: bool = False
    notes: list[int] = Field(default_factory=list)
    is_conflict: bool = False


class BoardModel(BaseModel):
    board: list[list[CellModel]]


class GenerateRequest(BaseModel):
    difficulty: str = "medium"
    seed: int | None = None


class SanityRequest(BaseModel):
    original: list[list[int]]
    current: list[list[int]]


def _board(req: BoardModel):
    try:
        return board_from_dicts([[c.model_dump() for c in row] for row in req.board])
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/generate")
def api_generate(req: GenerateRequest):
    try:
        result = generate_puzzle(req.difficulty, seed=req.seed)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    payload = result.to_dict()
    payload["label"] = difficulty_label(result.difficulty_score)
    return payload


@app.post("/game_board")
def api_game_board(payload: GridModel):
    try:
        return {"board": board_to_dicts(create_game_board(payload.grid))}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/conflicts")
def api_conflicts(req: BoardModel):
    return {"board": board_to_dicts(update_conflicts(_board(req)))}


@app.post("/is_solved")
def api_is_solved(req: BoardModel):
    return {"solved": is_solved(_board(req))}


@app.post("/hint")
def api_hint(req: BoardModel):
    return {"hint": get_hint(_board(req))}


@app.post("/solve")
def api_solve(payload: GridModel):
    try:
        solution = solve_puzzle(payload.grid)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"solved": solution is not None, "solution": solution}


@app.post("/sanity_check")
def api_sanity(req: SanityRequest):
    try:
        return sanity_check(req.original, req.current)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
