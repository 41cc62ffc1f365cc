# keypad_tool_api.py
# Optional FastAPI wrapper for the tool functions.
# Run with: uvicorn apps.api.keypad_tool_api:app --reload

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from solver.keypad_core import KeypadError, build_keypads
from solver.keypad_tools import code_complexity, decode, encode_minimal, solve_tool, validate_codes

app = FastAPI(title="Keypad Chain Tool API")

KEYPADS = build_keypads()


class CodesModel(BaseModel):
    codes: list[str]


class SolveRequest(BaseModel):
    codes: list[str]
    depth: int = 2
    strategy: str = "optimal"
    workers: int = 1


class CodeRequest(BaseModel):
    code: str
    depth: int = 2
    strategy: str = "optimal"


class DecodeRequest(BaseModel):
    commands: str
    depth: int = 2


def _unprocessable(e: Exception) -> HTTPException:
    return HTTPException(status_code=422, detail=str(e))


@app.post("/validate_codes")
def api_validate(payload: CodesModel):
    return validate_codes(payload.codes)


@app.post("/solve")
def api_solve(req: SolveRequest):
    try:
        return solve_tool(req.codes, req.depth, KEYPADS, req.strategy, max(1, req.workers))
    except ValueError as e:
        raise _unprocessable(e)


@app.post("/code_length")
def api_code_length(req: CodeRequest):
    try:
        return code_complexity(req.code, req.depth, KEYPADS, req.strategy)
    except ValueError as e:
        raise _unprocessable(e)


@app.post("/encode")
def api_encode(req: CodeRequest):
    try:
        seq = encode_minimal(req.code, req.depth, KEYPADS, req.strategy)
    except ValueError as e:
        raise _unprocessable(e)
    return {"code": req.code, "depth": req.depth, "commands": seq, "length": len(seq)}


@app.post("/decode")
def api_decode(req: DecodeRequest):
    try:
        return {"commands": req.commands, "depth": req.depth, "code": decode(req.commands, req.depth, KEYPADS)}
    except KeypadError as e:
        raise _unprocessable(e)
