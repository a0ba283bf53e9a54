"""
schemas.py — Modele request/response dla FastAPI.
Oddzielone od contracts.py, żeby API mogło ewoluować niezależnie.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from contracts import ExprAST, Point


# ─────────────────────────── /parse ──────────────────────────────

class ParseRequest(BaseModel):
    text: str = Field(..., max_length=10_000)


class ParseResponse(BaseModel):
    text: str
    expr: ExprAST


# ─────────────────────────── /evaluate ───────────────────────────

class EvaluateRequest(BaseModel):
    text: str = Field(..., max_length=10_000)
    vars: dict[str, float] = Field(default_factory=dict)


class EvaluateResponse(BaseModel):
    value: Optional[float]   # None, gdy wynik to NaN albo ±inf
    finite: bool


# ─────────────────────────── /sample ─────────────────────────────

class SampleRequest(BaseModel):
    text: str = Field(..., max_length=10_000)
    start: float = 0.0
    end: float = 10.0
    resolution: int = Field(default=100, ge=0)


class SampleResponse(BaseModel):
    points: list[Point]
    count: int
    y_bounds: Optional[tuple[float, float]] = None


# ─────────────────────────── błędy ───────────────────────────────

class ErrorResponse(BaseModel):
    error: str    # ParseError | VariableNotFoundError | WrongNumberOfArgsError | RangeError | ResolutionLimitError
    detail: str


# ─────────────────────────── /health ─────────────────────────────

class HealthResponse(BaseModel):
    status: str
    version: str
