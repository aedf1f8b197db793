"""
schemas.py — Request/Response modele FastAPI.
Oddzielone od contracts.py żeby API mogło ewoluować niezależnie.
"""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from contracts import ErrorInfo


# ─────────────────────────── /evaluate ───────────────────────────

class EvaluateRequest(BaseModel):
    expression: str = Field(min_length=1)
    arguments: list[float] = Field(default_factory=list)  # A, B, C, ...


class EvaluateResponse(BaseModel):
    expression: str
    result: Optional[bool] = None   # None gdy wystąpił błąd
    value: Optional[float] = None   # tylko wartości skończone
    special: Optional[Literal["nan", "inf", "-inf"]] = None
    code: int                       # 1 / 0 / ujemny kod błędu
    error: Optional[ErrorInfo] = None


# ─────────────────────────── /functions ──────────────────────────

class FunctionsResponse(BaseModel):
    single: list[str]
    double: list[str]


# ─────────────────────────── /health ─────────────────────────────

class HealthResponse(BaseModel):
    status: str
    version: str
