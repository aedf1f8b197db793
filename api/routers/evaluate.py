"""
Router: POST /evaluate
Błędy wyrażenia (parse, zmienna poza zakresem, nieznana funkcja) są częścią
odpowiedzi 200 — to wynik ewaluacji, nie błąd transportu.
"""
import math
from typing import Optional

from fastapi import APIRouter, Depends

from api.dependencies import get_engine
from api.schemas import EvaluateRequest, EvaluateResponse
from engine import Mathex

router = APIRouter(prefix="/evaluate", tags=["evaluate"])


def _special(value: Optional[float]) -> Optional[str]:
    # JSON nie ma NaN/inf
    if value is None or math.isfinite(value):
        return None
    if math.isnan(value):
        return "nan"
    return "inf" if value > 0 else "-inf"


@router.post("", response_model=EvaluateResponse)
def evaluate(body: EvaluateRequest, engine: Mathex = Depends(get_engine)):
    result = engine.check(body.expression, body.arguments)
    special = _special(result.value)
    return EvaluateResponse(
        expression=result.expression,
        result=result.truth,
        value=result.value if special is None else None,
        special=special,
        code=result.code(),
        error=result.error,
    )
