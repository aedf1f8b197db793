"""
Router: GET /functions
Lista funkcji wbudowanych według arności.
"""
from fastapi import APIRouter, Depends

from adapters.function_registry.math_registry import MathFunctionRegistry
from api.dependencies import get_function_registry
from api.schemas import FunctionsResponse

router = APIRouter(prefix="/functions", tags=["functions"])


@router.get("", response_model=FunctionsResponse)
def list_functions(registry: MathFunctionRegistry = Depends(get_function_registry)):
    return FunctionsResponse(single=registry.names(1), double=registry.names(2))
