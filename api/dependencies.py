"""
dependencies.py — FastAPI Dependency Injection.
Każda zależność zwraca odpowiedni obiekt przez Request.app.state.
"""
from __future__ import annotations

from fastapi import Request

from adapters.function_registry.math_registry import MathFunctionRegistry
from engine import Mathex


def get_engine(request: Request) -> Mathex:
    return request.app.state.engine


def get_function_registry(request: Request) -> MathFunctionRegistry:
    return request.app.state.function_registry
