"""
Adapter: MathFunctionRegistry
Implementuje port FunctionRegistry — niemutowalne tablice funkcji z modułu math.

Funkcje są totalne na dziedzinie IEEE-754 double:
  - naruszenie dziedziny (ValueError z math) → NaN
  - przepełnienie (OverflowError) → ±inf
  - bieguny jak w C: log(0) = -inf, atanh(±1) = ±inf, pow(0, -1) = inf
max/min propagują NaN.
"""
from __future__ import annotations

import functools
import math
from types import MappingProxyType
from typing import Callable, Mapping

from contracts import UnknownFunction


def _nan_on_domain_error(fn: Callable[..., float]) -> Callable[..., float]:
    @functools.wraps(fn)
    def wrapper(*args: float) -> float:
        try:
            return fn(*args)
        except ValueError:
            return math.nan
    return wrapper


def _is_odd_integer(y: float) -> bool:
    return math.isfinite(y) and y == int(y) and int(y) % 2 == 1


def _log(x: float) -> float:
    if x == 0:
        return -math.inf
    return _nan_on_domain_error(math.log)(x)


def _atanh(x: float) -> float:
    if abs(x) == 1:
        return math.copysign(math.inf, x)
    return _nan_on_domain_error(math.atanh)(x)


def _exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def _sinh(x: float) -> float:
    try:
        return math.sinh(x)
    except OverflowError:
        return math.copysign(math.inf, x)


def _cosh(x: float) -> float:
    try:
        return math.cosh(x)
    except OverflowError:
        return math.inf


def _ceil(x: float) -> float:
    # math.ceil zwraca int i nie przyjmuje inf/NaN
    if not math.isfinite(x):
        return x
    return float(math.ceil(x))


def _floor(x: float) -> float:
    if not math.isfinite(x):
        return x
    return float(math.floor(x))


def _pow(x: float, y: float) -> float:
    try:
        return math.pow(x, y)
    except OverflowError:
        if x < 0 and _is_odd_integer(y):
            return -math.inf
        return math.inf
    except ValueError:
        if x == 0:
            # 0 do potęgi ujemnej
            if _is_odd_integer(y):
                return math.copysign(math.inf, x)
            return math.inf
        return math.nan


def _max(a: float, b: float) -> float:
    if math.isnan(a) or math.isnan(b):
        return math.nan
    return max(a, b)


def _min(a: float, b: float) -> float:
    if math.isnan(a) or math.isnan(b):
        return math.nan
    return min(a, b)


_SINGLE: dict[str, Callable[[float], float]] = {
    "abs":   math.fabs,
    "log":   _log,
    "exp":   _exp,
    "sin":   _nan_on_domain_error(math.sin),
    "cos":   _nan_on_domain_error(math.cos),
    "tan":   _nan_on_domain_error(math.tan),
    "asin":  _nan_on_domain_error(math.asin),
    "acos":  _nan_on_domain_error(math.acos),
    "sinh":  _sinh,
    "cosh":  _cosh,
    "tanh":  math.tanh,
    "asinh": math.asinh,
    "acosh": _nan_on_domain_error(math.acosh),
    "atanh": _atanh,
    "ceil":  _ceil,
    "floor": _floor,
    "deg":   math.degrees,
    "rad":   math.radians,
}

_DOUBLE: dict[str, Callable[[float, float], float]] = {
    "max":   _max,
    "min":   _min,
    "pow":   _pow,
    "atan2": math.atan2,
}

# (nazwa, arność) → funkcja; budowane raz przy imporcie, tylko do odczytu
FUNCTIONS: Mapping[tuple[str, int], Callable[..., float]] = MappingProxyType({
    **{(name, 1): fn for name, fn in _SINGLE.items()},
    **{(name, 2): fn for name, fn in _DOUBLE.items()},
})


class MathFunctionRegistry:
    """Rejestr funkcji wbudowanych, domyślnie współdzielący FUNCTIONS."""

    def __init__(self, table: Mapping[tuple[str, int], Callable[..., float]] = FUNCTIONS) -> None:
        self._table = table

    def lookup(self, name: str, arity: int) -> Callable[..., float]:
        try:
            return self._table[(name, arity)]
        except KeyError:
            raise UnknownFunction(name, arity) from None

    def names(self, arity: int) -> list[str]:
        return sorted(name for name, a in self._table if a == arity)
