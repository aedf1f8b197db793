"""
Adapter: PrecedenceEvaluator
Implementuje port Evaluator — rekurencyjne przejście ExprAST na liczbach double.

Łańcuch operatorów jednego poziomu składany jest od lewej: najpierw first,
potem kolejno (op, operand). Operandy && i || są zawsze liczone (bez
short-circuit), więc błąd po prawej stronie nie jest maskowany.

Konwersja double → int64 dla ~ & ^ |:
  - obcięcie w stronę zera (jak rzutowanie w C)
  - NaN → 0
  - poza zakresem (także ±inf) → nasycenie do INT64_MIN / INT64_MAX
Wynik całkowity wraca jako double.

NaN i nieskończoności nie są błędami — przepływają zgodnie z IEEE-754.
"""
from __future__ import annotations

import math
from typing import Callable, Sequence

from adapters.function_registry.math_registry import MathFunctionRegistry
from adapters.variable_codec.nibble_codec import NibbleVariableCodec
from contracts import (
    ExprAST,
    FunctionCallNode,
    GroupNode,
    NumberNode,
    OperatorChainNode,
    UnaryOpNode,
    UnknownNode,
    VariableNode,
)
from ports.function_registry import FunctionRegistry
from ports.variable_codec import VariableCodec

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def to_int64(x: float) -> int:
    """Obcina double do int64 (w stronę zera, z nasyceniem, NaN → 0)."""
    if math.isnan(x):
        return 0
    if x >= 2.0 ** 63:
        return INT64_MAX
    if x < -(2.0 ** 63):
        return INT64_MIN
    return int(x)


def _truth(flag: bool) -> float:
    return 1.0 if flag else 0.0


def _div(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _mod(a: float, b: float) -> float:
    # fmod: znak wyniku jak dzielnej; math.fmod rzuca ValueError dla x % 0 i inf % y
    if b == 0 or math.isinf(a) or math.isnan(a) or math.isnan(b):
        return math.nan
    return math.fmod(a, b)


# Mapowanie symboli operatorów binarnych na operacje double
_BINARY_OPS: dict[str, Callable[[float, float], float]] = {
    "||": lambda a, b: _truth(a != 0 or b != 0),
    "&&": lambda a, b: _truth(a != 0 and b != 0),
    "|":  lambda a, b: float(to_int64(a) | to_int64(b)),
    "^":  lambda a, b: float(to_int64(a) ^ to_int64(b)),
    "&":  lambda a, b: float(to_int64(a) & to_int64(b)),
    "==": lambda a, b: _truth(a == b),
    "!=": lambda a, b: _truth(a != b),
    "<":  lambda a, b: _truth(a < b),
    ">":  lambda a, b: _truth(a > b),
    "<=": lambda a, b: _truth(a <= b),
    ">=": lambda a, b: _truth(a >= b),
    "+":  lambda a, b: a + b,
    "-":  lambda a, b: a - b,
    "*":  lambda a, b: a * b,
    "/":  _div,
    "%":  _mod,
}

_UNARY_OPS: dict[str, Callable[[float], float]] = {
    "!": lambda x: _truth(x == 0),
    "~": lambda x: float(~to_int64(x)),
}


class PrecedenceEvaluator:
    """Ewaluator AST wyrażeń Mathex na wektorze argumentów."""

    def __init__(
        self,
        codec: VariableCodec | None = None,
        registry: FunctionRegistry | None = None,
    ) -> None:
        self._codec = codec or NibbleVariableCodec()
        self._registry = registry or MathFunctionRegistry()

    # -- Evaluator protocol ------------------------------------------------

    def eval_expr(self, ast: ExprAST, args: Sequence[float]) -> float:
        return self._eval(ast, args)

    # -- Prywatne ----------------------------------------------------------

    def _eval(self, node: ExprAST, args: Sequence[float]) -> float:
        if isinstance(node, NumberNode):
            return node.value

        if isinstance(node, VariableNode):
            index = self._codec.resolve(node.token, len(args))
            return float(args[index])

        if isinstance(node, OperatorChainNode):
            value = self._eval(node.first, args)
            for link in node.rest:
                operand = self._eval(link.operand, args)
                value = _BINARY_OPS[link.op](value, operand)
            return value

        if isinstance(node, UnaryOpNode):
            return _UNARY_OPS[node.op](self._eval(node.operand, args))

        if isinstance(node, FunctionCallNode):
            values = [self._eval(arg, args) for arg in node.args]
            fn = self._registry.lookup(node.name, node.arity)
            return fn(*values)

        if isinstance(node, GroupNode):
            return self._eval(node.inner, args)

        raise UnknownNode(type(node).__name__)
