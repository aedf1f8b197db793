"""
engine.py — fasada Mathex: tekst + argumenty → TRUE/FALSE.

    parse (PegExpressionParser) → eval (PrecedenceEvaluator) → |wynik| > epsilon

Trzy warianty wyniku:
  evaluate() — bool, błędy jako wyjątki MathexError
  check()    — MathexResult, nigdy nie rzuca MathexError
  code()     — 1 / 0 / ujemny kod błędu
"""
from __future__ import annotations

import logging
from typing import Sequence

from adapters.evaluator.precedence_evaluator import PrecedenceEvaluator
from adapters.expression_parser.peg_parser import PegExpressionParser
from config import Settings
from contracts import ErrorInfo, MathexError, MathexResult
from ports.evaluator import Evaluator
from ports.expression_parser import ExpressionParser

logger = logging.getLogger("mathex.engine")


def is_truthy(value: float, epsilon: float) -> bool:
    """|value| > epsilon. NaN zawsze daje False."""
    return abs(value) > epsilon


class Mathex:
    """Parser + ewaluator + decyzja prawdy, współdzielone między wywołaniami."""

    def __init__(
        self,
        settings: Settings | None = None,
        parser: ExpressionParser | None = None,
        evaluator: Evaluator | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.parser = parser or PegExpressionParser(
            max_depth=self.settings.max_nesting_depth,
            packrat=self.settings.packrat,
        )
        self.evaluator = evaluator or PrecedenceEvaluator()

    @property
    def epsilon(self) -> float:
        return self.settings.epsilon

    def value(self, expression: str, arguments: Sequence[float]) -> float:
        """Surowa wartość liczbowa wyrażenia."""
        ast = self.parser.parse(expression)
        return self.evaluator.eval_expr(ast, arguments)

    def evaluate(self, expression: str, arguments: Sequence[float]) -> bool:
        return is_truthy(self.value(expression, arguments), self.epsilon)

    def check(self, expression: str, arguments: Sequence[float]) -> MathexResult:
        try:
            value = self.value(expression, arguments)
        except MathexError as exc:
            logger.debug("Evaluation of %r failed: %s", expression, exc)
            return MathexResult(expression=expression, error=ErrorInfo.from_exception(exc))
        return MathexResult(
            expression=expression,
            truth=is_truthy(value, self.epsilon),
            value=value,
        )

    def code(self, expression: str, arguments: Sequence[float]) -> int:
        return self.check(expression, arguments).code()


_DEFAULT: Mathex | None = None


def _default() -> Mathex:
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = Mathex()
    return _DEFAULT


def evaluate(expression: str, arguments: Sequence[float] = ()) -> bool:
    """
    Evaluates expression against positional arguments and returns its truth value.

    Variables A, B, C, ... address arguments[0], arguments[1], ...
    Raises ParseError, VariableIndexOutOfRange, UnknownFunction or
    ExpressionTooComplex (all MathexError subclasses).
    """
    return _default().evaluate(expression, arguments)
