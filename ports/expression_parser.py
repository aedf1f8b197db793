"""
Port: ExpressionParser
Odpowiedzialność: zamiana tekstu wyrażenia na ExprAST.
"""
from typing import Protocol, runtime_checkable

from contracts import ExprAST


@runtime_checkable
class ExpressionParser(Protocol):
    def parse(self, text: str) -> ExprAST:
        """
        Parses expression text into an AST.

        Raises ParseError(position, message) on malformed text.
        Raises ExpressionTooComplex when nesting exceeds the configured limit.
        Performs no evaluation.
        """
        ...
