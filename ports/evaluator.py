"""
Port: Evaluator
Odpowiedzialność: deterministyczne liczenie wartości AST na wektorze argumentów.
"""
from typing import Protocol, Sequence, runtime_checkable

from contracts import ExprAST


@runtime_checkable
class Evaluator(Protocol):
    def eval_expr(self, ast: ExprAST, args: Sequence[float]) -> float:
        """
        Evaluates an expression AST to a double.
        args: positional arguments addressed by variable tokens (A, B, ..., BA, ...).
        Never mutates args. NaN and infinities are ordinary results.
        Raises VariableIndexOutOfRange for a token past the end of args.
        Raises UnknownFunction for a name/arity missing from the registry.
        Raises UnknownNode for a node type the evaluator does not handle.
        """
        ...
