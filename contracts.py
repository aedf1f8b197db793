"""
contracts.py — Jedyne źródło prawdy dla wszystkich typów danych w Mathex.
Wszystkie moduły importują WYŁĄCZNIE stąd. Nie modyfikować bez versioning.
"""
from __future__ import annotations

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

CONTRACTS_VERSION = "1.0.0"


# ─────────────────────────── AST ─────────────────────────────────────────

class Level(str, Enum):
    """Poziomy łańcuchów operatorów binarnych, od najsłabiej wiążącego."""
    LOGICAL_OR = "logical_or"          # ||
    LOGICAL_AND = "logical_and"        # &&
    BITWISE_OR = "bitwise_or"          # |
    BITWISE_XOR = "bitwise_xor"        # ^
    BITWISE_AND = "bitwise_and"        # &
    EQUALITY = "equality"              # == !=
    RELATIONAL = "relational"          # < > <= >=
    ADDITIVE = "additive"              # + -
    MULTIPLICATIVE = "multiplicative"  # * / %


BinaryOp = Literal[
    "||", "&&", "|", "^", "&",
    "==", "!=", "<", ">", "<=", ">=",
    "+", "-", "*", "/", "%",
]


class NumberNode(BaseModel):
    node_type: Literal["number"] = "number"
    value: float


class VariableNode(BaseModel):
    node_type: Literal["variable"] = "variable"
    token: str  # litery A..P, np. "A", "BA"


class FunctionCallNode(BaseModel):
    node_type: Literal["call"] = "call"
    name: str
    args: list["ExprAST"] = Field(min_length=1, max_length=2)

    @property
    def arity(self) -> int:
        return len(self.args)


class UnaryOpNode(BaseModel):
    node_type: Literal["unary"] = "unary"
    op: Literal["!", "~"]
    operand: "ExprAST"


class ChainLink(BaseModel):
    op: BinaryOp
    operand: "ExprAST"


class OperatorChainNode(BaseModel):
    """first (op operand)* — lewostronnie łączny łańcuch jednego poziomu."""
    node_type: Literal["chain"] = "chain"
    level: Level
    first: "ExprAST"
    rest: list[ChainLink] = Field(min_length=1)


class GroupNode(BaseModel):
    node_type: Literal["group"] = "group"
    inner: "ExprAST"


ExprAST = Union[
    NumberNode, VariableNode, FunctionCallNode,
    UnaryOpNode, OperatorChainNode, GroupNode,
]
FunctionCallNode.model_rebuild()
UnaryOpNode.model_rebuild()
ChainLink.model_rebuild()
OperatorChainNode.model_rebuild()
GroupNode.model_rebuild()


# ─────────────────────────── Errors ──────────────────────────────────────

class MathexError(Exception):
    """Bazowy błąd ewaluacji. code < 0 jest zwracany przez Mathex.code()."""
    code: int = -1
    kind: str = "mathex_error"


class ParseError(MathexError):
    code = -2
    kind = "parse_error"

    def __init__(self, position: int, message: str) -> None:
        self.position = position
        self.message = message
        super().__init__(f"Parse error at position {position}: {message}")


class UnknownNode(MathexError):
    code = -3
    kind = "unknown_node"

    def __init__(self, node_name: str) -> None:
        self.node_name = node_name
        super().__init__(f"Unknown AST node: {node_name!r}")


class VariableIndexOutOfRange(MathexError):
    code = -4
    kind = "variable_index_out_of_range"

    def __init__(self, token: str, index: int, arg_count: int) -> None:
        self.token = token
        self.index = index
        self.arg_count = arg_count
        super().__init__(
            f"Variable {token!r} decodes to index {index}, "
            f"but only {arg_count} argument(s) were given"
        )


class UnknownFunction(MathexError):
    code = -5
    kind = "unknown_function"

    def __init__(self, name: str, arity: int) -> None:
        self.name = name
        self.arity = arity
        super().__init__(f"Unknown function {name!r} with {arity} argument(s)")


class ExpressionTooComplex(MathexError):
    code = -6
    kind = "expression_too_complex"

    def __init__(self, depth: int, limit: int) -> None:
        self.depth = depth
        self.limit = limit
        super().__init__(f"Expression nesting depth {depth} exceeds limit {limit}")


# ─────────────────────────── Evaluation result ───────────────────────────

class ErrorInfo(BaseModel):
    kind: str      # np. "parse_error", "unknown_function"
    code: int      # ujemny kod błędu
    message: str

    @classmethod
    def from_exception(cls, exc: MathexError) -> "ErrorInfo":
        return cls(kind=exc.kind, code=exc.code, message=str(exc))


class MathexResult(BaseModel):
    expression: str
    truth: Optional[bool] = None
    value: Optional[float] = None   # NaN/inf są dozwolone
    error: Optional[ErrorInfo] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def code(self) -> int:
        """1 / 0 dla poprawnej ewaluacji, ujemny kod błędu w przeciwnym razie."""
        if self.error is not None:
            return self.error.code
        return 1 if self.truth else 0
