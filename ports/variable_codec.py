"""
Port: VariableCodec
Odpowiedzialność: zamiana tokenu zmiennej (litery A..P) na indeks argumentu.
"""
from typing import Protocol, runtime_checkable


@runtime_checkable
class VariableCodec(Protocol):
    def decode(self, token: str) -> int:
        """Decodes a variable token to a non-negative index. No bounds check."""
        ...

    def resolve(self, token: str, arg_count: int) -> int:
        """
        Decodes a token and checks it against the argument vector length.
        Raises VariableIndexOutOfRange when index >= arg_count.
        """
        ...
