"""
Port: FunctionRegistry
Odpowiedzialność: wbudowane funkcje numeryczne, wyszukiwane po (nazwa, arność).
"""
from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class FunctionRegistry(Protocol):
    def lookup(self, name: str, arity: int) -> Callable[..., float]:
        """
        Returns the function registered under (name, arity).
        Raises UnknownFunction if there is none.
        """
        ...

    def names(self, arity: int) -> list[str]:
        """Sorted names of all functions with the given arity."""
        ...
