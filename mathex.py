#!/usr/bin/env python3
"""
mathex.py — CLI narzędzie Mathex.

Działa całkowicie lokalnie, bez serwera API.

Konfiguracja: zmienne środowiskowe z prefiksem MATHEX_
lub plik .env (np. MATHEX_EPSILON=1e-9, MATHEX_MAX_NESTING_DEPTH=32).

Podkomendy:
    eval       — policz wyrażenie i wypisz TRUE/FALSE
    decode     — token zmiennej → indeks argumentu
    encode     — indeks argumentu → token zmiennej
    functions  — listuj funkcje wbudowane

Użycie:
    python mathex.py eval                           # demo: max(1,!2) dla [0.1, 0.2, 0.3]
    python mathex.py eval "A < B && B < C" 0.1 0.2 0.3
    python mathex.py eval "abs(A-B)" 1 1 --value
    python mathex.py decode A P BA AAB
    python mathex.py encode 0 15 16 256
    python mathex.py functions
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

DEMO_EXPRESSION = "max(1,!2)"
DEMO_ARGUMENTS = [0.1, 0.2, 0.3]


# -- helpers ---------------------------------------------------------------

_CONSOLE: Console | None = None


def _console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False)
    return _CONSOLE


def _print_kv_table(title: str, rows: list[tuple[str, Any]]) -> None:
    table = Table(title=title, box=box.ASCII, show_header=False, pad_edge=False)
    table.add_column("Key", no_wrap=True, style="bold cyan")
    table.add_column("Value")
    for key, value in rows:
        table.add_row(str(key), str(value))
    _console().print(table)


def _fail(message: str) -> None:
    print(f"Błąd: {message}", file=sys.stderr)
    sys.exit(1)


# -- podkomendy ------------------------------------------------------------

def _eval(args: argparse.Namespace) -> None:
    from config import Settings
    from engine import Mathex

    expression = args.expression
    arguments = args.arguments
    if expression is None:
        expression, arguments = DEMO_EXPRESSION, DEMO_ARGUMENTS

    overrides = {}
    if args.epsilon is not None:
        overrides["epsilon"] = args.epsilon
    engine = Mathex(settings=Settings(**overrides))

    result = engine.check(expression, arguments)
    if not result.ok:
        _fail(f"[{result.error.kind}, code {result.error.code}] {result.error.message}")

    if args.value:
        _print_kv_table("Mathex", [
            ("expression", expression),
            ("arguments", ", ".join(str(a) for a in arguments) or "-"),
            ("value", result.value),
            ("epsilon", engine.epsilon),
            ("result", "TRUE" if result.truth else "FALSE"),
        ])
        return

    print(f"{expression} : {'TRUE' if result.truth else 'FALSE'}")


def _decode(args: argparse.Namespace) -> None:
    from adapters.variable_codec.nibble_codec import NibbleVariableCodec

    codec = NibbleVariableCodec()
    table = Table(title="Variables", box=box.ASCII)
    table.add_column("Token", no_wrap=True, style="cyan")
    table.add_column("Index", justify="right")
    for token in args.tokens:
        try:
            index = codec.decode(token)
        except ValueError as exc:
            _fail(str(exc))
        table.add_row(token, str(index))
    _console().print(table)


def _encode(args: argparse.Namespace) -> None:
    from adapters.variable_codec.nibble_codec import NibbleVariableCodec

    codec = NibbleVariableCodec()
    table = Table(title="Variables", box=box.ASCII)
    table.add_column("Index", justify="right")
    table.add_column("Token", no_wrap=True, style="cyan")
    for index in args.indices:
        try:
            token = codec.encode(index)
        except ValueError as exc:
            _fail(str(exc))
        table.add_row(str(index), token)
    _console().print(table)


def _functions(args: argparse.Namespace) -> None:
    from adapters.function_registry.math_registry import MathFunctionRegistry

    registry = MathFunctionRegistry()
    table = Table(title="Functions", box=box.ASCII)
    table.add_column("Arity", justify="right", no_wrap=True)
    table.add_column("Names")
    for arity in (1, 2):
        table.add_row(str(arity), ", ".join(registry.names(arity)))
    _console().print(table)


# -- main ------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="mathex",
        description="Mathex — ewaluator wyrażeń na argumentach pozycyjnych",
    )
    parser.add_argument("--log-level", default=None, help="Poziom logowania (domyślnie z MATHEX_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    # eval
    p = sub.add_parser("eval", help="Policz wyrażenie i wypisz TRUE/FALSE")
    p.add_argument("expression", nargs="?", help="Wyrażenie (domyślnie demo)")
    p.add_argument("arguments", nargs="*", type=float, help="Argumenty A, B, C, ...")
    p.add_argument("--value", "-v", action="store_true", help="Pokaż też wartość liczbową")
    p.add_argument("--epsilon", "-e", type=float, default=None)

    # decode
    p = sub.add_parser("decode", help="Token zmiennej → indeks argumentu")
    p.add_argument("tokens", nargs="+", metavar="TOKEN")

    # encode
    p = sub.add_parser("encode", help="Indeks argumentu → token zmiennej")
    p.add_argument("indices", nargs="+", type=int, metavar="INDEX")

    # functions
    sub.add_parser("functions", help="Listuj funkcje wbudowane")

    args = parser.parse_args(argv)

    from config import Settings
    logging.basicConfig(level=(args.log_level or Settings().log_level).upper())

    commands = {
        "eval":      _eval,
        "decode":    _decode,
        "encode":    _encode,
        "functions": _functions,
    }
    commands[args.command](args)


if __name__ == "__main__":
    main()
