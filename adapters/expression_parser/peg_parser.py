"""
Adapter: PegExpressionParser
Implementuje port ExpressionParser na silniku PEG Arpeggio.

Gramatyka (grammar.GRAMMAR) kompilowana jest raz na proces, z memoizacją
(packrat) — dziesięć zagnieżdżonych poziomów precedencji inaczej parsowałoby
te same prefiksy wielokrotnie.

Drzewo parsowania Arpeggio → ExprAST:
  - łańcuch bez operatorów zwracany jest jako jego jedyny operand
  - tag poziomu (contracts.Level) przypisywany raz, z nazwy reguły
  - z drzewa czytane są wyłącznie: rule_name, tekst tokenu, dzieci w kolejności

Instancja parsera Arpeggio trzyma stan pojedynczego parsowania, więc wywołania
parse() są serializowane blokadą.
"""
from __future__ import annotations

import logging
import threading

from arpeggio import NoMatch, NonTerminal
from arpeggio.cleanpeg import ParserPEG

from adapters.expression_parser.grammar import (
    CHAIN_RULES,
    GRAMMAR,
    OPERATOR_RULES,
    ROOT_RULE,
)
from contracts import (
    ChainLink,
    ExprAST,
    ExpressionTooComplex,
    FunctionCallNode,
    GroupNode,
    Level,
    NumberNode,
    OperatorChainNode,
    ParseError,
    UnaryOpNode,
    UnknownNode,
    VariableNode,
)

logger = logging.getLogger("mathex.peg_parser")

_LEVELS: dict[str, Level] = {rule: Level(rule) for rule in CHAIN_RULES}
_PASS_THROUGH = frozenset({ROOT_RULE, "atom"})
_KNOWN_RULES = frozenset(
    set(_LEVELS) | _PASS_THROUGH | set(OPERATOR_RULES)
    | {"unary", "call1", "call2", "group", "number", "variable", "name"}
)

_COMPILED: dict[bool, ParserPEG] = {}
_COMPILE_LOCK = threading.Lock()
_PARSE_LOCK = threading.Lock()


def compile_grammar(packrat: bool = True) -> ParserPEG:
    """Zwraca skompilowany parser (jeden na proces dla danego trybu memoizacji)."""
    with _COMPILE_LOCK:
        parser = _COMPILED.get(packrat)
        if parser is None:
            logger.debug("Compiling expression grammar (packrat=%s).", packrat)
            parser = ParserPEG(GRAMMAR, ROOT_RULE, memoization=packrat)
            _COMPILED[packrat] = parser
        return parser


def nesting_depth(text: str) -> int:
    """
    Szacuje głębokość zagnieżdżenia bez parsowania: nawias (grupa lub wywołanie)
    i każdy prefiks ! / ~ to jeden poziom. Operator binarny lub przecinek kończy
    serię prefiksów w bieżącym nawiasie.
    """
    frames = [0]  # liczba oczekujących prefiksów unarnych w każdym nawiasie
    best = 0
    for i, ch in enumerate(text):
        if ch in "!~" and text[i + 1:i + 2] != "=":
            frames[-1] += 1
        elif ch == "(":
            frames.append(0)
        elif ch == ")":
            if len(frames) > 1:
                frames.pop()
        elif ch in "+-*/%<>=&|^,!":
            frames[-1] = 0
        best = max(best, len(frames) - 1 + sum(frames))
    return best


def _significant(node: NonTerminal):
    """Dzieci węzła istotne dla AST; anonimowe grupy są spłaszczane, interpunkcja pomijana."""
    for child in node:
        if child.rule_name in _KNOWN_RULES:
            yield child
        elif isinstance(child, NonTerminal):
            yield from _significant(child)


class _TreeBuilder:
    def __init__(self, max_depth: int) -> None:
        self._max_depth = max_depth

    def build(self, node, depth: int = 0) -> ExprAST:
        rule = node.rule_name

        if rule == "number":
            return NumberNode(value=float(node.flat_str()))

        if rule == "variable":
            return VariableNode(token=node.flat_str().strip())

        level = _LEVELS.get(rule)
        if level is not None:
            return self._chain(level, node, depth)

        if rule == "unary":
            items = list(_significant(node))
            if items[0].rule_name == "unary_op":
                self._check_depth(depth + 1)
                return UnaryOpNode(
                    op=items[0].flat_str().strip(),
                    operand=self.build(items[1], depth + 1),
                )
            return self.build(items[0], depth)

        if rule in ("call1", "call2"):
            self._check_depth(depth + 1)
            name, *args = _significant(node)
            return FunctionCallNode(
                name=name.flat_str().strip(),
                args=[self.build(arg, depth + 1) for arg in args],
            )

        if rule == "group":
            self._check_depth(depth + 1)
            (inner,) = _significant(node)
            return GroupNode(inner=self.build(inner, depth + 1))

        if rule in _PASS_THROUGH:
            (inner,) = _significant(node)
            return self.build(inner, depth)

        raise UnknownNode(rule)

    def _chain(self, level: Level, node, depth: int) -> ExprAST:
        items = list(_significant(node))
        first = self.build(items[0], depth)
        if len(items) == 1:
            return first
        rest = [
            ChainLink(op=op.flat_str().strip(), operand=self.build(operand, depth))
            for op, operand in zip(items[1::2], items[2::2])
        ]
        return OperatorChainNode(level=level, first=first, rest=rest)

    def _check_depth(self, depth: int) -> None:
        if depth > self._max_depth:
            raise ExpressionTooComplex(depth, self._max_depth)


class PegExpressionParser:
    """Parser wyrażeń: tekst → ExprAST."""

    def __init__(self, max_depth: int = 16, packrat: bool = True) -> None:
        self._max_depth = max_depth
        self._parser = compile_grammar(packrat)

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def parse(self, text: str) -> ExprAST:
        depth = nesting_depth(text)
        if depth > self._max_depth:
            raise ExpressionTooComplex(depth, self._max_depth)

        try:
            with _PARSE_LOCK:
                tree = self._parser.parse(text)
        except NoMatch as exc:
            logger.debug("Parse failed for %r: %s", text, exc)
            raise ParseError(exc.position, str(exc)) from None
        except RecursionError:
            raise ExpressionTooComplex(max(depth, self._max_depth + 1), self._max_depth) from None

        return _TreeBuilder(self._max_depth).build(tree)
