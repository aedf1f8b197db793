import math

import pytest

from adapters.evaluator.precedence_evaluator import (
    INT64_MAX,
    INT64_MIN,
    PrecedenceEvaluator,
    to_int64,
)
from adapters.expression_parser.peg_parser import PegExpressionParser
from contracts import (
    ChainLink,
    Level,
    NumberNode,
    OperatorChainNode,
    UnknownFunction,
    UnknownNode,
    VariableIndexOutOfRange,
)

ARGS = [0.1, 0.2, 0.3]


def _value(text: str, args=ARGS) -> float:
    ast = PegExpressionParser().parse(text)
    return PrecedenceEvaluator().eval_expr(ast, args)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1+2*3", 7.0),
        ("(1+2)*3", 9.0),
        ("8/4/2", 1.0),
        ("10-4-3", 3.0),
        ("2*3%4", 2.0),
        ("1 < 2 == 1", 1.0),
        ("2 & 1 == 1", 0.0),
        ("1 | 2 ^ 3 & 1", 3.0),
        ("1 + 1 == 2 && 3 > 2", 1.0),
        ("0 || 1 && 0", 0.0),
    ],
)
def test_precedence_and_left_associativity(text, expected):
    assert _value(text) == expected


def test_variables_address_arguments_by_index():
    assert _value("A") == 0.1
    assert _value("B") == 0.2
    assert _value("C") == 0.3
    assert _value("BA") == 0.2  # ten sam indeks co "B"


def test_variable_past_end_of_arguments_fails():
    with pytest.raises(VariableIndexOutOfRange) as exc_info:
        _value("D")

    assert exc_info.value.index == 3
    assert exc_info.value.arg_count == 3


def test_two_letter_variable_can_address_index_sixteen():
    args = [float(i) for i in range(17)]

    assert _value("AB", args) == 16.0
    with pytest.raises(VariableIndexOutOfRange):
        _value("AB", ARGS)


def test_expression_without_variables_needs_no_arguments():
    assert _value("max(1, 2) + 3", []) == 5.0


def test_arguments_are_not_mutated():
    args = [1.0, 2.0]

    _value("A + B * A", args)

    assert args == [1.0, 2.0]


def test_function_dispatch():
    assert _value("max(1,2)") == 2.0
    assert _value("abs(0-5)") == 5.0
    assert _value("max(1,!2)") == 1.0
    assert _value("pow(2, 1 + 2)") == 8.0


def test_unknown_function_or_arity_fails():
    with pytest.raises(UnknownFunction) as exc_info:
        _value("foo(1)")
    assert (exc_info.value.name, exc_info.value.arity) == ("foo", 1)

    with pytest.raises(UnknownFunction):
        _value("abs(1, 2)")
    with pytest.raises(UnknownFunction):
        _value("pow(2)")


def test_first_failure_wins():
    # argumenty funkcji liczone są przed wyszukaniem funkcji
    with pytest.raises(VariableIndexOutOfRange):
        _value("foo(D)")
    with pytest.raises(VariableIndexOutOfRange):
        _value("D + foo(1)")


def test_logical_operators_evaluate_both_operands():
    with pytest.raises(VariableIndexOutOfRange):
        _value("0 && D")
    with pytest.raises(VariableIndexOutOfRange):
        _value("1 || D")


def test_logical_negation():
    assert _value("!0") == 1.0
    assert _value("!2") == 0.0
    assert _value("!A") == 0.0
    assert _value("!!3") == 1.0


def test_logical_operators_treat_any_nonzero_double_as_true():
    assert _value("0.5 && 1") == 1.0
    assert _value("2 && 0") == 0.0
    assert _value("0 || 0") == 0.0
    assert _value("0 || A") == 1.0


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("~0", -1.0),
        ("~5", -6.0),
        ("~2.7", -3.0),          # 2.7 → 2
        ("~(0-2.7)", 1.0),       # -2.7 → -2
        ("6 & 3", 2.0),
        ("6 | 3", 7.0),
        ("6 ^ 3", 5.0),
        ("7.9 & 3", 3.0),        # 7.9 → 7
        ("(0-1) & 255", 255.0),  # dopełnienie do dwóch
    ],
)
def test_bitwise_operators_truncate_toward_zero(text, expected):
    assert _value(text) == expected


def test_to_int64_conversion_convention():
    assert to_int64(math.nan) == 0
    assert to_int64(math.inf) == INT64_MAX
    assert to_int64(-math.inf) == INT64_MIN
    assert to_int64(1e30) == INT64_MAX
    assert to_int64(-1e30) == INT64_MIN
    assert to_int64(-2.9) == -2
    assert to_int64(2.9) == 2


def test_complement_of_infinity_saturates():
    assert _value("~A", [math.inf]) == float(INT64_MIN)


def test_ieee_division_and_remainder():
    assert _value("1/0") == math.inf
    assert _value("(0-1)/0") == -math.inf
    assert math.isnan(_value("0/0"))
    assert _value("7 % 3") == 1.0
    assert _value("(0-7) % 3") == -1.0
    assert _value("7 % (0-3)") == 1.0
    assert math.isnan(_value("7 % 0"))
    assert math.isnan(_value("A % 2", [math.inf]))


def test_nan_flows_through_comparisons():
    assert math.isnan(_value("log(0-1) + 1"))
    assert _value("log(0-1) == log(0-1)") == 0.0
    assert _value("log(0-1) != 1") == 1.0


def test_relational_results_are_zero_or_one():
    assert _value("1 < 2") == 1.0
    assert _value("2 <= 1") == 0.0
    assert _value("2 >= 2") == 1.0
    assert _value("1 == 1") == 1.0
    assert _value("1 != 1") == 0.0


def test_hand_built_chain_is_evaluated():
    ast = OperatorChainNode(
        level=Level.ADDITIVE,
        first=NumberNode(value=10.0),
        rest=[ChainLink(op="-", operand=NumberNode(value=4.0)),
              ChainLink(op="+", operand=NumberNode(value=1.0))],
    )

    assert PrecedenceEvaluator().eval_expr(ast, []) == 7.0


def test_unknown_node_type_fails():
    with pytest.raises(UnknownNode) as exc_info:
        PrecedenceEvaluator().eval_expr(object(), [])  # type: ignore[arg-type]

    assert exc_info.value.node_name == "object"
