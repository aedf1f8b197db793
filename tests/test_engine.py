from concurrent.futures import ThreadPoolExecutor

import pytest

import engine
from config import Settings
from contracts import ExpressionTooComplex, ParseError, VariableIndexOutOfRange
from engine import Mathex, is_truthy

ARGS = [0.1, 0.2, 0.3]


def test_demo_expression_is_true():
    assert engine.evaluate("max(1,!2)", ARGS) is True


def test_module_level_evaluate_defaults_to_no_arguments():
    assert engine.evaluate("1 + 1 == 2") is True


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("0", False),
        ("A - A", False),
        ("A < B && B < C", True),
        ("C < A", False),
        ("1/0", True),
        ("0/0", False),     # NaN
        ("0.0000001", True),
    ],
)
def test_truth_decision(text, expected):
    assert Mathex().evaluate(text, ARGS) is expected


def test_is_truthy_uses_strict_magnitude_threshold():
    assert is_truthy(0.5, 0.5) is False
    assert is_truthy(-0.6, 0.5) is True
    assert is_truthy(float("nan"), 0.0) is False


def test_custom_epsilon():
    mathex = Mathex(settings=Settings(epsilon=0.5))

    assert mathex.evaluate("A", [0.4]) is False
    assert mathex.evaluate("A", [0.6]) is True
    assert mathex.evaluate("0 - A", [0.6]) is True


def test_epsilon_from_environment(monkeypatch):
    monkeypatch.setenv("MATHEX_EPSILON", "0.5")
    monkeypatch.setenv("MATHEX_MAX_NESTING_DEPTH", "4")

    settings = Settings()

    assert settings.epsilon == 0.5
    assert settings.max_nesting_depth == 4
    assert Mathex(settings=settings).evaluate("A", [0.4]) is False


def test_evaluate_raises_typed_errors():
    mathex = Mathex()

    with pytest.raises(ParseError):
        mathex.evaluate("max(1,!2", ARGS)
    with pytest.raises(VariableIndexOutOfRange):
        mathex.evaluate("D", ARGS)


def test_value_returns_raw_number():
    assert Mathex().value("1+2*3", []) == 7.0


def test_check_reports_success():
    result = Mathex().check("max(1,!2)", ARGS)

    assert result.ok
    assert result.truth is True
    assert result.value == 1.0
    assert result.code() == 1


def test_check_reports_false():
    result = Mathex().check("A > B", ARGS)

    assert result.ok
    assert result.truth is False
    assert result.code() == 0


@pytest.mark.parametrize(
    ("text", "kind", "code"),
    [
        ("max(1,!2", "parse_error", -2),
        ("D", "variable_index_out_of_range", -4),
        ("foo(1)", "unknown_function", -5),
        ("(((((1)))))", "expression_too_complex", -6),
    ],
)
def test_check_reports_errors_without_a_truth_value(text, kind, code):
    mathex = Mathex(settings=Settings(max_nesting_depth=4))

    result = mathex.check(text, ARGS)

    assert not result.ok
    assert result.truth is None
    assert result.value is None
    assert result.error.kind == kind
    assert result.error.code == code
    assert mathex.code(text, ARGS) == code


def test_nesting_limit_comes_from_settings():
    shallow = Mathex(settings=Settings(max_nesting_depth=1))

    with pytest.raises(ExpressionTooComplex):
        shallow.evaluate("abs(abs(1))", [])
    assert shallow.evaluate("abs(1)", []) is True


def test_evaluation_is_pure():
    mathex = Mathex()
    results = {mathex.check("A * 10 + sin(B) > C", ARGS).model_dump_json() for _ in range(5)}

    assert len(results) == 1


def test_shared_engine_across_threads():
    mathex = Mathex()
    cases = [
        ("A + B > C + 0.05", [0.1, 0.2, 0.3], False),
        ("A + B > C + 0.05", [0.2, 0.2, 0.3], True),
        ("max(A, B) == B", [1.0, 2.0], True),
        ("~A & 1", [2.0], True),
    ] * 25

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(lambda case: mathex.evaluate(case[0], case[1]), cases))

    assert outcomes == [expected for _, _, expected in cases]
