import pytest
from hypothesis import given, strategies as st

from lispcore.errors import LispArithmeticError
from lispcore.interpreter import interpret
from lispcore.types.environment import Environment


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 2)", 3),
        ("(+ 1 2 3 4)", 10),
        ("(- 20 5 3 2)", 10),
        ("(- 10 3 2)", 5),
        ("(* 2 3 4)", 24),
        ("(/ 12 3)", 4),
        ("(/ 20 4)", 5),
        ("(/ 100 5 2)", 10),
        ("(+ 1 (* 2 3))", 7),
        ("(* (+ 1 2) (- 5 3))", 6),
        ("(+ (* 2 3) (- 10 (/ 8 2)))", 12),
        ("(/ (+ 20 10) (* 2 5))", 3),
        ("(- (+ 10 5) (* 2 3))", 9),
        ("(* 1 2 3 4 5 6)", 720),
        ("(+ -1 5 -3)", 1),
        ("(- -10 -5)", -5),
        ("(* -2 3)", -6),
        ("(/ -12 3)", -4),
        ("(+ 1 (* 2 (+ 3 4) (- 10 6)))", 57),
        ("(/ (* (+ 8 2) 5) (- 20 10))", 5),
    ]
)
def test_integer_arithmetic(source, expected):
    result = interpret(source, Environment())
    assert result == expected
    assert type(result) is int


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(/ 7.0 2)", 3.5),
        ("(/ 7 2)", 3.5),
        ("(/ 1 4)", 0.25),
        ("(/ -7 2)", -3.5),
        ("(+ 1 2.5 3)", 6.5),
        ("(* 2 0.5)", 1.0),
        ("(/ 8.0 2)", 4.0),
        ("(/ 9 2 3)", 1.5),
        ("(- 0.5 0.5)", 0.0),
    ]
)
def test_float_promotion(source, expected):
    result = interpret(source, Environment())
    assert result == pytest.approx(expected)
    assert type(result) is float


def test_exact_division_of_large_integers_stays_exact():
    big = 10 ** 40
    result = interpret(f"(/ {big * 7} 7)", Environment())
    assert result == big
    assert type(result) is int


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(> 10 5)", 1),
        ("(> 5 10)", 0),
        ("(< 5 10)", 1),
        ("(< 10 5)", 0),
        ("(>= 5 5)", 1),
        ("(>= 4 5)", 0),
        ("(<= 5 5)", 1),
        ("(<= 6 5)", 0),
        ("(= 3 3)", 1),
        ("(= 3 3.0)", 1),
        ("(= 3 4)", 0),
    ]
)
def test_comparisons_yield_one_or_zero(source, expected):
    result = interpret(source, Environment())
    assert result == expected
    assert type(result) is int


@pytest.mark.parametrize(
    "source",
    ["(/ 10 0)", "(/ 10 0.0)", "(/ 10.5 0)", "(/ 0 0)", "(/ 10 2 0)", "(/ 1 (- 3 3))"],
)
def test_division_by_zero(source):
    with pytest.raises(LispArithmeticError) as excinfo:
        interpret(source, Environment())
    assert excinfo.value.operator == "/"
    assert excinfo.value.to_dict()["error"] == "ArithmeticError"


def test_division_by_zero_is_a_python_arithmetic_error():
    with pytest.raises(ArithmeticError):
        interpret("(/ 1 0)", Environment())


def test_float_overflow_is_an_arithmetic_error():
    with pytest.raises(LispArithmeticError):
        interpret("(* 1.0e308 10)", Environment())
    with pytest.raises(LispArithmeticError):
        interpret(f"(+ {10 ** 400} 1.5)", Environment())


@given(st.lists(st.integers(min_value=-10 ** 6, max_value=10 ** 6), min_size=2, max_size=10))
def test_subtraction_folds_left_to_right(values):
    expected = values[0]
    for v in values[1:]:
        expected -= v
    source = "(- " + " ".join(map(str, values)) + ")"
    assert interpret(source, Environment()) == expected


@given(st.lists(st.integers(), min_size=2, max_size=10))
def test_sum_matches_python(values):
    source = "(+ " + " ".join(map(str, values)) + ")"
    assert interpret(source, Environment()) == sum(values)


@given(
    st.integers(min_value=-10 ** 12, max_value=10 ** 12),
    st.integers(min_value=-10 ** 6, max_value=10 ** 6).filter(lambda n: n != 0),
)
def test_integer_division_is_exact_or_float(a, b):
    result = interpret(f"(/ {a} {b})", Environment())
    if a % b == 0:
        assert result == a // b
        assert type(result) is int
    else:
        assert type(result) is float


def test_integer_overflow_is_an_arithmetic_error():
    env = Environment()
    interpret(f"(define x {10 ** 19})", env)
    for _ in range(7):
        interpret("(define x (* x x))", env)
    with pytest.raises(LispArithmeticError) as excinfo:
        interpret("(define x (* x x))", env)
    assert excinfo.value.operator == "*"
    # The failed define leaves the last printable value bound
    assert len(str(interpret("x", env))) == 19 * 2 ** 7 + 1
