import pytest

from lispcore.debug_utils.pprint import format_number, pprint_expr, to_source
from lispcore.reader.parser import read
from lispcore.syntax.builder import build


@pytest.mark.parametrize(
    "source, expected",
    [
        ("42", "42"),
        ("-3", "-3"),
        ("2.5", "2.5"),
        ("counter", "counter"),
        ("(+   1  2)", "(+ 1 2)"),
        ("(define counter (+ counter 1))", "(define counter (+ counter 1))"),
        ("(if (>= x 5) 1.0 (- x 1))", "(if (>= x 5) 1.0 (- x 1))"),
        ("(+ 1 ; comment\n 2)", "(+ 1 2)"),
    ]
)
def test_to_source(source, expected):
    assert to_source(build(read(source))) == expected


@pytest.mark.parametrize(
    "source",
    [
        "(+ (* 2 3) (- 10 (/ 8 2)))",
        "(define x (if (= a b) 1.5e+20 -0.25))",
        "(if (< 1 2) (define y 3) (define y 4))",
    ]
)
def test_to_source_round_trips(source):
    expr = build(read(source))
    assert build(read(to_source(expr))) == expr


@pytest.mark.parametrize(
    "value, expected",
    [(3, "3"), (3.5, "3.5"), (4.0, "4.0"), (1e20, "1.0e+20"), (1.5e-7, "1.5e-07")],
)
def test_format_number(value, expected):
    assert format_number(value) == expected
    assert read(expected) == value


def test_pprint_short_form_stays_on_one_line():
    expr = build(read("(+ 1 2)"))
    assert pprint_expr(expr) == "(+ 1 2)"


def test_pprint_breaks_long_forms():
    expr = build(read("(if (> alpha beta) (define result (+ alpha 1)) (define result (- beta 1)))"))
    text = pprint_expr(expr, {"indent": 2, "max_line_length": 30})
    assert text == (
        "(if\n"
        "  (> alpha beta)\n"
        "  (define result (+ alpha 1))\n"
        "  (define result (- beta 1)))"
    )
    assert build(read(text)) == expr


def test_pprint_default_options_wrap_at_80_columns():
    short = build(read("(+ " + " ".join(["1"] * 30) + ")"))
    assert "\n" not in pprint_expr(short)
    long = build(read("(+ " + " ".join(["1"] * 50) + ")"))
    lines = pprint_expr(long).splitlines()
    assert lines[0] == "(+"
    assert lines[1] == "  1"
    assert len(lines) == 51
