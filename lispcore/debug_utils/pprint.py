from lispcore import Number
from lispcore.errors import LispInternalError
from lispcore.types.expression import (
    Application,
    Conditional,
    Definition,
    Expression,
    Literal,
    Reference,
)

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "indent": 2,
    "max_line_length": 80,
}


def format_number(n: Number) -> str:
    """Render a value the way the reader would read it back."""
    text = repr(n)
    if isinstance(n, float) and "." not in text and "e" in text:
        # 1e+20 -> 1.0e+20; the reader requires a '.' in every float
        mantissa, exponent = text.split("e")
        text = f"{mantissa}.0e{exponent}"
    return text


def _children(expr: Expression) -> tuple[str, list[Expression]]:
    """Head text and sub-expressions of a compound node."""
    match expr:
        case Definition(name, value):
            return f"define {name}", [value]
        case Conditional(test, then, otherwise):
            return "if", [test, then, otherwise]
        case Application(operator, arguments):
            return str(operator), list(arguments)
    raise LispInternalError(f"Not a compound expression: {expr!r}")


def to_source(expr: Expression) -> str:
    """Canonical single-line S-expression text for `expr`."""
    match expr:
        case Literal(value):
            return format_number(value)
        case Reference(name):
            return str(name)
        case Definition() | Conditional() | Application():
            head, parts = _children(expr)
            return "(" + " ".join([head] + [to_source(p) for p in parts]) + ")"
    raise LispInternalError(f"Not an expression: {expr!r}")


# ----------------- Pretty printer -----------------
def pprint_expr(expr: Expression, options: dict = DEFAULT_OPTIONS, _level: int = 0) -> str:
    """Multi-line layout: a form that fits on one line stays on one line,
    otherwise each sub-expression goes on its own indented line."""
    indent = options.get("indent", 2)
    max_len = options.get("max_line_length", 80)
    flat = to_source(expr)
    if len(flat) + _level * indent <= max_len or isinstance(expr, (Literal, Reference)):
        return flat
    head, parts = _children(expr)
    pad = " " * ((_level + 1) * indent)
    lines = [f"({head}"]
    for part in parts:
        lines.append(pad + pprint_expr(part, options, _level + 1))
    lines[-1] += ")"
    return "\n".join(lines)
