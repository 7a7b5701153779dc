from lispcore import SExpression
from lispcore.errors import LispSyntaxError
from lispcore.syntax import BuilderFn
from lispcore.types.expression import Conditional, Expression


def if_form(tail: list[SExpression], build_fn: BuilderFn) -> Expression:
    if len(tail) != 3:
        raise LispSyntaxError(
            "if requires a condition, a then-expression and an else-expression",
            text="if",
        )
    test, then, otherwise = tail
    return Conditional(build_fn(test), build_fn(then), build_fn(otherwise))
