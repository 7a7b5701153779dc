from lispcore import SExpression
from lispcore.errors import LispSyntaxError
from lispcore.syntax import BuilderFn
from lispcore.evaluation.operators import Operator
from lispcore.types.expression import Application, Expression


def application_form(
    operator: Operator, tail: list[SExpression], build_fn: BuilderFn
) -> Expression:
    """Build a call to a built-in operator after checking its arity."""
    if not operator.accepts(len(tail)):
        raise LispSyntaxError(
            f"{operator.symbol} requires {operator.arity_description()}, got {len(tail)}",
            text=operator.symbol.id,
        )
    return Application(operator.symbol, tuple(build_fn(arg) for arg in tail))
