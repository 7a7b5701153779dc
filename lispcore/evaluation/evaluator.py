"""Core evaluator for lispcore.

A plain recursive descent over the Expression union. The caller owns the
Environment and is responsible for serialising access to it.
"""

from __future__ import annotations

from lispcore import Number
from lispcore.errors import LispInternalError
from lispcore.evaluation.operators import OPERATORS
from lispcore.types.environment import Environment
from lispcore.types.expression import (
    Application,
    Conditional,
    Definition,
    Expression,
    Literal,
    Reference,
)


def is_truthy(value: Number) -> bool:
    # Zero is the only false value
    return value != 0


def evaluate(expr: Expression, env: Environment) -> Number:
    match expr:
        case Literal(value):
            return value

        case Reference(name):
            return env.lookup(name)

        case Definition(name, value_expr):
            value = evaluate(value_expr, env)
            env.define(name, value)
            return value

        case Conditional(test, then, otherwise):
            # Only the taken branch is evaluated; the other may contain a define
            if is_truthy(evaluate(test, env)):
                return evaluate(then, env)
            return evaluate(otherwise, env)

        case Application(operator, arguments):
            fn = OPERATORS.get(operator)
            if fn is None:
                raise LispInternalError(f"Unknown operator reached the evaluator: {operator}")
            args = [evaluate(arg, env) for arg in arguments]
            return fn(args)

    raise LispInternalError(f"Not an expression: {expr!r}")
