"""Turns reader output into a typed Expression tree.

All structural checks happen here (known heads, arity, define names) so that
the evaluator only ever sees well-formed trees.
"""

from __future__ import annotations

from lispcore import SExpression
from lispcore.errors import LispSyntaxError
from lispcore.evaluation.operators import OPERATORS
from lispcore.syntax.forms import FORM_BUILDERS, application_form
from lispcore.types.expression import Expression, Literal, Reference
from lispcore.types.symbol import Symbol


def build(value: SExpression) -> Expression:
    match value:
        case bool():
            raise LispSyntaxError(f"Unsupported literal: {value!r}", text=repr(value))
        case int() | float():
            return Literal(value)
        case Symbol():
            return Reference(value)
        case []:
            raise LispSyntaxError("Empty form ()", text="()")
        case [Symbol() as head, *tail]:
            if head in FORM_BUILDERS:
                return FORM_BUILDERS[head](tail, build)
            operator = OPERATORS.get(head)
            if operator is not None:
                return application_form(operator, tail, build)
            raise LispSyntaxError(f"Unknown operator or keyword: {head}", text=head.id)
        case [head, *_]:
            raise LispSyntaxError(f"Form head must be a symbol, got {head!r}", text=repr(head))
    raise LispSyntaxError(f"Cannot build expression from {value!r}", text=repr(value))
