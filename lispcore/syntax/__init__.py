from typing import Callable

from lispcore import SExpression

# Builder function type passed into form handlers for recursive building
BuilderFn = Callable[[SExpression], "Expression"]

KEYWORDS = frozenset({"define", "if"})
OPERATOR_NAMES = frozenset({"+", "-", "*", "/", ">", "<", ">=", "<=", "="})
RESERVED_NAMES = KEYWORDS | OPERATOR_NAMES
