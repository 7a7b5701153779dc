from lispcore.types.symbol import Symbol
from lispcore.types.environment import Environment
from lispcore.types.expression import (
    Expression,
    Literal,
    Reference,
    Definition,
    Conditional,
    Application,
)
from lispcore.types.session import Session

__all__ = [
    "Symbol",
    "Environment",
    "Expression",
    "Literal",
    "Reference",
    "Definition",
    "Conditional",
    "Application",
    "Session",
]
