# Core type aliases for lispcore's data model.
# We use plain Python types (int, float, list) plus Symbol to represent the
# forms produced by the reader, and int/float for every evaluated value.
#
# Naming guidance:
# - SExpression: Use in reader/builder code to denote syntactic forms.
# - Number:      Use in evaluator/session code to denote evaluated values.

from typing import Any, Union

Number = Union[int, float]
# Reader output: int, float, Symbol, or a list of SExpression
SExpression = Any

# Integers wider than this cannot be printed (Python caps int <-> str
# conversion at 4300 digits); 14000 bits is about 4215 decimal digits.
MAX_INT_BITS = 14000
