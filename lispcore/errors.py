"""Error taxonomy for lispcore.

Every error raised by the core is a LispError carrying a stable `kind`, a
human-readable message, and a `detail` mapping with the offending name or
text. Transport layers map errors to client-visible categories via the
`category` class attribute instead of matching on exception types.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Stable error identifiers exposed to callers."""

    SYNTAX_ERROR = "SyntaxError"
    UNDEFINED_VARIABLE = "UndefinedVariableError"
    ARITHMETIC_ERROR = "ArithmeticError"
    SESSION_NOT_FOUND = "SessionNotFoundError"
    SESSION_LIMIT = "SessionLimitError"
    INTERNAL_ERROR = "InternalError"


BAD_INPUT = "bad-input"
NOT_FOUND = "not-found"
UNAVAILABLE = "unavailable"
INTERNAL = "internal"


class LispError(Exception):
    """ Base class for all lispcore errors"""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR
    category: str = INTERNAL

    def __init__(self, message: str, **detail: Any):
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.kind.value,
            "category": self.category,
            "message": self.message,
            **self.detail,
        }


class LispSyntaxError(LispError):
    """ Raised for malformed input, unknown operators or keywords, and wrong arity"""

    kind = ErrorKind.SYNTAX_ERROR
    category = BAD_INPUT

    def __init__(self, message: str, text: str | None = None):
        if text is None:
            super().__init__(message)
        else:
            super().__init__(message, text=text)
        self.text = text


class UndefinedVariableError(LispError):
    """ Raised when a symbol is used before it is defined"""

    kind = ErrorKind.UNDEFINED_VARIABLE
    category = BAD_INPUT

    def __init__(self, name: str):
        super().__init__(f"Undefined variable: {name}", name=name)
        self.name = name


class LispArithmeticError(LispError, ArithmeticError):
    """ Raised on division by zero or numeric overflow"""

    kind = ErrorKind.ARITHMETIC_ERROR
    category = BAD_INPUT

    def __init__(self, message: str, operator: str, operands: list | None = None):
        super().__init__(message, operator=operator, operands=list(operands or []))
        self.operator = operator
        self.operands = list(operands or [])


class SessionNotFoundError(LispError):
    """ Raised when a session id is unknown, ended, or evicted"""

    kind = ErrorKind.SESSION_NOT_FOUND
    category = NOT_FOUND

    def __init__(self, session_id: str):
        super().__init__(f"Session not found: {session_id}", session=session_id)
        self.session_id = session_id


class SessionLimitError(LispError):
    """ Raised when the configured maximum number of sessions is reached"""

    kind = ErrorKind.SESSION_LIMIT
    category = UNAVAILABLE

    def __init__(self, limit: int):
        super().__init__(f"Session limit reached ({limit})", limit=limit)
        self.limit = limit


class LispInternalError(LispError):
    """ Raised when an internal invariant is violated"""
