"""
  Reader, Lexer and Parser

- Streaming, lazy parsing
- Emits Python primitives instead of Cons cells:

    - lists -> Python list
    - symbols -> Symbol
    - numbers -> int/float (int when the token has no '.')

Only numbers, symbols and parenthesised lists are part of the language;
string literals, quote shorthands and reader macros are rejected.
"""

from __future__ import annotations

import math
import re
from typing import Iterator, Optional, Iterable

from lispcore import SExpression, MAX_INT_BITS
from lispcore.errors import LispSyntaxError
from lispcore.types.symbol import Symbol


TOKEN_RE = re.compile(
    r"\s*("
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<atom>[^\s()\"';`,]+)"  # numbers and symbols
    r")",
    re.DOTALL,
)

# A token that starts like a number must parse as one
NUMERIC_START_RE = re.compile(r"[+-]?\.?\d")
INT_RE = re.compile(r"[+-]?\d+")
FLOAT_RE = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+)(?:[eE][+-]?\d+)?")


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        if source[pos].isspace():
            pos += 1
            continue
        m = TOKEN_RE.match(source, pos)
        if not m or m.end() == pos:
            raise LispSyntaxError(f"Unexpected char at {pos}: {source[pos]!r}", text=source[pos])
        pos = m.end()
        if m.group("comment"):
            continue
        for nm in ("lparen", "rparen", "atom"):
            if m.group(nm):
                yield nm, m.group(nm)
                break


def parse_atom(token: str) -> SExpression:
    """Classify a single atom token as int, float or Symbol."""
    if NUMERIC_START_RE.match(token):
        try:
            if "." not in token:
                if INT_RE.fullmatch(token):
                    value = int(token)
                    if value.bit_length() <= MAX_INT_BITS:
                        return value
            elif FLOAT_RE.fullmatch(token):
                value = float(token)
                # 1.0e400 overflows to inf
                if math.isfinite(value):
                    return value
        except ValueError:
            # int() refuses literals past the interpreter's digit limit
            raise LispSyntaxError(f"Invalid number: {token}", text=token) from None
        raise LispSyntaxError(f"Invalid number: {token}", text=token)
    return Symbol(token)


class TokenStream:
    def __init__(self, token_iter: Iterable[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> SExpression:
        """Parse one datum; returns None at end of input."""
        tok_type, tok_val = self.peek()
        if tok_type is None:
            return None

        if tok_type == "atom":
            self.advance()
            return parse_atom(tok_val)

        if tok_type == "rparen":
            raise LispSyntaxError("Unmatched ')'", text=")")

        # List: an explicit stack keeps deep nesting off the Python call stack
        self.advance()
        stack: list[list[SExpression]] = [[]]
        while stack:
            tok_type, tok_val = self.advance()
            if tok_type is None:
                raise LispSyntaxError("Unmatched '('", text="(")
            if tok_type == "lparen":
                stack.append([])
            elif tok_type == "rparen":
                done = stack.pop()
                if not stack:
                    return done
                stack[-1].append(done)
            else:
                stack[-1].append(parse_atom(tok_val))
        raise AssertionError("unreachable")

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def read(text: str) -> SExpression:
    """Read exactly one datum from `text`.

    Raises LispSyntaxError for empty input, unbalanced parentheses, invalid
    numbers, or anything left over after the first datum.
    """
    stream = TokenStream(lex(text))
    if stream.peek()[0] is None:
        raise LispSyntaxError("Empty expression", text=text)
    expr = stream.parse_expr()
    tok_type, tok_val = stream.peek()
    if tok_type == "rparen":
        raise LispSyntaxError("Unmatched ')'", text=")")
    if tok_type is not None:
        raise LispSyntaxError(f"Unexpected data after expression: {tok_val}", text=tok_val)
    return expr


def read_all(text: str) -> list[SExpression]:
    """Read every top-level datum in `text`, in order."""
    return list(TokenStream(lex(text)).parse_all())
