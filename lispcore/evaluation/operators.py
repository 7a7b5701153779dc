"""Built-in operators.

Arithmetic operators are variadic (two or more arguments) and fold left to
right. Comparisons take exactly two arguments and return 1 or 0 so every
value stays a Number.
"""

from __future__ import annotations

import math
import operator as op
from dataclasses import dataclass
from functools import reduce
from typing import Callable, Optional

from lispcore import MAX_INT_BITS, Number
from lispcore.errors import LispArithmeticError
from lispcore.types.symbol import Symbol


@dataclass(frozen=True)
class Operator:
    symbol: Symbol
    fn: Callable[[list[Number]], Number]
    min_args: int
    max_args: Optional[int] = None

    def accepts(self, n: int) -> bool:
        return n >= self.min_args and (self.max_args is None or n <= self.max_args)

    def arity_description(self) -> str:
        if self.max_args == self.min_args:
            return f"exactly {self.min_args} arguments"
        return f"at least {self.min_args} arguments"

    def __call__(self, args: list[Number]) -> Number:
        return self.fn(args)


# -------------------------------
# Arithmetic
# -------------------------------
def _fold(name: str, fn: Callable[[Number, Number], Number], args: list[Number]) -> Number:
    """Left fold over args; float overflow or an over-wide int becomes LispArithmeticError."""
    try:
        result = reduce(fn, args)
    except OverflowError:
        raise LispArithmeticError(f"Numeric overflow in {name}", operator=name, operands=args) from None
    if isinstance(result, float) and not math.isfinite(result):
        raise LispArithmeticError(f"Numeric overflow in {name}", operator=name, operands=args)
    elif isinstance(result, int) and result.bit_length() > MAX_INT_BITS:
        raise LispArithmeticError(f"Integer overflow in {name}", operator=name, operands=args)
    return result


def add(args: list[Number]) -> Number:
    return _fold("+", op.add, args)


def sub(args: list[Number]) -> Number:
    return _fold("-", op.sub, args)


def mul(args: list[Number]) -> Number:
    return _fold("*", op.mul, args)


def divide2(a: Number, b: Number) -> Number:
    """Exact integer quotient when both are ints and b divides a, float otherwise."""
    if b == 0:
        raise LispArithmeticError("Division by zero", operator="/", operands=[a, b])
    if isinstance(a, int) and isinstance(b, int):
        q, r = divmod(a, b)
        if r == 0:
            return q
    return a / b


def div(args: list[Number]) -> Number:
    return _fold("/", divide2, args)


# -------------------------------
# Comparisons
# -------------------------------
def _comparison(fn: Callable[[Number, Number], bool]) -> Callable[[list[Number]], int]:
    def compare(args: list[Number]) -> int:
        a, b = args
        return 1 if fn(a, b) else 0
    return compare


def _operator(name: str, fn, min_args: int, max_args: Optional[int] = None) -> tuple[Symbol, Operator]:
    sym = Symbol(name)
    return sym, Operator(sym, fn, min_args, max_args)


OPERATORS: dict[Symbol, Operator] = dict([
    _operator("+", add, 2),
    _operator("-", sub, 2),
    _operator("*", mul, 2),
    _operator("/", div, 2),
    _operator(">", _comparison(op.gt), 2, 2),
    _operator("<", _comparison(op.lt), 2, 2),
    _operator(">=", _comparison(op.ge), 2, 2),
    _operator("<=", _comparison(op.le), 2, 2),
    _operator("=", _comparison(op.eq), 2, 2),
])
