"""Typed expression tree produced by the builder and consumed by the evaluator.

Nodes are frozen dataclasses forming a closed union. Operations over the tree
(evaluation, printing) are plain functions matching on the node class, so a new
operation never needs to touch the node definitions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from lispcore import Number
from lispcore.types.symbol import Symbol


@dataclass(frozen=True)
class Literal:
    value: Number


@dataclass(frozen=True)
class Reference:
    name: Symbol


@dataclass(frozen=True)
class Definition:
    name: Symbol
    value: Expression


@dataclass(frozen=True)
class Conditional:
    test: Expression
    then: Expression
    otherwise: Expression


@dataclass(frozen=True)
class Application:
    operator: Symbol
    arguments: tuple[Expression, ...]


Expression = Union[Literal, Reference, Definition, Conditional, Application]
