from __future__ import annotations
import re
import sys

from lispcore.errors import LispSyntaxError

# Anything the lexer would read back as a single atom
_NAME_RE = re.compile(r"[^\s()\"';`,]+")


class Symbol:
    """Interned, case-sensitive name. Only names the reader could produce are allowed."""

    __slots__ = ("id",)

    def __init__(self, name: str):
        if not Symbol.is_valid_name(name):
            raise LispSyntaxError(f"Invalid symbol name: {name!r}", text=str(name))
        # Intern to ensure fast equality/hash and reduce memory
        self.id = sys.intern(name)

    @staticmethod
    def is_valid_name(name: object) -> bool:
        return isinstance(name, str) and _NAME_RE.fullmatch(name) is not None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self):
        return f"Symbol({self.id!r})"

    def __str__(self):
        return self.id
