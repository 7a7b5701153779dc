"""Runtime environment for lispcore.

The Environment stores bindings of Symbols to evaluated numbers and supports
nested scopes via an `outer` link. A session only ever uses its root frame,
but lookups walk the chain so a child frame can shadow an outer one.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from lispcore import Number
from lispcore.errors import LispSyntaxError, UndefinedVariableError
from lispcore.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to numbers."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, Number] = {}
        self.outer: Environment | None = outer

    def define(self, name: Symbol, value: Number) -> None:
        """Bind `name` to `value` in this frame, replacing any existing binding.

        Raises LispSyntaxError if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise LispSyntaxError(f"Cannot define {name!r} as a symbol", text=str(name))
        self.vars[name] = value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: Symbol) -> Number:
        """Look up the value bound to `name`, innermost frame first.

        Raises UndefinedVariableError if no frame binds it.
        """
        env = self.find(name)
        if env is None:
            raise UndefinedVariableError(str(name))
        return env.vars[name]

    def child(self) -> Environment:
        """Return a new empty frame whose outer scope is this one."""
        return Environment(outer=self)

    def bindings(self) -> dict[str, Number]:
        """Snapshot of this frame keyed by name; mutating it never touches the frame."""
        return {str(k): v for k, v in self.vars.items()}

    def __contains__(self, name: object) -> bool:
        return isinstance(name, Symbol) and self.find(name) is not None

    def __len__(self) -> int:
        return len(self.vars)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        chain = []
        env: Optional[Environment] = self
        while env is not None:
            with StringIO() as env_buf:
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
            env = env.outer
        return f"<Environment chain: {' -> '.join(chain)}>"
