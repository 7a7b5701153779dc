from __future__ import annotations

from lispcore import Number
from lispcore.errors import LispSyntaxError
from lispcore.reader.parser import lex, TokenStream, read
from lispcore.syntax.builder import build
from lispcore.evaluation.evaluator import evaluate
from lispcore.types.environment import Environment


def interpret(text: str, env: Environment) -> Number:
    """Read, build and evaluate a single expression against `env`."""
    try:
        expr = build(read(text))
        return evaluate(expr, env)
    except RecursionError:
        raise LispSyntaxError("Expression is nested too deeply", text=text[:80]) from None


class Interpreter:
    """
    Convenience wrapper that keeps one Environment alive across calls.
    The session manager uses `interpret` directly with per-session environments.
    """

    def __init__(self, env: Environment | None = None):
        self.env: Environment = env if env is not None else Environment()

    def eval(self, code: str) -> Number:
        return interpret(code, self.env)

    def eval_all(self, code: str) -> list[Number]:
        """Evaluate every top-level form in `code`, in order."""
        stream = TokenStream(lex(code))
        results: list[Number] = []
        try:
            for form in stream.parse_all():
                results.append(evaluate(build(form), self.env))
        except RecursionError:
            raise LispSyntaxError("Expression is nested too deeply", text=code[:80]) from None
        return results
