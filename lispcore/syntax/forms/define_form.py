from lispcore import SExpression
from lispcore.errors import LispSyntaxError
from lispcore.syntax import BuilderFn, RESERVED_NAMES
from lispcore.types.expression import Definition, Expression
from lispcore.types.symbol import Symbol


def define_form(tail: list[SExpression], build_fn: BuilderFn) -> Expression:
    """
    (define name value)
    The name is bound verbatim; only the value is built as an expression.
    """
    if len(tail) != 2:
        raise LispSyntaxError("define requires exactly a name and a value", text="define")

    name, val_expr = tail
    if not isinstance(name, Symbol):
        raise LispSyntaxError(f"define requires a symbol name, got {name!r}", text=str(name))
    if name.id in RESERVED_NAMES:
        raise LispSyntaxError(f"Cannot redefine reserved name {name}", text=name.id)
    return Definition(name, build_fn(val_expr))
