"""Registry of keyword forms for the builder.

Maps Symbols to handler functions that turn the tail of a form into an
Expression. The builder consults this table before the operator table.
"""

from lispcore.types.symbol import Symbol
from lispcore.syntax.forms.define_form import define_form
from lispcore.syntax.forms.if_form import if_form
from lispcore.syntax.forms.application_form import application_form

FORM_BUILDERS = {
    Symbol("define"): define_form,
    Symbol("if"): if_form,
}

__all__ = ["FORM_BUILDERS", "application_form"]
