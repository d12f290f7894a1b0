"""
Runtime error handling for the Sigma interpreter.

Evaluation stops at the first error. Errors are anchored to the token of the
node being evaluated: the operator of a binary expression, the name of a
variable or function, the `import` keyword.
"""

import difflib
from typing import Any, Iterable

from ..diagnostics import SigmaError, ErrorKind
from ..lexer.tokens import Token
from .value import Value


class EvaluationError(SigmaError):
    """Exception raised when evaluating an expression fails."""

    def __init__(self, kind: ErrorKind, token: Token, *args: Any, help_text: str = None):
        super().__init__(kind, token.location, *args, help_text=help_text)
        self.token = token


def create_runtime_error(kind: ErrorKind, token: Token, *args: Any) -> EvaluationError:
    """Create a runtime error of the given kind at `token`."""
    return EvaluationError(kind, token, *args)


def create_undefined_name_error(kind: ErrorKind, token: Token, known: Iterable[str]) -> EvaluationError:
    """Create an undefined variable/function error, suggesting close matches."""
    help_text = None
    similar = difflib.get_close_matches(token.lexeme, list(known), n=1)
    if similar:
        help_text = f"Did you mean '{similar[0]}'?"
    return EvaluationError(kind, token, help_text=help_text)


def create_units_error(kind: ErrorKind, operator: Token, left: Value, right: Value) -> EvaluationError:
    """Create an error for operands whose dimensions cannot be combined."""
    def describe(value: Value) -> str:
        return "dimensionless" if value.is_dimensionless() else f"[{value.dimension.text}]"

    help_text = f"Left operand is {describe(left)}, right operand is {describe(right)}."
    return EvaluationError(kind, operator, help_text=help_text)
