"""
Error taxonomy and diagnostic rendering for Sigma.

Every failure in the pipeline (scanning, parsing, evaluation) is reported as
a SigmaError anchored to a source position. The stage-specific subclasses live
next to the stage that raises them; this module holds what they share: the
closed set of error kinds, their messages and codes, and the renderer used by
the command line and the REPL.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from rich.console import Console
from rich.text import Text

from .lexer.tokens import SourceLocation


class ErrorKind(Enum):
    """Closed set of error categories, grouped by the stage that raises them."""

    # Lexical
    UNEXPECTED_CHARACTER = "L001"

    # Syntactic
    EXPECTED_EXPRESSION = "P001"
    EXPECTED_FUNCTION_NAME = "P002"
    EXPECTED_FILENAME = "P003"
    MISSING_RIGHT_PAREN = "P004"
    MISSING_RIGHT_BRACKET = "P005"
    MISSING_COMMA = "P006"
    INVALID_ASSIGNMENT = "P007"

    # Runtime
    DIVISION_BY_ZERO = "R001"
    FACTORIAL_DOMAIN = "R002"
    INVALID_UNITS_ADD = "R003"
    INVALID_UNITS_SUB = "R004"
    INVALID_UNITS_POW = "R005"
    UNDEFINED_VARIABLE = "R006"
    UNDEFINED_FUNCTION = "R007"
    INVALID_NUMBER_OF_ARGS = "R008"
    EXPECT_DIMENSIONLESS = "R009"
    INVALID_DOMAIN = "R010"
    CANNOT_READ_FILE = "R011"

    @property
    def code(self) -> str:
        return self.value


ERROR_MESSAGES = {
    ErrorKind.UNEXPECTED_CHARACTER: "Unexpected character",
    ErrorKind.EXPECTED_EXPRESSION: "Unable to parse expression",
    ErrorKind.EXPECTED_FUNCTION_NAME: "Expected a function name before '('",
    ErrorKind.EXPECTED_FILENAME: "Expected a filename string after 'import'",
    ErrorKind.MISSING_RIGHT_PAREN: "Expected ')' after opening '('",
    ErrorKind.MISSING_RIGHT_BRACKET: "Expected ']' after opening '['",
    ErrorKind.MISSING_COMMA: "Expected ',' after a function argument",
    ErrorKind.INVALID_ASSIGNMENT: "Can only assign values to variables",
    ErrorKind.DIVISION_BY_ZERO: "Division by zero!",
    ErrorKind.FACTORIAL_DOMAIN: "Factorial is only defined for natural numbers",
    ErrorKind.INVALID_UNITS_ADD: "Cannot add values with different units",
    ErrorKind.INVALID_UNITS_SUB: "Cannot subtract values with different units",
    ErrorKind.INVALID_UNITS_POW: "Can only raise to a power of dimensionless values",
    ErrorKind.UNDEFINED_VARIABLE: "Undefined variable",
    ErrorKind.UNDEFINED_FUNCTION: "Undefined function",
}


def format_message(kind: ErrorKind, args: Tuple[Any, ...] = ()) -> str:
    """Build the user-facing message for an error kind and its arguments."""
    if kind is ErrorKind.INVALID_NUMBER_OF_ARGS:
        name, expected, given = args
        plural = "" if expected == 1 else "s"
        verb = "was" if given in (0, 1) else "were"
        return f"'{name}' takes {expected} argument{plural} but {given} {verb} provided"
    if kind is ErrorKind.EXPECT_DIMENSIONLESS:
        return f"Can only take '{args[0]}' of dimensionless values"
    if kind is ErrorKind.INVALID_DOMAIN:
        return f"Argument out of the domain of '{args[0]}'"
    if kind is ErrorKind.CANNOT_READ_FILE:
        return f"Cannot read file '{args[0]}'"
    return ERROR_MESSAGES[kind]


@dataclass
class Diagnostic:
    """A single error report: what went wrong and where."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None

    def __str__(self) -> str:
        result = f"{self.severity.upper()}: {self.message}\n"
        result += f"  --> {self.location}\n"
        if self.help_text:
            result += f"  help: {self.help_text}\n"
        return result


class SigmaError(Exception):
    """
    Base exception for every error the calculator reports.

    Carries the error kind, its arguments, and the position of the token that
    triggered it. `filename` and `source` are filled in by the runner so that
    errors raised inside imported files can be shown against the right text.
    """

    def __init__(
        self,
        kind: ErrorKind,
        location: SourceLocation,
        *args: Any,
        help_text: Optional[str] = None,
    ):
        self.kind = kind
        self.details = args
        message = format_message(kind, args)
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=kind.code,
            help_text=help_text,
        )
        self.filename: Optional[str] = None
        self.source: Optional[str] = None

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def line(self) -> int:
        return self.diagnostic.location.line

    @property
    def pos(self) -> int:
        return self.diagnostic.location.pos

    def __str__(self) -> str:
        return f"Error [{self.line + 1}:{self.pos + 1}] {self.message}"


def render_error(error: SigmaError, source: str, console: Optional[Console] = None) -> None:
    """
    Print an error with its source line and a caret under the column.

        Error [1:3] Division by zero!
             |
           1 | 1 / 0
             |   ^
    """
    console = console or Console(stderr=True, highlight=False)
    if error.source is not None:
        source = error.source

    lines = source.splitlines() or [""]
    line = min(len(lines) - 1, error.line)

    header = Text()
    header.append("Error", style="bold red")
    if error.filename:
        header.append(f" {error.filename}")
    header.append(f" [{line + 1}:{error.pos + 1}] ")
    header.append(error.message, style="bold")
    console.print(header)

    gutter = Text("     |", style="bold blue")
    console.print(gutter)

    numbered = Text(f"{line + 1:>4} ")
    numbered.append("|", style="bold blue")
    numbered.append(f" {lines[line]}")
    console.print(numbered)

    caret = Text("     |", style="bold blue")
    caret.append(" " * (error.pos + 1))
    caret.append("^", style="bold red")
    console.print(caret)
