"""
Error handling for the Sigma scanner.

The scanner fails on the first character it cannot place in a token; there is
no recovery, so a single LexerError describes the whole failure.
"""

from typing import Optional

from ..diagnostics import SigmaError, ErrorKind
from .tokens import SourceLocation


class LexerError(SigmaError):
    """Exception raised when the scanner meets a character it cannot tokenize."""


def create_unexpected_character_error(char: str, location: SourceLocation,
                                      help_text: Optional[str] = None) -> LexerError:
    """Create an error for a character that starts no valid token."""
    if help_text is None:
        if char == ".":
            help_text = "A number needs at least one digit and at most one '.'."
        elif char == '"':
            help_text = "String literals must be closed on the same line."
        elif char.isprintable():
            help_text = f"The character '{char}' is not valid in an expression."
        else:
            help_text = f"Non-printable character (U+{ord(char):04X}) is not allowed."

    return LexerError(ErrorKind.UNEXPECTED_CHARACTER, location, help_text=help_text)
