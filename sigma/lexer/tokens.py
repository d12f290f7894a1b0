"""
Token definitions for the Sigma scanner.

This module defines all token types the calculator understands:
- Arithmetic operators and punctuation
- Literals (numbers, strings)
- Identifiers and the `import` keyword

Positions are 0-based; `pos` is the column of the token's last character.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """
    Enumeration of all token types in Sigma.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of input
    TAB = auto()                    # Literal tab character

    # ========================================================================
    # Literals
    # ========================================================================
    NUMBER = auto()                 # 42, 3_321, 1,000.5, 6.022e23
    STRING = auto()                 # "constants.sigma"

    # ========================================================================
    # Identifiers and Keywords
    # ========================================================================
    IDENTIFIER = auto()             # x, kg, sqrt
    IMPORT = auto()                 # import

    # ========================================================================
    # Operators
    # ========================================================================
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    STAR = auto()                   # *
    SLASH = auto()                  # /
    CARET = auto()                  # ^ (exponentiation)
    BANG = auto()                   # ! (factorial)
    EQUALS = auto()                 # =

    # ========================================================================
    # Punctuation and Delimiters
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACKET = auto()           # [
    RIGHT_BRACKET = auto()          # ]
    COMMA = auto()                  # ,


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source text.

    Used for error reporting: the caret in a diagnostic sits under `pos`.
    """
    line: int
    pos: int

    def __str__(self) -> str:
        return f"{self.line + 1}:{self.pos + 1}"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token.

    Contains the token type, lexeme (raw source text), semantic value
    and source location.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # String contents for STRING, else the lexeme
    location: SourceLocation

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def pos(self) -> int:
        return self.location.pos


KEYWORDS = {
    "import": TokenType.IMPORT,
}

# Single-character tokens map straight to their type
SINGLE_CHAR_TOKENS = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "^": TokenType.CARET,
    "!": TokenType.BANG,
    "=": TokenType.EQUALS,
    ",": TokenType.COMMA,
    "\t": TokenType.TAB,
}

# Digit-group separators allowed inside number literals
NUMBER_SEPARATORS = {"_", ","}
