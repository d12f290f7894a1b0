"""
Sigma Lexer Package

Implements the scanner that turns calculator input into tokens.

Key Features:
- Number literals with digit-group separators (3_321, 1,000) and exponents
- Identifiers, the `import` keyword and string literals for filenames
- Line comments starting with '#'
- 0-based line/column tracking for caret diagnostics
"""

from .tokens import Token, TokenType, SourceLocation
from .scanner import Scanner, scan_string
from .errors import LexerError

__all__ = [
    "Scanner",
    "scan_string",
    "Token",
    "TokenType",
    "SourceLocation",
    "LexerError",
]
