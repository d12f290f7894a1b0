"""
Sigma Scanner - turns calculator source text into tokens

One pass, left to right, no recovery: the first character that starts no
valid token fails the whole scan. Scientific notation stays inside the number
lexeme; splitting it apart is the interpreter's job.
"""

from typing import List, Optional

from .tokens import (
    Token, TokenType, SourceLocation, KEYWORDS, SINGLE_CHAR_TOKENS, NUMBER_SEPARATORS
)
from .errors import create_unexpected_character_error


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_letter(char: str) -> bool:
    return "a" <= char <= "z" or "A" <= char <= "Z"


class Scanner:
    """
    Sigma lexical analyzer.

    Tracks the current offset, line and column while consuming the source.
    Every token records the column of its last character.
    """

    def __init__(self, source: str):
        """
        Initialize the scanner with source text.

        Args:
            source: Calculator source (one REPL line or a whole file)
        """
        self.source = source
        self.start = 0          # offset where the current token began
        self.start_column = 0   # column where the current token began
        self.current = 0        # offset of the next unread character
        self.line = 0
        self.column = 0         # characters consumed on the current line
        self.tokens: List[Token] = []

    def scan(self) -> List[Token]:
        """
        Scan the entire source.

        Returns:
            List of tokens ending with an EOF token

        Raises:
            LexerError: On the first unexpected character
        """
        self.start = self.start_column = self.current = 0
        self.line = self.column = 0
        self.tokens = []

        while not self._is_at_end():
            self.start = self.current
            self.start_column = self.column
            self._scan_token()

        self.tokens.append(Token(TokenType.EOF, "", "", SourceLocation(self.line, self.column)))
        return self.tokens

    def _scan_token(self):
        char = self._advance()

        if char in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[char])
        elif _is_digit(char) or char == ".":
            self._scan_number()
        elif _is_letter(char):
            self._scan_identifier()
        elif char == '"':
            self._scan_string()
        elif char == "#":
            self._skip_comment()
        elif char in (" ", "\r"):
            pass
        elif char == "\n":
            self._newline()
        else:
            raise create_unexpected_character_error(char, self._last_location())

    def _scan_number(self):
        """Scan a number literal; the first character is already consumed."""
        self._consume_digits()

        has_dot = self.source[self.start] == "."
        if not has_dot and self._peek() == "." and _is_digit(self._peek_next()):
            has_dot = True
            self._advance()
            self._consume_digits()

        if self.source[self.start:self.current] == ".":
            raise create_unexpected_character_error(".", self._last_location())

        has_exponent = self._peek() in ("e", "E") and self._starts_exponent()
        if has_exponent:
            self._advance()
            if self._peek() in ("+", "-"):
                self._advance()
            while _is_digit(self._peek()):
                self._advance()

        if (has_dot or has_exponent) and self._peek() == ".":
            self._advance()
            raise create_unexpected_character_error(".", self._last_location())

        self._add_token(TokenType.NUMBER)

    def _consume_digits(self):
        # separators only count when a digit follows, so "1_" stops before '_'
        while _is_digit(self._peek()) or (
            self._peek() in NUMBER_SEPARATORS and _is_digit(self._peek_next())
        ):
            self._advance()

    def _starts_exponent(self) -> bool:
        after = self._peek_next()
        if _is_digit(after):
            return True
        return after in ("+", "-") and _is_digit(self._peek(2))

    def _scan_identifier(self):
        while _is_letter(self._peek()) or _is_digit(self._peek()) or self._peek() == "_":
            self._advance()

        lexeme = self.source[self.start:self.current]
        self._add_token(KEYWORDS.get(lexeme, TokenType.IDENTIFIER))

    def _scan_string(self):
        while not self._is_at_end() and self._peek() not in ('"', "\n"):
            self._advance()

        if self._peek() != '"':
            raise create_unexpected_character_error(
                '"', SourceLocation(self.line, self.start_column)
            )

        self._advance()  # closing quote
        contents = self.source[self.start + 1:self.current - 1]
        self._add_token(TokenType.STRING, contents)

    def _skip_comment(self):
        while not self._is_at_end() and self._peek() != "\n":
            self._advance()
        if not self._is_at_end():
            self._advance()
            self._newline()

    def _newline(self):
        self.line += 1
        self.column = 0

    def _add_token(self, token_type: TokenType, value: Optional[str] = None):
        lexeme = self.source[self.start:self.current]
        self.tokens.append(Token(
            token_type,
            lexeme,
            lexeme if value is None else value,
            self._last_location(),
        ))

    def _last_location(self) -> SourceLocation:
        """Location of the most recently consumed character."""
        return SourceLocation(self.line, self.column - 1)

    def _advance(self) -> str:
        char = self.source[self.current]
        self.current += 1
        self.column += 1
        return char

    def _peek(self, offset: int = 0) -> str:
        """Peek ahead without advancing; '\\0' past the end."""
        index = self.current + offset
        if index < len(self.source):
            return self.source[index]
        return "\0"

    def _peek_next(self) -> str:
        return self._peek(1)

    def _is_at_end(self) -> bool:
        return self.current >= len(self.source)


def scan_string(source: str) -> List[Token]:
    """
    Convenience function to scan a source string.

    Raises:
        LexerError: If scanning fails
    """
    return Scanner(source).scan()
