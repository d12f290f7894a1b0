"""
Test suite for the Sigma scanner.

Tests cover:
- Operators, punctuation and keywords
- Number literals with group separators and scientific notation
- Strings, comments and line tracking
- Unexpected character errors and their positions
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from sigma.diagnostics import ErrorKind
from sigma.lexer import Scanner, TokenType, LexerError, SourceLocation


class TestScanner(unittest.TestCase):
    """Test cases for the scanner."""

    def _scan(self, source: str):
        return Scanner(source).scan()

    def _types(self, source: str):
        return [token.type for token in self._scan(source)]

    def test_empty_input(self):
        """Empty input yields only EOF."""
        tokens = self._scan("")
        self.assertEqual([t.type for t in tokens], [TokenType.EOF])
        self.assertEqual(tokens[0].location, SourceLocation(0, 0))

    def test_operators_and_punctuation(self):
        """Every single-character token is recognized."""
        self.assertEqual(
            self._types("()[]-+*/^!=,"),
            [
                TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN,
                TokenType.LEFT_BRACKET, TokenType.RIGHT_BRACKET,
                TokenType.MINUS, TokenType.PLUS, TokenType.STAR, TokenType.SLASH,
                TokenType.CARET, TokenType.BANG, TokenType.EQUALS, TokenType.COMMA,
                TokenType.EOF,
            ],
        )

    def test_positions_are_last_character(self):
        """Token positions point at the last character of the lexeme."""
        tokens = self._scan("123 + x")
        self.assertEqual(tokens[0].lexeme, "123")
        self.assertEqual(tokens[0].pos, 2)
        self.assertEqual(tokens[1].pos, 4)
        self.assertEqual(tokens[2].pos, 6)
        self.assertEqual(tokens[3].location, SourceLocation(0, 7))

    def test_group_separators(self):
        """Underscores and commas between digits stay inside the number."""
        for literal in ("3_321", "1,000.5", "1_000_000"):
            tokens = self._scan(literal)
            self.assertEqual(tokens[0].type, TokenType.NUMBER)
            self.assertEqual(tokens[0].lexeme, literal)
            self.assertEqual(len(tokens), 2)

    def test_comma_before_space_is_punctuation(self):
        """A comma not followed by a digit is a separate token."""
        self.assertEqual(
            self._types("8, 3"),
            [TokenType.NUMBER, TokenType.COMMA, TokenType.NUMBER, TokenType.EOF],
        )
        tokens = self._scan("8,3")
        self.assertEqual(tokens[0].lexeme, "8,3")

    def test_trailing_separator_is_not_part_of_number(self):
        """'1_' stops before the underscore, which is not a valid token."""
        with self.assertRaises(LexerError) as context:
            self._scan("1_")
        self.assertEqual(context.exception.kind, ErrorKind.UNEXPECTED_CHARACTER)
        self.assertEqual(context.exception.pos, 1)

    def test_decimal_numbers(self):
        """Decimals may start with a dot."""
        self.assertEqual(self._scan("3.25")[0].lexeme, "3.25")
        self.assertEqual(self._scan(".5")[0].lexeme, ".5")

    def test_scientific_notation(self):
        """An exponent is kept in the literal only when digits follow."""
        self.assertEqual(self._scan("6.022e23")[0].lexeme, "6.022e23")
        self.assertEqual(self._scan("2E-3")[0].lexeme, "2E-3")
        self.assertEqual(self._scan("1e+9")[0].lexeme, "1e+9")

        tokens = self._scan("2e")
        self.assertEqual([t.lexeme for t in tokens[:2]], ["2", "e"])
        self.assertEqual(tokens[1].type, TokenType.IDENTIFIER)

        self.assertEqual(
            self._types("2e-x"),
            [TokenType.NUMBER, TokenType.IDENTIFIER, TokenType.MINUS,
             TokenType.IDENTIFIER, TokenType.EOF],
        )

    def test_second_dot_is_rejected(self):
        """A second dot directly after a number is an error at that dot."""
        with self.assertRaises(LexerError) as context:
            self._scan("1.2.3")
        self.assertEqual(context.exception.pos, 3)

        with self.assertRaises(LexerError) as context:
            self._scan("1e5.3")
        self.assertEqual(context.exception.pos, 3)

    def test_lone_dot_is_rejected(self):
        """A dot without digits is not a number."""
        with self.assertRaises(LexerError) as context:
            self._scan("2 + .")
        self.assertEqual(context.exception.kind, ErrorKind.UNEXPECTED_CHARACTER)
        self.assertEqual(context.exception.pos, 4)

        with self.assertRaises(LexerError) as context:
            self._scan(".e5")
        self.assertEqual(context.exception.pos, 0)

    def test_identifiers_and_keywords(self):
        """Identifiers take letters, digits and underscores; 'import' is a keyword."""
        tokens = self._scan("x_1 import imports")
        self.assertEqual(tokens[0].type, TokenType.IDENTIFIER)
        self.assertEqual(tokens[0].lexeme, "x_1")
        self.assertEqual(tokens[1].type, TokenType.IMPORT)
        self.assertEqual(tokens[2].type, TokenType.IDENTIFIER)

    def test_string_literal(self):
        """The value of a string token is its contents."""
        token = self._scan('import "constants.sigma"')[1]
        self.assertEqual(token.type, TokenType.STRING)
        self.assertEqual(token.lexeme, '"constants.sigma"')
        self.assertEqual(token.value, "constants.sigma")

    def test_unterminated_string(self):
        """An unterminated string is reported at its opening quote."""
        with self.assertRaises(LexerError) as context:
            self._scan('import "abc')
        self.assertEqual(context.exception.pos, 7)

        with self.assertRaises(LexerError):
            self._scan('"abc\n"')

    def test_comments_and_lines(self):
        """Comments run to the end of the line; newlines advance the line."""
        tokens = self._scan("1 # one\n2\n\n  3 # end")
        numbers = [t for t in tokens if t.type == TokenType.NUMBER]
        self.assertEqual([t.line for t in numbers], [0, 1, 3])
        self.assertEqual(numbers[1].pos, 0)
        self.assertEqual(numbers[2].pos, 2)
        self.assertEqual(tokens[-1].line, 3)

    def test_whitespace_and_tabs(self):
        """Spaces and carriage returns vanish; tabs become TAB tokens."""
        self.assertEqual(
            self._types("1\t+ 2\r\n"),
            [TokenType.NUMBER, TokenType.TAB, TokenType.PLUS, TokenType.NUMBER, TokenType.EOF],
        )

    def test_unexpected_character(self):
        """Any other character fails the scan at its position."""
        with self.assertRaises(LexerError) as context:
            self._scan("1 +\n  $")
        error = context.exception
        self.assertEqual(error.kind, ErrorKind.UNEXPECTED_CHARACTER)
        self.assertEqual((error.line, error.pos), (1, 2))
        self.assertEqual(error.message, "Unexpected character")
        self.assertEqual(str(error), "Error [2:3] Unexpected character")


if __name__ == "__main__":
    unittest.main()
