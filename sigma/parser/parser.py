"""
Sigma Pratt Parser Implementation

Top-down operator precedence parser for calculator statements. The binding
powers below reproduce the calculator grammar, tightest first:

    primary / call        numbers (with [units]), (groups), names, f(args)
    factorial             postfix '!'
    unary                 prefix '-'
    exponent              '^', right associative, base is a unary
    factor                '*', '/'
    term                  '+', '-'
    assignment            name '=' term
    expression            'import "file"' | assignment

Statements are parsed back to back until EOF; there is no error recovery.
"""

from typing import List, Dict, Callable
from enum import IntEnum

from ..diagnostics import ErrorKind
from ..lexer.tokens import Token, TokenType
from .ast_nodes import (
    Expression, Number, Unary, Binary, Grouping, Variable, Call, Assign, Import
)
from .errors import create_parse_error, create_missing_token_error


class Precedence(IntEnum):
    """Operator precedence levels for Pratt parsing."""
    NONE = 0
    ASSIGNMENT = 1      # =
    TERM = 2            # +, -
    FACTOR = 3          # *, /
    EXPONENT = 4        # ^
    UNARY = 5           # -
    FACTORIAL = 6       # !
    CALL = 7            # function calls
    PRIMARY = 8         # literals, identifiers, parentheses


class Parser:
    """
    Sigma Pratt parser.

    Consumes the scanner's token list and produces one expression tree per
    top-level statement.
    """

    def __init__(self, tokens: List[Token]):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the scanner, ending with EOF
        """
        # tabs only matter to the scanner's column bookkeeping
        self.tokens = [token for token in tokens if token.type != TokenType.TAB]
        self.current = 0

        self._init_parsing_tables()

    def _init_parsing_tables(self):
        """Initialize operator precedence and parsing function tables."""

        # Prefix parsing functions (for tokens that can start expressions)
        self.prefix_parsers: Dict[TokenType, Callable[[], Expression]] = {
            TokenType.NUMBER: self._parse_number,
            TokenType.IDENTIFIER: self._parse_identifier,
            TokenType.LEFT_PAREN: self._parse_grouping,
            TokenType.MINUS: self._parse_unary,
        }

        # Infix parsing functions (for binary and postfix operators)
        self.infix_parsers: Dict[TokenType, Callable[[Expression], Expression]] = {
            TokenType.PLUS: self._parse_binary,
            TokenType.MINUS: self._parse_binary,
            TokenType.STAR: self._parse_binary,
            TokenType.SLASH: self._parse_binary,
            TokenType.CARET: self._parse_exponent,
            TokenType.BANG: self._parse_factorial,
            TokenType.EQUALS: self._parse_assignment,
        }

        # Operator precedence table
        self.precedences: Dict[TokenType, Precedence] = {
            TokenType.EQUALS: Precedence.ASSIGNMENT,
            TokenType.PLUS: Precedence.TERM,
            TokenType.MINUS: Precedence.TERM,
            TokenType.STAR: Precedence.FACTOR,
            TokenType.SLASH: Precedence.FACTOR,
            TokenType.CARET: Precedence.EXPONENT,
            TokenType.BANG: Precedence.FACTORIAL,
        }

    def parse(self) -> List[Expression]:
        """
        Parse the token stream into expression trees.

        Returns:
            One expression per top-level statement (empty for empty input)

        Raises:
            ParseError: On the first syntax error
        """
        expressions = []
        while not self._is_at_end():
            expressions.append(self._parse_expression())
        return expressions

    def _parse_expression(self) -> Expression:
        if self._check(TokenType.IMPORT):
            return self._parse_import()
        return self._parse_precedence(Precedence.ASSIGNMENT)

    def _parse_precedence(self, precedence: Precedence) -> Expression:
        """Parse expression with given minimum precedence."""
        prefix_parser = self.prefix_parsers.get(self._peek().type)
        if prefix_parser is None:
            raise create_parse_error(ErrorKind.EXPECTED_EXPRESSION, self._peek())

        left = prefix_parser()

        while precedence <= self._get_precedence(self._peek().type):
            infix_parser = self.infix_parsers[self._peek().type]
            left = infix_parser(left)

        return left

    def _get_precedence(self, token_type: TokenType) -> Precedence:
        """Get precedence for a token type."""
        return self.precedences.get(token_type, Precedence.NONE)

    # Statements

    def _parse_import(self) -> Import:
        keyword = self._advance()
        filename = self._peek()
        if filename.type != TokenType.STRING:
            raise create_parse_error(ErrorKind.EXPECTED_FILENAME, filename)
        self._advance()
        return Import(keyword, filename.value)

    def _parse_assignment(self, target: Expression) -> Assign:
        equals = self._advance()
        value = self._parse_precedence(Precedence.TERM)

        if not isinstance(target, Variable):
            raise create_parse_error(ErrorKind.INVALID_ASSIGNMENT, equals)

        return Assign(target.name, value)

    # Prefix parsers (tokens that can start expressions)

    def _parse_number(self) -> Number:
        token = self._advance()

        if self._check(TokenType.LEFT_PAREN):
            raise create_parse_error(ErrorKind.EXPECTED_FUNCTION_NAME, token)

        dimension = None
        if self._match(TokenType.LEFT_BRACKET):
            dimension = self._parse_expression()
            self._consume(TokenType.RIGHT_BRACKET, ErrorKind.MISSING_RIGHT_BRACKET)

        return Number(token, dimension)

    def _parse_identifier(self) -> Expression:
        token = self._advance()
        if self._check(TokenType.LEFT_PAREN):
            return self._parse_call(token)
        return Variable(token)

    def _parse_call(self, name: Token) -> Call:
        self._advance()  # '('

        arguments: List[Expression] = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                arguments.append(self._parse_precedence(Precedence.TERM))

                if self._check(TokenType.RIGHT_PAREN) or self._is_at_end():
                    break
                self._consume(TokenType.COMMA, ErrorKind.MISSING_COMMA)

        self._consume(TokenType.RIGHT_PAREN, ErrorKind.MISSING_RIGHT_PAREN)
        return Call(name, arguments)

    def _parse_grouping(self) -> Grouping:
        paren = self._advance()
        # imports are statements, not values
        expression = self._parse_precedence(Precedence.ASSIGNMENT)
        self._consume(TokenType.RIGHT_PAREN, ErrorKind.MISSING_RIGHT_PAREN)
        return Grouping(paren, expression)

    def _parse_unary(self) -> Unary:
        operator = self._advance()
        # right recursive, so '--x' nests
        operand = self._parse_precedence(Precedence.UNARY)
        return Unary(operator, operand)

    # Infix parsers

    def _parse_binary(self, left: Expression) -> Binary:
        """Left associative binary operators."""
        operator = self._advance()
        precedence = self._get_precedence(operator.type)
        right = self._parse_precedence(Precedence(precedence + 1))
        return Binary(left, operator, right)

    def _parse_exponent(self, left: Expression) -> Binary:
        """'^' binds right to left: 2^3^2 is 2^(3^2)."""
        operator = self._advance()
        right = self._parse_precedence(Precedence.EXPONENT)
        return Binary(left, operator, right)

    def _parse_factorial(self, left: Expression) -> Unary:
        operator = self._advance()
        if self._check(TokenType.BANG):
            # a single '!' per operand
            raise create_parse_error(ErrorKind.EXPECTED_EXPRESSION, self._peek())
        return Unary(operator, left)

    # Token stream helpers

    def _consume(self, token_type: TokenType, error_kind: ErrorKind) -> Token:
        if self._check(token_type):
            return self._advance()
        raise create_missing_token_error(token_type, error_kind, self._peek())

    def _match(self, token_type: TokenType) -> bool:
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        return self._peek().type == token_type

    def _advance(self) -> Token:
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        return self.tokens[self.current]

    def _previous(self) -> Token:
        return self.tokens[self.current - 1]


def parse_tokens(tokens: List[Token]) -> List[Expression]:
    """
    Convenience function to parse a token list.

    Raises:
        ParseError: If parsing fails
    """
    return Parser(tokens).parse()
