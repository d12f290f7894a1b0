"""
Error handling for the Sigma parser.

Parsing stops at the first syntax error; each error is anchored to the token
the parser was looking at when it gave up.
"""

from ..diagnostics import SigmaError, ErrorKind
from ..lexer.tokens import Token, TokenType


class ParseError(SigmaError):
    """
    Exception raised when the parser encounters a syntax error.

    Keeps the offending token for callers that want more than its position.
    """

    def __init__(self, kind: ErrorKind, token: Token, help_text: str = None):
        super().__init__(kind, token.location, help_text=help_text)
        self.token = token


# What to say when a specific closing token is missing
MISSING_TOKEN_HELP = {
    TokenType.RIGHT_PAREN: "Add a closing parenthesis ')'",
    TokenType.RIGHT_BRACKET: "Add a closing bracket ']' after the unit expression",
    TokenType.COMMA: "Separate function arguments with ', ' (a comma directly between digits groups them)",
}


def create_parse_error(kind: ErrorKind, found: Token) -> ParseError:
    """Create a parse error of the given kind at the offending token."""
    if found.type == TokenType.EOF:
        help_text = "The input ended before the expression was complete."
    else:
        help_text = f"Found '{found.lexeme}' here."
    return ParseError(kind, found, help_text)


def create_missing_token_error(expected: TokenType, kind: ErrorKind, found: Token) -> ParseError:
    """Create an error for a closing or separating token that is not there."""
    return ParseError(kind, found, MISSING_TOKEN_HELP.get(expected))
