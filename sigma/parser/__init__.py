"""
Sigma Parser Package

Implements a Pratt-based recursive descent parser for calculator statements
and the expression tree it produces.

Key Features:
- Operator precedence table with right-associative '^'
- Postfix factorial and prefix negation
- Bracketed unit expressions attached to number literals
- Stops at the first syntax error with the offending token's position
"""

from .ast_nodes import (
    ASTNodeType, ASTVisitor, Expression,
    Number, Unary, Binary, Grouping, Variable, Call, Assign, Import,
)
from .parser import Parser, Precedence, parse_tokens
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser",
    "Precedence",
    "parse_tokens",

    # Expression nodes
    "ASTNodeType", "ASTVisitor", "Expression",
    "Number", "Unary", "Binary", "Grouping", "Variable", "Call", "Assign", "Import",

    # Error handling
    "ParseError",
]
