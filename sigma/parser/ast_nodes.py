"""
Expression tree node definitions for Sigma.

One tree is built per top-level statement. Every node owns its children
exclusively and keeps the token that anchors error positions; nodes are never
mutated after parsing.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Any
from enum import Enum

from ..lexer.tokens import Token


class ASTNodeType(Enum):
    """Enumeration of all expression node types."""
    NUMBER = "Number"
    UNARY = "Unary"
    BINARY = "Binary"
    GROUPING = "Grouping"
    VARIABLE = "Variable"
    CALL = "Call"
    ASSIGN = "Assign"
    IMPORT = "Import"


class ASTVisitor(ABC):
    """Abstract visitor interface for walking expression trees."""

    @abstractmethod
    def visit(self, node: 'Expression') -> Any:
        """Visit a generic node."""
        pass


class Expression(ABC):
    """Base class for all expression nodes."""

    def __init__(self, node_type: ASTNodeType, token: Token):
        self.node_type = node_type
        self.token = token

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> List['Expression']:
        """Get all child nodes."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self})"


class Number(Expression):
    """Numeric literal with an optional bracketed dimension expression."""

    def __init__(self, token: Token, dimension: Optional[Expression] = None):
        super().__init__(ASTNodeType.NUMBER, token)
        self.value = token.lexeme
        self.dimension = dimension

    def children(self) -> List[Expression]:
        return [self.dimension] if self.dimension is not None else []

    def __str__(self) -> str:
        if self.dimension is not None:
            return f"{self.value} [{self.dimension}]"
        return self.value


class Unary(Expression):
    """Prefix negation or postfix factorial."""

    def __init__(self, operator: Token, operand: Expression):
        super().__init__(ASTNodeType.UNARY, operator)
        self.operator = operator
        self.operand = operand

    def children(self) -> List[Expression]:
        return [self.operand]

    def __str__(self) -> str:
        if self.operator.lexeme == "!":
            return f"({self.operand}!)"
        return f"({self.operator.lexeme}{self.operand})"


class Binary(Expression):
    """Binary operation expression."""

    def __init__(self, left: Expression, operator: Token, right: Expression):
        super().__init__(ASTNodeType.BINARY, operator)
        self.left = left
        self.operator = operator
        self.right = right

    def children(self) -> List[Expression]:
        return [self.left, self.right]

    def __str__(self) -> str:
        return f"({self.left} {self.operator.lexeme} {self.right})"


class Grouping(Expression):
    """Parenthesized expression."""

    def __init__(self, token: Token, expression: Expression):
        super().__init__(ASTNodeType.GROUPING, token)
        self.expression = expression

    def children(self) -> List[Expression]:
        return [self.expression]

    def __str__(self) -> str:
        return f"({self.expression})"


class Variable(Expression):
    """Bare identifier: a variable reference, or a unit name inside brackets."""

    def __init__(self, name: Token):
        super().__init__(ASTNodeType.VARIABLE, name)
        self.name = name

    def children(self) -> List[Expression]:
        return []

    def __str__(self) -> str:
        return self.name.lexeme


class Call(Expression):
    """Built-in function call."""

    def __init__(self, name: Token, arguments: List[Expression]):
        super().__init__(ASTNodeType.CALL, name)
        self.name = name
        self.arguments = arguments

    def children(self) -> List[Expression]:
        return list(self.arguments)

    def __str__(self) -> str:
        args = ", ".join(str(arg) for arg in self.arguments)
        return f"{self.name.lexeme}({args})"


class Assign(Expression):
    """Assignment of a value to a variable name."""

    def __init__(self, name: Token, value: Expression):
        super().__init__(ASTNodeType.ASSIGN, name)
        self.name = name
        self.value = value

    def children(self) -> List[Expression]:
        return [self.value]

    def __str__(self) -> str:
        return f"{self.name.lexeme} = {self.value}"


class Import(Expression):
    """`import "file"` statement."""

    def __init__(self, keyword: Token, filename: str):
        super().__init__(ASTNodeType.IMPORT, keyword)
        self.filename = filename

    def children(self) -> List[Expression]:
        return []

    def __str__(self) -> str:
        return f'import "{self.filename}"'
