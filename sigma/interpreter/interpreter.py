"""
Sigma tree-walking interpreter.

Evaluates expression trees to values, applying dimension algebra at every
arithmetic node. The environment is an explicit dictionary handed in by the
caller and handed back updated; nothing is global. Evaluation stops at the
first error, but results already printed for earlier statements stay printed.

`run` is the entry point shared by the command line, the REPL and `import`:
it scans, parses and interprets one source text.
"""

import logging
import math
import os
from typing import Callable, List, Optional

from ..config import SigmaConfig
from ..diagnostics import ErrorKind, SigmaError
from ..lexer import Scanner
from ..lexer.tokens import Token, TokenType
from ..parser import Parser
from ..parser.ast_nodes import (
    ASTVisitor, Expression, Number, Unary, Binary, Grouping, Variable, Call, Assign, Import
)
from ..units import Dimension, multiply_dimensions, divide_dimensions
from .errors import create_runtime_error, create_undefined_name_error, create_units_error
from .files import FileReader
from .functions import eval_function, safe_pow
from .value import Value, Environment, parse_number, format_value

logger = logging.getLogger(__name__)

Output = Callable[[str], None]


def _discard(text: str) -> None:
    pass


def _compatible(left: Optional[Dimension], right: Optional[Dimension]) -> bool:
    if left is not None:
        return left.check(right)
    if right is not None:
        return right.check(left)
    return True


class DimensionEvaluator(ASTVisitor):
    """
    Evaluates the bracketed unit expression of a number literal.

    Identifiers are unit names here, not variables. Exponents are ordinary
    arithmetic and are handed back to the interpreter.
    """

    def __init__(self, interpreter: 'Interpreter'):
        self.interpreter = interpreter

    def visit(self, node: Expression) -> Optional[Dimension]:
        if isinstance(node, Variable):
            return Dimension.from_name(node.name.lexeme)
        elif isinstance(node, Number):
            # a bare number is dimensionless, as in [1/s]
            return self.visit(node.dimension) if node.dimension is not None else None
        elif isinstance(node, Grouping):
            return self.visit(node.expression)
        elif isinstance(node, Binary):
            return self._visit_binary(node)
        raise create_runtime_error(ErrorKind.EXPECTED_EXPRESSION, node.token)

    def _visit_binary(self, node: Binary) -> Optional[Dimension]:
        operator = node.operator.type

        if operator == TokenType.CARET:
            exponent = self.interpreter.visit(node.right)
            if not exponent.is_dimensionless():
                raise create_runtime_error(ErrorKind.INVALID_UNITS_POW, node.operator)
            base = self.visit(node.left)
            return base.power(exponent.number) if base is not None else None

        left = self.visit(node.left)
        right = self.visit(node.right)

        if operator in (TokenType.PLUS, TokenType.MINUS):
            if not _compatible(left, right):
                kind = (ErrorKind.INVALID_UNITS_ADD if operator == TokenType.PLUS
                        else ErrorKind.INVALID_UNITS_SUB)
                raise create_runtime_error(kind, node.operator)
            return left if left is not None else right
        elif operator == TokenType.STAR:
            return multiply_dimensions(left, right)
        elif operator == TokenType.SLASH:
            return divide_dimensions(left, right)

        raise create_runtime_error(ErrorKind.EXPECTED_EXPRESSION, node.operator)


class Interpreter(ASTVisitor):
    """
    Evaluates parsed statements against an environment.

    The environment passed in is copied; `interpret` returns the updated copy
    so a failed run leaves the caller's bindings untouched.
    """

    def __init__(
        self,
        expressions: List[Expression],
        environment: Optional[Environment] = None,
        reader: Optional[FileReader] = None,
        output: Optional[Output] = None,
        config: Optional[SigmaConfig] = None,
    ):
        self.expressions = expressions
        self.environment: Environment = dict(environment or {})
        self.config = config or SigmaConfig.from_env()
        self.reader = reader if reader is not None else FileReader.from_config(self.config)
        self.output = output or print
        self.dimensions = DimensionEvaluator(self)

    def interpret(self, is_repl: bool = False) -> Environment:
        """
        Evaluate every statement in order, printing results.

        In the REPL every result except an import is printed; in batch mode
        imports, assignments and bare variable references stay silent.

        Raises:
            EvaluationError: On the first failing statement
        """
        for expression in self.expressions:
            value = self.visit(expression)
            if self._should_print(expression, is_repl):
                self.output(format_value(value))
        return self.environment

    @staticmethod
    def _should_print(expression: Expression, is_repl: bool) -> bool:
        if isinstance(expression, Import):
            return False
        if is_repl:
            return True
        return not isinstance(expression, (Assign, Variable))

    def visit(self, node: Expression) -> Optional[Value]:
        """Evaluate a node; imports evaluate to None."""
        if isinstance(node, Number):
            return self._visit_number(node)
        elif isinstance(node, Unary):
            return self._visit_unary(node)
        elif isinstance(node, Binary):
            return self._visit_binary(node)
        elif isinstance(node, Grouping):
            return self.visit(node.expression)
        elif isinstance(node, Variable):
            return self._visit_variable(node)
        elif isinstance(node, Call):
            return self._visit_call(node)
        elif isinstance(node, Assign):
            return self._visit_assign(node)
        elif isinstance(node, Import):
            return self._visit_import(node)
        raise create_runtime_error(ErrorKind.EXPECTED_EXPRESSION, node.token)

    def _visit_number(self, node: Number) -> Value:
        dimension = None
        if node.dimension is not None:
            dimension = self.dimensions.visit(node.dimension)
        return Value(parse_number(node.value), dimension)

    def _visit_unary(self, node: Unary) -> Value:
        operand = self.visit(node.operand)
        if node.operator.type == TokenType.MINUS:
            return Value(-operand.number, operand.dimension)
        return self._factorial(node.operator, operand)

    def _factorial(self, operator: Token, operand: Value) -> Value:
        if not operand.is_dimensionless():
            raise create_runtime_error(ErrorKind.EXPECT_DIMENSIONLESS, operator, "factorial")

        number = operand.number
        if math.isnan(number) or number < 0:
            raise create_runtime_error(ErrorKind.FACTORIAL_DOMAIN, operator)
        if math.isinf(number):
            return Value(math.inf)

        result = 1.0
        for factor in range(2, math.floor(number + 0.5) + 1):
            result *= factor
            if math.isinf(result):
                break
        return Value(result)

    def _visit_binary(self, node: Binary) -> Value:
        left = self.visit(node.left)
        right = self.visit(node.right)
        operator = node.operator

        if operator.type == TokenType.PLUS:
            dimension = self._additive_dimension(ErrorKind.INVALID_UNITS_ADD, operator, left, right)
            return Value(left.number + right.number, dimension)
        elif operator.type == TokenType.MINUS:
            dimension = self._additive_dimension(ErrorKind.INVALID_UNITS_SUB, operator, left, right)
            return Value(left.number - right.number, dimension)
        elif operator.type == TokenType.STAR:
            return Value(
                left.number * right.number,
                multiply_dimensions(left.dimension, right.dimension),
            )
        elif operator.type == TokenType.SLASH:
            if right.number == 0:
                raise create_runtime_error(ErrorKind.DIVISION_BY_ZERO, operator)
            return Value(
                left.number / right.number,
                divide_dimensions(left.dimension, right.dimension),
            )
        elif operator.type == TokenType.CARET:
            if not right.is_dimensionless():
                raise create_runtime_error(ErrorKind.INVALID_UNITS_POW, operator)
            dimension = left.dimension.power(right.number) if left.dimension is not None else None
            return Value(safe_pow(left.number, right.number), dimension)

        raise create_runtime_error(ErrorKind.EXPECTED_EXPRESSION, operator)

    @staticmethod
    def _additive_dimension(kind: ErrorKind, operator: Token, left: Value, right: Value) -> Optional[Dimension]:
        """Prefer the left dimension, then the right, when they validate."""
        if left.dimension is not None and left.dimension.check(right.dimension):
            return left.dimension
        if right.dimension is not None and right.dimension.check(left.dimension):
            return right.dimension
        if left.dimension is None and right.dimension is None:
            return None
        raise create_units_error(kind, operator, left, right)

    def _visit_variable(self, node: Variable) -> Value:
        name = node.name.lexeme
        if name not in self.environment:
            raise create_undefined_name_error(ErrorKind.UNDEFINED_VARIABLE, node.name, self.environment)
        return self.environment[name]

    def _visit_call(self, node: Call) -> Value:
        arguments = [self.visit(argument) for argument in node.arguments]
        return eval_function(node.name, arguments)

    def _visit_assign(self, node: Assign) -> Value:
        value = self.visit(node.value)
        self.environment[node.name.lexeme] = value
        logger.debug("%s = %s", node.name.lexeme, value)
        return value

    def _visit_import(self, node: Import) -> None:
        logger.debug("Importing %s", node.filename)
        try:
            source = self.reader.read(node.filename)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Cannot read %s: %s", node.filename, exc)
            source = None

        if source is None:
            raise create_runtime_error(ErrorKind.CANNOT_READ_FILE, node.token, node.filename)

        self.environment = run(
            source,
            self.environment,
            is_repl=False,
            current_filename=node.filename,
            reader=self.reader,
            output=self.output,
            config=self.config,
            load_constants=False,
        )


def _load_constants(
    environment: Environment,
    reader: FileReader,
    config: SigmaConfig,
    current_filename: str,
) -> Environment:
    """Import the user's constants file underneath `environment`, best effort."""
    if os.path.basename(current_filename) == config.constants_file:
        return environment

    try:
        source = reader.read(config.constants_file)
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Cannot read %s: %s", config.constants_file, exc)
        return environment

    if source is None:
        return environment

    try:
        constants = run(
            source,
            {},
            current_filename=config.constants_file,
            reader=reader,
            output=_discard,
            config=config,
            load_constants=False,
        )
    except SigmaError as error:
        logger.debug("Ignoring %s: %s", config.constants_file, error)
        return environment

    logger.debug("Loaded %d constants from %s", len(constants), config.constants_file)
    return {**constants, **environment}


def run(
    source: str,
    environment: Optional[Environment] = None,
    is_repl: bool = False,
    current_filename: str = "",
    reader: Optional[FileReader] = None,
    output: Optional[Output] = None,
    config: Optional[SigmaConfig] = None,
    load_constants: bool = True,
) -> Environment:
    """
    Scan, parse and interpret one source text.

    Args:
        source: Calculator source, a REPL line or a whole file
        environment: Bindings visible to the source; not modified
        is_repl: Print every result instead of only bare expressions
        current_filename: Name of the file being run, empty for the REPL
        reader: Import lookup; defaults to working directory then config dir
        output: Receives each printed result; defaults to print
        config: User configuration; defaults to SigmaConfig.from_env()
        load_constants: Auto-import the constants file first

    Returns:
        The updated environment

    Raises:
        SigmaError: On the first failure, annotated with the file and source
            it occurred in
    """
    config = config or SigmaConfig.from_env()
    if reader is None:
        reader = FileReader.from_config(config)

    environment = dict(environment or {})
    if load_constants:
        environment = _load_constants(environment, reader, config, current_filename)

    try:
        tokens = Scanner(source).scan()
        expressions = Parser(tokens).parse()
        interpreter = Interpreter(expressions, environment, reader=reader, output=output, config=config)
        return interpreter.interpret(is_repl)
    except SigmaError as error:
        if error.source is None:
            error.source = source
            error.filename = current_filename or None
        raise
