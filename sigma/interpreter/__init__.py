"""
Sigma Interpreter Package

Tree-walking evaluation with dimension algebra, the built-in function table,
and import file lookup.
"""

from .value import Value, Environment, parse_number, format_number, format_value
from .errors import EvaluationError
from .functions import Function, FUNCTIONS, eval_function
from .files import FileReader
from .interpreter import Interpreter, DimensionEvaluator, run

__all__ = [
    "Value",
    "Environment",
    "parse_number",
    "format_number",
    "format_value",
    "EvaluationError",
    "Function",
    "FUNCTIONS",
    "eval_function",
    "FileReader",
    "Interpreter",
    "DimensionEvaluator",
    "run",
]
