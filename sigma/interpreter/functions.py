"""
Built-in function table for Sigma.

Each function is a small record: arity, whether every argument must be
dimensionless, a domain predicate over the raw numbers, and the
implementation. A call is checked in that order and the first failing check
decides the error.

Numeric failures that Python raises (math domain errors, overflow) follow
IEEE semantics instead: NaN or infinity.
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, List

from ..diagnostics import ErrorKind
from ..lexer.tokens import Token
from .errors import create_runtime_error, create_undefined_name_error
from .value import Value


def _ieee(operation: Callable[..., float], *numbers: float) -> float:
    try:
        return operation(*numbers)
    except OverflowError:
        return math.inf
    except ValueError:
        return math.nan


def safe_pow(base: float, exponent: float) -> float:
    """`base ** exponent` without exceptions (0^-1 is inf, (-8)^0.5 is NaN)."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and exponent.is_integer() and exponent % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        return math.inf if base == 0 else math.nan


def _always(numbers: List[float]) -> bool:
    return True


@dataclass(frozen=True)
class Function:
    """A built-in function entry."""
    name: str
    arity: int
    apply: Callable[[List[Value]], Value]
    require_dimensionless: bool = False
    domain: Callable[[List[float]], bool] = _always


def _sqrt(args: List[Value]) -> Value:
    value = args[0]
    dimension = value.dimension.power(0.5) if value.dimension is not None else None
    return Value(_ieee(math.sqrt, value.number), dimension)


def _nthroot(args: List[Value]) -> Value:
    # the degree's own dimension is ignored
    value, degree = args
    power = 1.0 / degree.number
    dimension = value.dimension.power(power) if value.dimension is not None else None
    return Value(safe_pow(value.number, power), dimension)


def _numeric(operation: Callable[..., float]) -> Callable[[List[Value]], Value]:
    """Wrap a float function of dimensionless arguments."""
    def apply(args: List[Value]) -> Value:
        return Value(_ieee(operation, *(arg.number for arg in args)))
    return apply


def _log(args: List[Value]) -> Value:
    number, base = args
    return Value(_ieee(math.log, number.number, base.number))


def _in_unit_interval(numbers: List[float]) -> bool:
    return -1.0 <= numbers[0] <= 1.0


def _positive(numbers: List[float]) -> bool:
    return numbers[0] > 0


def _valid_log(numbers: List[float]) -> bool:
    number, base = numbers
    return number > 0 and base > 0 and base != 1


def _nonzero_degree(numbers: List[float]) -> bool:
    return numbers[1] != 0


FUNCTIONS: Dict[str, Function] = {
    function.name: function for function in [
        Function("sqrt", 1, _sqrt),
        Function("nthroot", 2, _nthroot, domain=_nonzero_degree),
        Function("sin", 1, _numeric(math.sin), require_dimensionless=True),
        Function("cos", 1, _numeric(math.cos), require_dimensionless=True),
        Function("tan", 1, _numeric(math.tan), require_dimensionless=True),
        Function("asin", 1, _numeric(math.asin), require_dimensionless=True, domain=_in_unit_interval),
        Function("acos", 1, _numeric(math.acos), require_dimensionless=True, domain=_in_unit_interval),
        Function("atan", 1, _numeric(math.atan), require_dimensionless=True),
        Function("ln", 1, _numeric(math.log), require_dimensionless=True, domain=_positive),
        Function("log", 2, _log, require_dimensionless=True, domain=_valid_log),
    ]
}


def eval_function(name: Token, arguments: List[Value]) -> Value:
    """
    Call the built-in named by `name` with already evaluated arguments.

    Raises:
        EvaluationError: UNDEFINED_FUNCTION, INVALID_NUMBER_OF_ARGS,
            EXPECT_DIMENSIONLESS or INVALID_DOMAIN, checked in that order
    """
    function = FUNCTIONS.get(name.lexeme)
    if function is None:
        raise create_undefined_name_error(ErrorKind.UNDEFINED_FUNCTION, name, FUNCTIONS)

    if len(arguments) != function.arity:
        raise create_runtime_error(
            ErrorKind.INVALID_NUMBER_OF_ARGS, name, name.lexeme, function.arity, len(arguments)
        )

    if function.require_dimensionless and not all(arg.is_dimensionless() for arg in arguments):
        raise create_runtime_error(ErrorKind.EXPECT_DIMENSIONLESS, name, name.lexeme)

    if not function.domain([arg.number for arg in arguments]):
        raise create_runtime_error(ErrorKind.INVALID_DOMAIN, name, name.lexeme)

    return function.apply(arguments)
