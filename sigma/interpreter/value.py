"""
Runtime values of the Sigma calculator.

A value is a float that may carry a dimension. Values are immutable; every
operation produces a new one.
"""

import math
from dataclasses import dataclass
from typing import Dict, Optional

from ..units import Dimension


@dataclass(frozen=True)
class Value:
    """A number with an optional physical dimension (None means dimensionless)."""
    number: float
    dimension: Optional[Dimension] = None

    def is_dimensionless(self) -> bool:
        return self.dimension is None or self.dimension.is_dimensionless()

    def __str__(self) -> str:
        return format_value(self)


# Variable bindings, threaded explicitly through every evaluation
Environment = Dict[str, Value]


def parse_number(lexeme: str) -> float:
    """
    Convert a number literal to a float.

    Group separators are dropped; scientific notation is mantissa x 10^exponent.
    """
    digits = lexeme.replace("_", "").replace(",", "")
    mantissa, _, exponent = digits.lower().partition("e")
    if exponent:
        return float(f"{mantissa}e{exponent}")
    return float(mantissa)


def format_number(number: float) -> str:
    """
    Format a number for display.

    Magnitudes above 1e4 or below 1e-4 use scientific notation (`1.2345e4`),
    everything else plain decimals with trailing zeros removed.
    """
    if not math.isfinite(number):
        return str(number)

    if number != 0 and (abs(number) > 1e4 or abs(number) < 1e-4):
        mantissa, exponent = f"{number:.6e}".split("e")
        mantissa = mantissa.rstrip("0").rstrip(".")
        return f"{mantissa}e{int(exponent)}"

    text = f"{number:.6f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_value(value: Value) -> str:
    text = format_number(value.number)
    if not value.is_dimensionless():
        text += f" [{value.dimension.text}]"
    return text
