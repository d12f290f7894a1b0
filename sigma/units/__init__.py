"""
Sigma Units Package

Dimension algebra: multiply, divide and raise dimensions to powers in the
user's own units, and decide compatibility through SI base units.
"""

from .dimension import (
    BaseUnit, Unit, Dimension, SI_DERIVATIONS, TOLERANCE,
    float_eq, fold, multiply_dimensions, divide_dimensions,
)

__all__ = [
    "BaseUnit",
    "Unit",
    "Dimension",
    "SI_DERIVATIONS",
    "TOLERANCE",
    "float_eq",
    "fold",
    "multiply_dimensions",
    "divide_dimensions",
]
