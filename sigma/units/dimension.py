"""
Dimension algebra for Sigma

A dimension is a folded list of (unit name, exponent) pairs. Multiplication,
division and powers work on the units exactly as the user wrote them, so
`kg*m` keeps printing as `kg m`. Only the compatibility test expands units
into SI base units, which is what lets `N` and `kg m s^-2` be added together.
"""

from typing import Dict, Iterable, List, Optional, Tuple
from dataclasses import dataclass
from enum import Enum


# Exponents closer than this are considered equal; closer to zero, removed
TOLERANCE = 1e-5


def float_eq(a: float, b: float) -> bool:
    return abs(a - b) < TOLERANCE


class BaseUnit(Enum):
    """SI base units."""
    METER = "m"          # Length
    KILOGRAM = "kg"      # Mass
    SECOND = "s"         # Time
    AMPERE = "A"         # Electric current
    KELVIN = "K"         # Temperature
    MOLE = "mol"         # Amount of substance
    CANDELA = "cd"       # Luminous intensity


_M = BaseUnit.METER
_KG = BaseUnit.KILOGRAM
_S = BaseUnit.SECOND
_A = BaseUnit.AMPERE
_MOL = BaseUnit.MOLE

# Derived SI units expressed in base units. Names missing from this table
# (and from BaseUnit) are opaque: they only match themselves.
SI_DERIVATIONS: Dict[str, Tuple[Tuple[BaseUnit, float], ...]] = {
    "N": ((_KG, 1), (_M, 1), (_S, -2)),              # newton
    "J": ((_KG, 1), (_M, 2), (_S, -2)),              # joule
    "W": ((_KG, 1), (_M, 2), (_S, -3)),              # watt
    "Pa": ((_KG, 1), (_M, -1), (_S, -2)),            # pascal
    "C": ((_A, 1), (_S, 1)),                         # coulomb
    "V": ((_KG, 1), (_M, 2), (_S, -3), (_A, -1)),    # volt
    "F": ((_S, 4), (_A, 2), (_M, -2), (_KG, -1)),    # farad
    "ohm": ((_KG, 1), (_M, 2), (_S, -3), (_A, -2)),
    "S": ((_KG, -1), (_M, -2), (_S, 3), (_A, 2)),    # siemens
    "H": ((_KG, 1), (_M, 2), (_S, -2), (_A, -2)),    # henry
    "T": ((_KG, 1), (_A, -1), (_S, -2)),             # tesla
    "Wb": ((_KG, 1), (_M, 2), (_S, -2), (_A, -1)),   # weber
    "Hz": ((_S, -1),),                               # hertz
    "Bq": ((_S, -1),),                               # becquerel
    "Gy": ((_M, 2), (_S, -2)),                       # gray
    "Sv": ((_M, 2), (_S, -2)),                       # sievert
    "kat": ((_MOL, 1), (_S, -1)),                    # katal
}

BASE_SYMBOLS = frozenset(base.value for base in BaseUnit)


@dataclass(frozen=True, eq=False)
class Unit:
    """A named unit raised to a (possibly fractional) exponent."""
    name: str
    exponent: float = 1.0

    def __eq__(self, other) -> bool:
        if not isinstance(other, Unit):
            return NotImplemented
        return self.name == other.name and float_eq(self.exponent, other.exponent)

    def __hash__(self) -> int:
        return hash(self.name)

    def to_si(self) -> List['Unit']:
        """Expand into base units, distributing this unit's exponent."""
        if self.name in BASE_SYMBOLS or self.name not in SI_DERIVATIONS:
            return [self]
        return [
            Unit(base.value, self.exponent * power)
            for base, power in SI_DERIVATIONS[self.name]
        ]

    @property
    def lexeme(self) -> str:
        if float_eq(self.exponent, 1.0):
            return self.name
        return f"{self.name}^{self.exponent:g}"

    def __str__(self) -> str:
        return self.lexeme


def fold(units: Iterable[Unit]) -> Tuple[Unit, ...]:
    """Merge same-named units by summing exponents and drop zero exponents."""
    totals: Dict[str, float] = {}
    for unit in units:
        totals[unit.name] = totals.get(unit.name, 0.0) + unit.exponent
    return tuple(
        Unit(name, exponent) for name, exponent in totals.items()
        if not float_eq(exponent, 0.0)
    )


@dataclass(frozen=True)
class Dimension:
    """
    Represents a physical dimension as a folded list of units.

    For example:
    - Velocity: m s^-1
    - Force: N, or equivalently kg m s^-2
    """
    units: Tuple[Unit, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "units", fold(self.units))

    @classmethod
    def from_name(cls, name: str) -> 'Dimension':
        """Dimension of a single unit name, e.g. `kg`."""
        return cls((Unit(name),))

    @property
    def text(self) -> str:
        """Display text in the user's own units, in order of appearance."""
        return " ".join(unit.lexeme for unit in self.units)

    def canonical(self) -> Tuple[Unit, ...]:
        """SI base-unit vector, sorted by unit name."""
        expanded = fold(si for unit in self.units for si in unit.to_si())
        return tuple(sorted(expanded, key=lambda unit: unit.name))

    def check(self, other: Optional['Dimension']) -> bool:
        """
        Check whether two dimensions describe the same physical quantity.

        A missing dimension is dimensionless, so only a dimensionless `self`
        matches it.
        """
        if other is None:
            return self.is_dimensionless()
        mine, theirs = self.canonical(), other.canonical()
        return len(mine) == len(theirs) and all(a == b for a, b in zip(mine, theirs))

    def is_dimensionless(self) -> bool:
        return not self.canonical()

    def multiply(self, other: 'Dimension') -> 'Dimension':
        """Multiply dimensions (add exponents)."""
        return Dimension(self.units + other.units)

    def divide(self, other: 'Dimension') -> 'Dimension':
        """Divide dimensions (subtract exponents)."""
        return Dimension(self.units + tuple(Unit(u.name, -u.exponent) for u in other.units))

    def power(self, exponent: float) -> 'Dimension':
        """Raise dimension to a power."""
        return Dimension(tuple(Unit(u.name, u.exponent * exponent) for u in self.units))

    def __mul__(self, other: 'Dimension') -> 'Dimension':
        return self.multiply(other)

    def __truediv__(self, other: 'Dimension') -> 'Dimension':
        return self.divide(other)

    def __pow__(self, exponent: float) -> 'Dimension':
        return self.power(exponent)

    def __str__(self) -> str:
        return self.text


# Values may carry no dimension at all; these treat None as dimensionless.

def multiply_dimensions(left: Optional[Dimension], right: Optional[Dimension]) -> Optional[Dimension]:
    if left is None and right is None:
        return None
    if right is None:
        return left
    if left is None:
        return right
    return left.multiply(right)


def divide_dimensions(left: Optional[Dimension], right: Optional[Dimension]) -> Optional[Dimension]:
    if left is None and right is None:
        return None
    if right is None:
        return left
    return (left or Dimension()).divide(right)
