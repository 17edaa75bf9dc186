"""Quantity value type: a magnitude tagged with a unit."""

import math
from dataclasses import dataclass

from pantry_tracker.domain.magnitude import (
    Magnitude,
    Raw,
    add,
    format_magnitude,
    parse_magnitude,
    subtract,
)
from pantry_tracker.domain.units import (
    AnyUnit,
    InvalidUnitError,
    Unit,
    conversion_factor,
    parse_unit,
    unit_name,
)


@dataclass(frozen=True)
class Quantity:
    """An amount of something in a given unit.

    Arithmetic keeps the left operand's unit; combining quantities in
    different units is the caller's job (convert first).
    """

    magnitude: Magnitude
    unit: AnyUnit

    @classmethod
    def calories(cls, value: float) -> "Quantity":
        return cls(Raw(value), Unit.CALORIE)

    @classmethod
    def grams(cls, value: float) -> "Quantity":
        return cls(Raw(value), Unit.GRAM)

    @classmethod
    def milligrams(cls, value: float) -> "Quantity":
        return cls(Raw(value), Unit.MILLIGRAM)

    @classmethod
    def servings(cls, value: float) -> "Quantity":
        return cls(Raw(value), Unit.SERVING)

    @property
    def value(self) -> float:
        """Decimal equivalent of the magnitude."""
        return self.magnitude.value

    def convert(self, target: AnyUnit) -> "Quantity":
        """Convert to `target` within the same physical family."""
        return convert(self, target)

    def to_grams(self) -> "Quantity":
        if not self.unit.is_weight:
            raise InvalidUnitError(self.unit, "weight")
        return convert(self, Unit.GRAM)

    def to_milligrams(self) -> "Quantity":
        if not self.unit.is_weight:
            raise InvalidUnitError(self.unit, "weight")
        return convert(self, Unit.MILLIGRAM)

    def to_milliliters(self) -> "Quantity":
        if not self.unit.is_volume:
            raise InvalidUnitError(self.unit, "volume")
        return convert(self, Unit.MILLILITER)

    def format(self, max_digits: int = 2) -> str:
        """Render as "<magnitude> <abbreviation>"."""
        amount = format_magnitude(self.magnitude, max_digits)
        abbreviation = self.unit.abbreviation
        if not abbreviation:
            return amount
        return f"{amount} {abbreviation}"

    def __add__(self, other: "Quantity") -> "Quantity":
        return Quantity(add(self.magnitude, other.magnitude), self.unit)

    def __sub__(self, other: "Quantity") -> "Quantity":
        return Quantity(subtract(self.magnitude, other.magnitude), self.unit)

    def __mul__(self, scalar: float) -> "Quantity":
        return Quantity(self.magnitude * scalar, self.unit)

    def __truediv__(self, scalar: float) -> "Quantity":
        return Quantity(self.magnitude / scalar, self.unit)

    def __abs__(self) -> "Quantity":
        return Quantity(abs(self.magnitude), self.unit)


def convert(quantity: Quantity, target: AnyUnit) -> Quantity:
    """Convert a quantity, raising IncompatibleUnitError across families."""
    if quantity.unit == target:
        return quantity
    factor = conversion_factor(quantity.unit, target)
    value = quantity.value * factor
    if not math.isfinite(value):
        raise OverflowError(
            f"{quantity.format()} is too large to express in {unit_name(target)}"
        )
    return Quantity(Raw(value), target)


def parse_quantity(text: str) -> Quantity | None:
    """Parse "1/2 cup" or "30 g"; a bare number counts servings."""
    parts = text.strip().split(maxsplit=1)
    if not parts:
        return None
    magnitude = parse_magnitude(parts[0])
    if magnitude is None:
        return None
    if len(parts) == 1:
        return Quantity(magnitude, Unit.SERVING)
    return Quantity(magnitude, parse_unit(parts[1]))
