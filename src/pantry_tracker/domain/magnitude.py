"""Numeric payload of a quantity: a raw decimal or an exact rational.

Rationals are kept exactly as constructed (no reduction by a common divisor)
so that "1/3 cup" displays as entered instead of as 0.33.
"""

import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Context, Decimal

_RATIONAL_PATTERN = re.compile(r"([\d.]+)/([\d.]+)")


@dataclass(frozen=True)
class Raw:
    """Plain decimal magnitude."""

    value: float

    def __add__(self, other: "Magnitude") -> "Magnitude":
        return add(self, other)

    def __sub__(self, other: "Magnitude") -> "Magnitude":
        return subtract(self, other)

    def __mul__(self, scalar: float) -> "Magnitude":
        return multiply(self, scalar)

    def __truediv__(self, scalar: float) -> "Magnitude":
        return divide(self, scalar)

    def __abs__(self) -> "Magnitude":
        return absolute(self)


@dataclass(frozen=True)
class Rational:
    """Numerator/denominator magnitude, never simplified."""

    num: float
    den: float

    def __post_init__(self) -> None:
        if self.den == 0:
            raise ValueError("Rational denominator must be non-zero")

    @property
    def value(self) -> float:
        return self.num / self.den

    def __add__(self, other: "Magnitude") -> "Magnitude":
        return add(self, other)

    def __sub__(self, other: "Magnitude") -> "Magnitude":
        return subtract(self, other)

    def __mul__(self, scalar: float) -> "Magnitude":
        return multiply(self, scalar)

    def __truediv__(self, scalar: float) -> "Magnitude":
        return divide(self, scalar)

    def __abs__(self) -> "Magnitude":
        return absolute(self)


Magnitude = Raw | Rational


def _as_fraction(magnitude: Magnitude) -> tuple[float, float]:
    if isinstance(magnitude, Rational):
        return magnitude.num, magnitude.den
    return magnitude.value, 1.0


def add(left: Magnitude, right: Magnitude) -> Magnitude:
    """Add two magnitudes; the result is raw only when both operands are."""
    if isinstance(left, Raw) and isinstance(right, Raw):
        return Raw(left.value + right.value)
    a, b = _as_fraction(left)
    c, d = _as_fraction(right)
    return Rational(num=a * d + c * b, den=b * d)


def subtract(left: Magnitude, right: Magnitude) -> Magnitude:
    """Subtract `right` from `left` using the same cross-multiplication."""
    if isinstance(left, Raw) and isinstance(right, Raw):
        return Raw(left.value - right.value)
    a, b = _as_fraction(left)
    c, d = _as_fraction(right)
    return Rational(num=a * d - c * b, den=b * d)


def multiply(magnitude: Magnitude, scalar: float) -> Magnitude:
    """Scale a magnitude up or down.

    Rationals grow through the numerator when `scalar > 1` and shrink through
    the denominator otherwise. Zero always lands on the numerator.
    """
    if isinstance(magnitude, Raw):
        return Raw(magnitude.value * scalar)
    if scalar > 1 or scalar == 0:
        return Rational(num=magnitude.num * scalar, den=magnitude.den)
    return Rational(num=magnitude.num, den=magnitude.den / scalar)


def divide(magnitude: Magnitude, scalar: float) -> Magnitude:
    """Inverse of `multiply`; dividing by zero raises ZeroDivisionError."""
    if isinstance(magnitude, Raw):
        return Raw(magnitude.value / scalar)
    if scalar > 1:
        return Rational(num=magnitude.num, den=magnitude.den * scalar)
    return Rational(num=magnitude.num / scalar, den=magnitude.den)


def absolute(magnitude: Magnitude) -> Magnitude:
    """Return the magnitude with every component made non-negative."""
    if isinstance(magnitude, Raw):
        return Raw(abs(magnitude.value))
    return Rational(num=abs(magnitude.num), den=abs(magnitude.den))


def parse_magnitude(text: str) -> Magnitude | None:
    """Parse "3/4" into a rational or "0.75" into a raw value.

    Returns None for anything else, including zero denominators and
    non-finite numbers.
    """
    cleaned = text.strip()
    match = _RATIONAL_PATTERN.fullmatch(cleaned)
    if match:
        num = _to_float(match.group(1))
        den = _to_float(match.group(2))
        if num is None or den is None or den == 0:
            return None
        return Rational(num=num, den=den)
    value = _to_float(cleaned)
    if value is None:
        return None
    return Raw(value)


def format_magnitude(magnitude: Magnitude, max_digits: int = 2) -> str:
    """Render a magnitude for display without grouping separators."""
    if isinstance(magnitude, Rational):
        num = format_decimal(magnitude.num, max_digits)
        den = format_decimal(magnitude.den, max_digits)
        return f"{num}/{den}"
    return format_decimal(magnitude.value, max_digits)


def format_decimal(value: float, max_digits: int = 2) -> str:
    """Round half-even to `max_digits` fractional digits, dropping zeros."""
    if not math.isfinite(value):
        return str(value)
    quantum = Decimal(1).scaleb(-max(max_digits, 0))
    exact = Decimal(repr(value))
    context = Context(prec=max(28, exact.adjusted() + max_digits + 2))
    rounded = exact.quantize(quantum, rounding=ROUND_HALF_EVEN, context=context)
    if rounded == 0:
        return "0"
    text = format(rounded, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _to_float(text: str) -> float | None:
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value
