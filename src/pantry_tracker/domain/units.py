"""Units of measure and the conversion table."""

from dataclasses import dataclass
from enum import Enum


class Unit(Enum):
    """Closed set of measurement units."""

    # Energy
    CALORIE = "calorie"
    # Weight (US)
    OUNCE = "ounce"
    POUND = "pound"
    # Weight (SI)
    MICROGRAM = "microgram"
    MILLIGRAM = "milligram"
    GRAM = "gram"
    KILOGRAM = "kilogram"
    # Volume (US)
    TEASPOON = "teaspoon"
    TABLESPOON = "tablespoon"
    FLUID_OUNCE = "fluid_ounce"
    CUP = "cup"
    PINT = "pint"
    QUART = "quart"
    GALLON = "gallon"
    # Volume (SI)
    MILLILITER = "milliliter"
    LITER = "liter"
    # Multiplier of a food's own serving size
    SERVING = "serving"

    @property
    def abbreviation(self) -> str:
        """Short display label for the unit."""
        return _ABBREVIATIONS[self]

    @property
    def is_si(self) -> bool:
        return self in _SI_UNITS

    @property
    def is_weight(self) -> bool:
        return self in WEIGHT_FACTORS_MG

    @property
    def is_volume(self) -> bool:
        return self in VOLUME_FACTORS_ML


@dataclass(frozen=True)
class CustomUnit:
    """Free-text unit with no physical conversion (e.g. "packet")."""

    name: str

    @property
    def abbreviation(self) -> str:
        return self.name

    @property
    def is_si(self) -> bool:
        return False

    @property
    def is_weight(self) -> bool:
        return False

    @property
    def is_volume(self) -> bool:
        return False


AnyUnit = Unit | CustomUnit

# Milligrams per unit.
WEIGHT_FACTORS_MG: dict[Unit, float] = {
    Unit.MICROGRAM: 0.001,
    Unit.MILLIGRAM: 1.0,
    Unit.GRAM: 1000.0,
    Unit.KILOGRAM: 1000000.0,
    Unit.OUNCE: 28349.5,
    Unit.POUND: 453592.0,
}

# Milliliters per unit.
VOLUME_FACTORS_ML: dict[Unit, float] = {
    Unit.MILLILITER: 1.0,
    Unit.LITER: 1000.0,
    Unit.TEASPOON: 4.92892,
    Unit.TABLESPOON: 14.7868,
    Unit.FLUID_OUNCE: 29.5735,
    Unit.CUP: 240.0,
    Unit.PINT: 473.176,
    Unit.QUART: 946.353,
    Unit.GALLON: 3785.41,
}

_SI_UNITS = frozenset(
    {
        Unit.MICROGRAM,
        Unit.MILLIGRAM,
        Unit.GRAM,
        Unit.KILOGRAM,
        Unit.MILLILITER,
        Unit.LITER,
    }
)

_ABBREVIATIONS: dict[Unit, str] = {
    Unit.CALORIE: "",
    Unit.OUNCE: "oz",
    Unit.POUND: "lb",
    Unit.MICROGRAM: "mcg",
    Unit.MILLIGRAM: "mg",
    Unit.GRAM: "g",
    Unit.KILOGRAM: "kg",
    Unit.TEASPOON: "tsp",
    Unit.TABLESPOON: "tbsp",
    Unit.FLUID_OUNCE: "fl oz",
    Unit.CUP: "c",
    Unit.PINT: "pint",
    Unit.QUART: "qt",
    Unit.GALLON: "gal",
    Unit.MILLILITER: "mL",
    Unit.LITER: "L",
    Unit.SERVING: "serving",
}

# Plurals, long forms and spellings seen in labels and recipes.
_ALIASES: dict[str, Unit] = {
    "cal": Unit.CALORIE,
    "cals": Unit.CALORIE,
    "calories": Unit.CALORIE,
    "kcal": Unit.CALORIE,
    "kilocalorie": Unit.CALORIE,
    "kilocalories": Unit.CALORIE,
    "ounces": Unit.OUNCE,
    "pounds": Unit.POUND,
    "lbs": Unit.POUND,
    "micrograms": Unit.MICROGRAM,
    "\u00b5g": Unit.MICROGRAM,
    "ug": Unit.MICROGRAM,
    "milligrams": Unit.MILLIGRAM,
    "mgs": Unit.MILLIGRAM,
    "grams": Unit.GRAM,
    "gr": Unit.GRAM,
    "kilograms": Unit.KILOGRAM,
    "kgs": Unit.KILOGRAM,
    "teaspoons": Unit.TEASPOON,
    "tsps": Unit.TEASPOON,
    "tablespoons": Unit.TABLESPOON,
    "tbsps": Unit.TABLESPOON,
    "tbs": Unit.TABLESPOON,
    "fluid ounces": Unit.FLUID_OUNCE,
    "fl. oz": Unit.FLUID_OUNCE,
    "floz": Unit.FLUID_OUNCE,
    "cups": Unit.CUP,
    "pints": Unit.PINT,
    "pt": Unit.PINT,
    "quarts": Unit.QUART,
    "qts": Unit.QUART,
    "gallons": Unit.GALLON,
    "gals": Unit.GALLON,
    "milliliters": Unit.MILLILITER,
    "millilitre": Unit.MILLILITER,
    "millilitres": Unit.MILLILITER,
    "mls": Unit.MILLILITER,
    "cc": Unit.MILLILITER,
    "liters": Unit.LITER,
    "litre": Unit.LITER,
    "litres": Unit.LITER,
    "servings": Unit.SERVING,
}


class UnitError(ValueError):
    """Base error for failed unit conversions."""


class IncompatibleUnitError(UnitError):
    """Raised when two units do not belong to the same physical family."""

    def __init__(self, source: AnyUnit, target: AnyUnit) -> None:
        super().__init__(
            f"Cannot convert {unit_name(source)} to {unit_name(target)}"
        )
        self.source = source
        self.target = target


class InvalidUnitError(UnitError):
    """Raised when a unit is outside the family an operation requires."""

    def __init__(self, unit: AnyUnit, family: str) -> None:
        super().__init__(f"{unit_name(unit)} is not a {family} unit")
        self.unit = unit
        self.family = family


def unit_name(unit: AnyUnit) -> str:
    """Return a stable identifier for a unit, used in messages."""
    if isinstance(unit, CustomUnit):
        return f"custom:{unit.name}"
    return unit.value


def conversion_factor(source: AnyUnit, target: AnyUnit) -> float:
    """Return the multiplier that converts a value in `source` to `target`."""
    if source == target:
        return 1.0
    if isinstance(source, Unit) and isinstance(target, Unit):
        if source.is_weight and target.is_weight:
            return WEIGHT_FACTORS_MG[source] / WEIGHT_FACTORS_MG[target]
        if source.is_volume and target.is_volume:
            return VOLUME_FACTORS_ML[source] / VOLUME_FACTORS_ML[target]
    raise IncompatibleUnitError(source, target)


def parse_unit(text: str) -> AnyUnit:
    """Resolve a unit from its value, abbreviation, plural or long form.

    Anything unrecognised becomes a custom unit so free-text labels such as
    "packet" or "waffle" survive.
    """
    cleaned = " ".join(text.split())
    if not cleaned:
        raise ValueError("Unit text is empty")
    lowered = cleaned.lower()
    for unit in Unit:
        if lowered.replace(" ", "_") == unit.value:
            return unit
    key = lowered.rstrip(".")
    alias = _ALIASES.get(key)
    if alias is not None:
        return alias
    for unit, abbreviation in _ABBREVIATIONS.items():
        if abbreviation and key == abbreviation.lower():
            return unit
    return CustomUnit(cleaned)
