"""Domain models for food items, their sizes and store prices."""

import math
import re
from dataclasses import dataclass, field, replace
from enum import Enum

from pantry_tracker.domain.magnitude import Raw, parse_magnitude
from pantry_tracker.domain.nutrients import Nutrient, NutritionDict
from pantry_tracker.domain.quantity import Quantity
from pantry_tracker.domain.units import CustomUnit

_SERVING_LABEL_PATTERN = re.compile(r"([\d/.]+)?\s*(.+)")


@dataclass(frozen=True)
class FoodSize:
    """Container and serving size information for a food item."""

    # Net weight/volume of the whole container (e.g. net wt 10 lb)
    total_amount: Quantity
    num_servings: float
    # Friendly serving label (e.g. "1 waffle", "2 portions")
    serving_size: str = ""

    @property
    def serving_amount(self) -> Quantity:
        """Empirical size of one serving (e.g. 54 g)."""
        return self.total_amount / self.num_servings

    def with_serving_amount(self, amount: Quantity) -> "FoodSize":
        """Return a size with the serving count recomputed from `amount`."""
        return replace(self, num_servings=self.total_amount.value / amount.value)

    @property
    def serving_size_amount(self) -> Quantity:
        """Parse the friendly serving label into a custom-unit quantity."""
        match = _SERVING_LABEL_PATTERN.fullmatch(self.serving_size.strip())
        if match is None:
            return Quantity(Raw(1), CustomUnit("serving"))
        raw_value, name = match.group(1), match.group(2)
        if raw_value is None:
            return Quantity(Raw(1), CustomUnit(name))
        magnitude = parse_magnitude(raw_value)
        if magnitude is None:
            return Quantity(Raw(1), CustomUnit("serving"))
        return Quantity(magnitude, CustomUnit(name))


@dataclass(frozen=True)
class Cost:
    """A price in US cents."""

    cents: int

    def to_usd(self) -> float:
        return self.cents / 100.0

    def format(self) -> str:
        usd = self.to_usd()
        sign = "-" if usd < 0 else ""
        return f"{sign}${abs(usd):,.2f}"

    def __add__(self, other: "Cost") -> "Cost":
        return Cost(self.cents + other.cents)

    def __sub__(self, other: "Cost") -> "Cost":
        return Cost(self.cents - other.cents)

    def __mul__(self, scalar: float) -> "Cost":
        return Cost(_round_cents(self.cents * scalar))

    def __truediv__(self, scalar: float) -> "Cost":
        return Cost(_round_cents(self.cents / scalar))


def _round_cents(value: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass(frozen=True)
class CollectionCost:
    """Price for a pack of whole items (e.g. 2 for $5)."""

    cost: Cost
    quantity: int


@dataclass(frozen=True)
class AmountCost:
    """Price for a measured amount (e.g. $3.99 per lb)."""

    cost: Cost
    amount: Quantity


CostType = CollectionCost | AmountCost


@dataclass(frozen=True)
class StoreEntry:
    """Where a food item can be bought and for how much."""

    store_name: str
    cost_type: CostType
    available: bool = True


class RatingTier(Enum):
    """Letter tier for a personal 0-10 rating."""

    S = "S"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"

    @property
    def rating(self) -> float:
        return _TIER_RATINGS[self]

    @classmethod
    def from_rating(cls, rating: float | None) -> "RatingTier | None":
        if rating is None:
            return None
        for tier, threshold in _TIER_THRESHOLDS:
            if rating >= threshold:
                return tier
        return cls.F


_TIER_RATINGS: dict[RatingTier, float] = {
    RatingTier.S: 9.5,
    RatingTier.A: 8.0,
    RatingTier.B: 6.5,
    RatingTier.C: 5.0,
    RatingTier.D: 3.5,
    RatingTier.F: 1.0,
}

_TIER_THRESHOLDS: tuple[tuple[RatingTier, float], ...] = (
    (RatingTier.S, 9.0),
    (RatingTier.A, 7.5),
    (RatingTier.B, 6.0),
    (RatingTier.C, 4.5),
    (RatingTier.D, 3.0),
)


@dataclass(frozen=True)
class FoodItem:
    """A cataloged food with per-serving nutrients."""

    name: str
    nutrients: NutritionDict
    size: FoodSize
    details: str = ""
    # Label ingredient list and allergen statement, as printed
    ingredients: str = ""
    allergens: str = ""
    brand: str | None = None
    barcode: str | None = None
    store_entries: list[StoreEntry] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    rating: float | None = None

    def get_nutrient(
        self, nutrient: Nutrient, num_servings: float = 1.0
    ) -> Quantity | None:
        """Return the nutrient amount for `num_servings` servings."""
        amount = self.nutrients.get(nutrient)
        if amount is None:
            return None
        return amount * num_servings

    @property
    def rating_tier(self) -> RatingTier | None:
        return RatingTier.from_rating(self.rating)
