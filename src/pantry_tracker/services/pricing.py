"""Cost metrics for food items sold at stores."""

import logging
from dataclasses import dataclass

from pantry_tracker.domain.foods import (
    AmountCost,
    CollectionCost,
    FoodItem,
    FoodSize,
    StoreEntry,
)
from pantry_tracker.domain.nutrients import Nutrient

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CostSummary:
    """Cost metrics for one store entry of a food item, in USD."""

    store_name: str
    available: bool
    per_container: float
    per_serving: float
    per_serving_amount: float | None
    per_100_calories: float | None
    per_100_grams: float | None
    per_100_milliliters: float | None


def cost_per_unit(entry: StoreEntry, size: FoodSize) -> float:
    """Price of one whole container of the food."""
    cost_type = entry.cost_type
    if isinstance(cost_type, CollectionCost):
        return cost_type.cost.to_usd() / cost_type.quantity
    return _amount_cost_per_unit(cost_type, size)


def _amount_cost_per_unit(cost_type: AmountCost, size: FoodSize) -> float:
    """Scale a per-amount price up or down to the whole container."""
    usd = cost_type.cost.to_usd()
    amount = cost_type.amount
    total = size.total_amount
    if amount.unit.is_weight and total.unit.is_weight:
        return usd * total.to_grams().value / amount.to_grams().value
    if amount.unit.is_volume and total.unit.is_volume:
        return usd * total.to_milliliters().value / amount.to_milliliters().value
    # Priced by count, e.g. $3 for 2 bars: the price of one item.
    return usd / amount.value


def cost_per_serving(entry: StoreEntry, size: FoodSize) -> float:
    return cost_per_unit(entry, size) / size.num_servings


def cost_per_serving_amount(entry: StoreEntry, size: FoodSize) -> float:
    """Price of one item of the friendly serving (e.g. one waffle)."""
    return cost_per_serving(entry, size) / size.serving_size_amount.value


def cost_per_energy(entry: StoreEntry, food: FoodItem) -> float | None:
    """Price per 100 calories, or None when the food has no energy."""
    energy = food.get_nutrient(Nutrient.ENERGY)
    calories_per_serving = energy.value if energy is not None else 0.0
    if calories_per_serving <= 0:
        return None
    total_calories = food.size.num_servings * calories_per_serving
    return cost_per_unit(entry, food.size) / total_calories * 100


def cost_per_weight(entry: StoreEntry, size: FoodSize) -> float:
    """Price per 100 g; raises UnitError for containers sized by volume."""
    return cost_per_unit(entry, size) / size.total_amount.to_grams().value * 100


def cost_per_volume(entry: StoreEntry, size: FoodSize) -> float:
    """Price per 100 mL; raises UnitError for containers sized by weight."""
    milliliters = size.total_amount.to_milliliters().value
    return cost_per_unit(entry, size) / milliliters * 100


@dataclass
class PricingService:
    """Service summarising store prices of a food item."""

    debug: bool = False

    def summary(self, food: FoodItem) -> list[CostSummary]:
        """Compute every cost metric for each store entry."""
        summaries = [self._summarize(entry, food) for entry in food.store_entries]
        if self.debug:
            _logger.info(
                "Pricing summary: food=%s stores=%s", food.name, len(summaries)
            )
        return summaries

    def cheapest(self, food: FoodItem) -> CostSummary | None:
        """Available store entry with the lowest price per serving."""
        available = [entry for entry in self.summary(food) if entry.available]
        if not available:
            return None
        return min(available, key=lambda entry: entry.per_serving)

    def _summarize(self, entry: StoreEntry, food: FoodItem) -> CostSummary:
        size = food.size
        per_100_grams = None
        if size.total_amount.unit.is_weight:
            per_100_grams = cost_per_weight(entry, size)
        per_100_milliliters = None
        if size.total_amount.unit.is_volume:
            per_100_milliliters = cost_per_volume(entry, size)
        per_serving_amount = None
        try:
            per_serving_amount = cost_per_serving_amount(entry, size)
        except ZeroDivisionError:
            _logger.warning("Serving label of %s has a zero amount", food.name)
        return CostSummary(
            store_name=entry.store_name,
            available=entry.available,
            per_container=cost_per_unit(entry, size),
            per_serving=cost_per_serving(entry, size),
            per_serving_amount=per_serving_amount,
            per_100_calories=cost_per_energy(entry, food),
            per_100_grams=per_100_grams,
            per_100_milliliters=per_100_milliliters,
        )

