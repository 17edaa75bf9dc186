"""Nutrient scaling and aggregation for foods and logbook days."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from pantry_tracker.domain.foods import FoodItem
from pantry_tracker.domain.logbook import LogbookDay, LogbookEntry, MealType
from pantry_tracker.domain.magnitude import Raw, format_magnitude
from pantry_tracker.domain.nutrients import (
    NUTRITION_FACTS_LAYOUT,
    Nutrient,
    NutritionDict,
)
from pantry_tracker.domain.quantity import Quantity
from pantry_tracker.domain.recipes import Recipe, RecipeIngredient
from pantry_tracker.domain.units import UnitError

# Calories per gram of each macronutrient.
_MACRO_ENERGY = (
    ("Carbs", Nutrient.TOTAL_CARBS, 4.0),
    ("Fat", Nutrient.TOTAL_FAT, 9.0),
    ("Protein", Nutrient.PROTEIN, 4.0),
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MacroShare:
    """Calories contributed by one macronutrient."""

    name: str
    calories: float


@dataclass(frozen=True)
class NutrientRow:
    """One formatted line of a nutrition facts table."""

    nutrient: Nutrient
    label: str
    amount: str
    unit: str
    indented: bool


@dataclass(frozen=True)
class TargetProgress:
    """Consumed amount of a nutrient against the day's target."""

    nutrient: Nutrient
    consumed: float
    target: float
    unit: str
    ratio: float | None


def consumption_scale(food: FoodItem, amount: Quantity) -> float:
    """Return how many servings of `food` the consumed `amount` represents.

    Weights and volumes are compared with the food's serving amount; any other
    unit is taken as a count of servings. Raises UnitError when the serving
    amount is not in the consumed unit's family.
    """
    if amount.unit.is_weight:
        serving = food.size.serving_amount.to_grams().value
        return amount.to_grams().value / serving
    if amount.unit.is_volume:
        serving = food.size.serving_amount.to_milliliters().value
        return amount.to_milliliters().value / serving
    return amount.value


def scale_nutrients(nutrients: NutritionDict, scale: float) -> NutritionDict:
    """Multiply every nutrient amount by `scale`."""
    return {nutrient: amount * scale for nutrient, amount in nutrients.items()}


def sum_nutrients(totals: NutritionDict, addition: NutritionDict) -> NutritionDict:
    """Add `addition` into a copy of `totals`, keeping the first-seen unit."""
    combined = dict(totals)
    for nutrient, amount in addition.items():
        current = combined.get(nutrient)
        if current is None:
            combined[nutrient] = amount
        else:
            combined[nutrient] = Quantity(
                current.magnitude + amount.magnitude, current.unit
            )
    return combined


@dataclass
class NutritionService:
    """Service computing nutrient views over foods and logbook days."""

    table_max_digits: int = 1
    debug: bool = False

    def scale_for(self, entry: LogbookEntry) -> float:
        """Scale for an entry; conversion failures count as zero servings."""
        return self._scale_or_zero(entry.food, entry.amount)

    def ingredient_scale(self, ingredient: RecipeIngredient) -> float:
        """Servings of the linked food used by a recipe ingredient.

        Ingredients without a linked food contribute nothing.
        """
        if ingredient.food is None:
            return 0.0
        return self._scale_or_zero(ingredient.food, ingredient.amount)

    def ingredient_nutrients(self, ingredient: RecipeIngredient) -> NutritionDict:
        if ingredient.food is None:
            return {}
        return scale_nutrients(
            ingredient.food.nutrients, self.ingredient_scale(ingredient)
        )

    def recipe_nutrients(self, recipe: Recipe) -> NutritionDict:
        """Per-serving nutrients of a recipe computed from its ingredients."""
        totals: NutritionDict = {}
        for ingredient in recipe.ingredients:
            totals = sum_nutrients(totals, self.ingredient_nutrients(ingredient))
        if self.debug:
            _logger.info(
                "Recipe nutrients: recipe=%s ingredients=%s servings=%s",
                recipe.name,
                len(recipe.ingredients),
                recipe.size.num_servings,
            )
        return scale_nutrients(totals, 1 / recipe.size.num_servings)

    def _scale_or_zero(self, food: FoodItem, amount: Quantity) -> float:
        try:
            return consumption_scale(food, amount)
        except (UnitError, ZeroDivisionError) as exc:
            _logger.warning(
                "Cannot scale %s by %s, counting it as zero: %s",
                food.name,
                amount.format(),
                exc,
            )
            return 0.0

    def entry_nutrients(self, entry: LogbookEntry) -> NutritionDict:
        """Nutrients contributed by a single logbook entry."""
        return scale_nutrients(entry.food.nutrients, self.scale_for(entry))

    def aggregate(self, entries: Iterable[LogbookEntry]) -> NutritionDict:
        """Sum the scaled nutrients of all entries."""
        totals: NutritionDict = {}
        count = 0
        for entry in entries:
            totals = sum_nutrients(totals, self.entry_nutrients(entry))
            count += 1
        if self.debug:
            _logger.info(
                "Aggregated nutrients: entries=%s nutrients=%s", count, len(totals)
            )
        return totals

    def day_nutrients(
        self, day: LogbookDay, meal_type: MealType | None = None
    ) -> NutritionDict:
        """Nutrients for a day, optionally restricted to one meal."""
        return self.aggregate(day.entries_for(meal_type))

    def macro_breakdown(
        self, nutrients: NutritionDict, scale: float = 1.0
    ) -> list[MacroShare]:
        """Calories from carbs, fat and protein for a macro chart."""
        shares = [
            MacroShare(name, _grams_or_zero(nutrients.get(nutrient)) * scale * kcal)
            for name, nutrient, kcal in _MACRO_ENERGY
        ]
        if all(share.calories <= 0 for share in shares):
            return [MacroShare("None", 1.0)]
        return shares

    def nutrient_table(
        self,
        nutrients: NutritionDict,
        scale: float = 1.0,
        max_digits: int | None = None,
    ) -> list[NutrientRow]:
        """Rows of a nutrition facts table, missing nutrients shown as 0."""
        digits = self.table_max_digits if max_digits is None else max_digits
        rows: list[NutrientRow] = []
        for nutrient, indented in NUTRITION_FACTS_LAYOUT:
            amount = _in_common_unit(
                nutrients.get(nutrient, Quantity(Raw(0), nutrient.common_unit)),
                nutrient,
            )
            unit = "" if nutrient is Nutrient.ENERGY else amount.unit.abbreviation
            rows.append(
                NutrientRow(
                    nutrient=nutrient,
                    label=nutrient.label,
                    amount=format_magnitude(amount.magnitude * scale, digits),
                    unit=unit,
                    indented=indented,
                )
            )
        return rows

    def target_progress(self, day: LogbookDay) -> list[TargetProgress]:
        """Compare a day's consumed nutrients with its targets."""
        consumed = self.day_nutrients(day)
        progress: list[TargetProgress] = []
        for nutrient, target in day.target_nutrients.items():
            eaten = consumed.get(nutrient)
            eaten_value = 0.0
            if eaten is not None:
                try:
                    eaten_value = eaten.convert(target.unit).value
                except UnitError:
                    _logger.warning(
                        "Cannot compare %s in %s with target in %s",
                        nutrient.value,
                        eaten.unit,
                        target.unit,
                    )
            target_value = target.value
            progress.append(
                TargetProgress(
                    nutrient=nutrient,
                    consumed=eaten_value,
                    target=target_value,
                    unit=target.unit.abbreviation,
                    ratio=eaten_value / target_value if target_value else None,
                )
            )
        return progress


def _grams_or_zero(amount: Quantity | None) -> float:
    if amount is None:
        return 0.0
    try:
        return amount.to_grams().value
    except UnitError:
        return 0.0


def _in_common_unit(amount: Quantity, nutrient: Nutrient) -> Quantity:
    """Convert to the nutrient's display unit, leaving it as-is if impossible."""
    try:
        return amount.convert(nutrient.common_unit)
    except UnitError:
        return amount
