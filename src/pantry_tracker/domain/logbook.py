"""Domain models for the daily food log."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from pantry_tracker.domain.foods import FoodItem
from pantry_tracker.domain.nutrients import NutritionDict
from pantry_tracker.domain.quantity import Quantity


class MealType(Enum):
    """Meal slot an entry was logged under."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACKS = "snacks"
    DESSERT = "dessert"


@dataclass(frozen=True)
class LogbookEntry:
    """A consumed amount of a food.

    The amount is a weight, a volume, or a count of servings.
    """

    food: FoodItem
    amount: Quantity
    meal_type: MealType


@dataclass(frozen=True)
class LogbookDay:
    """All entries logged on one calendar day."""

    day: date
    entries: list[LogbookEntry] = field(default_factory=list)
    target_nutrients: NutritionDict = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.day, datetime):
            object.__setattr__(self, "day", self.day.date())

    def entries_for(self, meal_type: MealType | None) -> list[LogbookEntry]:
        if meal_type is None:
            return list(self.entries)
        return [entry for entry in self.entries if entry.meal_type == meal_type]
