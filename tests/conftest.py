"""Shared test fixtures."""

from datetime import date

import pytest

from pantry_tracker.config import Settings
from pantry_tracker.containers import AppContainer, build_container
from pantry_tracker.domain.foods import (
    AmountCost,
    CollectionCost,
    Cost,
    FoodItem,
    FoodSize,
    StoreEntry,
)
from pantry_tracker.domain.logbook import LogbookDay, LogbookEntry, MealType
from pantry_tracker.domain.magnitude import Raw
from pantry_tracker.domain.nutrients import Nutrient
from pantry_tracker.domain.quantity import Quantity
from pantry_tracker.domain.recipes import (
    Recipe,
    RecipeIngredient,
    RecipeMetadata,
    RecipeSection,
    RecipeSize,
)
from pantry_tracker.domain.units import CustomUnit, Unit


def make_cereal(**overrides: object) -> FoodItem:
    """Cereal box: 300 g in 10 servings of 30 g, 120 kcal each."""
    values: dict[str, object] = {
        "name": "Oat Cereal",
        "nutrients": {
            Nutrient.ENERGY: Quantity.calories(120),
            Nutrient.TOTAL_CARBS: Quantity.grams(22),
            Nutrient.TOTAL_FAT: Quantity.grams(2),
            Nutrient.PROTEIN: Quantity.grams(4),
            Nutrient.SODIUM: Quantity.milligrams(140),
        },
        "size": FoodSize(
            total_amount=Quantity.grams(300),
            num_servings=10,
            serving_size="1 cup",
        ),
        "store_entries": [
            StoreEntry(
                store_name="Corner Market",
                cost_type=CollectionCost(cost=Cost(500), quantity=1),
            ),
            StoreEntry(
                store_name="Bulk Barn",
                cost_type=AmountCost(cost=Cost(400), amount=Quantity.grams(300)),
                available=False,
            ),
        ],
    }
    values.update(overrides)
    return FoodItem(**values)  # type: ignore[arg-type]


def make_milk() -> FoodItem:
    """Half gallon of milk, 8 servings of 1 cup."""
    return FoodItem(
        name="Whole Milk",
        nutrients={
            Nutrient.ENERGY: Quantity.calories(150),
            Nutrient.TOTAL_FAT: Quantity.grams(8),
            Nutrient.PROTEIN: Quantity.grams(8),
            Nutrient.CALCIUM: Quantity.milligrams(300),
        },
        size=FoodSize(
            total_amount=Quantity(Raw(1920), Unit.MILLILITER),
            num_servings=8,
            serving_size="1 cup",
        ),
        store_entries=[
            StoreEntry(
                store_name="Dairy Stand",
                cost_type=AmountCost(
                    cost=Cost(359), amount=Quantity(Raw(0.5), Unit.GALLON)
                ),
            )
        ],
    )


def make_overnight_oats() -> Recipe:
    """Two servings: 90 g cereal soaked in 1 cup of milk, plus a pinch of salt."""
    return Recipe(
        name="Overnight Oats",
        size=RecipeSize(num_servings=2, serving_size="1 jar"),
        metadata=RecipeMetadata(prep_time=5, other_time=480, tags=["breakfast"]),
        instructions=[RecipeSection(header="Soak", details="Refrigerate overnight.")],
        ingredients=[
            RecipeIngredient(
                name="Oat Cereal", amount=Quantity.grams(90), food=make_cereal()
            ),
            RecipeIngredient(
                name="Whole Milk", amount=Quantity(Raw(1), Unit.CUP), food=make_milk()
            ),
            RecipeIngredient(
                name="Salt", amount=Quantity(Raw(1), CustomUnit("pinch"))
            ),
        ],
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(environment="test", debug=True)


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    return build_container(settings)


@pytest.fixture
def cereal() -> FoodItem:
    return make_cereal()


@pytest.fixture
def milk() -> FoodItem:
    return make_milk()


@pytest.fixture
def logbook_day(cereal: FoodItem, milk: FoodItem) -> LogbookDay:
    return LogbookDay(
        day=date(2024, 9, 15),
        entries=[
            LogbookEntry(
                food=cereal, amount=Quantity.grams(60), meal_type=MealType.BREAKFAST
            ),
            LogbookEntry(
                food=milk,
                amount=Quantity(Raw(240), Unit.MILLILITER),
                meal_type=MealType.BREAKFAST,
            ),
            LogbookEntry(
                food=cereal,
                amount=Quantity.servings(1.5),
                meal_type=MealType.SNACKS,
            ),
        ],
        target_nutrients={
            Nutrient.ENERGY: Quantity.calories(2000),
            Nutrient.PROTEIN: Quantity.grams(50),
        },
    )
