"""Pydantic wire models for quantities, foods, recipes, pantry and logbook days.

Magnitudes are tagged with a `kind` so raw and rational values survive a round
trip unchanged: `{"kind": "rational", "num": 1, "den": 3}` stays 1/3.
"""

from datetime import date
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pantry_tracker.domain.foods import (
    AmountCost,
    CollectionCost,
    Cost,
    FoodItem,
    FoodSize,
    StoreEntry,
)
from pantry_tracker.domain.inventory import (
    CollectionAmount,
    InventoryAmount,
    SingleAmount,
)
from pantry_tracker.domain.logbook import LogbookDay, LogbookEntry, MealType
from pantry_tracker.domain.magnitude import Magnitude, Rational, Raw
from pantry_tracker.domain.nutrients import Nutrient, NutritionDict
from pantry_tracker.domain.quantity import Quantity
from pantry_tracker.domain.recipes import (
    Recipe,
    RecipeIngredient,
    RecipeMetadata,
    RecipeSection,
    RecipeSize,
)
from pantry_tracker.domain.units import AnyUnit, CustomUnit, Unit


class WireModel(BaseModel):
    """Base for payloads; JSON numbers must be finite."""

    model_config = ConfigDict(allow_inf_nan=False)


class RawModel(WireModel):
    """Plain decimal magnitude payload."""

    kind: Literal["raw"] = "raw"
    value: float


class RationalModel(WireModel):
    """Numerator/denominator magnitude payload."""

    kind: Literal["rational"] = "rational"
    num: float
    den: float

    @field_validator("den")
    @classmethod
    def _non_zero_denominator(cls, value: float) -> float:
        if value == 0:
            raise ValueError("denominator must be non-zero")
        return value


MagnitudeModel = Annotated[RawModel | RationalModel, Field(discriminator="kind")]


class CustomUnitModel(WireModel):
    """Free-text unit payload, e.g. {"custom": "packet"}."""

    custom: str = Field(min_length=1)


UnitModel = Unit | CustomUnitModel


def magnitude_to_domain(model: RawModel | RationalModel) -> Magnitude:
    if isinstance(model, RationalModel):
        return Rational(num=model.num, den=model.den)
    return Raw(model.value)


def magnitude_from_domain(magnitude: Magnitude) -> RawModel | RationalModel:
    if isinstance(magnitude, Rational):
        return RationalModel(num=magnitude.num, den=magnitude.den)
    return RawModel(value=magnitude.value)


def unit_to_domain(model: Unit | CustomUnitModel) -> AnyUnit:
    if isinstance(model, CustomUnitModel):
        return CustomUnit(model.custom)
    return model


def unit_from_domain(unit: AnyUnit) -> Unit | CustomUnitModel:
    if isinstance(unit, CustomUnit):
        return CustomUnitModel(custom=unit.name)
    return unit


class QuantityModel(WireModel):
    """A magnitude with its unit."""

    magnitude: MagnitudeModel
    unit: UnitModel

    def to_domain(self) -> Quantity:
        return Quantity(magnitude_to_domain(self.magnitude), unit_to_domain(self.unit))

    @classmethod
    def from_domain(cls, quantity: Quantity) -> "QuantityModel":
        return cls(
            magnitude=magnitude_from_domain(quantity.magnitude),
            unit=unit_from_domain(quantity.unit),
        )


def nutrients_to_domain(models: dict[Nutrient, QuantityModel]) -> NutritionDict:
    return {nutrient: model.to_domain() for nutrient, model in models.items()}


def nutrients_from_domain(nutrients: NutritionDict) -> dict[str, object]:
    return {
        nutrient.value: QuantityModel.from_domain(amount).model_dump(mode="json")
        for nutrient, amount in nutrients.items()
    }


class FoodSizeModel(WireModel):
    """Container and serving size payload."""

    total_amount: QuantityModel
    num_servings: float = Field(gt=0)
    serving_size: str = ""

    def to_domain(self) -> FoodSize:
        return FoodSize(
            total_amount=self.total_amount.to_domain(),
            num_servings=self.num_servings,
            serving_size=self.serving_size,
        )


class CollectionCostModel(WireModel):
    """Price for a pack of whole items."""

    kind: Literal["collection"] = "collection"
    cents: int
    quantity: int = Field(gt=0)


class AmountCostModel(WireModel):
    """Price for a measured amount."""

    kind: Literal["amount"] = "amount"
    cents: int
    amount: QuantityModel


class StoreEntryModel(WireModel):
    """Store price payload."""

    store_name: str
    cost: Annotated[
        CollectionCostModel | AmountCostModel, Field(discriminator="kind")
    ]
    available: bool = True

    def to_domain(self) -> StoreEntry:
        if isinstance(self.cost, CollectionCostModel):
            cost_type = CollectionCost(
                cost=Cost(self.cost.cents), quantity=self.cost.quantity
            )
        else:
            cost_type = AmountCost(
                cost=Cost(self.cost.cents), amount=self.cost.amount.to_domain()
            )
        return StoreEntry(
            store_name=self.store_name,
            cost_type=cost_type,
            available=self.available,
        )


class FoodItemModel(WireModel):
    """Food item payload with per-serving nutrients."""

    name: str
    nutrients: dict[Nutrient, QuantityModel] = Field(default_factory=dict)
    size: FoodSizeModel
    details: str = ""
    ingredients: str = ""
    allergens: str = ""
    brand: str | None = None
    barcode: str | None = None
    store_entries: list[StoreEntryModel] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    rating: float | None = Field(default=None, ge=0, le=10)

    def to_domain(self) -> FoodItem:
        return FoodItem(
            name=self.name,
            nutrients=nutrients_to_domain(self.nutrients),
            size=self.size.to_domain(),
            details=self.details,
            ingredients=self.ingredients,
            allergens=self.allergens,
            brand=self.brand,
            barcode=self.barcode,
            store_entries=[entry.to_domain() for entry in self.store_entries],
            tags=list(self.tags),
            rating=self.rating,
        )


class LogbookEntryModel(WireModel):
    """Consumed amount of a food."""

    food: FoodItemModel
    amount: QuantityModel
    meal_type: MealType = MealType.SNACKS

    def to_domain(self) -> LogbookEntry:
        return LogbookEntry(
            food=self.food.to_domain(),
            amount=self.amount.to_domain(),
            meal_type=self.meal_type,
        )


class RecipeIngredientModel(WireModel):
    """Ingredient amount, optionally linked to a cataloged food."""

    name: str
    amount: QuantityModel
    food: FoodItemModel | None = None
    notes: str | None = None

    def to_domain(self) -> RecipeIngredient:
        return RecipeIngredient(
            name=self.name,
            amount=self.amount.to_domain(),
            food=self.food.to_domain() if self.food else None,
            notes=self.notes,
        )


class RecipeMetadataModel(WireModel):
    details: str = ""
    author: str | None = None
    prep_time: float = Field(default=0.0, ge=0)
    cook_time: float = Field(default=0.0, ge=0)
    other_time: float = Field(default=0.0, ge=0)
    tags: list[str] = Field(default_factory=list)
    rating: float | None = Field(default=None, ge=0, le=10)
    difficulty: float | None = Field(default=None, ge=0, le=10)

    def to_domain(self) -> RecipeMetadata:
        return RecipeMetadata(
            details=self.details,
            author=self.author,
            prep_time=self.prep_time,
            cook_time=self.cook_time,
            other_time=self.other_time,
            tags=list(self.tags),
            rating=self.rating,
            difficulty=self.difficulty,
        )


class RecipeSectionModel(WireModel):
    header: str
    details: str = ""


class RecipeModel(WireModel):
    """Recipe payload with ingredients and instructions."""

    name: str
    num_servings: float = Field(gt=0)
    serving_size: str = ""
    nutrients: dict[Nutrient, QuantityModel] = Field(default_factory=dict)
    metadata: RecipeMetadataModel = Field(default_factory=RecipeMetadataModel)
    instructions: list[RecipeSectionModel] = Field(default_factory=list)
    ingredients: list[RecipeIngredientModel] = Field(default_factory=list)

    def to_domain(self) -> Recipe:
        return Recipe(
            name=self.name,
            size=RecipeSize(
                num_servings=self.num_servings, serving_size=self.serving_size
            ),
            nutrients=nutrients_to_domain(self.nutrients),
            metadata=self.metadata.to_domain(),
            instructions=[
                RecipeSection(header=section.header, details=section.details)
                for section in self.instructions
            ],
            ingredients=[ingredient.to_domain() for ingredient in self.ingredients],
        )


class SingleAmountModel(WireModel):
    """Pantry amount used a portion at a time."""

    kind: Literal["single"] = "single"
    total: QuantityModel
    remaining: QuantityModel

    def to_domain(self) -> SingleAmount:
        return SingleAmount(
            total=self.total.to_domain(), remaining=self.remaining.to_domain()
        )


class CollectionAmountModel(WireModel):
    """Pantry amount counted in whole items."""

    kind: Literal["collection"] = "collection"
    total: int = Field(gt=0)
    remaining: int = Field(ge=0)

    def to_domain(self) -> CollectionAmount:
        return CollectionAmount(total=self.total, remaining=self.remaining)


InventoryAmountModel = Annotated[
    SingleAmountModel | CollectionAmountModel, Field(discriminator="kind")
]


def inventory_amount_from_domain(
    amount: InventoryAmount,
) -> SingleAmountModel | CollectionAmountModel:
    if isinstance(amount, CollectionAmount):
        return CollectionAmountModel(total=amount.total, remaining=amount.remaining)
    return SingleAmountModel(
        total=QuantityModel.from_domain(amount.total),
        remaining=QuantityModel.from_domain(amount.remaining),
    )


class ConvertRequest(WireModel):
    """Convert a quantity to another unit."""

    quantity: QuantityModel
    target: UnitModel


class ParseRequest(WireModel):
    """Parse free text such as "1/2 cup"."""

    text: str
    max_digits: int | None = Field(default=None, ge=0)


class ScaleRequest(WireModel):
    """Scale a food's nutrients to a consumed amount."""

    food: FoodItemModel
    amount: QuantityModel


class TableRequest(WireModel):
    """Render a nutrition facts table."""

    nutrients: dict[Nutrient, QuantityModel]
    scale: float = 1.0
    max_digits: int | None = Field(default=None, ge=0)


class LogbookRequest(WireModel):
    """Aggregate a logbook day, optionally for one meal."""

    day: date
    entries: list[LogbookEntryModel] = Field(default_factory=list)
    target_nutrients: dict[Nutrient, QuantityModel] = Field(default_factory=dict)
    meal_type: MealType | None = None

    def to_domain(self) -> LogbookDay:
        return LogbookDay(
            day=self.day,
            entries=[entry.to_domain() for entry in self.entries],
            target_nutrients=nutrients_to_domain(self.target_nutrients),
        )


class CostsRequest(WireModel):
    """Compute cost metrics of a food item."""

    food: FoodItemModel


class RecipeRequest(WireModel):
    """Compute per-serving nutrients of a recipe from its ingredients."""

    recipe: RecipeModel


class ConsumeRequest(WireModel):
    """Take an amount, or a number of items, out of a pantry amount."""

    amount: InventoryAmountModel
    used: QuantityModel | int
