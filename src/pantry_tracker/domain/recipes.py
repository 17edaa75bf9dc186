"""Domain models for recipes and their ingredients."""

from dataclasses import dataclass, field, replace

from pantry_tracker.domain.foods import FoodItem, RatingTier
from pantry_tracker.domain.nutrients import Nutrient, NutritionDict
from pantry_tracker.domain.quantity import Quantity


@dataclass(frozen=True)
class RecipeMetadata:
    """Descriptive details of a recipe; times are in minutes."""

    details: str = ""
    author: str | None = None
    prep_time: float = 0.0
    cook_time: float = 0.0
    other_time: float = 0.0
    tags: list[str] = field(default_factory=list)
    # Personal rating, 0 (worst) to 10 (best)
    rating: float | None = None
    # Estimated difficulty, 0 (easiest) to 10 (hardest)
    difficulty: float | None = None

    @property
    def total_time(self) -> float:
        return self.prep_time + self.cook_time + self.other_time

    def with_total_time(self, minutes: float) -> "RecipeMetadata":
        """Return metadata whose other time makes up `minutes` in total."""
        return replace(self, other_time=minutes - self.prep_time - self.cook_time)

    @property
    def rating_tier(self) -> RatingTier | None:
        return RatingTier.from_rating(self.rating)


@dataclass(frozen=True)
class RecipeSection:
    """One headed block of instructions."""

    header: str
    details: str


@dataclass(frozen=True)
class RecipeSize:
    num_servings: float
    # Friendly serving label (e.g. "1 bowl")
    serving_size: str = ""


@dataclass(frozen=True)
class RecipeIngredient:
    """An amount of an ingredient, optionally linked to a cataloged food."""

    name: str
    amount: Quantity
    food: FoodItem | None = None
    notes: str | None = None


@dataclass(frozen=True)
class Recipe:
    """A recipe with per-serving nutrients."""

    name: str
    size: RecipeSize
    nutrients: NutritionDict = field(default_factory=dict)
    metadata: RecipeMetadata = field(default_factory=RecipeMetadata)
    instructions: list[RecipeSection] = field(default_factory=list)
    ingredients: list[RecipeIngredient] = field(default_factory=list)

    def get_nutrient(
        self, nutrient: Nutrient, num_servings: float = 1.0
    ) -> Quantity | None:
        amount = self.nutrients.get(nutrient)
        if amount is None:
            return None
        return amount * num_servings

    def with_nutrients(self, nutrients: NutritionDict) -> "Recipe":
        return replace(self, nutrients=nutrients)
