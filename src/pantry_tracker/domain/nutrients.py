"""Nutrient enumeration and nutrient maps."""

from enum import Enum

from pantry_tracker.domain.quantity import Quantity
from pantry_tracker.domain.units import Unit


class Nutrient(Enum):
    """Nutrients tracked per serving of a food."""

    # Energy
    ENERGY = "energy"
    # Carbs
    TOTAL_CARBS = "total_carbs"
    DIETARY_FIBER = "dietary_fiber"
    TOTAL_SUGARS = "total_sugars"
    ADDED_SUGARS = "added_sugars"
    # Fats
    TOTAL_FAT = "total_fat"
    SATURATED_FAT = "saturated_fat"
    TRANS_FAT = "trans_fat"
    POLYUNSATURATED_FAT = "polyunsaturated_fat"
    MONOUNSATURATED_FAT = "monounsaturated_fat"
    # Other
    PROTEIN = "protein"
    SODIUM = "sodium"
    CHOLESTEROL = "cholesterol"
    CALCIUM = "calcium"
    VITAMIN_D = "vitamin_d"
    IRON = "iron"
    POTASSIUM = "potassium"

    @property
    def common_unit(self) -> Unit:
        """Canonical display unit for the nutrient."""
        if self is Nutrient.ENERGY:
            return Unit.CALORIE
        if self in _MILLIGRAM_NUTRIENTS:
            return Unit.MILLIGRAM
        if self is Nutrient.VITAMIN_D:
            return Unit.MICROGRAM
        return Unit.GRAM

    @property
    def label(self) -> str:
        return _LABELS[self]


NutritionDict = dict[Nutrient, Quantity]

_MILLIGRAM_NUTRIENTS = frozenset(
    {
        Nutrient.SODIUM,
        Nutrient.CHOLESTEROL,
        Nutrient.CALCIUM,
        Nutrient.IRON,
        Nutrient.POTASSIUM,
    }
)

_LABELS: dict[Nutrient, str] = {
    Nutrient.ENERGY: "Calories",
    Nutrient.TOTAL_CARBS: "Total Carbohydrates",
    Nutrient.DIETARY_FIBER: "Dietary Fiber",
    Nutrient.TOTAL_SUGARS: "Total Sugars",
    Nutrient.ADDED_SUGARS: "Added Sugars",
    Nutrient.TOTAL_FAT: "Total Fat",
    Nutrient.SATURATED_FAT: "Saturated Fat",
    Nutrient.TRANS_FAT: "Trans Fat",
    Nutrient.POLYUNSATURATED_FAT: "Polyunsaturated Fat",
    Nutrient.MONOUNSATURATED_FAT: "Monounsaturated Fat",
    Nutrient.PROTEIN: "Protein",
    Nutrient.SODIUM: "Sodium",
    Nutrient.CHOLESTEROL: "Cholesterol",
    Nutrient.CALCIUM: "Calcium",
    Nutrient.VITAMIN_D: "Vitamin D",
    Nutrient.IRON: "Iron",
    Nutrient.POTASSIUM: "Potassium",
}

# Nutrition facts layout: (nutrient, indented under the previous top-level row).
NUTRITION_FACTS_LAYOUT: tuple[tuple[Nutrient, bool], ...] = (
    (Nutrient.ENERGY, False),
    (Nutrient.TOTAL_FAT, False),
    (Nutrient.SATURATED_FAT, True),
    (Nutrient.TRANS_FAT, True),
    (Nutrient.POLYUNSATURATED_FAT, True),
    (Nutrient.MONOUNSATURATED_FAT, True),
    (Nutrient.CHOLESTEROL, False),
    (Nutrient.SODIUM, False),
    (Nutrient.TOTAL_CARBS, False),
    (Nutrient.DIETARY_FIBER, True),
    (Nutrient.TOTAL_SUGARS, True),
    (Nutrient.ADDED_SUGARS, True),
    (Nutrient.PROTEIN, False),
    (Nutrient.VITAMIN_D, False),
    (Nutrient.CALCIUM, False),
    (Nutrient.IRON, False),
    (Nutrient.POTASSIUM, False),
)
