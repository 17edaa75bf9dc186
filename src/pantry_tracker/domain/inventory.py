"""Domain models for food kept in the pantry and how much of it is left."""

from dataclasses import dataclass, replace
from datetime import date

from pantry_tracker.domain.foods import Cost, FoodItem
from pantry_tracker.domain.quantity import Quantity


class InventoryError(ValueError):
    """Raised when more is consumed than an instance has left."""


@dataclass(frozen=True)
class StoreOrigin:
    store: str
    cost: Cost


@dataclass(frozen=True)
class GiftOrigin:
    giver: str


@dataclass(frozen=True)
class GrownOrigin:
    location: str


Origin = StoreOrigin | GiftOrigin | GrownOrigin


@dataclass(frozen=True)
class InstanceDates:
    acquired: date
    expires: date
    frozen: date | None = None


@dataclass(frozen=True)
class SingleAmount:
    """Food used a portion at a time (a carton of milk, 2 lb of beef)."""

    total: Quantity
    remaining: Quantity

    @property
    def fraction_remaining(self) -> float:
        return self.remaining.convert(self.total.unit).value / self.total.value

    @property
    def is_empty(self) -> bool:
        return self.remaining.value <= 0

    def consume(self, used: Quantity) -> "SingleAmount":
        """Subtract `used`, converted to the unit of what remains.

        Raises UnitError when `used` is in another family and InventoryError
        when it exceeds the remaining amount.
        """
        used_here = used.convert(self.remaining.unit)
        left = self.remaining - used_here
        if used_here.value < 0 or left.value < 0:
            raise InventoryError(
                f"Cannot use {used.format()} with {self.remaining.format()} left"
            )
        return replace(self, remaining=left)


@dataclass(frozen=True)
class CollectionAmount:
    """Packaged food used one whole item at a time (a flat of cans)."""

    total: int
    remaining: int

    @property
    def fraction_remaining(self) -> float:
        return self.remaining / self.total

    @property
    def is_empty(self) -> bool:
        return self.remaining <= 0

    def consume(self, used: int = 1) -> "CollectionAmount":
        if used < 0 or used > self.remaining:
            raise InventoryError(f"Cannot use {used} items with {self.remaining} left")
        return replace(self, remaining=self.remaining - used)


InventoryAmount = SingleAmount | CollectionAmount


@dataclass(frozen=True)
class FoodInstance:
    """A specific purchase, gift or harvest of a food item."""

    food: FoodItem
    origin: Origin
    amount: InventoryAmount
    dates: InstanceDates

    def consume(self, used: Quantity | int) -> "FoodInstance":
        """Return the instance with `used` taken out of what is left."""
        if isinstance(self.amount, SingleAmount):
            if not isinstance(used, Quantity):
                raise InventoryError(f"{self.food.name} is tracked by amount")
            return replace(self, amount=self.amount.consume(used))
        if not isinstance(used, int):
            raise InventoryError(f"{self.food.name} is tracked by item count")
        return replace(self, amount=self.amount.consume(used))

    def is_expired(self, today: date) -> bool:
        return today > self.dates.expires
