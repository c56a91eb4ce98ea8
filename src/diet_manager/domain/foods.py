"""Domain models for the food catalog."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import ClassVar

ATOMIC_KIND = "BasicFood"
COMPOSITE_KIND = "CompositeFood"


@dataclass(eq=False)
class AtomicFood:
    """A food with a directly specified calorie value and optional nutrients."""

    kind: ClassVar[str] = ATOMIC_KIND

    identifier: str
    keywords: tuple[str, ...]
    calories: float
    nutrients: dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.keywords = tuple(self.keywords)
        self.nutrients = {
            name.lower(): float(amount) for name, amount in self.nutrients.items()
        }

    def calories_per_serving(self) -> float:
        """Return the calories in one serving."""
        return self.calories

    def nutrient(self, name: str) -> float:
        """Return the amount of a nutrient per serving, 0.0 when unknown."""
        key = name.lower()
        if key == "calories":
            return self.calories
        return self.nutrients.get(key, 0.0)

    def set_nutrient(self, name: str, amount: float) -> None:
        """Record the amount of a nutrient per serving."""
        key = name.lower()
        if key == "calories":
            self.calories = float(amount)
            return
        self.nutrients[key] = float(amount)


@dataclass(frozen=True)
class Component:
    """A component food and the servings of it used in a composite."""

    food: Food
    servings: float

    def calories(self) -> float:
        """Return the calories contributed by this component."""
        return self.food.calories_per_serving() * self.servings


@dataclass(eq=False)
class CompositeFood:
    """A food defined as a weighted combination of other foods."""

    kind: ClassVar[str] = COMPOSITE_KIND

    identifier: str
    keywords: tuple[str, ...]
    components: tuple[Component, ...] = ()

    def __post_init__(self) -> None:
        self.keywords = tuple(self.keywords)
        self.components = tuple(self.components)

    def calories_per_serving(self) -> float:
        """Return the summed calories of all components, evaluated live."""
        return sum(component.calories() for component in self.components)


Food = AtomicFood | CompositeFood


def reaches(food: Food, identifier: str) -> bool:
    """Return True if the food is, or transitively contains, the identifier."""
    if food.identifier == identifier:
        return True
    if isinstance(food, CompositeFood):
        return any(reaches(part.food, identifier) for part in food.components)
    return False


def normalize_keywords(keywords: Iterable[str]) -> tuple[str, ...]:
    """Strip keywords and drop empty ones."""
    cleaned = (keyword.strip() for keyword in keywords)
    return tuple(keyword for keyword in cleaned if keyword)


def matches_query(food: Food, tokens: list[str]) -> bool:
    """Return True when every token is found in the identifier or a keyword."""
    identifier = food.identifier.lower()
    keywords = [keyword.lower() for keyword in food.keywords]
    for token in tokens:
        if token in identifier:
            continue
        if not any(token in keyword for keyword in keywords):
            return False
    return True


def is_valid_amount(value: float, *, positive: bool = False) -> bool:
    """Return True for a finite amount that is non-negative, or positive."""
    if not math.isfinite(value):
        return False
    return value > 0 if positive else value >= 0
