"""Services for managing the food catalog."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from diet_manager.domain.foods import (
    AtomicFood,
    Component,
    CompositeFood,
    Food,
    is_valid_amount,
    matches_query,
    normalize_keywords,
    reaches,
)

# Separators of the stored record format; names containing them are rejected.
RESERVED_CHARACTERS = frozenset("|,:;=")

_logger = logging.getLogger(__name__)


class CatalogRepository(Protocol):
    """Persistence interface for the food catalog."""

    def load_foods(self) -> list[Food]:
        """Return all stored foods with components resolved."""

    def save_foods(self, foods: list[Food]) -> None:
        """Replace the stored foods."""


@dataclass
class FoodCatalogService:
    """Application service for catalog operations."""

    repository: CatalogRepository
    _foods: dict[str, Food] = field(default_factory=dict, init=False, repr=False)

    def load(self) -> None:
        """Hydrate the catalog from storage, keeping the first of duplicates."""
        self._foods = {}
        for food in self.repository.load_foods():
            self._foods.setdefault(food.identifier, food)
        _logger.info("Food catalog loaded: foods=%s", len(self._foods))

    def add_food(self, food: Food) -> bool:
        """Insert a food unless its identifier is taken, then save."""
        if food.identifier in self._foods:
            return False
        self._foods[food.identifier] = food
        self._save()
        return True

    def get_by_identifier(self, identifier: str) -> Food | None:
        """Return the food with exactly this identifier, if present."""
        return self._foods.get(identifier)

    def get_all(self) -> list[Food]:
        """Return a snapshot of all foods in insertion order."""
        return list(self._foods.values())

    def search(self, query: str) -> list[Food]:
        """Return foods matching every whitespace-separated query token."""
        tokens = query.lower().split()
        return [food for food in self._foods.values() if matches_query(food, tokens)]

    def create_atomic(
        self,
        identifier: str,
        keywords: Iterable[str],
        calories: float,
        nutrients: Mapping[str, float] | None = None,
    ) -> AtomicFood | None:
        """Create and insert an atomic food; None on rejection."""
        cleaned_keywords = normalize_keywords(keywords)
        if not _is_usable_name(identifier, cleaned_keywords):
            return None
        if not is_valid_amount(calories) or identifier in self._foods:
            return None
        amounts = dict(nutrients or {})
        for name, amount in amounts.items():
            if not _is_usable_name(name, ()) or not is_valid_amount(amount):
                return None
        food = AtomicFood(
            identifier=identifier,
            keywords=cleaned_keywords,
            calories=float(calories),
            nutrients=amounts,
        )
        return food if self.add_food(food) else None

    def create_composite(
        self,
        identifier: str,
        keywords: Iterable[str],
        components: Sequence[Food],
        servings: Sequence[float],
    ) -> CompositeFood | None:
        """Create and insert a composite food; None on rejection.

        Components must be foods issued by this catalog. The composite keeps
        live references, so later calorie changes propagate to it.
        """
        cleaned_keywords = normalize_keywords(keywords)
        if not _is_usable_name(identifier, cleaned_keywords):
            return None
        if identifier in self._foods or len(components) != len(servings):
            return None
        if not all(is_valid_amount(amount, positive=True) for amount in servings):
            return None
        for component in components:
            if self._foods.get(component.identifier) is not component:
                return None
            if reaches(component, identifier):
                return None
        food = CompositeFood(
            identifier=identifier,
            keywords=cleaned_keywords,
            components=tuple(
                Component(food=component, servings=float(amount))
                for component, amount in zip(components, servings, strict=True)
            ),
        )
        return food if self.add_food(food) else None

    def set_nutrient(self, identifier: str, name: str, amount: float) -> bool:
        """Record a nutrient amount on an atomic food and save."""
        food = self._foods.get(identifier)
        if not isinstance(food, AtomicFood) or not is_valid_amount(amount):
            return False
        if not _is_usable_name(name, ()):
            return False
        food.set_nutrient(name, amount)
        self._save()
        return True

    def resolve(self, identifier: str, calories_per_serving: float) -> Food:
        """Return the catalog food, or a placeholder for a food no longer stored."""
        food = self._foods.get(identifier)
        if food is not None:
            return food
        _logger.warning("Log references unknown food: %s", identifier)
        return AtomicFood(
            identifier=identifier, keywords=(), calories=calories_per_serving
        )

    def _save(self) -> None:
        self.repository.save_foods(self.get_all())


def _is_usable_name(name: str, keywords: tuple[str, ...]) -> bool:
    if not name.strip():
        return False
    texts = (name, *keywords)
    return not any(RESERVED_CHARACTERS.intersection(text) for text in texts)
