"""Flat-file implementation of the food catalog repository."""

import logging
from dataclasses import dataclass
from pathlib import Path

from diet_manager.adapters.flatfile import (
    FIELD_SEPARATOR,
    LIST_SEPARATOR,
    format_number,
    read_records,
    write_records,
)
from diet_manager.domain.foods import (
    ATOMIC_KIND,
    COMPOSITE_KIND,
    AtomicFood,
    Component,
    CompositeFood,
    Food,
    normalize_keywords,
)
from diet_manager.services.catalog import CatalogRepository

NUTRIENT_SEPARATOR = ";"
MIN_FIELDS = 4

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _PendingComposite:
    identifier: str
    keywords: tuple[str, ...]
    parts: list[tuple[str, float]]


@dataclass
class FlatFileCatalogRepository(CatalogRepository):
    """Stores foods one per line in ``foods.txt``.

    Atomic: ``BasicFood|id|kw1,kw2|calories|name=amount;...``
    Composite: ``CompositeFood|id|kw1,kw2|component:servings,...``
    """

    path: Path

    def load_foods(self) -> list[Food]:
        """Read all foods, resolving composite components by identifier."""
        order: list[str] = []
        foods: dict[str, Food] = {}
        pending: dict[str, _PendingComposite] = {}
        for line in read_records(self.path):
            parsed = _parse_line(line)
            if parsed is None:
                _logger.warning("Skipping malformed food record: %s", line)
                continue
            if parsed.identifier in foods or parsed.identifier in pending:
                _logger.warning("Skipping duplicate food: %s", parsed.identifier)
                continue
            order.append(parsed.identifier)
            if isinstance(parsed, _PendingComposite):
                pending[parsed.identifier] = parsed
            else:
                foods[parsed.identifier] = parsed

        _resolve_composites(foods, pending)
        for identifier in pending:
            _logger.warning(
                "Skipping composite with missing or cyclic components: %s",
                identifier,
            )
        return [foods[identifier] for identifier in order if identifier in foods]

    def save_foods(self, foods: list[Food]) -> None:
        """Rewrite the file with the given foods."""
        write_records(self.path, [_format_food(food) for food in foods])


def _resolve_composites(
    foods: dict[str, Food], pending: dict[str, _PendingComposite]
) -> None:
    # Composites may reference composites stored after them; resolve until no
    # progress. Whatever remains references unknown foods or forms a cycle.
    progress = True
    while pending and progress:
        progress = False
        for identifier, record in list(pending.items()):
            if not all(part in foods for part, _ in record.parts):
                continue
            foods[identifier] = CompositeFood(
                identifier=identifier,
                keywords=record.keywords,
                components=tuple(
                    Component(food=foods[part], servings=servings)
                    for part, servings in record.parts
                ),
            )
            del pending[identifier]
            progress = True


def _parse_line(line: str) -> AtomicFood | _PendingComposite | None:
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) < MIN_FIELDS or not fields[1]:
        return None
    kind, identifier, raw_keywords = fields[0], fields[1], fields[2]
    keywords = normalize_keywords(raw_keywords.split(LIST_SEPARATOR))
    try:
        if kind == ATOMIC_KIND:
            raw_nutrients = fields[4] if len(fields) > MIN_FIELDS else ""
            return AtomicFood(
                identifier=identifier,
                keywords=keywords,
                calories=float(fields[3]),
                nutrients=_parse_nutrients(raw_nutrients),
            )
        if kind == COMPOSITE_KIND:
            return _PendingComposite(
                identifier=identifier,
                keywords=keywords,
                parts=_parse_components(fields[3]),
            )
    except ValueError:
        return None
    return None


def _parse_components(raw: str) -> list[tuple[str, float]]:
    parts: list[tuple[str, float]] = []
    for chunk in raw.split(LIST_SEPARATOR):
        if not chunk:
            continue
        identifier, _, servings = chunk.rpartition(":")
        if not identifier:
            raise ValueError(f"Invalid component: {chunk}")
        parts.append((identifier, float(servings)))
    return parts


def _parse_nutrients(raw: str) -> dict[str, float]:
    nutrients: dict[str, float] = {}
    for chunk in raw.split(NUTRIENT_SEPARATOR):
        if not chunk:
            continue
        name, _, amount = chunk.partition("=")
        nutrients[name] = float(amount)
    return nutrients


def _format_food(food: Food) -> str:
    keywords = LIST_SEPARATOR.join(food.keywords)
    if isinstance(food, AtomicFood):
        nutrients = NUTRIENT_SEPARATOR.join(
            f"{name}={format_number(amount)}"
            for name, amount in food.nutrients.items()
        )
        fields = [
            food.kind,
            food.identifier,
            keywords,
            format_number(food.calories),
            nutrients,
        ]
    else:
        components = LIST_SEPARATOR.join(
            f"{part.food.identifier}:{format_number(part.servings)}"
            for part in food.components
        )
        fields = [food.kind, food.identifier, keywords, components]
    return FIELD_SEPARATOR.join(fields)
