"""Shared test fixtures."""

import logging
from dataclasses import dataclass, field
from datetime import date

import pytest

from diet_manager.config import Settings
from diet_manager.containers import AppContainer, assemble_container
from diet_manager.domain.foods import Food
from diet_manager.domain.logs import LogEntry
from diet_manager.domain.profile import UserProfile
from diet_manager.services.catalog import CatalogRepository, FoodCatalogService
from diet_manager.services.history import CommandHistory
from diet_manager.services.logs import (
    DailyLogService,
    FoodResolver,
    LogBuckets,
    LogRepository,
)
from diet_manager.services.profiles import ProfileRepository, ProfileService


@dataclass
class InMemoryCatalogRepository(CatalogRepository):
    """In-memory catalog repository for tests."""

    foods: list[Food] = field(default_factory=list)
    saves: int = 0

    def load_foods(self) -> list[Food]:
        return list(self.foods)

    def save_foods(self, foods: list[Food]) -> None:
        self.foods = list(foods)
        self.saves += 1


@dataclass
class InMemoryLogRepository(LogRepository):
    """In-memory log repository that keeps a snapshot of the last save."""

    stored: dict[str, dict[date, list[tuple[str, float]]]] = field(
        default_factory=dict
    )
    saves: int = 0

    def load_logs(self, resolve_food: FoodResolver) -> LogBuckets:
        return {
            username: {
                day: [
                    LogEntry(food=resolve_food(food_id, 0.0), servings=servings)
                    for food_id, servings in rows
                ]
                for day, rows in days.items()
            }
            for username, days in self.stored.items()
        }

    def save_logs(self, logs: LogBuckets) -> None:
        self.stored = {
            username: {
                day: [(entry.food.identifier, entry.servings) for entry in entries]
                for day, entries in days.items()
            }
            for username, days in logs.items()
        }
        self.saves += 1


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[str, UserProfile] = field(default_factory=dict)
    legacy: UserProfile | None = None
    saves: int = 0

    def load_profile(self, username: str) -> UserProfile | None:
        return self.profiles.get(username)

    def load_legacy_profile(self) -> UserProfile | None:
        return self.legacy

    def save_profile(self, profile: UserProfile) -> None:
        assert profile.username is not None
        self.profiles[profile.username] = profile
        self.saves += 1


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(storage_root=tmp_path / "database")


@pytest.fixture
def catalog_repository() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository()


@pytest.fixture
def log_repository() -> InMemoryLogRepository:
    return InMemoryLogRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def catalog(catalog_repository: InMemoryCatalogRepository) -> FoodCatalogService:
    return FoodCatalogService(catalog_repository)


@pytest.fixture
def log_service(log_repository: InMemoryLogRepository) -> DailyLogService:
    return DailyLogService(log_repository)


@pytest.fixture
def history(log_service: DailyLogService) -> CommandHistory:
    return CommandHistory(store=log_service)


@pytest.fixture
def profile_service(profile_repository: InMemoryProfileRepository) -> ProfileService:
    return ProfileService(profile_repository)


@pytest.fixture
def container(
    settings: Settings,
    catalog_repository: InMemoryCatalogRepository,
    log_repository: InMemoryLogRepository,
    profile_repository: InMemoryProfileRepository,
) -> AppContainer:
    return assemble_container(
        settings=settings,
        catalog_repository=catalog_repository,
        log_repository=log_repository,
        profile_repository=profile_repository,
    )


@pytest.fixture
def app_logs(monkeypatch: pytest.MonkeyPatch) -> logging.Logger:
    """Let caplog see application logs even after configure_logging ran."""
    logger = logging.getLogger("diet_manager")
    monkeypatch.setattr(logger, "propagate", True)
    return logger
