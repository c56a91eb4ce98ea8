"""Dependency container wiring for the application."""

from dataclasses import dataclass

from diet_manager.adapters.flatfile_catalog_repository import (
    FlatFileCatalogRepository,
)
from diet_manager.adapters.flatfile_log_repository import FlatFileLogRepository
from diet_manager.adapters.flatfile_profile_repository import (
    FlatFileProfileRepository,
)
from diet_manager.config import Settings
from diet_manager.services.catalog import CatalogRepository, FoodCatalogService
from diet_manager.services.diary import DiaryService
from diet_manager.services.history import CommandHistory
from diet_manager.services.logs import DailyLogService, LogRepository
from diet_manager.services.profiles import ProfileRepository, ProfileService
from diet_manager.services.sessions import SessionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_service: FoodCatalogService
    log_service: DailyLogService
    command_history: CommandHistory
    profile_service: ProfileService
    session_service: SessionService
    diary_service: DiaryService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container backed by flat files."""
    resolved_settings = settings or Settings()
    return assemble_container(
        settings=resolved_settings,
        catalog_repository=FlatFileCatalogRepository(resolved_settings.foods_path),
        log_repository=FlatFileLogRepository(resolved_settings.logs_path),
        profile_repository=FlatFileProfileRepository(resolved_settings.storage_root),
    )


def assemble_container(
    settings: Settings,
    catalog_repository: CatalogRepository,
    log_repository: LogRepository,
    profile_repository: ProfileRepository,
) -> AppContainer:
    """Wire services over the given repositories and load stored state."""
    catalog_service = FoodCatalogService(catalog_repository)
    catalog_service.load()
    log_service = DailyLogService(log_repository)
    # Log entries reference foods, so the catalog must be loaded first.
    log_service.load(catalog_service.resolve)
    command_history = CommandHistory(
        store=log_service,
        clear_redo_on_perform=settings.clear_redo_on_perform,
    )
    profile_service = ProfileService(profile_repository)
    return AppContainer(
        settings=settings,
        catalog_service=catalog_service,
        log_service=log_service,
        command_history=command_history,
        profile_service=profile_service,
        session_service=SessionService(profile_service),
        diary_service=DiaryService(
            catalog=catalog_service,
            logs=log_service,
            history=command_history,
        ),
    )
