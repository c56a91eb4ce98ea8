"""Tests for container wiring."""

from datetime import date

from diet_manager.config import Settings
from diet_manager.containers import build_container

DAY = date(2024, 3, 1)


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.diary_service.history is container.command_history
    assert container.command_history.store is container.log_service
    assert container.catalog_service.get_all() == []


def test_state_survives_restart(settings: Settings) -> None:
    container = build_container(settings)
    catalog = container.catalog_service
    apple = catalog.create_atomic("apple", ["fruit"], 95)
    bread = catalog.create_atomic("bread", ["grain"], 80)
    assert apple is not None
    assert bread is not None
    catalog.create_composite("sandwich", ["lunch"], [bread, apple], [2, 1])
    session = container.session_service.login("alice")
    container.profile_service.update_profile(session, age=40)
    container.diary_service.add_food_to_log(session, DAY, apple, 2)

    restarted = build_container(settings)
    restored = restarted.session_service.login("alice")

    sandwich = restarted.catalog_service.get_by_identifier("sandwich")
    assert sandwich is not None
    assert sandwich.calories_per_serving() == 255
    assert restored is not None
    assert restored.profile.age == 40
    entries = restarted.diary_service.entries(restored, DAY)
    assert entries[0].food is restarted.catalog_service.get_by_identifier("apple")
    assert restarted.diary_service.calories_consumed(restored, DAY) == 190
    assert not restarted.command_history.can_undo


def test_redo_policy_comes_from_settings(settings: Settings) -> None:
    configured = settings.model_copy(update={"clear_redo_on_perform": True})

    container = build_container(configured)

    assert container.command_history.clear_redo_on_perform
