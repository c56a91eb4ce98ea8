"""FastAPI application factory."""

import logging
from datetime import date

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from diet_manager.api.models import (
    AtomicFoodRequest,
    CompositeFoodRequest,
    LogFoodRequest,
    LoginRequest,
    NutrientRequest,
    ProfileUpdate,
)
from diet_manager.app_logging import configure_logging
from diet_manager.containers import AppContainer
from diet_manager.domain.foods import AtomicFood, Food
from diet_manager.domain.logs import DailySummary, LogEntry
from diet_manager.domain.profile import UserProfile, calculation_methods
from diet_manager.errors import NoActiveUserError


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.exception_handler(NoActiveUserError)
    async def no_active_user(request: Request, exc: NoActiveUserError) -> JSONResponse:
        logger.warning("Rejected request without active user: %s", exc.operation)
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/session")
    async def get_session() -> dict[str, object]:
        """Return the active user and profile."""
        sessions = container.session_service
        username = sessions.active.username if sessions.active else None
        return {"username": username, "profile": _profile_payload(sessions.profile)}

    @app.post("/session")
    async def login(payload: LoginRequest) -> dict[str, object]:
        """Start a session, replacing any active one."""
        session = container.session_service.login(payload.username)
        if session is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid username",
            )
        return {
            "username": session.username,
            "profile": _profile_payload(session.profile),
        }

    @app.delete("/session")
    async def logout() -> dict[str, str]:
        """End the active session."""
        container.session_service.logout()
        return {"status": "ok"}

    @app.get("/foods")
    async def list_foods(q: str | None = None) -> dict[str, object]:
        """List all foods, or those matching a search query."""
        catalog = container.catalog_service
        foods = catalog.search(q) if q else catalog.get_all()
        return {"foods": [_food_payload(food) for food in foods]}

    @app.get("/foods/{identifier}")
    async def get_food(identifier: str) -> dict[str, object]:
        """Return one food."""
        return _food_payload(_get_food_or_404(container, identifier))

    @app.post("/foods/atomic", status_code=status.HTTP_201_CREATED)
    async def create_atomic(payload: AtomicFoodRequest) -> dict[str, object]:
        """Create an atomic food."""
        food = container.catalog_service.create_atomic(
            payload.identifier,
            payload.keywords,
            payload.calories,
            payload.nutrients,
        )
        if food is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail="Food was rejected"
            )
        return _food_payload(food)

    @app.post("/foods/composite", status_code=status.HTTP_201_CREATED)
    async def create_composite(payload: CompositeFoodRequest) -> dict[str, object]:
        """Create a composite food from existing foods."""
        components = [
            _get_food_or_404(container, part.identifier)
            for part in payload.components
        ]
        food = container.catalog_service.create_composite(
            payload.identifier,
            payload.keywords,
            components,
            [part.servings for part in payload.components],
        )
        if food is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail="Food was rejected"
            )
        return _food_payload(food)

    @app.put("/foods/{identifier}/nutrients")
    async def set_nutrient(
        identifier: str, payload: NutrientRequest
    ) -> dict[str, object]:
        """Record a nutrient on an atomic food."""
        _get_food_or_404(container, identifier)
        if not container.catalog_service.set_nutrient(
            identifier, payload.name, payload.amount
        ):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Nutrient was rejected",
            )
        return _food_payload(_get_food_or_404(container, identifier))

    @app.get("/profile")
    async def get_profile() -> dict[str, object]:
        """Return the active profile and its calorie target."""
        return _profile_payload(container.session_service.profile)

    @app.put("/profile")
    async def update_profile(payload: ProfileUpdate) -> dict[str, object]:
        """Update fields of the active user's profile."""
        session = container.session_service.active
        updated = container.profile_service.update_profile(
            session, **payload.model_dump(exclude_none=True)
        )
        if not updated or session is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail="Profile was rejected"
            )
        return _profile_payload(session.profile)

    @app.get("/profile/methods")
    async def list_methods() -> dict[str, object]:
        """Return the available calorie calculation methods."""
        return {"methods": calculation_methods()}

    @app.get("/log")
    async def list_log_dates() -> dict[str, object]:
        """Return the dates the active user has logged food on."""
        days = container.diary_service.dates(container.session_service.active)
        return {"dates": [day.isoformat() for day in days]}

    @app.get("/log/{day}")
    async def get_log(day: date) -> dict[str, object]:
        """Return the active user's summary for a date."""
        summary = container.diary_service.summary(
            container.session_service.active, day
        )
        return _summary_payload(summary)

    @app.post("/log/{day}", status_code=status.HTTP_201_CREATED)
    async def log_food(day: date, payload: LogFoodRequest) -> dict[str, object]:
        """Log servings of a food for a date."""
        session = container.session_service.active
        food = _get_food_or_404(container, payload.food)
        entry = container.diary_service.add_food_to_log(
            session, day, food, payload.servings
        )
        if entry is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail="Entry was rejected"
            )
        return _entry_payload(entry)

    @app.delete("/log/{day}/{index}")
    async def remove_food(day: date, index: int) -> dict[str, object]:
        """Remove the entry at a position of the date's log."""
        session = container.session_service.active
        if not container.diary_service.remove_food_from_log(session, day, index):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="No such entry"
            )
        return _summary_payload(container.diary_service.summary(session, day))

    @app.delete("/log/{day}")
    async def clear_log(day: date) -> dict[str, object]:
        """Clear the date's log."""
        session = container.session_service.active
        container.diary_service.clear_log(session, day)
        return _summary_payload(container.diary_service.summary(session, day))

    @app.get("/history")
    async def get_history() -> dict[str, object]:
        """Return undoable commands and redo availability."""
        history = container.command_history
        return {
            "commands": history.describe(),
            "can_undo": history.can_undo,
            "can_redo": history.can_redo,
        }

    @app.post("/history/undo")
    async def undo() -> dict[str, bool]:
        """Undo the latest log change."""
        return {"changed": container.diary_service.undo()}

    @app.post("/history/redo")
    async def redo() -> dict[str, bool]:
        """Redo the latest undone log change."""
        return {"changed": container.diary_service.redo()}

    return app


def _get_food_or_404(container: AppContainer, identifier: str) -> Food:
    food = container.catalog_service.get_by_identifier(identifier)
    if food is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown food: {identifier}",
        )
    return food


def _food_payload(food: Food) -> dict[str, object]:
    payload: dict[str, object] = {
        "identifier": food.identifier,
        "kind": food.kind,
        "keywords": list(food.keywords),
        "calories_per_serving": food.calories_per_serving(),
    }
    if isinstance(food, AtomicFood):
        payload["nutrients"] = dict(food.nutrients)
    else:
        payload["components"] = [
            {"identifier": part.food.identifier, "servings": part.servings}
            for part in food.components
        ]
    return payload


def _entry_payload(entry: LogEntry) -> dict[str, object]:
    return {
        "food": entry.food.identifier,
        "servings": entry.servings,
        "calories": entry.calories(),
    }


def _summary_payload(summary: DailySummary) -> dict[str, object]:
    return {
        "day": summary.day.isoformat(),
        "entries": [_entry_payload(entry) for entry in summary.entries],
        "consumed": summary.consumed,
        "target": summary.target,
        "remaining": summary.remaining,
    }


def _profile_payload(profile: UserProfile) -> dict[str, object]:
    return {
        "username": profile.username,
        "gender": profile.gender,
        "height": profile.height,
        "weight": profile.weight,
        "age": profile.age,
        "activity_level": profile.activity_level,
        "calculation_method": profile.calculation_method,
        "target_calories": profile.daily_calories(),
    }
