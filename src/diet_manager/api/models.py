"""Pydantic models for API request payloads."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Start a session for a username."""

    username: str


class AtomicFoodRequest(BaseModel):
    """Create an atomic food."""

    identifier: str
    keywords: list[str] = Field(default_factory=list)
    calories: float = Field(ge=0, allow_inf_nan=False)
    nutrients: dict[str, float] = Field(default_factory=dict)


class ComponentRequest(BaseModel):
    """A component of a composite food."""

    identifier: str
    servings: float = Field(gt=0, allow_inf_nan=False)


class CompositeFoodRequest(BaseModel):
    """Create a composite food from catalog foods."""

    identifier: str
    keywords: list[str] = Field(default_factory=list)
    components: list[ComponentRequest]


class NutrientRequest(BaseModel):
    """Record a nutrient amount per serving."""

    name: str
    amount: float = Field(ge=0, allow_inf_nan=False)


class LogFoodRequest(BaseModel):
    """Log servings of a catalog food."""

    food: str
    servings: float = Field(gt=0, allow_inf_nan=False)


class ProfileUpdate(BaseModel):
    """Fields to change on the active profile."""

    gender: str | None = None
    height: float | None = None
    weight: float | None = None
    age: int | None = None
    activity_level: str | None = None
    calculation_method: str | None = None
