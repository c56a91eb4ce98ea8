"""User profile and daily calorie target calculation."""

import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class Gender(str, Enum):
    """Genders supported by the BMR formulas."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(str, Enum):
    """Self-reported activity levels."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very active"


ACTIVITY_MULTIPLIERS: dict[str, float] = {
    ActivityLevel.SEDENTARY.value: 1.2,
    ActivityLevel.LIGHT.value: 1.375,
    ActivityLevel.MODERATE.value: 1.55,
    ActivityLevel.ACTIVE.value: 1.725,
    ActivityLevel.VERY_ACTIVE.value: 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = ACTIVITY_MULTIPLIERS[ActivityLevel.MODERATE.value]

BmrEquation = Callable[[float, float, int], float]


@dataclass(frozen=True)
class BmrFormula:
    """Declarative BMR formula with one equation per gender."""

    name: str
    description: str
    male: BmrEquation
    female: BmrEquation

    def bmr(self, gender: str, height: float, weight: float, age: int) -> float:
        """Return the basal metabolic rate; non-male genders use the female form."""
        equation = self.male if gender == Gender.MALE.value else self.female
        return equation(height, weight, age)


class CalculationMethod(Enum):
    """Enum of calorie calculation methods (single source of truth)."""

    HARRIS_BENEDICT = BmrFormula(
        "Harris-Benedict",
        "Revised Harris-Benedict equation (Roza and Shizgal, 1984).",
        male=lambda h, w, a: 88.362 + 13.397 * w + 4.799 * h - 5.677 * a,
        female=lambda h, w, a: 447.593 + 9.247 * w + 3.098 * h - 4.330 * a,
    )
    MIFFLIN_ST_JEOR = BmrFormula(
        "Mifflin-St Jeor",
        "Mifflin-St Jeor equation (1990), based on weight, height and age.",
        male=lambda h, w, a: 10 * w + 6.25 * h - 5 * a + 5,
        female=lambda h, w, a: 10 * w + 6.25 * h - 5 * a - 161,
    )


def calculation_methods() -> list[dict[str, str]]:
    """Return the available methods with their descriptions."""
    return [
        {"name": method.value.name, "description": method.value.description}
        for method in CalculationMethod
    ]


def formula_for(method_name: str) -> BmrFormula:
    """Return the formula for a method name, falling back to Mifflin-St Jeor."""
    for method in CalculationMethod:
        if method.value.name == method_name:
            return method.value
    return CalculationMethod.MIFFLIN_ST_JEOR.value


def activity_multiplier(activity_level: str) -> float:
    """Return the multiplier for an activity level, moderate when unknown."""
    return ACTIVITY_MULTIPLIERS.get(activity_level, DEFAULT_ACTIVITY_MULTIPLIER)


def daily_calorie_target(  # noqa: PLR0913
    gender: str,
    height: float,
    weight: float,
    age: int,
    activity_level: str,
    method_name: str,
) -> float:
    """Return BMR scaled by the activity multiplier."""
    bmr = formula_for(method_name).bmr(gender, height, weight, age)
    return bmr * activity_multiplier(activity_level)


@dataclass(frozen=True)
class UserProfile:
    """Body and activity parameters of one user."""

    username: str | None = None
    gender: str = Gender.FEMALE.value
    height: float = 165.0
    weight: float = 60.0
    age: int = 30
    activity_level: str = ActivityLevel.MODERATE.value
    calculation_method: str = CalculationMethod.HARRIS_BENEDICT.value.name

    def bmr(self) -> float:
        """Return the basal metabolic rate for this profile."""
        return formula_for(self.calculation_method).bmr(
            self.gender, self.height, self.weight, self.age
        )

    def daily_calories(self) -> float:
        """Return the daily calorie target for this profile."""
        return daily_calorie_target(
            self.gender,
            self.height,
            self.weight,
            self.age,
            self.activity_level,
            self.calculation_method,
        )

    def is_valid(self) -> bool:
        """Return True when all body parameters are usable."""
        return (
            self.gender in {gender.value for gender in Gender}
            and math.isfinite(self.height)
            and math.isfinite(self.weight)
            and self.height > 0
            and self.weight > 0
            and self.age > 0
        )
