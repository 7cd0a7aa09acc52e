"""Models for the daily meal planner."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

MEAL_SLOTS = ("breakfast", "lunch", "dinner", "snack")


class PlannerState(BaseModel):
    """Stored planner record: selected age group and a recipe per slot."""

    model_config = ConfigDict(populate_by_name=True)

    age_group: str = Field(default="adults", alias="ageGroup")
    meals: dict[str, str] = Field(default_factory=dict)


@dataclass(frozen=True)
class NutrientCoverage:
    """Planned amount of a nutrient against its RDA."""

    nutrient_id: str
    amount: float
    unit: str
    rda: float
    percentage: int
    label: str


@dataclass(frozen=True)
class PlannerTotals:
    """Daily totals for the planned meals."""

    age_group: str
    calories: float
    calorie_target: int
    calorie_percentage: int
    nutrients: list[NutrientCoverage]
