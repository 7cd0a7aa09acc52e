"""RDA coverage scoring for foods."""

import math
from dataclasses import dataclass

from eatwise.domain.catalog import AGE_GROUP_IDS, DEFAULT_AGE_GROUP, Food, Nutrient
from eatwise.services.catalog import NutrientCatalog

KEY_NUTRIENTS = (
    "protein",
    "fiber",
    "vitamin_a",
    "vitamin_c",
    "vitamin_d",
    "calcium",
    "iron",
    "potassium",
)

SCORE_CAP = 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def resolve_age_group(age_group: str | None) -> str:
    """Return a known age group id, defaulting to adults."""
    if age_group in AGE_GROUP_IDS:
        return age_group
    return DEFAULT_AGE_GROUP


def resolve_rda(nutrient: Nutrient, age_group: str | None) -> float:
    """Return the RDA for an age group, falling back to the adults RDA."""
    rda = nutrient.rda.get(resolve_age_group(age_group))
    if not rda:
        rda = nutrient.rda.get(DEFAULT_AGE_GROUP)
    return rda or 0.0


def nutrient_label(pct_rda: float) -> str:
    """Return a coverage label for a percentage of RDA."""
    if pct_rda >= 50:  # noqa: PLR2004
        return "excellent"
    if pct_rda >= 25:  # noqa: PLR2004
        return "good"
    if pct_rda >= 10:  # noqa: PLR2004
        return "moderate"
    return "low"


@dataclass
class ScoreEngine:
    """Convert nutrient quantities into percentages of the RDA."""

    catalog: NutrientCatalog
    key_nutrients: tuple[str, ...] = KEY_NUTRIENTS

    def score(
        self, food: Food, nutrient_id: str, age_group: str = DEFAULT_AGE_GROUP
    ) -> int:
        """Return the uncapped RDA coverage of a nutrient for one food."""
        nutrient = self.catalog.get_nutrient(nutrient_id)
        value = food.nutrient(nutrient_id)
        if nutrient is None or value <= 0:
            return 0
        rda = resolve_rda(nutrient, age_group)
        if rda <= 0:
            return 0
        return round_half_up(value / rda * 100)

    def overall_score(self, food: Food, age_group: str = DEFAULT_AGE_GROUP) -> int:
        """Average key-nutrient coverage, each capped at 100 first."""
        if not self.key_nutrients:
            return 0
        total = sum(
            min(self.score(food, nutrient_id, age_group), SCORE_CAP)
            for nutrient_id in self.key_nutrients
        )
        return round_half_up(total / len(self.key_nutrients))
