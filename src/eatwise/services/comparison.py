"""Side-by-side comparison of two or three foods."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from eatwise.domain.catalog import DEFAULT_AGE_GROUP, Food
from eatwise.domain.comparison import ComparisonResult, NutrientComparison
from eatwise.services.catalog import NutrientCatalog
from eatwise.services.scoring import ScoreEngine

MIN_FOODS = 2
MAX_FOODS = 3

_logger = logging.getLogger(__name__)


class ComparisonError(ValueError):
    """Raised when a comparison is requested for an unsupported food count."""


@dataclass
class ComparisonService:
    """Score foods per nutrient and tally which food wins each one."""

    catalog: NutrientCatalog
    score_engine: ScoreEngine

    def compare(
        self, foods: Sequence[Food], age_group: str = DEFAULT_AGE_GROUP
    ) -> ComparisonResult:
        """Compare foods over every known nutrient.

        The earliest food in ``foods`` wins exact ties. Nutrients where every
        food scores zero are listed without a winner and count for nobody.
        """
        if not MIN_FOODS <= len(foods) <= MAX_FOODS:
            raise ComparisonError(
                f"Comparison needs {MIN_FOODS} to {MAX_FOODS} foods, got {len(foods)}"
            )

        nutrient_ids = list(self.catalog.get_nutrients())
        wins = [0] * len(foods)
        details: list[NutrientComparison] = []
        for nutrient_id in nutrient_ids:
            scores = tuple(
                self.score_engine.score(food, nutrient_id, age_group) for food in foods
            )
            best = _best_index(scores)
            winner = best if scores[best] > 0 else None
            if winner is not None:
                wins[winner] += 1
            details.append(
                NutrientComparison(
                    nutrient_id=nutrient_id, scores=scores, winner_index=winner
                )
            )

        _logger.debug(
            "Compared %s over %s nutrients: wins=%s",
            [food.id for food in foods],
            len(nutrient_ids),
            wins,
        )
        return ComparisonResult(
            food_ids=tuple(food.id for food in foods),
            details=details,
            wins=tuple(wins),
            total_nutrients=len(nutrient_ids),
        )


def _best_index(scores: Sequence[int]) -> int:
    best = 0
    for index in range(1, len(scores)):
        if scores[index] > scores[best]:
            best = index
    return best
