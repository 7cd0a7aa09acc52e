"""Top-k food rankings."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from eatwise.domain.catalog import DEFAULT_AGE_GROUP, Food
from eatwise.services.scoring import ScoreEngine

DEFAULT_LIMIT = 10


@dataclass
class RankingService:
    """Select the best foods for a nutrient or by overall score."""

    score_engine: ScoreEngine

    def top_for_nutrient(
        self, foods: Sequence[Food], nutrient_id: str, limit: int = DEFAULT_LIMIT
    ) -> list[Food]:
        """Return foods richest in a nutrient, by raw quantity."""
        eligible = [food for food in foods if food.nutrient(nutrient_id) > 0]
        ranked = sorted(
            eligible, key=lambda food: food.nutrient(nutrient_id), reverse=True
        )
        return ranked[:limit]

    def top_overall(
        self,
        foods: Sequence[Food],
        excluded_categories: Iterable[str] = (),
        limit: int = DEFAULT_LIMIT,
    ) -> list[Food]:
        """Return foods with the best overall score outside excluded categories."""
        excluded = set(excluded_categories)
        return self._rank_overall(
            [food for food in foods if food.category not in excluded], limit
        )

    def top_by_category(
        self, foods: Sequence[Food], category: str, limit: int = DEFAULT_LIMIT
    ) -> list[Food]:
        """Return foods of one category with the best overall score."""
        return self._rank_overall(
            [food for food in foods if food.category == category], limit
        )

    def _rank_overall(self, foods: list[Food], limit: int) -> list[Food]:
        scored = [
            (food, self.score_engine.overall_score(food, DEFAULT_AGE_GROUP))
            for food in foods
        ]
        scored.sort(key=lambda item: item[1], reverse=True)
        return [food for food, _ in scored[:limit]]
