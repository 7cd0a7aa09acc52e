"""Domain models for food comparisons."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutrientComparison:
    """Per-nutrient scores and the winning food, if any."""

    nutrient_id: str
    scores: tuple[int, ...]
    winner_index: int | None


@dataclass(frozen=True)
class ComparisonResult:
    """Outcome of comparing two or three foods."""

    food_ids: tuple[str, ...]
    details: list[NutrientComparison]
    wins: tuple[int, ...]
    total_nutrients: int

    def winners(self) -> list[NutrientComparison]:
        """Return only the nutrients that have a winner."""
        return [entry for entry in self.details if entry.winner_index is not None]
