"""Catalog interface consumed by the scoring services."""

from typing import Protocol

from eatwise.domain.catalog import AgeGroup, Food, Nutrient, Recipe


class NutrientCatalog(Protocol):
    """Read-only access to foods, nutrients, age groups and recipes."""

    def get_all_foods(self) -> list[Food]:
        """Return all foods in catalog order."""

    def get_food(self, food_id: str) -> Food | None:
        """Return a food by id, if present."""

    def get_nutrients(self) -> dict[str, Nutrient]:
        """Return all nutrients keyed by id, in catalog order."""

    def get_nutrient(self, nutrient_id: str) -> Nutrient | None:
        """Return a nutrient by id, if present."""

    def get_age_groups(self) -> list[AgeGroup]:
        """Return all age groups."""

    def get_age_group(self, age_group_id: str) -> AgeGroup | None:
        """Return an age group by id, if present."""

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Return a recipe by id, if present."""
