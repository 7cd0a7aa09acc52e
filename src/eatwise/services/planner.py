"""Daily meal planner state and nutrient totals."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from eatwise.domain.catalog import DEFAULT_AGE_GROUP
from eatwise.domain.planner import (
    MEAL_SLOTS,
    NutrientCoverage,
    PlannerState,
    PlannerTotals,
)
from eatwise.services.catalog import NutrientCatalog
from eatwise.services.scoring import nutrient_label, resolve_rda, round_half_up

PLANNER_KEY = "ew-planner"
DEFAULT_CALORIE_TARGET = 2000

_logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Best-effort string storage keyed by name."""

    def get(self, key: str) -> str | None:
        """Return the stored value, if any."""

    def set(self, key: str, value: str) -> None:
        """Store a value."""


class UnknownMealSlotError(ValueError):
    """Raised for a meal slot outside the planner's slots."""


@dataclass
class PlannerService:
    """Load, edit and total the planned meals of a day."""

    store: KeyValueStore
    catalog: NutrientCatalog

    def load_state(self) -> PlannerState:
        """Return the stored planner record or the default one."""
        raw = self.store.get(PLANNER_KEY)
        if not raw:
            return PlannerState()
        try:
            return PlannerState.model_validate_json(raw)
        except ValidationError as exc:
            _logger.warning("Ignoring malformed planner state: %s", exc)
            return PlannerState()

    def save_state(self, state: PlannerState) -> None:
        """Persist the planner record."""
        self.store.set(PLANNER_KEY, state.model_dump_json(by_alias=True))

    def set_age_group(self, age_group: str) -> PlannerState:
        state = self.load_state()
        state.age_group = age_group
        self.save_state(state)
        return state

    def set_meal(self, slot: str, recipe_id: str) -> PlannerState:
        """Assign a recipe to a meal slot."""
        _check_slot(slot)
        state = self.load_state()
        state.meals[slot] = recipe_id
        self.save_state(state)
        return state

    def remove_meal(self, slot: str) -> PlannerState:
        _check_slot(slot)
        state = self.load_state()
        state.meals.pop(slot, None)
        self.save_state(state)
        return state

    def daily_totals(self, state: PlannerState | None = None) -> PlannerTotals:
        """Sum calories and nutrients of the planned recipes.

        Nutrients are estimated from recipe ingredients scaled by grams per
        100g. Recipes or foods missing from the catalog are skipped.
        """
        resolved = state or self.load_state()
        age_group = resolved.age_group or DEFAULT_AGE_GROUP
        nutrients = self.catalog.get_nutrients()
        totals = dict.fromkeys(nutrients, 0.0)
        calories = 0.0

        for recipe_id in resolved.meals.values():
            recipe = self.catalog.get_recipe(recipe_id)
            if recipe is None:
                continue
            calories += recipe.calories
            for ingredient in recipe.ingredients:
                food = self.catalog.get_food(ingredient.food_id)
                if food is None:
                    continue
                factor = ingredient.amount_g / 100
                for nutrient_id in nutrients:
                    totals[nutrient_id] += food.nutrient(nutrient_id) * factor

        coverage = []
        for nutrient_id, nutrient in nutrients.items():
            rda = resolve_rda(nutrient, age_group)
            amount = round_half_up(totals[nutrient_id] * 10) / 10
            percentage = round_half_up(amount / rda * 100) if rda > 0 else 0
            coverage.append(
                NutrientCoverage(
                    nutrient_id=nutrient_id,
                    amount=amount,
                    unit=nutrient.unit,
                    rda=rda,
                    percentage=percentage,
                    label=nutrient_label(percentage),
                )
            )

        calorie_target = self._calorie_target(age_group)
        return PlannerTotals(
            age_group=age_group,
            calories=calories,
            calorie_target=calorie_target,
            calorie_percentage=round_half_up(calories / calorie_target * 100),
            nutrients=coverage,
        )

    def _calorie_target(self, age_group: str) -> int:
        group = self.catalog.get_age_group(age_group)
        if group is None or not group.sub_groups:
            return DEFAULT_CALORIE_TARGET
        calorie_range = group.sub_groups[-1].daily_calories
        if calorie_range is None:
            return DEFAULT_CALORIE_TARGET
        target = round_half_up((calorie_range.min + calorie_range.max) / 2)
        return target if target > 0 else DEFAULT_CALORIE_TARGET


def _check_slot(slot: str) -> None:
    if slot not in MEAL_SLOTS:
        raise UnknownMealSlotError(f"Unknown meal slot: {slot}")
