"""Nutrition catalog loaded from the site's JSON data files."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from eatwise.domain.catalog import (
    AGE_GROUP_IDS,
    FOOD_CATEGORIES,
    NUTRIENT_KEYS,
    AgeGroup,
    CalorieRange,
    Food,
    Nutrient,
    Recipe,
    RecipeIngredient,
    SubGroup,
    age_group_label,
)
from eatwise.services.catalog import NutrientCatalog

FOODS_FILE = "foods.json"
NUTRIENTS_FILE = "nutrients.json"
AGE_GROUPS_FILE = "age-groups.json"
RECIPES_FILE = "recipes.json"

_logger = logging.getLogger(__name__)


class CatalogError(RuntimeError):
    """Raised when catalog data is missing or invalid."""


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore")


class FoodRecord(_Record):
    """Schema of a food entry in foods.json."""

    id: str = Field(min_length=1)
    name: dict[str, str] = Field(default_factory=dict)
    category: str
    calories: float = Field(ge=0)
    nutrients: dict[str, float]
    serving_g: float = Field(gt=0)
    cost_tier: int = Field(ge=1, le=3)
    tags: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_values(self) -> "FoodRecord":
        if self.category not in FOOD_CATEGORIES:
            raise ValueError(f"unknown category {self.category!r}")
        negative = [key for key, value in self.nutrients.items() if value < 0]
        if negative:
            raise ValueError(f"negative nutrient values: {', '.join(negative)}")
        return self


class NutrientRecord(_Record):
    """Schema of a nutrient entry in nutrients.json."""

    name: str | None = None
    unit: str = Field(min_length=1)
    rda: dict[str, float]
    color: str = Field(pattern=r"^#[0-9A-Fa-f]{6}$")

    @model_validator(mode="after")
    def _check_rda(self) -> "NutrientRecord":
        bad = [group for group, value in self.rda.items() if value <= 0]
        if bad:
            raise ValueError(f"non-positive RDA for {', '.join(bad)}")
        return self


class CalorieRangeRecord(_Record):
    min: float = Field(ge=0)
    max: float = Field(gt=0)

    @model_validator(mode="after")
    def _check_order(self) -> "CalorieRangeRecord":
        if self.min >= self.max:
            raise ValueError("calorie range min must be below max")
        return self


class SubGroupRecord(_Record):
    id: str
    daily_calories: CalorieRangeRecord | None = None


class AgeGroupRecord(_Record):
    """Schema of an entry in age-groups.json."""

    id: str
    name: str | None = None
    sub_groups: list[SubGroupRecord] = Field(default_factory=list)


class IngredientRecord(_Record):
    food_id: str
    amount_g: float | None = Field(default=None, gt=0)


class RecipeRecord(_Record):
    """Schema of an entry in recipes.json."""

    id: str
    name: str | None = None
    name_key: str | None = None
    ingredients: list[IngredientRecord] = Field(default_factory=list)
    total_nutrients: dict[str, float] = Field(default_factory=dict)


@dataclass
class JsonNutrientCatalog(NutrientCatalog):
    """In-memory catalog built once from a data directory."""

    foods: list[Food]
    nutrients: dict[str, Nutrient]
    age_groups: list[AgeGroup] = field(default_factory=list)
    recipes: dict[str, Recipe] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._foods_by_id = {food.id: food for food in self.foods}
        self._age_groups_by_id = {group.id: group for group in self.age_groups}

    @classmethod
    def load(cls, directory: Path) -> "JsonNutrientCatalog":
        """Load and validate the catalog files in ``directory``."""
        foods = [_parse_food(record) for record in _load_list(directory / FOODS_FILE)]
        _check_unique([food.id for food in foods], FOODS_FILE)
        nutrients = {
            nutrient_id: _parse_nutrient(nutrient_id, record)
            for nutrient_id, record in _load_object(directory / NUTRIENTS_FILE).items()
        }
        age_groups = [
            _parse_age_group(record)
            for record in _load_list(directory / AGE_GROUPS_FILE, required=False)
        ]
        _check_unique([group.id for group in age_groups], AGE_GROUPS_FILE)
        recipe_list = [
            _parse_recipe(record)
            for record in _load_list(directory / RECIPES_FILE, required=False)
        ]
        _check_unique([recipe.id for recipe in recipe_list], RECIPES_FILE)
        recipes = {recipe.id: recipe for recipe in recipe_list}
        _logger.info(
            "Catalog loaded: foods=%s nutrients=%s age_groups=%s recipes=%s",
            len(foods),
            len(nutrients),
            len(age_groups),
            len(recipes),
        )
        return cls(
            foods=foods, nutrients=nutrients, age_groups=age_groups, recipes=recipes
        )

    def get_all_foods(self) -> list[Food]:
        return list(self.foods)

    def get_food(self, food_id: str) -> Food | None:
        return self._foods_by_id.get(food_id)

    def get_nutrients(self) -> dict[str, Nutrient]:
        return dict(self.nutrients)

    def get_nutrient(self, nutrient_id: str) -> Nutrient | None:
        return self.nutrients.get(nutrient_id)

    def get_age_groups(self) -> list[AgeGroup]:
        return list(self.age_groups)

    def get_age_group(self, age_group_id: str) -> AgeGroup | None:
        return self._age_groups_by_id.get(age_group_id)

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        return self.recipes.get(recipe_id)


def _read_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CatalogError(f"Unreadable catalog file {path.name}: {exc}") from exc


def _load_list(path: Path, *, required: bool = True) -> list[object]:
    if not path.exists():
        if required:
            raise CatalogError(f"Missing catalog file: {path}")
        _logger.warning("Optional catalog file not found: %s", path.name)
        return []
    data = _read_json(path)
    if not isinstance(data, list):
        raise CatalogError(f"{path.name} must contain a list")
    return data


def _load_object(path: Path) -> dict[str, object]:
    if not path.exists():
        raise CatalogError(f"Missing catalog file: {path}")
    data = _read_json(path)
    if not isinstance(data, dict):
        raise CatalogError(f"{path.name} must contain an object")
    return data


def _validate(model: type[_Record], payload: object, source: str) -> _Record:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise CatalogError(f"Invalid record in {source}: {exc}") from exc


def _check_unique(ids: list[str], source: str) -> None:
    seen: set[str] = set()
    for item_id in ids:
        if item_id in seen:
            raise CatalogError(f"Duplicate id {item_id!r} in {source}")
        seen.add(item_id)


def _parse_food(payload: object) -> Food:
    record = _validate(FoodRecord, payload, FOODS_FILE)
    nutrients = dict.fromkeys(NUTRIENT_KEYS, 0.0)
    nutrients.update(record.nutrients)
    return Food(
        id=record.id,
        category=record.category,
        calories=record.calories,
        nutrients=nutrients,
        serving_g=record.serving_g,
        cost_tier=record.cost_tier,
        names=dict(record.name),
        tags=tuple(record.tags),
    )


def _parse_nutrient(nutrient_id: str, payload: object) -> Nutrient:
    record = _validate(NutrientRecord, payload, f"{NUTRIENTS_FILE}:{nutrient_id}")
    return Nutrient(
        id=nutrient_id,
        unit=record.unit,
        rda=dict(record.rda),
        color=record.color,
        label=record.name or "",
    )


def _parse_age_group(payload: object) -> AgeGroup:
    record = _validate(AgeGroupRecord, payload, AGE_GROUPS_FILE)
    if record.id not in AGE_GROUP_IDS:
        raise CatalogError(f"Unknown age group {record.id!r} in {AGE_GROUPS_FILE}")
    return AgeGroup(
        id=record.id,
        label=record.name or age_group_label(record.id),
        sub_groups=tuple(
            SubGroup(
                id=sub.id,
                daily_calories=(
                    CalorieRange(min=sub.daily_calories.min, max=sub.daily_calories.max)
                    if sub.daily_calories
                    else None
                ),
            )
            for sub in record.sub_groups
        ),
    )


def _parse_recipe(payload: object) -> Recipe:
    record = _validate(RecipeRecord, payload, RECIPES_FILE)
    return Recipe(
        id=record.id,
        name=record.name or record.name_key or record.id,
        calories=record.total_nutrients.get("calories", 0.0),
        ingredients=tuple(
            RecipeIngredient(food_id=item.food_id, amount_g=item.amount_g or 100.0)
            for item in record.ingredients
        ),
    )
