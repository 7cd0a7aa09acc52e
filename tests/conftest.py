"""Shared test fixtures."""

import json
import random
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from eatwise.config import Settings
from eatwise.domain.catalog import (
    NUTRIENT_KEYS,
    AgeGroup,
    CalorieRange,
    Food,
    Nutrient,
    Recipe,
    RecipeIngredient,
    SubGroup,
)
from eatwise.domain.quiz import Difficulty, Question
from eatwise.services.catalog import NutrientCatalog
from eatwise.services.comparison import ComparisonService
from eatwise.services.planner import KeyValueStore, PlannerService
from eatwise.services.questions import QuestionGenerator
from eatwise.services.ranking import RankingService
from eatwise.services.scoring import ScoreEngine

RDA_TABLE: dict[str, tuple[str, dict[str, float]]] = {
    "protein": ("g", {"children": 19, "teens": 46, "adults": 50, "seniors": 56}),
    "fat": ("g", {"children": 40, "teens": 60, "adults": 70, "seniors": 65}),
    "carbs": ("g", {"children": 130, "teens": 130, "adults": 130, "seniors": 130}),
    "fiber": ("g", {"children": 20, "teens": 26, "adults": 28, "seniors": 25}),
    "vitamin_a": (
        "µg",
        {"children": 400, "teens": 700, "adults": 900, "seniors": 900},
    ),
    "vitamin_b12": ("µg", {"children": 1.2, "teens": 2.4, "adults": 2.4}),
    "vitamin_c": ("mg", {"children": 25, "teens": 65, "adults": 90, "seniors": 90}),
    "vitamin_d": ("µg", {"children": 15, "teens": 15, "adults": 15, "seniors": 20}),
    "vitamin_e": ("mg", {"children": 7, "teens": 15, "adults": 15, "seniors": 15}),
    "vitamin_k": ("µg", {"children": 55, "teens": 75, "adults": 120, "seniors": 120}),
    "calcium": (
        "mg",
        {"children": 1000, "teens": 1300, "adults": 1000, "seniors": 1200},
    ),
    "iron": ("mg", {"children": 10, "teens": 15, "adults": 18, "seniors": 8}),
    "magnesium": ("mg", {"children": 240, "teens": 410, "adults": 420, "seniors": 420}),
    "potassium": ("mg", {"children": 2300, "teens": 3000, "adults": 3400}),
    "zinc": ("mg", {"children": 8, "teens": 11, "adults": 11, "seniors": 11}),
    "selenium": ("µg", {"children": 40, "teens": 55, "adults": 55, "seniors": 55}),
    "omega_3": ("g", {"children": 1.0, "teens": 1.6, "adults": 1.6, "seniors": 1.6}),
    "folate": ("µg", {"children": 300, "teens": 400, "adults": 400, "seniors": 400}),
}


def make_nutrient(nutrient_id: str) -> Nutrient:
    unit, rda = RDA_TABLE[nutrient_id]
    return Nutrient(id=nutrient_id, unit=unit, rda=dict(rda), color="#2E7D32")


def make_nutrients(*nutrient_ids: str) -> dict[str, Nutrient]:
    return {nid: make_nutrient(nid) for nid in (nutrient_ids or NUTRIENT_KEYS)}


def make_food(
    food_id: str,
    category: str = "other",
    calories: float = 100,
    name: str | None = None,
    **nutrients: float,
) -> Food:
    values = dict.fromkeys(NUTRIENT_KEYS, 0.0)
    values.update(nutrients)
    return Food(
        id=food_id,
        category=category,
        calories=calories,
        nutrients=values,
        serving_g=100,
        cost_tier=1,
        names={"en": name or food_id.replace("_", " ").title()},
    )


def sample_foods() -> list[Food]:
    return [
        make_food(
            "apple", "fruit", 52, fiber=2.4, vitamin_c=4.6, potassium=107, vitamin_k=2.2
        ),
        make_food(
            "banana", "fruit", 95, fiber=2.6, vitamin_c=8.7, potassium=358, magnesium=27
        ),
        make_food(
            "spinach",
            "vegetable",
            23,
            protein=2.9,
            fiber=2.2,
            vitamin_a=469,
            vitamin_c=28,
            vitamin_k=483,
            calcium=99,
            iron=2.7,
            folate=194,
        ),
        make_food(
            "salmon",
            "protein",
            208,
            protein=20,
            fat=13,
            vitamin_b12=3.2,
            vitamin_d=11,
            selenium=36,
            omega_3=2.3,
            potassium=363,
        ),
        make_food(
            "almonds",
            "nut_seed",
            579,
            protein=21,
            fat=50,
            fiber=12.5,
            vitamin_e=25.6,
            calcium=269,
            magnesium=270,
            iron=3.7,
            zinc=3.1,
        ),
        make_food(
            "lentils",
            "legume",
            116,
            protein=9,
            carbs=20,
            fiber=7.9,
            iron=3.3,
            folate=181,
            zinc=1.3,
        ),
        make_food(
            "yogurt",
            "dairy",
            59,
            protein=10,
            calcium=110,
            vitamin_b12=0.75,
            potassium=141,
        ),
        make_food("oats", "grain", 389, protein=16.9, carbs=66, fiber=10.6, iron=4.7),
    ]


def sample_age_groups() -> list[AgeGroup]:
    return [
        AgeGroup(
            id="children",
            label="Children",
            sub_groups=(SubGroup("4-8", CalorieRange(1200, 1600)),),
        ),
        AgeGroup(
            id="teens",
            label="Teens",
            sub_groups=(SubGroup("14-18", CalorieRange(1800, 3200)),),
        ),
        AgeGroup(
            id="adults",
            label="Adults",
            sub_groups=(
                SubGroup("19-30", CalorieRange(2000, 3000)),
                SubGroup("31-50", CalorieRange(1800, 2600)),
            ),
        ),
        AgeGroup(id="seniors", label="Seniors"),
    ]


def sample_recipes() -> dict[str, Recipe]:
    return {
        "spinach_omelette": Recipe(
            id="spinach_omelette",
            name="Spinach omelette",
            calories=250,
            ingredients=(RecipeIngredient("spinach", 50),),
        ),
        "overnight_oats": Recipe(
            id="overnight_oats",
            name="Overnight oats",
            calories=420,
            ingredients=(
                RecipeIngredient("oats", 60),
                RecipeIngredient("yogurt", 150),
                RecipeIngredient("unknown_food", 30),
            ),
        ),
    }


@dataclass
class InMemoryCatalog(NutrientCatalog):
    """In-memory catalog for tests."""

    foods: list[Food] = field(default_factory=sample_foods)
    nutrients: dict[str, Nutrient] = field(default_factory=make_nutrients)
    age_groups: list[AgeGroup] = field(default_factory=sample_age_groups)
    recipes: dict[str, Recipe] = field(default_factory=sample_recipes)

    def get_all_foods(self) -> list[Food]:
        return list(self.foods)

    def get_food(self, food_id: str) -> Food | None:
        return next((food for food in self.foods if food.id == food_id), None)

    def get_nutrients(self) -> dict[str, Nutrient]:
        return dict(self.nutrients)

    def get_nutrient(self, nutrient_id: str) -> Nutrient | None:
        return self.nutrients.get(nutrient_id)

    def get_age_groups(self) -> list[AgeGroup]:
        return list(self.age_groups)

    def get_age_group(self, age_group_id: str) -> AgeGroup | None:
        return next((g for g in self.age_groups if g.id == age_group_id), None)

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        return self.recipes.get(recipe_id)


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store for tests."""

    values: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


def write_catalog_files(directory: Path) -> Path:
    """Write a small valid catalog to ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    foods = [
        {
            "id": "apple",
            "name": {"en": "Apple", "de": "Apfel"},
            "category": "fruit",
            "calories": 52,
            "nutrients": {"fiber": 2.4, "vitamin_c": 4.6},
            "serving_g": 182,
            "cost_tier": 1,
            "tags": ["snack"],
        },
        {
            "id": "salmon",
            "name": {"en": "Salmon"},
            "category": "protein",
            "calories": 208,
            "nutrients": {"protein": 20, "vitamin_d": 11},
            "serving_g": 150,
            "cost_tier": 3,
        },
    ]
    nutrients = {
        nid: {"unit": unit, "rda": rda, "color": "#1565C0"}
        for nid, (unit, rda) in RDA_TABLE.items()
    }
    age_groups = [
        {
            "id": "adults",
            "name": "Adults",
            "sub_groups": [
                {"id": "19-30", "daily_calories": {"min": 2000, "max": 3000}}
            ],
        }
    ]
    recipes = [
        {
            "id": "salmon_bowl",
            "name_key": "recipe.salmon_bowl",
            "ingredients": [{"food_id": "salmon", "amount_g": 120}],
            "total_nutrients": {"calories": 480},
        }
    ]
    for name, payload in (
        ("foods.json", foods),
        ("nutrients.json", nutrients),
        ("age-groups.json", age_groups),
        ("recipes.json", recipes),
    ):
        (directory / name).write_text(json.dumps(payload), encoding="utf-8")
    return directory


@pytest.fixture
def catalog() -> InMemoryCatalog:
    return InMemoryCatalog()


@pytest.fixture
def score_engine(catalog: InMemoryCatalog) -> ScoreEngine:
    return ScoreEngine(catalog)


@pytest.fixture
def ranking_service(score_engine: ScoreEngine) -> RankingService:
    return RankingService(score_engine)


@pytest.fixture
def comparison_service(
    catalog: InMemoryCatalog, score_engine: ScoreEngine
) -> ComparisonService:
    return ComparisonService(catalog, score_engine)


@pytest.fixture
def generator(catalog: InMemoryCatalog) -> QuestionGenerator:
    return QuestionGenerator(catalog=catalog, rng=random.Random(1234))


@pytest.fixture
def planner_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def planner_service(
    planner_store: InMemoryKeyValueStore, catalog: InMemoryCatalog
) -> PlannerService:
    return PlannerService(store=planner_store, catalog=catalog)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        catalog_dir=write_catalog_files(tmp_path / "data"),
        planner_store_path=tmp_path / "store" / "planner.json",
        environment="test",
    )


@dataclass
class FakeQuestionGenerator:
    """Question generator returning a fixed question list."""

    questions: list[Question] = field(default_factory=list)
    calls: list[str] = field(default_factory=list)

    def generate(
        self, difficulty: Difficulty | str = Difficulty.MEDIUM
    ) -> list[Question]:
        self.calls.append(Difficulty(difficulty).value)
        return list(self.questions)


def make_questions(count: int) -> list[Question]:
    return [
        Question(
            text=f"Question {index}?",
            options=("yes", "no", "maybe"),
            correct_index=index % 3,
            explanation=f"Because {index}.",
            difficulty=Difficulty.EASY,
        )
        for index in range(count)
    ]
