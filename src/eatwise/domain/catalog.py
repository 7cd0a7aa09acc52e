"""Domain models for the nutrition catalog."""

from dataclasses import dataclass, field

NUTRIENT_KEYS = (
    "protein",
    "fat",
    "carbs",
    "fiber",
    "vitamin_a",
    "vitamin_b12",
    "vitamin_c",
    "vitamin_d",
    "vitamin_e",
    "vitamin_k",
    "calcium",
    "iron",
    "magnesium",
    "potassium",
    "zinc",
    "selenium",
    "omega_3",
    "folate",
)

AGE_GROUP_IDS = ("children", "teens", "adults", "seniors")

DEFAULT_AGE_GROUP = "adults"

FOOD_CATEGORIES = (
    "protein",
    "grain",
    "vegetable",
    "fruit",
    "dairy",
    "nut_seed",
    "legume",
    "other",
)

AGE_GROUP_LABELS = {
    "children": "Children",
    "teens": "Teens",
    "adults": "Adults",
    "seniors": "Seniors",
}


@dataclass(frozen=True)
class Food:
    """A catalog food with per-100g nutrient quantities."""

    id: str
    category: str
    calories: float
    nutrients: dict[str, float]
    serving_g: float
    cost_tier: int
    names: dict[str, str] = field(default_factory=dict)
    tags: tuple[str, ...] = ()

    def nutrient(self, nutrient_id: str) -> float:
        """Return the quantity of a nutrient, 0 when absent."""
        return self.nutrients.get(nutrient_id) or 0.0

    def display_name(self, lang: str = "en") -> str:
        """Return the localized name, falling back to English and the id."""
        return self.names.get(lang) or self.names.get("en") or self.id


@dataclass(frozen=True)
class Nutrient:
    """A nutrient with its RDA per age group."""

    id: str
    unit: str
    rda: dict[str, float]
    color: str
    label: str = ""

    @property
    def display_label(self) -> str:
        return self.label or self.id.replace("_", " ")


@dataclass(frozen=True)
class CalorieRange:
    """Daily calorie range in kcal."""

    min: float
    max: float


@dataclass(frozen=True)
class SubGroup:
    """Age sub-group with an optional daily calorie range."""

    id: str
    daily_calories: CalorieRange | None = None


@dataclass(frozen=True)
class AgeGroup:
    """Age group metadata relevant to RDA lookups."""

    id: str
    label: str
    sub_groups: tuple[SubGroup, ...] = ()


@dataclass(frozen=True)
class RecipeIngredient:
    """Ingredient reference inside a recipe."""

    food_id: str
    amount_g: float = 100.0


@dataclass(frozen=True)
class Recipe:
    """Recipe used by the meal planner."""

    id: str
    name: str
    calories: float
    ingredients: tuple[RecipeIngredient, ...] = ()


def age_group_label(age_group: str) -> str:
    """Return a display label for an age group id."""
    return AGE_GROUP_LABELS.get(age_group, age_group.capitalize())
