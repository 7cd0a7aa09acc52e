"""Procedural generation of nutrition quiz questions."""

import logging
import random
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol, TypeVar

from eatwise.domain.catalog import AGE_GROUP_IDS, Food, Nutrient, age_group_label
from eatwise.domain.quiz import Difficulty, Question
from eatwise.services.catalog import NutrientCatalog
from eatwise.services.scoring import round_half_up

EASY_NUTRIENTS = ("protein", "fiber", "vitamin_c")
AGE_RANKING_NUTRIENTS = ("calcium", "iron", "vitamin_d", "protein")
RDA_NUTRIENTS = ("calcium", "iron", "vitamin_d", "protein", "vitamin_c")
DISTRACTOR_FACTORS = (0.5, 1.8, 2.5)

CALORIE_QUESTIONS = 3
EASY_NUTRIENT_QUESTIONS = 3
MEDIUM_NUTRIENT_QUESTIONS = 4
AGE_RANKING_QUESTIONS = 2
RDA_QUESTIONS = 3
HARD_NUTRIENT_QUESTIONS = 3

DEFAULT_QUESTION_COUNT = 10

_T = TypeVar("_T")

_logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Source of uniformly distributed floats in [0, 1)."""

    def random(self) -> float:
        """Return the next float in [0, 1)."""


def shuffled(rng: RandomSource, items: Sequence[_T]) -> list[_T]:
    """Return a Fisher-Yates shuffled copy of ``items``."""
    result = list(items)
    for index in range(len(result) - 1, 0, -1):
        swap = _index(rng, index + 1)
        result[index], result[swap] = result[swap], result[index]
    return result


def choice(rng: RandomSource, items: Sequence[_T]) -> _T:
    """Return one random element of a non-empty sequence."""
    return items[_index(rng, len(items))]


def rda_distractors(rda: float) -> list[int]:
    """Return the wrong answers offered next to an RDA value."""
    return [round_half_up(rda * factor) for factor in DISTRACTOR_FACTORS]


def format_amount(value: float) -> str:
    """Format a quantity without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def _index(rng: RandomSource, size: int) -> int:
    return min(int(rng.random() * size), size - 1)


@dataclass
class QuestionGenerator:
    """Build a randomized quiz from the catalog.

    Every pool is generated on each call and then filtered by difficulty.
    Candidates that cannot be formed from the catalog are dropped. When the
    requested tier yields fewer than ``question_count`` questions and
    ``backfill`` is enabled, leftover questions from the other tiers top it up.
    """

    catalog: NutrientCatalog
    rng: RandomSource = field(default_factory=random.Random)
    question_count: int = DEFAULT_QUESTION_COUNT
    backfill: bool = True
    debug: bool = False

    def generate(
        self, difficulty: Difficulty | str = Difficulty.MEDIUM
    ) -> list[Question]:
        """Return up to ``question_count`` shuffled questions."""
        tier = Difficulty(difficulty)
        candidates = self.generate_pool()
        if tier is Difficulty.MEDIUM:
            selected = list(candidates)
            leftovers: list[Question] = []
        else:
            selected = [q for q in candidates if q.difficulty is tier]
            leftovers = [q for q in candidates if q.difficulty is not tier]

        if self.backfill and len(selected) < self.question_count and leftovers:
            needed = self.question_count - len(selected)
            extra = shuffled(self.rng, leftovers)[:needed]
            selected.extend(extra)
            if self.debug:
                _logger.info(
                    "Quiz backfill: difficulty=%s added=%s", tier.value, len(extra)
                )

        questions = shuffled(self.rng, selected)[: self.question_count]
        if self.debug:
            _logger.info(
                "Quiz generated: difficulty=%s candidates=%s returned=%s",
                tier.value,
                len(candidates),
                len(questions),
            )
        return questions

    def generate_pool(self) -> list[Question]:
        """Generate the easy, medium and hard candidate pools in order."""
        foods = self.catalog.get_all_foods()
        nutrients = self.catalog.get_nutrients()
        nutrient_ids = list(nutrients)
        hard_ids = [nid for nid in nutrient_ids if nid not in EASY_NUTRIENTS]
        labels = {age: self._age_label(age) for age in AGE_GROUP_IDS}
        candidates: list[Question | None] = []

        for _ in range(CALORIE_QUESTIONS):
            pair = shuffled(self.rng, foods)[:2]
            candidates.append(
                calorie_question(pair[0], pair[1]) if len(pair) > 1 else None
            )
        for _ in range(EASY_NUTRIENT_QUESTIONS):
            nutrient = nutrients.get(choice(self.rng, EASY_NUTRIENTS))
            candidates.append(self._pair_question(foods, nutrient, Difficulty.EASY))

        for _ in range(MEDIUM_NUTRIENT_QUESTIONS):
            nutrient = (
                nutrients[choice(self.rng, nutrient_ids)] if nutrient_ids else None
            )
            candidates.append(self._pair_question(foods, nutrient, Difficulty.MEDIUM))
        for _ in range(AGE_RANKING_QUESTIONS):
            nutrient = nutrients.get(choice(self.rng, AGE_RANKING_NUTRIENTS))
            candidates.append(
                age_ranking_question(nutrient, labels) if nutrient else None
            )

        for _ in range(RDA_QUESTIONS):
            nutrient = nutrients.get(choice(self.rng, RDA_NUTRIENTS))
            age_group = choice(self.rng, AGE_GROUP_IDS)
            candidates.append(
                rda_question(nutrient, age_group, labels[age_group], self.rng)
                if nutrient
                else None
            )
        for _ in range(HARD_NUTRIENT_QUESTIONS):
            nutrient = nutrients[choice(self.rng, hard_ids)] if hard_ids else None
            candidates.append(self._pair_question(foods, nutrient, Difficulty.HARD))

        questions = [q for q in candidates if q is not None]
        if self.debug and len(questions) < len(candidates):
            _logger.info(
                "Quiz candidates dropped: %s of %s",
                len(candidates) - len(questions),
                len(candidates),
            )
        return questions

    def _pair_question(
        self, foods: list[Food], nutrient: Nutrient | None, difficulty: Difficulty
    ) -> Question | None:
        """Sample two foods with a positive amount and ask which has more."""
        if nutrient is None:
            return None
        eligible = [food for food in foods if food.nutrient(nutrient.id) > 0]
        pair = shuffled(self.rng, eligible)[:2]
        if len(pair) < 2:  # noqa: PLR2004
            return None
        return more_nutrient_question(pair[0], pair[1], nutrient, difficulty)

    def _age_label(self, age_group: str) -> str:
        group = self.catalog.get_age_group(age_group)
        if group is not None and group.label:
            return group.label
        return age_group_label(age_group)


def calorie_question(a: Food, b: Food) -> Question:
    """Ask which of two foods is lower in calories; ``a`` wins ties."""
    a_wins = a.calories <= b.calories
    winner, loser = (a, b) if a_wins else (b, a)
    return Question(
        text=(
            "Which is lower in calories per 100g: "
            f"{a.display_name()} or {b.display_name()}?"
        ),
        options=(a.display_name(), b.display_name()),
        correct_index=0 if a_wins else 1,
        explanation=(
            f"{winner.display_name()} has {format_amount(winner.calories)} "
            f"kcal/100g vs {format_amount(loser.calories)} kcal/100g "
            f"for {loser.display_name()}."
        ),
        difficulty=Difficulty.EASY,
    )


def more_nutrient_question(
    a: Food, b: Food, nutrient: Nutrient, difficulty: Difficulty
) -> Question:
    """Ask which of two foods has more of a nutrient; ``a`` wins ties."""
    a_value = a.nutrient(nutrient.id)
    b_value = b.nutrient(nutrient.id)
    a_wins = a_value >= b_value
    winner, loser = (a, b) if a_wins else (b, a)
    name = nutrient.display_label
    return Question(
        text=(
            f"Which food has more {name} per 100g: "
            f"{a.display_name()} or {b.display_name()}?"
        ),
        options=(a.display_name(), b.display_name()),
        correct_index=0 if a_wins else 1,
        explanation=(
            f"{winner.display_name()} has "
            f"{format_amount(max(a_value, b_value))}{nutrient.unit} per 100g "
            f"compared to {format_amount(min(a_value, b_value))}{nutrient.unit} "
            f"for {loser.display_name()}."
        ),
        difficulty=difficulty,
    )


def age_ranking_question(
    nutrient: Nutrient, labels: Mapping[str, str]
) -> Question | None:
    """Ask which age group has the highest RDA for a nutrient.

    Options are the age groups in canonical order; equal RDAs resolve to the
    group listed first.
    """
    ranked = sorted(
        ((age, nutrient.rda.get(age) or 0) for age in AGE_GROUP_IDS),
        key=lambda item: item[1],
        reverse=True,
    )
    top_age, top_rda = ranked[0]
    if top_rda <= 0:
        return None
    name = nutrient.display_label
    return Question(
        text=f"At which age do you need the most {name}?",
        options=tuple(labels.get(age, age) for age in AGE_GROUP_IDS),
        correct_index=AGE_GROUP_IDS.index(top_age),
        explanation=(
            f"{labels.get(top_age, top_age)} need the most {name} at "
            f"{format_amount(top_rda)}{nutrient.unit} per day."
        ),
        difficulty=Difficulty.MEDIUM,
    )


def rda_question(
    nutrient: Nutrient, age_group: str, age_label: str, rng: RandomSource
) -> Question | None:
    """Ask for the exact RDA of a nutrient, with shuffled distractors.

    Distractors equal to the RDA or to each other are dropped so every option
    is distinct.
    """
    rda = nutrient.rda.get(age_group)
    if not rda:
        return None
    values: list[float] = [rda]
    for wrong in rda_distractors(rda):
        if wrong not in values:
            values.append(wrong)
    values = shuffled(rng, values)
    name = nutrient.display_label
    return Question(
        text=f"What is the recommended daily {name} for {age_label}?",
        options=tuple(f"{format_amount(v)}{nutrient.unit}" for v in values),
        correct_index=values.index(rda),
        explanation=(
            f"The recommended daily {name} intake for {age_label} is "
            f"{format_amount(rda)}{nutrient.unit}."
        ),
        difficulty=Difficulty.HARD,
    )
