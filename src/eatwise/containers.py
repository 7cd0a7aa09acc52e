"""Dependency container wiring for the scoring engine."""

import random
from dataclasses import dataclass

from eatwise.adapters.json_catalog import JsonNutrientCatalog
from eatwise.adapters.json_planner_store import JsonFileKeyValueStore
from eatwise.adapters.memory_quiz_repository import InMemoryQuizSessionRepository
from eatwise.app_logging import configure_logging
from eatwise.config import Settings, parse_excluded_categories
from eatwise.services.catalog import NutrientCatalog
from eatwise.services.comparison import ComparisonService
from eatwise.services.planner import PlannerService
from eatwise.services.questions import QuestionGenerator
from eatwise.services.quiz import QuizService
from eatwise.services.ranking import RankingService
from eatwise.services.scoring import ScoreEngine


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog: NutrientCatalog
    score_engine: ScoreEngine
    ranking_service: RankingService
    comparison_service: ComparisonService
    question_generator: QuestionGenerator
    quiz_service: QuizService
    planner_service: PlannerService
    top_overall_excluded: set[str]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    configure_logging()
    resolved_settings = settings or Settings()
    catalog = JsonNutrientCatalog.load(resolved_settings.catalog_dir)
    score_engine = ScoreEngine(catalog)
    question_generator = QuestionGenerator(
        catalog=catalog,
        rng=random.Random(),
        question_count=resolved_settings.quiz_question_count,
        debug=resolved_settings.quiz_debug,
    )
    return AppContainer(
        settings=resolved_settings,
        catalog=catalog,
        score_engine=score_engine,
        ranking_service=RankingService(score_engine),
        comparison_service=ComparisonService(catalog, score_engine),
        question_generator=question_generator,
        quiz_service=QuizService(
            generator=question_generator,
            repository=InMemoryQuizSessionRepository(),
        ),
        planner_service=PlannerService(
            store=JsonFileKeyValueStore(resolved_settings.planner_store_path),
            catalog=catalog,
        ),
        top_overall_excluded=parse_excluded_categories(
            resolved_settings.top_overall_excluded
        ),
    )
