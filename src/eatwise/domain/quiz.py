"""Domain models for the nutrition quiz."""

from dataclasses import dataclass
from enum import Enum


class Difficulty(str, Enum):
    """Quiz difficulty tier."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class QuizState(str, Enum):
    """Lifecycle states of a quiz session."""

    NOT_STARTED = "NOT_STARTED"
    UNANSWERED = "UNANSWERED"
    ANSWERED = "ANSWERED"
    FINISHED = "FINISHED"


@dataclass(frozen=True)
class Question:
    """A generated multiple-choice question."""

    text: str
    options: tuple[str, ...]
    correct_index: int
    explanation: str
    difficulty: Difficulty


@dataclass(frozen=True)
class AnswerOutcome:
    """Feedback for an answered question."""

    correct: bool
    selected_index: int
    correct_index: int
    explanation: str


@dataclass(frozen=True)
class QuizProgress:
    """Current position within a quiz."""

    position: int
    total: int
    score: int


@dataclass(frozen=True)
class QuizResult:
    """Final quiz result."""

    score: int
    total: int
    percentage: int
    rating: str
