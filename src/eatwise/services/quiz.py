"""Quiz session state machine."""

from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID, uuid4

from eatwise.domain.quiz import (
    AnswerOutcome,
    Difficulty,
    Question,
    QuizProgress,
    QuizResult,
    QuizState,
)
from eatwise.services.questions import QuestionGenerator
from eatwise.services.scoring import round_half_up

RATING_TIERS = (
    (80, "expert"),
    (60, "great"),
    (40, "good"),
)


class QuizSessionNotFoundError(LookupError):
    """Raised when a quiz session id is unknown."""


def rating_for(percentage: int) -> str:
    """Return the rating tier for a score percentage."""
    for threshold, rating in RATING_TIERS:
        if percentage >= threshold:
            return rating
    return "learning"


@dataclass
class QuizSession:
    """Walk through a generated question sequence and keep score."""

    generator: QuestionGenerator
    questions: list[Question] = field(default_factory=list)
    position: int = 0
    score: int = 0
    state: QuizState = QuizState.NOT_STARTED

    def start(self, difficulty: Difficulty | str = Difficulty.MEDIUM) -> None:
        """Generate a fresh question set and reset progress."""
        self.questions = self.generator.generate(difficulty)
        self.position = 0
        self.score = 0
        self.state = QuizState.UNANSWERED if self.questions else QuizState.FINISHED

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> Question | None:
        if self.state not in {QuizState.UNANSWERED, QuizState.ANSWERED}:
            return None
        return self.questions[self.position]

    @property
    def progress(self) -> QuizProgress:
        return QuizProgress(position=self.position, total=self.total, score=self.score)

    def answer(self, selected_index: int) -> AnswerOutcome | None:
        """Answer the current question; ignored unless it is unanswered."""
        if self.state is not QuizState.UNANSWERED:
            return None
        question = self.questions[self.position]
        correct = selected_index == question.correct_index
        if correct:
            self.score += 1
        self.state = QuizState.ANSWERED
        return AnswerOutcome(
            correct=correct,
            selected_index=selected_index,
            correct_index=question.correct_index,
            explanation=question.explanation,
        )

    def advance(self) -> None:
        """Move past an answered question, finishing after the last one."""
        if self.state is not QuizState.ANSWERED:
            return
        self.position += 1
        if self.position >= self.total:
            self.state = QuizState.FINISHED
            return
        self.state = QuizState.UNANSWERED

    @property
    def is_finished(self) -> bool:
        return self.state is QuizState.FINISHED

    @property
    def result(self) -> QuizResult | None:
        """Return the final result once the quiz is finished."""
        if not self.is_finished:
            return None
        percentage = round_half_up(self.score / self.total * 100) if self.total else 0
        return QuizResult(
            score=self.score,
            total=self.total,
            percentage=percentage,
            rating=rating_for(percentage),
        )


class QuizSessionRepository(Protocol):
    """Storage for live quiz sessions."""

    def add(self, session_id: UUID, session: QuizSession) -> None:
        """Store a session under an id."""

    def get(self, session_id: UUID) -> QuizSession | None:
        """Return a session by id, if present."""

    def remove(self, session_id: UUID) -> None:
        """Forget a session."""


@dataclass
class QuizService:
    """Manage independent quiz sessions, one per logical user."""

    generator: QuestionGenerator
    repository: QuizSessionRepository

    def start_session(
        self, difficulty: Difficulty | str = Difficulty.MEDIUM
    ) -> tuple[UUID, QuizSession]:
        """Create and start a new session."""
        session = QuizSession(generator=self.generator)
        session.start(difficulty)
        session_id = uuid4()
        self.repository.add(session_id, session)
        return session_id, session

    def get_session(self, session_id: UUID) -> QuizSession:
        """Return a live session or raise if unknown."""
        session = self.repository.get(session_id)
        if session is None:
            raise QuizSessionNotFoundError(str(session_id))
        return session

    def answer(self, session_id: UUID, selected_index: int) -> AnswerOutcome | None:
        """Answer the current question of a session."""
        return self.get_session(session_id).answer(selected_index)

    def advance(self, session_id: UUID) -> QuizSession:
        """Advance a session and return it."""
        session = self.get_session(session_id)
        session.advance()
        return session

    def discard(self, session_id: UUID) -> None:
        """Drop a session."""
        self.repository.remove(session_id)
