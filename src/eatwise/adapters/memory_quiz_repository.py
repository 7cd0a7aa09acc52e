"""In-process storage for live quiz sessions."""

from dataclasses import dataclass, field
from uuid import UUID

from eatwise.services.quiz import QuizSession, QuizSessionRepository


@dataclass
class InMemoryQuizSessionRepository(QuizSessionRepository):
    """Keep quiz sessions in a dict keyed by session id."""

    sessions: dict[UUID, QuizSession] = field(default_factory=dict)

    def add(self, session_id: UUID, session: QuizSession) -> None:
        self.sessions[session_id] = session

    def get(self, session_id: UUID) -> QuizSession | None:
        return self.sessions.get(session_id)

    def remove(self, session_id: UUID) -> None:
        self.sessions.pop(session_id, None)
