import logging
import threading
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from audit_service.core.data_models import (
    Batch,
    Evaluation,
    Exam,
    StatisticsRecord,
    Ticket,
    User,
)
from audit_service.core.exceptions import DuplicateTicketError

logger = logging.getLogger(__name__)


class InMemoryExamStore:
    def __init__(self, exams: Iterable[Exam] = ()) -> None:
        self._exams = {exam.exam_id: exam for exam in exams}

    def get(self, exam_id: str) -> Exam | None:
        return self._exams.get(exam_id)


class InMemoryEvaluationStore:
    def __init__(self, evaluations: Iterable[Evaluation] = ()) -> None:
        self._evaluations: list[Evaluation] = list(evaluations)

    def add(self, evaluation: Evaluation) -> None:
        self._evaluations.append(evaluation)

    def find_completed(self, exam_id: str) -> list[Evaluation]:
        return [
            e
            for e in self._evaluations
            if e.exam_id == exam_id and e.is_completed
        ]


class InMemoryStatisticsStore:
    """Statistics keyed by (exam, student); a batch is applied under one
    lock so readers never see half of it."""

    def __init__(self) -> None:
        self._records: dict[tuple[str, str], StatisticsRecord] = {}
        self._lock = threading.Lock()

    def upsert_batch(self, records: Sequence[StatisticsRecord]) -> None:
        snapshot = {r.key: r.model_copy(deep=True) for r in records}
        with self._lock:
            self._records.update(snapshot)
        logger.debug(f"Upserted {len(snapshot)} statistics records")

    def get(self, exam_id: str, student_id: str) -> StatisticsRecord | None:
        with self._lock:
            return self._records.get((exam_id, student_id))

    def find_by_exam(self, exam_id: str) -> list[StatisticsRecord]:
        with self._lock:
            return [r for r in self._records.values() if r.exam == exam_id]


class InMemoryTicketStore:
    """Tickets with a uniqueness constraint on (exam, student)."""

    def __init__(self) -> None:
        self._tickets: dict[tuple[str, str], Ticket] = {}
        self._lock = threading.Lock()

    def find_one(self, exam_id: str, student_id: str) -> Ticket | None:
        with self._lock:
            return self._tickets.get((exam_id, student_id))

    def create(self, ticket: Ticket) -> Ticket:
        with self._lock:
            if ticket.key in self._tickets:
                raise DuplicateTicketError(ticket.exam, ticket.student)
            self._tickets[ticket.key] = ticket
        return ticket

    def find_by_exam(self, exam_id: str) -> list[Ticket]:
        with self._lock:
            return [t for t in self._tickets.values() if t.exam == exam_id]


class InMemoryUserStore:
    def __init__(self, users: Iterable[User] = ()) -> None:
        self._users = {user.user_id: user for user in users}

    def get(self, user_id: str) -> User | None:
        return self._users.get(user_id)


class InMemoryBatchStore:
    def __init__(self, batches: Iterable[Batch] = ()) -> None:
        self._batches: list[Batch] = list(batches)

    def find_by_student(self, student_id: str) -> list[Batch]:
        return [b for b in self._batches if student_id in b.students]


@dataclass
class Stores:
    """The full set of collaborators needed by the statistics engine."""

    exams: InMemoryExamStore = field(default_factory=InMemoryExamStore)
    evaluations: InMemoryEvaluationStore = field(
        default_factory=InMemoryEvaluationStore
    )
    statistics: InMemoryStatisticsStore = field(
        default_factory=InMemoryStatisticsStore
    )
    tickets: InMemoryTicketStore = field(default_factory=InMemoryTicketStore)
    users: InMemoryUserStore = field(default_factory=InMemoryUserStore)
    batches: InMemoryBatchStore = field(default_factory=InMemoryBatchStore)
