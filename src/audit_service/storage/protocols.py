"""
Contracts for the collaborators the statistics engine reads from and
writes to. The surrounding application supplies the real implementations;
``audit_service.storage.memory`` provides in-process ones.
"""

from collections.abc import Sequence
from typing import Protocol

from audit_service.core.data_models import (
    Batch,
    Evaluation,
    Exam,
    StatisticsRecord,
    Ticket,
    User,
)


class ExamLookup(Protocol):
    def get(self, exam_id: str) -> Exam | None: ...


class EvaluationStore(Protocol):
    def find_completed(self, exam_id: str) -> list[Evaluation]:
        """Evaluations for ``exam_id`` with status completed, in stored
        order."""
        ...


class StatisticsStore(Protocol):
    def upsert_batch(self, records: Sequence[StatisticsRecord]) -> None:
        """Replace the record for each (exam, student) key in one step."""
        ...

    def find_by_exam(self, exam_id: str) -> list[StatisticsRecord]: ...


class TicketStore(Protocol):
    def find_one(self, exam_id: str, student_id: str) -> Ticket | None: ...

    def create(self, ticket: Ticket) -> Ticket:
        """Persist a new ticket.

        Raises:
            DuplicateTicketError: If the pair already has a ticket.
        """
        ...

    def find_by_exam(self, exam_id: str) -> list[Ticket]: ...


class UserStore(Protocol):
    def get(self, user_id: str) -> User | None: ...


class BatchStore(Protocol):
    def find_by_student(self, student_id: str) -> list[Batch]: ...
