"""
Domain records exchanged between the statistics engine and its collaborators.

- Evaluation, Exam, User, Batch: read-only inputs supplied by the
  surrounding application.
- StatisticsRecord, Ticket: documents written back by the engine.
"""

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class EvaluationStatus(StrEnum):
    PENDING = "pending"
    COMPLETED = "completed"


class UserRole(StrEnum):
    ADMIN = "admin"
    TEACHER = "teacher"
    TA = "ta"
    STUDENT = "student"


class TicketStatus(StrEnum):
    OPEN = "open"
    RESOLVED = "resolved"
    CLOSED = "closed"


@dataclass(frozen=True)
class Evaluation:
    """
    One peer evaluation of a student's exam submission.

    Attributes:
        evaluator_id: Student who assigned the marks.
        evaluatee_id: Student whose work was marked.
        exam_id: Exam the submission belongs to.
        marks: Per-criterion scores, in rubric order.
        status: Only completed evaluations take part in statistics.
    """

    evaluator_id: str
    evaluatee_id: str
    exam_id: str
    marks: tuple[float, ...]
    status: EvaluationStatus = EvaluationStatus.COMPLETED

    def __post_init__(self) -> None:
        if not self.evaluator_id or not self.evaluatee_id:
            raise ValueError("evaluator_id and evaluatee_id are required")

    @property
    def total_score(self) -> float:
        """Sum of the per-criterion marks."""
        return float(sum(self.marks))

    @property
    def is_completed(self) -> bool:
        return self.status == EvaluationStatus.COMPLETED


@dataclass(frozen=True)
class Exam:
    exam_id: str
    k: int

    def __post_init__(self) -> None:
        if self.k < 1:
            raise ValueError(f"k must be >= 1, got {self.k}")


@dataclass(frozen=True)
class User:
    user_id: str
    role: UserRole


@dataclass(frozen=True)
class Batch:
    """A group of students; ``tas`` is ordered and the first TA is the
    assignee for escalated tickets."""

    batch_id: str
    students: tuple[str, ...] = ()
    tas: tuple[str, ...] = ()


class StatisticsRecord(BaseModel):
    """Per-student statistics for one exam, upserted by (exam, student)."""

    exam: str
    student: str
    average: float
    standard_deviation: float
    class_average: float | None = None
    k: int
    was_flagged: bool
    individual_marks: list[float]

    @property
    def key(self) -> tuple[str, str]:
        return (self.exam, self.student)


class Ticket(BaseModel):
    ticket_id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    student: str
    evaluator: str | None = None
    ta: str | None = None
    exam: str
    message: str
    status: TicketStatus = TicketStatus.OPEN
    escalated_to_teacher: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def key(self) -> tuple[str, str]:
        return (self.exam, self.student)
