from dataclasses import dataclass

from pydantic import BaseModel, Field

from audit_service.core.constants import RUN_SUCCESS_MESSAGE
from audit_service.core.data_models import StatisticsRecord, UserRole
from audit_service.detection.data_models import FlaggedStudent


@dataclass(frozen=True)
class Caller:
    """Identity of whoever invoked the engine, as vouched for upstream."""

    user_id: str | None
    role: UserRole | None

    @property
    def is_teacher(self) -> bool:
        return self.role == UserRole.TEACHER


@dataclass(frozen=True)
class StatisticsRun:
    """In-memory result of the aggregation and flagging stages."""

    exam_id: str
    policy_name: str
    total_students: int
    records: list[StatisticsRecord]
    flagged: list[FlaggedStudent]

    @property
    def flagged_student_ids(self) -> list[str]:
        return [f.student_id for f in self.flagged]


@dataclass
class EscalationResult:
    created: list[str]
    skipped: list[str]
    failed: list[str]


class RunSummary(BaseModel):
    message: str = RUN_SUCCESS_MESSAGE
    total_students: int
    flagged_count: int
    flagged_student_ids: list[str]
    tickets_created: list[str] = Field(default_factory=list)
    escalation_failures: list[str] = Field(default_factory=list)
