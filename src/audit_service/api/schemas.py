from pydantic import BaseModel, Field

from audit_service.core.data_models import (
    Batch,
    Evaluation,
    EvaluationStatus,
    Exam,
    StatisticsRecord,
    Ticket,
    User,
    UserRole,
)
from audit_service.storage.memory import (
    InMemoryBatchStore,
    InMemoryEvaluationStore,
    InMemoryExamStore,
    InMemoryUserStore,
    Stores,
)

# --- Seed schemas ---


class ExamSchema(BaseModel):
    exam_id: str
    k: int = Field(ge=1)


class EvaluationSchema(BaseModel):
    evaluator_id: str = Field(min_length=1)
    evaluatee_id: str = Field(min_length=1)
    exam_id: str
    marks: list[float]
    status: EvaluationStatus = EvaluationStatus.COMPLETED

    def to_domain(self) -> Evaluation:
        return Evaluation(
            evaluator_id=self.evaluator_id,
            evaluatee_id=self.evaluatee_id,
            exam_id=self.exam_id,
            marks=tuple(self.marks),
            status=self.status,
        )


class UserSchema(BaseModel):
    user_id: str
    role: UserRole


class BatchSchema(BaseModel):
    batch_id: str
    students: list[str] = []
    tas: list[str] = []


class SeedDataset(BaseModel):
    """Fixture data loaded into the in-memory stores at startup."""

    exams: list[ExamSchema] = []
    evaluations: list[EvaluationSchema] = []
    users: list[UserSchema] = []
    batches: list[BatchSchema] = []

    def to_stores(self) -> Stores:
        return Stores(
            exams=InMemoryExamStore(
                Exam(exam_id=e.exam_id, k=e.k) for e in self.exams
            ),
            evaluations=InMemoryEvaluationStore(
                e.to_domain() for e in self.evaluations
            ),
            users=InMemoryUserStore(
                User(user_id=u.user_id, role=u.role) for u in self.users
            ),
            batches=InMemoryBatchStore(
                Batch(
                    batch_id=b.batch_id,
                    students=tuple(b.students),
                    tas=tuple(b.tas),
                )
                for b in self.batches
            ),
        )


# --- Response schemas ---


class StatisticsListResponse(BaseModel):
    exam_id: str
    records: list[StatisticsRecord]


class TicketListResponse(BaseModel):
    exam_id: str
    tickets: list[Ticket]


class ErrorDetail(BaseModel):
    code: str
    message: str
    request_id: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
