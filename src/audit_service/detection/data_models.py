from pydantic import BaseModel


class StudentStatistics(BaseModel):
    """Outcome of a flagging policy for a single student."""

    student_id: str
    average: float
    standard_deviation: float
    class_average: float | None = None
    was_flagged: bool
    scores: list[float]


class FlaggedStudent(BaseModel):
    student_id: str
    outlier_evaluator: str | None
