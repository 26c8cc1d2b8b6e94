class ForbiddenError(Exception):
    def __init__(self, role: str | None) -> None:
        self.role = role
        super().__init__("Only teachers can perform this action.")


class MissingExamIdError(Exception):
    def __init__(self) -> None:
        super().__init__("Missing examId")


class ExamNotFoundError(Exception):
    def __init__(self, exam_id: str) -> None:
        self.exam_id = exam_id
        super().__init__(f"Exam not found: {exam_id}")


class NoCompletedEvaluationsError(Exception):
    def __init__(self, exam_id: str) -> None:
        self.exam_id = exam_id
        super().__init__(f"No completed evaluations found for exam {exam_id}")


class DuplicateTicketError(Exception):
    """A ticket already exists for this (exam, student) pair."""

    def __init__(self, exam_id: str, student_id: str) -> None:
        self.exam_id = exam_id
        self.student_id = student_id
        super().__init__(
            f"Ticket already exists for exam {exam_id}, student {student_id}"
        )
