import logging
from abc import ABC, abstractmethod

from audit_service.core.constants import REDUNDANCY_THRESHOLD
from audit_service.core.utils import mean, population_std
from audit_service.detection.aggregation import StudentScores
from audit_service.detection.data_models import StudentStatistics

logger = logging.getLogger(__name__)


class FlaggingPolicy(ABC):
    """Decides which students' peer evaluations look unreliable."""

    name: str

    def __init__(self, k: int) -> None:
        if k < 1:
            raise ValueError("k must be positive")
        self.k = k

    @abstractmethod
    def evaluate(self, scores: StudentScores) -> list[StudentStatistics]: ...


class LowRedundancyPolicy(FlaggingPolicy):
    """
    Compare each student's average against the rest of the class.

    With only a handful of evaluators per student, a student's own spread
    says little, so a student is flagged when their average lies strictly
    more than one class standard deviation from the class average.

    The stored ``standard_deviation`` is the class-wide figure, not a
    per-student one.
    """

    name = "low_redundancy"

    def evaluate(self, scores: StudentScores) -> list[StudentStatistics]:
        assessable = {
            student: marks for student, marks in scores.items() if marks
        }
        averages = {
            student: mean(marks) for student, marks in assessable.items()
        }

        class_average = mean(list(averages.values()))
        sd = population_std(list(averages.values()), class_average)
        logger.debug(
            f"Class average {class_average:.4f}, class sd {sd:.4f} "
            f"over {len(averages)} students"
        )

        results: list[StudentStatistics] = []
        for student, marks in assessable.items():
            avg = averages[student]
            results.append(
                StudentStatistics(
                    student_id=student,
                    average=avg,
                    standard_deviation=sd,
                    class_average=class_average,
                    was_flagged=bool(abs(avg - class_average) > sd),
                    scores=list(marks),
                )
            )
        return results


class HighRedundancyPolicy(FlaggingPolicy):
    """
    Check each student's evaluations for internal consistency.

    Students with fewer than ``k`` scores are skipped entirely. A student is
    flagged when any single score lies strictly more than one (population)
    standard deviation from their own mean. Identical scores give a zero
    deviation and are never flagged.
    """

    name = "high_redundancy"

    def evaluate(self, scores: StudentScores) -> list[StudentStatistics]:
        results: list[StudentStatistics] = []
        for student, marks in scores.items():
            if len(marks) < self.k:
                logger.debug(
                    f"Skipping {student}: {len(marks)} of {self.k} "
                    "evaluations"
                )
                continue

            avg = mean(marks)
            sd = population_std(marks, avg)
            within = all(abs(mark - avg) <= sd for mark in marks)
            results.append(
                StudentStatistics(
                    student_id=student,
                    average=avg,
                    standard_deviation=sd,
                    was_flagged=not within,
                    scores=list(marks),
                )
            )
        return results


def select_policy(
    k: int, threshold: int = REDUNDANCY_THRESHOLD
) -> FlaggingPolicy:
    """Pick the flagging policy for an exam with redundancy ``k``."""
    if k <= threshold:
        return LowRedundancyPolicy(k)
    return HighRedundancyPolicy(k)
