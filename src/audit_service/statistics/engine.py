"""
Statistics engine for peer evaluations.

One run covers one exam:

1. Aggregate completed evaluations into per-student total scores.
2. Apply the flagging policy selected by the exam's redundancy ``k`` and
   attribute each flag to the evaluator who deviates most.
3. Upsert every student's statistics in a single batch.
4. Optionally open remediation tickets for flagged students.

Statistics and tickets are committed independently: a failure while
escalating never undoes statistics that were already written.
"""

import logging
from collections.abc import Sequence

from audit_service.core.constants import REDUNDANCY_THRESHOLD
from audit_service.core.data_models import Evaluation, Exam, StatisticsRecord
from audit_service.core.exceptions import (
    ExamNotFoundError,
    MissingExamIdError,
    NoCompletedEvaluationsError,
)
from audit_service.detection.aggregation import (
    aggregate_scores,
    group_evaluations,
)
from audit_service.detection.attribution import find_outlier_evaluator
from audit_service.detection.data_models import FlaggedStudent
from audit_service.detection.policy import select_policy
from audit_service.statistics.data_models import RunSummary, StatisticsRun
from audit_service.statistics.escalation import TicketEscalator
from audit_service.storage.protocols import (
    BatchStore,
    EvaluationStore,
    ExamLookup,
    StatisticsStore,
    TicketStore,
    UserStore,
)

logger = logging.getLogger(__name__)


def compute_statistics(
    exam: Exam,
    evaluations: Sequence[Evaluation],
    redundancy_threshold: int = REDUNDANCY_THRESHOLD,
) -> StatisticsRun:
    """
    Run aggregation, flagging and outlier attribution for one exam.

    Pure computation: nothing is read from or written to a store.

    Args:
        exam: The exam being analysed; its ``k`` selects the policy.
        evaluations: Evaluations for the exam. Non-completed ones are
            ignored.
        redundancy_threshold: Largest ``k`` handled by the class-wide
            policy.

    Returns:
        Records to persist and the flagged students with their outlier
        evaluators.
    """
    scores = aggregate_scores(evaluations)
    policy = select_policy(exam.k, redundancy_threshold)
    logger.info(
        f"Exam {exam.exam_id}: {len(scores)} students, k={exam.k}, "
        f"policy={policy.name}"
    )

    evaluations_by_student = group_evaluations(evaluations)
    records: list[StatisticsRecord] = []
    flagged: list[FlaggedStudent] = []
    for stats in policy.evaluate(scores):
        records.append(
            StatisticsRecord(
                exam=exam.exam_id,
                student=stats.student_id,
                average=stats.average,
                standard_deviation=stats.standard_deviation,
                class_average=stats.class_average,
                k=exam.k,
                was_flagged=stats.was_flagged,
                individual_marks=stats.scores,
            )
        )
        if stats.was_flagged:
            flagged.append(
                FlaggedStudent(
                    student_id=stats.student_id,
                    outlier_evaluator=find_outlier_evaluator(
                        evaluations_by_student.get(stats.student_id, []),
                        stats.average,
                    ),
                )
            )

    logger.info(f"Exam {exam.exam_id}: {len(flagged)} students flagged")
    return StatisticsRun(
        exam_id=exam.exam_id,
        policy_name=policy.name,
        total_students=len(scores),
        records=records,
        flagged=flagged,
    )


class StatisticsEngine:
    def __init__(
        self,
        exams: ExamLookup,
        evaluations: EvaluationStore,
        statistics: StatisticsStore,
        tickets: TicketStore,
        users: UserStore,
        batches: BatchStore,
        redundancy_threshold: int = REDUNDANCY_THRESHOLD,
    ) -> None:
        if redundancy_threshold < 1:
            raise ValueError("redundancy_threshold must be positive")
        self._exams = exams
        self._evaluations = evaluations
        self._statistics = statistics
        self._escalator = TicketEscalator(tickets, users, batches)
        self.redundancy_threshold = redundancy_threshold

    def _load(self, exam_id: str) -> tuple[Exam, list[Evaluation]]:
        if not exam_id:
            raise MissingExamIdError

        exam = self._exams.get(exam_id)
        if exam is None:
            raise ExamNotFoundError(exam_id)

        evaluations = [
            e
            for e in self._evaluations.find_completed(exam_id)
            if e.is_completed
        ]
        if not evaluations:
            raise NoCompletedEvaluationsError(exam_id)

        return exam, evaluations

    def run(self, exam_id: str, generate_tickets: bool = False) -> RunSummary:
        """
        Compute, store and optionally escalate statistics for an exam.

        Raises:
            MissingExamIdError: If ``exam_id`` is empty.
            ExamNotFoundError: If the exam does not exist.
            NoCompletedEvaluationsError: If the exam has no completed
                evaluations.
        """
        exam, evaluations = self._load(exam_id)
        run = compute_statistics(
            exam, evaluations, self.redundancy_threshold
        )

        if run.records:
            self._statistics.upsert_batch(run.records)

        summary = RunSummary(
            total_students=run.total_students,
            flagged_count=len(run.flagged),
            flagged_student_ids=run.flagged_student_ids,
        )
        if generate_tickets and run.flagged:
            escalation = self._escalator.escalate(exam.exam_id, run.flagged)
            summary.tickets_created = escalation.created
            summary.escalation_failures = escalation.failed
            if escalation.failed:
                logger.warning(
                    f"Exam {exam.exam_id}: escalation failed for "
                    f"{len(escalation.failed)} students"
                )

        return summary
