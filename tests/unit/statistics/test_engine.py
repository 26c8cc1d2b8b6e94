"""
Tests for the statistics engine orchestration.
"""

import pytest

from audit_service.core.data_models import (
    Evaluation,
    EvaluationStatus,
    Exam,
    StatisticsRecord,
)
from audit_service.core.exceptions import (
    ExamNotFoundError,
    MissingExamIdError,
    NoCompletedEvaluationsError,
)
from audit_service.statistics.engine import (
    StatisticsEngine,
    compute_statistics,
)
from audit_service.storage.memory import (
    InMemoryEvaluationStore,
    InMemoryExamStore,
    Stores,
)


def _evaluation(
    evaluator: str,
    student: str,
    total: float,
    exam_id: str = "x1",
    status: EvaluationStatus = EvaluationStatus.COMPLETED,
) -> Evaluation:
    return Evaluation(
        evaluator_id=evaluator,
        evaluatee_id=student,
        exam_id=exam_id,
        marks=(total,),
        status=status,
    )


def _engine(stores: Stores) -> StatisticsEngine:
    return StatisticsEngine(
        exams=stores.exams,
        evaluations=stores.evaluations,
        statistics=stores.statistics,
        tickets=stores.tickets,
        users=stores.users,
        batches=stores.batches,
    )


class RecordingStatisticsStore:
    def __init__(self) -> None:
        self.batches: list[list[StatisticsRecord]] = []

    def upsert_batch(self, records: list[StatisticsRecord]) -> None:
        self.batches.append(list(records))

    def find_by_exam(self, exam_id: str) -> list[StatisticsRecord]:
        return [r for batch in self.batches for r in batch]


class TestComputeStatistics:
    def test_records_match_scores(self) -> None:
        run = compute_statistics(
            Exam("x1", k=2),
            [
                _evaluation("e1", "A", 70),
                _evaluation("e2", "B", 90),
                _evaluation("e3", "A", 74),
                _evaluation("e4", "B", 10),
            ],
        )
        records = {r.student: r for r in run.records}

        assert run.total_students == 2
        assert run.policy_name == "low_redundancy"
        assert records["A"].individual_marks == [70.0, 74.0]
        assert records["A"].average == 72.0
        assert records["B"].individual_marks == [90.0, 10.0]
        assert all(r.k == 2 for r in run.records)
        assert all(r.exam == "x1" for r in run.records)

    def test_flagged_students_get_outlier(self) -> None:
        run = compute_statistics(
            Exam("x1", k=4),
            [
                _evaluation("e1", "D", 88),
                _evaluation("e2", "D", 90),
                _evaluation("e3", "D", 89),
                _evaluation("e4", "D", 40),
            ],
        )
        (flagged,) = run.flagged
        assert flagged.student_id == "D"
        assert flagged.outlier_evaluator == "e4"
        assert run.flagged_student_ids == ["D"]

    def test_high_k_excluded_students_still_counted(self) -> None:
        run = compute_statistics(
            Exam("x1", k=4),
            [_evaluation("e1", "A", 10), _evaluation("e2", "A", 20)],
        )
        assert run.total_students == 1
        assert run.records == []
        assert run.flagged == []

    def test_identical_summed_marks_not_flagged(self) -> None:
        # (0.1, 0.2) totals to 0.30000000000000004 for every evaluator
        run = compute_statistics(
            Exam("x1", k=5),
            [
                Evaluation(
                    evaluator_id=f"e{i}",
                    evaluatee_id="A",
                    exam_id="x1",
                    marks=(0.1, 0.2),
                )
                for i in range(5)
            ],
        )
        (record,) = run.records
        assert record.average == 0.1 + 0.2
        assert record.standard_deviation == 0.0
        assert not record.was_flagged
        assert run.flagged == []

    def test_threshold_override(self) -> None:
        run = compute_statistics(
            Exam("x1", k=4),
            [_evaluation("e1", "A", 10)],
            redundancy_threshold=5,
        )
        assert run.policy_name == "low_redundancy"


class TestStatisticsEngineRun:
    def test_missing_exam_id(self) -> None:
        with pytest.raises(MissingExamIdError):
            _engine(Stores()).run("")

    def test_unknown_exam(self) -> None:
        with pytest.raises(ExamNotFoundError):
            _engine(Stores()).run("nope")

    def test_no_completed_evaluations(self) -> None:
        stores = Stores(
            exams=InMemoryExamStore([Exam("x1", k=2)]),
            evaluations=InMemoryEvaluationStore(
                [
                    _evaluation(
                        "e1", "A", 10, status=EvaluationStatus.PENDING
                    ),
                    _evaluation("e2", "A", 10, exam_id="other"),
                ]
            ),
        )
        with pytest.raises(NoCompletedEvaluationsError):
            _engine(stores).run("x1")
        assert stores.statistics.find_by_exam("x1") == []

    def test_single_batched_upsert(self) -> None:
        recorder = RecordingStatisticsStore()
        stores = Stores(
            exams=InMemoryExamStore([Exam("x1", k=1)]),
            evaluations=InMemoryEvaluationStore(
                [_evaluation("e1", "A", 40), _evaluation("e2", "B", 60)]
            ),
        )
        engine = StatisticsEngine(
            exams=stores.exams,
            evaluations=stores.evaluations,
            statistics=recorder,
            tickets=stores.tickets,
            users=stores.users,
            batches=stores.batches,
        )

        summary = engine.run("x1")

        assert len(recorder.batches) == 1
        assert {r.student for r in recorder.batches[0]} == {"A", "B"}
        assert summary.total_students == 2
        assert summary.flagged_count == 0

    def test_no_tickets_unless_requested(self) -> None:
        stores = Stores(
            exams=InMemoryExamStore([Exam("x1", k=4)]),
            evaluations=InMemoryEvaluationStore(
                [
                    _evaluation("e1", "D", 88),
                    _evaluation("e2", "D", 90),
                    _evaluation("e3", "D", 89),
                    _evaluation("e4", "D", 40),
                ]
            ),
        )
        summary = _engine(stores).run("x1")

        assert summary.flagged_student_ids == ["D"]
        assert summary.tickets_created == []
        assert stores.tickets.find_by_exam("x1") == []

    def test_invalid_threshold(self) -> None:
        stores = Stores()
        with pytest.raises(ValueError, match="redundancy_threshold"):
            StatisticsEngine(
                exams=stores.exams,
                evaluations=stores.evaluations,
                statistics=stores.statistics,
                tickets=stores.tickets,
                users=stores.users,
                batches=stores.batches,
                redundancy_threshold=0,
            )
