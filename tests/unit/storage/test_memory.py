import pytest

from audit_service.core.data_models import (
    Batch,
    Evaluation,
    EvaluationStatus,
    StatisticsRecord,
    Ticket,
)
from audit_service.core.exceptions import DuplicateTicketError
from audit_service.storage.memory import (
    InMemoryBatchStore,
    InMemoryEvaluationStore,
    InMemoryStatisticsStore,
    InMemoryTicketStore,
)


def _record(student: str, average: float) -> StatisticsRecord:
    return StatisticsRecord(
        exam="x1",
        student=student,
        average=average,
        standard_deviation=1.0,
        k=2,
        was_flagged=False,
        individual_marks=[average],
    )


class TestInMemoryEvaluationStore:
    def test_find_completed_filters_exam_and_status(self) -> None:
        keep = Evaluation("e1", "s1", "x1", marks=(1,))
        store = InMemoryEvaluationStore(
            [
                keep,
                Evaluation("e2", "s1", "x2", marks=(1,)),
                Evaluation(
                    "e3",
                    "s1",
                    "x1",
                    marks=(1,),
                    status=EvaluationStatus.PENDING,
                ),
            ]
        )
        assert store.find_completed("x1") == [keep]


class TestInMemoryStatisticsStore:
    def test_upsert_overwrites_by_key(self) -> None:
        store = InMemoryStatisticsStore()
        store.upsert_batch([_record("s1", 10.0), _record("s2", 20.0)])
        store.upsert_batch([_record("s1", 15.0)])

        assert len(store.find_by_exam("x1")) == 2
        record = store.get("x1", "s1")
        assert record is not None
        assert record.average == 15.0

    def test_stored_records_are_copies(self) -> None:
        store = InMemoryStatisticsStore()
        record = _record("s1", 10.0)
        store.upsert_batch([record])
        record.individual_marks.append(99.0)

        stored = store.get("x1", "s1")
        assert stored is not None
        assert stored.individual_marks == [10.0]


class TestInMemoryTicketStore:
    def test_unique_per_exam_and_student(self) -> None:
        store = InMemoryTicketStore()
        store.create(Ticket(student="s1", exam="x1", message="m"))
        with pytest.raises(DuplicateTicketError):
            store.create(Ticket(student="s1", exam="x1", message="m"))

        store.create(Ticket(student="s1", exam="x2", message="m"))
        assert len(store.find_by_exam("x1")) == 1
        assert len(store.find_by_exam("x2")) == 1

    def test_find_one_missing(self) -> None:
        assert InMemoryTicketStore().find_one("x1", "s1") is None


class TestInMemoryBatchStore:
    def test_find_by_student_keeps_order(self) -> None:
        store = InMemoryBatchStore(
            [
                Batch("b1", students=("s2",)),
                Batch("b2", students=("s1", "s2")),
                Batch("b3", students=("s1",)),
            ]
        )
        assert [b.batch_id for b in store.find_by_student("s1")] == [
            "b2",
            "b3",
        ]
