from pathlib import Path

import pytest

from audit_service.core.data import load_evaluations_csv
from audit_service.core.data_models import EvaluationStatus


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "evaluations.csv"
    path.write_text(content)
    return path


class TestLoadEvaluationsCsv:
    def test_parses_rows_in_order(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "evaluator_id,evaluatee_id,exam_id,marks,status\n"
            "e1,s1,x1,4;5;3,completed\n"
            "e2,s1,x1,1;2,pending\n",
        )
        evaluations = load_evaluations_csv(path)

        assert [e.evaluator_id for e in evaluations] == ["e1", "e2"]
        assert evaluations[0].marks == (4.0, 5.0, 3.0)
        assert evaluations[0].total_score == 12.0
        assert evaluations[1].status == EvaluationStatus.PENDING

    def test_status_column_optional(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "evaluator_id,evaluatee_id,exam_id,marks\ne1,s1,x1,10\n",
        )
        (evaluation,) = load_evaluations_csv(path)
        assert evaluation.is_completed

    def test_missing_column_raises(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "evaluator_id,evaluatee_id,marks\ne1,s1,1\n")
        with pytest.raises(ValueError, match="exam_id"):
            load_evaluations_csv(path)

    def test_invalid_marks_raise(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "evaluator_id,evaluatee_id,exam_id,marks\ne1,s1,x1,4;abc\n",
        )
        with pytest.raises(ValueError, match="Invalid marks string"):
            load_evaluations_csv(path)
