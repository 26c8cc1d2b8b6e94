"""
CSV loading utilities for peer evaluation data.
"""

from pathlib import Path

import pandas as pd

from audit_service.core.constants import MARKS_SEPARATOR
from audit_service.core.data_models import Evaluation, EvaluationStatus

REQUIRED_COLUMNS = ("evaluator_id", "evaluatee_id", "exam_id", "marks")


def _parse_marks(marks_string: str) -> tuple[float, ...]:
    """Parse a separated marks string (e.g. "4;5;3.5") into numbers."""
    parts = [p.strip() for p in marks_string.split(MARKS_SEPARATOR)]
    try:
        return tuple(float(p) for p in parts if p)
    except ValueError as e:
        raise ValueError(f"Invalid marks string: '{marks_string}'") from e


def load_evaluations_csv(path: Path) -> list[Evaluation]:
    """Load a CSV file of peer evaluations.

    Expected CSV columns:
        - evaluator_id: student who assigned the marks
        - evaluatee_id: student whose work was marked
        - exam_id: exam identifier
        - marks: per-criterion marks separated by ";" (e.g. "4;5;3")
        - status (optional): evaluation status, defaults to "completed"

    Returns:
        Evaluations in file order.

    Raises:
        ValueError: If CSV format is invalid or a row cannot be parsed.
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False)

    for column in REQUIRED_COLUMNS:
        if column not in df.columns:
            raise ValueError(f"CSV must have '{column}' column")

    has_status = "status" in df.columns
    evaluations: list[Evaluation] = []
    for row in df.itertuples(index=False):
        status = (
            EvaluationStatus(row.status)
            if has_status and row.status
            else EvaluationStatus.COMPLETED
        )
        evaluations.append(
            Evaluation(
                evaluator_id=row.evaluator_id,
                evaluatee_id=row.evaluatee_id,
                exam_id=row.exam_id,
                marks=_parse_marks(row.marks),
                status=status,
            )
        )
    return evaluations
