from collections.abc import Sequence

from audit_service.core.data_models import Evaluation


def find_outlier_evaluator(
    evaluations: Sequence[Evaluation], average: float
) -> str | None:
    """
    Find the evaluator whose total score deviates most from ``average``.

    Scans in input order and only replaces the current worst on a strictly
    larger deviation, so ties go to the first evaluation seen.

    Args:
        evaluations: Completed evaluations received by one student.
        average: That student's average total score.

    Returns:
        The evaluator id, or None when ``evaluations`` is empty.
    """
    worst: Evaluation | None = None
    worst_deviation = -1.0
    for evaluation in evaluations:
        deviation = abs(evaluation.total_score - average)
        if deviation > worst_deviation:
            worst = evaluation
            worst_deviation = deviation

    return worst.evaluator_id if worst is not None else None
