from collections.abc import Iterable, Mapping
from types import MappingProxyType

from audit_service.core.data_models import Evaluation

StudentScores = Mapping[str, tuple[float, ...]]


def aggregate_scores(evaluations: Iterable[Evaluation]) -> StudentScores:
    """
    Group total scores by the student who received them.

    Only completed evaluations contribute. Scores keep the order in which
    the evaluations were supplied, and students appear in order of their
    first evaluation. Students without a completed evaluation are absent.
    """
    grouped: dict[str, list[float]] = {}
    for evaluation in evaluations:
        if not evaluation.is_completed:
            continue
        grouped.setdefault(evaluation.evaluatee_id, []).append(
            evaluation.total_score
        )

    return MappingProxyType(
        {student: tuple(scores) for student, scores in grouped.items()}
    )


def group_evaluations(
    evaluations: Iterable[Evaluation],
) -> dict[str, list[Evaluation]]:
    """Completed evaluations per evaluatee, in input order."""
    grouped: dict[str, list[Evaluation]] = {}
    for evaluation in evaluations:
        if evaluation.is_completed:
            grouped.setdefault(evaluation.evaluatee_id, []).append(evaluation)
    return grouped
