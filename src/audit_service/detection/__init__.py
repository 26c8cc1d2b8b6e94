from audit_service.detection.aggregation import (
    StudentScores,
    aggregate_scores,
    group_evaluations,
)
from audit_service.detection.attribution import find_outlier_evaluator
from audit_service.detection.data_models import (
    FlaggedStudent,
    StudentStatistics,
)
from audit_service.detection.policy import (
    FlaggingPolicy,
    HighRedundancyPolicy,
    LowRedundancyPolicy,
    select_policy,
)

__all__ = [
    "aggregate_scores",
    "find_outlier_evaluator",
    "FlaggedStudent",
    "FlaggingPolicy",
    "group_evaluations",
    "HighRedundancyPolicy",
    "LowRedundancyPolicy",
    "select_policy",
    "StudentScores",
    "StudentStatistics",
]
