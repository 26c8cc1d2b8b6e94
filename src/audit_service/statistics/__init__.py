"""
Per-exam statistics runs: flagging, persistence and ticket escalation.
"""

from audit_service.statistics.authorization import authorize_teacher
from audit_service.statistics.data_models import (
    Caller,
    EscalationResult,
    RunSummary,
    StatisticsRun,
)
from audit_service.statistics.engine import (
    StatisticsEngine,
    compute_statistics,
)
from audit_service.statistics.escalation import TicketEscalator

__all__ = [
    "authorize_teacher",
    "Caller",
    "compute_statistics",
    "EscalationResult",
    "RunSummary",
    "StatisticsEngine",
    "StatisticsRun",
    "TicketEscalator",
]
