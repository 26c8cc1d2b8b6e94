from audit_service.storage.memory import (
    InMemoryBatchStore,
    InMemoryEvaluationStore,
    InMemoryExamStore,
    InMemoryStatisticsStore,
    InMemoryTicketStore,
    InMemoryUserStore,
    Stores,
)
from audit_service.storage.protocols import (
    BatchStore,
    EvaluationStore,
    ExamLookup,
    StatisticsStore,
    TicketStore,
    UserStore,
)

__all__ = [
    "BatchStore",
    "EvaluationStore",
    "ExamLookup",
    "InMemoryBatchStore",
    "InMemoryEvaluationStore",
    "InMemoryExamStore",
    "InMemoryStatisticsStore",
    "InMemoryTicketStore",
    "InMemoryUserStore",
    "StatisticsStore",
    "Stores",
    "TicketStore",
    "UserStore",
]
