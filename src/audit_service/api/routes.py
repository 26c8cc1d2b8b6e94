from fastapi import APIRouter, Depends

from audit_service.api.dependencies import (
    get_engine,
    get_stores,
    get_version,
    require_teacher,
)
from audit_service.api.schemas import (
    HealthResponse,
    StatisticsListResponse,
    TicketListResponse,
)
from audit_service.statistics.data_models import Caller, RunSummary
from audit_service.statistics.engine import StatisticsEngine
from audit_service.storage.memory import Stores

router = APIRouter(prefix="/api/v1")


@router.post("/exams/{exam_id}/statistics", status_code=201)
def generate_statistics(
    exam_id: str,
    generate_tickets: bool = False,
    caller: Caller = Depends(require_teacher),
    engine: StatisticsEngine = Depends(get_engine),
) -> RunSummary:
    return engine.run(exam_id.strip(), generate_tickets=generate_tickets)


@router.get("/exams/{exam_id}/statistics")
def list_statistics(
    exam_id: str,
    caller: Caller = Depends(require_teacher),
    stores: Stores = Depends(get_stores),
) -> StatisticsListResponse:
    return StatisticsListResponse(
        exam_id=exam_id, records=stores.statistics.find_by_exam(exam_id)
    )


@router.get("/exams/{exam_id}/tickets")
def list_tickets(
    exam_id: str,
    caller: Caller = Depends(require_teacher),
    stores: Stores = Depends(get_stores),
) -> TicketListResponse:
    return TicketListResponse(
        exam_id=exam_id, tickets=stores.tickets.find_by_exam(exam_id)
    )


@router.get("/health")
async def health_check(
    version: str = Depends(get_version),
) -> HealthResponse:
    return HealthResponse(version=version)
