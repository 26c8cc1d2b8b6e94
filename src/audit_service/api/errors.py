import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from audit_service.api.schemas import ErrorDetail
from audit_service.core.exceptions import (
    ExamNotFoundError,
    ForbiddenError,
    MissingExamIdError,
    NoCompletedEvaluationsError,
)

logger = logging.getLogger(__name__)


def _get_request_id(request: Request) -> str | None:
    if hasattr(request.state, "request_id"):
        result: str = request.state.request_id
        return result
    return None


def _error_response(
    request: Request, status_code: int, code: str, message: str
) -> JSONResponse:
    detail = ErrorDetail(
        code=code,
        message=message,
        request_id=_get_request_id(request),
    )
    return JSONResponse(status_code=status_code, content=detail.model_dump())


async def forbidden_handler(
    request: Request, exc: ForbiddenError
) -> JSONResponse:
    return _error_response(request, 403, "FORBIDDEN", str(exc))


async def missing_exam_id_handler(
    request: Request, exc: MissingExamIdError
) -> JSONResponse:
    return _error_response(request, 400, "MISSING_EXAM_ID", str(exc))


async def exam_not_found_handler(
    request: Request, exc: ExamNotFoundError
) -> JSONResponse:
    return _error_response(request, 404, "EXAM_NOT_FOUND", str(exc))


async def no_completed_evaluations_handler(
    request: Request, exc: NoCompletedEvaluationsError
) -> JSONResponse:
    return _error_response(
        request, 404, "NO_COMPLETED_EVALUATIONS", str(exc)
    )


async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    return _error_response(request, 422, "VALIDATION_ERROR", str(exc))


async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    logger.exception("Unhandled exception")
    return _error_response(
        request, 500, "INTERNAL_ERROR", "Internal server error"
    )
