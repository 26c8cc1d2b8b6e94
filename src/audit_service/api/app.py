import uuid
from collections.abc import Awaitable, Callable
from typing import cast

from fastapi import FastAPI, Request, Response
from pydantic import ValidationError
from starlette.types import ExceptionHandler

from audit_service.api.config import ApiSettings
from audit_service.api.dependencies import get_settings, init_engine
from audit_service.api.errors import (
    exam_not_found_handler,
    forbidden_handler,
    missing_exam_id_handler,
    no_completed_evaluations_handler,
    unhandled_exception_handler,
    validation_error_handler,
)
from audit_service.api.routes import router
from audit_service.core.exceptions import (
    ExamNotFoundError,
    ForbiddenError,
    MissingExamIdError,
    NoCompletedEvaluationsError,
)
from audit_service.storage.memory import Stores


def create_app(
    settings: ApiSettings | None = None, stores: Stores | None = None
) -> FastAPI:
    if settings is None:
        settings = get_settings()

    app = FastAPI(title="Peer Evaluation Audit API")
    app.state.settings = settings
    init_engine(settings, stores)

    # Exception handlers — cast needed because FastAPI expects
    # (Request, Exception) but our handlers use specific exc types.
    _eh = cast(ExceptionHandler, forbidden_handler)
    app.add_exception_handler(ForbiddenError, _eh)
    _eh = cast(ExceptionHandler, missing_exam_id_handler)
    app.add_exception_handler(MissingExamIdError, _eh)
    _eh = cast(ExceptionHandler, exam_not_found_handler)
    app.add_exception_handler(ExamNotFoundError, _eh)
    _eh = cast(ExceptionHandler, no_completed_evaluations_handler)
    app.add_exception_handler(NoCompletedEvaluationsError, _eh)
    _eh = cast(ExceptionHandler, validation_error_handler)
    app.add_exception_handler(ValidationError, _eh)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Request-ID middleware
    @app.middleware("http")
    async def request_id_middleware(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("X-Request-ID", uuid.uuid4().hex[:12])
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(router)

    return app
