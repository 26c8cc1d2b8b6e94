import logging

from audit_service.core.exceptions import ForbiddenError
from audit_service.statistics.data_models import Caller

logger = logging.getLogger(__name__)


def authorize_teacher(caller: Caller) -> None:
    """
    Admit only teacher callers.

    Raises:
        ForbiddenError: If the caller is not a teacher.
    """
    if not caller.is_teacher:
        logger.warning(
            f"Rejected statistics request from {caller.user_id} "
            f"with role {caller.role}"
        )
        raise ForbiddenError(caller.role)
