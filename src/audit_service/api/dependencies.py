import json
import logging
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version

from fastapi import Depends, Header

from audit_service.api.config import ApiSettings
from audit_service.api.schemas import SeedDataset
from audit_service.core.data_models import UserRole
from audit_service.statistics.authorization import authorize_teacher
from audit_service.statistics.data_models import Caller
from audit_service.statistics.engine import StatisticsEngine
from audit_service.storage.memory import Stores

logger = logging.getLogger(__name__)

PACKAGE_NAME = "peer-audit"


@lru_cache(maxsize=1)
def get_settings() -> ApiSettings:
    return ApiSettings()


_stores: Stores | None = None
_engine: StatisticsEngine | None = None


def load_stores(settings: ApiSettings) -> Stores:
    if settings.seed_path is None:
        return Stores()

    logger.info(f"Loading seed data from {settings.seed_path}")
    with open(settings.seed_path) as f:
        seed = SeedDataset.model_validate(json.load(f))
    return seed.to_stores()


def init_engine(
    settings: ApiSettings, stores: Stores | None = None
) -> StatisticsEngine:
    global _stores, _engine  # noqa: PLW0603
    _stores = stores if stores is not None else load_stores(settings)
    _engine = StatisticsEngine(
        exams=_stores.exams,
        evaluations=_stores.evaluations,
        statistics=_stores.statistics,
        tickets=_stores.tickets,
        users=_stores.users,
        batches=_stores.batches,
        redundancy_threshold=settings.redundancy_threshold,
    )
    return _engine


def get_engine() -> StatisticsEngine:
    assert _engine is not None, "StatisticsEngine not initialized"
    return _engine


def get_stores() -> Stores:
    assert _stores is not None, "Stores not initialized"
    return _stores


def get_caller(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Caller:
    """Caller identity as forwarded by the upstream gateway."""
    role: UserRole | None
    try:
        role = UserRole(x_user_role) if x_user_role else None
    except ValueError:
        role = None
    return Caller(user_id=x_user_id, role=role)


def require_teacher(caller: Caller = Depends(get_caller)) -> Caller:
    authorize_teacher(caller)
    return caller


def get_version() -> str:
    try:
        return version(PACKAGE_NAME)
    except PackageNotFoundError:
        return "unknown"
