from pathlib import Path

from pydantic_settings import BaseSettings

from audit_service.core.constants import REDUNDANCY_THRESHOLD

PEER_AUDIT_ENV_PREFIX = "PEER_AUDIT_"


class ApiSettings(BaseSettings):
    model_config = {"env_prefix": PEER_AUDIT_ENV_PREFIX}

    host: str = "127.0.0.1"
    port: int = 8000
    seed_path: Path | None = None
    redundancy_threshold: int = REDUNDANCY_THRESHOLD
