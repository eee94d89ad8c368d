"""Environment-driven settings."""

import logging
import os

from pydantic import BaseModel

from pkgshare.models.schemas import DEFAULT_THRESHOLD, clamp_threshold

logger = logging.getLogger(__name__)

DEFAULT_PERIOD = "last-week"


def _env_number(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default


class Settings(BaseModel):
    """Runtime settings, overridable with PKGSHARE_* environment variables."""

    registry_url: str = "https://registry.npmjs.org"
    downloads_url: str = "https://api.npmjs.org"
    timeout: float = 30.0
    threshold: int = DEFAULT_THRESHOLD
    period: str = DEFAULT_PERIOD

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment (after load_dotenv)."""
        return cls(
            registry_url=os.environ.get("PKGSHARE_REGISTRY_URL", cls.model_fields["registry_url"].default).rstrip("/"),
            downloads_url=os.environ.get("PKGSHARE_DOWNLOADS_URL", cls.model_fields["downloads_url"].default).rstrip("/"),
            timeout=_env_number("PKGSHARE_TIMEOUT", 30.0),
            threshold=clamp_threshold(_env_number("PKGSHARE_THRESHOLD", DEFAULT_THRESHOLD)),
            period=os.environ.get("PKGSHARE_PERIOD", DEFAULT_PERIOD),
        )
