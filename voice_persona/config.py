"""
Application Configuration - Environment Variable Management.
Loads configuration from the project .env file.
"""
import os
import logging
from pathlib import Path
from dataclasses import dataclass
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .schemas import PersonaAnalysisConfig

logger = logging.getLogger(__name__)

# Load .env from project root
PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE = PROJECT_ROOT / ".env"

if ENV_FILE.exists():
    load_dotenv(ENV_FILE)
    logger.info(f"Loaded environment from {ENV_FILE}")
else:
    logger.debug(f".env file not found at {ENV_FILE}")


@dataclass
class HostApiConfig:
    """Host application REST API (feed retrieval and transcription)."""
    base_url: Optional[str] = None
    api_token: Optional[str] = None
    timeout: float = 60.0

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url and not self.base_url.startswith("PASTE_"))

    @property
    def has_token(self) -> bool:
        return bool(self.api_token and not self.api_token.startswith("PASTE_"))


@dataclass
class AppConfig:
    """Main Application Configuration."""
    host_api: HostApiConfig
    analysis_overrides: Dict[str, Any]
    debug: bool = False
    log_level: str = "INFO"

    def analysis_config(self, base: Optional[PersonaAnalysisConfig] = None) -> PersonaAnalysisConfig:
        """Analysis config with environment overrides applied on top of base."""
        return (base or PersonaAnalysisConfig()).merged(self.analysis_overrides)

    def validate(self) -> dict:
        """Validate configuration and return status."""
        return {
            "host_api": {
                "configured": self.host_api.is_configured,
                "token_configured": self.host_api.has_token,
                "timeout": self.host_api.timeout,
            },
            "analysis_overrides": sorted(self.analysis_overrides),
            "offline_mode": not self.host_api.is_configured,
        }

    def log_status(self):
        """Log configuration status (without exposing tokens)."""
        status = self.validate()

        logger.info("=" * 50)
        logger.info("Configuration Status:")
        logger.info(f"  Host API: {'OK' if status['host_api']['configured'] else 'NOT CONFIGURED'}")
        logger.info(f"  Host API token: {'OK' if status['host_api']['token_configured'] else 'NOT SET'}")
        logger.info(f"  HTTP timeout: {status['host_api']['timeout']}s")
        logger.info(f"  Analysis overrides: {', '.join(status['analysis_overrides']) or 'none'}")
        logger.info("=" * 50)

        if status["offline_mode"]:
            logger.warning("Host API not configured - using local providers")


def _int_env(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={value!r}")
        return None


def _analysis_overrides_from_env() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}

    batch_size = _int_env("PERSONA_BATCH_SIZE")
    if batch_size is not None:
        overrides["batch_size"] = batch_size

    max_videos = _int_env("PERSONA_MAX_VIDEOS")
    if max_videos is not None:
        overrides["max_videos"] = max_videos

    requests_per_minute = _int_env("PERSONA_REQUESTS_PER_MINUTE")
    if requests_per_minute is not None:
        overrides["rate_limit"] = {"requests_per_minute": requests_per_minute}

    return overrides


def load_config() -> AppConfig:
    """Load configuration from environment variables."""
    host_api = HostApiConfig(
        base_url=os.getenv("PERSONA_HOST_API_URL") or None,
        api_token=os.getenv("PERSONA_HOST_API_TOKEN") or None,
        timeout=float(os.getenv("PERSONA_HTTP_TIMEOUT", "60")),
    )

    debug = os.getenv("DEBUG", "false").lower() == "true"

    return AppConfig(
        host_api=host_api,
        analysis_overrides=_analysis_overrides_from_env(),
        debug=debug,
        log_level="DEBUG" if debug else os.getenv("LOG_LEVEL", "INFO").upper(),
    )


# Global config instance
config = load_config()
