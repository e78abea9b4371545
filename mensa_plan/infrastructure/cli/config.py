"""
Mensa CLI configuration and settings.

Centralizes configuration for the meal plan client,
including default values and environment variables.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional
import os

from mensa_plan.infrastructure.endpoints import EndpointGeneration, generation_by_name
from mensa_plan.infrastructure.logging.mensa_logger import level_number


@dataclass(frozen=True)
class MensaConfig:
    """Configuration for meal plan fetches."""

    # API access
    api_key: Optional[str] = None
    generation_name: str = "current"

    # Transport
    timeout: float = 30.0

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False
    log_dir: Optional[str] = None

    @classmethod
    def from_env(cls) -> 'MensaConfig':
        """
        Create config from environment variables.

        Raises:
            ValueError: If a variable holds an unusable value; the message
                names the variable
        """
        log_level = os.getenv("MENSA_LOG_LEVEL", "INFO")
        try:
            level_number(log_level)
        except ValueError:
            raise ValueError(f"MENSA_LOG_LEVEL is not a log level: {log_level!r}") from None

        return cls(
            api_key=os.getenv("MENSA_API_KEY") or None,
            generation_name=os.getenv("MENSA_GENERATION", "current"),
            timeout=_timeout_from_env("MENSA_TIMEOUT", 30.0),
            log_level=log_level,
            json_logs=os.getenv("MENSA_JSON_LOGS", "false").lower() == "true",
            log_dir=os.getenv("MENSA_LOG_DIR") or None,
        )

    def generation(self) -> EndpointGeneration:
        """Resolve the configured endpoint generation. Raises ValueError."""
        return generation_by_name(self.generation_name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for display; the API key is masked."""
        return {
            "api_key": _mask(self.api_key),
            "generation": self.generation_name,
            "timeout": self.timeout,
            "log_level": self.log_level,
            "json_logs": self.json_logs,
            "log_dir": self.log_dir,
        }


def _mask(secret: Optional[str]) -> Optional[str]:
    if not secret:
        return None
    if len(secret) <= 4:
        return "****"
    return f"{secret[:2]}****{secret[-2:]}"


def _timeout_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from None
    if timeout <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return timeout
