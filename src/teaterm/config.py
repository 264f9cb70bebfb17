"""Runtime settings read from the environment, and logging setup."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

ENV_PREFIX = "TEATERM_"


class MetamorphosisPolicy(Enum):
    """What a FocusManager does when a managed child changes class."""
    STRICT = "strict"    # raise MetamorphosisViolation
    RELAXED = "relaxed"  # drop the update, keep the previous child


def _default_policy() -> MetamorphosisPolicy:
    # Mirrors debug/release builds: `python -O` selects the relaxed profile.
    return MetamorphosisPolicy.STRICT if __debug__ else MetamorphosisPolicy.RELAXED


@dataclass(frozen=True)
class Settings:
    """Process-wide runtime configuration."""
    metamorphosis: MetamorphosisPolicy = field(default_factory=_default_policy)
    poll_interval: float = 0.001
    escape_timeout: float = 0.1
    sequence_timeout: float = 0.05
    log_file: Optional[str] = None
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> Settings:
        """
        Build settings from TEATERM_* environment variables.

        Unparseable values are ignored and the default is kept.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        policy = defaults.metamorphosis
        if raw := env.get(f"{ENV_PREFIX}PROFILE"):
            try:
                policy = MetamorphosisPolicy(raw.strip().lower())
            except ValueError:
                logger.warning("Ignoring unknown %sPROFILE=%r", ENV_PREFIX, raw)

        level = env.get(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            level = defaults.log_level

        return cls(
            metamorphosis=policy,
            poll_interval=_env_float(env, "POLL_INTERVAL", defaults.poll_interval),
            escape_timeout=_env_float(env, "ESCAPE_TIMEOUT", defaults.escape_timeout),
            sequence_timeout=_env_float(env, "SEQUENCE_TIMEOUT", defaults.sequence_timeout),
            log_file=env.get(f"{ENV_PREFIX}LOG_FILE") or None,
            log_level=level,
        )


def _env_float(env: dict[str, str], name: str, default: float) -> float:
    raw = env.get(ENV_PREFIX + name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the cached process settings, reading the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def set_settings(settings: Optional[Settings]) -> None:
    """Replace the process settings. None makes the next get re-read the environment."""
    global _settings
    _settings = settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Route package logs to a file if one is configured.

    The terminal belongs to the renderer while a session runs, so logs are
    never written to stdout or stderr.
    """
    settings = settings or get_settings()
    if not settings.log_file:
        return

    package_logger = logging.getLogger("teaterm")
    package_logger.setLevel(settings.log_level)
    path = os.path.abspath(settings.log_file)
    for existing in package_logger.handlers:
        if isinstance(existing, logging.FileHandler) and existing.baseFilename == path:
            return

    handler = logging.FileHandler(settings.log_file, encoding="utf-8")
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    package_logger.addHandler(handler)
