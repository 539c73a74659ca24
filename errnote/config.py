import logging
import os
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be one of {sorted(_TRUE_VALUES | _FALSE_VALUES)}, got {raw!r}")


class Settings:
    """
    Central configuration for the annotator.

    Reads environment variables at runtime when properties are accessed.
    """

    def __init__(self) -> None:
        self._qualified_names: Optional[bool] = None
        env_file = os.getenv("ERRNOTE_ENV_FILE")
        if env_file:
            loaded = load_dotenv(dotenv_path=env_file, override=False)
            logger.debug("ERRNOTE_ENV_FILE=%s loaded=%s", env_file, loaded)

    @property
    def qualified_names(self) -> bool:
        """Whether caller identities include the module path."""
        if self._qualified_names is None:
            raw = os.getenv("ERRNOTE_QUALIFIED_NAMES")
            self._qualified_names = True if raw is None else _parse_bool("ERRNOTE_QUALIFIED_NAMES", raw)
        return self._qualified_names


_settings_instance: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide Settings, created on first use."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Drop the cached Settings so the environment is read again."""
    global _settings_instance
    _settings_instance = None
