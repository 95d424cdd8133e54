"""Environment variable overrides.

Variables are read after ``python-dotenv`` has loaded ``.env`` (see
``nepa_watch.main``):

- NEPA_WATCH_OUTPUT_DIR: output directory, overrides ``output.directory``
- NEPA_WATCH_BROWSER: ``true``/``false``, overrides ``browser.enabled``
- LOG_LEVEL: log level, overrides ``logging.level``
- ENVIRONMENT: label attached to every log record (default ``local``)
"""

import os
from typing import Optional

from .exceptions import ConfigurationError

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        output_dir: Optional[str] = None,
        browser_enabled: Optional[bool] = None,
        log_level: Optional[str] = None,
        environment: str = "local",
    ):
        self.output_dir = output_dir
        self.browser_enabled = browser_enabled
        self.log_level = log_level
        self.environment = environment


def load_environment_config() -> EnvironmentConfig:
    """Read and validate override variables.

    Raises:
        ConfigurationError: If a variable holds an unusable value
    """
    errors = []

    log_level = os.getenv("LOG_LEVEL")
    if log_level:
        log_level = log_level.strip().upper()
        if log_level not in _VALID_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(_VALID_LEVELS)}"
            )

    browser_enabled = None
    browser_raw = os.getenv("NEPA_WATCH_BROWSER")
    if browser_raw:
        flag = browser_raw.strip().lower()
        if flag in _TRUE:
            browser_enabled = True
        elif flag in _FALSE:
            browser_enabled = False
        else:
            errors.append(f"Invalid NEPA_WATCH_BROWSER: '{browser_raw}'. Use true or false.")

    output_dir = (os.getenv("NEPA_WATCH_OUTPUT_DIR") or "").strip() or None

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=["Copy .env.example to .env and adjust the values"],
        )

    return EnvironmentConfig(
        output_dir=output_dir,
        browser_enabled=browser_enabled,
        log_level=log_level,
        environment=(os.getenv("ENVIRONMENT") or "local").strip() or "local",
    )
