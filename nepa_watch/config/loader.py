"""Configuration loader for NEPA Watch."""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import AppConfig
from .validators import check_for_warnings, emit_warnings

DEFAULT_LOCATIONS = (
    Path("config.yaml"),
    Path("config") / "config.yaml",
    Path("feeds") / "searches.json",
)


def load_config(config_path: Optional[Path] = None) -> tuple[AppConfig, EnvironmentConfig]:
    """Load configuration from YAML (or JSON) and apply environment overrides.

    A file holding a bare list is read as a list of search definitions, which
    is the shape of the older ``feeds/searches.json`` files.

    Returns:
        Tuple of (AppConfig, EnvironmentConfig)

    Raises:
        ConfigurationError: If the file is missing, unparsable, or invalid
    """
    config_file = _find_config_file(config_path)
    config_dict = _read_config_file(config_file)

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    app_config = _validate(config_dict)
    env_config = load_environment_config()
    apply_environment_overrides(app_config, env_config)
    return app_config, env_config


def apply_environment_overrides(app_config: AppConfig, env_config: EnvironmentConfig) -> None:
    """Apply NEPA_WATCH_* overrides on top of the file settings."""
    if env_config.output_dir:
        app_config.output = app_config.output.model_copy(
            update={"directory": env_config.output_dir}
        )
    if env_config.browser_enabled is not None:
        app_config.browser = app_config.browser.model_copy(
            update={"enabled": env_config.browser_enabled}
        )


def _read_config_file(config_file: Path) -> dict:
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            loaded: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse configuration file {config_file}: {e}",
            suggestions=[
                "Check YAML/JSON syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        )
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file {config_file}: {e}",
            suggestions=[f"Ensure {config_file} exists and is readable"],
        )

    if not loaded:
        raise ConfigurationError(
            "Configuration file is empty",
            suggestions=["Copy config.example.yaml to config.yaml and add queries"],
        )
    if isinstance(loaded, list):
        return {"searches": loaded}
    if not isinstance(loaded, dict):
        raise ConfigurationError(
            f"Configuration must be a mapping or a list of searches, got {type(loaded).__name__}"
        )
    return loaded


def _validate(config_dict: dict) -> AppConfig:
    try:
        return AppConfig.model_validate(config_dict)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"]) or "(root)"
            if error["type"] == "missing":
                errors.append(f"Missing required field: {field_path}")
            else:
                errors.append(f"{field_path}: {error['msg']}")
        raise ConfigurationError(
            "Configuration validation failed",
            errors=errors,
            suggestions=[
                "Review config.example.yaml for the expected format",
                "Define at least one entry under queries or searches",
            ],
        )


def _find_config_file(config_path: Optional[Path] = None) -> Path:
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[f"Ensure {config_path} exists", "Check the path and try again"],
            )
        return config_path

    for candidate in DEFAULT_LOCATIONS:
        if candidate.exists():
            return candidate

    raise ConfigurationError(
        "Configuration file not found",
        errors=[f"Tried: {candidate}" for candidate in DEFAULT_LOCATIONS],
        suggestions=[
            "Copy config.example.yaml to config.yaml",
            "Use --config to specify a custom location",
        ],
    )


def validate_config_file(config_path: Path) -> bool:
    """Validate a configuration file without reading the environment.

    Returns:
        True if valid, False otherwise (errors printed to stdout)
    """
    try:
        app_config = _validate(_read_config_file(config_path))
    except ConfigurationError as e:
        print(f"✗ Configuration validation failed:\n{e}")
        return False

    print(
        f"✓ Configuration file {config_path} is valid "
        f"({len(app_config.queries)} queries, {len(app_config.searches)} searches, "
        f"{len(app_config.states)} states)"
    )
    return True
