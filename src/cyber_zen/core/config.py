"""Application configuration loading."""

import platform
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from loguru import logger
from pydantic import ValidationError

from cyber_zen.core.errors import ConfigError
from cyber_zen.models.config import AppConfig

APP_NAME = "cyber-zen"
CONFIG_FILE_NAME = "config.yaml"


def default_install_dir() -> Path:
    """Get the default per-user install directory."""
    return Path.home() / f".{APP_NAME}"


def default_search_dirs() -> List[Path]:
    """Directories searched for config.yaml, in priority order."""
    return [default_install_dir(), Path.cwd()]


def _defaults() -> Dict[str, Any]:
    return {
        "install_dir": default_install_dir(),
        "platform": platform.system().lower(),
        "architecture": platform.machine().lower(),
    }


def default_config() -> AppConfig:
    """Configuration used when no config.yaml is readable."""
    return AppConfig(**_defaults())


def find_config_file(search_dirs: List[Path]) -> Optional[Path]:
    """Return the first config.yaml found in search_dirs."""
    for directory in search_dirs:
        candidate = Path(directory) / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def load_config(search_dirs: Optional[List[Path]] = None) -> AppConfig:
    """Load configuration, falling back to defaults when no file exists.

    Only keys present in the file override the defaults; unknown keys are
    ignored. A file that exists but cannot be parsed is an error.
    """
    values = _defaults()
    config_file = find_config_file(
        search_dirs if search_dirs is not None else default_search_dirs()
    )

    if config_file is None:
        logger.debug("No config file found, using defaults")
    else:
        logger.debug(f"Loading config from {config_file}")
        try:
            data = yaml.safe_load(config_file.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read {config_file}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{config_file} must contain a mapping")

        for key in ("install_dir", "platform", "architecture"):
            if data.get(key) not in (None, ""):
                values[key] = data[key]

    try:
        config = AppConfig(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    return config.model_copy(update={"install_dir": config.install_dir.expanduser()})


def ensure_install_dir(config: AppConfig) -> Path:
    """Create the install directory if needed and return it."""
    if config.install_dir == Path(""):
        raise ConfigError("Install directory is not configured")
    try:
        config.install_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"Cannot create install directory {config.install_dir}: {e}") from e
    return config.install_dir
