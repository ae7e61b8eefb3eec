"""Configuration file loading.

Handles loading configuration with:
- Global config (~/.platvm/config.yml)
- Environment variable overrides (PLATVM_*)
- Built-in defaults
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from platvm.bootstrap.paths import get_platvm_home, PlatvmPaths
from platvm.config.models import (
    ManagerConfig,
    PlatformConfig,
    PlatvmConfig,
    RegistryConfig,
)
from platvm.core.logging import get_logger

LOGGER = get_logger(__name__)

CONFIG_FILE_NAME = "config.yml"

# Environment variable overrides
PLATFORM_HOME_ENV = "PLATVM_PLATFORM_HOME"
REGISTRY_URL_ENV = "PLATVM_REGISTRY_URL"
REPOSITORY_ENV = "PLATVM_REPOSITORY"
UPDATE_VERSION_ENV = "PLATVM_UPDATE_VERSION"
TOKEN_ENV = "GITHUB_TOKEN"


class ConfigError(Exception):
    """Configuration loading or parsing error."""

    pass


def load_config(
    home: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> PlatvmConfig:
    """Load configuration with proper precedence.

    Precedence (highest to lowest):
    1. Environment variables
    2. Global config (<home>/config.yml)
    3. Built-in defaults

    Args:
        home: platvm home directory (defaults to PLATVM_HOME or ~/.platvm).
        environ: Environment mapping (defaults to os.environ).

    Returns:
        PlatvmConfig instance.

    Raises:
        ConfigError: If the config file has parse errors or invalid values.
    """
    env = os.environ if environ is None else environ
    home = home if home is not None else get_platvm_home()
    config = PlatvmConfig(home=home)

    config_path = home / CONFIG_FILE_NAME
    if config_path.exists():
        try:
            data = load_yaml_file(config_path)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
        _apply_file_config(config, data, source=str(config_path))
        config.sources.append(f"file:{config_path}")
        LOGGER.debug(f"Loaded config from {config_path}")

    _apply_env_overrides(config, env)
    return config


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML config file.

    Raises:
        yaml.YAMLError: If YAML parsing fails.
        ConfigError: If the document is not a mapping.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(data).__name__}")

    return data


def build_paths(config: PlatvmConfig) -> PlatvmPaths:
    """Create the path helper matching a loaded configuration."""
    return PlatvmPaths(home=config.home, platform_home=config.platform.home)


def _section(data: Dict[str, Any], key: str, source: str) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{source}: '{key}' must be a mapping")
    return value


def _string(section: Dict[str, Any], key: str, source: str) -> Optional[str]:
    value = section.get(key)
    if value is None:
        return None
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{source}: '{key}' must be a non-empty string")
    return value


def _apply_file_config(config: PlatvmConfig, data: Dict[str, Any], source: str) -> None:
    registry = _section(data, "registry", source)
    platform = _section(data, "platform", source)
    manager = _section(data, "manager", source)

    unknown = set(data) - {"registry", "platform", "manager"}
    if unknown:
        LOGGER.warning(f"{source}: ignoring unknown keys: {', '.join(sorted(unknown))}")

    api_url = _string(registry, "api_url", source)
    if api_url:
        config.registry.api_url = api_url.rstrip("/")
    repository = _string(registry, "repository", source)
    if repository:
        config.registry.repository = _check_repository(repository, source)

    platform_home = _string(platform, "home", source)
    if platform_home:
        config.platform.home = Path(platform_home).expanduser()
    binaries = platform.get("binaries")
    if binaries is not None:
        if not isinstance(binaries, list) or not all(
            isinstance(b, str) and b for b in binaries
        ):
            raise ConfigError(f"{source}: 'binaries' must be a list of names")
        config.platform.binaries = list(binaries)

    artifact = _string(manager, "artifact", source)
    if artifact:
        config.manager.artifact = artifact


def _apply_env_overrides(config: PlatvmConfig, env: Mapping[str, str]) -> None:
    if env.get(PLATFORM_HOME_ENV):
        config.platform.home = Path(env[PLATFORM_HOME_ENV])
    if env.get(REGISTRY_URL_ENV):
        config.registry.api_url = env[REGISTRY_URL_ENV].rstrip("/")
    if env.get(REPOSITORY_ENV):
        config.registry.repository = _check_repository(env[REPOSITORY_ENV], REPOSITORY_ENV)
    if env.get(UPDATE_VERSION_ENV):
        config.manager.update_version = env[UPDATE_VERSION_ENV]
    if env.get(TOKEN_ENV):
        config.registry.token = env[TOKEN_ENV]


def _check_repository(value: str, source: str) -> str:
    owner, _, name = value.partition("/")
    if not owner or not name or "/" in name:
        raise ConfigError(f"{source}: repository must look like 'owner/name', got '{value}'")
    return value
