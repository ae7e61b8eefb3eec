"""Configuration package for platvm."""

from platvm.config.loader import ConfigError, build_paths, load_config
from platvm.config.models import PlatvmConfig

__all__ = ["ConfigError", "PlatvmConfig", "build_paths", "load_config"]
