"""
Compiler configuration for metricgen.

Supports configuration via:
1. Environment variables (highest priority)
2. TOML config file (metricgen.toml, table [metricgen])
3. Default values (lowest priority)

Environment variables:
- METRICGEN_CONFIG_FILE: Path to TOML config file
- METRICGEN_TARGET: Target language (default: swift)
- METRICGEN_SCHEMA_VERSION: Metrics schema version (default: 2-0-0)
- METRICGEN_TEMPLATE_DIR: Directory searched for templates before the bundled ones
- METRICGEN_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
- METRICGEN_LOG_FORMAT: "human" or "structured"
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # Python < 3.11 fallback

from metricgen.core.logging_config import configure_logging
from metricgen.schemas import CURRENT_VERSION


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILES = ("metricgen.toml", ".metricgen.toml")
_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_VALID_LOG_FORMATS = {"human", "structured"}


@dataclass
class CompilerConfig:
    """Compiler configuration with support for env vars and TOML overrides."""

    target: str = "swift"
    schema_version: str = CURRENT_VERSION
    template_dir: Optional[Path] = None

    # Logging configuration
    log_level: str = "WARNING"
    log_format: str = "human"

    @classmethod
    def from_env(cls, config_file: Optional[str] = None) -> "CompilerConfig":
        """
        Create configuration from environment variables and optional TOML file.

        Priority (highest to lowest):
        1. Environment variables
        2. TOML config file
        3. Default values
        """
        config = cls()

        toml_path = config_file or os.environ.get("METRICGEN_CONFIG_FILE")
        if toml_path:
            config._load_toml(Path(toml_path))
        else:
            for default_path in DEFAULT_CONFIG_FILES:
                if Path(default_path).exists():
                    config._load_toml(Path(default_path))
                    break

        config._load_env()
        return config

    def _load_toml(self, path: Path) -> None:
        """Load configuration from the [metricgen] table of a TOML file."""
        if not path.exists():
            logger.warning(f"Config file not found: {path}")
            return

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error(f"Error loading config file {path}: {e}")
            return

        self._apply(data.get("metricgen", {}), base_dir=path.parent)
        logger.debug(f"Loaded config from {path}")

    def _load_env(self) -> None:
        """Apply METRICGEN_* environment variable overrides."""
        values: Dict[str, Any] = {}
        for key in ("target", "schema_version", "template_dir", "log_level", "log_format"):
            env_value = os.environ.get(f"METRICGEN_{key.upper()}")
            if env_value:
                values[key] = env_value
        self._apply(values)

    def _apply(self, values: Dict[str, Any], base_dir: Optional[Path] = None) -> None:
        if "target" in values:
            self.target = str(values["target"]).strip().lower()
        if "schema_version" in values:
            self.schema_version = str(values["schema_version"]).strip()
        if "template_dir" in values:
            template_dir = Path(str(values["template_dir"])).expanduser()
            # Relative paths in a config file are relative to that file
            if base_dir is not None and not template_dir.is_absolute():
                template_dir = base_dir / template_dir
            self.template_dir = template_dir
        if "log_level" in values:
            self.log_level = _normalize_log_level(str(values["log_level"]))
        if "log_format" in values:
            self.log_format = _normalize_log_format(str(values["log_format"]))

    def setup_logging(self) -> None:
        """Configure logging based on settings."""
        configure_logging(level=self.log_level, format=self.log_format)


def _normalize_log_level(value: str) -> str:
    normalized = value.strip().upper()
    if normalized not in _VALID_LOG_LEVELS:
        logger.warning(
            "Invalid log level '%s'. Falling back to 'WARNING'. Valid options: %s",
            value,
            ", ".join(sorted(_VALID_LOG_LEVELS)),
        )
        return "WARNING"
    return normalized


def _normalize_log_format(value: str) -> str:
    normalized = value.strip().lower()
    if normalized not in _VALID_LOG_FORMATS:
        logger.warning(
            "Invalid log format '%s'. Falling back to 'human'. Valid options: %s",
            value,
            ", ".join(sorted(_VALID_LOG_FORMATS)),
        )
        return "human"
    return normalized

