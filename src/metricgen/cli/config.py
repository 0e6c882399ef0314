"""CLI execution context.

Resolves the effective configuration for one CLI invocation and compiles
the metrics schema at most once for it.
"""

from typing import Optional

from metricgen.config import CompilerConfig
from metricgen.core.schema import MetricsSchema


class CLIContext:
    """CLI execution context with resolved configuration.

    Holds the effective configuration for a CLI command, including any
    overrides from command-line options.
    """

    def __init__(self, config: CompilerConfig):
        self._config = config
        self._schema: Optional[MetricsSchema] = None

    @property
    def config(self) -> CompilerConfig:
        return self._config

    @property
    def schema(self) -> MetricsSchema:
        """The compiled metrics schema for the configured version.

        Raises:
            FileNotFoundError: the configured version is not bundled
        """
        if self._schema is None:
            self._schema = MetricsSchema.load(self._config.schema_version)
        return self._schema


def create_context(
    config_file: Optional[str] = None,
    log_level: Optional[str] = None,
) -> CLIContext:
    """Create a CLI context with optional overrides.

    Args:
        config_file: Optional TOML config path (--config).
        log_level: Optional log level override (--log-level).
    """
    config = CompilerConfig.from_env(config_file)
    if log_level:
        config.log_level = log_level.upper()
    return CLIContext(config)
