"""Logging hooks for CLI commands.

Each command runs inside a run context (see metricgen.core.context), so every
log line it produces carries the same run ID. Start and completion of the
command are logged at debug level with the duration.
"""

from functools import wraps
from typing import Any, Callable, Optional, TypeVar

from metricgen.core.context import run_context
from metricgen.core.logging_config import get_logger

__all__ = ["cli_command", "get_cli_logger"]

T = TypeVar("T")

_cli_logger = get_logger("metricgen.cli")


def get_cli_logger():
    """Get the CLI logger."""
    return _cli_logger


def cli_command(command_name: Optional[str] = None) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator for CLI commands with run context and timing.

    The ``path`` argument of the command, when present, is recorded as the
    run's source document.

    Example:
        >>> @cli_command("check")
        ... def check_cmd(ctx, path):
        ...     ...
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        name = command_name or func.__name__

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            source = kwargs.get("path")
            with run_context(source=str(source) if source else None) as ctx:
                success = True
                _cli_logger.debug("CLI command started: %s", name)
                try:
                    return func(*args, **kwargs)
                except SystemExit as exc:
                    success = exc.code in (None, 0)
                    raise
                except Exception:
                    success = False
                    raise
                finally:
                    _cli_logger.debug(
                        "CLI command completed: %s (success=%s, duration_ms=%.2f)",
                        name,
                        success,
                        ctx.elapsed_ms,
                    )

        return wrapper

    return decorator
