"""metricgen CLI - compile metrics definitions from the command line.

All commands except ``generate`` (without ``--output``) emit a JSON
envelope, success on stdout and errors on stderr.
"""

from metricgen.cli.config import CLIContext, create_context
from metricgen.cli.logging import cli_command, get_cli_logger
from metricgen.cli.main import cli
from metricgen.cli.output import emit, emit_compiler_error, emit_error, emit_success
from metricgen.cli.registry import get_context, set_context

__all__ = [
    "CLIContext",
    "create_context",
    "cli_command",
    "get_cli_logger",
    "cli",
    "emit",
    "emit_compiler_error",
    "emit_error",
    "emit_success",
    "get_context",
    "set_context",
]
