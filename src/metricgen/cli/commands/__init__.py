"""CLI commands for metricgen."""

from metricgen.cli.commands.compile import check_cmd, generate_cmd
from metricgen.cli.commands.schema import schema_cmd

__all__ = [
    "check_cmd",
    "generate_cmd",
    "schema_cmd",
]
