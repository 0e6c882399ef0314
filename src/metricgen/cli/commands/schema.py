"""Schema command for metricgen CLI."""

from typing import Optional

import click

from metricgen.cli.logging import cli_command
from metricgen.cli.output import emit_error, emit_success
from metricgen.cli.registry import get_context
from metricgen.schemas import available_versions, load_schema


@click.command("schema")
@click.option(
    "--version",
    "version",
    default=None,
    help="Schema version to print (default: the configured version)",
)
@click.pass_context
@cli_command("schema")
def schema_cmd(ctx: click.Context, version: Optional[str]) -> None:
    """Print a bundled metrics schema."""
    version = version or get_context(ctx).config.schema_version

    try:
        schema = load_schema(version)
    except FileNotFoundError as exc:
        emit_error(
            str(exc),
            code="NOT_FOUND",
            error_type="not_found",
            remediation="Use 'metricgen version' to list the bundled schema versions",
            details={"version": version, "available": available_versions()},
        )

    emit_success({"version": version, "schema": schema})
