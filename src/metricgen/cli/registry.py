"""Command registry for the metricgen CLI.

Centralized registration of all commands.
"""

from typing import Optional

import click

from metricgen.cli.config import CLIContext

# Module-level storage for CLI context (for testing)
_cli_context: Optional[CLIContext] = None


def set_context(ctx: Optional[CLIContext]) -> None:
    """Set the CLI context at module level.

    Primarily used for testing when not using Click's context.
    """
    global _cli_context
    _cli_context = ctx


def get_context(ctx: Optional[click.Context] = None) -> CLIContext:
    """Get CLI context from Click context or module-level storage.

    Raises:
        RuntimeError: If no context is available.
    """
    if ctx is not None:
        return ctx.obj["cli_context"]

    if _cli_context is not None:
        return _cli_context

    raise RuntimeError("No CLI context available. Call set_context() first.")


def register_all_commands(cli: click.Group) -> None:
    """Register all commands with the CLI.

    Commands are lazily imported to avoid circular dependencies.
    """
    from metricgen.cli.commands import check_cmd, generate_cmd, schema_cmd

    cli.add_command(check_cmd)
    cli.add_command(generate_cmd)
    cli.add_command(schema_cmd)

    @cli.command("version")
    @click.pass_context
    def version(ctx: click.Context) -> None:
        """Show version information."""
        from metricgen import __version__
        from metricgen.cli.output import emit_success
        from metricgen.core.generator import TARGETS
        from metricgen.schemas import available_versions

        cli_ctx = get_context(ctx)
        emit_success(
            {
                "name": "metricgen",
                "version": __version__,
                "schema_version": cli_ctx.config.schema_version,
                "schema_versions": available_versions(),
                "targets": sorted(TARGETS),
            }
        )
