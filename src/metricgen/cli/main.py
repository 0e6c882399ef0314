"""metricgen CLI entry point.

Commands print one JSON envelope (or, for ``generate`` without ``--output``,
the generated source).
"""

from typing import Optional

import click

from metricgen.cli.config import create_context
from metricgen.cli.registry import register_all_commands


@click.group()
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    help="Path to a TOML config file with a [metricgen] table",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Override the configured log level",
)
@click.pass_context
def cli(ctx: click.Context, config_file: Optional[str], log_level: Optional[str]) -> None:
    """metricgen - compile metrics definitions into source code."""
    ctx.ensure_object(dict)
    cli_context = create_context(config_file=config_file, log_level=log_level)
    cli_context.config.setup_logging()
    ctx.obj["cli_context"] = cli_context


# Register all commands
register_all_commands(cli)


if __name__ == "__main__":
    cli()
