"""Compilation commands for metricgen CLI.

Provides commands for checking a metrics file and generating source code
from it.
"""

import time
from pathlib import Path
from typing import Optional

import click

from metricgen.cli.logging import cli_command, get_cli_logger
from metricgen.cli.output import emit_compiler_error, emit_error, emit_success
from metricgen.cli.registry import get_context
from metricgen.core.compiler import load_catalog
from metricgen.core.errors import MetricgenError
from metricgen.core.generator import TARGETS, get_target, render_catalog
from metricgen.core.schema import MetricsSchema

logger = get_cli_logger()


def _schema_or_exit(ctx: click.Context) -> MetricsSchema:
    try:
        return get_context(ctx).schema
    except FileNotFoundError as exc:
        emit_error(
            str(exc),
            code="NOT_FOUND",
            error_type="not_found",
            remediation="Use 'metricgen version' to list the bundled schema versions",
        )


@click.command("check")
@click.argument("path", type=click.Path(dir_okay=False))
@click.pass_context
@cli_command("check")
def check_cmd(ctx: click.Context, path: str) -> None:
    """Validate a metrics file and print the decoded catalog.

    PATH is the metrics YAML file to check.
    """
    schema = _schema_or_exit(ctx)
    start = time.perf_counter()

    try:
        catalog = load_catalog(path, schema)
    except MetricgenError as exc:
        logger.debug("Check failed: %s", exc.message)
        emit_compiler_error(exc)

    duration_ms = (time.perf_counter() - start) * 1000
    emit_success(
        {
            "path": path,
            "schema": catalog.schema,
            "category_count": len(catalog),
            "metric_count": catalog.metric_count,
            "catalog": catalog.to_document(),
        },
        telemetry={"duration_ms": round(duration_ms, 2)},
    )


@click.command("generate")
@click.argument("path", type=click.Path(dir_okay=False))
@click.option(
    "--target",
    type=click.Choice(sorted(TARGETS)),
    default=None,
    help="Target language (default: from config, else swift)",
)
@click.option(
    "--output",
    "-o",
    "output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the generated source to this file instead of stdout",
)
@click.option(
    "--template-dir",
    type=click.Path(file_okay=False, exists=True),
    default=None,
    help="Directory searched for templates before the bundled ones",
)
@click.pass_context
@cli_command("generate")
def generate_cmd(
    ctx: click.Context,
    path: str,
    target: Optional[str],
    output: Optional[str],
    template_dir: Optional[str],
) -> None:
    """Generate source code from a metrics file.

    PATH is the metrics YAML file to compile. Without --output the
    generated source is printed to stdout as-is.
    """
    config = get_context(ctx).config
    target = target or config.target
    template_dir = template_dir or config.template_dir
    schema = _schema_or_exit(ctx)
    start = time.perf_counter()

    try:
        language = get_target(target)
        catalog = load_catalog(path, schema)
        source = render_catalog(catalog, target, template_dir)
    except MetricgenError as exc:
        logger.debug("Generation failed: %s", exc.message)
        emit_compiler_error(exc)

    if output is None:
        click.echo(source, nl=False)
        return

    output_path = Path(output)
    try:
        output_path.write_text(source, encoding="utf-8")
    except OSError as exc:
        emit_error(
            f"Cannot write {output_path}: {exc}",
            code="INTERNAL_ERROR",
            error_type="internal",
            remediation="Check that the output directory exists and is writable",
        )

    duration_ms = (time.perf_counter() - start) * 1000
    logger.info("Wrote %s (%d bytes)", output_path, len(source.encode("utf-8")))
    emit_success(
        {
            "path": path,
            "output": str(output_path),
            "target": language.name,
            "bytes": len(source.encode("utf-8")),
            "category_count": len(catalog),
            "metric_count": catalog.metric_count,
        },
        telemetry={"duration_ms": round(duration_ms, 2)},
    )
