"""
The compilation pipeline: read, normalize, validate, decode, generate.
"""

from pathlib import Path
from typing import Any, Optional, Union

from metricgen.core.catalog import Catalog
from metricgen.core.document import load_document
from metricgen.core.generator import DEFAULT_TARGET, render_catalog
from metricgen.core.logging_config import get_logger
from metricgen.core.schema import MetricsSchema

logger = get_logger(__name__)


def validate_document(document: Any, schema: MetricsSchema) -> None:
    """Check a normalized document against the schema.

    Raises:
        SchemaValidationError: with every violation found
    """
    schema.check(document)


def load_catalog(
    path: Union[str, Path],
    schema: Optional[MetricsSchema] = None,
) -> Catalog:
    """Read a metrics file and decode it into a catalog.

    Args:
        path: Path to the metrics YAML file
        schema: Compiled schema (default: the current bundled version)

    Raises:
        NormalizationError: the file cannot be read or parsed
        SchemaValidationError: the document violates the schema
        DecodeError: the document passed the schema but does not fit the model
    """
    schema = schema or MetricsSchema.load()

    document = load_document(path)
    validate_document(document, schema)
    catalog = Catalog.from_document(document)

    logger.info(
        "Catalog loaded from %s: %d categories, %d metrics",
        path,
        len(catalog),
        catalog.metric_count,
    )
    return catalog


def compile_metrics(
    path: Union[str, Path],
    target: str = DEFAULT_TARGET,
    schema: Optional[MetricsSchema] = None,
    template_dir: Optional[Union[str, Path]] = None,
) -> str:
    """Compile a metrics file into source code for a target language."""
    catalog = load_catalog(path, schema)
    return render_catalog(catalog, target, template_dir)
