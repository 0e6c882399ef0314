"""Core metric model, serializer and compilation pipeline for metricgen."""

from metricgen.core.catalog import Catalog
from metricgen.core.compiler import compile_metrics, load_catalog, validate_document
from metricgen.core.derivation import common_fields, extra_fields, type_name
from metricgen.core.document import load_document, parse_document
from metricgen.core.errors import (
    DecodeError,
    MetricgenError,
    NormalizationError,
    SchemaValidationError,
    SchemaViolation,
    SerializationFault,
    TemplateError,
)
from metricgen.core.generator import TARGETS, render_catalog
from metricgen.core.literals import SWIFT, serialize
from metricgen.core.metrics import METRIC_KINDS, Metric, decode_metric
from metricgen.core.schema import MetricsSchema

__all__ = [
    "Catalog",
    "compile_metrics",
    "load_catalog",
    "validate_document",
    "common_fields",
    "extra_fields",
    "type_name",
    "load_document",
    "parse_document",
    "DecodeError",
    "MetricgenError",
    "NormalizationError",
    "SchemaValidationError",
    "SchemaViolation",
    "SerializationFault",
    "TemplateError",
    "TARGETS",
    "render_catalog",
    "SWIFT",
    "serialize",
    "METRIC_KINDS",
    "Metric",
    "decode_metric",
    "MetricsSchema",
]
