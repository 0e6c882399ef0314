"""
Loading and normalization of metrics documents.

YAML anchors, aliases and ``<<`` merge keys are expanded while parsing.
The parsed tree is then rebuilt as plain JSON-compatible data so schema
validation and decoding see exactly what a JSON reader would.
"""

import json
from pathlib import Path
from typing import Any, Union

import yaml

from metricgen.core.errors import NormalizationError
from metricgen.core.logging_config import get_logger

logger = get_logger(__name__)


class MetricsLoader(yaml.SafeLoader):
    """SafeLoader that keeps unquoted dates as strings.

    ``expires: 2030-01-01`` must reach the schema as the string it is in the
    file, not as a ``datetime.date``.
    """


MetricsLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def parse_document(text: str, source: str = "<string>") -> Any:
    """Parse YAML text into plain, fully expanded data.

    Args:
        text: YAML document text
        source: Label used in error messages (usually the file path)

    Raises:
        NormalizationError: malformed YAML, undefined alias, or a value
            with no JSON representation
    """
    try:
        data = yaml.load(text, Loader=MetricsLoader)
    except yaml.YAMLError as exc:
        raise NormalizationError(f"Invalid YAML in {source}: {exc}", source=source) from exc

    # Round-trip through JSON: drops alias sharing and rejects non-JSON values
    try:
        normalized = json.loads(json.dumps(data, allow_nan=False))
    except (TypeError, ValueError) as exc:
        raise NormalizationError(
            f"Document {source} contains a value with no JSON form: {exc}", source=source
        ) from exc

    logger.debug("Parsed document %s", source)
    return normalized


def load_document(path: Union[str, Path]) -> Any:
    """Read and normalize a metrics document from disk.

    Raises:
        NormalizationError: the file cannot be read or parsed
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise NormalizationError(f"Cannot read {path}: {exc}", source=str(path)) from exc
    return parse_document(text, source=str(path))
