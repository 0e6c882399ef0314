"""
Metric catalog: the decoded, ordered content of one metrics document.
"""

from collections.abc import Mapping as MappingABC
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Tuple

from metricgen.core.errors import DecodeError
from metricgen.core.metrics import Metric, json_pointer, decode_metric

SCHEMA_KEY = "$schema"


class Catalog(MappingABC):
    """Read-only mapping of category name to (metric name -> Metric).

    Iteration follows document order, for categories and for the metrics
    inside each category.
    """

    def __init__(self, schema: str, categories: Mapping[str, Mapping[str, Metric]]):
        self._schema = schema
        self._categories: Mapping[str, Mapping[str, Metric]] = MappingProxyType(
            {name: MappingProxyType(dict(metrics)) for name, metrics in categories.items()}
        )

    @classmethod
    def from_document(cls, document: Any) -> "Catalog":
        """Decode a (schema-valid) metrics document.

        Raises:
            DecodeError: the document does not fit the metric model
        """
        if not isinstance(document, MappingABC):
            raise DecodeError(
                f"expected a mapping at the document root, got {type(document).__name__}"
            )
        schema = document.get(SCHEMA_KEY)
        if not isinstance(schema, str):
            raise DecodeError(f"missing or invalid '{SCHEMA_KEY}'", path=json_pointer("/", SCHEMA_KEY))

        categories: Dict[str, Dict[str, Metric]] = {}
        for category, metrics in document.items():
            if category == SCHEMA_KEY:
                continue
            category_path = json_pointer("/", category)
            if not isinstance(metrics, MappingABC):
                raise DecodeError(
                    f"category '{category}' must map metric names to definitions",
                    path=category_path,
                )
            categories[category] = {
                name: decode_metric(data, json_pointer(category_path, name))
                for name, data in metrics.items()
            }
        return cls(schema, categories)

    @property
    def schema(self) -> str:
        """The ``$schema`` identifier the document declared."""
        return self._schema

    def __getitem__(self, category: str) -> Mapping[str, Metric]:
        return self._categories[category]

    def __iter__(self) -> Iterator[str]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def metrics(self) -> Iterator[Tuple[str, str, Metric]]:
        """Yield (category, name, metric) for every metric in order."""
        for category, metrics in self._categories.items():
            for name, metric in metrics.items():
                yield category, name, metric

    @property
    def metric_count(self) -> int:
        return sum(len(metrics) for metrics in self._categories.values())

    def to_document(self) -> Dict[str, Any]:
        """Encode back to the document shape (``$schema`` first)."""
        document: Dict[str, Any] = {SCHEMA_KEY: self._schema}
        for category, metrics in self._categories.items():
            document[category] = {name: metric.to_document() for name, metric in metrics.items()}
        return document

    def __repr__(self) -> str:
        return f"Catalog(schema={self._schema!r}, categories={list(self._categories)!r})"
