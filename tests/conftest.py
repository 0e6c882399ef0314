"""
Root pytest configuration and shared fixtures.

Provides the bundled schema, fixture documents and a writer for ad-hoc
metrics files.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict

import pytest
import yaml

from metricgen.cli.registry import set_context
from metricgen.core.schema import MetricsSchema

FIXTURES_DIR = Path(__file__).parent / "fixtures"

SCHEMA_URI = "moz://mozilla.org/schemas/glean/metrics/2-0-0"


def common_data(**overrides: Any) -> Dict[str, Any]:
    """Build the common fields of a metric definition."""
    data: Dict[str, Any] = {
        "description": "A test metric.",
        "bugs": ["https://bugzilla.mozilla.org/show_bug.cgi?id=1"],
        "data_reviews": ["https://bugzilla.mozilla.org/show_bug.cgi?id=1#c1"],
        "notification_emails": ["telemetry@example.com"],
        "expires": "never",
    }
    data.update(overrides)
    return data


def metric_data(metric_type: str, **fields: Any) -> Dict[str, Any]:
    """Build a full metric definition mapping of the given type."""
    data = {"type": metric_type}
    data.update(common_data())
    data.update(fields)
    return data


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture(scope="session")
def schema() -> MetricsSchema:
    """The current bundled metrics schema, compiled once per session."""
    return MetricsSchema.load()


@pytest.fixture
def write_metrics(tmp_path) -> Callable[[Dict[str, Any]], Path]:
    """Write a metrics document (categories only) to a YAML file.

    ``$schema`` is added when the document does not set it.
    """

    def _write(categories: Dict[str, Any], name: str = "metrics.yaml") -> Path:
        document = {"$schema": SCHEMA_URI}
        document.update(categories)
        path = tmp_path / name
        path.write_text(yaml.safe_dump(document, sort_keys=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_global_state():
    """Reset the CLI context and logging between tests."""
    yield
    set_context(None)
    logger = logging.getLogger("metricgen")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
