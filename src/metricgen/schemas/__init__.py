"""Bundled JSON schemas for metrics documents (stored as YAML)."""

from pathlib import Path
from typing import Any, Dict, List

import yaml

CURRENT_VERSION = "2-0-0"

_SCHEMA_DIR = Path(__file__).parent


def schema_filename(version: str) -> str:
    return f"metrics.{version}.schema.yaml"


def available_versions() -> List[str]:
    """List the schema versions shipped with the package, sorted."""
    prefix, suffix = "metrics.", ".schema.yaml"
    return sorted(
        path.name[len(prefix) : -len(suffix)]
        for path in _SCHEMA_DIR.glob(f"{prefix}*{suffix}")
    )


def load_schema(version: str = CURRENT_VERSION) -> Dict[str, Any]:
    """Load a bundled metrics schema by version.

    Raises:
        FileNotFoundError: no schema is bundled for that version
        ValueError: the schema file is not a mapping
    """
    schema_path = _SCHEMA_DIR / schema_filename(version)
    if not schema_path.exists():
        raise FileNotFoundError(
            f"No bundled metrics schema for version {version!r} "
            f"(available: {', '.join(available_versions()) or 'none'})"
        )
    with open(schema_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Schema {schema_path.name} is not a mapping")
    return data
