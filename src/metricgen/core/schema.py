"""
Schema validation of metrics documents.

A MetricsSchema is compiled once (``MetricsSchema.load()``) and handed to
whatever needs to validate; there is no module-level validator.
"""

from typing import Any, Dict, List, Optional

import jsonschema

from metricgen.core.errors import SchemaValidationError, SchemaViolation
from metricgen.core.logging_config import get_logger
from metricgen.schemas import CURRENT_VERSION, load_schema

logger = get_logger(__name__)


def _pointer(parts: Any) -> str:
    tokens = [str(part).replace("~", "~0").replace("/", "~1") for part in parts]
    return "/" + "/".join(tokens)


class MetricsSchema:
    """A compiled, read-only metrics schema."""

    def __init__(self, schema: Dict[str, Any], version: Optional[str] = None):
        jsonschema.Draft7Validator.check_schema(schema)
        self._schema = schema
        self._validator = jsonschema.Draft7Validator(schema)
        self.version = version or CURRENT_VERSION

    @classmethod
    def load(cls, version: str = CURRENT_VERSION) -> "MetricsSchema":
        """Compile a bundled schema version.

        Raises:
            FileNotFoundError: no schema is bundled for that version
        """
        schema = cls(load_schema(version), version)
        logger.debug("Compiled metrics schema %s", version)
        return schema

    @property
    def schema(self) -> Dict[str, Any]:
        return self._schema

    @property
    def identifier(self) -> str:
        return self._schema.get("$id", "")

    def validate(self, document: Any) -> List[SchemaViolation]:
        """Collect every schema violation in a document, sorted by path."""
        errors = sorted(
            self._validator.iter_errors(document),
            key=lambda err: [
                (1, part) if isinstance(part, int) else (0, str(part)) for part in err.absolute_path
            ],
        )
        return [
            SchemaViolation(
                path=_pointer(error.absolute_path),
                message=error.message,
                validator=str(error.validator),
            )
            for error in errors
        ]

    def check(self, document: Any) -> None:
        """Validate a document, raising on any violation.

        Raises:
            SchemaValidationError: carries all violations found
        """
        violations = self.validate(document)
        if violations:
            for violation in violations:
                logger.debug("Validation error at %s: %s", violation.path, violation.message)
            raise SchemaValidationError(violations)
