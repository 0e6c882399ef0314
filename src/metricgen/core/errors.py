"""
Error taxonomy for the metrics compiler.

Every stage of a compilation run raises a subclass of MetricgenError.
Nothing is recovered locally: the first error aborts the run and the CLI
maps it to an error envelope (see metricgen.core.responses).
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence


__all__ = [
    "MetricgenError",
    "NormalizationError",
    "SchemaViolation",
    "SchemaValidationError",
    "DecodeError",
    "SerializationFault",
    "TemplateError",
]


class MetricgenError(Exception):
    """Base exception for compiler failures.

    Attributes:
        message: Human-readable error description
        details: Machine-readable context for error envelopes
    """

    error_code = "INTERNAL_ERROR"
    remediation: Optional[str] = None

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})


class NormalizationError(MetricgenError):
    """The input could not be read, parsed or expanded into plain data."""

    error_code = "NORMALIZATION_ERROR"
    remediation = "Fix the YAML syntax and make sure every alias refers to a defined anchor"

    def __init__(self, message: str, *, source: Optional[str] = None):
        super().__init__(message, details={"source": source} if source else None)
        self.source = source


@dataclass(frozen=True)
class SchemaViolation:
    """A single schema violation found in a metrics document."""

    path: str  # JSON pointer into the document, "/" for the root
    message: str
    validator: str = ""  # JSON Schema keyword that failed (e.g. "enum")

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "message": self.message, "validator": self.validator}

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class SchemaValidationError(MetricgenError):
    """The document does not conform to the metrics schema.

    Carries every violation found, not only the first one.
    """

    error_code = "SCHEMA_VALIDATION_ERROR"
    remediation = "Fix the reported fields so the document matches the metrics schema"

    def __init__(self, violations: Sequence[SchemaViolation]):
        self.violations: List[SchemaViolation] = list(violations)
        count = len(self.violations)
        summary = "; ".join(str(v) for v in self.violations[:3])
        if count > 3:
            summary += f"; ... ({count - 3} more)"
        super().__init__(
            f"Schema validation failed with {count} error(s): {summary}",
            details={"violations": [v.to_dict() for v in self.violations]},
        )


class DecodeError(MetricgenError):
    """A schema-valid document could not populate the typed metric model.

    This points at a mismatch between the bundled schema and the model
    rather than at bad user input.
    """

    error_code = "DECODE_ERROR"
    remediation = "Check that the schema version matches this version of metricgen"

    def __init__(self, message: str, *, path: str = "/"):
        super().__init__(f"{message} (at {path})", details={"path": path})
        self.path = path


class SerializationFault(MetricgenError):
    """The literal serializer was handed a value it cannot express."""

    error_code = "SERIALIZATION_FAULT"

    def __init__(
        self,
        message: str,
        *,
        value: Any = None,
        metric: Optional[str] = None,
        field: Optional[str] = None,
    ):
        self.reason = message
        self.value = value
        self.metric = metric
        self.field = field
        super().__init__(self._compose(), details=self._context())

    def _compose(self) -> str:
        where = []
        if self.metric:
            where.append(f"metric '{self.metric}'")
        if self.field:
            where.append(f"field '{self.field}'")
        if where:
            return f"{self.reason} while rendering {', '.join(where)}"
        return self.reason

    def _context(self) -> Dict[str, Any]:
        context: Dict[str, Any] = {"value": repr(self.value)}
        if self.metric:
            context["metric"] = self.metric
        if self.field:
            context["field"] = self.field
        return context

    def annotate(self, *, metric: Optional[str] = None, field: Optional[str] = None) -> "SerializationFault":
        """Return a copy of this fault with the rendering position attached.

        Positions already recorded are kept.
        """
        return SerializationFault(
            self.reason,
            value=self.value,
            metric=self.metric or metric,
            field=self.field or field,
        )


class TemplateError(MetricgenError):
    """The output template is missing or failed to render."""

    error_code = "TEMPLATE_ERROR"

    def __init__(self, message: str, *, template: Optional[str] = None):
        super().__init__(message, details={"template": template} if template else None)
        self.template = template
