"""
Standard response envelopes for CLI output.

Every command prints one envelope:

    {
        "success": bool,       # operation success/failure
        "data": {...},         # payload (error_code/error_type/... on error)
        "error": str | null,   # error message or null on success
        "meta": {
            "version": "response-v2",
            "request_id": "run_abc123"?,
            "warnings": ["..."]?,
            "telemetry": { ... }?
        }
    }
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from metricgen.core.context import get_run_id
from metricgen.core.errors import MetricgenError


class ErrorCode(str, Enum):
    """Machine-readable error codes. One per compiler error class, plus I/O and internal."""

    NORMALIZATION_ERROR = "NORMALIZATION_ERROR"
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    DECODE_ERROR = "DECODE_ERROR"
    SERIALIZATION_FAULT = "SERIALIZATION_FAULT"
    TEMPLATE_ERROR = "TEMPLATE_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorType(str, Enum):
    """Error categories for routing."""

    VALIDATION = "validation"  # bad input document
    NOT_FOUND = "not_found"
    INTERNAL = "internal"  # schema/model skew, generation bugs


# Which category each compiler error code falls in
_ERROR_TYPES: Dict[str, ErrorType] = {
    ErrorCode.NORMALIZATION_ERROR.value: ErrorType.VALIDATION,
    ErrorCode.SCHEMA_VALIDATION_ERROR.value: ErrorType.VALIDATION,
    ErrorCode.DECODE_ERROR.value: ErrorType.INTERNAL,
    ErrorCode.SERIALIZATION_FAULT.value: ErrorType.INTERNAL,
    ErrorCode.TEMPLATE_ERROR.value: ErrorType.INTERNAL,
    ErrorCode.NOT_FOUND.value: ErrorType.NOT_FOUND,
}


@dataclass
class ToolResponse:
    """Standard response structure for CLI commands."""

    success: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=lambda: {"version": "response-v2"})


def _build_meta(
    *,
    request_id: Optional[str] = None,
    warnings: Optional[Sequence[str]] = None,
    telemetry: Optional[Mapping[str, Any]] = None,
    extra: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    meta: Dict[str, Any] = {"version": "response-v2"}

    effective_request_id = request_id or get_run_id() or None
    if effective_request_id:
        meta["request_id"] = effective_request_id
    if warnings:
        meta["warnings"] = list(warnings)
    if telemetry:
        meta["telemetry"] = dict(telemetry)
    if extra:
        meta.update(dict(extra))
    return meta


def success_response(
    data: Optional[Mapping[str, Any]] = None,
    *,
    warnings: Optional[Sequence[str]] = None,
    telemetry: Optional[Mapping[str, Any]] = None,
    request_id: Optional[str] = None,
    meta: Optional[Mapping[str, Any]] = None,
) -> ToolResponse:
    """Create a standardized success response."""
    return ToolResponse(
        success=True,
        data=dict(data or {}),
        error=None,
        meta=_build_meta(request_id=request_id, warnings=warnings, telemetry=telemetry, extra=meta),
    )


def error_response(
    message: str,
    *,
    error_code: Optional[Union[ErrorCode, str]] = None,
    error_type: Optional[Union[ErrorType, str]] = None,
    remediation: Optional[str] = None,
    details: Optional[Mapping[str, Any]] = None,
    request_id: Optional[str] = None,
    telemetry: Optional[Mapping[str, Any]] = None,
) -> ToolResponse:
    """Create a standardized error response.

    Example:
        >>> error_response(
        ...     "Schema validation failed with 1 error(s)",
        ...     error_code=ErrorCode.SCHEMA_VALIDATION_ERROR,
        ...     error_type=ErrorType.VALIDATION,
        ... )
    """
    code = error_code if error_code is not None else ErrorCode.INTERNAL_ERROR
    kind = error_type if error_type is not None else ErrorType.INTERNAL

    payload: Dict[str, Any] = {
        "error_code": code.value if isinstance(code, Enum) else code,
        "error_type": kind.value if isinstance(kind, Enum) else kind,
    }
    if remediation is not None:
        payload["remediation"] = remediation
    if details:
        payload["details"] = dict(details)

    return ToolResponse(
        success=False,
        data=payload,
        error=message,
        meta=_build_meta(request_id=request_id, telemetry=telemetry),
    )


def response_for_error(exc: MetricgenError, *, request_id: Optional[str] = None) -> ToolResponse:
    """Map a compiler error to its error envelope."""
    return error_response(
        exc.message,
        error_code=exc.error_code,
        error_type=_ERROR_TYPES.get(exc.error_code, ErrorType.INTERNAL),
        remediation=exc.remediation,
        details=exc.details,
        request_id=request_id,
    )
