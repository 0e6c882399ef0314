"""JSON output helpers for the metricgen CLI.

Success envelopes go to stdout, error envelopes to stderr. Generated
source code is the one thing printed raw (see commands.compile).
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Mapping, NoReturn, Optional, Sequence

from metricgen.core.errors import MetricgenError
from metricgen.core.responses import error_response, response_for_error, success_response


def emit(data: Any) -> None:
    """Emit minified JSON to stdout."""
    print(json.dumps(data, separators=(",", ":"), default=str))


def emit_error(
    message: str,
    code: str = "INTERNAL_ERROR",
    *,
    error_type: str = "internal",
    remediation: Optional[str] = None,
    details: Optional[Mapping[str, Any]] = None,
) -> NoReturn:
    """Emit an error envelope to stderr and exit with code 1.

    Raises:
        SystemExit: Always exits with code 1.
    """
    response = error_response(
        message,
        error_code=code,
        error_type=error_type,
        remediation=remediation,
        details=details,
    )
    print(json.dumps(asdict(response), separators=(",", ":"), default=str), file=sys.stderr)
    sys.exit(1)


def emit_compiler_error(exc: MetricgenError) -> NoReturn:
    """Emit the error envelope for a compiler error and exit with code 1."""
    response = response_for_error(exc)
    print(json.dumps(asdict(response), separators=(",", ":"), default=str), file=sys.stderr)
    sys.exit(1)


def emit_success(
    data: Any,
    *,
    warnings: Optional[Sequence[str]] = None,
    telemetry: Optional[Mapping[str, Any]] = None,
) -> None:
    """Emit a success envelope to stdout.

    Non-dict payloads are wrapped under a ``result`` key.
    """
    payload = data if isinstance(data, dict) else {"result": data}
    response = success_response(payload, warnings=warnings, telemetry=telemetry)
    emit(asdict(response))
