"""Run context for log correlation.

Each compilation run gets a short run ID and a start time, held in context
variables so that log records emitted anywhere during the run can be tied
together (see metricgen.core.logging_config.ContextFilter).

Usage:
    from metricgen.core.context import run_context, get_run_id

    with run_context(source="metrics.yaml") as ctx:
        print(ctx.run_id)  # e.g., "run_a1b2c3d4e5f6"
"""

from __future__ import annotations

import secrets
import time
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Generator, Optional

__all__ = [
    "run_id_var",
    "source_var",
    "start_time_var",
    "RunContext",
    "generate_run_id",
    "run_context",
    "get_run_id",
    "get_source",
    "get_start_time",
]

run_id_var: ContextVar[str] = ContextVar("run_id", default="")
"""Identifier of the current compilation run."""

source_var: ContextVar[str] = ContextVar("source", default="")
"""Path (or label) of the document being compiled."""

start_time_var: ContextVar[float] = ContextVar("start_time", default=0.0)
"""Run start time as Unix timestamp."""


def generate_run_id(prefix: str = "run") -> str:
    """Generate a unique run ID.

    Format: {prefix}_{12_hex_chars}

    Args:
        prefix: ID prefix (default: "run")

    Returns:
        Unique run ID string
    """
    return f"{prefix}_{secrets.token_hex(6)}"


@dataclass
class RunContext:
    """Snapshot of the current run context."""

    run_id: str = ""
    source: str = ""
    start_time: float = field(default_factory=time.time)

    @property
    def elapsed_ms(self) -> float:
        if self.start_time <= 0:
            return 0.0
        return (time.time() - self.start_time) * 1000


@contextmanager
def run_context(
    *,
    run_id: Optional[str] = None,
    source: Optional[str] = None,
) -> Generator[RunContext, None, None]:
    """Set up the run context variables for the duration of the block.

    Args:
        run_id: Run ID (auto-generated if None)
        source: Document path or label

    Yields:
        RunContext snapshot
    """
    rid = run_id or generate_run_id()
    src = source or ""
    start = time.time()

    token_run = run_id_var.set(rid)
    token_source = source_var.set(src)
    token_start = start_time_var.set(start)
    try:
        yield RunContext(run_id=rid, source=src, start_time=start)
    finally:
        run_id_var.reset(token_run)
        source_var.reset(token_source)
        start_time_var.reset(token_start)


def get_run_id() -> str:
    """Get the current run ID, or empty string outside a run."""
    return run_id_var.get()


def get_source() -> str:
    """Get the document being compiled in the current run."""
    return source_var.get()


def get_start_time() -> float:
    """Get the current run start time (0.0 outside a run)."""
    return start_time_var.get()
