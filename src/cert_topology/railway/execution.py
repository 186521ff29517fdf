"""
Execution context — separate WHAT (pure resolution) from HOW (logging, timing).

The resolution functions describe what happens and return Result[T]; the
execution context decides how it runs. The entry point wraps the whole
read → parse → validate chain in a LoggingExecutionContext so timing and
outcome are logged in one place, never inside the pure stages.

    ctx = LoggingExecutionContext(operation="ResolveTopology")
    result = ctx.execute(lambda: load_topology(path, source, parser))
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TypeVar

import structlog

from cert_topology.railway.failure import ErrorCode, FailureDescription
from cert_topology.railway.result import Failure, Result

T = TypeVar("T")


class LoggingExecutionContext:
    """
    Execution context that logs entry, exit, duration, and result state.

    An exception escaping the computation is logged and turned into a
    failure carrying it, coded UNEXPECTED_ERROR unless the caller says otherwise.
    """

    def __init__(
        self,
        operation: str = "unknown",
        log_level: int = logging.INFO,
        error_code: ErrorCode = ErrorCode.UNEXPECTED_ERROR,
    ) -> None:
        self._operation = operation
        self._log_level = log_level
        self._error_code = error_code
        self._log = structlog.get_logger("cert_topology.execution")

    def execute(self, computation: Callable[[], Result[T]]) -> Result[T]:
        self._log.log(self._log_level, "execution.started", operation=self._operation)
        start = time.monotonic()

        try:
            result = computation()
        except Exception as e:
            elapsed = time.monotonic() - start
            self._log.error(
                "execution.crashed",
                operation=self._operation,
                elapsed_seconds=round(elapsed, 3),
                error=str(e),
            )
            return Failure(
                FailureDescription(
                    self._error_code,
                    f"Execution failed: {e}",
                    {"operation": self._operation},
                    e,
                )
            )

        elapsed = time.monotonic() - start
        self._log.log(
            self._log_level,
            "execution.completed",
            operation=self._operation,
            elapsed_seconds=round(elapsed, 3),
            state="SUCCESS" if result.is_success() else "FAILURE",
        )
        return result
