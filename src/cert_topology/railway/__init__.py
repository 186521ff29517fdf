"""
Railway-Oriented Programming support for topology resolution.

Explicit, composable error handling — no exceptions in the resolution logic.

    from cert_topology.railway import Result, ErrorCode

    def check_issuer(name: str, known: set[str]) -> Result[str]:
        if name not in known:
            return Result.failure(ErrorCode.MISSING_ISSUER, f"missing issuer {name}", issuer=name)
        return Result.success(name)
"""

from cert_topology.railway.assertions import ResultAssertions
from cert_topology.railway.execution import LoggingExecutionContext
from cert_topology.railway.failure import ErrorCode, FailureDescription
from cert_topology.railway.result import Failure, Result, Success

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ErrorCode",
    "FailureDescription",
    "LoggingExecutionContext",
    "ResultAssertions",
]
