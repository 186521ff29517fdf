"""
Test assertions for Result values.

Expressive assert helpers that produce clear failure messages:

    def test_missing_issuer():
        result = validate_document(doc)
        error = ResultAssertions.assert_failure(result, ErrorCode.MISSING_ISSUER)
        ResultAssertions.assert_failure_context(result, certificate="web", issuer="ghost")
"""

from __future__ import annotations

from typing import Any, TypeVar

from cert_topology.railway.failure import ErrorCode, FailureDescription
from cert_topology.railway.result import Result

T = TypeVar("T")


class ResultAssertions:
    """Expressive test assertions for Result values."""

    @staticmethod
    def assert_success(result: Result[T], message: str = "") -> T:
        """Assert the Result is a Success and return the value."""
        context = f" — {message}" if message else ""
        assert result.is_success(), (
            f"Expected Success but got Failure("
            f"{result.error().code.value}: {result.error().message!r}){context}"
        )
        return result.value()

    @staticmethod
    def assert_failure(
        result: Result[T],
        expected_code: ErrorCode | None = None,
        message: str = "",
    ) -> FailureDescription:
        """Assert the Result is a Failure, optionally checking the error code."""
        context = f" — {message}" if message else ""
        assert result.is_failure(), (
            f"Expected Failure but got Success({result.value()!r}){context}"
        )
        error = result.error()
        if expected_code is not None:
            assert error.code == expected_code, (
                f"Expected error code {expected_code.value} "
                f"but got {error.code.value}: {error.message!r}{context}"
            )
        return error

    @staticmethod
    def assert_failure_message_contains(result: Result[T], substring: str) -> None:
        """Assert that the failure message contains the given substring (case-insensitive)."""
        assert result.is_failure(), (
            f"Expected Failure but got Success({result.value()!r})"
        )
        error = result.error()
        assert substring.lower() in error.message.lower(), (
            f"Expected failure message to contain {substring!r} "
            f"but message was: {error.message!r}"
        )

    @staticmethod
    def assert_failure_context(result: Result[T], **expected: Any) -> None:
        """Assert that each given key is present in the failure context with the given value."""
        assert result.is_failure(), (
            f"Expected Failure but got Success({result.value()!r})"
        )
        actual = dict(result.error().context)
        for key, value in expected.items():
            assert actual.get(key) == value, (
                f"Expected context {key}={value!r} but context was: {actual!r}"
            )
