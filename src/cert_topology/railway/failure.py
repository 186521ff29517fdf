"""
Failure description — structured error information for the failure track.

An ErrorCode names the kind of violation; the context mapping carries the
identifying entities (certificate name, offending tag, key or issuer) so a
caller can report the problem without parsing the message.
"""

from __future__ import annotations

import traceback
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, unique
from types import MappingProxyType
from typing import Optional


@unique
class ErrorCode(Enum):
    """
    Closed set of failure kinds produced while resolving a certificate topology.

    All of them are terminal: the caller aborts the run. Every code except
    UNEXPECTED_ERROR describes a problem with the document or its source.
    """

    # --- Document collaborators ---
    DOCUMENT_READ_ERROR = "DOCUMENT_READ_ERROR"
    """Source bytes could not be read."""

    DOCUMENT_PARSE_ERROR = "DOCUMENT_PARSE_ERROR"
    """Bytes do not parse into the expected document shape."""

    # --- Per-certificate and per-section validation ---
    INVALID_CERTIFICATE_TYPE = "INVALID_CERTIFICATE_TYPE"
    """Unrecognized certificate type tag."""

    UNRECOGNIZED_CONFIG_KEY = "UNRECOGNIZED_CONFIG_KEY"
    """Unknown key under `directories` or `extensions`."""

    # --- Issuer graph ---
    SELF_SIGNED_WITH_ISSUER = "SELF_SIGNED_WITH_ISSUER"
    """A self-signed certificate declares a non-empty issuer."""

    MISSING_ISSUER = "MISSING_ISSUER"
    """Issuer name not found among the document's certificates."""

    ISSUER_NOT_AUTHORITY = "ISSUER_NOT_AUTHORITY"
    """Referenced issuer is not permitted to sign certificates."""

    ISSUER_CYCLE = "ISSUER_CYCLE"
    """Issuer links loop without ever reaching a self-signed root."""

    # --- Internal ---
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"
    """An exception escaped resolution; a fault in this program, not in the document."""


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor carrying error code, message, context and optional exception.

    >>> desc = FailureDescription(ErrorCode.MISSING_ISSUER, "missing", {"certificate": "web"})
    >>> desc.context["certificate"]
    'web'
    """

    code: ErrorCode
    message: str
    context: Mapping[str, str] = field(default_factory=dict)
    exception: Optional[BaseException] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "context", MappingProxyType(dict(self.context)))

    @staticmethod
    def create(
        code: ErrorCode,
        message: str,
        exception: Optional[BaseException] = None,
        **context: str,
    ) -> FailureDescription:
        """Build a descriptor with identifying context passed as keyword arguments."""
        return FailureDescription(code=code, message=message, context=context, exception=exception)

    def full_stack_trace(self) -> str:
        """Message followed by the formatted exception chain, if any."""
        if self.exception is None:
            return self.message
        tb = "".join(traceback.format_exception(type(self.exception), self.exception, self.exception.__traceback__))
        return f"{self.message}\n{tb}"

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
