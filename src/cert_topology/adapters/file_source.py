"""
File adapter — reads topology documents from the local filesystem.

Implements the DocumentSource port. The read happens exactly once per
resolution; OS errors (missing file, permissions, a directory instead of a
file) are captured at this boundary as DOCUMENT_READ_ERROR.
"""

from __future__ import annotations

import os
from pathlib import Path

import structlog

from cert_topology.railway import ErrorCode
from cert_topology.railway.result import Result

log = structlog.get_logger()


class FileDocumentSource:
    """Read a document's bytes from disk after normalizing the path."""

    def read(self, path: Path) -> Result[bytes]:
        clean = Path(os.path.normpath(path))
        return (
            Result.from_computation(
                clean.read_bytes,
                ErrorCode.DOCUMENT_READ_ERROR,
                f"error reading config file '{clean}'",
                path=str(clean),
            )
            .peek(lambda data: log.debug("document.read", path=str(clean), size_bytes=len(data)))
            .peek_failure(lambda err: log.warning("document.read_failed", path=str(clean), error=err.message))
        )
