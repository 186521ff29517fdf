"""
Ports — Protocol-based interfaces for the document collaborators.

The resolution core consumes a RawDocument and never touches bytes or files.
Reading and deserializing are adapters behind these two ports:

  DocumentSource  → bytes of the document at a path
  DocumentParser  → bytes into the typed RawDocument

Each port is a Protocol (structural typing) so adapters satisfy
the contract simply by implementing the method — no inheritance.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from cert_topology.domain.document import RawDocument
from cert_topology.railway.result import Result


@runtime_checkable
class DocumentSource(Protocol):
    """
    Port: read the raw bytes of a topology document.

    Failures are DOCUMENT_READ_ERROR naming the path.
    """

    def read(self, path: Path) -> Result[bytes]: ...


@runtime_checkable
class DocumentParser(Protocol):
    """
    Port: deserialize document bytes into the intermediate typed mapping.

    Failures are DOCUMENT_PARSE_ERROR.
    """

    def parse(self, raw: bytes) -> Result[RawDocument]: ...
