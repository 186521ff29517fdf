"""
Shared test fixtures and helpers for the cert-topology test suite.

Provides path resolution for the YAML topology documents under
tests/fixtures and small builders for raw documents.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog

from cert_topology.domain.document import RawDocument

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo any structlog configuration a test (or main()) applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture()
def fixtures_dir() -> Path:
    """Return the absolute path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture()
def make_document() -> Any:
    """
    Return a builder for RawDocument from plain mappings.

    Certificates are given as name → mapping, exactly as a YAML document
    would deserialize them.
    """

    def _make(certificates: dict[str, dict[str, Any]] | None = None, **sections: Any) -> RawDocument:
        return RawDocument.model_validate({"certificates": certificates or {}, **sections})

    return _make
