"""
YAML adapter — deserializes document bytes into the typed RawDocument.

Implements the DocumentParser port using:
  - PyYAML: yaml.safe_load (plain data only, no arbitrary object construction)
  - pydantic: RawDocument.model_validate for the document shape

An empty document loads as None and becomes an empty topology. YAML syntax
errors, a top level that is not a mapping, and shape violations all become
DOCUMENT_PARSE_ERROR.
"""

from __future__ import annotations

from typing import Any

import structlog
import yaml

from cert_topology.domain.document import RawDocument
from cert_topology.railway import ErrorCode
from cert_topology.railway.result import Result

log = structlog.get_logger()


def _load_yaml(raw: bytes) -> Any:
    data = yaml.safe_load(raw)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(f"top level must be a mapping, got {type(data).__name__}")
    return data


class YamlDocumentParser:
    """Parse YAML bytes into a RawDocument."""

    def parse(self, raw: bytes) -> Result[RawDocument]:
        return (
            Result.from_computation(
                lambda: _load_yaml(raw),
                ErrorCode.DOCUMENT_PARSE_ERROR,
                "error parsing YAML config file",
            )
            .flat_map(
                lambda data: Result.from_computation(
                    lambda: RawDocument.model_validate(data),
                    ErrorCode.DOCUMENT_PARSE_ERROR,
                    "config file does not match the expected shape",
                )
            )
            .peek(
                lambda document: log.debug(
                    "document.parsed",
                    certificates=len(document.certificates),
                    combos=len(document.combos),
                )
            )
        )
