"""
Validator — the resolution railway from raw document to ConfigDocument.

Pure business logic: no side effects, no I/O. Reading and parsing are
injected through the DocumentSource and DocumentParser ports.

Fixed order, first failure wins:

  resolve_directories(document.directories)
    → resolve_extensions(document.extensions)
      → build_issuer_graph(document.certificates)   (classify + subjects, then link)
        → ConfigDocument

Each stage returns Result[T]; a failure short-circuits every later stage,
so no partially resolved model is ever produced.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from cert_topology.domain.document import RawDocument
from cert_topology.domain.models import CertificateSpec, ConfigDocument
from cert_topology.domain.ports import DocumentParser, DocumentSource
from cert_topology.issuer_graph import build_issuer_graph
from cert_topology.overrides import resolve_directories, resolve_extensions
from cert_topology.railway.result import Result


def _assemble(
    document: RawDocument,
    directories: Mapping[str, str],
    extensions: Mapping[str, str],
    certificates: tuple[CertificateSpec, ...],
) -> ConfigDocument:
    return ConfigDocument(
        certificates=certificates,
        subject=document.subject.to_subject_name(),
        public_directory=directories["public"],
        private_directory=directories["private"],
        key_extension=extensions["key"],
        certificate_extension=extensions["certificate"],
        keyfiles=tuple(document.keyfiles),
        combos={name: tuple(members) for name, members in document.combos.items()},
    )


def validate_document(
    document: RawDocument,
    detect_issuer_cycles: bool = True,
) -> Result[ConfigDocument]:
    """
    Resolve a deserialized document into the immutable, linked topology.

    Returns Result.success(ConfigDocument), or the first failure found:
    UNRECOGNIZED_CONFIG_KEY, INVALID_CERTIFICATE_TYPE, SELF_SIGNED_WITH_ISSUER,
    MISSING_ISSUER, ISSUER_NOT_AUTHORITY or ISSUER_CYCLE.
    """
    default_subject = document.subject.to_subject_name()
    return (
        resolve_directories(document.directories)
        .flat_map(
            lambda directories: resolve_extensions(document.extensions).map(
                lambda extensions: (directories, extensions)
            )
        )
        .flat_map(
            lambda locations: build_issuer_graph(
                document.certificates,
                default_subject,
                detect_cycles=detect_issuer_cycles,
            ).map(lambda certificates: _assemble(document, *locations, certificates))
        )
    )


def load_topology(
    path: Path,
    source: DocumentSource,
    parser: DocumentParser,
    detect_issuer_cycles: bool = True,
) -> Result[ConfigDocument]:
    """
    Read, parse and validate the document at `path`.

    Adds DOCUMENT_READ_ERROR and DOCUMENT_PARSE_ERROR (from the adapters)
    in front of the validation failures.
    """
    return (
        source.read(path)
        .flat_map(parser.parse)
        .flat_map(lambda document: validate_document(document, detect_issuer_cycles))
    )
