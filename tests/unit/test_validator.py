"""
Unit tests for the validator — the resolution railway.

Uses mock ports (fake adapters) to test load_topology in isolation and
RawDocument builders to test validate_document.

Test categories:
  - Success track: a complete document resolves into a linked ConfigDocument
  - Order: directories, then extensions, then certificates
  - Ports: read/parse failures short-circuit validation
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

from cert_topology.domain.document import RawDocument
from cert_topology.domain.models import CertificateType, SubjectName
from cert_topology.railway import ErrorCode, Result, ResultAssertions
from cert_topology.validator import load_topology, validate_document

# ─────────────────────── Mock Port Factories ───────────────────────


def _make_source(result: Result[bytes]) -> MagicMock:
    """Create a mock DocumentSource returning the given Result."""
    mock = MagicMock()
    mock.read.return_value = result
    return mock


def _make_parser(result: Result[RawDocument]) -> MagicMock:
    """Create a mock DocumentParser returning the given Result."""
    mock = MagicMock()
    mock.parse.return_value = result
    return mock


# ─────────────────────── Success Track ───────────────────────


class TestValidateDocumentSuccess:
    def test_complete_document(self, make_document: Any) -> None:
        """
        GIVEN directories, extensions, a default subject and a root → ca → web chain
        WHEN validated
        THEN every section is resolved and the chain is linked.
        """
        document = make_document(
            {
                "root": {"type": "rootCA"},
                "ca": {"type": "intermediateCA", "issuer": "root"},
                "web": {"type": "server", "issuer": "ca", "Subject": {"CN": "www"}, "hosts": ["www"]},
            },
            directories={"public": "pub"},
            extensions={"certificate": "crt"},
            Subject={"O": "Acme", "OU": "Ops", "CN": "acme"},
            keyfiles=["secret"],
            combos={"bundle": ["web", "ca"]},
        )

        topology = ResultAssertions.assert_success(validate_document(document))

        assert topology.public_directory == "pub"
        assert topology.private_directory == "tls/private"
        assert topology.key_extension == "key"
        assert topology.certificate_extension == "crt"
        assert topology.subject == SubjectName("Acme", "Ops", "acme")
        assert topology.keyfiles == ("secret",)
        assert topology.combos["bundle"] == ("web", "ca")
        assert topology.names == ("root", "ca", "web")
        assert topology.get("web").subject == SubjectName("Acme", "Ops", "www")
        assert topology.get("ca").certificate_type is CertificateType.INTERMEDIATE_CA
        assert [spec.name for spec in topology.chain("web")] == ["web", "ca", "root"]

    def test_empty_document_uses_all_defaults(self, make_document: Any) -> None:
        topology = ResultAssertions.assert_success(validate_document(make_document()))
        assert len(topology) == 0
        assert (topology.public_directory, topology.private_directory) == ("tls", "tls/private")
        assert (topology.key_extension, topology.certificate_extension) == ("key", "pem")
        assert topology.subject == SubjectName()


# ─────────────────────── Ordering ───────────────────────


class TestValidationOrder:
    def test_directories_checked_before_extensions(self, make_document: Any) -> None:
        document = make_document(directories={"backup": "x"}, extensions={"bogus": "y"})
        result = validate_document(document)
        ResultAssertions.assert_failure_context(result, section="directories", key="backup")

    def test_extensions_checked_before_certificates(self, make_document: Any) -> None:
        document = make_document({"web": {"type": "nonsense"}}, extensions={"bogus": "y"})
        result = validate_document(document)
        ResultAssertions.assert_failure(result, ErrorCode.UNRECOGNIZED_CONFIG_KEY)
        ResultAssertions.assert_failure_context(result, section="extensions", key="bogus")

    def test_certificate_failure_surfaces(self, make_document: Any) -> None:
        document = make_document({"root": {"type": "rootCA", "issuer": "root"}})
        result = validate_document(document)
        ResultAssertions.assert_failure(result, ErrorCode.SELF_SIGNED_WITH_ISSUER)

    def test_cycle_detection_flag_is_forwarded(self, make_document: Any) -> None:
        document = make_document(
            {
                "a": {"type": "intermediateCA", "issuer": "b"},
                "b": {"type": "intermediateCA", "issuer": "a"},
            }
        )
        ResultAssertions.assert_failure(validate_document(document), ErrorCode.ISSUER_CYCLE)
        ResultAssertions.assert_success(validate_document(document, detect_issuer_cycles=False))


# ─────────────────────── Ports ───────────────────────


class TestLoadTopology:
    def test_reads_parses_and_validates(self, make_document: Any) -> None:
        document = make_document({"root": {"type": "rootCA"}})
        source = _make_source(Result.success(b"yaml-bytes"))
        parser = _make_parser(Result.success(document))

        topology = ResultAssertions.assert_success(load_topology(Path("topology.yaml"), source, parser))

        source.read.assert_called_once_with(Path("topology.yaml"))
        parser.parse.assert_called_once_with(b"yaml-bytes")
        assert topology.names == ("root",)

    def test_read_failure_skips_parse(self) -> None:
        source = _make_source(Result.failure(ErrorCode.DOCUMENT_READ_ERROR, "no such file", path="x"))
        parser = _make_parser(Result.success(RawDocument()))

        result = load_topology(Path("x"), source, parser)

        ResultAssertions.assert_failure(result, ErrorCode.DOCUMENT_READ_ERROR)
        parser.parse.assert_not_called()

    def test_parse_failure_surfaces(self) -> None:
        source = _make_source(Result.success(b"::"))
        parser = _make_parser(Result.failure(ErrorCode.DOCUMENT_PARSE_ERROR, "bad yaml"))

        result = load_topology(Path("x"), source, parser)

        ResultAssertions.assert_failure(result, ErrorCode.DOCUMENT_PARSE_ERROR)

    def test_validation_failure_after_successful_parse(self, make_document: Any) -> None:
        document = make_document({"web": {"type": "server", "issuer": "ghost"}})
        result = load_topology(
            Path("x"),
            _make_source(Result.success(b"...")),
            _make_parser(Result.success(document)),
        )
        ResultAssertions.assert_failure(result, ErrorCode.MISSING_ISSUER)
