"""
Application entry point — wires adapters and resolves one topology document.

Composition root: creates the concrete document adapters, runs the
resolution railway inside a logging execution context, and reports the
outcome.

This is the ONLY place where concrete adapter classes are instantiated.
Everything else depends on the Protocol ports.

Responsibilities:
  1. Load and validate settings (environment, .env, command line)
  2. Configure structlog
  3. Read → parse → validate the document
  4. Log every resolved certificate with its chain, or the failure
  5. Exit non-zero on failure
"""

from __future__ import annotations

import logging
import sys

import structlog

from cert_topology import __version__
from cert_topology.adapters.file_source import FileDocumentSource
from cert_topology.adapters.yaml_parser import YamlDocumentParser
from cert_topology.config import AppSettings
from cert_topology.domain.models import ConfigDocument
from cert_topology.railway import FailureDescription, LoggingExecutionContext
from cert_topology.railway.result import Result
from cert_topology.validator import load_topology

log = structlog.get_logger()


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for structured logging.

    Colored, human-readable console output with ISO timestamps;
    events below `log_level` are dropped.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def resolve(settings: AppSettings) -> Result[ConfigDocument]:
    """Run the full resolution for the configured document within a logging context."""
    ctx = LoggingExecutionContext(operation="ResolveTopology")
    return ctx.execute(
        lambda: load_topology(
            settings.config_file,
            source=FileDocumentSource(),
            parser=YamlDocumentParser(),
            detect_issuer_cycles=settings.detect_issuer_cycles,
        )
    )


def _report_topology(topology: ConfigDocument) -> None:
    """
    Log each certificate with its chain, then a summary.

    With cycle detection switched off a chain may loop; it is logged as None.
    """
    for spec in topology:
        try:
            chain = [link.name for link in topology.chain(spec.name)]
        except ValueError:
            chain = None
        log.info(
            "certificate.resolved",
            certificate=spec.name,
            type=spec.certificate_type.tag,
            issuer=spec.issuer_name or None,
            subject=spec.subject.to_x509_name().rfc4514_string(),
            chain=chain,
            key_file=str(topology.key_file(spec.name)),
            certificate_file=str(topology.certificate_file(spec.name)),
        )
    log.info(
        "topology.resolved",
        certificates=len(topology),
        authorities=sum(1 for spec in topology if spec.is_authority),
        roots=sum(1 for spec in topology if spec.is_self_signed),
        combos=len(topology.combos),
        keyfiles=len(topology.keyfiles),
    )


def _report_failure(error: FailureDescription) -> None:
    log.error(
        "topology.invalid",
        code=error.code.value,
        message=error.message,
        **dict(error.context),
    )


def main(argv: list[str] | None = None) -> None:
    """Resolve the configured document; exit 1 on invalid settings or an invalid topology."""
    try:
        settings = AppSettings(_cli_parse_args=sys.argv[1:] if argv is None else argv)
    except Exception as e:
        print(f"FATAL: Configuration error — {e}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    configure_structlog(settings.log_level)

    log.info(
        "app.starting",
        version=__version__,
        config_file=str(settings.config_file),
        detect_issuer_cycles=settings.detect_issuer_cycles,
    )

    result = resolve(settings)
    result.either(on_success=_report_topology, on_failure=_report_failure)
    if result.is_failure():
        sys.exit(1)


if __name__ == "__main__":
    main()
