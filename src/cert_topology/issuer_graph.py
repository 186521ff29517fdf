"""
Issuer graph — links every certificate to its issuer and enforces the hierarchy.

Two passes over the certificates, both in document order:

  Pass 1 (independent): classify the type tag, resolve the subject against
  the document default. No certificate depends on another here.

  Pass 2 (linking): a self-signed certificate must name no issuer; any other
  certificate must name an existing certificate that is an authority. The
  link is stored as the issuer's position in the arena tuple.

Per-edge checks cannot see a loop made only of intermediate authorities
(a issued by b, b issued by a), so a third step walks the index links and
rejects any chain that never reaches a self-signed root.

Every step is fail-fast: the first violation is returned and nothing
after it is evaluated.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import TypeAlias

from cert_topology.classifier import classify
from cert_topology.domain.document import RawCertificate
from cert_topology.domain.models import CertificateSpec, SubjectName
from cert_topology.railway import ErrorCode
from cert_topology.railway.result import Result
from cert_topology.subjects import resolve_subject

Arena: TypeAlias = tuple[CertificateSpec, ...]


# ─────────────────────── Pass 1: independent resolution ───────────────────────


def resolve_certificate(
    name: str,
    raw: RawCertificate,
    default_subject: SubjectName,
) -> Result[CertificateSpec]:
    """Classify one certificate and resolve its subject; the issuer stays unlinked."""
    return classify(name, raw.type).map(
        lambda classification: CertificateSpec(
            name=name,
            certificate_type=classification.certificate_type,
            issuer_name=raw.issuer,
            subject=resolve_subject(raw.subject.to_subject_name(), default_subject),
            hosts=tuple(raw.hosts),
        )
    )


# ─────────────────────── Pass 2: linking ───────────────────────


def link_issuer(
    spec: CertificateSpec,
    arena: Sequence[CertificateSpec],
    positions: Mapping[str, int],
) -> Result[CertificateSpec]:
    """
    Validate one issuer edge and return the spec with its issuer index set.

    Self-signed certificates come back unchanged with no link.
    """
    if spec.is_self_signed:
        if spec.issuer_name:
            return Result.failure(
                ErrorCode.SELF_SIGNED_WITH_ISSUER,
                f"self-signed certificate {spec.name} must not have issuer",
                certificate=spec.name,
                issuer=spec.issuer_name,
            )
        return Result.success(spec)

    issuer_position = positions.get(spec.issuer_name)
    if issuer_position is None:
        return Result.failure(
            ErrorCode.MISSING_ISSUER,
            f"certificate {spec.name} has missing issuer '{spec.issuer_name}'",
            certificate=spec.name,
            issuer=spec.issuer_name,
        )

    issuer = arena[issuer_position]
    if not issuer.is_authority:
        return Result.failure(
            ErrorCode.ISSUER_NOT_AUTHORITY,
            f"certificate {spec.name} has issuer {issuer.name} that is not a CA",
            certificate=spec.name,
            issuer=issuer.name,
            issuer_type=issuer.certificate_type.tag,
        )
    return Result.success(replace(spec, issuer_index=issuer_position))


def link_issuers(arena: Sequence[CertificateSpec]) -> Result[Arena]:
    positions = {spec.name: position for position, spec in enumerate(arena)}
    return Result.all_of(link_issuer(spec, arena, positions) for spec in arena).map(tuple)


# ─────────────────────── Cycle detection ───────────────────────


def check_issuer_cycles(arena: Arena) -> Result[Arena]:
    """
    Reject issuer links that loop instead of ending at a self-signed root.

    Walks each chain once; positions already proven to reach a root are
    skipped. The failure names the first certificate in document order whose
    chain loops and lists the loop in link order.
    """
    reaches_root: set[int] = set()
    for start in range(len(arena)):
        path: list[int] = []
        on_path: dict[int, int] = {}
        position = start
        while position is not None and position not in reaches_root:
            if position in on_path:
                loop = [arena[p].name for p in path[on_path[position]:]]
                loop.append(arena[position].name)
                return Result.failure(
                    ErrorCode.ISSUER_CYCLE,
                    f"certificate {arena[start].name} has an issuer cycle: {' -> '.join(loop)}",
                    certificate=arena[start].name,
                    cycle=" -> ".join(loop),
                )
            on_path[position] = len(path)
            path.append(position)
            position = arena[position].issuer_index
        reaches_root.update(path)
    return Result.success(arena)


# ─────────────────────── Builder ───────────────────────


def build_issuer_graph(
    certificates: Mapping[str, RawCertificate],
    default_subject: SubjectName,
    detect_cycles: bool = True,
) -> Result[Arena]:
    """
    Resolve and link every certificate of a document.

    Returns the arena: specs in document order, each non-self-signed spec
    carrying the position of its issuer.
    """
    linked = Result.all_of(
        resolve_certificate(name, raw, default_subject) for name, raw in certificates.items()
    ).flat_map(link_issuers)
    if not detect_cycles:
        return linked
    return linked.flat_map(check_issuer_cycles)
