"""
Type classifier — maps a certificate type tag to its structural properties.

Pure lookup over the closed CertificateType enum. The enum's values are the
tags documents use, and its traits table is the single source of truth for
is-authority / is-self-signed, so adding a role is a code change, never a
configuration change.

    tag             is-authority  is-self-signed
    rootCA          yes           yes
    intermediateCA  yes           no
    OCSPSigning     no            no
    server          no            no
    client          no            no
"""

from __future__ import annotations

from cert_topology.domain.models import CertificateType, Classification
from cert_topology.railway import ErrorCode
from cert_topology.railway.result import Result

_BY_TAG: dict[str, CertificateType] = {member.tag: member for member in CertificateType}


def classify(certificate_name: str, tag: str) -> Result[Classification]:
    """
    Classify the type tag of one certificate.

    Tags are matched exactly (case-sensitive). Any other value fails with
    INVALID_CERTIFICATE_TYPE naming the certificate and the tag.
    """
    certificate_type = _BY_TAG.get(tag)
    if certificate_type is None:
        return Result.failure(
            ErrorCode.INVALID_CERTIFICATE_TYPE,
            f"invalid type '{tag}' for certificate {certificate_name}",
            certificate=certificate_name,
            tag=tag,
        )
    traits = certificate_type.traits
    return Result.success(
        Classification(
            certificate_type=certificate_type,
            is_authority=traits.is_authority,
            is_self_signed=traits.is_self_signed,
        )
    )
