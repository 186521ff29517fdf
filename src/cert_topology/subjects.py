"""Subject resolver — field-wise defaulting of O, OU and CN."""

from __future__ import annotations

from cert_topology.domain.models import SubjectName


def resolve_subject(spec: SubjectName, fallback: SubjectName) -> SubjectName:
    """
    Fill each empty field of `spec` from `fallback`, independently.

    Never fails; a field stays empty only when both sides leave it empty.
    """
    return SubjectName(
        organization=spec.organization or fallback.organization,
        organizational_unit=spec.organizational_unit or fallback.organizational_unit,
        common_name=spec.common_name or fallback.common_name,
    )
