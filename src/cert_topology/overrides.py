"""
Directory and extension overrides — merge optional settings over fixed defaults.

Both document sections share one rule: every key present must be one of the
recognized keys, and each override replaces the matching default.

    directories: public (default "tls"), private (default "tls/private")
    extensions:  key (default "key"), certificate (default "pem")
"""

from __future__ import annotations

from collections.abc import Mapping, Set
from types import MappingProxyType

from cert_topology.railway import ErrorCode
from cert_topology.railway.result import Result

DIRECTORY_KEYS: frozenset[str] = frozenset({"public", "private"})
DIRECTORY_DEFAULTS: Mapping[str, str] = MappingProxyType({"public": "tls", "private": "tls/private"})

EXTENSION_KEYS: frozenset[str] = frozenset({"key", "certificate"})
EXTENSION_DEFAULTS: Mapping[str, str] = MappingProxyType({"key": "key", "certificate": "pem"})


def resolve_overrides(
    section: str,
    overrides: Mapping[str, str] | None,
    recognized_keys: Set[str],
    defaults: Mapping[str, str],
) -> Result[Mapping[str, str]]:
    """
    Merge `overrides` over `defaults`, rejecting any key outside `recognized_keys`.

    Keys are checked in document order; the first unknown one fails with
    UNRECOGNIZED_CONFIG_KEY naming the section and the key.
    """
    resolved = dict(defaults)
    for key, value in (overrides or {}).items():
        if key not in recognized_keys:
            return Result.failure(
                ErrorCode.UNRECOGNIZED_CONFIG_KEY,
                f"invalid entry {key} in {section} section",
                section=section,
                key=key,
            )
        resolved[key] = value
    return Result.success(MappingProxyType(resolved))


def resolve_directories(overrides: Mapping[str, str] | None) -> Result[Mapping[str, str]]:
    return resolve_overrides("directories", overrides, DIRECTORY_KEYS, DIRECTORY_DEFAULTS)


def resolve_extensions(overrides: Mapping[str, str] | None) -> Result[Mapping[str, str]]:
    return resolve_overrides("extensions", overrides, EXTENSION_KEYS, EXTENSION_DEFAULTS)
