"""
Domain models — the immutable, resolved certificate topology.

These are pure value objects. A ConfigDocument is built once by the
validator and never mutated afterwards; the certificates live in an ordered
tuple (the arena) and each issuer link is an index into that tuple, so the
model holds no object references between certificates.

All models are frozen dataclasses (immutable) following functional principles.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum, unique
from pathlib import Path
from types import MappingProxyType

from cryptography import x509
from cryptography.x509.oid import NameOID


@dataclass(frozen=True, slots=True)
class CertificateTraits:
    """Structural facts fixed per certificate type."""

    is_authority: bool
    is_self_signed: bool


@unique
class CertificateType(Enum):
    """
    Closed set of certificate roles, keyed by the tag used in documents.

    Adding a role means adding a member here and a row to _TRAITS.
    """

    ROOT_CA = "rootCA"
    INTERMEDIATE_CA = "intermediateCA"
    OCSP_SIGNING = "OCSPSigning"
    SERVER = "server"
    CLIENT = "client"

    @property
    def tag(self) -> str:
        return self.value

    @property
    def traits(self) -> CertificateTraits:
        return _TRAITS[self]

    @property
    def is_authority(self) -> bool:
        return _TRAITS[self].is_authority

    @property
    def is_self_signed(self) -> bool:
        return _TRAITS[self].is_self_signed


_TRAITS: Mapping[CertificateType, CertificateTraits] = MappingProxyType({
    CertificateType.ROOT_CA: CertificateTraits(is_authority=True, is_self_signed=True),
    CertificateType.INTERMEDIATE_CA: CertificateTraits(is_authority=True, is_self_signed=False),
    CertificateType.OCSP_SIGNING: CertificateTraits(is_authority=False, is_self_signed=False),
    CertificateType.SERVER: CertificateTraits(is_authority=False, is_self_signed=False),
    CertificateType.CLIENT: CertificateTraits(is_authority=False, is_self_signed=False),
})


@dataclass(frozen=True, slots=True)
class Classification:
    """Result of classifying a type tag: the variant plus its two structural facts."""

    certificate_type: CertificateType
    is_authority: bool
    is_self_signed: bool


@dataclass(frozen=True, slots=True)
class SubjectName:
    """
    Three-field identity a certificate names: O, OU and CN.

    Empty strings mean "unset"; the subject resolver fills them field by
    field from the document-level default.
    """

    organization: str = ""
    organizational_unit: str = ""
    common_name: str = ""

    def to_x509_name(self) -> x509.Name:
        """
        Build the X.509 subject handed to certificate issuance.

        Empty fields are omitted rather than encoded as empty attributes.
        """
        attributes = [
            x509.NameAttribute(oid, value)
            for oid, value in (
                (NameOID.ORGANIZATION_NAME, self.organization),
                (NameOID.ORGANIZATIONAL_UNIT_NAME, self.organizational_unit),
                (NameOID.COMMON_NAME, self.common_name),
            )
            if value
        ]
        return x509.Name(attributes)


@dataclass(frozen=True, slots=True)
class CertificateSpec:
    """
    One resolved certificate entry.

    `issuer_index` points into the owning ConfigDocument's `certificates`
    tuple; it is None exactly when the certificate is self-signed.
    """

    name: str
    certificate_type: CertificateType
    issuer_name: str
    subject: SubjectName
    hosts: tuple[str, ...] = ()
    issuer_index: int | None = None

    @property
    def is_authority(self) -> bool:
        return self.certificate_type.is_authority

    @property
    def is_self_signed(self) -> bool:
        return self.certificate_type.is_self_signed


@dataclass(frozen=True, slots=True)
class ConfigDocument:
    """
    The fully resolved and validated certificate topology.

    Certificates keep document order. Lookups by name go through a
    read-only index built at construction.
    """

    certificates: tuple[CertificateSpec, ...]
    subject: SubjectName
    public_directory: str
    private_directory: str
    key_extension: str
    certificate_extension: str
    keyfiles: tuple[str, ...] = ()
    combos: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    _index: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index = {spec.name: position for position, spec in enumerate(self.certificates)}
        if len(index) != len(self.certificates):
            raise ValueError("certificate names must be unique")
        object.__setattr__(self, "_index", MappingProxyType(index))
        object.__setattr__(
            self,
            "combos",
            MappingProxyType({name: tuple(members) for name, members in self.combos.items()}),
        )

    # ──────────────────────── Lookup ────────────────────────

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.certificates)

    def __len__(self) -> int:
        return len(self.certificates)

    def __iter__(self) -> Iterator[CertificateSpec]:
        return iter(self.certificates)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def get(self, name: str) -> CertificateSpec:
        """Return the certificate with the given name. Raises KeyError if absent."""
        return self.certificates[self._index[name]]

    # ──────────────────────── Issuer traversal ────────────────────────

    def issuer_of(self, name: str) -> CertificateSpec | None:
        """Return the issuer of the named certificate, or None for a self-signed root."""
        spec = self.get(name)
        if spec.issuer_index is None:
            return None
        return self.certificates[spec.issuer_index]

    def chain(self, name: str) -> tuple[CertificateSpec, ...]:
        """
        Walk issuer links from the named certificate up to its self-signed root.

        The first element is the named certificate, the last is the root.
        Validation guarantees the walk terminates when cycle detection is on.
        """
        chain = [self.get(name)]
        seen = {chain[0].name}
        while chain[-1].issuer_index is not None:
            issuer = self.certificates[chain[-1].issuer_index]
            if issuer.name in seen:
                raise ValueError(f"issuer chain of {name} loops at {issuer.name}")
            seen.add(issuer.name)
            chain.append(issuer)
        return tuple(chain)

    def issued_by(self, name: str) -> tuple[CertificateSpec, ...]:
        """Return the certificates directly issued by the named authority, in document order."""
        position = self._index[name]
        return tuple(spec for spec in self.certificates if spec.issuer_index == position)

    # ──────────────────────── Output locations ────────────────────────

    def key_file(self, name: str) -> Path:
        """Location of the private key for the named certificate."""
        self.get(name)
        return Path(self.private_directory) / f"{name}.{self.key_extension}"

    def certificate_file(self, name: str) -> Path:
        """Location of the public certificate for the named certificate."""
        self.get(name)
        return Path(self.public_directory) / f"{name}.{self.certificate_extension}"
