"""
Raw document — the typed intermediate mapping produced by the deserializer.

These pydantic models mirror the wire contract of a topology document
field for field and do no resolution of their own: type tags stay strings,
subjects stay partially filled, directories and extensions stay optional
overrides. The validator turns a RawDocument into a ConfigDocument.

Field names are the external contract:

    directories:  {public: ..., private: ...}
    extensions:   {key: ..., certificate: ...}
    Subject:      {O: ..., OU: ..., CN: ...}
    keyfiles:     [...]
    certificates: {name: {type, issuer, Subject, hosts}}
    combos:       {name: [certificate names]}

`subject` (lower-case) is accepted wherever `Subject` is. Numeric scalars
in string positions (`OU: 4200`, a certificate named `2024`) are read as
their text.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from cert_topology.domain.models import SubjectName


class RawSubject(BaseModel):
    """Subject name as written in the document; any field may be missing."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    organization: str = Field(default="", alias="O")
    organizational_unit: str = Field(default="", alias="OU")
    common_name: str = Field(default="", alias="CN")

    @field_validator("organization", "organizational_unit", "common_name", mode="before")
    @classmethod
    def empty_when_null(cls, value: Any) -> Any:
        """`O:` with no value loads as None; treat it as unset."""
        return "" if value is None else value

    def to_subject_name(self) -> SubjectName:
        return SubjectName(
            organization=self.organization,
            organizational_unit=self.organizational_unit,
            common_name=self.common_name,
        )


class RawCertificate(BaseModel):
    """One entry under `certificates`, before classification and linking."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    type: str = ""
    issuer: str = ""
    subject: RawSubject = Field(
        default_factory=RawSubject,
        validation_alias=AliasChoices("Subject", "subject"),
    )
    hosts: list[str] = Field(default_factory=list)

    @field_validator("type", "issuer", mode="before")
    @classmethod
    def empty_when_null(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("subject", "hosts", mode="before")
    @classmethod
    def default_when_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is not None:
            return value
        return [] if info.field_name == "hosts" else {}


class RawDocument(BaseModel):
    """The whole topology document as deserialized, unknown top-level keys ignored."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    directories: dict[str, str] | None = None
    extensions: dict[str, str] | None = None
    subject: RawSubject = Field(
        default_factory=RawSubject,
        validation_alias=AliasChoices("Subject", "subject"),
    )
    keyfiles: list[str] = Field(default_factory=list)
    certificates: dict[str, RawCertificate] = Field(default_factory=dict)
    combos: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("subject", "keyfiles", "certificates", "combos", mode="before")
    @classmethod
    def default_when_null(cls, value: Any, info: ValidationInfo) -> Any:
        """A section written as `certificates:` with nothing under it is empty, not invalid."""
        if value is not None:
            return value
        return [] if info.field_name == "keyfiles" else {}
