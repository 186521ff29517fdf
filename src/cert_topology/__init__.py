"""
cert_topology — certificate topology resolver.

Reads a declarative description of a certificate hierarchy (root and
intermediate authorities, OCSP signers, server and client certificates),
classifies each certificate, fills identity defaults and links every
certificate to its issuer, rejecting any document that breaks the trust
hierarchy. The result is an immutable model for certificate issuance.

Built on Railway-Oriented Programming: every stage returns a Result and
the first failure short-circuits the rest.
"""

__version__ = "0.1.0"
