"""HTTP Basic authentication for basic-gate."""

from basic_gate.auth.basic import BasicAuthGate, Credential, HeaderRequest, parse_credential
from basic_gate.auth.identity import Identity
from basic_gate.auth.middleware import AuthMiddleware, ScopeRequest, auth_identity_var, header_lines
from basic_gate.auth.protocol import CredentialVerifier, Pass, Request
from basic_gate.auth.verifiers import FakeVerifier, StaticVerifier, load_credentials, parse_credential_entries

__all__ = [
    "BasicAuthGate",
    "Credential",
    "CredentialVerifier",
    "HeaderRequest",
    "Identity",
    "Pass",
    "Request",
    "parse_credential",
    "StaticVerifier",
    "FakeVerifier",
    "load_credentials",
    "parse_credential_entries",
    "AuthMiddleware",
    "ScopeRequest",
    "auth_identity_var",
    "header_lines",
]
