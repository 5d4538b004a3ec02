"""Exception hierarchy for basic-gate."""

from __future__ import annotations

from typing import Any


class BasicGateError(RuntimeError):
    """Base error for basic-gate failures."""

    def __init__(self, message: str, *, details: Any | None = None) -> None:
        super().__init__(message)
        self.details = details


class VerifierError(BasicGateError):
    """Raised by a verifier whose backing store cannot answer.

    Distinct from a rejected password: the gate lets it propagate instead
    of reporting an anonymous request.
    """


class ConfigurationError(BasicGateError):
    """Raised when credential configuration cannot be read or parsed."""
