"""Protocols for pluggable authentication pieces."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, TypeVar, runtime_checkable

from basic_gate.auth.identity import Identity

ResponseT = TypeVar("ResponseT")


@runtime_checkable
class Request(Protocol):
    """An inbound request as seen by a ``Pass``."""

    def head(self) -> Iterable[str]:
        """Return the header lines (``"Name: value"``) in wire order."""
        ...


@runtime_checkable
class CredentialVerifier(Protocol):
    """Protocol for credential backends.

    Implementations decide whether a user/password pair is valid. They may
    block on I/O; callers needing bounded latency enforce it themselves.
    A backend that cannot answer should raise ``VerifierError`` rather
    than return ``False``.
    """

    def check(self, user: str, password: str) -> bool:
        """Return True if the pair is valid."""
        ...


@runtime_checkable
class Pass(Protocol):
    """Protocol for authentication passes.

    ``enter`` yields an ``Identity`` for an authenticated request or
    ``None`` for an anonymous one. ``exit`` may decorate the outgoing
    response for that identity.
    """

    def enter(self, request: Request) -> Identity | None: ...

    def exit(self, response: ResponseT, identity: Identity | None) -> ResponseT: ...
