"""HTTP Basic authentication pass (RFC 2617)."""

from __future__ import annotations

import base64
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeVar

from basic_gate.auth.identity import Identity
from basic_gate.auth.protocol import CredentialVerifier, Pass, Request

logger = logging.getLogger(__name__)

AUTH_HEAD = "Authorization: Basic"
URN_PREFIX = "urn:basic:"

ResponseT = TypeVar("ResponseT")


@dataclass(frozen=True)
class Credential:
    """A decoded user/password pair."""

    user: str
    password: str

    @property
    def is_empty(self) -> bool:
        return not self.user and not self.password


@dataclass(frozen=True)
class HeaderRequest:
    """Plain request made of header lines."""

    lines: tuple[str, ...] = ()

    def head(self) -> Iterable[str]:
        return self.lines


def find_auth_line(lines: Iterable[str]) -> str | None:
    """Return the first header line carrying Basic credentials, if any."""
    return next((line for line in lines if line.startswith(AUTH_HEAD)), None)


def parse_credential(line: str) -> Credential | None:
    """Decode the credential pair from an ``Authorization: Basic`` line.

    Returns None when the payload is not valid base64, not UTF-8, or has
    no colon separating user from password.
    """
    payload = line[len(AUTH_HEAD) :].strip()
    try:
        text = base64.b64decode(payload, validate=True).decode("utf-8")
    except ValueError:  # includes binascii.Error and UnicodeDecodeError
        logger.debug("Malformed Basic credentials ignored", exc_info=True)
        return None

    user, sep, password = text.partition(":")
    if not sep:
        logger.debug("Basic credentials without user/password separator ignored")
        return None
    return Credential(user=user, password=password)


class BasicAuthGate:
    """Authenticates requests carrying HTTP Basic credentials.

    Stateless and thread-safe: the only thing held is the verifier, which
    is shared by every call.

    Args:
        verifier: Decides whether a user/password pair is valid.
    """

    def __init__(self, verifier: CredentialVerifier) -> None:
        if verifier is None or not callable(getattr(verifier, "check", None)):
            raise TypeError(f"verifier must provide check(user, password), got {verifier!r}")
        self._verifier = verifier

    @property
    def verifier(self) -> CredentialVerifier:
        return self._verifier

    def enter(self, request: Request) -> Identity | None:
        """Return the identity for the request's credentials, or None.

        Only the first ``Authorization: Basic`` line is considered. Errors
        raised by the verifier propagate to the caller.
        """
        line = find_auth_line(request.head())
        if line is None:
            return None

        credential = parse_credential(line)
        if credential is None or credential.is_empty:
            return None

        if not self._verifier.check(credential.user, credential.password):
            logger.debug("Basic credentials rejected for user %r", credential.user)
            return None

        return Identity(id=URN_PREFIX + credential.user)

    def exit(self, response: ResponseT, identity: Identity | None) -> ResponseT:
        """Return the response unchanged."""
        return response

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._verifier!r})"


# Verify protocol compliance at import time
assert isinstance(BasicAuthGate.__new__(BasicAuthGate), Pass)
assert isinstance(HeaderRequest(), Request)
