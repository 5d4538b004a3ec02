"""Ready-made ``CredentialVerifier`` implementations."""

from __future__ import annotations

import hmac
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from basic_gate.auth.protocol import CredentialVerifier
from basic_gate.errors import ConfigurationError

logger = logging.getLogger(__name__)


class StaticVerifier:
    """Checks credentials against an in-memory ``user -> password`` mapping.

    Passwords are compared with ``hmac.compare_digest``.
    """

    def __init__(self, credentials: Mapping[str, str]) -> None:
        self._credentials = dict(credentials)

    def __len__(self) -> int:
        return len(self._credentials)

    def check(self, user: str, password: str) -> bool:
        expected = self._credentials.get(user)
        if expected is None:
            return False
        return hmac.compare_digest(expected.encode("utf-8"), password.encode("utf-8"))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(users={len(self._credentials)})"


class FakeVerifier:
    """Gives the same answer for every pair."""

    def __init__(self, result: bool) -> None:
        self._result = result

    def check(self, user: str, password: str) -> bool:
        return self._result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._result!r})"


def parse_credential_entry(entry: str) -> tuple[str, str]:
    """Split a ``user:password`` entry at its first colon.

    Raises:
        ConfigurationError: If the entry has no colon or an empty user.
    """
    user, sep, password = entry.partition(":")
    if not sep or not user:
        raise ConfigurationError("Credential entries must look like 'user:password'")
    return user, password


def parse_credential_entries(entries: Iterable[str]) -> dict[str, str]:
    """Build a credential mapping from ``user:password`` entries.

    Blank entries are skipped. A repeated user keeps its last password.
    """
    result: dict[str, str] = {}
    for entry in entries:
        entry = entry.strip()
        if not entry:
            continue
        user, password = parse_credential_entry(entry)
        if user in result:
            logger.warning("Duplicate credential entry for user %r; keeping the last one", user)
        result[user] = password
    return result


def load_credentials(path: Path) -> dict[str, str]:
    """Read ``user:password`` lines from a file.

    Lines starting with ``#`` and blank lines are ignored.

    Raises:
        ConfigurationError: If the file cannot be read or a line is malformed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read credentials file '{path}'", details=str(exc)) from exc

    lines = []
    for number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if ":" not in stripped:
            raise ConfigurationError(f"Malformed credential on line {number} of '{path}'")
        lines.append(stripped)
    return parse_credential_entries(lines)


# Verify protocol compliance at import time
assert isinstance(StaticVerifier({}), CredentialVerifier)
assert isinstance(FakeVerifier(False), CredentialVerifier)
