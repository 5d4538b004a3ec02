"""Shared test fixtures for basic-gate tests."""

from __future__ import annotations

import base64

import pytest

from basic_gate.auth.basic import HeaderRequest


def basic_line(payload: str) -> str:
    """Build an ``Authorization: Basic`` header line for ``payload``."""
    return "Authorization: Basic " + base64.b64encode(payload.encode("utf-8")).decode("ascii")


class RecordingVerifier:
    """Verifier stub that accepts one pair and records every call."""

    def __init__(self, user: str = "user", password: str = "pass") -> None:
        self._expected = (user, password)
        self.calls: list[tuple[str, str]] = []

    def check(self, user: str, password: str) -> bool:
        self.calls.append((user, password))
        return (user, password) == self._expected


@pytest.fixture
def make_request():
    """Factory building a ``HeaderRequest`` from header lines."""

    def _make(*lines: str) -> HeaderRequest:
        return HeaderRequest(tuple(lines))

    return _make


@pytest.fixture
def recording_verifier() -> RecordingVerifier:
    return RecordingVerifier()


@pytest.fixture
def verifier_for():
    """Factory building a ``RecordingVerifier`` that accepts one pair."""
    return RecordingVerifier


@pytest.fixture
def encode_basic():
    return basic_line
