"""ASGI middleware that runs a ``Pass`` and publishes the identity via ContextVar."""

from __future__ import annotations

import json
import logging
from contextvars import ContextVar
from typing import Any

import anyio.to_thread

from basic_gate.auth.identity import Identity
from basic_gate.auth.protocol import Pass
from basic_gate.errors import VerifierError

logger = logging.getLogger(__name__)

# Bridge between ASGI middleware and downstream handlers
auth_identity_var: ContextVar[Identity | None] = ContextVar("auth_identity", default=None)


def canonical_header_name(name: str) -> str:
    """Restore the conventional casing of a header name (``content-type`` -> ``Content-Type``)."""
    return "-".join(part.capitalize() for part in name.split("-"))


def header_lines(scope: dict[str, Any]) -> list[str]:
    """Render ASGI scope headers as ``"Name: value"`` lines, in wire order."""
    lines: list[str] = []
    for key_bytes, value_bytes in scope.get("headers", []):
        name = canonical_header_name(key_bytes.decode("latin-1"))
        lines.append(f"{name}: {value_bytes.decode('latin-1')}")
    return lines


class ScopeRequest:
    """Adapts an ASGI HTTP scope to the ``Request`` protocol."""

    def __init__(self, scope: dict[str, Any]) -> None:
        self._scope = scope

    def head(self) -> list[str]:
        return header_lines(self._scope)


class AuthMiddleware:
    """ASGI middleware that authenticates requests and sets ``auth_identity_var``.

    The pass runs in a worker thread, so verifiers may block on I/O.

    Args:
        app: The ASGI application to wrap.
        gate: A ``Pass`` implementation, typically ``BasicAuthGate``.
        exempt_paths: Exact paths that bypass authentication.
        exempt_prefixes: Path prefixes that bypass authentication.
        require_auth: If True, unauthenticated requests receive 401.
            If False, requests proceed without identity (permissive mode).
    """

    def __init__(
        self,
        app: Any,
        gate: Pass,
        *,
        exempt_paths: set[str] | None = None,
        exempt_prefixes: set[str] | None = None,
        require_auth: bool = True,
    ) -> None:
        self._app = app
        self._gate = gate
        self._exempt_paths = exempt_paths if exempt_paths is not None else {"/health"}
        self._exempt_prefixes = exempt_prefixes or set()
        self._require_auth = require_auth

    def _is_exempt(self, path: str) -> bool:
        """Check if a path is exempt from authentication."""
        if path in self._exempt_paths:
            return True
        return any(path.startswith(prefix) for prefix in self._exempt_prefixes)

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        if scope["type"] != "http":
            await self._app(scope, receive, send)
            return

        path = scope.get("path", "")
        if self._is_exempt(path):
            await self._app(scope, receive, send)
            return

        try:
            identity = await anyio.to_thread.run_sync(self._gate.enter, ScopeRequest(scope))
        except VerifierError:
            logger.warning("Credential verifier failed for %s", path, exc_info=True)
            await self._send_error(send, 503, "Service Unavailable", "Credential verifier unavailable")
            return

        if identity is None and self._require_auth:
            await self._send_error(send, 401, "Unauthorized", "Missing or invalid Basic credentials")
            return

        scope.setdefault("state", {})["identity"] = identity

        async def send_through_gate(message: dict[str, Any]) -> None:
            if message["type"] == "http.response.start":
                message = self._gate.exit(message, identity)
            await send(message)

        token = auth_identity_var.set(identity)
        try:
            await self._app(scope, receive, send_through_gate)
        finally:
            auth_identity_var.reset(token)

    @staticmethod
    async def _send_error(send: Any, status: int, error: str, detail: str) -> None:
        """Send a JSON error response."""
        body = json.dumps({"error": error, "detail": detail}).encode()
        await send(
            {
                "type": "http.response.start",
                "status": status,
                "headers": [
                    [b"content-type", b"application/json"],
                    [b"content-length", str(len(body)).encode()],
                ],
            }
        )
        await send({"type": "http.response.body", "body": body})
