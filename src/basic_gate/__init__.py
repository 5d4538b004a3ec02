"""basic-gate: HTTP Basic authentication gate yielding identities for downstream stages."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

import uvicorn

from basic_gate.auth.basic import BasicAuthGate, Credential, HeaderRequest
from basic_gate.auth.identity import Identity
from basic_gate.auth.middleware import AuthMiddleware, auth_identity_var
from basic_gate.auth.protocol import CredentialVerifier, Pass, Request
from basic_gate.auth.verifiers import FakeVerifier, StaticVerifier
from basic_gate.errors import BasicGateError, ConfigurationError, VerifierError
from basic_gate.server.app import build_app, validate_host_port

__all__ = [
    # Public API
    "serve",
    "build_app",
    # Core
    "BasicAuthGate",
    "Credential",
    "HeaderRequest",
    "Identity",
    # Protocols
    "CredentialVerifier",
    "Pass",
    "Request",
    # Verifiers
    "StaticVerifier",
    "FakeVerifier",
    # ASGI
    "AuthMiddleware",
    "auth_identity_var",
    # Errors
    "BasicGateError",
    "VerifierError",
    "ConfigurationError",
]

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def serve(
    verifier: CredentialVerifier,
    *,
    host: str = "127.0.0.1",
    port: int = 8000,
    require_auth: bool = True,
    exempt_paths: set[str] | None = None,
    log_level: str | None = None,
    on_startup: Callable[[], None] | None = None,
    on_shutdown: Callable[[], None] | None = None,
) -> None:
    """Serve the demo app behind a ``BasicAuthGate`` built on ``verifier``.

    Args:
        verifier: Decides whether a user/password pair is valid.
        host: Host address to bind.
        port: Port number to bind.
        require_auth: Reject anonymous requests with 401.
        exempt_paths: Paths served without authentication (default: ``/health``).
        log_level: Set the log level for the basic_gate logger (e.g. "DEBUG", "INFO").
        on_startup: Optional callback invoked after setup, before the server starts.
        on_shutdown: Optional callback invoked after the server stops.
    """
    if log_level is not None:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if log_level.upper() not in valid_levels:
            raise ValueError(f"Unknown log level: {log_level!r}. Valid: {sorted(valid_levels)}")
        logging.getLogger("basic_gate").setLevel(getattr(logging, log_level.upper()))
    validate_host_port(host, port)

    gate = BasicAuthGate(verifier)
    app = build_app(gate, require_auth=require_auth, exempt_paths=exempt_paths)

    logger.info(
        "Starting basic-gate v%s on %s:%d (require_auth=%s)",
        __version__,
        host,
        port,
        require_auth,
    )

    config = uvicorn.Config(app, host=host, port=port, log_level="info")
    uv_server = uvicorn.Server(config)

    if on_startup is not None:
        on_startup()

    try:
        asyncio.run(uv_server.serve())
    finally:
        if on_shutdown is not None:
            on_shutdown()
