"""Starlette application protected by an authentication pass."""

from __future__ import annotations

import logging
import time as _time
from typing import Any

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.responses import JSONResponse
from starlette.routing import Route

from basic_gate.auth.middleware import AuthMiddleware, auth_identity_var
from basic_gate.auth.protocol import Pass

logger = logging.getLogger(__name__)


def build_app(
    gate: Pass,
    *,
    require_auth: bool = True,
    exempt_paths: set[str] | None = None,
) -> Starlette:
    """Build an app exposing ``/health`` and ``/whoami`` behind ``gate``.

    Args:
        gate: The pass that authenticates requests.
        require_auth: Reject anonymous requests with 401.
        exempt_paths: Paths served without authentication (default: ``/health``).
    """
    start_time = _time.monotonic()

    async def _health(request: Any) -> JSONResponse:
        return JSONResponse(
            {
                "status": "ok",
                "uptime_seconds": round(_time.monotonic() - start_time, 1),
            }
        )

    async def _whoami(request: Any) -> JSONResponse:
        identity = auth_identity_var.get()
        if identity is None:
            return JSONResponse({"id": None, "properties": {}})
        return JSONResponse({"id": identity.id, "properties": identity.properties})

    return Starlette(
        routes=[
            Route("/health", endpoint=_health, methods=["GET"]),
            Route("/whoami", endpoint=_whoami, methods=["GET"]),
        ],
        middleware=[
            Middleware(
                AuthMiddleware,
                gate=gate,
                require_auth=require_auth,
                exempt_paths=exempt_paths,
            )
        ],
    )


def validate_host_port(host: str, port: int) -> None:
    """Validate host and port parameters."""
    if not host:
        raise ValueError("Host must not be empty")
    if not isinstance(port, int) or port < 1 or port > 65535:
        raise ValueError(f"Port must be between 1 and 65535, got {port}")
