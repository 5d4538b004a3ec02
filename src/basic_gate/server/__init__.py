"""HTTP server pieces for basic-gate."""

from basic_gate.server.app import build_app, validate_host_port

__all__ = ["build_app", "validate_host_port"]
