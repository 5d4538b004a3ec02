"""CLI entry point: python -m basic_gate."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from basic_gate import serve
from basic_gate.auth.verifiers import StaticVerifier, load_credentials, parse_credential_entries
from basic_gate.errors import ConfigurationError

logger = logging.getLogger(__name__)

CREDENTIALS_ENV = "BASIC_GATE_CREDENTIALS"


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the basic-gate CLI."""
    parser = argparse.ArgumentParser(
        prog="python -m basic_gate",
        description="Serve a demo app protected by HTTP Basic authentication.",
    )

    # Server options
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host address (default: 127.0.0.1).",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port (default: 8000, range: 1-65535).",
    )

    # Credentials
    parser.add_argument(
        "--credential",
        action="append",
        default=[],
        metavar="USER:PASSWORD",
        help="Accepted credential pair. May be repeated.",
    )
    parser.add_argument(
        "--credentials-file",
        type=Path,
        default=None,
        help="File with one user:password per line ('#' starts a comment).",
    )

    # Auth behaviour
    parser.add_argument(
        "--require-auth",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Reject anonymous requests (default: True). Use --no-require-auth for permissive mode.",
    )
    parser.add_argument(
        "--exempt-paths",
        default=None,
        help="Comma-separated paths exempt from auth (default: /health).",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="INFO",
        help="Logging level (default: INFO).",
    )

    return parser


def _validate_port(port: int, parser: argparse.ArgumentParser) -> None:
    """Validate port is in range 1-65535."""
    if port < 1 or port > 65535:
        parser.error(f"--port must be in range 1-65535, got {port}")


def _resolve_credentials(args: argparse.Namespace) -> dict[str, str]:
    """Collect credentials: --credentials-file and --credential, else the environment."""
    credentials: dict[str, str] = {}
    if args.credentials_file is not None:
        credentials.update(load_credentials(args.credentials_file))
    if args.credential:
        credentials.update(parse_credential_entries(args.credential))
    if args.credentials_file is None and not args.credential:
        credentials.update(parse_credential_entries(os.environ.get(CREDENTIALS_ENV, "").split(",")))
    return credentials


def main() -> None:
    """CLI entry point for launching basic-gate.

    Exit codes:
        0 - Normal shutdown
        1 - Invalid configuration (unreadable or malformed credentials)
        2 - Startup failure (argparse error, serve() exception)
    """
    parser = _build_parser()
    args = parser.parse_args()

    # argparse only validates type, not range
    _validate_port(args.port, parser)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        credentials = _resolve_credentials(args)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if not credentials:
        logger.warning("No credentials configured; every request will be anonymous.")
    else:
        logger.info("Loaded %d credential(s).", len(credentials))

    exempt_paths_set = None
    if args.exempt_paths:
        exempt_paths_set = set(p.strip() for p in args.exempt_paths.split(","))

    try:
        serve(
            StaticVerifier(credentials),
            host=args.host,
            port=args.port,
            require_auth=args.require_auth,
            exempt_paths=exempt_paths_set,
            log_level=args.log_level,
        )
    except Exception:
        logger.exception("Server startup failed.")
        sys.exit(2)


if __name__ == "__main__":
    main()
