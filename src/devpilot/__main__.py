"""devpilot CLI entry point."""

from __future__ import annotations

import argparse

import uvicorn

from .settings import get_settings


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the devpilot command server.")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload (development only).",
    )
    return parser.parse_args(args=argv)


def main(argv: list[str] | None = None) -> int:
    """Serve the command surface for the desktop shell."""

    args = parse_args(argv)
    uvicorn.run(
        "devpilot.app:create_app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        factory=True,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
