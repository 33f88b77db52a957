"""Command-line entry point serving the Robots Intellect API."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

import uvicorn


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the Robots Intellect HTTP API.")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development).")
    parser.add_argument("--workers", type=int, default=1, help="Number of worker processes.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    uvicorn.run(
        "robots_intellect.server.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=None if args.reload else args.workers,
        log_config=None,
    )


if __name__ == "__main__":
    main()
