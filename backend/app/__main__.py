"""
Command-line entry point for the todo backend.

Usage:
    python -m app [--host HOST] [--port PORT] [--reload]

Host and port default to BACKEND_HOST / BACKEND_PORT.
"""

import argparse
import logging

import uvicorn

from app.config import settings

logger = logging.getLogger(__name__)


def main():
    """Parse arguments and start the uvicorn server."""
    parser = argparse.ArgumentParser(description="Start the todo backend")
    parser.add_argument("--host", type=str, default=settings.backend_host, help="Host to bind to")
    parser.add_argument("--port", type=int, default=settings.backend_port, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    args = parser.parse_args()

    logger.info("Starting todo backend on %s:%d", args.host, args.port)
    uvicorn.run(
        "app.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
