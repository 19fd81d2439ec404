"""Run the API with uvicorn.

Usage:
    python -m signup_api.serve [--host HOST] [--port PORT] [--reload]
"""
import argparse
import logging

import uvicorn

from signup_api.core.config import get_settings
from signup_api.core.log import configure_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the signup GraphQL API.")
    parser.add_argument("--host", default=settings.host, help="Interface to bind.")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on.")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development.")
    args = parser.parse_args(argv)

    configure_logging(settings.log_dir, settings.log_level)
    logger.info("Starting signup-api on http://%s:%s/", args.host, args.port)
    uvicorn.run(
        "signup_api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
