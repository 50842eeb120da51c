"""Run the API server.

Usage:
    python -m workout_tracker --port 8080
"""

import argparse
import logging

import uvicorn

from workout_tracker.core.config import settings


def main() -> None:
    """Parse flags and serve the app with uvicorn."""
    parser = argparse.ArgumentParser(description="Workout tracker API server")
    parser.add_argument(
        "--port",
        type=int,
        default=settings.api_port,
        help="Port to run the server on",
    )
    parser.add_argument("--host", default=settings.api_host, help="Bind address")
    args = parser.parse_args()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info("Starting server on port %d", args.port)

    uvicorn.run(
        "workout_tracker.main:app",
        host=args.host,
        port=args.port,
        timeout_keep_alive=60,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
