"""
Entrypoint for running the OpenWeatherMap MCP server through stdio.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .config import load_settings
from .errors import ConfigurationError
from .weather_server import create_weather_server


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="MCP server exposing OpenWeatherMap current weather and forecasts."
    )
    parser.add_argument(
        "transport",
        choices=["stdio"],
        help="MCP transport. Only 'stdio' is available.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level written to stderr (default: INFO).",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    logger = logging.getLogger(__name__)

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        logger.error("Cannot start server: %s", exc)
        sys.exit(1)

    server = create_weather_server(settings)
    logger.info("Server started with transport %s", args.transport)
    server.run(args.transport, show_banner=False)


if __name__ == "__main__":
    main()
