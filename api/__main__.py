"""Run the game server: python -m api [--host HOST] [--port PORT]."""

from __future__ import annotations

import argparse

import uvicorn

from infra.logger import configure_logging, get_logger
from infra.settings import get_settings

log = get_logger(__name__)


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Grid Arena game server")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--log-level", default=settings.log_level)
    args = parser.parse_args(argv)

    configure_logging(args.log_level, json=settings.log_json, logfile=settings.log_file)
    log.info("Server running at http://%s:%d", args.host, args.port)

    # Import late so the app is built after logging is configured.
    from api.app import app

    uvicorn.run(app, host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
