"""Optional logfire instrumentation of the HTTP/WebSocket server."""

from __future__ import annotations

import logfire
from fastapi import FastAPI

from infra.logger import get_logger

log = get_logger(__name__)


def configure_logfire(app: FastAPI, *, enabled: bool, service_name: str = "grid-arena") -> bool:
    """
    Configure logfire and instrument the app when enabled.

    Data is only shipped when a LOGFIRE_TOKEN is present in the environment.

    Returns:
        True if instrumentation was installed
    """
    if not enabled:
        return False

    logfire.configure(
        service_name=service_name,
        send_to_logfire="if-token-present",
        console=False,
    )
    logfire.instrument_fastapi(app)
    log.info("logfire instrumentation enabled for %s", service_name)
    return True
