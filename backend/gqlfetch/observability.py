"""Logfire cloud observability initialization and instrumentation."""

import logging

import logfire

from gqlfetch import __version__
from gqlfetch.config import Settings

logger = logging.getLogger(__name__)


def initialize_logfire(settings: Settings) -> None:
    """
    Initialize Logfire for the GraphQL request path.

    Call once at startup, before any client is opened. Instruments:
    - HTTPX clients (the GraphQL POST)
    - Python logging (bridges to Logfire)

    Args:
        settings: Application settings containing Logfire token

    Returns:
        None. Logs success or warning messages.
    """
    if not settings.logfire_token:
        logger.warning("Logfire token not set - observability disabled")
        return

    try:
        logfire.configure(
            token=settings.logfire_token,
            service_name="gqlfetch",
            service_version=__version__,
        )

        logfire.instrument_httpx()

        root_logger = logging.getLogger()
        root_logger.addHandler(logfire.LogfireLoggingHandler())

        logger.info("Logfire cloud tracking initialized")

    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")
