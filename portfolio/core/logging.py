"""Logging setup for the portfolio contact API.

Submitter data never goes above DEBUG; provider failures and unexpected
errors are logged at ERROR from the services themselves.
"""
import logging
import sys
from portfolio.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("uvicorn", "httpx", "httpcore", "asyncio")


def setup_logging() -> None:
    """Configure root logging from LOG_LEVEL; unknown levels fall back to INFO."""
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
