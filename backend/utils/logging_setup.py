# backend/utils/logging_setup.py
import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once, at application startup.

    Logs go to stderr, where uvicorn and container runtimes pick them up.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    logging.getLogger(__name__).debug("Logging initialized with level %s", level)
