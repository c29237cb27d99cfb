# Standard library imports
import logging
import sys


_NOISY_LOGGERS = ("pymongo", "motor", "aiosmtplib", "httpx", "httpcore")


def configure_logging(level: str = "INFO") -> None:
    """
    Configure process-wide logging once at application start.

    Args:
        level: Root log level name (e.g. "INFO", "DEBUG")
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s  %(levelname)-8s  %(name)s - %(message)s",
        stream=sys.stdout,
    )
    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)
