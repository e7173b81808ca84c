import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# SDK/http loggers that are noisy at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "anthropic", "openai")


def configure_logging(verbose: bool = False) -> None:
    """Send commit_bot logs to stderr, keeping stdout for the commit message."""
    default_level = "DEBUG" if verbose else "WARNING"
    level = (os.getenv("LOG_LEVEL") or default_level).upper()

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
