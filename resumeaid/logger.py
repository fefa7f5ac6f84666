import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


# Chatty client/server libraries, kept at WARNING unless we are debugging.
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "pypdf")


def configure_logging(level: Optional[str] = None) -> None:
    """Set up rich logging on stderr for the API and CLI.

    Runs once per process. The level comes from `level` or RESUMEAID_LOG_LEVEL.
    Output goes to stderr so `resumeaid sanitize` and `resumeaid wrap` can be
    piped without log lines mixed into the LaTeX.
    """
    root = logging.getLogger()
    if getattr(root, "_resumeaid_configured", False):
        return

    level_name = (level or os.getenv("RESUMEAID_LOG_LEVEL", "INFO")).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)

    for h in list(root.handlers):
        root.removeHandler(h)

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_time=True,
        show_path=False,
        markup=True,
    )
    logging.basicConfig(level=numeric_level, format="%(message)s", handlers=[handler])

    quiet = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet)

    root._resumeaid_configured = True  # type: ignore[attr-defined]


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name)
