"""
Logging configuration for the application.

Modules log through `logging.getLogger(__name__)`; this only wires the root
handler once at startup and quiets chatty third-party loggers.
"""

import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for logger_name in ("uvicorn", "uvicorn.error", "fastapi", "resume_tailor"):
        logging.getLogger(logger_name).setLevel(numeric_level)

    if level.upper() != "DEBUG":
        logging.getLogger("LiteLLM").setLevel(logging.WARNING)
        logging.getLogger("litellm").setLevel(logging.WARNING)
        logging.getLogger("httpx").setLevel(logging.WARNING)
