from backend.common.environment_constants import LOG_LEVEL
import logging
import os

ROOT_LOGGER_NAME = "deep"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_logger_initialized = False


def _setup_logger():
    """
    Configure the "deep" logger hierarchy once per process.

    A stream handler with the service format is installed on the root, and the
    level from the LOG_LEVEL environment variable (default INFO, unknown
    values fall back to INFO) is applied to the "deep" logger only, so
    SQLAlchemy and uvicorn keep their own levels.
    """
    global _logger_initialized
    if _logger_initialized:
        return

    log_level = os.environ.get(LOG_LEVEL, "INFO").upper()
    level = getattr(logging, log_level, logging.INFO)
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)
    _logger_initialized = True


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Return the service logger, or a child of it for one component.

    Args:
        name (str | None): Component name such as "errors" or "init_db".
            None returns the shared "deep" logger injected into services.

    Returns:
        logging.Logger: "deep" or "deep.<name>".
    """
    _setup_logger()
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
