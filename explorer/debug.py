import logging
import os
from typing import Optional


LOGGER_NAME = "explorer"
DEFAULT_LOG_FILE = "explorer_debug.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_TRUTHY = {"1", "true", "yes", "on", "debug"}

_LOGGER: Optional[logging.Logger] = None


def debug_enabled() -> bool:
    return os.environ.get("EXPLORER_DEBUG", "0").lower() in _TRUTHY


def log_path_from_env(enabled: bool) -> Optional[str]:
    """EXPLORER_LOG wins; debug mode alone writes to ./explorer_debug.log."""
    configured = os.environ.get("EXPLORER_LOG")
    if configured:
        return os.path.expanduser(configured)
    if enabled:
        return os.path.join(os.getcwd(), DEFAULT_LOG_FILE)
    return None


def _root_configured() -> bool:
    # An embedding program that set up logging keeps ownership of output.
    return bool(logging.getLogger().handlers)


def _open_handler(log_path: str, level: int, logger: logging.Logger) -> logging.Handler:
    try:
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
        failure: Optional[OSError] = None
    except OSError as exc:
        handler = logging.StreamHandler()
        failure = exc
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    if failure is not None:
        logger.warning(
            "Failed to create log file '%s': %s. Falling back to standard error.",
            log_path,
            failure,
        )
    return handler


def _configure(logger: logging.Logger) -> None:
    enabled = debug_enabled()
    level = logging.DEBUG if enabled else logging.INFO
    logger.setLevel(level)
    if logger.handlers or _root_configured():
        return

    log_path = log_path_from_env(enabled)
    if log_path:
        _open_handler(log_path, level, logger)
    else:
        logger.addHandler(logging.NullHandler())


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Child of the shared ``explorer`` logger, configured on first use."""
    global _LOGGER
    if _LOGGER is None:
        logger = logging.getLogger(LOGGER_NAME)
        _configure(logger)
        _LOGGER = logger
    return _LOGGER.getChild(name)


def reset_logger() -> None:
    """Drop the cached logger so the next call re-reads the environment."""
    global _LOGGER
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    _LOGGER = None
