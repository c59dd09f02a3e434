"""
Logging Configuration
=====================
Attaches console (and optionally file) handlers to the 'fabricanalysis'
logger. Library modules only create child loggers with
logging.getLogger(__name__); nothing is printed until an application calls
setup_logging.

Chatty subpackages can be tuned separately, e.g. keep the contouring DEBUG
trace quiet while the rest of the package logs at DEBUG:

    setup_logging(logging.DEBUG, module_levels={"analysis.contouring": logging.INFO})
"""
import logging
import sys
from typing import Optional

LOGGER_NAME = "fabricanalysis"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def _build_handlers(log_file: Optional[str]) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    return handlers


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    module_levels: Optional[dict[str, int]] = None,
) -> logging.Logger:
    """
    Configures the package logger.

    Args:
        level: Level of the package logger and its handlers.
        log_file: Optional path; the file is truncated on every setup.
        module_levels: Per-subpackage levels keyed by the dotted path below
                       the package, e.g. {"model.io": logging.WARNING}.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Re-running setup replaces the handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(log_file):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for name, module_level in (module_levels or {}).items():
        logging.getLogger(f"{LOGGER_NAME}.{name}").setLevel(module_level)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger
