"""
Logging Configuration

Loguru sink setup, with standard logging (uvicorn, sqlalchemy)
redirected into loguru.
"""

import sys
import logging

from loguru import logger

from placement_portal.core.config import get_settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Intercept standard logging and redirect to Loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller outside the logging module
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging() -> None:
    """Configure Loguru logging. Safe to call more than once."""
    settings = get_settings()

    logger.remove()
    if settings.log_json:
        logger.add(sys.stdout, level=settings.log_level, serialize=True)
    else:
        logger.add(sys.stdout, format=CONSOLE_FORMAT, level=settings.log_level, colorize=True)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        logging.getLogger(name).handlers = [InterceptHandler()]

    # SQL echo only in debug mode
    sql_logger = logging.getLogger("sqlalchemy.engine")
    sql_logger.handlers = [InterceptHandler()]
    sql_logger.setLevel(logging.INFO if settings.debug else logging.WARNING)

    logger.info(f"Logging configured: level={settings.log_level}, json={settings.log_json}")
