import os
import sys

from loguru import logger

from groundbook.core.config import settings

LOG_FORMAT = "{time} | {level} | {message}"

# log_type -> dedicated file; everything also lands in app.log
CATEGORY_FILES = {
    "booking": "bookings.log",
    "payment": "payments.log",
    "admin": "admin.log",
}

_configured = False


def _category_filter(log_type: str):
    return lambda record: record["extra"].get("log_type") == log_type


def configure_logging(log_dir: str = settings.LOG_DIR):
    """Install the loguru sinks once per process."""
    global _configured
    if _configured:
        return

    os.makedirs(log_dir, exist_ok=True)
    logger.remove()

    logger.add(sys.stderr, level="INFO", format=LOG_FORMAT)
    logger.add(
        os.path.join(log_dir, "app.log"),
        rotation="1 week",
        retention="4 weeks",
        level="INFO",
        enqueue=True,
        format=LOG_FORMAT,
    )

    for log_type, filename in CATEGORY_FILES.items():
        logger.add(
            os.path.join(log_dir, filename),
            rotation="1 week",
            retention="4 weeks",
            level="INFO",
            enqueue=True,
            filter=_category_filter(log_type),
            format=LOG_FORMAT,
        )

    logger.add(
        os.path.join(log_dir, "errors.log"),
        rotation="1 week",
        retention="8 weeks",
        level="ERROR",
        enqueue=True,
    )
    _configured = True


def get_logger(log_type: str | None = None):
    configure_logging()
    if log_type:
        return logger.bind(log_type=log_type)
    return logger
