import logging

from strategia.core.config import settings

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def setup_logging() -> logging.Logger:
    logger = logging.getLogger("strategia")

    # Evita handlers duplicados si se llama más de una vez
    if logger.handlers:
        return logger

    logger.setLevel(settings.LOG_LEVEL.upper())

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console_handler)

    return logger
