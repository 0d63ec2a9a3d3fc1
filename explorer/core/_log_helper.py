import logging
from typing import Any

logger = logging.getLogger("explorer")


def debug(message: str, *args: Any) -> None:
    logger.debug(message, *args)


def warn(message: str, *args: Any) -> None:
    logger.warning(message, *args)


def error(message: str, *args: Any) -> None:
    logger.error(message, *args)
