import logging
import sys

from filevault.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def resolve_level(level_name: str) -> int:
    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else logging.INFO

def configure_logging(level_name: str) -> int:
    level = resolve_level(level_name)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("filevault").setLevel(level)
    # multipart parser logs every part at DEBUG
    logging.getLogger("multipart").setLevel(max(level, logging.INFO))
    return level

LOG_LEVEL = configure_logging(settings.LOG_LEVEL)

def get_logger(name: str):
    return logging.getLogger(name)
