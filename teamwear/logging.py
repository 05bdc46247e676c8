import sys
from typing import Optional

from loguru import logger

from teamwear.config import get_config

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def _write(message: str) -> None:
    # Looked up per call so redirected stdout (tests, Streamlit) is honoured
    sys.stdout.write(message)


class AppLogger:
    """Owns the engine's single loguru sink.

    The sink is installed on first use at get_config().log_level and only
    replaced when that level changes.
    """
    _sink_id: Optional[int] = None
    _level: Optional[str] = None

    @classmethod
    def configure(cls) -> int:
        level = get_config().log_level.upper()
        if cls._sink_id is not None and level == cls._level:
            return cls._sink_id

        if cls._sink_id is None:
            # loguru ships with a default stderr handler
            logger.remove()
        else:
            logger.remove(cls._sink_id)
        cls._sink_id = logger.add(_write, level=level, format=LOG_FORMAT)
        cls._level = level
        return cls._sink_id


def get_logger(name: str = None):
    """Get the application logger, bound to `name` when given."""
    AppLogger.configure()
    if name:
        return logger.bind(name=name)
    return logger
