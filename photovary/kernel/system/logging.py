import logging
import sys
from typing import IO, Optional

ROOT_LOGGER = "photovary"

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _StderrHandler(logging.StreamHandler):
    """
    Writes to whatever sys.stderr is at emit time, so redirected or
    captured streams keep receiving records.
    """

    def __init__(self, level: int = logging.NOTSET):
        logging.Handler.__init__(self, level)

    @property
    def stream(self) -> IO[str]:  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, value: IO[str]) -> None:
        pass


def setup_logging(level: int = logging.INFO, stream: Optional[IO[str]] = None) -> logging.Logger:
    """
    Configures the ``photovary`` logger tree.

    Progress and step warnings go to stderr by default so stdout stays free
    for piping. Calling it again only adjusts the level.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    handler: logging.Handler = logging.StreamHandler(stream) if stream else _StderrHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

    return logger


def current_level() -> int:
    return logging.getLogger(ROOT_LOGGER).getEffectiveLevel()


def init_worker_logging(level: int) -> None:
    """
    Initializer for export worker processes. A spawned worker starts with an
    empty logging config, and its step warnings would be dropped otherwise.
    """
    setup_logging(level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Sub-logger of ``photovary``; module ``__name__`` values are used as is.
    """
    if name:
        if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
            return logging.getLogger(name)
        return logging.getLogger(f"{ROOT_LOGGER}.{name}")
    return logging.getLogger(ROOT_LOGGER)
