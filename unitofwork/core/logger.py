import logging
from colorlog import ColoredFormatter
from unitofwork.core.settings import settings

LOGGER_NAME = "unitofwork"

LOG_FORMAT = (
    "%(log_color)s[%(asctime)s] [%(levelname)-8s] "
    "%(reset)s%(blue)s%(name)s:%(reset)s %(message)s"
)

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Configure the package logger with a colored stream handler.

    Calling it again only changes the level; the handler is attached once.
    """
    log = logging.getLogger(LOGGER_NAME)
    log.setLevel((level or settings.LOG_LEVEL).upper())
    if not any(getattr(h, "_unitofwork", False) for h in log.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S", reset=True, log_colors=LOG_COLORS))
        handler._unitofwork = True  # type: ignore[attr-defined]
        log.addHandler(handler)
    log.propagate = False
    return log


logger = setup_logging()
