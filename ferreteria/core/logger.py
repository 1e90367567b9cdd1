import logging
from colorlog import ColoredFormatter
from ferreteria.core.settings import settings

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

COLOR_FORMAT = (
    "%(log_color)s[%(asctime)s] [%(levelname)-8s] "
    "%(reset)s%(blue)s%(name)s:%(reset)s %(message)s"
)
# prod: sin códigos ANSI, los agregadores de logs no los interpretan
PLAIN_FORMAT = "[%(asctime)s] [%(levelname)-8s] %(name)s: %(message)s"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def build_handler(colored: bool) -> logging.Handler:
    handler = logging.StreamHandler()
    if colored:
        handler.setFormatter(
            ColoredFormatter(COLOR_FORMAT, datefmt=DATE_FORMAT, reset=True, log_colors=LOG_COLORS)
        )
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt=DATE_FORMAT))
    return handler


def configure(name: str = "ferreteria", level: str | None = None) -> logging.Logger:
    """Logger with one handler; calling it again does not stack handlers."""
    log = logging.getLogger(name)
    log.setLevel((level or settings.LOG_LEVEL).upper())
    if not log.handlers:
        log.addHandler(build_handler(colored=settings.APP_ENV != "prod"))
    log.propagate = False
    return log


logger = configure()
