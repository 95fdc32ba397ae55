# ludoteca/utils/logging.py

import logging
from datetime import datetime

from colorama import Fore, Style

LEVEL_COLORS = {
    "DEBUG": Fore.WHITE,
    "INFO": Fore.CYAN,
    "SUCCESS": Fore.GREEN,
    "WARNING": Fore.YELLOW,
    "ERROR": Fore.RED,
    "CRITICAL": Fore.RED,
}


def timestamp() -> str:
    return f"[{datetime.now():%Y-%m-%d %H:%M:%S}]"


def _colored(level: str, msg: str) -> str:
    return LEVEL_COLORS.get(level, "") + f"{timestamp()} [{level}] {msg}" + Style.RESET_ALL


def log_info(msg: str):
    print(_colored("INFO", msg), flush=True)


def log_success(msg: str):
    print(_colored("SUCCESS", msg), flush=True)


def log_warning(msg: str):
    print(_colored("WARNING", msg), flush=True)


def log_error(msg: str):
    print(_colored("ERROR", msg), flush=True)


class ColoredFormatter(logging.Formatter):
    """Same look as the log_* helpers, for stdlib loggers (services, sqlalchemy, apscheduler)."""

    def format(self, record: logging.LogRecord) -> str:
        msg = f"{record.name}: {record.getMessage()}"
        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)
        return _colored(record.levelname, msg)


def configure_logging(level: str = "INFO") -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ColoredFormatter())

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level.upper())
