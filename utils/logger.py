import sys
from pathlib import Path
from typing import Optional

import loguru

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> <level>{level: <8}</level> <cyan>{name}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(log_level: str = "INFO", log_file: Optional[str] = None):
    """
    Routes aicommand logs to stderr and, when ``log_file`` is given, to a rotating file.

    The log file must live outside the repository being committed, since every
    change in the working tree is staged.
    """
    loguru.logger.remove()
    loguru.logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT, colorize=True)

    if log_file:
        loguru.logger.add(
            str(Path(log_file).expanduser()),
            level="DEBUG",
            format=FILE_FORMAT,
            rotation="10 MB",
            retention="7 days",
            backtrace=True,
            diagnose=False,
        )

    return loguru.logger


logger = setup_logger(log_level="WARNING")
