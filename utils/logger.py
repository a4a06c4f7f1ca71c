"""
HostSpec — Logging configuration.

Provides a colour-coded console handler (optionally with a file handler)
and a single ``setup_logger`` function consumed by the command line.
Console records go to *stderr* so host listings on *stdout* stay clean.
"""

import logging
import sys
from typing import Optional

from colorama import Fore, Style, just_fix_windows_console


# ──────────────────────────────────────────────
# Colour mapping for log levels
# ──────────────────────────────────────────────
LEVEL_COLOURS = {
    logging.DEBUG:    Fore.LIGHTCYAN_EX,
    logging.INFO:     Fore.LIGHTGREEN_EX,
    logging.WARNING:  Fore.LIGHTYELLOW_EX,
    logging.ERROR:    Fore.LIGHTRED_EX,
    logging.CRITICAL: Style.BRIGHT + Fore.LIGHTRED_EX,
}
RESET = Style.RESET_ALL

LOG_FORMAT = "[%(levelname)s] %(asctime)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColouredFormatter(logging.Formatter):
    """Inject ANSI colours into log-level names."""

    def __init__(self, fmt: str, datefmt: Optional[str] = None, use_colour: bool = True) -> None:
        super().__init__(fmt, datefmt)
        self.use_colour = use_colour

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colour:
            return super().format(record)
        # Colour a copy so other handlers still see the plain level name.
        record = logging.makeLogRecord(record.__dict__)
        colour = LEVEL_COLOURS.get(record.levelno, "")
        record.levelname = f"{colour}{record.levelname}{RESET}"
        return super().format(record)


def setup_logger(
    verbose: bool = False,
    log_file: Optional[str] = None,
    use_colour: bool = True,
) -> logging.Logger:
    """Create and return the application-wide logger.

    Parameters
    ----------
    verbose : bool
        If *True* the console level is set to ``DEBUG``; otherwise ``INFO``.
    log_file : str | None
        Optional path to a log file.  When given a ``FileHandler`` is added
        with ``DEBUG`` level regardless of *verbose*.
    use_colour : bool
        Disable ANSI colours (e.g. when piping to a file).

    Returns
    -------
    logging.Logger
        Configured ``hostspec`` root logger.
    """
    logger = logging.getLogger("hostspec")

    # Avoid adding duplicate handlers when called more than once
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)

    if use_colour:
        just_fix_windows_console()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(
        ColouredFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT, use_colour=use_colour)
    )
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)

    return logger
