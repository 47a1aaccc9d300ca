"""
Module: quickedit/utils.py

Provides console logging helpers and parsers for configuration values.
"""
import inspect, logging, os
from datetime import datetime, UTC
from colorama import init, Fore, Style

init(autoreset=True)

LEVELS = ("debug", "info", "warning", "error", "critical")

_min_level = "info"

def set_log_level(level):
    """
    Set the minimum level printed by log_message.

    Unknown levels are ignored and the current level is kept.
    """
    global _min_level
    if level and level.lower() in LEVELS:
        _min_level = level.lower()


def log_message(message, level="info", source=None):
    """
    Print a timestamped, colored log message with the caller's relative source path.

    Parameters:
    - message: The log message string.
    - level: One of "debug", "info", "warning", "error" or "critical".
    - source: Optional tag naming the component that emitted the message.
    """
    level = level.lower()
    if level in LEVELS and LEVELS.index(level) < LEVELS.index(_min_level):
        return

    frame    = inspect.currentframe().f_back
    fullpath = frame.f_code.co_filename
    cwd      = os.getcwd()
    if fullpath.startswith(cwd + os.sep):
        filename = fullpath[len(cwd)+1:]
    else:
        filename = fullpath
    lineno   = frame.f_lineno

    timestamp = f"[{datetime.now(UTC).strftime('%Y-%m-%d %H:%M:%S')}]"
    color_map = {
        "info": Fore.GREEN,
        "debug": Fore.BLUE,
        "warning": Fore.YELLOW,
        "error": Fore.RED,
        "critical": Fore.MAGENTA + Style.BRIGHT,
    }
    level_prefix = f"{level.upper():<8}"
    level_color = color_map.get(level, Fore.WHITE)

    prefix = f"[{timestamp}] {filename}({lineno}):"
    if source:
        message = f"[{source}] {message}"
    print(f"{prefix} {level_color}{level_prefix} {message}{Style.RESET_ALL}")


class ConsoleLogHandler(logging.Handler):
    """
    Forwards stdlib logging records (nextcord logs through `logging`) to log_message.
    """
    LEVEL_NAMES = {
        logging.DEBUG: "debug",
        logging.INFO: "info",
        logging.WARNING: "warning",
        logging.ERROR: "error",
        logging.CRITICAL: "critical",
    }

    def emit(self, record):
        try:
            level = self.LEVEL_NAMES.get(record.levelno, "info")
            log_message(self.format(record), level, source=record.name)
        except Exception:
            self.handleError(record)


def install_library_logging(logger_name="nextcord", level=logging.INFO):
    """
    Attach a ConsoleLogHandler to the named library logger.

    Returns the handler so callers can remove it again.
    """
    handler = ConsoleLogHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    library_logger = logging.getLogger(logger_name)
    library_logger.setLevel(level)
    library_logger.addHandler(handler)
    library_logger.propagate = False
    return handler


def parse_id_list(raw):
    """
    Parse a comma separated list of Discord snowflakes.

    Blank and non-numeric entries are skipped.
    """
    return [int(part.strip()) for part in (raw or "").split(",") if part.strip().isdigit()]


def parse_name_list(raw, default=()):
    """
    Parse a comma separated list of names, e.g. dotted package paths.

    Returns `default` as a list when nothing usable is given.
    """
    names = [part.strip() for part in (raw or "").split(",") if part.strip()]
    return names or list(default)
