import traceback
from datetime import datetime
from typing import Callable, Optional
from flyfx.models.enums import LogLevel, LogCategory


# === ANSI COLORS ===
class Colors:
    """ANSI escape codes for colored terminal output"""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'

    # Foreground colors
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'

    # Bright foreground colors
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_MAGENTA = '\033[95m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_WHITE = '\033[97m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_GREEN = '\033[92m'


CATEGORY_COLORS = {
    LogCategory.CONFIG: Colors.CYAN,
    LogCategory.ENGINE: Colors.BRIGHT_YELLOW,
    LogCategory.SCHEDULER: Colors.BRIGHT_CYAN,
    LogCategory.TRANSITION: Colors.MAGENTA,
    LogCategory.COMPLETION: Colors.BRIGHT_GREEN,
    LogCategory.STAGE: Colors.BRIGHT_BLUE,
    LogCategory.EFFECT: Colors.BRIGHT_MAGENTA,
    LogCategory.SYSTEM: Colors.BRIGHT_WHITE,
}

LEVEL_SYMBOLS = {
    LogLevel.DEBUG: '·',
    LogLevel.INFO: '✓',
    LogLevel.WARN: '⚠',
    LogLevel.ERROR: '✗',
}

LEVEL_COLORS = {
    LogLevel.DEBUG: Colors.DIM,
    LogLevel.INFO: Colors.GREEN,
    LogLevel.WARN: Colors.YELLOW,
    LogLevel.ERROR: Colors.RED,
}

# Sink signature: (timestamp_iso, level_name, category_name, message)
LogSink = Callable[[str, str, str, str], None]


# === CORE LOGGER ===
class Logger:
    """
    Structured logger with compact output format

    Format:
    [HH:MM:SS] CATEGORY · Message
               ├─ Detail 1
               └─ Detail 2

    Example:
    [14:23:45] SCHEDULER ✓ Session completed
               ├─ session: 3
               └─ frames: 61
    """

    def __init__(self, min_level: LogLevel = LogLevel.INFO, use_colors: bool = True):
        """
        Initialize logger

        Args:
            min_level: Minimum log level to display
            use_colors: Enable ANSI color codes (disable for file output)
        """
        self.min_level = min_level
        self.use_colors = use_colors
        self._level_priority = {
            LogLevel.DEBUG: 0,
            LogLevel.INFO: 1,
            LogLevel.WARN: 2,
            LogLevel.ERROR: 3,
        }
        self._sink: Optional[LogSink] = None

    def _should_log(self, level: LogLevel) -> bool:
        """Check if message should be logged based on level"""
        return self._level_priority[level] >= self._level_priority[self.min_level]

    def _colorize(self, text: str, color: str) -> str:
        """Apply color to text if colors enabled"""
        if not self.use_colors:
            return text
        return f"{color}{text}{Colors.RESET}"

    def _format_timestamp(self) -> str:
        """Format current time as [HH:MM:SS]"""
        return datetime.now().strftime('[%H:%M:%S]')

    def _format_category(self, category: LogCategory) -> str:
        """Format category name with color"""
        color = CATEGORY_COLORS.get(category, Colors.WHITE)
        return self._colorize(category.name.ljust(10), color)

    def _format_level_symbol(self, level: LogLevel) -> str:
        """Format level symbol with color"""
        symbol = LEVEL_SYMBOLS.get(level, '·')
        return self._colorize(symbol, LEVEL_COLORS.get(level, Colors.WHITE))

    def set_sink(self, sink: Optional[LogSink]) -> None:
        """
        Attach (or detach with None) a secondary consumer of log records.

        The sink receives every record that passes the level filter, after
        it has been printed.
        """
        self._sink = sink

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[list] = None,
        exc_info: bool = False,
        **kwargs
    ):
        """
        Log a structured message

        Args:
            category: Log category (ENGINE, SCHEDULER, etc.)
            message: Main message text
            level: Log level (DEBUG, INFO, WARN, ERROR)
            details: List of detail strings to show below message
            exc_info: Append the traceback of the exception being handled
            **kwargs: Additional key-value pairs to show as details

        Example:
            logger.log(
                LogCategory.SCHEDULER,
                "Session completed",
                session=3,
                frames=61
            )
        """
        if not self._should_log(level):
            return

        timestamp = self._format_timestamp()
        cat = self._format_category(category)
        sym = self._format_level_symbol(level)
        msg = self._colorize(message, LEVEL_COLORS.get(level, Colors.WHITE))

        print(f"{timestamp} {cat} {sym} {msg}")

        all_details = list(details or [])
        for k, v in kwargs.items():
            all_details.append(f"{k}: {v}")

        if exc_info:
            trace = traceback.format_exc().rstrip()
            if trace and trace != "NoneType: None":
                all_details.extend(trace.splitlines())

        # Print details with tree structure
        if all_details:
            indent = " " * 11
            for i, d in enumerate(all_details):
                tree = "└─" if i == len(all_details) - 1 else "├─"
                print(f"{indent}{self._colorize(tree, Colors.DIM)} {d}")

        if self._sink:
            full_message = message
            if all_details:
                full_message = f"{message} ({', '.join(all_details)})"

            self._sink(
                datetime.now().isoformat(),
                level.name,
                category.name,
                full_message,
            )

    # === Level helpers ===
    def debug(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.DEBUG, **kw)
    def info(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.INFO, **kw)
    def warn(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.WARN, **kw)
    def error(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.ERROR, **kw)

    # === Contextual logger creation ===
    def for_category(self, category: LogCategory) -> 'BoundLogger':
        """Return a contextual logger bound to a specific category."""
        return BoundLogger(self, category)


class BoundLogger:
    """Logger bound to a default category, with ability to override if needed."""

    def __init__(self, base: Logger, category: LogCategory):
        self._base = base
        self._category = category

    def log(self, message: str, level: LogLevel = LogLevel.INFO, category: Optional[LogCategory] = None, **kw):
        """Allows overriding category if necessary."""
        self._base.log(category or self._category, message, level, **kw)

    # Shortcut methods
    def debug(self, message: str, **kw): self.log(message, LogLevel.DEBUG, **kw)
    def info(self, message: str, **kw): self.log(message, LogLevel.INFO, **kw)
    def warn(self, message: str, **kw): self.log(message, LogLevel.WARN, **kw)
    def error(self, message: str, **kw): self.log(message, LogLevel.ERROR, **kw)

    def with_category(self, category: LogCategory) -> 'BoundLogger':
        """Create another bound logger from this one."""
        return BoundLogger(self._base, category)


# === Global instance helpers ===
_logger = Logger()

def get_logger() -> Logger:
    return _logger

def get_category_logger(category: LogCategory) -> BoundLogger:
    """Returns a logger bound to a specific category"""
    return _logger.for_category(category)

def configure_logger(min_level: LogLevel = LogLevel.INFO, use_colors: bool = True):
    """
    Configure the logger singleton in place.

    Existing BoundLogger instances keep pointing at the same Logger, so
    module-level `log = get_logger().for_category(...)` handles pick up the
    new level and color settings.
    """
    _logger.min_level = min_level
    _logger.use_colors = use_colors
