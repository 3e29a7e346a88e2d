import sys
from datetime import datetime
from functools import partialmethod
from typing import Dict, Iterable, List, NamedTuple, Optional, TextIO
from models.enums import LogLevel, LogCategory


class Colors:
    """ANSI escape codes used by the console logger"""
    RESET = '\033[0m'
    DIM = '\033[2m'

    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'

    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_MAGENTA = '\033[95m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_WHITE = '\033[97m'


CATEGORY_COLORS: Dict[LogCategory, str] = {
    LogCategory.CONFIG: Colors.CYAN,
    LogCategory.KEYFRAME: Colors.BRIGHT_GREEN,
    LogCategory.SPRING: Colors.BRIGHT_BLUE,
    LogCategory.EASING: Colors.BLUE,
    LogCategory.ANIMATION: Colors.BRIGHT_YELLOW,
    LogCategory.CACHE: Colors.BRIGHT_CYAN,
    LogCategory.BATCH: Colors.MAGENTA,
    LogCategory.METRICS: Colors.BRIGHT_MAGENTA,
    LogCategory.ENGINE: Colors.BRIGHT_WHITE,
    LogCategory.GENERAL: Colors.WHITE,
}


class LevelStyle(NamedTuple):
    rank: int
    symbol: str
    color: str


LEVEL_STYLES: Dict[LogLevel, LevelStyle] = {
    LogLevel.DEBUG: LevelStyle(0, '·', Colors.DIM),
    LogLevel.INFO: LevelStyle(1, '✓', Colors.GREEN),
    LogLevel.WARN: LevelStyle(2, '⚠', Colors.YELLOW),
    LogLevel.ERROR: LevelStyle(3, '✗', Colors.RED),
}

CATEGORY_WIDTH = 9
DETAIL_INDENT = " " * 11   # width of "[HH:MM:SS] "


def tree_lines(details: Iterable[str], indent: str = DETAIL_INDENT, tree_color: Optional[str] = None) -> List[str]:
    """
    Render detail strings as a tree below a heading line

        ├─ first
        └─ last
    """
    details = list(details)
    last = len(details) - 1
    lines = []
    for i, detail in enumerate(details):
        branch = "└─" if i == last else "├─"
        if tree_color:
            branch = f"{tree_color}{branch}{Colors.RESET}"
        lines.append(f"{indent}{branch} {detail}")
    return lines


class Logger:
    """
    Console logger for the animation engine

    One heading line per event, structured fields rendered as a tree:

        [14:23:45] CACHE     · Evicted least recently used entry
                   └─ key: title-fade

    Args:
        min_level: Events below this level are dropped
        use_colors: Emit ANSI colors (turn off when writing to a file)
        stream: Output stream (None = sys.stdout at write time)
    """

    def __init__(self, min_level: LogLevel = LogLevel.INFO, use_colors: bool = True, stream: Optional[TextIO] = None):
        self.min_level = min_level
        self.use_colors = use_colors
        self.stream = stream

    def is_enabled_for(self, level: LogLevel) -> bool:
        return LEVEL_STYLES[level].rank >= LEVEL_STYLES[self.min_level].rank

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{Colors.RESET}" if self.use_colors else text

    def _heading(self, category: LogCategory, level: LogLevel, message: str) -> str:
        style = LEVEL_STYLES[level]
        stamp = datetime.now().strftime('[%H:%M:%S]')
        name = self._paint(category.name.ljust(CATEGORY_WIDTH), CATEGORY_COLORS.get(category, Colors.WHITE))
        return f"{stamp} {name} {self._paint(style.symbol, style.color)} {self._paint(message, style.color)}"

    def _write(self, line: str) -> None:
        print(line, file=self.stream or sys.stdout)

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[list] = None,
        **fields
    ):
        """
        Write one event

        Args:
            category: Subsystem the event belongs to
            message: Heading text
            level: Severity
            details: Free-form lines shown first in the tree
            **fields: Rendered as "name: value" tree lines, in call order

        Example:
            logger.log(LogCategory.BATCH, "Animation added", id="title-fade", level=LogLevel.DEBUG)
        """
        if not self.is_enabled_for(level):
            return

        self._write(self._heading(category, level, message))

        lines = list(details or [])
        lines.extend(f"{name}: {value}" for name, value in fields.items())

        for line in tree_lines(lines, tree_color=Colors.DIM if self.use_colors else None):
            self._write(line)

    debug = partialmethod(log, level=LogLevel.DEBUG)
    info = partialmethod(log, level=LogLevel.INFO)
    warn = partialmethod(log, level=LogLevel.WARN)
    error = partialmethod(log, level=LogLevel.ERROR)

    def for_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self, category)


class BoundLogger:
    """Logger with a fixed default category (module-level `log` objects)"""

    def __init__(self, base: Logger, category: LogCategory):
        self.base = base
        self.category = category

    def log(self, message: str, level: LogLevel = LogLevel.INFO, category: Optional[LogCategory] = None, **fields):
        self.base.log(category or self.category, message, level, **fields)

    debug = partialmethod(log, level=LogLevel.DEBUG)
    info = partialmethod(log, level=LogLevel.INFO)
    warn = partialmethod(log, level=LogLevel.WARN)
    error = partialmethod(log, level=LogLevel.ERROR)

    def is_enabled_for(self, level: LogLevel) -> bool:
        return self.base.is_enabled_for(level)

    def with_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self.base, category)


# Process-wide instance; modules bind `log = get_logger().for_category(...)` at import
_logger = Logger()


def get_logger() -> Logger:
    return _logger


def get_category_logger(category: LogCategory) -> BoundLogger:
    return _logger.for_category(category)


def configure_logger(min_level: LogLevel = LogLevel.INFO, use_colors: bool = True, stream: Optional[TextIO] = None):
    """
    Reconfigure the shared logger in place

    Existing BoundLogger objects hold a reference to the same instance and
    pick up the change immediately.
    """
    _logger.min_level = min_level
    _logger.use_colors = use_colors
    _logger.stream = stream


def set_log_level(min_level: LogLevel) -> None:
    """Change only the level threshold of the shared logger"""
    _logger.min_level = min_level
