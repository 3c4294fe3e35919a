"""
Colored logging for Blade View Generator.

Console output is colored by level, and INFO/DEBUG lines are additionally
colored by what they report (a written file, a step being started, a
skipped file, a section header).
"""

import logging
import sys
from typing import Iterable, Mapping, Optional


class ColoredFormatter(logging.Formatter):
    """
    Logging formatter that wraps messages in ANSI color codes.

    Colors are only emitted when stderr is a TTY and they were not disabled.
    """

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }

    SPECIAL_COLORS = {
        'success': '\033[92m',    # Bright Green
        'progress': '\033[94m',   # Bright Blue
        'highlight': '\033[96m',  # Bright Cyan
    }

    RESET = '\033[0m'
    BOLD = '\033[1m'

    SUCCESS_MARKERS = ('✓', 'created', 'generated', 'overwritten', 'complete', 'success')
    PROGRESS_MARKERS = ('→', 'analyzing', 'planning', 'generating', 'loading', 'rendering', 'reading')
    HIGHLIGHT_MARKERS = ('•', 'skipped', 'skipping', 'excluded', 'found', 'exists', 'would')

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        """
        Initialize the colored formatter.

        Args:
            fmt: Log format string (uses default if None)
            use_colors: Whether to use colors
        """
        super().__init__(fmt or "%(levelname)s: %(message)s")
        self.use_colors = use_colors and hasattr(sys.stderr, 'isatty') and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with colors."""
        formatted = super().format(record)
        if not self.use_colors:
            return formatted

        if record.levelno >= logging.WARNING:
            return f"{self.COLORS.get(record.levelname, '')}{formatted}{self.RESET}"

        prefix = self._special_prefix(record.getMessage())
        if prefix:
            return f"{prefix}{formatted}{self.RESET}"
        if record.levelno == logging.DEBUG:
            return f"{self.COLORS['DEBUG']}{formatted}{self.RESET}"
        return formatted

    def _special_prefix(self, message: str) -> str:
        lowered = message.lower()
        if any(marker in lowered for marker in self.SUCCESS_MARKERS):
            return self.SPECIAL_COLORS['success'] + self.BOLD
        if any(marker in lowered for marker in self.PROGRESS_MARKERS):
            return self.SPECIAL_COLORS['progress']
        if any(marker in lowered for marker in self.HIGHLIGHT_MARKERS):
            return self.SPECIAL_COLORS['highlight']
        if '=' in message and len(message.strip()) > 20:
            return self.BOLD + self.SPECIAL_COLORS['highlight']
        return ''


def setup_colored_logging(level: int = logging.INFO, use_colors: bool = True) -> None:
    """
    Set up colored logging on the root logger.

    Args:
        level: Logging level (default: INFO)
        use_colors: Whether to use colors (default: True)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers to avoid duplicated lines
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ColoredFormatter(use_colors=use_colors))
    console_handler.setLevel(level)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)


def get_colored_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name."""
    return logging.getLogger(name)


def log_success(logger: logging.Logger, message: str) -> None:
    logger.info(f"✓ {message}")


def log_progress(logger: logging.Logger, message: str) -> None:
    logger.info(f"→ {message}")


def log_highlight(logger: logging.Logger, message: str) -> None:
    logger.info(f"• {message}")


def log_section(logger: logging.Logger, section_name: str) -> None:
    """Log a section header."""
    separator = "=" * 60
    logger.info(separator)
    logger.info(f"  {section_name.upper()}")
    logger.info(separator)


def log_grouped_paths(logger: logging.Logger, grouped: Mapping[str, Iterable[str]]) -> None:
    """Log file paths under their category headings."""
    for category, paths in grouped.items():
        logger.info(f"{category}:")
        for path in paths:
            logger.info(f"  • {path}")

