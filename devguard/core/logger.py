"""
Logging for Dev Guardian.

Console announcements (the colored check lines) are plain prints. This
module covers the diagnostic channel underneath them:

- stderr handler with level icons and check context
- optional JSON-lines file (``--log-file``) that always records DEBUG
- error codes for the failure categories the tool knows about

Usage:
    from devguard.core.logger import setup_logger, CheckerLogger

    setup_logger("devguard", log_file=Path("devguard.log"))

    log = CheckerLogger("checkTsConfig")
    with log.operation("write", file_path=Path("tsconfig.json")):
        ...
"""

import json
import logging
import sys
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional


ERROR_CODES = {
    "FS-01": "Write rejected by filesystem",
    "FS-02": "Manifest missing",
    "FS-03": "File unreadable or not valid JSON",
    "TOOL-01": "Tool exited non-zero",
    "TOOL-02": "Tool could not be started",
    "CFG-01": "Invalid configuration file",
    "CFG-02": "Unknown check name",
}

CONTEXT_FIELDS = ('check_name', 'file_path', 'error_code', 'operation')


class ContextFilter(logging.Filter):
    """Guarantee every record has the context attributes, set or None."""

    def filter(self, record: logging.LogRecord) -> bool:
        for name in CONTEXT_FIELDS:
            if not hasattr(record, name):
                setattr(record, name, None)
        return True


class ConsoleFormatter(logging.Formatter):
    """``<icon> LEVEL [check] (file) message [CODE: meaning]``"""

    LEVEL_STYLES = {
        'DEBUG': ('🔍', '\033[36m'),
        'INFO': ('ℹ️ ', '\033[32m'),
        'WARNING': ('⚠️ ', '\033[33m'),
        'ERROR': ('❌', '\033[31m'),
        'CRITICAL': ('🚨', '\033[35m'),
    }

    def __init__(self, use_colors: bool = True, use_icons: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stderr.isatty()
        self.use_icons = use_icons

    def format(self, record: logging.LogRecord) -> str:
        icon, color = self.LEVEL_STYLES.get(record.levelname, ('', ''))
        level = f"{color}{record.levelname}\033[0m" if self.use_colors else record.levelname

        parts = [icon, level] if self.use_icons else [level]
        if record.check_name:
            parts.append(f"[{record.check_name}]")
        if record.file_path:
            parts.append(f"({record.file_path})")
        parts.append(record.getMessage())
        if record.error_code:
            parts.append(f"[{record.error_code}: {ERROR_CODES.get(record.error_code, 'Unknown error')}]")

        return ' '.join(parts)


class JSONFormatter(logging.Formatter):
    """One JSON object per line, context fields included when set."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        entry.update({
            name: getattr(record, name) for name in CONTEXT_FIELDS
            if getattr(record, name, None) is not None
        })
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logger(
    name: str = "devguard",
    log_file: Optional[Path] = None,
    level: int = logging.WARNING,
    console: bool = True,
    use_colors: bool = True,
    use_icons: bool = True
) -> logging.Logger:
    """
    Configure the package logger. Safe to call more than once.

    Args:
        name: Logger name
        log_file: JSON-lines log file; records everything down to DEBUG
        level: Console level (WARNING by default, DEBUG with --verbose)
        console: Attach the stderr handler
        use_colors: Color level names when stderr is a terminal
        use_icons: Prefix lines with level icons

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if log_file else level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.addFilter(ContextFilter())
        console_handler.setFormatter(ConsoleFormatter(use_colors, use_icons))
        logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.addFilter(ContextFilter())
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "devguard") -> logging.Logger:
    return logging.getLogger(name)


class CheckerLogger:
    """Logs on behalf of one check; every record carries the check name."""

    def __init__(self, check_name: str, logger: Optional[logging.Logger] = None):
        self.check_name = check_name
        self._logger = logger or get_logger("devguard.checks")

    def _log(
        self,
        level: int,
        message: str,
        file_path: Optional[Path] = None,
        error_code: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        self._logger.log(level, message, extra={
            'check_name': self.check_name,
            'file_path': str(file_path) if file_path else None,
            'error_code': error_code,
            'operation': operation,
        })

    def debug(self, message: str, **context):
        self._log(logging.DEBUG, message, **context)

    def info(self, message: str, **context):
        self._log(logging.INFO, message, **context)

    def warning(self, message: str, **context):
        self._log(logging.WARNING, message, **context)

    def error(self, message: str, **context):
        self._log(logging.ERROR, message, **context)

    @contextmanager
    def operation(
        self,
        name: str,
        file_path: Optional[Path] = None,
        error_code: Optional[str] = None,
    ) -> Iterator[None]:
        """
        Log start and completion of a step.

        A failing step is logged at ERROR with ``error_code`` and the
        exception is re-raised unchanged.
        """
        self.debug(f"Starting: {name}", file_path=file_path, operation=name)
        try:
            yield
        except Exception as e:
            self.error(f"Failed: {name}: {e}", file_path=file_path, operation=name, error_code=error_code)
            raise
        self.debug(f"Completed: {name}", file_path=file_path, operation=name)
