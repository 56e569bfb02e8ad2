"""
Hybrid logging: colored console output plus a full log file per run
"""

import logging
import sys
import traceback
from contextlib import suppress
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

LOG_FORMAT = '[%(asctime)s] [%(levelname)s] [%(class_name)s] %(message)s'


class ColoredFormatter(logging.Formatter):
    """Bracketed '[time] [level] [class] message' lines, ANSI colored on terminals"""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[94m',      # Blue
        logging.INFO: '\033[92m',       # Green
        logging.WARNING: '\033[93m',    # Yellow
        logging.ERROR: '\033[91m',      # Red
        logging.CRITICAL: '\033[95m',   # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = False):
        super().__init__(LOG_FORMAT)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        # Records from plain logging calls have no class column
        if not hasattr(record, 'class_name'):
            record.class_name = 'Main'

        line = super().format(record)
        if not self.use_colors:
            return line
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        return f"{color}{line}{self.RESET}"


class ClassLogger:
    """
    Named view onto the shared main logger.

    Every component gets its own ClassLogger so log lines carry the component
    name and each component can be made more or less verbose on its own.
    """

    def __init__(self, main_logger: logging.Logger, class_name: str, level: int):
        self.main_logger = main_logger
        self.class_name = class_name
        self.level = level

    def is_enabled_for(self, level: int) -> bool:
        return level >= self.level

    def create_class_logger(self, class_name: str, level: Optional[int] = None) -> 'ClassLogger':
        """
        Logger for a sub-component, writing through the same handlers.

        Args:
            class_name: Name shown in the [class] column
            level: Minimum level (defaults to this logger's level)
        """
        return ClassLogger(self.main_logger, class_name, self.level if level is None else level)

    def debug(self, message: str) -> None:
        self._emit(logging.DEBUG, message)

    def info(self, message: str) -> None:
        self._emit(logging.INFO, message)

    def warning(self, message: str) -> None:
        self._emit(logging.WARNING, message)

    def error(self, message: str, exception: Optional[BaseException] = None) -> None:
        """
        Log an error. With an exception, the message gains its type and the
        innermost frame, the traceback is attached, and handlers are flushed.
        """
        if exception is None:
            self._emit(logging.ERROR, message)
            return

        frames = traceback.extract_tb(exception.__traceback__)
        where = f"{frames[-1].filename}:{frames[-1].lineno}" if frames else "unknown"
        exc_info = (type(exception), exception, exception.__traceback__)
        self._emit(logging.ERROR, f"{message} | Type: {type(exception).__name__} | At: {where}", exc_info)
        self.flush()

    def critical(self, message: str) -> None:
        self._emit(logging.CRITICAL, message)
        self.flush()

    def flush(self) -> None:
        """Push buffered output of every handler to its destination"""
        for handler in self.main_logger.handlers:
            with suppress(OSError, ValueError):
                handler.flush()

    def _emit(self, level: int, message: str, exc_info=None) -> None:
        if not self.is_enabled_for(level):
            return
        record = self.main_logger.makeRecord(
            self.main_logger.name, level, "", 0, message, (), exc_info
        )
        record.class_name = self.class_name
        self.main_logger.handle(record)


class HybridLogger:
    """
    Factory for ClassLoggers sharing one console handler and one log file.

    The file always receives everything the class loggers let through. The
    console can be raised to a higher level (or disabled) so log lines do not
    bury the tutorial panel printed on the same terminal.

    Usage:
        main_logger = HybridLogger("OrbitalTutorial", console_level=logging.WARNING)
        controller_logger = main_logger.get_class_logger("TutorialController")
        ...
        main_logger.cleanup()
    """

    def __init__(self,
                 name: str = "app",
                 log_dir: str = "logs",
                 console: bool = True,
                 console_level: int = logging.DEBUG):
        """
        Args:
            name: Logger name, also the log file prefix
            log_dir: Directory for log files (created if missing)
            console: Attach a colored stdout handler
            console_level: Minimum level shown on the console
        """
        self.name = name
        self.log_dir = Path(log_dir)
        self.console = console
        self.console_level = console_level
        self.log_path: Optional[Path] = None
        self.main_logger: Optional[logging.Logger] = None
        self.class_loggers: Dict[str, ClassLogger] = {}
        self._setup_main_logger()

    def _setup_main_logger(self) -> None:
        self.log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime('%Y-%m-%d_%H-%M-%S')
        self.log_path = self.log_dir / f"{self.name}_{timestamp}.log"

        self.main_logger = logging.getLogger(self.name)
        self.main_logger.setLevel(logging.DEBUG)
        self.main_logger.propagate = False
        # A previous instance with the same name may still own handlers
        self.main_logger.handlers.clear()

        if self.console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(self.console_level)
            console_handler.setFormatter(ColoredFormatter(use_colors=True))
            self.main_logger.addHandler(console_handler)

        file_handler = logging.FileHandler(self.log_path, encoding="utf-8")
        file_handler.setFormatter(ColoredFormatter(use_colors=False))
        self.main_logger.addHandler(file_handler)

    def get_class_logger(self, class_name: str, level: int = logging.INFO) -> ClassLogger:
        """
        Logger for one component; repeated calls return the same instance.

        Args:
            class_name: Name shown in the [class] column
            level: Minimum level (logging.DEBUG ... logging.CRITICAL)
        """
        if class_name not in self.class_loggers:
            self.class_loggers[class_name] = ClassLogger(self.main_logger, class_name, level)
        return self.class_loggers[class_name]

    def get_main_logger(self, level: int = logging.INFO) -> ClassLogger:
        return self.get_class_logger("Main", level)

    def cleanup(self) -> None:
        """Flush and close all handlers"""
        if not self.main_logger:
            return
        for handler in self.main_logger.handlers:
            with suppress(OSError, ValueError):
                handler.flush()
                handler.close()
        self.main_logger.handlers.clear()

    def __enter__(self) -> ClassLogger:
        return self.get_main_logger()

    def __exit__(self, exc_type, exc_value, tb) -> None:
        self.cleanup()
