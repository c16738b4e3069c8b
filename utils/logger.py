"""
Logger utility for the appointment calendar
Provides centralized logging functionality
"""

from datetime import datetime
import logging
import os
from pathlib import Path
import sys
from typing import Any, Optional

LOGGER_NAME = "Calendar"

# Set on the root logger once structured (JSON) logging has been configured
STRUCTURED_FLAG = "_calendar_structured_logging_configured"


def _default_log_dir() -> Path:
    configured = os.environ.get("CALENDAR_LOG_DIR")
    if configured:
        return Path(configured)
    return Path(__file__).resolve().parent.parent / "logs"


class Logger:
    """Centralized logging utility"""

    _instance: Optional["Logger"] = None
    _initialized: bool = False

    def __new__(cls) -> "Logger":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self.setup_logging()
            Logger._initialized = True

    def setup_logging(self) -> None:
        """Setup logging configuration.

        Note:
            If structured logging is already configured via
            calendar_api.logging_config.setup_logging(), this method will not
            reconfigure handlers. It will simply obtain the namespaced logger.
        """
        root = logging.getLogger()
        if getattr(root, STRUCTURED_FLAG, False):
            self.logger = logging.getLogger(LOGGER_NAME)
            return

        # Fallback basic configuration
        log_dir = _default_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d")
        log_file = log_dir / f"calendar_{timestamp}.log"

        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            handlers=[
                logging.FileHandler(log_file, encoding="utf-8"),
                logging.StreamHandler(sys.stdout),
            ],
        )

        self.logger = logging.getLogger(LOGGER_NAME)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log info message"""
        self.logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log warning message"""
        self.logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log error message"""
        self.logger.error(message, *args, **kwargs)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log debug message"""
        self.logger.debug(message, *args, **kwargs)

    def exception(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log error message with the active exception's traceback"""
        self.logger.exception(message, *args, **kwargs)

