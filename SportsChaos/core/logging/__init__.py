"""
Logging setup for the SportsChaos client.

Every module logs through the standard library with
``logging.getLogger(__name__)``; this package only decides where those
records end up (console, rotating file) and at which level.

Usage:
    from SportsChaos.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Client started")

Configuration:
    from SportsChaos.core.logging import configure_logging, LogConfig

    config = LogConfig(level="DEBUG", log_dir="./logs", file_output=False)
    configure_logging(config)
"""

import logging
import logging.handlers
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union


@dataclass
class LogConfig:
    """
    Configuration for the logging system.

    Attributes:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files
        console_output: Whether to output to console
        file_output: Whether to output to file
        max_bytes: Maximum size of log file before rotation (bytes)
        backup_count: Number of backup files to keep
        format_string: Custom format string for log messages
        date_format: Custom date format string
        component_levels: Dict mapping logger names to log levels
    """
    level: str = "INFO"
    log_dir: str = "./logs"
    console_output: bool = True
    file_output: bool = True
    max_bytes: int = 5 * 1024 * 1024  # 5MB
    backup_count: int = 3
    format_string: Optional[str] = None
    date_format: str = "%Y-%m-%d %H:%M:%S"
    component_levels: Dict[str, str] = field(default_factory=dict)


class ColoredFormatter(logging.Formatter):
    """
    Formatter that adds color to console output.
    """

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
        'RESET': '\033[0m'
    }

    def __init__(self, fmt: str, datefmt: str = None, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors and sys.platform != 'win32'

    def format(self, record: logging.LogRecord) -> str:
        if self.use_colors and record.levelname in self.COLORS:
            # Format a copy so file handlers sharing the record stay uncolored
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.COLORS['RESET']}"
        return super().format(record)


def get_default_format() -> str:
    """Get the default log format string."""
    return "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_detailed_format() -> str:
    """Get a detailed log format string with more context."""
    return (
        "%(asctime)s - %(name)s - %(levelname)s - "
        "[%(filename)s:%(lineno)d - %(funcName)s] - %(message)s"
    )


class LoggingManager:
    """
    Centralized logging manager.

    Owns the handlers it installs on the root logger so that a second
    ``configure`` call replaces them instead of stacking duplicates.
    """

    def __init__(self):
        self._config: Optional[LogConfig] = None
        self._handlers: List[logging.Handler] = []

    @property
    def config(self) -> Optional[LogConfig]:
        return self._config

    def configure(self, config: LogConfig) -> None:
        """
        Configure the logging system.

        Args:
            config: Logging configuration
        """
        self._config = config
        level = getattr(logging, config.level.upper())

        if config.file_output:
            Path(config.log_dir).mkdir(parents=True, exist_ok=True)

        root_logger = logging.getLogger()
        root_logger.setLevel(level)

        for handler in self._handlers:
            root_logger.removeHandler(handler)
            handler.close()
        self._handlers = []

        if config.console_output:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(level)
            fmt = config.format_string or get_default_format()
            console_handler.setFormatter(ColoredFormatter(fmt, config.date_format))
            self.add_handler(console_handler)

        if config.file_output:
            log_file = os.path.join(config.log_dir, "sportschaos.log")
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=config.max_bytes,
                backupCount=config.backup_count,
                encoding='utf-8'
            )
            file_handler.setLevel(level)
            fmt = config.format_string or get_detailed_format()
            file_handler.setFormatter(logging.Formatter(fmt, config.date_format))
            self.add_handler(file_handler)

        for component, component_level in config.component_levels.items():
            logging.getLogger(component).setLevel(getattr(logging, component_level.upper()))

        logging.getLogger(__name__).debug("Logging configured with level: %s", config.level)

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(name)

    def set_level(self, level: Union[str, int]) -> None:
        """
        Set the global log level.

        Args:
            level: Log level (string or logging constant)
        """
        if isinstance(level, str):
            level = getattr(logging, level.upper())

        logging.getLogger().setLevel(level)
        for handler in self._handlers:
            handler.setLevel(level)

    def add_handler(self, handler: logging.Handler) -> None:
        logging.getLogger().addHandler(handler)
        self._handlers.append(handler)

    @property
    def handlers(self) -> List[logging.Handler]:
        return list(self._handlers)


_logging_manager = LoggingManager()


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return _logging_manager.get_logger(name)


def configure_logging(config: LogConfig) -> None:
    """Configure the logging system."""
    _logging_manager.configure(config)


def get_logging_manager() -> LoggingManager:
    """Get the global logging manager instance."""
    return _logging_manager


def create_development_config() -> LogConfig:
    return LogConfig(
        level="DEBUG",
        log_dir="./logs/dev",
        console_output=True,
        file_output=True,
        format_string=get_detailed_format(),
        component_levels={
            "aiohttp": "WARNING",
            "asyncio": "WARNING",
        }
    )


def create_production_config() -> LogConfig:
    return LogConfig(
        level="WARNING",
        log_dir="./logs",
        console_output=False,
        file_output=True,
        max_bytes=10 * 1024 * 1024,
        backup_count=5,
        format_string=get_detailed_format(),
        component_levels={
            "aiohttp": "ERROR",
        }
    )


def create_testing_config() -> LogConfig:
    return LogConfig(
        level="DEBUG",
        log_dir="./logs/test",
        console_output=True,
        file_output=False,
        format_string="%(levelname)s - %(name)s - %(message)s",
    )


def auto_configure(env: Optional[str] = None) -> LogConfig:
    """
    Configure logging from an environment name.

    Args:
        env: Environment name (development, production, testing).
             If None, read from SPORTSCHAOS_ENV, defaulting to production
             so an interactive session does not print debug lines.

    Returns:
        The configuration that was applied
    """
    if env is None:
        env = os.environ.get("SPORTSCHAOS_ENV", "production").lower()

    configs = {
        "development": create_development_config,
        "dev": create_development_config,
        "production": create_production_config,
        "prod": create_production_config,
        "testing": create_testing_config,
        "test": create_testing_config,
    }

    config = configs.get(env, create_production_config)()
    configure_logging(config)
    get_logger(__name__).info("Logging auto-configured for environment: %s", env)
    return config


__all__ = [
    'LogConfig',
    'LoggingManager',
    'ColoredFormatter',
    'get_logger',
    'configure_logging',
    'get_logging_manager',
    'create_development_config',
    'create_production_config',
    'create_testing_config',
    'auto_configure',
    'get_default_format',
    'get_detailed_format',
]
