#!/usr/bin/env python3
"""
Centralized logging manager for query-filter.

Loggers never write to the console. When a log directory is configured,
each component gets its own rotating log file plus a shared error log.
"""

import os
import json
import logging
import logging.handlers
from pathlib import Path
from typing import Any, Dict, Optional, Union

LOGGER_PREFIX = "query-filter"

PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEBUG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _env_flag(name: str) -> bool:
    return os.environ.get(name, '').lower() in ('1', 'true', 'yes')


class LoggingManager:
    """
    Manages loggers for all query-filter components.

    Features:
    - File-only output (no console interference)
    - Component-specific log files with rotation
    - Shared error.log for ERROR and above
    - Debug mode via QUERY_FILTER_DEBUG
    """

    def __init__(self, log_dir: Optional[Union[str, Path]] = None, debug: Optional[bool] = None):
        """
        Args:
            log_dir: Directory for log files (default: QUERY_FILTER_LOG_DIR, None disables files)
            debug: Enable DEBUG level (default: QUERY_FILTER_DEBUG)
        """
        if log_dir is None:
            log_dir = os.environ.get('QUERY_FILTER_LOG_DIR') or None
        self.log_dir = Path(log_dir) if log_dir else None
        self.debug_mode = _env_flag('QUERY_FILTER_DEBUG') if debug is None else debug
        self.loggers: Dict[str, logging.Logger] = {}

        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)

    @property
    def level(self) -> int:
        return logging.DEBUG if self.debug_mode else logging.INFO

    def get_logger(self, name: str, component: Optional[str] = None) -> logging.Logger:
        """
        Get or create a logger for a specific component.

        Args:
            name: Logger name (e.g., 'FilterProcessor')
            component: Component category ('processor', 'server', None for main)

        Returns:
            Configured logger instance
        """
        logger_key = f"{component}.{name}" if component else name

        if logger_key in self.loggers:
            return self.loggers[logger_key]

        logger = logging.getLogger(f"{LOGGER_PREFIX}.{logger_key}")
        self._attach_handlers(logger, name, component)

        self.loggers[logger_key] = logger
        return logger

    def _attach_handlers(self, logger: logging.Logger, name: str, component: Optional[str]):
        logger.setLevel(self.level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = False

        if not self.log_dir:
            logger.addHandler(logging.NullHandler())
            return

        if component:
            component_dir = self.log_dir / component
            component_dir.mkdir(parents=True, exist_ok=True)
            log_file = component_dir / f"{name.lower()}.log"
        else:
            log_file = self.log_dir / f"{name.lower()}.log"

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(logging.Formatter(
            DEBUG_FORMAT if self.debug_mode else PLAIN_FORMAT,
            datefmt=DATE_FORMAT
        ))
        logger.addHandler(file_handler)

        error_handler = logging.handlers.RotatingFileHandler(
            self.log_dir / 'error.log',
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding='utf-8'
        )
        error_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d]\n%(message)s\n',
            datefmt=DATE_FORMAT
        ))
        error_handler.setLevel(logging.ERROR)
        logger.addHandler(error_handler)

    def reconfigure(self, log_dir: Optional[Union[str, Path]] = None, debug: Optional[bool] = None):
        """Point every existing logger at a new directory and level."""
        fresh = LoggingManager(log_dir=log_dir, debug=debug)
        self.log_dir = fresh.log_dir
        self.debug_mode = fresh.debug_mode
        for key, logger in self.loggers.items():
            component, _, name = key.rpartition('.')
            self._attach_handlers(logger, name, component or None)

    def log_with_context(self, logger: logging.Logger, level: int, message: str,
                         context: Optional[Dict[str, Any]] = None):
        """
        Log a message with additional context.

        Args:
            logger: Logger instance
            level: Log level
            message: Log message
            context: Additional context dict, appended as JSON
        """
        if context:
            context_str = json.dumps(context, default=str)
            full_message = f"{message} | Context: {context_str}"
        else:
            full_message = message

        logger.log(level, full_message)


# Singleton instance
_logging_manager = None


def get_logging_manager() -> LoggingManager:
    """Get the singleton LoggingManager instance"""
    global _logging_manager
    if _logging_manager is None:
        _logging_manager = LoggingManager()
    return _logging_manager


def get_logger(name: str, component: Optional[str] = None) -> logging.Logger:
    """
    Convenience function to get a logger.

    Args:
        name: Logger name
        component: Component type ('processor', 'server', or None)

    Returns:
        Configured logger
    """
    return get_logging_manager().get_logger(name, component)


def configure_logging(log_dir: Optional[Union[str, Path]] = None,
                      debug: Optional[bool] = None) -> LoggingManager:
    """
    (Re)initialize the logging system, typically once at startup.

    Loggers created before this call are rewired to the new settings.
    """
    manager = get_logging_manager()
    manager.reconfigure(log_dir=log_dir, debug=debug)
    return manager
