"""
Logging package for query-filter.

File-only logging: output goes to QUERY_FILTER_LOG_DIR when it is set,
otherwise loggers carry a NullHandler and stay silent.
"""

from .manager import LoggingManager, get_logger, configure_logging, get_logging_manager

__all__ = ['LoggingManager', 'get_logger', 'configure_logging', 'get_logging_manager']
