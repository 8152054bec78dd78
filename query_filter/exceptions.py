"""
Exception classes for query-filter.
"""

from typing import List, Optional


class QueryFilterError(Exception):
    """Base exception for all query-filter errors."""
    pass


class InvalidFilterError(QueryFilterError):
    """Raised when a filter parameter is malformed or not allowed."""
    pass


class FilterTypeError(InvalidFilterError, TypeError):
    """Raised when the filter parameter is neither a string nor an object."""
    pass


class FilterParseError(InvalidFilterError, ValueError):
    """Raised when the filter parameter is not valid JSON."""
    pass


class UnknownOperatorError(InvalidFilterError):
    """Raised when a filter references operators outside the allow-list."""
    def __init__(self, message: str, operators: Optional[List[str]] = None,
                 parameter_name: Optional[str] = None):
        super().__init__(message)
        self.operators = list(operators or [])
        self.parameter_name = parameter_name


class ConfigurationError(QueryFilterError):
    """Raised when environment configuration is invalid."""
    pass
