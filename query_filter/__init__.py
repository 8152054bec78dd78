"""
query-filter
Sanitizes MongoDB-style filters passed in request query parameters.
"""

from .processor import FilterOptions, process_filter, parse_filter, resolve_options
from .middleware import middleware
from .operators import DEFAULT_OPERATORS, FilterOperator, find_operators
from .exceptions import (
    QueryFilterError,
    InvalidFilterError,
    FilterTypeError,
    FilterParseError,
    UnknownOperatorError,
    ConfigurationError
)
from .config import Config

__version__ = "1.0.0"

__all__ = [
    "process_filter",
    "parse_filter",
    "resolve_options",
    "middleware",
    "find_operators",
    "FilterOptions",
    "FilterOperator",
    "DEFAULT_OPERATORS",
    "QueryFilterError",
    "InvalidFilterError",
    "FilterTypeError",
    "FilterParseError",
    "UnknownOperatorError",
    "ConfigurationError",
    "Config"
]
