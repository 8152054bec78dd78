"""
Configuration helpers for query-filter.
Supports environment variables for easy deployment configuration.
"""

import os
from typing import Any, Dict, List, Optional

from .exceptions import ConfigurationError
from .operators import OPERATOR_PREFIX
from .processor import DEFAULT_PARAMETER_NAME


def _parse_operator_list(variable: str, raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    names = [name.strip() for name in raw.split(',') if name.strip()]
    for name in names:
        if not name.startswith(OPERATOR_PREFIX):
            raise ConfigurationError(
                f"{variable} entries must start with '{OPERATOR_PREFIX}', got '{name}'"
            )
    return names


class Config:
    """
    Configuration helper that reads from environment variables.

    Environment variables:
        QUERY_FILTER_PARAMETER: Query parameter holding the filter (default: filter)
        QUERY_FILTER_ALLOW: Comma separated operators to allow on top of the defaults
        QUERY_FILTER_DENY: Comma separated operators to disable
    """

    @staticmethod
    def from_env() -> Dict[str, Any]:
        """
        Create options from environment variables.

        Returns:
            Dict of options for middleware() or process_filter()

        Raises:
            ConfigurationError: If an operator entry does not start with '$'

        Example:
            from query_filter import middleware
            from query_filter.config import Config

            handler = middleware(Config.from_env())
        """
        operators: Dict[str, bool] = {}
        for name in _parse_operator_list('QUERY_FILTER_ALLOW', os.getenv('QUERY_FILTER_ALLOW')):
            operators[name] = True
        # Deny wins when an operator is listed in both
        for name in _parse_operator_list('QUERY_FILTER_DENY', os.getenv('QUERY_FILTER_DENY')):
            operators[name] = False

        config: Dict[str, Any] = {
            "parameter_name": os.getenv("QUERY_FILTER_PARAMETER") or DEFAULT_PARAMETER_NAME
        }
        if operators:
            config["operators"] = operators

        return config

    @staticmethod
    def read_only(parameter_name: str = DEFAULT_PARAMETER_NAME) -> Dict[str, Any]:
        """
        Options without regex matching or existence checks.

        Args:
            parameter_name: Query parameter holding the filter

        Returns:
            Options dict
        """
        return {
            "parameter_name": parameter_name,
            "operators": {"$regex": False, "$exists": False}
        }

    @staticmethod
    def with_operators(*names: str, parameter_name: str = DEFAULT_PARAMETER_NAME) -> Dict[str, Any]:
        """
        Options allowing extra operators on top of the defaults.

        Args:
            names: Operators to enable, e.g. "$not", "$all"
            parameter_name: Query parameter holding the filter

        Returns:
            Options dict
        """
        operators = _parse_operator_list('operators', ','.join(names))
        return {
            "parameter_name": parameter_name,
            "operators": {name: True for name in operators}
        }
