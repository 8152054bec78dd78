#!/usr/bin/env python3
"""
MongoDB-style query operators.
Holds the default allow-list and the scanner that finds operator
references anywhere inside a nested filter.
"""

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

OPERATOR_PREFIX = "$"


class FilterOperator(Enum):
    """Operators allowed by default."""
    # Logical
    OR = "$or"
    AND = "$and"

    # Comparison
    NE = "$ne"
    GT = "$gt"
    LT = "$lt"
    GTE = "$gte"
    LTE = "$lte"

    # Array/List
    IN = "$in"
    NIN = "$nin"

    # Text
    REGEX = "$regex"

    # Existence
    EXISTS = "$exists"

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check if a string is a default operator."""
        return value in {op.value for op in cls}

    @classmethod
    def from_string(cls, value: str) -> Optional['FilterOperator']:
        """Convert string to operator."""
        for op in cls:
            if op.value == value:
                return op
        return None


# Copied by every merge, never mutated in place
DEFAULT_OPERATORS: Dict[str, bool] = {op.value: True for op in FilterOperator}


def is_operator(key: Any) -> bool:
    """Check if a mapping key is an operator reference."""
    return isinstance(key, str) and key.startswith(OPERATOR_PREFIX)


def find_operators(value: Any) -> List[str]:
    """
    Recursively look for operator keys in a filter.

    Args:
        value: Any filter value; dicts and lists are walked, scalars ignored

    Returns:
        Operator names in first-seen order, without duplicates
    """
    found: Dict[str, None] = {}
    _collect(value, found)
    return list(found)


def _collect(value: Any, found: Dict[str, None]) -> None:
    if isinstance(value, Mapping):
        for key, item in value.items():
            if is_operator(key):
                found.setdefault(key, None)
            if _is_container(item):
                _collect(item, found)
    elif isinstance(value, (list, tuple)):
        for item in value:
            if _is_container(item):
                _collect(item, found)


def _is_container(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def disallowed_operators(found: List[str], allowed: Mapping[str, bool]) -> List[str]:
    """Return the operators in ``found`` that are missing or disabled in ``allowed``."""
    return [op for op in found if not allowed.get(op)]
