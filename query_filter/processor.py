#!/usr/bin/env python3
"""
Filter processor.

Extracts the serialized filter from a request query mapping, parses it,
checks every operator it references against the allow-list and merges the
parsed filter back into the query for downstream handlers.
"""

import json
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, Mapping, MutableMapping, Optional, Type, Union

from .exceptions import FilterParseError, FilterTypeError, InvalidFilterError, UnknownOperatorError
from .log_manager import get_logger
from .operators import DEFAULT_OPERATORS, disallowed_operators, find_operators

logger = get_logger('FilterProcessor', component='processor')

DEFAULT_PARAMETER_NAME = "filter"

ErrorFactory = Callable[[str], Exception]


@dataclass
class FilterOptions:
    """
    Resolved processing options.

    Attributes:
        parameter_name: Query key holding the filter
        operators: Map of operator name to whether it is allowed
        error_factory: Builds every raised error from a message; None uses
            the exception classes in ``query_filter.exceptions``
    """
    parameter_name: str = DEFAULT_PARAMETER_NAME
    operators: Dict[str, bool] = field(default_factory=lambda: dict(DEFAULT_OPERATORS))
    error_factory: Optional[ErrorFactory] = None

    def as_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


OptionsLike = Union[FilterOptions, Mapping[str, Any], None]


def _as_mapping(options: OptionsLike) -> Mapping[str, Any]:
    if options is None:
        return {}
    if isinstance(options, FilterOptions):
        return options.as_dict()
    return options


def resolve_options(options: OptionsLike = None) -> FilterOptions:
    """
    Merge caller options over the defaults.

    The merge is shallow: top-level keys replace the defaults, and a caller
    ``operators`` map is merged over the default allow-list so operators it
    does not mention stay allowed. ``operators=None`` keeps the defaults and
    ``operators=False`` disables every operator.

    Args:
        options: A FilterOptions, a mapping of option names, or None

    Returns:
        A new FilterOptions; the defaults are never modified

    Raises:
        TypeError: If an unknown option name is given, or ``operators`` is
            neither a mapping, None nor False
    """
    merged = FilterOptions().as_dict()
    merged.update(_as_mapping(options))
    merged["operators"] = _merge_operators(merged["operators"])

    return FilterOptions(**merged)


def _merge_operators(overrides: Any) -> Dict[str, bool]:
    operators = dict(DEFAULT_OPERATORS)
    if overrides is None:
        return operators
    if overrides is False:
        return {name: False for name in operators}
    if not isinstance(overrides, Mapping):
        raise TypeError(
            f"operators must be a mapping of operator name to bool, got {type(overrides).__name__}"
        )
    operators.update(overrides)
    return operators


def _build_error(error_factory: Optional[ErrorFactory],
                 default_class: Type[InvalidFilterError],
                 message: str, **details) -> Exception:
    if error_factory is not None:
        return error_factory(message)
    return default_class(message, **details)


def parse_filter(raw_filter: Any, parameter_name: str = DEFAULT_PARAMETER_NAME,
                 error_factory: Optional[ErrorFactory] = None) -> Mapping[str, Any]:
    """
    Decode a raw filter parameter into a mapping.

    Args:
        raw_filter: JSON string or already parsed mapping
        parameter_name: Used in error messages
        error_factory: Optional error builder

    Returns:
        The filter mapping

    Raises:
        FilterTypeError: Value is not a string or mapping, or the JSON is not an object
        FilterParseError: String is not valid JSON
    """
    if not isinstance(raw_filter, (str, Mapping)):
        raise _build_error(
            error_factory, FilterTypeError,
            f"Filter must be a string or an object, got {type(raw_filter).__name__}"
        )

    if isinstance(raw_filter, Mapping):
        return raw_filter

    try:
        parsed = json.loads(raw_filter)
    except (json.JSONDecodeError, RecursionError) as e:
        raise _build_error(
            error_factory, FilterParseError,
            f"Invalid JSON found in {parameter_name} parameter: {e}"
        ) from e

    if not isinstance(parsed, dict):
        raise _build_error(
            error_factory, FilterTypeError,
            f"Filter in {parameter_name} parameter must decode to an object, "
            f"got {type(parsed).__name__}"
        )
    return parsed


def process_filter(query: MutableMapping[str, Any], options: OptionsLike = None) -> Dict[str, Any]:
    """
    Validate the filter parameter of a query and merge it into the query.

    On success the parameter key is deleted from ``query`` itself; a failed
    call leaves ``query`` untouched.

    Args:
        query: Request query mapping
        options: Caller options, merged over the defaults

    Returns:
        New dict of the filter keys overlaid with the remaining query keys
        (query values win on collision)

    Raises:
        InvalidFilterError subclasses, or whatever ``error_factory`` builds
    """
    error_factory = _as_mapping(options).get('error_factory')
    resolved = resolve_options(options)
    name = resolved.parameter_name

    parsed = parse_filter(query.get(name), name, error_factory)

    found = find_operators(parsed)
    unwanted = disallowed_operators(found, resolved.operators)
    if unwanted:
        raise _build_error(
            error_factory, UnknownOperatorError,
            f"Unknown operators found in {name} parameter: {', '.join(unwanted)}",
            operators=unwanted, parameter_name=name
        )

    del query[name]
    logger.debug(f"Processed {name} parameter with operators {found}")

    result = dict(parsed)
    result.update(query)
    return result
