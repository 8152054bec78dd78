#!/usr/bin/env python3
"""
Request pipeline adapter for the filter processor.

Usage:
    handler = middleware({"operators": {"$regex": False}})
    handler(request, response, next_)

``next_`` is called with no arguments on success, or with the error as its
only argument when the filter is rejected.
"""

from typing import Any, Callable

from .log_manager import get_logger
from .processor import OptionsLike, process_filter, resolve_options

logger = get_logger('FilterMiddleware', component='processor')

Handler = Callable[[Any, Any, Callable[..., Any]], None]


def middleware(options: OptionsLike = None) -> Handler:
    """
    Build a request handler that sanitizes ``request.query``.

    Options are resolved once here, not per request.

    Args:
        options: Caller options, merged over the defaults

    Returns:
        A ``(request, response, next_)`` handler that never raises
    """
    resolved = resolve_options(options)
    name = resolved.parameter_name

    def handler(request: Any, response: Any, next_: Callable[..., Any]) -> None:
        try:
            query = getattr(request, 'query', None)
            if query is not None and name in query:
                request.query = process_filter(query, resolved)
            else:
                logger.debug(f"No {name} parameter on request, skipping")
        except Exception as e:
            next_(e)
            return

        next_()

    return handler
