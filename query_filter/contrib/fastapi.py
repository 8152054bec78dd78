"""FastAPI / Starlette integration.

Runs the filter middleware on incoming query parameters and exposes the
sanitized query to route handlers, either through ``request.state`` or as a
dependency.

Example:
    ```python
    from fastapi import Depends, FastAPI
    from query_filter.contrib.fastapi import QueryFilterMiddleware, filter_dependency

    app = FastAPI()
    app.add_middleware(QueryFilterMiddleware, options={"operators": {"$regex": False}})

    @app.get("/items")
    async def list_items(query: dict = Depends(filter_dependency())):
        ...
    ```
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Callable, Dict, Optional

from fastapi import HTTPException, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from ..log_manager import get_logger
from ..middleware import middleware
from ..processor import OptionsLike, process_filter, resolve_options

logger = get_logger('FastAPIIntegration', component='server')

STATE_ATTRIBUTE = "filter_query"


class QueryFilterMiddleware(BaseHTTPMiddleware):
    """Starlette middleware storing the sanitized query on ``request.state``.

    Requests whose filter is rejected are answered with HTTP 400 and the
    error message as ``detail``; route handlers are not called.
    """

    def __init__(self, app: Any, *, options: OptionsLike = None) -> None:
        super().__init__(app)
        self.options = resolve_options(options)
        self.handler = middleware(self.options)

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        carrier = SimpleNamespace(query=dict(request.query_params))
        errors = []

        def next_(error: Optional[Exception] = None) -> None:
            if error is not None:
                errors.append(error)

        self.handler(carrier, None, next_)

        if errors:
            logger.info(f"Rejected filter on {request.url.path}: {errors[0]}")
            return JSONResponse(status_code=400, content={"detail": str(errors[0])})

        setattr(request.state, STATE_ATTRIBUTE, carrier.query)
        return await call_next(request)


def filter_dependency(options: OptionsLike = None) -> Callable[[Request], Dict[str, Any]]:
    """Build a FastAPI dependency returning the sanitized query.

    Args:
        options: Caller options, merged over the defaults once.

    Returns:
        Dependency callable raising ``HTTPException(400)`` on rejected filters.
    """
    resolved = resolve_options(options)

    def dependency(request: Request) -> Dict[str, Any]:
        query = dict(request.query_params)
        if resolved.parameter_name not in query:
            return query
        try:
            return process_filter(query, resolved)
        except Exception as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

    return dependency
