#!/usr/bin/env python3
"""
FastAPI server for query-filter.
Lets other services check and normalize filters over HTTP.

This server:
1. Reads its options from the environment (see query_filter.config)
2. Sanitizes the filter query parameter of GET /api/filter
3. Validates filters posted as JSON bodies
4. Reports the effective operator allow-list
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, Union

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from query_filter import __version__, process_filter, resolve_options
from query_filter.config import Config
from query_filter.contrib.fastapi import QueryFilterMiddleware, STATE_ATTRIBUTE
from query_filter.log_manager import get_logger
from query_filter.processor import OptionsLike

logger = get_logger('FilterServer', component='server')


# ==============================================================================
# Pydantic Models for Request/Response
# ==============================================================================

class FilterValidateRequest(BaseModel):
    """Request model for validating a filter"""
    filter: Union[str, Dict[str, Any]]
    query: Dict[str, Any] = Field(default_factory=dict)

class FilterValidateResponse(BaseModel):
    """Response model for a validated filter"""
    valid: bool = True
    query: Dict[str, Any]


# ==============================================================================
# FastAPI Application
# ==============================================================================

def create_app(options: OptionsLike = None) -> FastAPI:
    """
    Build the application.

    Args:
        options: Filter options (default: Config.from_env())
    """
    resolved = resolve_options(Config.from_env() if options is None else options)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        enabled = sorted(op for op, allowed in resolved.operators.items() if allowed)
        logger.info(f"Filter server ready: parameter={resolved.parameter_name} operators={enabled}")
        yield
        logger.info("Filter server shutdown complete")

    app = FastAPI(
        title="Query Filter API",
        description="Validates MongoDB-style filters passed as query parameters",
        version=__version__,
        lifespan=lifespan
    )
    app.state.filter_options = resolved
    app.add_middleware(QueryFilterMiddleware, options=resolved)

    # ==========================================================================
    # Health & Status Endpoints
    # ==========================================================================

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "version": __version__
        }

    @app.get("/api/operators")
    async def get_operators():
        """Report the effective operator allow-list"""
        return {
            "parameter_name": resolved.parameter_name,
            "operators": sorted(op for op, allowed in resolved.operators.items() if allowed),
            "disabled": sorted(op for op, allowed in resolved.operators.items() if not allowed)
        }

    # ==========================================================================
    # Filter Endpoints
    # ==========================================================================

    @app.get("/api/filter")
    async def get_filter(request: Request):
        """Return the sanitized query of this request"""
        return getattr(request.state, STATE_ATTRIBUTE)

    @app.post("/api/filter/validate", response_model=FilterValidateResponse)
    async def validate_filter(body: FilterValidateRequest):
        """Validate a filter and merge it into the given query"""
        query = dict(body.query)
        query[resolved.parameter_name] = body.filter

        try:
            merged = process_filter(query, resolved)
        except Exception as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        return FilterValidateResponse(query=merged)

    return app


app = create_app()


# ==============================================================================
# Development Helpers
# ==============================================================================

if __name__ == "__main__":
    import uvicorn

    # Development server with auto-reload
    uvicorn.run(
        "filter_server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
