"""
Exception hierarchy and FastAPI handlers.

Every failure in the scoring core is scoped to one request or one location
within a batch. Callers see a consistent JSON body:

    {"error": {"code": ..., "message": ..., "status": ..., "details": {...}}}
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ClimateRiskError(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        *,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}


class InvalidInputError(ClimateRiskError):
    """Caller sent something the core cannot score (422)."""

    def __init__(self, message: str, *, field: Optional[str] = None, **details: Any):
        d = {**details}
        if field:
            d["field"] = field
        super().__init__(
            message=message,
            status_code=422,
            error_code="INVALID_INPUT",
            details=d,
        )


def _build_error_response(
    status_code: int,
    error_code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    body: Dict[str, Any] = {
        "error": {
            "code": error_code,
            "message": message,
            "status": status_code,
        }
    }
    if details:
        body["error"]["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Register the exception handlers on the FastAPI app."""

    @app.exception_handler(ClimateRiskError)
    async def handle_climate_risk_error(request: Request, exc: ClimateRiskError):
        logger.error(
            "API Error [%s] %s: %s | details=%s",
            exc.error_code, request.url.path, exc.message, exc.details,
        )
        return _build_error_response(
            exc.status_code, exc.error_code, exc.message, exc.details,
        )
