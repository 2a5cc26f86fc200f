"""Error response shapes and exception handlers"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def rejection_response(error: str) -> JSONResponse:
    """Business rejection, e.g. applicant age outside the accepted range"""
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": error, "timestamp": utc_timestamp()},
    )


def validation_error_response(message: str) -> JSONResponse:
    """Input that failed schema or profile validation"""
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Validation Error",
            "message": message,
            "timestamp": utc_timestamp(),
        },
    )


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return ", ".join(parts)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _format_validation_errors(exc)
    logging.warning(
        f"Request validation failed: {message}",
        extra={"request_id": getattr(request.state, "request_id", "unknown")},
    )
    return validation_error_response(message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
