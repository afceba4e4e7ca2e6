"""
Error handling service for consistent error response formatting and logging.
Every error leaves the API as {"message": ..., "error"?: ...} with an X-Request-ID header.
"""

from typing import Any, Dict, Optional
from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from app.config import settings
from app.utils.exceptions import APIException
import logging
import uuid

logger = logging.getLogger(__name__)


class ErrorHandlerService:
    """
    Service for handling and formatting errors consistently across the application.
    """

    @staticmethod
    def format_error_response(message: str, error: Optional[str] = None) -> Dict[str, Any]:
        """
        Format error response body.

        The downstream error string is only included when
        EXPOSE_ERROR_DETAILS is enabled.
        """
        response = {"message": message}
        if error and settings.expose_error_details:
            response["error"] = error
        return response

    @staticmethod
    def handle_api_exception(
        exception: APIException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle custom API exceptions with structured response.

        Args:
            exception: API exception instance
            request: Optional FastAPI request object

        Returns:
            JSON response with formatted error
        """
        request_id = ErrorHandlerService._get_request_id(request)

        log = logger.error if exception.status_code >= 500 else logger.warning
        log(
            f"API Exception [{request_id}]: {exception.error_code} - {exception.detail}",
            extra={
                "error_code": exception.error_code,
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None,
                "downstream_error": exception.error
            }
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=ErrorHandlerService.format_error_response(exception.detail, exception.error),
            headers=ErrorHandlerService._merge_headers(exception.headers, request_id)
        )

    @staticmethod
    def handle_validation_error(
        exception: RequestValidationError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle request validation errors as 400 responses.

        Missing fields produce "Missing required fields"; any other failure
        produces "Invalid request data". The per-field messages go in `error`.
        """
        request_id = ErrorHandlerService._get_request_id(request)

        field_errors = []
        missing = False
        for error in exception.errors():
            loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
            field_errors.append(f"{'.'.join(loc) or 'body'}: {error.get('msg')}")
            if error.get("type") == "missing":
                missing = True

        message = "Missing required fields" if missing else "Invalid request data"

        logger.warning(
            f"Validation Error [{request_id}]: {len(field_errors)} field errors",
            extra={
                "error_count": len(field_errors),
                "request_id": request_id,
                "path": request.url.path if request else None,
                "validation_errors": field_errors
            }
        )

        return JSONResponse(
            status_code=400,
            content=ErrorHandlerService.format_error_response(message, "; ".join(field_errors)),
            headers={"X-Request-ID": request_id}
        )

    @staticmethod
    def handle_http_exception(
        exception: HTTPException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Handle framework HTTP exceptions (unknown routes, wrong methods)."""
        request_id = ErrorHandlerService._get_request_id(request)

        logger.warning(
            f"HTTP Exception [{request_id}]: {exception.status_code} - {exception.detail}",
            extra={
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=ErrorHandlerService.format_error_response(str(exception.detail)),
            headers=ErrorHandlerService._merge_headers(exception.headers, request_id)
        )

    @staticmethod
    def handle_unexpected_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle unexpected errors with a generic 500 response.
        """
        request_id = ErrorHandlerService._get_request_id(request)

        logger.error(
            f"Unexpected Error [{request_id}]: {type(exception).__name__} - {str(exception)}",
            extra={
                "request_id": request_id,
                "path": request.url.path if request else None,
                "exception_type": type(exception).__name__
            },
            exc_info=exception
        )

        return JSONResponse(
            status_code=500,
            content=ErrorHandlerService.format_error_response("Server error", str(exception)),
            headers={"X-Request-ID": request_id}
        )

    @staticmethod
    def _get_request_id(request: Optional[Request]) -> str:
        """Reuse the id assigned by the request logging middleware if present."""
        if request is not None:
            request_id = getattr(request.state, "request_id", None)
            if request_id:
                return request_id
        return ErrorHandlerService._generate_request_id()

    @staticmethod
    def _generate_request_id() -> str:
        """Generate a unique request ID for error tracking."""
        return str(uuid.uuid4())[:8]

    @staticmethod
    def _merge_headers(headers: Optional[Dict[str, Any]], request_id: str) -> Dict[str, Any]:
        merged = dict(headers or {})
        merged["X-Request-ID"] = request_id
        return merged
