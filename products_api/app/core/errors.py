"""
Error types and exception handlers for the Products API.

Every failure the API reports is an instance of ``ProductsAPIError``.
Handlers raise these exceptions at the point of detection and a single
exception handler renders them as the JSON error envelope::

    {"error": "...", "message": "...", "details": [...]}

``details`` is only present for validation failures.

Exception hierarchy::

    ProductsAPIError
    ├── AuthenticationMissing   (401)
    ├── AuthenticationInvalid   (403)
    ├── ValidationFailed        (400)
    ├── MalformedIdentifier     (400)
    ├── MalformedBody           (400)
    ├── ProductNotFound         (404)
    ├── RouteNotFound           (404)
    └── InternalError           (500)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ProductsAPIError(Exception):
    """Base exception for all API errors.

    Attributes:
        status_code: HTTP status returned to the client
        error: Short error title (the ``error`` field of the body)
        message: Human-readable explanation
        details: Optional list of individual problems
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_error = "Internal server error"
    default_message = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        error: Optional[str] = None,
        details: Optional[List[str]] = None,
    ):
        self.message = message or self.default_message
        self.error = error or self.default_error
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        body: Dict[str, Any] = {"error": self.error, "message": self.message}
        if self.details is not None:
            body["details"] = list(self.details)
        return body


class AuthenticationMissing(ProductsAPIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_error = "Authentication required"
    default_message = "Please provide an API key in the x-api-key header"


class AuthenticationInvalid(ProductsAPIError):
    status_code = status.HTTP_403_FORBIDDEN
    default_error = "Invalid API key"
    default_message = "The provided API key is not valid"


class ValidationFailed(ProductsAPIError):
    """Raised when a product payload breaks one or more field rules."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_error = "Validation failed"
    default_message = "The product payload is invalid"

    def __init__(self, details: List[str], message: Optional[str] = None):
        super().__init__(message=message, details=details)


class MalformedIdentifier(ProductsAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_error = "Invalid product ID"
    default_message = "Product ID must be a valid number"


class MalformedBody(ProductsAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_error = "Invalid JSON body"
    default_message = "Request body must be valid JSON"


class ProductNotFound(ProductsAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_error = "Product not found"

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(message=f"No product found with ID {product_id}")


class RouteNotFound(ProductsAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_error = "Route not found"

    def __init__(self, method: str, path: str):
        super().__init__(message=f"Cannot {method} {path}")


class InternalError(ProductsAPIError):
    """Unexpected failure inside a handler; carries the cause's message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_error = "Internal server error"


def _render(exc: ProductsAPIError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def add_exception_handlers(app: FastAPI) -> None:
    """Register the JSON error envelope handlers on ``app``."""

    @app.exception_handler(ProductsAPIError)
    async def products_api_error_handler(request: Request, exc: ProductsAPIError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _render(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        for error in errors:
            if error.get("type") == "json_invalid":
                reason = (error.get("ctx") or {}).get("error") or error.get("msg")
                return _render(MalformedBody(message=str(reason)))
        details = [
            f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
            for error in errors
        ]
        return _render(ValidationFailed(details))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths and unsupported methods on known paths both fall
        # through to the route-not-found body.
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return _render(RouteNotFound(request.method, request.url.path))
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail), "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _render(ProductsAPIError())
