"""Error kinds raised by the storefront and their HTTP rendering.

Every failure response uses the same envelope as successful ones:
``{"success": false, "message": ..., "error": ...}``.
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class StorefrontError(Exception):
    status_code = 500

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error = error

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, "message": self.message}
        if self.error:
            body["error"] = self.error
        return body


class ValidationError(StorefrontError):
    status_code = 400


class EmptyCartError(StorefrontError):
    status_code = 400

    def __init__(self, message: str = "Cart is empty. Cannot proceed with checkout.", error: Optional[str] = None):
        super().__init__(message, error)


class AuthenticationError(StorefrontError):
    status_code = 401


class AuthorizationError(StorefrontError):
    status_code = 403


class NotFoundError(StorefrontError):
    status_code = 404


class PersistenceError(StorefrontError):
    status_code = 500


class NotificationDispatchFailure(StorefrontError):
    """Raised inside the notification path only; never reaches a client."""


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request failed", path=request.url.path, message=exc.message, error=exc.error)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    detail = f"{location}: {first.get('msg')}" if location else str(first.get("msg", "Invalid request"))
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Invalid request", "error": detail},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
