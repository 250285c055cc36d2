"""Exception handlers that turn domain errors into JSON error bodies.

Every error response has the shape::

    {"success": false, "error": "<message>", ...context}

Status codes:
    400  validation failures, insufficient stock, empty cart, malformed bodies
    402  payment declined
    404  unknown product, cart, cart item, order or route
    500  anything else
"""

import secrets
import time
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ProteanException, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.config import get_settings
from storefront.exceptions import PaymentError, error_message
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"

AVAILABLE_ENDPOINTS = [
    "GET /",
    "GET /health",
    "GET /api",
    "GET /api/products",
    "GET /api/products/{id}",
    "POST /api/products",
    "GET /api/cart",
    "POST /api/cart",
    "PUT /api/cart/{productId}",
    "DELETE /api/cart/{productId}",
    "DELETE /api/cart",
    "POST /api/checkout",
    "GET /api/orders",
    "GET /api/orders/{id}",
    "GET /api/stats",
    "GET /api/stats/date",
]


def generate_request_id() -> str:
    """Short opaque id: random base36 chunk plus the millisecond clock."""
    prefix = "".join(secrets.choice(BASE36) for _ in range(9))
    return f"{prefix}-{_base36(int(time.time() * 1000))}"


def _base36(number: int) -> str:
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36[remainder])
    return "".join(reversed(digits)) or "0"


def status_code_for(exc: ProteanException) -> int:
    if isinstance(exc, PaymentError):
        return 402
    if isinstance(exc, ObjectNotFoundError):
        return 404
    return 400


def error_body(exc: ProteanException) -> dict:
    body = {"success": False, "error": error_message(exc)}
    context = getattr(exc, "context", None)
    if context:
        body.update(context)
    elif isinstance(exc, ValidationError) and isinstance(exc.messages, dict):
        body["details"] = exc.messages
    return jsonable_encoder(body)


async def domain_exception_handler(request: Request, exc: ProteanException) -> JSONResponse:
    status_code = status_code_for(exc)
    logger.warning(
        "request_rejected",
        status_code=status_code,
        error_type=type(exc).__name__,
        error=error_message(exc),
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=error_body(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    logger.warning("request_invalid", path=request.url.path, errors=len(errors))
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": f"{field}: {message}" if field else message,
            "details": jsonable_encoder(errors),
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={
                "success": False,
                "error": "Endpoint not found",
                "path": request.url.path,
                "method": request.method,
                "message": f"The requested endpoint {request.method} {request.url.path} does not exist",
                "suggestions": [
                    "Check the endpoint index at GET /api",
                    "Verify the HTTP method and the path spelling",
                ],
                "availableEndpoints": AVAILABLE_ENDPOINTS,
                "timestamp": datetime.now(UTC).isoformat(),
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None) or generate_request_id()
    logger.error(
        "request_failed",
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
        exc_info=exc,
    )

    content = {
        "success": False,
        "error": "Internal server error",
        "message": "An unexpected error occurred",
        "requestId": request_id,
    }
    if not get_settings().is_production:
        content["message"] = str(exc)
        content["details"] = {"type": type(exc).__name__, "path": request.url.path}
    return JSONResponse(status_code=500, content=content)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProteanException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
