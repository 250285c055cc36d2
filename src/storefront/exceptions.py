"""Storefront error taxonomy.

Every error here extends Protean's exception hierarchy so field-level
validation raised by aggregates and commands, and the business rules raised by
the handlers, travel through the same HTTP mapping in ``storefront.api.errors``.
Each error carries a readable ``message`` and a ``context`` dict that is merged
into the JSON error body.
"""

from typing import Any

from protean.exceptions import ObjectNotFoundError, ProteanException, ValidationError

__all__ = [
    "DomainValidationError",
    "EmptyCartError",
    "InsufficientStockError",
    "NotFoundError",
    "PaymentError",
    "ValidationError",
    "error_message",
]


class NotFoundError(ObjectNotFoundError):
    """Unknown product, cart, cart item or order."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__({"_entity": [message]})
        self.message = message
        self.context = context


class DomainValidationError(ValidationError):
    """Business-rule violation with a message and response context."""

    field = "_entity"

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__({self.field: [message]})
        self.message = message
        self.context = context


class InsufficientStockError(DomainValidationError):
    field = "stock"

    def __init__(self, product_id: str, available: int, requested: int, message: str | None = None, **context: Any):
        super().__init__(
            message or "Insufficient stock",
            productId=product_id,
            available=available,
            requested=requested,
            **context,
        )
        self.product_id = product_id
        self.available = available
        self.requested = requested


class EmptyCartError(DomainValidationError):
    field = "cart"

    def __init__(self, session_id: str) -> None:
        super().__init__("Cart is empty", sessionId=session_id)
        self.session_id = session_id


class PaymentError(ProteanException):
    """The payment gateway declined the charge. Nothing was persisted."""

    def __init__(self, error: str = "Payment processing failed", **context: Any) -> None:
        super().__init__({"payment": [error]})
        self.message = error
        self.context = context


def error_message(exc: ProteanException) -> str:
    """Best human-readable message for any Protean exception."""
    message = getattr(exc, "message", None)
    if message:
        return message

    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        for field, errors in messages.items():
            if isinstance(errors, (list, tuple)) and errors:
                text = str(errors[0])
            else:
                text = str(errors)
            return text if field.startswith("_") else f"{field}: {text}"
    if messages:
        return str(messages)
    return str(exc) or type(exc).__name__
