"""Payment gateway port (abstract interface).

Checkout charges the cart total through whatever adapter ``get_gateway()``
returns, without knowing which one it is.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ChargeResult:
    """Result of a payment charge attempt."""

    success: bool
    amount: float
    payment_method: str
    processed_at: datetime
    transaction_id: str | None = None
    message: str = ""

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "transactionId": self.transaction_id,
            "amount": self.amount,
            "paymentMethod": self.payment_method,
            "processedAt": self.processed_at.isoformat(),
            "message": self.message,
        }


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def charge(self, amount: float, payment_method: str) -> ChargeResult:
        """Charge ``amount`` using ``payment_method``."""
        ...
