"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations. The adapter is
picked from ``PAYMENT_GATEWAY`` (only ``simulated`` exists); under
``PROTEAN_ENV=test`` every simulated charge succeeds.
"""

from storefront.config import get_settings
from storefront.payments.gateway.port import PaymentGateway
from storefront.payments.gateway.simulated_adapter import SimulatedGateway

_current_gateway: PaymentGateway | None = None


def build_gateway() -> PaymentGateway:
    settings = get_settings()
    if settings.payment_gateway == "simulated":
        return SimulatedGateway(
            success_rate=settings.payment_success_rate,
            always_succeed=settings.is_test,
        )
    raise ValueError(f"Unknown payment gateway: {settings.payment_gateway}")


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, building it from settings on first use."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = build_gateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
