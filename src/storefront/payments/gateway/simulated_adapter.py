"""Simulated payment gateway.

No external calls are made. Outside test mode a charge succeeds with a fixed
probability; in test mode every charge succeeds so checkout is deterministic.
"""

import random
import string
import time
from datetime import UTC, datetime

from storefront.payments.gateway.port import ChargeResult, PaymentGateway

DEFAULT_SUCCESS_RATE = 0.9

_TXN_ALPHABET = string.ascii_lowercase + string.digits


class SimulatedGateway(PaymentGateway):
    def __init__(
        self,
        success_rate: float = DEFAULT_SUCCESS_RATE,
        always_succeed: bool = False,
        rng: random.Random | None = None,
    ) -> None:
        if not 0.0 <= success_rate <= 1.0:
            raise ValueError(f"success_rate must be between 0 and 1, got {success_rate}")
        self.success_rate = success_rate
        self.always_succeed = always_succeed
        self._rng = rng or random.Random()
        self.calls: list[dict] = []

    def _transaction_id(self) -> str:
        suffix = "".join(self._rng.choice(_TXN_ALPHABET) for _ in range(9))
        return f"txn_{int(time.time() * 1000)}_{suffix}"

    def charge(self, amount: float, payment_method: str) -> ChargeResult:
        self.calls.append({"method": "charge", "amount": amount, "payment_method": payment_method})

        success = self.always_succeed or self._rng.random() < self.success_rate
        return ChargeResult(
            success=success,
            amount=amount,
            payment_method=payment_method,
            processed_at=datetime.now(UTC),
            transaction_id=self._transaction_id() if success else None,
            message="Payment processed successfully" if success else "Payment processing failed",
        )
