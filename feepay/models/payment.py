from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union

from feepay.utils.validators import CANONICAL_PHONE_LENGTH, COUNTRY_CODE


class PaymentStatus(str, Enum):
    INITIATED = 'initiated'
    PENDING = 'pending'
    PAID = 'paid'
    FAILED = 'failed'
    ERROR = 'error'

    @property
    def is_terminal(self) -> bool:
        return self in (PaymentStatus.PAID, PaymentStatus.FAILED)


@dataclass(frozen=True)
class ChargeRequest:
    """One mobile-money charge, request scoped"""
    phone: str
    amount: Union[int, float]
    reference: str
    description: str = 'Payment'

    def __post_init__(self):
        if (
            len(self.phone) != CANONICAL_PHONE_LENGTH
            or not self.phone.isdigit()
            or not self.phone.startswith(COUNTRY_CODE)
        ):
            raise ValueError(f'ChargeRequest: phone must be canonical (254XXXXXXXXX), got {self.phone!r}')
        if isinstance(self.amount, bool) or self.amount <= 0:
            raise ValueError(f'ChargeRequest: amount must be positive, got {self.amount!r}')


@dataclass(frozen=True)
class CheckoutHandle:
    checkout_id: str
    issued_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    message: Optional[str] = None
    raw: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': True,
            'checkoutId': self.checkout_id,
            'message': self.message,
            'raw': self.raw,
        }


@dataclass(frozen=True)
class PaymentOutcome:
    """
    Result of one status probe or of a whole reconciliation loop.

    tracking_number is set only for PAID outcomes.
    """
    status: PaymentStatus
    checkout_id: str
    message: Optional[str] = None
    raw: Any = None
    tracking_number: Optional[str] = None
    attempts: int = 0

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def public_status(self) -> str:
        # Probe faults are reported to clients as still pending
        if self.status in (PaymentStatus.PAID, PaymentStatus.FAILED):
            return self.status.value
        return PaymentStatus.PENDING.value

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'status': self.public_status,
            'message': self.message,
            'raw': self.raw,
        }
        if self.status == PaymentStatus.PAID:
            data['trackingNumber'] = self.tracking_number
        return data
