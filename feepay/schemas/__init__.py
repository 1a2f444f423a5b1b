"""
Schemas Package
Marshmallow schemas for request validation
"""

from feepay.schemas.payment_schema import (
    InitiatePaymentSchema,
    PaymentStatusSchema
)

__all__ = [
    'InitiatePaymentSchema',
    'PaymentStatusSchema'
]
