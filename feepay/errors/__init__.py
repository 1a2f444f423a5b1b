from feepay.errors.exceptions import (
    AppError,
    InvalidInput,
    InvalidPhone,
    InvalidAmount,
    MissingCheckoutId,
    ServiceMisconfigured,
    GatewayRejected,
)

__all__ = [
    'AppError',
    'InvalidInput',
    'InvalidPhone',
    'InvalidAmount',
    'MissingCheckoutId',
    'ServiceMisconfigured',
    'GatewayRejected',
]
