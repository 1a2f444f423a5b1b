from feepay.models.payment import ChargeRequest, CheckoutHandle, PaymentOutcome, PaymentStatus

__all__ = ['ChargeRequest', 'CheckoutHandle', 'PaymentOutcome', 'PaymentStatus']
