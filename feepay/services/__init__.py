from feepay.services.payment_service import PaymentService
from feepay.services.tracking_service import derive_tracking_number

__all__ = ['PaymentService', 'derive_tracking_number']
