class AppError(Exception):
    status_code = 500
    error = "Application error"

    def __init__(self, message, status_code=None):
        super().__init__(message)
        if status_code:
            self.status_code = status_code
        self.message = message

    def to_dict(self):
        return {'success': False, 'error': self.error, 'message': self.message}


class InvalidInput(AppError):
    status_code = 400
    error = "Invalid input"


class InvalidPhone(InvalidInput):
    error = "Invalid phone number"


class InvalidAmount(InvalidInput):
    error = "Invalid amount"


class MissingCheckoutId(InvalidInput):
    error = "Missing checkoutId"


class ServiceMisconfigured(AppError):
    status_code = 500
    error = "Service misconfigured"


class GatewayRejected(AppError):
    status_code = 502
    error = "Gateway rejected"

    def __init__(self, message, raw=None, status_code=None):
        super().__init__(message, status_code=status_code)
        self.raw = raw

    def to_dict(self):
        data = super().to_dict()
        data['raw'] = self.raw
        return data
