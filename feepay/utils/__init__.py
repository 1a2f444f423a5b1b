"""
Utils Package
Utility functions and helpers
"""

from feepay.utils.logger import get_logger, configure_app_logging, RequestLogger
from feepay.utils.validators import normalize_phone, is_valid_phone, validate_amount

__all__ = [
    'get_logger',
    'configure_app_logging',
    'RequestLogger',
    'normalize_phone',
    'is_valid_phone',
    'validate_amount'
]
