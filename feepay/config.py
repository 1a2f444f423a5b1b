import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base configuration"""
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key')

    # SwiftPay gateway
    SWIFTPAY_BACKEND_URL = os.getenv('SWIFTPAY_BACKEND_URL', 'https://swiftpay-backend-uvv9.onrender.com')
    SWIFTPAY_API_KEY = os.getenv('SWIFTPAY_API_KEY')
    SWIFTPAY_TILL_ID = os.getenv('SWIFTPAY_TILL_ID')
    SWIFTPAY_TIMEOUT = float(os.getenv('SWIFTPAY_TIMEOUT', '30'))

    # Confirmation polling
    PAYMENT_POLL_MAX_ATTEMPTS = int(os.getenv('PAYMENT_POLL_MAX_ATTEMPTS', '12'))
    PAYMENT_POLL_INTERVAL = float(os.getenv('PAYMENT_POLL_INTERVAL', '5'))

    # Application processing fee (KES)
    PROCESSING_FEE = int(os.getenv('PROCESSING_FEE', '129'))

    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SWIFTPAY_BACKEND_URL = 'https://swiftpay.test'
    SWIFTPAY_API_KEY = 'sp_test_key'
    SWIFTPAY_TILL_ID = 'till-001'
    SWIFTPAY_TIMEOUT = 5.0
    PAYMENT_POLL_MAX_ATTEMPTS = 3
    PAYMENT_POLL_INTERVAL = 0.0
    LOG_DIR = None


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
