"""
Logging Configuration
Centralized logging setup for the fee payment service
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
CONSOLE_FORMAT = '%(levelname)s - %(name)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _ensure_log_dir(log_dir: Optional[str]) -> bool:
    if not log_dir:
        return False
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        return False
    return True


def get_logger(name: str, log_dir: Optional[str] = 'logs') -> logging.Logger:
    """
    Get a configured logger instance

    Args:
        name: Logger name (typically __name__)
        log_dir: Directory for the rotating log file, None for console only

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        logger.setLevel(logging.INFO)
        logger.propagate = False

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console_handler)

        if _ensure_log_dir(log_dir):
            file_handler = RotatingFileHandler(
                os.path.join(log_dir, 'feepay.log'),
                maxBytes=10485760,  # 10MB
                backupCount=10
            )
            file_handler.setLevel(logging.INFO)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
            logger.addHandler(file_handler)

    return logger


def configure_app_logging(app):
    """
    Configure logging for the Flask application

    Module loggers under the ``feepay`` namespace share the app's level and
    error log.

    Args:
        app: Flask application instance
    """
    level = logging.DEBUG if app.debug else logging.INFO
    app.logger.setLevel(level)

    package_logger = logging.getLogger('feepay')
    package_logger.setLevel(level)
    if not package_logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        package_logger.addHandler(console_handler)

    log_dir = app.config.get('LOG_DIR')
    if _ensure_log_dir(log_dir):
        error_handler = RotatingFileHandler(
            os.path.join(log_dir, 'error.log'),
            maxBytes=10485760,
            backupCount=10
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s\n%(pathname)s:%(lineno)d',
            datefmt=DATE_FORMAT
        ))
        app.logger.addHandler(error_handler)
        package_logger.addHandler(error_handler)


class RequestLogger:
    """Middleware to log all requests"""

    def __init__(self, app=None):
        self.app = app
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """Initialize request logging"""
        log_dir = app.config.get('LOG_DIR')

        @app.before_request
        def log_request():
            from flask import request
            logger = get_logger('feepay.request', log_dir)
            logger.info(
                '%s %s - IP: %s - User-Agent: %s',
                request.method,
                request.path,
                request.remote_addr,
                request.headers.get('User-Agent', 'Unknown')
            )

        @app.after_request
        def log_response(response):
            from flask import request
            logger = get_logger('feepay.response', log_dir)
            logger.info(
                '%s %s - Status: %s - IP: %s',
                request.method,
                request.path,
                response.status_code,
                request.remote_addr
            )
            return response
