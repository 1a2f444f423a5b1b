"""
API Blueprints Package
Registers all API blueprints
"""

from feepay.api.payments import swiftpay_bp
from feepay.api.health import health_bp

__all__ = [
    'swiftpay_bp',
    'health_bp'
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app

    Args:
        app: Flask application instance
    """

    url_base: str = '/api'

    app.register_blueprint(swiftpay_bp, url_prefix=f'{url_base}/swiftpay')
    app.register_blueprint(health_bp, url_prefix=url_base)
