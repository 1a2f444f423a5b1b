import logging

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from feepay.config import config
from feepay.errors.exceptions import AppError
from feepay.utils.logger import RequestLogger, configure_app_logging

logger = logging.getLogger(__name__)


def create_app(config_name='development'):
    """Application factory pattern"""
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])

    configure_app_logging(app)
    RequestLogger(app)

    CORS(
        app,
        resources={
            r'/api/swiftpay/*': {'origins': '*', 'methods': ['POST', 'OPTIONS']},
            r'/api/*': {'origins': '*', 'methods': ['GET', 'OPTIONS']},
        },
        allow_headers=['Content-Type', 'Authorization'],
        send_wildcard=True
    )

    # Register blueprints
    from feepay.api import register_blueprints
    register_blueprints(app)

    # CLI commands
    from feepay.cli import payments_cli
    app.cli.add_command(payments_cli)

    # Error handlers
    register_error_handlers(app)

    return app


def register_error_handlers(app):
    """Register error handlers"""

    @app.errorhandler(AppError)
    def app_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Not found', 'message': 'Resource not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'error': 'Method not allowed', 'message': 'Method not allowed'}), 405

    @app.errorhandler(Exception)
    def internal_error(error):
        if isinstance(error, HTTPException):
            return jsonify({'error': error.name, 'message': error.description}), error.code
        logger.exception('Unhandled error')
        return jsonify({'error': 'Internal server error', 'message': 'Internal server error'}), 500
