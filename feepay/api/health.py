"""
Health Check Endpoints
"""

import os
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

health_bp = Blueprint('health', __name__)

SERVICE_NAME = 'feepay'
SERVICE_VERSION = '1.0.0'


def _now():
    return datetime.now(timezone.utc).isoformat()


@health_bp.route('/health/live', methods=['GET'])
def liveness_probe():
    """
    Liveness probe
    Returns 200 if the application is running
    """
    return jsonify({
        'status': 'alive',
        'timestamp': _now()
    }), 200


@health_bp.route('/health/ready', methods=['GET'])
def readiness_probe():
    """
    Readiness probe

    Ready when the gateway credentials are configured. The gateway itself is
    not called.
    """
    checks = {
        'swiftpay_api_key': 'ready' if current_app.config.get('SWIFTPAY_API_KEY') else 'missing',
        'swiftpay_till_id': 'ready' if current_app.config.get('SWIFTPAY_TILL_ID') else 'missing',
    }
    ready = all(value == 'ready' for value in checks.values())

    return jsonify({
        'status': 'ready' if ready else 'not_ready',
        'checks': checks,
        'timestamp': _now()
    }), 200 if ready else 503


@health_bp.route('/version', methods=['GET'])
def version():
    """
    Get application version information
    """
    return jsonify({
        'service': SERVICE_NAME,
        'version': SERVICE_VERSION,
        'environment': os.getenv('FLASK_ENV', 'production')
    }), 200
