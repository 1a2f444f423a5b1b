from flask import Blueprint, request, jsonify
from marshmallow import ValidationError

from feepay.errors.exceptions import AppError
from feepay.schemas.payment_schema import InitiatePaymentSchema, PaymentStatusSchema
from feepay.services.payment_service import PaymentService

swiftpay_bp = Blueprint('swiftpay', __name__)

initiate_schema = InitiatePaymentSchema()
status_schema = PaymentStatusSchema()


def _json_body():
    # Accept JSON whatever the Content-Type says
    body = request.get_json(silent=True, force=True)
    return body if isinstance(body, dict) else {}


def _first_message(messages, preferred=('phone', 'amount', 'checkoutId')):
    for field in preferred + tuple(messages):
        errors = messages.get(field)
        if errors:
            return errors[0] if isinstance(errors, list) else str(errors)
    return 'Invalid request'


@swiftpay_bp.route('/initiate', methods=['POST'])
def initiate_payment():
    """
    Send an STK push for the processing fee

    Body:
        {
            "phone": "0712345678",
            "amount": 129,
            "reference": "NYT123456",              // optional
            "description": "Application processing fee"   // optional
        }

    Response:
        200 {"success": true, "checkoutId": "...", "message": "...", "raw": {...}}
        4xx/5xx {"success": false, "message": "...", "raw": {...}}
    """
    try:
        data = initiate_schema.load(_json_body())

        handle = PaymentService.initiate_payment(
            phone=data['phone'],
            amount=data['amount'],
            reference=data.get('reference'),
            description=data.get('description')
        )

        return jsonify(handle.to_dict()), 200

    except ValidationError as e:
        message = _first_message(e.messages)
        if 'amount' in e.messages and 'phone' not in e.messages:
            message = 'Invalid amount'
        return jsonify({
            'success': False,
            'message': message,
            'errors': e.messages,
            'raw': None
        }), 400

    except AppError as e:
        return jsonify({
            'success': False,
            'message': e.message,
            'raw': getattr(e, 'raw', None)
        }), e.status_code


@swiftpay_bp.route('/status', methods=['POST'])
def payment_status():
    """
    Probe the gateway once for a checkout

    Body:
        {"checkoutId": "ws_CO_..."}

    Response:
        200 {"status": "paid" | "failed" | "pending", "message": "...",
             "raw": {...}, "trackingNumber": "NYOTA-TRK-XXXXXXXX"}
        trackingNumber is present only when status is "paid".
    """
    try:
        data = status_schema.load(_json_body())
        outcome = PaymentService.check_status(data['checkout_id'])

        return jsonify(outcome.to_dict()), 200

    except ValidationError:
        return jsonify({'message': 'Missing checkoutId'}), 400

    except AppError as e:
        return jsonify({'message': e.message}), e.status_code
