import os
from feepay import create_app

app = create_app(os.getenv('FLASK_ENV', 'development'))


@app.shell_context_processor
def make_shell_context():
    from feepay.services import PaymentService, derive_tracking_number
    from feepay.utils import normalize_phone
    return {
        'PaymentService': PaymentService,
        'derive_tracking_number': derive_tracking_number,
        'normalize_phone': normalize_phone
    }


if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5000)
