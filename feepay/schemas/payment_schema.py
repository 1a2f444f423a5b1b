from marshmallow import EXCLUDE, Schema, ValidationError, fields, pre_load, validate, validates

from feepay.utils.validators import is_valid_phone


class InitiatePaymentSchema(Schema):
    """Payment initiation request schema"""
    phone = fields.Str(required=True)
    amount = fields.Float(required=True, allow_nan=False, validate=validate.Range(min=0, min_inclusive=False))
    reference = fields.Str(required=False, allow_none=True)
    description = fields.Str(required=False, allow_none=True)

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def accept_phone_number_alias(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if 'phone' not in data and 'phone_number' in data:
            data['phone'] = data['phone_number']
        # 2547XXXXXXXX or a numeric reference sent as a JSON number
        for key in ('phone', 'reference'):
            if isinstance(data.get(key), int) and not isinstance(data.get(key), bool):
                data[key] = str(data[key])
        return data

    @validates('phone')
    def validate_phone(self, value, **kwargs):
        if not is_valid_phone(value):
            raise ValidationError('Invalid phone number format. Use 07XXXXXXXX or 2547XXXXXXXX.')


class PaymentStatusSchema(Schema):
    """Payment status request schema"""
    checkout_id = fields.Str(required=True, data_key='checkoutId')

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def accept_snake_case_alias(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if 'checkoutId' not in data and 'checkout_id' in data:
            data['checkoutId'] = data['checkout_id']
        if isinstance(data.get('checkoutId'), int) and not isinstance(data.get('checkoutId'), bool):
            data['checkoutId'] = str(data['checkoutId'])
        return data

    @validates('checkout_id')
    def validate_checkout_id(self, value, **kwargs):
        if not value.strip():
            raise ValidationError('Missing checkoutId')
