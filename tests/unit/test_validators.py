"""
Unit Tests for phone and amount validation
"""

import math
from decimal import Decimal

import pytest

from feepay.errors.exceptions import InvalidAmount
from feepay.utils.validators import is_valid_phone, normalize_phone, validate_amount


class TestNormalizePhone:

    @pytest.mark.parametrize("raw, expected", [
        ("0712345678",       "254712345678"),  # local 07XX -> 2547XX
        ("0112345678",       "254112345678"),  # local 01XX
        ("254712345678",     "254712345678"),  # already canonical
        ("+254712345678",    "254712345678"),  # strip leading +
        ("+254 712 345 678", "254712345678"),  # strip spaces
        ("0712-345-678",     "254712345678"),  # strip dashes
        ("(0712) 345678",    "254712345678"),
    ])
    def test_accepted_formats(self, raw, expected):
        assert normalize_phone(raw) == expected

    @pytest.mark.parametrize("raw", [
        "",
        None,
        "712345678",        # no prefix
        "+1 415 555 0100",  # other country code
        "071234567",        # too short
        "07123456789",      # too long
        "2547123456789",    # too long with country code
        "25471234567",      # too short with country code
        "abcdefghij",
    ])
    def test_rejected_formats(self, raw):
        assert normalize_phone(raw) is None

    @pytest.mark.parametrize("digits", ["712345678", "100000000", "999999999"])
    def test_leading_zero_becomes_country_code(self, digits):
        assert normalize_phone("0" + digits) == "254" + digits

    def test_normalization_is_idempotent(self):
        once = normalize_phone("0712 345 678")
        assert normalize_phone(once) == once

    def test_numeric_input(self):
        assert normalize_phone(254712345678) == "254712345678"

    def test_is_valid_phone(self):
        assert is_valid_phone("0712345678") is True
        assert is_valid_phone("12345") is False


class TestValidateAmount:

    @pytest.mark.parametrize("raw, expected", [
        (129, 129),
        (129.0, 129),
        ("129", 129),
        (" 50 ", 50),
        (Decimal("10.50"), 10.5),
        (0.5, 0.5),
    ])
    def test_valid_amounts(self, raw, expected):
        value = validate_amount(raw)
        assert value == expected
        assert type(value) is type(expected)

    @pytest.mark.parametrize("raw", [
        0,
        -1,
        "-5",
        "abc",
        "",
        None,
        True,
        math.nan,
        math.inf,
        "Infinity",
        [129],
    ])
    def test_invalid_amounts(self, raw):
        with pytest.raises(InvalidAmount):
            validate_amount(raw)
