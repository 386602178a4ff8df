"""
Tests for emails, URLs, phone numbers and credit card numbers.
"""

import pytest

import dimparser
from dimparser import CreditCardNumberValue, EmailValue, PhoneNumberValue, UrlValue
from dimparser.dimensions.credit_card_number import detect_issuer, luhn_check
from dimparser.dimensions.phone_number import canonical_digits


class TestEmail:

    def test_email_in_sentence(self):
        entity, = dimparser.parse("contact me at alice@example.com", dims=["email"])
        assert entity.body == "alice@example.com"
        assert (entity.start, entity.end) == (14, 31)
        assert entity.value == EmailValue("alice@example.com")

    def test_spelled_out_email(self):
        entity, = dimparser.parse("alice at example dot com", dims=["email"])
        assert entity.value == EmailValue("alice@example.com")


class TestUrl:

    def test_full_url(self):
        entity, = dimparser.parse("visit https://www.example.com/path?q=1", dims=["url"])
        assert entity.body == "https://www.example.com/path?q=1"
        assert entity.value == UrlValue("https://www.example.com/path?q=1", "example.com")

    def test_bare_domain(self):
        entity, = dimparser.parse("see example.org", dims=["url"])
        assert entity.value == UrlValue("example.org", "example.org")

    def test_localhost(self):
        entity, = dimparser.parse("http://localhost:8000/admin", dims=["url"])
        assert entity.value.domain == "localhost"


class TestPhoneNumber:

    def test_dashed_number(self):
        entity, = dimparser.parse("call 650-701-8887 now", dims=["phone-number"])
        assert entity.body == "650-701-8887"
        assert entity.value == PhoneNumberValue("6507018887")

    def test_country_code(self):
        entity, = dimparser.parse("+1 650-701-8887", dims=["phone-number"])
        assert entity.value == PhoneNumberValue("(+1) 6507018887")

    def test_extension(self):
        entity, = dimparser.parse("650-701-8887 ext 123", dims=["phone-number"])
        assert entity.value == PhoneNumberValue("6507018887 ext 123")

    def test_too_short(self):
        assert dimparser.parse("12-34", dims=["phone-number"]) == []

    def test_other_script_digits(self):
        assert canonical_digits("٦٥٠-٧٠١") == "650701"


class TestCreditCardNumber:

    def test_visa(self):
        entity, = dimparser.parse("4111111111111111", dims=["credit-card-number"])
        assert entity.value == CreditCardNumberValue("4111111111111111", "visa")

    def test_dashed_mastercard(self):
        entity, = dimparser.parse("5555-5555-5555-4444", dims=["credit-card-number"])
        assert entity.value == CreditCardNumberValue("5555555555554444", "mastercard")

    def test_failed_checksum_is_dropped(self):
        assert dimparser.parse("4111111111111112", dims=["credit-card-number"]) == []

    @pytest.mark.parametrize("digits, expected", [
        ("4111111111111111", True),
        ("378282246310005", True),
        ("4111111111111112", False),
        ("411111", False),
    ])
    def test_luhn(self, digits, expected):
        assert luhn_check(digits) is expected

    @pytest.mark.parametrize("digits, issuer", [
        ("4111111111111111", "visa"),
        ("378282246310005", "amex"),
        ("6011111111111117", "discover"),
        ("30569309025904", "dinerclub"),
        ("9999999999999995", None),
    ])
    def test_detect_issuer(self, digits, issuer):
        assert detect_issuer(digits) == issuer
