from decimal import Decimal

import pytest
from pydantic import BaseModel, ValidationError

from components.core.validation import (
    CurrencyAmount,
    format_currency,
    get_password_strength,
    parse_currency_input,
    validate_amount,
    validate_email,
    validate_name,
    validate_paid_amount,
    validate_password,
    validate_password_match,
    validate_spent_amount,
)


class TestParseCurrencyInput:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1,234.5", Decimal("1234.50")),
            ("$500", Decimal("500.00")),
            (" $ 2,000.005 ", Decimal("2000.01")),
            (12.345, Decimal("12.35")),
            (7, Decimal("7.00")),
            ("", Decimal("0.00")),
            (None, Decimal("0.00")),
        ],
    )
    def test_parses(self, raw, expected):
        assert parse_currency_input(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "12a", "1.2.3", "nan"])
    def test_rejects_text(self, raw):
        with pytest.raises(ValueError):
            parse_currency_input(raw)

    def test_pydantic_type_accepts_strings_and_rejects_garbage(self):
        class Form(BaseModel):
            amount: CurrencyAmount

        assert Form(amount="$1,000").amount == Decimal("1000.00")
        with pytest.raises(ValidationError):
            Form(amount="lots")


class TestValidateAmount:
    def test_within_bounds(self):
        assert validate_amount("500", 0, 1000).is_valid

    def test_out_of_range_is_an_error_not_clamped(self):
        result = validate_amount(1500, 0, 1000, field_name="Housing")
        assert not result.is_valid
        assert result.error == "Housing cannot exceed $1,000.00"

        result = validate_amount(-1, 0, 1000)
        assert not result.is_valid
        assert "at least" in result.error

    def test_required(self):
        result = validate_amount(None, required=True, field_name="Mahr amount")
        assert result.error == "Mahr amount is required"

    def test_paid_cannot_exceed_total(self):
        assert validate_paid_amount(100, 100).is_valid
        result = validate_paid_amount(150, 100)
        assert not result.is_valid
        assert "$150.00" in result.error

    def test_overspending_is_a_warning(self):
        result = validate_spent_amount(120, 100)
        assert result.is_valid
        assert result.error == "Over budget by $20.00"


def test_format_currency():
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(-20) == "-$20.00"
    assert format_currency(None) == ""


def test_validate_email():
    assert validate_email("amina@example.com")
    assert not validate_email("amina@example")
    assert not validate_email("")


def test_validate_password_rules():
    assert validate_password("Secret123") == []
    assert validate_password("short") == [
        "Password must be at least 8 characters",
        "Password must contain at least one uppercase letter",
        "Password must contain at least one number",
    ]
    assert validate_password_match("a", "b") == "Passwords do not match"
    assert validate_password_match("a", "a") is None


@pytest.mark.parametrize(
    "name, error",
    [
        ("Amina", None),
        ("Mary-Jane O'Neil", None),
        ("A", "First name must be at least 2 characters"),
        ("", "First name is required"),
        ("R2D2", "Letters, spaces, hyphens, and apostrophes only. No numbers or special characters."),
        ("x" * 51, "First name must be 50 characters or less"),
    ],
)
def test_validate_name(name, error):
    assert validate_name(name, "first_name") == error


def test_password_strength():
    weak = get_password_strength("abc")
    assert weak.strength == "weak"
    assert "At least 8 characters" in weak.feedback

    strong = get_password_strength("Secret123!")
    assert strong.score == 100
    assert strong.strength == "strong"
    assert strong.feedback == []
