"""
Validation utilities for forms and user input.

Validation never silently fixes a value: out-of-range amounts are reported,
not clamped. The only normalisation performed is currency rounding to cents.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Annotated, Iterable, List, Optional, Union

from pydantic import BaseModel, BeforeValidator

Number = Union[int, float, Decimal, str]

CENTS = Decimal("0.01")
DEFAULT_MAX_AMOUNT = Decimal("1000000000")

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NAME_RE = re.compile(r"^[A-Za-z]+(?:[\s'-][A-Za-z]+)*$")
_CURRENCY_NOISE_RE = re.compile(r"[$,\s]")


@dataclass
class ValidationResult:
    is_valid: bool
    error: Optional[str] = None


@dataclass
class PasswordStrength:
    strength: str
    score: int
    feedback: List[str] = field(default_factory=list)


def round_currency(value: Number) -> Decimal:
    """Round to two decimal places, halves away from zero."""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_currency_input(value: Optional[Number]) -> Decimal:
    """
    Parse a currency string such as "$1,234.5" into a Decimal rounded to cents.

    Empty input parses to zero (an untouched form field). Text that is not a
    number raises ValueError.
    """
    if value is None:
        return Decimal("0.00")
    if isinstance(value, bool):
        raise ValueError("Amount must be a number")
    if isinstance(value, (int, float, Decimal)):
        return round_currency(value)

    cleaned = _CURRENCY_NOISE_RE.sub("", value)
    if cleaned == "":
        return Decimal("0.00")
    try:
        parsed = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"'{value}' is not a valid amount")
    if not parsed.is_finite():
        raise ValueError(f"'{value}' is not a valid amount")
    return round_currency(parsed)


def _to_decimal(value: Optional[Number]) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return parse_currency_input(value)
    except ValueError:
        return None


def format_currency(value: Optional[Number], symbol: str = "$") -> str:
    """Format an amount for display, e.g. 1234.5 -> '$1,234.50'."""
    amount = _to_decimal(value)
    if amount is None:
        return ""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def validate_amount(
    value: Optional[Number],
    min_value: Number = 0,
    max_value: Number = DEFAULT_MAX_AMOUNT,
    required: bool = False,
    field_name: str = "Amount",
) -> ValidationResult:
    """Validate a monetary amount against inclusive bounds."""
    amount = _to_decimal(value)
    if required and (value is None or (isinstance(value, str) and not value.strip())):
        return ValidationResult(False, f"{field_name} is required")

    low = Decimal(str(min_value))
    high = Decimal(str(max_value))
    if amount is None or amount < low:
        return ValidationResult(False, f"{field_name} must be at least {format_currency(low)}")
    if amount > high:
        return ValidationResult(False, f"{field_name} cannot exceed {format_currency(high)}")
    return ValidationResult(True)


def validate_paid_amount(paid: Number, total: Number, field_name: str = "Amount paid") -> ValidationResult:
    """Validate that a paid amount is non-negative and doesn't exceed the total."""
    paid_amount = _to_decimal(paid)
    total_amount = _to_decimal(total)
    if paid_amount is None or total_amount is None:
        return ValidationResult(False, "Invalid amounts")
    if paid_amount < 0:
        return ValidationResult(False, f"{field_name} cannot be negative")
    if paid_amount > total_amount:
        return ValidationResult(
            False,
            f"{field_name} ({format_currency(paid_amount)}) cannot exceed "
            f"total amount ({format_currency(total_amount)})",
        )
    return ValidationResult(True)


def validate_spent_amount(spent: Number, planned: Number) -> ValidationResult:
    """
    Validate a spent amount against its plan.

    Overspending is reported as a warning: the result stays valid and carries
    the message in ``error``.
    """
    spent_amount = _to_decimal(spent)
    planned_amount = _to_decimal(planned)
    if spent_amount is None or planned_amount is None:
        return ValidationResult(False, "Invalid amounts")
    if spent_amount < 0:
        return ValidationResult(False, "Spent amount cannot be negative")
    if spent_amount > planned_amount:
        return ValidationResult(True, f"Over budget by {format_currency(spent_amount - planned_amount)}")
    return ValidationResult(True)


def validate_email(email: str) -> bool:
    return bool(email) and EMAIL_RE.match(email) is not None


def validate_password(password: str) -> List[str]:
    """Return the list of unmet password rules (empty when valid)."""
    errors = []
    if len(password) < 8:
        errors.append("Password must be at least 8 characters")
    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", password):
        errors.append("Password must contain at least one number")
    return errors


def validate_password_match(password: str, confirm_password: str) -> Optional[str]:
    if password != confirm_password:
        return "Passwords do not match"
    return None


def validate_name(name: Optional[str], field_name: str = "name") -> Optional[str]:
    """Validate a personal name; returns an error message or None."""
    label = {"first_name": "First name", "last_name": "Last name"}.get(field_name, "Name")
    if not name or not name.strip():
        return f"{label} is required"

    trimmed = name.strip()
    if len(trimmed) < 2:
        return f"{label} must be at least 2 characters"
    if len(trimmed) > 50:
        return f"{label} must be 50 characters or less"
    if not NAME_RE.match(trimmed):
        return "Letters, spaces, hyphens, and apostrophes only. No numbers or special characters."
    return None


def explicit_nulls(model: BaseModel, fields: Iterable[str]) -> List[str]:
    """Fields among ``fields`` the client sent as null on a partial update."""
    return [name for name in fields if name in model.model_fields_set and getattr(model, name) is None]


def get_password_strength(password: str) -> PasswordStrength:
    """Score a password 0-100 in steps of 20 with feedback on missing rules."""
    if not password:
        return PasswordStrength("weak", 0, [])

    checks = [
        (len(password) >= 8, "At least 8 characters"),
        (re.search(r"[A-Z]", password) is not None, "One uppercase letter"),
        (re.search(r"[a-z]", password) is not None, "One lowercase letter"),
        (re.search(r"[0-9]", password) is not None, "One number"),
    ]
    score = 0
    feedback = []
    for passed, hint in checks:
        if passed:
            score += 20
        else:
            feedback.append(hint)
    # special characters are a bonus, never required
    if re.search(r"[^A-Za-z0-9]", password):
        score += 20

    if score < 60:
        strength = "weak"
    elif score < 80:
        strength = "medium"
    else:
        strength = "strong"
    return PasswordStrength(strength, score, feedback)


CurrencyAmount = Annotated[Decimal, BeforeValidator(parse_currency_input)]
