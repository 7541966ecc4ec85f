"""
Parsing and validation helpers for user-typed values.

Every parser takes the raw line as typed and either returns the converted
value or raises ValidationError with a message fit for the console.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from mechanic_shop.config import settings


class ValidationError(ValueError):
    """Raised when a typed value cannot be accepted."""


def check_length(
    field: str, value: Optional[str], max_length: int, required: bool = False
) -> Optional[str]:
    """Validate a text field against its column width.

    Returns the value stripped of surrounding whitespace.
    """
    if value is None:
        if required:
            raise ValidationError(f"{field} is required")
        return value

    value = value.strip()
    if required and not value:
        raise ValidationError(f"{field} is required")
    if len(value) > max_length:
        raise ValidationError(f"{field} must be <= {max_length} characters, got {len(value)}")
    return value


def parse_date(value: str, date_format: Optional[str] = None) -> date:
    """Parse a date strictly in the configured format (YYYY-MM-DD by default)."""
    date_format = date_format or settings.DATE_FORMAT
    example = date(2024, 1, 15).strftime(date_format)
    try:
        parsed = datetime.strptime(value.strip(), date_format).date()
    except ValueError:
        raise ValidationError(f"Invalid date '{value}'. Use the format {example}") from None

    # strptime also takes unpadded fields such as 2024-1-5
    if parsed.strftime(date_format) != value.strip():
        raise ValidationError(f"Invalid date '{value}'. Use the format {example}")
    return parsed


def parse_number(
    value: str, minimum: Optional[Decimal] = None, maximum: Optional[Decimal] = None
) -> Decimal:
    """Parse a decimal number such as a bill amount."""
    try:
        number = Decimal(value.strip())
    except (InvalidOperation, AttributeError):
        raise ValidationError(f"'{value}' is not a number") from None

    if not number.is_finite():
        raise ValidationError(f"'{value}' is not a number")
    if minimum is not None and number < minimum:
        raise ValidationError(f"Value must be >= {minimum}, got {number}")
    if maximum is not None and number > maximum:
        raise ValidationError(f"Value must be <= {maximum}, got {number}")
    return number


def parse_int(value: str, minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
    """Parse a whole number, optionally bounded (inclusive)."""
    try:
        number = int(value.strip())
    except (ValueError, AttributeError):
        raise ValidationError(f"'{value}' is not a whole number") from None

    if minimum is not None and number < minimum:
        raise ValidationError(f"Value must be >= {minimum}, got {number}")
    if maximum is not None and number > maximum:
        raise ValidationError(f"Value must be <= {maximum}, got {number}")
    return number


def parse_yes_no(value: str) -> bool:
    """Interpret a Y/N answer."""
    answer = value.strip().lower()
    if answer in ("y", "yes"):
        return True
    if answer in ("n", "no"):
        return False
    raise ValidationError("Please answer Y or N")


def parse_choice(value: str, count: int) -> int:
    """Parse a 1-based menu or list selection and return it as an int."""
    return parse_int(value, minimum=1, maximum=count)
