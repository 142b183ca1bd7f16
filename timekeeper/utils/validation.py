"""
Validation utilities
"""
import math
from decimal import Decimal, InvalidOperation

from timekeeper.domain.errors import InvalidInputError


def normalize_decimal_input(value: str) -> str:
    """
    Normalize an hours string: trim it and replace a decimal comma with a dot

    Example:
        >>> normalize_decimal_input(" 7,5 ")
        "7.5"
    """
    return value.strip().replace(",", ".")


def validate_decimal_hours(value: str) -> tuple[bool, str | None]:
    """
    Validate an hours string

    Any finite number is accepted, whatever its precision or sign.

    Returns:
        (is_valid, error_message)

    Example:
        >>> validate_decimal_hours("7.125")
        (True, None)
        >>> validate_decimal_hours("abc")
        (False, "Invalid hours value: 'abc'")
    """
    try:
        parsed = Decimal(normalize_decimal_input(value))
    except (InvalidOperation, ValueError):
        return False, f"Invalid hours value: {value!r}"

    if not parsed.is_finite():
        return False, f"Invalid hours value: {value!r}"
    if not math.isfinite(float(parsed)):
        return False, f"Hours value out of range: {value!r}"

    return True, None


def parse_hours(value: str | int | float | Decimal) -> Decimal:
    """
    Validate and convert an hours value to Decimal

    Negative and zero values are accepted; only the value itself is checked.

    Raises:
        InvalidInputError: if the value is not a finite number
    """
    if isinstance(value, bool):
        raise InvalidInputError(f"Invalid hours value: {value!r}")
    if isinstance(value, (int, float, Decimal)):
        value = str(value)
    if not isinstance(value, str):
        raise InvalidInputError(f"Invalid hours value: {value!r}")

    is_valid, error = validate_decimal_hours(value)
    if not is_valid:
        raise InvalidInputError(error)

    return Decimal(normalize_decimal_input(value))


def hours_from_store(value: float | int | None) -> Decimal:
    """Stored hours (a float column) -> Decimal with the value's shortest repr."""
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


def format_hours(value: Decimal) -> str:
    """
    Render hours for API output without exponent or trailing zeros

    Example:
        >>> format_hours(Decimal("32.0"))
        "32"
        >>> format_hours(Decimal("0.30000000000000004"))
        "0.30000000000000004"
    """
    if value == 0:
        return "0"
    return format(value.normalize(), "f")
