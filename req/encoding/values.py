"""
Render JSON values as plain text for query strings, form bodies and
multipart fields, and render floats for JSON bodies.

Numbers are treated as 64-bit floats. As text they print in the shortest
%g form: exponent notation once the decimal exponent is below -4 or
reaches 6. In JSON bodies they print in plain decimal unless their
magnitude is below 1e-6 or at least 1e21.
"""
from decimal import Decimal
from typing import Any

_EXPONENT_LIMIT = 6
_JSON_SMALL = 1e-6
_JSON_LARGE = 1e21


def _shortest_digits(value: float) -> tuple[str, str, int]:
    """Sign prefix, shortest round-trip digits and decimal point position."""
    sign, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(d) for d in digits)
    return "-" if sign else "", digits, len(digits) + exponent


def _fixed(prefix: str, digits: str, point: int) -> str:
    if point <= 0:
        return f"{prefix}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return f"{prefix}{digits}{'0' * (point - len(digits))}"
    return f"{prefix}{digits[:point]}.{digits[point:]}"


def _mantissa(digits: str) -> str:
    return digits[0] + ("." + digits[1:] if len(digits) > 1 else "")


def format_number(number: int | float) -> str:
    """Format a JSON number the way a float64 %v would print it."""
    try:
        value = float(number)
    except OverflowError:
        return str(number)
    if value != value:
        return "NaN"
    if value in (float("inf"), float("-inf")):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if str(value).startswith("-") else "0"

    prefix, digits, point = _shortest_digits(value)
    exp10 = point - 1

    if exp10 < -4 or exp10 >= _EXPONENT_LIMIT:
        exp_sign = "-" if exp10 < 0 else "+"
        return f"{prefix}{_mantissa(digits)}e{exp_sign}{abs(exp10):02d}"
    return _fixed(prefix, digits, point)


def format_json_float(value: float) -> str:
    """Format a float for a JSON body: 1.0 as 1, 1e5 as 100000, 1e-7 as 1e-7."""
    if value == 0:
        return "-0" if str(value).startswith("-") else "0"

    prefix, digits, point = _shortest_digits(value)
    if abs(value) < _JSON_SMALL or abs(value) >= _JSON_LARGE:
        exp10 = point - 1
        exp_sign = "-" if exp10 < 0 else "+"
        return f"{prefix}{_mantissa(digits)}e{exp_sign}{abs(exp10)}"
    return _fixed(prefix, digits, point)


def stringify(value: Any) -> str:
    """Render a parsed JSON value as text."""
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return "[" + " ".join(stringify(item) for item in value) + "]"
    if isinstance(value, dict):
        items = " ".join(f"{key}:{stringify(value[key])}" for key in sorted(value))
        return f"map[{items}]"
    raise TypeError(f"Unsupported JSON value type: {type(value).__name__}")
