"""Parsing utilities for common data transformations."""

from src.helpers.constants import MAX_SLOT, MAX_SLOT_DIGITS
from src.helpers.exceptions import DataInconsistencyError


def parse_hex_int(hex_value: str | None, default: int = 0) -> int:
    """Parse hex string to integer.

    Args:
        hex_value: Hex-encoded string or None
        default: Default value if hex_value is None

    Returns:
        int: Parsed integer value

    Raises:
        DataInconsistencyError: If the value is not a hex string

    Example:
        >>> parse_hex_int("0xff")
        255
        >>> parse_hex_int(None, 0)
        0
    """
    if hex_value is None:
        return default
    try:
        return int(hex_value, 16)
    except (TypeError, ValueError) as e:
        msg = f"invalid hex integer: {hex_value!r}"
        raise DataInconsistencyError(msg) from e


def parse_decimal_int(value: str | int, field: str = "value") -> int:
    """Parse a base-10 integer string of arbitrary size.

    Only ASCII digits are accepted, optionally with a leading minus sign.
    Nothing is coerced: an empty or malformed string is an error.

    Args:
        value: Decimal string (or an int, returned unchanged)
        field: Field name used in the error message

    Returns:
        int: Parsed integer

    Raises:
        DataInconsistencyError: If the value is not a decimal integer

    Example:
        >>> parse_decimal_int("55766506090015659")
        55766506090015659
    """
    if isinstance(value, bool):
        msg = f"invalid {field}: {value!r}"
        raise DataInconsistencyError(msg)
    if isinstance(value, int):
        return value

    digits = value[1:] if value.startswith("-") else value
    if not digits.isascii() or not digits.isdigit():
        msg = f"invalid {field}: {value!r}"
        raise DataInconsistencyError(msg)
    try:
        return int(value)
    except ValueError as e:
        # Strings past the interpreter's int digit limit
        msg = f"invalid {field}: {len(digits)} digits"
        raise DataInconsistencyError(msg) from e


def parse_slot(value: str) -> int | None:
    """Parse a slot path parameter.

    Args:
        value: Raw path segment

    Returns:
        int | None: The slot, or None if it is not an unsigned 64-bit integer

    Example:
        >>> parse_slot("10031063")
        10031063
        >>> parse_slot("Xhs2") is None
        True
        >>> parse_slot("18446744073709551616") is None
        True
    """
    if not value.isascii() or not value.isdigit():
        return None
    if len(value.lstrip("0")) > MAX_SLOT_DIGITS:
        return None
    slot = int(value)
    if slot > MAX_SLOT:
        return None
    return slot


def sanitize_url(url: str) -> str:
    """Mask the host and API key path segment of a node URL for logging.

    Example:
        >>> sanitize_url("https://node.com/key1234/eth/v1/something")
        'https://{ENDPOINT}/{KEY}/eth/v1/something'
    """
    parts = url.split("/")
    if len(parts) > 2:
        parts[2] = "{ENDPOINT}"
    if len(parts) > 3:
        parts[3] = "{KEY}"
    return "/".join(parts)


__all__ = [
    "parse_decimal_int",
    "parse_hex_int",
    "parse_slot",
    "sanitize_url",
]
