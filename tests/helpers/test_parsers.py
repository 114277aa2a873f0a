"""Tests for parsing helpers."""

import pytest

from src.helpers.exceptions import DataInconsistencyError
from src.helpers.parsers import (
    parse_decimal_int,
    parse_hex_int,
    parse_slot,
    sanitize_url,
)


class TestParseHexInt:
    """Tests for parse_hex_int."""

    def test_parses_hex(self) -> None:
        """Test hex strings are parsed."""
        assert parse_hex_int("0xff") == 255
        assert parse_hex_int("0x0") == 0

    def test_none_returns_default(self) -> None:
        """Test None returns the default."""
        assert parse_hex_int(None) == 0
        assert parse_hex_int(None, 7) == 7

    def test_invalid_hex_raises(self) -> None:
        """Test malformed hex is a data error, not zero."""
        with pytest.raises(DataInconsistencyError, match="invalid hex integer"):
            parse_hex_int("0xzz")


class TestParseDecimalInt:
    """Tests for parse_decimal_int."""

    def test_parses_large_values_exactly(self) -> None:
        """Test values beyond 64 bits keep full precision."""
        value = "123456789012345678901234567890"
        assert parse_decimal_int(value) == 123456789012345678901234567890

    def test_passes_ints_through(self) -> None:
        """Test ints are returned unchanged."""
        assert parse_decimal_int(42) == 42

    def test_negative(self) -> None:
        """Test a leading minus sign is accepted."""
        assert parse_decimal_int("-5") == -5

    @pytest.mark.parametrize("value", ["", "0x10", "1.5", "1e18", " 12", "abc", "-"])
    def test_rejects_non_decimal(self, value: str) -> None:
        """Test nothing is silently coerced."""
        with pytest.raises(DataInconsistencyError, match="invalid block_number"):
            parse_decimal_int(value, "block_number")

    def test_rejects_bool(self) -> None:
        """Test booleans are not treated as ints."""
        with pytest.raises(DataInconsistencyError):
            parse_decimal_int(True)  # type: ignore[arg-type]

    def test_rejects_values_past_int_digit_limit(self) -> None:
        """Test an oversized digit string is a data error, not a bare ValueError."""
        with pytest.raises(DataInconsistencyError, match="invalid value: 5000 digits"):
            parse_decimal_int("9" * 5000)


class TestParseSlot:
    """Tests for parse_slot."""

    def test_valid_slot(self) -> None:
        """Test digits parse to a slot."""
        assert parse_slot("10031063") == 10031063
        assert parse_slot("0") == 0

    @pytest.mark.parametrize("value", ["Xhs2", "-1", "", "1.0", "１２"])
    def test_invalid_slot(self, value: str) -> None:
        """Test anything but ASCII digits is rejected."""
        assert parse_slot(value) is None

    def test_largest_slot(self) -> None:
        """Test the unsigned 64-bit maximum is still a slot."""
        assert parse_slot("18446744073709551615") == 2**64 - 1

    @pytest.mark.parametrize(
        "value", ["18446744073709551616", "99999999999999999999", "9" * 5000]
    )
    def test_slot_out_of_range(self, value: str) -> None:
        """Test slots past 2**64 - 1 are rejected."""
        assert parse_slot(value) is None


def test_sanitize_url() -> None:
    """Test host and key are masked."""
    url = "https://node.com/key1234/eth/v1/something"
    assert sanitize_url(url) == "https://{ENDPOINT}/{KEY}/eth/v1/something"


def test_sanitize_short_url() -> None:
    """Test a URL without a key path still masks the host."""
    assert sanitize_url("https://node.com") == "https://{ENDPOINT}"
