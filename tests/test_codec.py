"""Tests for the nine-digit-block decimal codec."""
from __future__ import annotations

import pytest

import limbs as lb
from codec import BLOCK_BASE, DIGITS_PER_BLOCK, parse, to_string
from errors import InvalidFormat


class TestParse:

    @pytest.mark.parametrize("text, value", [
        ("0", 0),
        ("-0", 0),
        ("000", 0),
        ("0100", 100),
        ("123456789", 123456789),
        ("1234567890", 1234567890),
        ("-2147483648", -(2**31)),
        ("18446744073709551616", 2**64),
        ("-18446744073709551615", -(2**64 - 1)),
        ("1" + "0" * 40, 10**40),
    ])
    def test_values(self, text, value):
        assert lb.to_int(*parse(text)) == value

    def test_minus_zero_is_canonical_zero(self):
        assert parse("-0") == ([], False)
        assert parse("-000000000000000000") == ([], False)

    def test_block_constants(self):
        assert DIGITS_PER_BLOCK == 9
        assert BLOCK_BASE == 10**9
        assert BLOCK_BASE < 2**32

    @pytest.mark.parametrize("length", [8, 9, 10, 17, 18, 19, 27])
    def test_block_boundaries(self, length):
        text = "9" * length
        assert lb.to_int(*parse(text)) == 10**length - 1

    @pytest.mark.parametrize("text", [
        "", "-", "+1", "--1", "1-", " 1", "1 ", "12a3", "0x10", "1_000",
        "１２", "٣",
    ])
    def test_rejects(self, text):
        with pytest.raises(InvalidFormat):
            parse(text)

    def test_error_carries_text(self):
        with pytest.raises(InvalidFormat) as info:
            parse("12x")
        assert info.value.text == "12x"
        assert "'x'" in info.value.reason

    def test_invalid_format_is_value_error(self):
        with pytest.raises(ValueError):
            parse("-")


class TestToString:

    @pytest.mark.parametrize("value", [
        0, 1, -1, 9, 10, 999_999_999, 1_000_000_000, -1_000_000_000,
        2**31 - 1, 2**31, -(2**31), -(2**31) - 1, 2**64, -(2**64),
        10**18, 10**27 + 1, -(10**45) + 7,
    ])
    def test_matches_host(self, value):
        assert to_string(*lb.from_int(value)) == str(value)

    def test_zero_has_no_sign(self):
        assert to_string([], False) == "0"

    def test_inner_groups_are_padded(self):
        assert to_string(*lb.from_int(10**18 + 5)) == "1000000000000000005"

    def test_round_trip_long(self):
        text = "-" + "1234567890" * 30
        assert to_string(*parse(text)) == text
