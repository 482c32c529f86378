"""
Unit tests for the RUT utilities.
"""

import pytest

from admission_wizard.core.rut import (
    RUT_ERROR_MESSAGES,
    calculate_verification_digit,
    clean_rut,
    format_rut,
    format_rut_input,
    is_valid_rut,
    validate_and_format_rut,
)


class TestCleanRut:
    """Tests for clean_rut."""

    def test_strips_dots_dashes_and_spaces(self):
        assert clean_rut(" 12.345.678-5 ") == "123456785"

    def test_uppercases_check_character(self):
        assert clean_rut("10.000.030-k") == "10000030K"

    def test_empty_is_returned_as_is(self):
        assert clean_rut("") == ""
        assert clean_rut(None) is None


class TestCalculateVerificationDigit:
    """Tests for calculate_verification_digit."""

    @pytest.mark.parametrize(
        "number,expected",
        [
            ("12345678", "5"),
            ("11111111", "1"),
            ("10000004", "0"),
            ("10000030", "K"),
            ("6", "K"),
        ],
    )
    def test_known_values(self, number, expected):
        assert calculate_verification_digit(number) == expected


class TestIsValidRut:
    """Tests for is_valid_rut."""

    @pytest.mark.parametrize("rut", ["12345678-5", "12.345.678-5", "123456785", "10000030-k"])
    def test_accepts_all_input_shapes(self, rut):
        assert is_valid_rut(rut) is True

    def test_rejects_wrong_check_digit(self):
        assert is_valid_rut("12345678-9") is False

    def test_rejects_non_digit_body(self):
        assert is_valid_rut("12A45678-5") is False

    @pytest.mark.parametrize("rut", ["1²-5", "١٢٣٤٥٦٧٨-5", "１２３４５６７８-5"])
    def test_rejects_non_ascii_digits(self, rut):
        assert is_valid_rut(rut) is False

    @pytest.mark.parametrize("rut", ["", None, "5", "-"])
    def test_rejects_too_short_or_missing(self, rut):
        assert is_valid_rut(rut) is False


class TestFormatRut:
    """Tests for format_rut and validate_and_format_rut."""

    def test_formats_with_thousands_separators(self):
        assert format_rut("123456785") == "12.345.678-5"

    def test_formats_seven_digit_body(self):
        assert format_rut("1234567-4") == "1.234.567-4"

    def test_short_input_returned_unchanged(self):
        assert format_rut("1") == "1"

    def test_validate_and_format_valid(self):
        assert validate_and_format_rut("12345678-5") == "12.345.678-5"

    def test_validate_and_format_invalid(self):
        assert validate_and_format_rut("12345678-9") is None


class TestFormatRutInput:
    """Tests for the as-you-type formatter."""

    def test_single_character_untouched(self):
        assert format_rut_input("1") == "1"

    def test_two_characters_get_dash(self):
        assert format_rut_input("12") == "1-2"

    def test_drops_foreign_characters(self):
        assert format_rut_input("12a345b678k") == "12.345.678-K"

    def test_is_idempotent(self):
        once = format_rut_input("123456785")
        assert once == "12.345.678-5"
        assert format_rut_input(once) == once

    def test_empty(self):
        assert format_rut_input("") == ""


def test_error_messages_cover_expected_keys():
    assert set(RUT_ERROR_MESSAGES) == {"REQUIRED", "INVALID_FORMAT", "INVALID_DIGIT", "INVALID"}


@pytest.mark.parametrize("number", ["1", "6", "765432", "9999999", "24965101", "10000030"])
def test_computed_check_digit_always_validates(number):
    rut = number + calculate_verification_digit(number)

    assert is_valid_rut(rut)
    assert is_valid_rut(format_rut(rut))
