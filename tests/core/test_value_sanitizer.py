"""
Tests for the value sanitizer.

System role: Verification of amount normalization
"""

import pytest

from invoice_extractor.core.extraction.value_sanitizer import is_numeric, sanitize_value


class TestSanitizeValue:
    """Test suite for sanitize_value()."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("$1,000.00", "1000.00"),
            ("$500.00", "500.00"),
            ("Rs. 250", "250"),
            ("rs 1 250.5", "1250.5"),
            ("10%", "10"),
            ("18 %", "18"),
            ("1,234,567", "1234567"),
        ],
    )
    def test_strips_currency_markers_and_separators(self, raw: str, expected: str) -> None:
        assert sanitize_value(raw) == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("-$500.00", "-500.00"),
            ("-Rs. 75", "-75"),
            ("-10%", "-10"),
            ("- $ 20.5", "-20.5"),
        ],
    )
    def test_preserves_leading_minus(self, raw: str, expected: str) -> None:
        assert sanitize_value(raw) == expected

    @pytest.mark.parametrize("clean", ["0", "42", "1000.00", "-500.00", "3.14159"])
    def test_clean_values_are_unchanged(self, clean: str) -> None:
        # Act
        once = sanitize_value(clean)

        # Assert
        assert once == clean
        assert sanitize_value(once) == once

    def test_keeps_digits_exactly(self) -> None:
        assert sanitize_value("$7.10") == "7.10"
        assert sanitize_value("0.5") == "0.5"

    def test_numbers_are_stringified(self) -> None:
        assert sanitize_value(1500) == "1500"
        assert sanitize_value(-12.5) == "-12.5"

    def test_words_around_amount_are_removed(self) -> None:
        assert sanitize_value("USD 99.99") == "99.99"

    @pytest.mark.parametrize("raw", [None, "", "   ", "N/A", "abc", "1.2.3", "-"])
    def test_returns_empty_when_nothing_numeric_survives(self, raw) -> None:
        assert sanitize_value(raw) == ""


class TestIsNumeric:
    """Test suite for is_numeric()."""

    @pytest.mark.parametrize("value", ["1", "-1", "10.50", "-0.5"])
    def test_accepts_storage_form(self, value: str) -> None:
        assert is_numeric(value)

    @pytest.mark.parametrize("value", ["", "1,000", "$1", ".5", "1.", "--1", "1e3"])
    def test_rejects_other_forms(self, value: str) -> None:
        assert not is_numeric(value)
