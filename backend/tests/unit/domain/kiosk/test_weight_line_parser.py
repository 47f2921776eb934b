"""Unit tests for the scale weight-line parser."""

import pytest

from domain.kiosk.parsing import parse_line_to_grams


class TestParseLineToGrams:
    """Supported line formats."""

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("0.5 kg", 500.0),
            ("1.25KG", 1250.0),
            ("ST,GS, 0.500 kg", 500.0),
            ("123.4 g", 123.4),
            ("250G", 250.0),
            ("  87 g  ", 87.0),
        ],
    )
    def test_unit_suffixes(self, line, expected):
        assert parse_line_to_grams(line) == pytest.approx(expected)

    def test_bare_small_number_is_kilograms(self):
        assert parse_line_to_grams("ST,GS,0.250") == pytest.approx(250.0)

    def test_bare_large_number_is_grams(self):
        assert parse_line_to_grams("DATA,123.4") == pytest.approx(123.4)

    def test_kilograms_take_precedence(self):
        """A line with both units is read as kilograms."""
        assert parse_line_to_grams("2 kg (2000 g)") == pytest.approx(2000.0)

    @pytest.mark.parametrize("line", ["", "   ", "invalid", "ST,GS,--", "kg"])
    def test_lines_without_value(self, line):
        assert parse_line_to_grams(line) is None
