"""
Extraction Primitive Tests

Tests validate:
- Numeric parsing treats junk as "not found"
- Unit patterns (mg, g, kg, count, pack, serving)
- Fallback chains take the first source that matches

Run with:
    pytest tests/test_extraction.py -v
"""

import pytest

from ranker.analysis.extract import (
    RE_MG,
    RE_COUNT,
    RE_GRAMS,
    RE_KG,
    RE_PACK,
    RE_SERVING,
    parse_positive_float,
    parse_price,
    extract_float,
    extract_float_from,
    contains_any,
)


# ============================================================================
# Numeric Parsing
# ============================================================================

class TestParsePositiveFloat:
    """Unparsable or non-positive values are 'not found', never errors."""

    def test_decimal_text(self):
        assert parse_positive_float("29.99") == pytest.approx(29.99)

    def test_whitespace_is_trimmed(self):
        assert parse_positive_float("  12 ") == 12.0

    @pytest.mark.parametrize("raw", [None, "", "abc", "0", "-5", "nan", "inf"])
    def test_not_found(self, raw):
        assert parse_positive_float(raw) is None


class TestParsePrice:

    def test_plain_price(self):
        assert parse_price("19.99") == pytest.approx(19.99)

    def test_currency_symbol_tolerated(self):
        assert parse_price("$1,029.50") == pytest.approx(1029.50)

    def test_garbage_price(self):
        assert parse_price("free") is None
        assert parse_price("") is None
        assert parse_price("0.00") is None


# ============================================================================
# Patterns
# ============================================================================

class TestPatterns:

    def test_mg(self):
        assert extract_float(RE_MG, "NMN 500mg Capsules") == 500.0
        assert extract_float(RE_MG, "NMN 250 MG") == 250.0

    def test_grams_do_not_match_milligrams(self):
        """'500mg' must never read as 500 grams."""
        assert extract_float(RE_GRAMS, "NMN 500mg 60 Capsules") is None

    @pytest.mark.parametrize("text,expected", [
        ("Creatine 100g", 100.0),
        ("Creatine Monohydrate 500 Grams", 500.0),
        ("Watermelon Creatine Blend 500 GMS", 500.0),
        ("TMG Powder 250 gram", 250.0),
        ("NMN Powder 2.5g", 2.5),
    ])
    def test_grams(self, text, expected):
        assert extract_float(RE_GRAMS, text) == expected

    def test_grams_ignore_gummies(self):
        assert extract_float(RE_GRAMS, "NMN 100 gummies") is None

    def test_kg(self):
        assert extract_float(RE_KG, "Creatine 1.5kg Tub") == 1.5
        assert extract_float(RE_GRAMS, "Creatine 1kg") is None

    @pytest.mark.parametrize("text,expected", [
        ("60 Capsules", 60.0),
        ("90 caps", 90.0),
        ("30 Servings", 30.0),
        ("120 tablets", 120.0),
        ("100ct", 100.0),
    ])
    def test_count(self, text, expected):
        assert extract_float(RE_COUNT, text) == expected

    @pytest.mark.parametrize("text,expected", [
        ("3 Pack", 3.0),
        ("3-Pack", 3.0),
        ("6 Bottles", 6.0),
        ("1 Bottle", 1.0),
    ])
    def test_pack(self, text, expected):
        assert extract_float(RE_PACK, text) == expected

    def test_serving(self):
        assert extract_float(RE_SERVING, "Take 2 caps per serving") == 2.0
        assert extract_float(RE_SERVING, "Take daily") is None


# ============================================================================
# Fallback Chains
# ============================================================================

class TestExtractFloatFrom:

    def test_first_source_wins(self):
        value = extract_float_from(RE_COUNT, "no count here", "30 caps", "60 caps")
        assert value == 30.0

    def test_none_when_nothing_matches(self):
        assert extract_float_from(RE_COUNT, "", "still nothing") is None

    def test_zero_capture_falls_through(self):
        """A zero count is not a value; the next source is tried."""
        assert extract_float_from(RE_COUNT, "0 caps", "60 caps") == 60.0


class TestContainsAny:

    def test_contains(self):
        assert contains_any("pure nmn powder", ["tmg", "nmn"])

    def test_empty_needles_ignored(self):
        assert not contains_any("pure nmn powder", ["", "creatine"])
