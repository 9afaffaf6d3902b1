"""
Property-based tests for unit normalization.

Amounts end up in dollars, cap rates in percentage points and distances in
whole meters, whatever form the extractor hands them over in.
"""

import pytest
from hypothesis import given, settings, strategies as st

from propsearch.normalizers import (
    METERS_PER_MILE,
    clean_text,
    has_comparison,
    normalize_bounds,
    normalize_lease_status,
    normalize_status,
    parse_amount,
    parse_cap_rate_range,
    parse_distance_meters,
    parse_percentage,
    parse_price_range,
)


amounts = st.integers(min_value=1, max_value=999)


@given(number=amounts)
@settings(max_examples=100)
def test_thousand_suffix(number):
    """For any n, "{n}k" is n thousand dollars."""
    assert parse_amount(f"{number}k") == number * 1000
    assert parse_amount(f"{number}K") == number * 1000


@given(number=amounts, suffix=st.sampled_from(["m", "M", " million", "mm", " mil"]))
@settings(max_examples=100)
def test_million_suffixes(number, suffix):
    """For any n, every million spelling gives n million dollars."""
    assert parse_amount(f"{number}{suffix}") == number * 1_000_000


@given(low=amounts, high=amounts)
@settings(max_examples=100)
def test_between_is_ordered(low, high):
    """A between-phrase always yields min <= max, whatever order it was written in."""
    result = parse_price_range(f"between {low}k and {high}k")
    assert result == (min(low, high) * 1000, max(low, high) * 1000)


@given(miles=st.integers(min_value=1, max_value=500))
@settings(max_examples=100)
def test_miles_to_meters(miles):
    """Miles convert to rounded whole meters."""
    assert parse_distance_meters(f"{miles} miles") == int(round(miles * METERS_PER_MILE))


def test_price_boundaries():
    """Test the documented price normalization boundaries."""
    assert parse_amount("750k") == 750_000
    assert parse_amount("2m") == 2_000_000
    assert parse_amount("2 million") == 2_000_000
    assert parse_price_range("above 3 million") == (3_000_000, None)
    assert parse_price_range("between 1m and 3m") == (1_000_000, 3_000_000)


def test_price_range_variants():
    """Test ceilings, shared magnitudes and bare amounts."""
    assert parse_price_range("under 750k") == (None, 750_000)
    assert parse_price_range("between 1 and 3 million") == (1_000_000, 3_000_000)
    assert parse_price_range("1m-3m") == (1_000_000, 3_000_000)
    assert parse_price_range("at least $500,000") == (500_000, None)
    assert parse_price_range("2 million") == (None, 2_000_000)
    assert parse_price_range(1500000) == (None, 1_500_000)
    assert parse_price_range(None) == (None, None)


def test_parse_amount_inputs():
    """Test numbers, currency formatting and unreadable values."""
    assert parse_amount(1200000) == 1_200_000
    assert parse_amount(1.5e6) == 1_500_000
    assert parse_amount("$2,500,000") == 2_500_000
    assert parse_amount("1.5m") == 1_500_000
    assert parse_amount("cheap") is None
    assert parse_amount(None) is None
    assert parse_amount(True) is None


def test_cap_rates():
    """Test percentage points and fraction conversion."""
    assert parse_percentage("5%") == 5.0
    assert parse_percentage("6.5 percent") == 6.5
    assert parse_percentage(7) == 7.0
    assert parse_percentage(0.065) == 6.5
    assert parse_percentage("n/a") is None
    assert parse_cap_rate_range("above 5%") == (5.0, None)
    assert parse_cap_rate_range("between 4 and 6%") == (4.0, 6.0)
    assert parse_cap_rate_range("below 8%") == (None, 8.0)


def test_distances():
    """Test distance units."""
    assert parse_distance_meters("10 miles") == 16093
    assert parse_distance_meters("5 km") == 5000
    assert parse_distance_meters("500 ft") == 152
    assert parse_distance_meters(1609) == 1609
    assert parse_distance_meters("800") == 800
    assert parse_distance_meters(0) is None
    assert parse_distance_meters("far") is None


@pytest.mark.parametrize("raw,expected", [
    ("Available", "Available"),
    ("vacant", "Available"),
    ("for sale", "For Sale"),
    ("  Under   Contract ", "Under Contract"),
    ("pending", "Under Contract"),
    ("off-market", "Off Market"),
    ("haunted", None),
    (None, None),
])
def test_normalize_status(raw, expected):
    """Test mapping onto the fixed status vocabulary."""
    assert normalize_status(raw) == expected


def test_normalize_lease_status():
    """Test lease status vocabulary."""
    assert normalize_lease_status("Active") == "active"
    assert normalize_lease_status("ending soon") == "expiring"
    assert normalize_lease_status("terminated") == "expired"
    assert normalize_lease_status("draft") is None


def test_clean_text():
    """Test that placeholder strings become None."""
    assert clean_text("  Dallas ") == "Dallas"
    assert clean_text("null") is None
    assert clean_text("N/A") is None
    assert clean_text("") is None


def test_normalize_bounds_moves_phrase_to_its_side():
    """A comparison phrase in the wrong slot lands on the side it asks for."""
    assert has_comparison("above 3 million")
    assert not has_comparison("3 million")
    assert normalize_bounds(None, "above 3 million", parse_price_range, parse_amount) == (3_000_000, None)
    assert normalize_bounds("1m", "3m", parse_price_range, parse_amount) == (1_000_000, 3_000_000)
    assert normalize_bounds(None, "5%", parse_cap_rate_range, parse_percentage) == (None, 5.0)
