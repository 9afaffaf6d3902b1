"""
Unit normalization for extracted search filters.

Turns the loosely formatted values a language model (or a person) produces,
such as "750k", "2 million", "above 3m", "5%" or "10 miles", into base units:
dollars, percentage points and meters.
"""

import re
from datetime import date, datetime
from typing import Callable, List, Optional, Tuple, Union

Number = Union[int, float]

METERS_PER_MILE = 1609.344
METERS_PER_FOOT = 0.3048
METERS_PER_YARD = 0.9144

AMOUNT_MULTIPLIERS = {
    "k": 1_000,
    "thousand": 1_000,
    "m": 1_000_000,
    "mm": 1_000_000,
    "mil": 1_000_000,
    "million": 1_000_000,
    "b": 1_000_000_000,
    "bn": 1_000_000_000,
    "billion": 1_000_000_000,
}

DISTANCE_UNITS = {
    "mile": METERS_PER_MILE,
    "miles": METERS_PER_MILE,
    "mi": METERS_PER_MILE,
    "km": 1000.0,
    "kms": 1000.0,
    "kilometer": 1000.0,
    "kilometers": 1000.0,
    "kilometre": 1000.0,
    "kilometres": 1000.0,
    "m": 1.0,
    "meter": 1.0,
    "meters": 1.0,
    "metre": 1.0,
    "metres": 1.0,
    "ft": METERS_PER_FOOT,
    "foot": METERS_PER_FOOT,
    "feet": METERS_PER_FOOT,
    "yd": METERS_PER_YARD,
    "yard": METERS_PER_YARD,
    "yards": METERS_PER_YARD,
}

# Fixed property status vocabulary, as offered by the listing filters
PROPERTY_STATUSES = (
    "Available",
    "Occupied",
    "Leased",
    "For Sale",
    "Sold",
    "Under Contract",
    "Reserved",
    "Off Market",
    "Under Renovation",
    "Expired Listing",
)

STATUS_SYNONYMS = {
    "available": "Available",
    "vacant": "Available",
    "empty": "Available",
    "open": "Available",
    "occupied": "Occupied",
    "tenanted": "Occupied",
    "leased": "Leased",
    "rented": "Leased",
    "let": "Leased",
    "for sale": "For Sale",
    "on sale": "For Sale",
    "on the market": "For Sale",
    "listed": "For Sale",
    "sold": "Sold",
    "under contract": "Under Contract",
    "pending": "Under Contract",
    "in escrow": "Under Contract",
    "reserved": "Reserved",
    "on hold": "Reserved",
    "off market": "Off Market",
    "off-market": "Off Market",
    "not listed": "Off Market",
    "under renovation": "Under Renovation",
    "renovating": "Under Renovation",
    "being renovated": "Under Renovation",
    "expired": "Expired Listing",
    "expired listing": "Expired Listing",
}

LEASE_STATUSES = ("active", "expired", "expiring")

_AMOUNT_RE = re.compile(
    r"(\d+(?:,\d{3})*(?:\.\d+)?)\s*(thousand|k|million|mil|mm|m|billion|bn|b)?(?![a-z])",
    re.IGNORECASE,
)
_PERCENT_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:%|percent|pct)?", re.IGNORECASE)
_DISTANCE_RE = re.compile(
    r"(\d+(?:,\d{3})*(?:\.\d+)?)\s*(miles?|mi|kilomet(?:er|re)s?|kms?|met(?:er|re)s?|m|feet|foot|ft|yards?|yd)?(?![a-z])",
    re.IGNORECASE,
)

_BETWEEN_RE = re.compile(r"\bbetween\b|\bfrom\b.+\bto\b|\d\s*[a-z%]*\s*(?:-|\bto\b|\band\b)\s*\$?\d", re.IGNORECASE)
_LOWER_BOUND_RE = re.compile(
    r"\b(?:above|over|more than|greater than|at least|minimum|min|starting at|from|exceeding)\b|\+",
    re.IGNORECASE,
)
_UPPER_BOUND_RE = re.compile(
    r"\b(?:below|under|less than|at most|up to|maximum|max|no more than|cheaper than|within)\b",
    re.IGNORECASE,
)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _find_amounts(text: str) -> List[Tuple[float, Optional[str]]]:
    """Find every number in text together with its magnitude suffix."""
    found = []
    for match in _AMOUNT_RE.finditer(text):
        number = float(match.group(1).replace(",", ""))
        unit = match.group(2).lower() if match.group(2) else None
        found.append((number, unit))
    return found


def _scale(number: float, unit: Optional[str]) -> int:
    return int(round(number * AMOUNT_MULTIPLIERS.get(unit, 1)))


def parse_amount(value) -> Optional[int]:
    """
    Parse a monetary amount into whole dollars.

    Args:
        value: Number, or string such as "750k", "$2,500,000", "2 million"

    Returns:
        Amount in dollars, or None if no amount can be read
    """
    if value is None or isinstance(value, bool):
        return None
    if _is_number(value):
        return int(round(value))
    if not isinstance(value, str):
        return None

    amounts = _find_amounts(value)
    if not amounts:
        return None
    number, unit = amounts[0]
    return _scale(number, unit)


def _parse_range(
    phrase: str,
    values: List[Number],
) -> Tuple[Optional[Number], Optional[Number]]:
    """Apply comparison words in phrase to already-parsed values."""
    if not values:
        return None, None

    if len(values) >= 2 and _BETWEEN_RE.search(phrase):
        low, high = values[0], values[1]
        return min(low, high), max(low, high)

    has_lower = bool(_LOWER_BOUND_RE.search(phrase))
    has_upper = bool(_UPPER_BOUND_RE.search(phrase))

    if has_lower and has_upper and len(values) >= 2:
        return min(values[0], values[1]), max(values[0], values[1])

    if has_lower and not has_upper:
        return values[0], None

    # A bare amount, or an explicit ceiling, is read as a maximum
    return None, values[0]


def parse_price_range(phrase) -> Tuple[Optional[int], Optional[int]]:
    """
    Parse a price phrase into (min_price, max_price) in dollars.

    "above 3 million" -> (3000000, None), "under 750k" -> (None, 750000),
    "between 1m and 3m" -> (1000000, 3000000). A magnitude written only on
    the last number ("between 1 and 3 million") applies to both.

    Args:
        phrase: Free-text price constraint, or a bare number

    Returns:
        Tuple of (min_price, max_price); either side may be None
    """
    if phrase is None:
        return None, None
    if _is_number(phrase):
        return None, int(round(phrase))
    if not isinstance(phrase, str):
        return None, None

    amounts = _find_amounts(phrase)
    if len(amounts) >= 2 and amounts[0][1] is None and amounts[1][1] is not None:
        amounts[0] = (amounts[0][0], amounts[1][1])
    values = [_scale(number, unit) for number, unit in amounts]
    return _parse_range(phrase, values)


def parse_percentage(value) -> Optional[float]:
    """
    Parse a cap rate into percentage points.

    "5%", "5 percent" and 5 all map to 5.0. A bare fraction below 1
    (0.065) is read as a ratio and converted to 6.5.

    Args:
        value: Number or percentage string

    Returns:
        Percentage points, or None if no number can be read
    """
    if value is None or isinstance(value, bool):
        return None
    if _is_number(value):
        number = float(value)
    elif isinstance(value, str):
        match = _PERCENT_RE.search(value)
        if not match:
            return None
        number = float(match.group(1))
        if "%" in value or "percent" in value.lower():
            return round(number, 4)
    else:
        return None

    if 0 < number < 1:
        number *= 100
    return round(number, 4)


def parse_cap_rate_range(phrase) -> Tuple[Optional[float], Optional[float]]:
    """Parse a cap rate phrase ("above 5%", "between 4 and 6%") into bounds."""
    if phrase is None:
        return None, None
    if _is_number(phrase):
        return None, parse_percentage(phrase)
    if not isinstance(phrase, str):
        return None, None

    values = [parse_percentage(m.group(0)) for m in re.finditer(r"\d+(?:\.\d+)?", phrase)]
    values = [v for v in values if v is not None]
    return _parse_range(phrase, values)


def parse_distance_meters(value) -> Optional[int]:
    """
    Parse a distance into whole meters.

    Bare numbers are taken to be meters already. Strings may carry a unit:
    "10 miles" -> 16093, "5 km" -> 5000, "500 ft" -> 152.

    Args:
        value: Number or distance string

    Returns:
        Distance in meters, or None if no distance can be read
    """
    if value is None or isinstance(value, bool):
        return None
    if _is_number(value):
        return int(round(value)) if value > 0 else None
    if not isinstance(value, str):
        return None

    match = _DISTANCE_RE.search(value)
    if not match:
        return None
    number = float(match.group(1).replace(",", ""))
    unit = (match.group(2) or "m").lower()
    meters = int(round(number * DISTANCE_UNITS.get(unit, 1.0)))
    return meters if meters > 0 else None


def normalize_status(raw) -> Optional[str]:
    """
    Map a free-text property status onto the fixed status vocabulary.

    Args:
        raw: Status as written by the user or the model

    Returns:
        One of PROPERTY_STATUSES, or None when there is no match
    """
    if not raw or not isinstance(raw, str):
        return None
    cleaned = re.sub(r"\s+", " ", raw.strip().lower())

    for status in PROPERTY_STATUSES:
        if cleaned == status.lower():
            return status
    return STATUS_SYNONYMS.get(cleaned)


def normalize_lease_status(raw) -> Optional[str]:
    """Map a lease status onto active / expired / expiring."""
    if not raw or not isinstance(raw, str):
        return None
    cleaned = raw.strip().lower()
    if cleaned in LEASE_STATUSES:
        return cleaned
    if cleaned in ("ending", "ending soon", "about to expire", "expiring soon"):
        return "expiring"
    if cleaned in ("current", "ongoing", "in effect"):
        return "active"
    if cleaned in ("ended", "terminated", "past"):
        return "expired"
    return None


def clean_text(raw) -> Optional[str]:
    """Strip a free-text value; empty strings and the literal 'null' become None."""
    if raw is None:
        return None
    if not isinstance(raw, str):
        raw = str(raw)
    cleaned = raw.strip()
    if not cleaned or cleaned.lower() in ("null", "none", "n/a"):
        return None
    return cleaned


def has_comparison(raw) -> bool:
    """True when raw is a phrase carrying range or comparison words."""
    if not isinstance(raw, str):
        return False
    return bool(
        _BETWEEN_RE.search(raw) or _LOWER_BOUND_RE.search(raw) or _UPPER_BOUND_RE.search(raw)
    )


def normalize_bounds(
    low,
    high,
    range_parser: Callable,
    scalar_parser: Callable,
) -> Tuple[Optional[Number], Optional[Number]]:
    """
    Normalize a (low, high) pair where either side may be a phrase.

    A phrase such as "above 3 million" placed in either slot is expanded with
    range_parser, so the bound lands on the side the phrase asks for. Plain
    values go through scalar_parser.

    Args:
        low: Raw lower bound
        high: Raw upper bound
        range_parser: Phrase -> (low, high), e.g. parse_price_range
        scalar_parser: Value -> number, e.g. parse_amount

    Returns:
        Tuple of normalized (low, high)
    """
    result_low = None if has_comparison(low) else scalar_parser(low)
    result_high = None if has_comparison(high) else scalar_parser(high)

    for raw in (low, high):
        if has_comparison(raw):
            phrase_low, phrase_high = range_parser(raw)
            if phrase_low is not None:
                result_low = phrase_low
            if phrase_high is not None:
                result_high = phrase_high

    return result_low, result_high


def parse_iso_date(raw) -> Optional[date]:
    """
    Read an ISO 8601 calendar date ("2025-12-31").

    Relative phrases such as "next month" are not dates and give None.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    cleaned = clean_text(raw)
    if cleaned is None:
        return None
    try:
        return date.fromisoformat(cleaned[:10])
    except ValueError:
        return None
