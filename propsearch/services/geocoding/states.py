"""U.S. state names, abbreviations and city/state name collisions."""

import re
from typing import Optional

US_STATES = {
    "alabama": "AL", "alaska": "AK", "arizona": "AZ", "arkansas": "AR",
    "california": "CA", "colorado": "CO", "connecticut": "CT", "delaware": "DE",
    "florida": "FL", "georgia": "GA", "hawaii": "HI", "idaho": "ID",
    "illinois": "IL", "indiana": "IN", "iowa": "IA", "kansas": "KS",
    "kentucky": "KY", "louisiana": "LA", "maine": "ME", "maryland": "MD",
    "massachusetts": "MA", "michigan": "MI", "minnesota": "MN", "mississippi": "MS",
    "missouri": "MO", "montana": "MT", "nebraska": "NE", "nevada": "NV",
    "new hampshire": "NH", "new jersey": "NJ", "new mexico": "NM", "new york": "NY",
    "north carolina": "NC", "north dakota": "ND", "ohio": "OH", "oklahoma": "OK",
    "oregon": "OR", "pennsylvania": "PA", "rhode island": "RI", "south carolina": "SC",
    "south dakota": "SD", "tennessee": "TN", "texas": "TX", "utah": "UT",
    "vermont": "VT", "virginia": "VA", "washington": "WA", "west virginia": "WV",
    "wisconsin": "WI", "wyoming": "WY",
}

# Names that are both a state and a well-known U.S. city
AMBIGUOUS_PLACE_NAMES = frozenset({
    "new york",
    "washington",
    "georgia",
    "delaware",
    "indiana",
    "nevada",
    "virginia",
    "wyoming",
})


def _clean(raw: str) -> str:
    cleaned = raw.strip().lower()
    cleaned = cleaned.replace(".", "")
    cleaned = re.sub(r"^state of ", "", cleaned)
    cleaned = re.sub(r" state$", "", cleaned)
    cleaned = re.sub(r", ?usa?$", "", cleaned)
    cleaned = cleaned.replace(",", "")
    return re.sub(r"\s+", " ", cleaned).strip()


def normalize_state(raw: Optional[str]) -> Optional[str]:
    """
    Normalize a state name or abbreviation to its two-letter code.

    "Texas", "state of texas", "Texas, USA", "tx" and "T.X." all give "TX".

    Args:
        raw: State as written

    Returns:
        Two-letter uppercase code, or None when raw is not a state
    """
    if not raw or not isinstance(raw, str):
        return None

    cleaned = _clean(raw)
    if cleaned in US_STATES:
        return US_STATES[cleaned]
    if re.fullmatch(r"[a-z]{2}", cleaned):
        return cleaned.upper()
    return None


def is_ambiguous_place(raw: Optional[str]) -> bool:
    """True for names that read as both a city and a state ("New York")."""
    if not raw or not isinstance(raw, str):
        return False
    return _clean(raw) in AMBIGUOUS_PLACE_NAMES
