"""
Extraction prompts

These prompts instruct the model to turn a search sentence into a fixed JSON
filter record. The model only extracts; every value is normalized again in
code, so the rules below describe intent rather than guarantee it.
"""

from ...normalizers import PROPERTY_STATUSES, LEASE_STATUSES


def build_property_extraction_prompt(user_text: str) -> str:
    """Build the property filter extraction prompt."""

    statuses = ", ".join(f'"{s}"' for s in PROPERTY_STATUSES)

    return f"""You are an expert commercial real-estate query parser. Extract the user's intent and convert it into structured JSON.

Return ONLY valid JSON, with exactly these keys:

{{
  "location": string | null,
  "radius_m": number | null,
  "property_type": string | null,
  "status": string | null,
  "min_price": number | null,
  "max_price": number | null,
  "min_cap_rate": number | null,
  "max_cap_rate": number | null,
  "city": string | null,
  "state": string | null
}}

RULES:
1. RADIUS vs REGION
   - Only when the text gives an explicit distance ("within 10 miles", "5 km radius"):
     put the reference place in "location", the distance in METERS in "radius_m",
     and leave "city" and "state" null.
   - Without an explicit distance, a named city goes in "city" and a named U.S. state
     goes in "state"; "radius_m" stays null. Never fill both radius_m and city/state.
   - A street address without a distance goes in "location" only.
   - Drop filler words from "location": "near", "around", "outside", "close to", "next to".
2. PRICE
   - Convert to whole dollars: "750k" -> 750000, "2m" / "2 million" -> 2000000.
   - "above", "over", "more than", "at least" -> min_price.
   - "under", "below", "less than", "up to", "at most" -> max_price.
   - "between X and Y" -> min_price X, max_price Y.
   - A bare price with no comparison word is a max_price.
3. CAP RATE
   - Percentage points, no "%": "cap rate above 5%" -> min_cap_rate 5.
   - Same comparison words as price.
4. DISTANCE
   - Meters: 1 mile = 1609.344 m, 1 km = 1000 m. "10 miles" -> 16093.
5. STATUS
   - Map to exactly one of: {statuses}. "vacant" -> "Available", "pending" -> "Under Contract".
   - Null when no status is mentioned.
6. PROPERTY TYPE
   - Copy the user's property type as written, singular and capitalized ("warehouses" -> "Warehouse").
7. Use null for anything not stated. Do not guess.

User text: "{user_text}"
"""


def build_lease_extraction_prompt(user_text: str) -> str:
    """Build the lease filter extraction prompt."""

    statuses = " | ".join(f'"{s}"' for s in LEASE_STATUSES)

    return f"""You are a lease search query parser.

Extract filters that already exist in the system.

Return ONLY valid JSON:

{{
  "tenant": string | null,
  "landlord": string | null,
  "property_name": string | null,
  "status": {statuses} | null,
  "lease_start_from": string | null,
  "lease_end_to": string | null
}}

RULES:
- Dates are ISO 8601 (YYYY-MM-DD).
- "lease_start_from" is the earliest lease start the user wants; "lease_end_to" the latest lease end.
- Use null for anything not stated.

User query: "{user_text}"
"""
