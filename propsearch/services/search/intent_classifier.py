"""
Intent classifier - decides whether search text goes through assisted
(language model) extraction or a plain substring search.

Rules run in a fixed order and the first match wins. The street-address rule
runs before the financial rule because house numbers would otherwise look
like amounts.
"""

import re
from typing import Iterable, Optional

from ...models import QueryIntent


# "351 Quarry", "12 Main St"
ADDRESS_PATTERN = re.compile(r"^\s*\d+\s+[a-z]", re.IGNORECASE)

# "750k", "2 million", "5%", "cap rate", "above", "between ... and ..."
FINANCIAL_PATTERN = re.compile(
    r"\d+(?:\.\d+)?\s*(?:k|m|b|mm|bn|million|billion)\b"
    r"|\d+(?:\.\d+)?\s*(?:%|percent\b)"
    r"|\bcap\s*rates?\b"
    r"|\b(?:above|below|over|under|more than|less than|between|to)\b",
    re.IGNORECASE,
)

# Spatial and intent vocabulary
SPATIAL_KEYWORDS = (
    "near",
    "nearby",
    "around",
    "within",
    "radius",
    "distance",
    "close to",
    "next to",
    "beside",
    "km",
    "kms",
    "kilometer",
    "kilometers",
    "kilometre",
    "kilometres",
    "mile",
    "miles",
    "meter",
    "meters",
    "metre",
    "metres",
    "find",
    "show me",
    "search for",
    "looking for",
    "properties in",
    "property in",
    "buildings in",
    "listings in",
)

# Lease list vocabulary
LEASE_KEYWORDS = (
    "active",
    "expired",
    "expiring",
    "ending",
    "starting",
    "before",
    "after",
    "this month",
    "next month",
    "last year",
    "tenant",
    "landlord",
)

QUESTION_PATTERN = re.compile(
    r"^\s*(?:where|find|show|list|get|search|what|which|who)\b",
    re.IGNORECASE,
)


def _keyword_pattern(keywords: Iterable[str]) -> re.Pattern:
    alternatives = sorted({k.strip().lower() for k in keywords if k.strip()}, key=len, reverse=True)
    escaped = [re.escape(k).replace(r"\ ", r"\s+") for k in alternatives]
    return re.compile(r"\b(?:" + "|".join(escaped) + r")\b", re.IGNORECASE)


class IntentClassifier:
    """
    Classifies search text as TRADITIONAL or ASSISTED.

    Attributes:
        keyword_pattern: Compiled spatial/intent vocabulary (rule 4)
    """

    def __init__(self, extra_keywords: Optional[Iterable[str]] = None):
        """
        Args:
            extra_keywords: Vocabulary added to the spatial/intent keywords
        """
        keywords = list(SPATIAL_KEYWORDS)
        if extra_keywords:
            keywords.extend(extra_keywords)
        self.keyword_pattern = _keyword_pattern(keywords)

    def classify(self, text: Optional[str]) -> QueryIntent:
        """
        Classify free text.

        Args:
            text: Raw search input

        Returns:
            QueryIntent.ASSISTED for natural-language queries, otherwise
            QueryIntent.TRADITIONAL
        """
        if text is None or not text.strip():
            return QueryIntent.TRADITIONAL

        if ADDRESS_PATTERN.search(text):
            return QueryIntent.TRADITIONAL

        if FINANCIAL_PATTERN.search(text):
            return QueryIntent.ASSISTED

        if self.keyword_pattern.search(text):
            return QueryIntent.ASSISTED

        if QUESTION_PATTERN.search(text):
            return QueryIntent.ASSISTED

        return QueryIntent.TRADITIONAL


_default_classifier = IntentClassifier()
lease_classifier = IntentClassifier(extra_keywords=LEASE_KEYWORDS)


def classify(text: Optional[str]) -> QueryIntent:
    """Classify text with the default property vocabulary."""
    return _default_classifier.classify(text)
