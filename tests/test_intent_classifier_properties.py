"""
Property-based tests for intent classification.

Classification rules run in a fixed order; these tests pin the ordering
guarantees (street address before financial terms, financial terms before
vocabulary) across generated inputs.
"""

from hypothesis import given, settings, strategies as st

from propsearch.models import QueryIntent
from propsearch.services.search.intent_classifier import IntentClassifier, classify, lease_classifier


street_words = st.sampled_from(["Quarry", "Main", "Oak", "Elm", "Broadway", "Pine", "Market"])
house_numbers = st.integers(min_value=1, max_value=99999)
spatial_tails = st.sampled_from(["near the park", "around downtown", "within 5 miles", "close to the school"])
numbers = st.integers(min_value=1, max_value=99)


@given(number=house_numbers, street=street_words, tail=spatial_tails)
@settings(max_examples=100)
def test_street_address_is_traditional_even_with_spatial_words(number, street, tail):
    """
    A query starting with a house number is a plain address search, even if
    it goes on to mention a spatial keyword.
    """
    text = f"{number} {street} {tail}"
    assert classify(text) == QueryIntent.TRADITIONAL


@given(number=numbers, prefix=st.sampled_from(["cap rate above", "yield", "returns of", ""]))
@settings(max_examples=100)
def test_percentage_is_assisted(number, prefix):
    """Any number followed by a percent sign routes to assisted search."""
    text = f"{prefix} {number}%".strip()
    assert classify(text) == QueryIntent.ASSISTED


def test_known_examples():
    """Test the documented examples."""
    assert classify("351 Quarry near the park") == QueryIntent.TRADITIONAL
    assert classify("cap rate above 5%") == QueryIntent.ASSISTED
    assert classify("hello") == QueryIntent.TRADITIONAL
    assert classify("warehouses near Dallas within 10 miles under 2 million") == QueryIntent.ASSISTED


def test_empty_text_is_traditional():
    """Test that empty and whitespace input never reaches the model."""
    assert classify("") == QueryIntent.TRADITIONAL
    assert classify("   ") == QueryIntent.TRADITIONAL
    assert classify(None) == QueryIntent.TRADITIONAL


def test_financial_terms_are_assisted():
    """Test amount suffixes and comparison words."""
    assert classify("office 750k") == QueryIntent.ASSISTED
    assert classify("retail under 2 million") == QueryIntent.ASSISTED
    assert classify("properties between 1m and 3m") == QueryIntent.ASSISTED


def test_question_words_are_assisted():
    """Test that leading question words route to assisted search."""
    assert classify("where are the vacant lots") == QueryIntent.ASSISTED
    assert classify("which buildings are leased") == QueryIntent.ASSISTED


def test_plain_names_are_traditional():
    """Test that bare names and words stay on the substring path."""
    assert classify("Riverside Plaza") == QueryIntent.TRADITIONAL
    assert classify("Dallas") == QueryIntent.TRADITIONAL


def test_keywords_match_whole_words_only():
    """Test that 'near' inside another word is not a spatial keyword."""
    assert classify("Nearwood Estates") == QueryIntent.TRADITIONAL


def test_extra_keywords_extend_vocabulary():
    """Test that a classifier with extra vocabulary keeps the base rules."""
    classifier = IntentClassifier(extra_keywords=["portfolio"])
    assert classifier.classify("Acme portfolio") == QueryIntent.ASSISTED
    assert classifier.classify("12 Main portfolio") == QueryIntent.TRADITIONAL
    assert classify("Acme portfolio") == QueryIntent.TRADITIONAL


def test_lease_vocabulary():
    """Test the lease list classifier."""
    assert lease_classifier.classify("leases expiring next month") == QueryIntent.ASSISTED
    assert lease_classifier.classify("tenant Acme Corp") == QueryIntent.ASSISTED
    assert lease_classifier.classify("Acme") == QueryIntent.TRADITIONAL
