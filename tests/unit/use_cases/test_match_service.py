"""Unit tests for ServiceMatcher."""

import pytest

from leadengine.application.dtos.business import ServiceCatalogEntry
from leadengine.application.use_cases.match_service import ServiceMatcher, similarity


@pytest.fixture
def catalog():
    """Create a small dental catalog."""
    return [
        ServiceCatalogEntry(name="Cosmetic Dentistry", price="$300-$5,000+"),
        ServiceCatalogEntry(name="Veneers", price="$800-$2,500 per tooth"),
        ServiceCatalogEntry(name="Teeth Whitening", price="$200-$1,000"),
        ServiceCatalogEntry(name="Dental Implants", price="$3,000-$4,500 per implant"),
        ServiceCatalogEntry(name="Root Canal Treatment", price="$700-$1,500 per tooth"),
    ]


@pytest.fixture
def matcher():
    """Create matcher with the default lexicon."""
    return ServiceMatcher()


def test_exact_phrase_match(matcher, catalog):
    """Test that a catalog name contained in the message is detected."""
    assert matcher.match("What's the price for Veneers?", catalog) == "Veneers"


def test_exact_phrase_beats_earlier_partial_match(matcher, catalog):
    """Test tier ordering: an exact phrase wins over an earlier entry's word match."""
    message = "Is cosmetic work needed before teeth whitening?"

    # "cosmetic" alone gives Cosmetic Dentistry a majority-words score
    assert matcher.match(message, catalog) == "Teeth Whitening"


def test_all_significant_words_match(matcher, catalog):
    """Test that all significant words in any order are detected."""
    assert matcher.match("do you do implants? dental ones", catalog) == "Dental Implants"


def test_majority_of_words_match(matcher, catalog):
    """Test that a majority of significant words is enough."""
    assert matcher.match("I think I need a root canal", catalog) == "Root Canal Treatment"


def test_fuzzy_token_match_handles_singular(matcher, catalog):
    """Test that a close token (singular form) is matched fuzzily."""
    assert matcher.match("how much is a veneer", catalog) == "Veneers"


def test_no_match_returns_none(matcher, catalog):
    """Test that unrelated messages detect nothing."""
    assert matcher.match("Do you have parking?", catalog) is None


def test_empty_catalog_or_bad_input(matcher, catalog):
    """Test absent results for empty catalog and non-string input."""
    assert matcher.match("Veneers", []) is None
    assert matcher.match(None, catalog) is None


def test_first_catalog_entry_wins_ties(matcher):
    """Test that ties at the same tier go to the earlier catalog entry."""
    catalog = [
        ServiceCatalogEntry(name="Whitening"),
        ServiceCatalogEntry(name="Whitening"),
    ]

    assert matcher.match("whitening please", catalog) == "Whitening"


def test_match_is_deterministic(matcher, catalog):
    """Test that matching the same input is stable."""
    results = {matcher.match("tell me about dental implant options", catalog) for _ in range(5)}

    assert results == {"Dental Implants"}


def test_similarity_bounds():
    """Test similarity edge values."""
    assert similarity("veneers", "Veneers") == 1.0
    assert similarity("", "Veneers") == 0.0
    assert 0.0 < similarity("veneer", "veneers") < 1.0
