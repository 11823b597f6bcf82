"""Tiered fuzzy matching of messages against a service catalog."""

import difflib
import math
import re
from typing import Optional, Sequence

from leadengine.application.dtos.business import ServiceCatalogEntry
from leadengine.application.dtos.lexicon import Lexicon

_TOKEN_PATTERN = re.compile(r"[a-z0-9]+")

EXACT_PHRASE_SCORE = 3
ALL_WORDS_SCORE = 2
MAJORITY_WORDS_SCORE = 1


def similarity(first: str, second: str) -> float:
    """Normalized [0, 1] similarity between two strings."""
    if not first or not second:
        return 0.0
    return difflib.SequenceMatcher(None, first.lower().strip(), second.lower().strip()).ratio()


def _significant_words(service_name: str) -> list[str]:
    words = _TOKEN_PATTERN.findall(service_name.lower())
    return [word for word in words if len(word) > 2]


class ServiceMatcher:
    """Scores a message against a catalog and returns the best service name."""

    def __init__(self, lexicon: Optional[Lexicon] = None) -> None:
        self._lexicon = lexicon or Lexicon()

    def match(self, message: str, catalog: Sequence[ServiceCatalogEntry]) -> Optional[str]:
        """
        Detect the service a message is about.

        Tiers are evaluated in order (exact phrase, all significant words,
        majority of significant words, fuzzy similarity); the first catalog
        entry that qualifies for the highest tier wins.

        Args:
            message: Raw user message
            catalog: Business service catalog, in catalog order

        Returns:
            Catalog service name, or None if nothing clears the fuzzy threshold
        """
        if not isinstance(message, str) or not catalog:
            return None
        services = [entry for entry in catalog if entry.name and entry.name.strip()]
        if not services:
            return None

        normalized = message.lower()
        tokens = _TOKEN_PATTERN.findall(normalized)

        for score in (EXACT_PHRASE_SCORE, ALL_WORDS_SCORE, MAJORITY_WORDS_SCORE):
            for entry in services:
                if self._score(entry.name, normalized, tokens) >= score:
                    return entry.name

        return self._fuzzy_match(normalized, tokens, services)

    def _score(self, service_name: str, normalized_message: str, tokens: list[str]) -> int:
        name = service_name.lower().strip()
        if name in normalized_message:
            return EXACT_PHRASE_SCORE

        words = _significant_words(name)
        if not words:
            return 0
        if len(words) > 1 and all(word in normalized_message for word in words):
            return ALL_WORDS_SCORE

        token_set = set(tokens)
        matched = sum(1 for word in words if word in token_set)
        if matched >= math.ceil(len(words) / 2):
            return MAJORITY_WORDS_SCORE
        return 0

    def _fuzzy_match(
        self,
        normalized_message: str,
        tokens: list[str],
        services: list[ServiceCatalogEntry],
    ) -> Optional[str]:
        stopwords = set(self._lexicon.stopwords)
        candidates = [
            token
            for token in tokens
            if len(token) >= self._lexicon.min_token_length and token not in stopwords
        ]

        for token in candidates:
            best_name, best_rating = self._best(token, services)
            if best_rating >= self._lexicon.token_similarity_threshold:
                return best_name

        best_name, best_rating = self._best(normalized_message, services)
        if best_rating >= self._lexicon.message_similarity_threshold:
            return best_name
        return None

    @staticmethod
    def _best(text: str, services: list[ServiceCatalogEntry]) -> tuple[Optional[str], float]:
        best_name: Optional[str] = None
        best_rating = 0.0
        for entry in services:
            rating = similarity(text, entry.name)
            if rating > best_rating:
                best_name, best_rating = entry.name, rating
        return best_name, best_rating
