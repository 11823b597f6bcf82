"""Keyword-based intent classification."""

import re
from typing import Optional

from leadengine.application.dtos.lexicon import Lexicon
from leadengine.domain.value_objects.question_type import QuestionType

_PUNCTUATION_PATTERN = re.compile(r"[^\w\s']+")


class IntentClassifier:
    """Maps a message to a question type using the lexicon's keyword sets."""

    def __init__(self, lexicon: Optional[Lexicon] = None) -> None:
        self._lexicon = lexicon or Lexicon()

    def classify(self, message: str) -> Optional[QuestionType]:
        """
        Classify a message.

        Intents are checked in the lexicon's priority order and the first one
        with a keyword contained in the message wins.

        Args:
            message: Raw user message

        Returns:
            Detected question type, or None if no keyword matches
        """
        if not isinstance(message, str):
            return None
        normalized = message.lower()
        for question_type in self._lexicon.intent_priority:
            keywords = self._lexicon.intent_keywords.get(question_type, ())
            if any(keyword in normalized for keyword in keywords):
                return question_type
        return None

    def is_affirmative(self, message: str) -> bool:
        """Check whether the whole message is an affirmative phrase."""
        if not isinstance(message, str):
            return False
        return message.lower().strip() in self._lexicon.affirmative_phrases

    def is_closing(self, message: str) -> bool:
        """Check whether the whole message is a goodbye or a closing thanks."""
        if not isinstance(message, str):
            return False
        normalized = " ".join(_PUNCTUATION_PATTERN.sub(" ", message.lower()).split())
        return normalized in self._lexicon.closing_phrases
