"""Lexicon configuration table."""

from pathlib import Path
from typing import Optional

from leadengine.application.dtos.base import DTO
from leadengine.domain.value_objects.question_type import QuestionType


class Lexicon(DTO):
    """
    Keyword tables consumed by the classifiers and extractors.

    Every field has a default so a deployment override file only needs to
    list what it changes.
    """

    version: str = "1"
    intent_priority: tuple[QuestionType, ...] = (
        QuestionType.PRICE,
        QuestionType.INTRODUCTION,
        QuestionType.TIMELINE,
        QuestionType.BOOKING,
        QuestionType.CONTACT,
    )
    intent_keywords: dict[QuestionType, tuple[str, ...]] = {
        QuestionType.PRICE: (
            "price",
            "cost",
            "expensive",
            "affordable",
            "payment",
            "finance",
            "how much",
        ),
        QuestionType.INTRODUCTION: (
            "what is",
            "what are",
            "tell me about",
            "explain",
            "introduce",
            "learn about",
        ),
        QuestionType.TIMELINE: ("how long", "duration", "time", "takes", "process", "steps"),
        QuestionType.BOOKING: ("book", "appointment", "schedule", "consultation", "visit"),
        QuestionType.CONTACT: ("email", "phone", "contact", "reach", "call"),
    }
    stopwords: tuple[str, ...] = (
        "the",
        "and",
        "for",
        "are",
        "you",
        "your",
        "with",
        "what",
        "how",
        "much",
        "does",
        "can",
        "about",
        "tell",
        "have",
        "need",
        "want",
        "would",
        "like",
        "know",
        "this",
        "that",
        "there",
        "from",
        "get",
        "any",
        "more",
        "info",
        "please",
        "thanks",
        "hello",
        "price",
        "cost",
    )
    min_token_length: int = 3
    token_similarity_threshold: float = 0.8
    message_similarity_threshold: float = 0.6
    affirmative_phrases: tuple[str, ...] = (
        "yes",
        "yeah",
        "sure",
        "okay",
        "ok",
        "yep",
        "yup",
        "definitely",
        "absolutely",
        "of course",
        "please",
    )
    closing_phrases: tuple[str, ...] = (
        "bye",
        "goodbye",
        "thanks",
        "thank you",
        "thanks bye",
        "thank you bye",
        "no thanks",
        "no thank you",
        "that's all",
        "that is all",
    )
    interest_markers: tuple[str, ...] = (
        "interested",
        "i'm keen",
        "sounds great",
        "love to",
    )
    contact_keywords: tuple[str, ...] = (
        "email",
        "e-mail",
        "mail",
        "phone",
        "call",
        "contact",
        "address",
        "reach",
        "cell",
        "mobile",
        "text me",
        "street",
        "zip",
        "postal",
    )
    name_stopwords: tuple[str, ...] = (
        "hi",
        "hello",
        "hey",
        "thanks",
        "thank",
        "you",
        "my",
        "name",
        "is",
        "i",
        "i'm",
        "the",
        "what",
        "how",
        "can",
        "please",
    )

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Lexicon":
        """
        Load a lexicon from a JSON file, or the defaults when no path is given.

        Args:
            path: Optional path to a JSON override file

        Returns:
            Lexicon instance

        Raises:
            FileNotFoundError: If the path does not exist
        """
        if not path:
            return cls()
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))
