"""Question type value object."""

from enum import Enum


class QuestionType(str, Enum):
    """Coarse classification of what the user is asking about."""

    PRICE = "price"
    INTRODUCTION = "introduction"
    TIMELINE = "timeline"
    BOOKING = "booking"
    CONTACT = "contact"
