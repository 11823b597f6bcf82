"""Heuristic PII detection and redaction."""

import re
from typing import Optional

from leadengine.application.dtos.lexicon import Lexicon

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_LIKE_PATTERN = re.compile(r"\+?\(?\d[\d\s().-]{5,}\d")

MIN_PHONE_DIGITS = 7
MAX_PHONE_DIGITS = 14
SHORT_MESSAGE_LENGTH = 35
DEFAULT_PLACEHOLDER = "[REDACTED]"


class PIIGuard:
    """
    Judges whether text carries an email or phone number and redacts it.

    A digit run only counts as a phone number when it has a phone-like digit
    count and either a contact keyword appears in the text or the text is
    short, so order numbers and dates in longer messages are left alone.
    """

    def __init__(self, lexicon: Optional[Lexicon] = None) -> None:
        self._lexicon = lexicon or Lexicon()

    def contains_potential_pii(self, text: str) -> bool:
        """
        Check whether text contains a potential email or phone number.

        Args:
            text: Text to inspect

        Returns:
            True if potential PII is detected
        """
        if not isinstance(text, str) or not text:
            return False
        if EMAIL_PATTERN.search(text):
            return True
        return self.contains_potential_phone(text)

    def contains_potential_phone(self, text: str) -> bool:
        """
        Check whether text carries a digit run that reads as a phone number.

        A run with a phone-like digit count counts when the text mentions a
        contact keyword or an email address, or is short. Order numbers and
        dates in longer messages do not.

        Args:
            text: Text to inspect

        Returns:
            True if a plausible phone number is present
        """
        if not isinstance(text, str) or not text:
            return False
        phone_like = [
            match.group(0)
            for match in PHONE_LIKE_PATTERN.finditer(text)
            if MIN_PHONE_DIGITS <= len(re.sub(r"\D", "", match.group(0))) <= MAX_PHONE_DIGITS
        ]
        if not phone_like:
            return False

        lowered = text.lower()
        if any(keyword in lowered for keyword in self._lexicon.contact_keywords):
            return True
        if EMAIL_PATTERN.search(text):
            return True
        return len(text) < SHORT_MESSAGE_LENGTH

    def redact(self, text: str, placeholder: str = DEFAULT_PLACEHOLDER) -> str:
        """
        Replace emails and plausible phone numbers with a placeholder.

        Args:
            text: Text to sanitize
            placeholder: Replacement string

        Returns:
            Sanitized text, or the input unchanged if it is not a string
        """
        if not isinstance(text, str) or not text:
            return text
        redacted = EMAIL_PATTERN.sub(placeholder, text)

        def _replace_phone(match: re.Match) -> str:
            span = match.group(0)
            return placeholder if self.contains_potential_pii(span) else span

        return PHONE_LIKE_PATTERN.sub(_replace_phone, redacted)
