"""Contact information extraction from chat messages."""

import re
from datetime import datetime, timezone
from typing import Optional

from leadengine.application.dtos.lexicon import Lexicon
from leadengine.domain.value_objects.contact_info import ContactInfo

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_PATTERN = re.compile(r"\+?\(?\d[\d\s().-]{5,}\d")
NAME_PATTERN = re.compile(r"\b[A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+){1,2}\b")
LABELED_SEGMENT_PATTERN = re.compile(r"\b(name|phone|email)\s*:\s*([^,\n]+)", re.IGNORECASE)

MIN_PHONE_DIGITS = 7


def _digits(value: str) -> str:
    return re.sub(r"\D", "", value)


def is_valid_phone(phone: Optional[str]) -> bool:
    """Check that a phone number carries at least the minimum digit count."""
    return isinstance(phone, str) and len(_digits(phone)) >= MIN_PHONE_DIGITS


def is_valid_email(email: Optional[str]) -> bool:
    """Check that an email address is well formed."""
    return isinstance(email, str) and EMAIL_PATTERN.fullmatch(email.strip()) is not None


def format_contact_info(contact: ContactInfo) -> ContactInfo:
    """
    Normalize a contact for storage and stamp it with the extraction time.

    Phone numbers keep digits only and emails are lower-cased.

    Args:
        contact: Contact fragments as extracted

    Returns:
        Normalized contact
    """
    phone = _digits(contact.phone) if contact.phone else None
    return ContactInfo(
        name=contact.name.strip() if contact.name and contact.name.strip() else None,
        phone=phone or None,
        email=contact.email.strip().lower() if contact.email and contact.email.strip() else None,
        extracted_at=datetime.now(timezone.utc),
    )


def has_complete_contact_info(contact: Optional[ContactInfo]) -> bool:
    """Check that name, email and phone are all present and non-blank."""
    return contact is not None and contact.is_complete()


def get_missing_fields(contact: Optional[ContactInfo]) -> list[str]:
    """Return the subset of name, email and phone that is still missing."""
    if contact is None:
        return ContactInfo().missing_fields()
    return contact.missing_fields()


class ContactExtractor:
    """Pulls name, phone and email out of a message."""

    def __init__(self, lexicon: Optional[Lexicon] = None) -> None:
        self._lexicon = lexicon or Lexicon()

    def extract(self, message: str) -> Optional[ContactInfo]:
        """
        Extract contact fragments from a message.

        Labelled ``name:``/``phone:``/``email:`` segments are used verbatim
        when all three are present; otherwise each field is searched for
        independently in free text.

        Args:
            message: Raw user message

        Returns:
            Contact with the fields found, or None if nothing was found
        """
        if not isinstance(message, str) or not message.strip():
            return None
        return self._extract_structured(message) or self._extract_free_text(message)

    def _extract_structured(self, message: str) -> Optional[ContactInfo]:
        segments: dict[str, str] = {}
        for label, value in LABELED_SEGMENT_PATTERN.findall(message):
            segments.setdefault(label.lower(), value.strip())
        if not all(segments.get(field) for field in ("name", "phone", "email")):
            return None
        if not is_valid_phone(segments["phone"]) or not is_valid_email(segments["email"]):
            return None
        return ContactInfo(
            name=segments["name"],
            phone=segments["phone"],
            email=segments["email"],
        )

    def _extract_free_text(self, message: str) -> Optional[ContactInfo]:
        email_match = EMAIL_PATTERN.search(message)
        email = email_match.group(0) if email_match else None

        remainder = EMAIL_PATTERN.sub(" ", message)
        phone = None
        for phone_match in PHONE_PATTERN.finditer(remainder):
            digits = _digits(phone_match.group(0))
            if len(digits) >= MIN_PHONE_DIGITS:
                phone = digits
                break

        name = self._find_name(remainder)

        if not (email or phone or name):
            return None
        return ContactInfo(name=name, phone=phone, email=email)

    def _find_name(self, text: str) -> Optional[str]:
        stopwords = set(self._lexicon.name_stopwords)
        for candidate in NAME_PATTERN.finditer(text):
            words = candidate.group(0).split()
            kept = [word for word in words if word.lower() not in stopwords]
            if len(kept) >= 2 and kept == words[len(words) - len(kept) :]:
                return " ".join(kept)
        return None
