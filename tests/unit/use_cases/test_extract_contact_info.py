"""Unit tests for contact extraction helpers."""

import pytest

from leadengine.application.use_cases.extract_contact_info import (
    ContactExtractor,
    format_contact_info,
    get_missing_fields,
    has_complete_contact_info,
    is_valid_email,
    is_valid_phone,
)
from leadengine.domain.value_objects.contact_info import ContactInfo


@pytest.fixture
def extractor():
    """Create extractor with the default lexicon."""
    return ContactExtractor()


def test_structured_message_extracts_all_fields(extractor):
    """Test labelled segments are used verbatim."""
    contact = extractor.extract("name: John Doe, phone: 5551234567, email: j@x.com")

    assert contact.name == "John Doe"
    assert contact.phone == "5551234567"
    assert contact.email == "j@x.com"
    assert has_complete_contact_info(contact) is True


def test_free_text_extracts_each_field(extractor):
    """Test free-text extraction of name, phone and email."""
    contact = extractor.extract(
        "Hi, I'm John Smith, call me at 555-123-4567 or write to John.Smith@Example.com"
    )

    assert contact.name == "John Smith"
    assert contact.phone == "5551234567"
    assert contact.email == "John.Smith@Example.com"


def test_partial_structured_message_falls_back_to_free_text(extractor):
    """Test that missing labels fall back to free-text extraction."""
    contact = extractor.extract("phone: 555 123 4567")

    assert contact.phone == "5551234567"
    assert contact.name is None
    assert contact.email is None
    assert get_missing_fields(contact) == ["name", "email"]


def test_email_only(extractor):
    """Test a message with only an email."""
    contact = extractor.extract("sure, it's jane@example.org")

    assert contact == ContactInfo(email="jane@example.org")


def test_short_digit_runs_are_not_phones(extractor):
    """Test that digit runs under seven digits are ignored."""
    assert extractor.extract("I need 2 crowns for 300 dollars") is None


def test_greeting_words_are_not_names(extractor):
    """Test that capitalized greetings are not taken as names."""
    contact = extractor.extract("Hello There, my number is 5551234567")

    assert contact.name is None
    assert contact.phone == "5551234567"


def test_name_after_introduction(extractor):
    """Test that a name following an introduction phrase is found."""
    contact = extractor.extract("My name is Sarah Connor")

    assert contact.name == "Sarah Connor"


@pytest.mark.parametrize("message", [None, "", "   ", 12345])
def test_invalid_input_returns_none(extractor, message):
    """Test that bad input yields None rather than an error."""
    assert extractor.extract(message) is None


def test_format_contact_info_normalizes_fields():
    """Test phone digits-only, lower-cased email and a timestamp."""
    formatted = format_contact_info(
        ContactInfo(name=" John Doe ", phone="+1 (555) 123-4567", email="J@X.COM ")
    )

    assert formatted.name == "John Doe"
    assert formatted.phone == "15551234567"
    assert formatted.email == "j@x.com"
    assert formatted.extracted_at is not None


def test_has_complete_contact_info_rejects_none_and_blanks():
    """Test completeness edge cases."""
    assert has_complete_contact_info(None) is False
    assert has_complete_contact_info(ContactInfo(name="A B", phone="", email="a@b.co")) is False
    assert get_missing_fields(None) == ["name", "email", "phone"]


def test_structured_message_with_invalid_phone_falls_back(extractor):
    """Test that a labelled phone with too few digits is not used verbatim."""
    contact = extractor.extract("name: John Doe, phone: 12, email: j@x.com")

    assert contact.phone is None
    assert contact.email == "j@x.com"
    assert has_complete_contact_info(contact) is False


@pytest.mark.parametrize(
    "phone,email,expected",
    [
        ("555 123 4567", "j@x.com", (True, True)),
        ("12", "not-an-email", (False, False)),
        ("5551234567", "jane@example", (True, False)),
        (None, None, (False, False)),
    ],
)
def test_phone_and_email_validity(phone, email, expected):
    """Test the phone digit count and email shape checks."""
    assert (is_valid_phone(phone), is_valid_email(email)) == expected
