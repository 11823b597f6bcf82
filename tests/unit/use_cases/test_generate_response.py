"""Unit tests for ResponseGenerator."""

import pytest

from leadengine.application.dtos.business import (
    BusinessContactDetails,
    FAQEntry,
    ServiceCatalogEntry,
)
from leadengine.application.use_cases.generate_response import ResponseGenerator
from leadengine.domain.entities.session import USER_ROLE, ChatMessage, Session
from leadengine.domain.value_objects.contact_info import ContactInfo
from leadengine.domain.value_objects.question_type import QuestionType


@pytest.fixture
def catalog():
    """Create a catalog with full metadata for Veneers."""
    return [
        ServiceCatalogEntry(
            name="Veneers",
            description="custom-made, ultra-thin porcelain shells",
            benefits="transform your smile with natural-looking results",
            timeline="2-3 weeks from consultation to final placement",
            price="$800-$2,500 per tooth",
        ),
        ServiceCatalogEntry(name="Teeth Whitening"),
    ]


@pytest.fixture
def generator():
    """Create generator with the default lexicon."""
    return ResponseGenerator()


def _session(current_service=None, last_message="hello"):
    session = Session(session_id="s1", business_id="demo-dental", current_service=current_service)
    session.append_message(ChatMessage(role=USER_ROLE, content=last_message))
    return session


def test_price_reply_includes_range_and_contact_request(generator, catalog):
    """Test the price template and its follow-up."""
    reply = generator.generate(_session("Veneers"), catalog, QuestionType.PRICE)

    assert "For Veneers, the investment typically ranges from $800-$2,500 per tooth." in reply
    assert "flexible payment plans" in reply
    assert "please share your name, phone number, and email address" in reply


def test_interest_marker_uses_interest_template(generator, catalog):
    """Test that enthusiasm in the last user message picks the interest template."""
    session = _session("Veneers", last_message="I'm really interested in veneers")

    reply = generator.generate(session, catalog, None)

    assert reply.startswith("Great choice! Veneers is an excellent option.")
    assert "custom-made, ultra-thin porcelain shells" in reply
    assert "Would you like to schedule a consultation?" in reply


def test_booking_reply_asks_for_contact(generator, catalog):
    """Test the booking prompt."""
    reply = generator.generate(_session("Veneers", last_message="yes"), catalog, QuestionType.BOOKING)

    assert "book your Veneers consultation" in reply
    assert "please share your name, phone number, and email address" in reply


def test_generic_reply_uses_metadata_and_call_to_action(generator, catalog):
    """Test the informative reply."""
    reply = generator.generate(_session("Veneers"), catalog, QuestionType.TIMELINE)

    assert "Veneers: custom-made, ultra-thin porcelain shells." in reply
    assert "Typical timeline: 2-3 weeks from consultation to final placement." in reply
    assert reply.endswith(
        "Just share your name, phone number, and email address and we'll be in touch."
    )


def test_generic_reply_without_metadata_still_has_call_to_action(generator, catalog):
    """Test a service without description or price."""
    reply = generator.generate(_session("Teeth Whitening"), catalog, QuestionType.PRICE)

    assert "Pricing depends on your individual treatment plan for Teeth Whitening." in reply
    assert "Teeth Whitening" in reply


def test_no_current_service_asks_to_clarify(generator, catalog):
    """Test the fallback clarifying prompt lists catalog services."""
    reply = generator.generate(_session(None), catalog, QuestionType.PRICE)

    assert "Which of our services are you interested in?" in reply
    assert "Veneers, Teeth Whitening" in reply


def test_unknown_current_service_asks_to_clarify(generator, catalog):
    """Test that a service missing from the catalog falls back."""
    reply = generator.generate(_session("Braces"), catalog, QuestionType.PRICE)

    assert "Which of our services" in reply


def test_answer_faq_by_similarity(generator):
    """Test FAQ answering for a close question."""
    faqs = [
        FAQEntry(question="Do you accept dental insurance?", answer="Yes, most plans."),
        FAQEntry(question="What are your opening hours?", answer="Mon-Fri 8-6."),
    ]

    reply = generator.answer_faq("Do you accept insurance?", faqs)

    assert reply.startswith("Yes, most plans.")


def test_answer_faq_by_shared_keywords(generator):
    """Test FAQ answering through shared keywords."""
    faqs = [FAQEntry(question="Do you handle dental emergencies?", answer="Same-day slots.")]

    reply = generator.answer_faq("emergencies on weekends, is that something dental staff handle", faqs)

    assert reply.startswith("Same-day slots.")


def test_answer_faq_none_when_unrelated(generator):
    """Test that unrelated messages get no FAQ answer."""
    faqs = [FAQEntry(question="Do you accept dental insurance?", answer="Yes.")]

    assert generator.answer_faq("Where can I park?", faqs) is None
    assert generator.answer_faq("Do you accept insurance?", []) is None


def test_ask_for_missing_contact_names_missing_fields(generator):
    """Test the incremental capture prompt."""
    reply = generator.ask_for_missing_contact(ContactInfo(name="John Doe", phone="5551234567"))

    assert reply == (
        "Thanks, John Doe! To complete your request, could you please also share your "
        "email address?"
    )


def test_service_unavailable_mentions_phone_when_known(generator):
    """Test the outage reply."""
    reply = generator.service_unavailable(BusinessContactDetails(phone="(555) 010-2030"))

    assert "having trouble accessing our service information" in reply
    assert "(555) 010-2030" in reply
    assert "call us" not in generator.service_unavailable(None)


def test_generic_reply_lists_features(generator):
    """Test that catalog features are part of the informative reply."""
    catalog = [
        ServiceCatalogEntry(
            name="Dental Implants",
            description="permanent replacement teeth",
            features="titanium posts, natural-looking crowns",
        )
    ]

    reply = generator.generate(_session("Dental Implants"), catalog, QuestionType.TIMELINE)

    assert "Highlights: titanium posts, natural-looking crowns." in reply


def test_goodbye_addresses_contact_by_name(generator):
    """Test the closing reply."""
    reply = generator.goodbye(ContactInfo(name="Jane Smith", phone="5551234567", email="j@x.com"))

    assert reply.startswith("Thank you for chatting with us, Jane Smith!")
