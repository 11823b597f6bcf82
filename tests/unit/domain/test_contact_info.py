"""Unit tests for the ContactInfo value object."""

from datetime import datetime, timezone

from leadengine.domain.value_objects.contact_info import ContactInfo


def test_complete_when_all_fields_present():
    """Test completeness requires name, phone and email."""
    contact = ContactInfo(name="John Doe", phone="5551234567", email="j@x.com")

    assert contact.is_complete() is True
    assert contact.missing_fields() == []


def test_blank_fields_count_as_missing():
    """Test that whitespace-only values do not count."""
    contact = ContactInfo(name="  ", phone="5551234567", email=None)

    assert contact.is_complete() is False
    assert contact.missing_fields() == ["name", "email"]
    assert contact.has_any() is True


def test_empty_contact_has_nothing():
    """Test an empty contact."""
    contact = ContactInfo()

    assert contact.has_any() is False
    assert contact.missing_fields() == ["name", "email", "phone"]


def test_merge_newer_fields_win():
    """Test that merge keeps old fields and overrides with new non-blank ones."""
    stamp = datetime(2026, 1, 1, tzinfo=timezone.utc)
    existing = ContactInfo(name="John Doe", phone="5551234567")
    newer = ContactInfo(phone="5559876543", email="j@x.com", extracted_at=stamp)

    merged = existing.merge(newer)

    assert merged == ContactInfo(
        name="John Doe", phone="5559876543", email="j@x.com", extracted_at=stamp
    )
    # originals are untouched
    assert existing.email is None


def test_merge_ignores_blank_values():
    """Test that blank values never erase collected ones."""
    existing = ContactInfo(name="John Doe")

    merged = existing.merge(ContactInfo(name=""))

    assert merged.name == "John Doe"
