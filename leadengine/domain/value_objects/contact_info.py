"""Contact info value object."""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

CONTACT_FIELDS = ("name", "email", "phone")


def _present(value: Optional[str]) -> bool:
    return isinstance(value, str) and bool(value.strip())


@dataclass(frozen=True)
class ContactInfo:
    """Name, phone and email fragments collected from a visitor."""

    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    extracted_at: Optional[datetime] = None

    def is_complete(self) -> bool:
        """Check that name, email and phone are all non-blank."""
        return all(_present(getattr(self, field)) for field in CONTACT_FIELDS)

    def missing_fields(self) -> list[str]:
        """Return the contact fields that are still missing."""
        return [field for field in CONTACT_FIELDS if not _present(getattr(self, field))]

    def has_any(self) -> bool:
        """Check whether at least one field has been collected."""
        return any(_present(getattr(self, field)) for field in CONTACT_FIELDS)

    def merge(self, other: "ContactInfo") -> "ContactInfo":
        """
        Merge newer fragments over this contact.

        Args:
            other: Contact fragments extracted from a later message

        Returns:
            New contact where every field present in ``other`` wins
        """
        return replace(
            self,
            name=other.name if _present(other.name) else self.name,
            phone=other.phone if _present(other.phone) else self.phone,
            email=other.email if _present(other.email) else self.email,
            extracted_at=other.extracted_at or self.extracted_at,
        )
