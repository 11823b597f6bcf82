"""Template-based reply generation."""

import re
from typing import Optional, Sequence

from leadengine.application.dtos.business import (
    BusinessContactDetails,
    FAQEntry,
    ServiceCatalogEntry,
)
from leadengine.application.dtos.lexicon import Lexicon
from leadengine.application.use_cases.match_service import similarity
from leadengine.application.use_cases.user_messages_en import UserMessagesEN
from leadengine.domain.entities.session import Session
from leadengine.domain.value_objects.contact_info import ContactInfo
from leadengine.domain.value_objects.question_type import QuestionType

FAQ_SIMILARITY_THRESHOLD = 0.6
MIN_FAQ_SHARED_KEYWORDS = 2
MAX_LISTED_SERVICES = 4

_WORD_PATTERN = re.compile(r"[a-z0-9']+")


class ResponseGenerator:
    """Builds replies from catalog metadata and the session context."""

    def __init__(self, lexicon: Optional[Lexicon] = None) -> None:
        self._lexicon = lexicon or Lexicon()

    def generate(
        self,
        session: Session,
        catalog: Sequence[ServiceCatalogEntry],
        question_type: Optional[QuestionType],
    ) -> str:
        """
        Generate the reply for the current turn.

        Args:
            session: Session after context tracking
            catalog: Service catalog of the business
            question_type: Intent of the current turn, if any

        Returns:
            Reply text ending with a next-step prompt
        """
        entry = self._find_entry(session.current_service, catalog)
        if entry is None:
            return UserMessagesEN.clarify_service(
                [service.name for service in catalog][:MAX_LISTED_SERVICES]
            )

        if question_type == QuestionType.PRICE:
            price_reply = (
                UserMessagesEN.price(entry.name, entry.price)
                if entry.price
                else UserMessagesEN.price_on_request(entry.name)
            )
            return f"{price_reply} {UserMessagesEN.price_follow_up(entry.name)}"

        if self._shows_interest(session):
            interest = UserMessagesEN.interest(
                entry.name, entry.description, entry.benefits, entry.price
            )
            return f"{interest} {UserMessagesEN.INTEREST_FOLLOW_UP}"

        if question_type == QuestionType.BOOKING:
            return UserMessagesEN.booking(entry.name)

        overview = UserMessagesEN.service_overview(
            entry.name,
            entry.description,
            entry.benefits,
            entry.timeline,
            features=entry.features,
        )
        return f"{overview} {UserMessagesEN.call_to_action(entry.name)}"

    def answer_faq(self, message: str, faqs: Sequence[FAQEntry]) -> Optional[str]:
        """
        Answer a message from the business FAQs.

        Args:
            message: Raw user message
            faqs: FAQ entries of the business

        Returns:
            FAQ answer followed by a call to action, or None if no FAQ fits
        """
        if not isinstance(message, str) or not message.strip() or not faqs:
            return None

        message_keywords = self._keywords(message)
        best: Optional[FAQEntry] = None
        best_rating = 0.0
        for faq in faqs:
            rating = similarity(message, faq.question)
            shared = len(message_keywords & self._keywords(faq.question))
            if rating < FAQ_SIMILARITY_THRESHOLD and shared < MIN_FAQ_SHARED_KEYWORDS:
                continue
            # keyword hits rank below any direct similarity match
            score = rating if rating >= FAQ_SIMILARITY_THRESHOLD else shared / 100
            if best is None or score > best_rating:
                best, best_rating = faq, score

        if best is None:
            return None
        return f"{best.answer} {UserMessagesEN.FAQ_CALL_TO_ACTION}"

    @staticmethod
    def ask_for_missing_contact(contact: ContactInfo) -> str:
        """Ask for whatever contact fields are still missing."""
        return UserMessagesEN.ask_missing_contact(contact.name, contact.missing_fields())

    @staticmethod
    def goodbye(contact: ContactInfo) -> str:
        return UserMessagesEN.goodbye(contact.name)

    @staticmethod
    def service_unavailable(contact_details: Optional[BusinessContactDetails] = None) -> str:
        """Canned recovery reply used when business data cannot be loaded."""
        phone = contact_details.phone if contact_details else None
        return UserMessagesEN.service_unavailable(phone)

    @staticmethod
    def _find_entry(
        service_name: Optional[str],
        catalog: Sequence[ServiceCatalogEntry],
    ) -> Optional[ServiceCatalogEntry]:
        if not service_name:
            return None
        for entry in catalog:
            if entry.name == service_name:
                return entry
        return None

    def _shows_interest(self, session: Session) -> bool:
        last_user_message = session.last_user_message()
        if last_user_message is None:
            return False
        content = last_user_message.content.lower()
        return any(marker in content for marker in self._lexicon.interest_markers)

    def _keywords(self, text: str) -> set[str]:
        stopwords = set(self._lexicon.stopwords)
        return {
            word
            for word in _WORD_PATTERN.findall(text.lower())
            if len(word) >= self._lexicon.min_token_length and word not in stopwords
        }
