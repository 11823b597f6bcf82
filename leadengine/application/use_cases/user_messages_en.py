"""English user-facing messages for the lead capture assistant."""

from typing import Optional, Sequence


def _join_fields(fields: Sequence[str]) -> str:
    labels = {"name": "full name", "phone": "phone number", "email": "email address"}
    names = [labels.get(field, field) for field in fields]
    if len(names) <= 1:
        return "".join(names)
    return f"{', '.join(names[:-1])} and {names[-1]}"


class UserMessagesEN:
    """Centralized English user-facing messages."""

    CONTACT_REQUEST = "please share your name, phone number, and email address"
    PRICE_ON_REQUEST = "Pricing depends on your individual treatment plan"

    # Fallbacks
    @staticmethod
    def clarify_service(service_names: Sequence[str]) -> str:
        """Ask which service the visitor is interested in."""
        if service_names:
            listed = ", ".join(service_names[:4])
            return (
                "I'd be happy to help! Which of our services are you interested in? "
                f"For example: {listed}. Or, if you prefer, share your name, phone number, "
                "and email address and our team will reach out to you."
            )
        return (
            "I'd be happy to help! Could you tell me a bit more about what you're looking for? "
            "Or share your name, phone number, and email address and our team will reach out."
        )

    @staticmethod
    def service_unavailable(business_phone: Optional[str] = None) -> str:
        """Recovery reply when business data cannot be loaded."""
        reply = (
            "I apologize, but I'm having trouble accessing our service information right now. "
            "Would you like to share your name, phone number, and email so our team can reach "
            "out to you directly?"
        )
        if business_phone:
            reply += f" You can also call us at {business_phone}."
        return reply

    AI_FALLBACK_APOLOGY = (
        "I apologize, but I'm having trouble processing your request right now. "
        "Please try again or call us directly."
    )

    # Price
    @staticmethod
    def price(service: str, price_range: str) -> str:
        """Price template."""
        return (
            f"For {service}, the investment typically ranges from {price_range}. "
            "We offer flexible payment plans to fit your budget."
        )

    @staticmethod
    def price_on_request(service: str) -> str:
        """Price reply for a service without a listed range."""
        return (
            f"{UserMessagesEN.PRICE_ON_REQUEST} for {service}. "
            "We offer flexible payment plans to fit your budget."
        )

    @staticmethod
    def price_follow_up(service: str) -> str:
        """Contact request after a price answer."""
        return (
            f"To get your personalized quote for {service} and learn about our current offers, "
            f"{UserMessagesEN.CONTACT_REQUEST}."
        )

    # Interest
    @staticmethod
    def interest(
        service: str,
        description: Optional[str],
        benefits: Optional[str],
        price_range: Optional[str],
    ) -> str:
        """Interest template."""
        parts = [f"Great choice! {service} is an excellent option."]
        if description:
            parts.append(f"It offers {description}.")
        if benefits:
            parts.append(f"It can help {benefits}.")
        if price_range:
            parts.append(
                f"The investment ranges from {price_range}, and we offer flexible payment plans."
            )
        else:
            parts.append(
                f"{UserMessagesEN.PRICE_ON_REQUEST}, and we offer flexible payment plans."
            )
        return " ".join(parts)

    INTEREST_FOLLOW_UP = (
        "Would you like to schedule a consultation? Just share your name, phone number, "
        "and email address, and we'll help you get started."
    )

    # Booking
    @staticmethod
    def booking(service: str) -> str:
        """Booking prompt."""
        return (
            f"Great! To book your {service} consultation, {UserMessagesEN.CONTACT_REQUEST} "
            "and our scheduling team will contact you to find a time that works for you."
        )

    # Generic
    @staticmethod
    def service_overview(
        service: str,
        description: Optional[str],
        benefits: Optional[str],
        timeline: Optional[str],
        features: Optional[str] = None,
    ) -> str:
        """Informative reply built from whatever metadata exists."""
        parts = []
        if description:
            parts.append(f"{service}: {description}.")
        else:
            parts.append(f"We'd be glad to tell you more about {service}.")
        if benefits:
            parts.append(f"It can help {benefits}.")
        if features:
            parts.append(f"Highlights: {features}.")
        if timeline:
            parts.append(f"Typical timeline: {timeline}.")
        return " ".join(parts)

    @staticmethod
    def call_to_action(service: str) -> str:
        """Closing call to action."""
        return (
            f"Would you like to book a consultation for {service}? "
            "Just share your name, phone number, and email address and we'll be in touch."
        )

    FAQ_CALL_TO_ACTION = (
        "Is there anything else I can help with? If you'd like to book a consultation, "
        "just share your name, phone number, and email address."
    )

    # Contact capture
    @staticmethod
    def ask_missing_contact(name: Optional[str], missing_fields: Sequence[str]) -> str:
        """Ask for the contact fields that are still missing."""
        greeting = f"Thanks, {name}!" if name else "Thanks!"
        return (
            f"{greeting} To complete your request, could you please also share your "
            f"{_join_fields(missing_fields)}?"
        )

    @staticmethod
    def lead_created(name: str, phone: str, service: str) -> str:
        """Acknowledgement for a new lead."""
        return (
            f"Thank you, {name}! I've noted your interest in {service}. "
            f"Our team will be in touch at {phone} shortly."
        )

    @staticmethod
    def goodbye(name: Optional[str]) -> str:
        """Closing reply once the visitor's details are on file."""
        addressee = f", {name}" if name else ""
        return (
            f"Thank you for chatting with us{addressee}! Our team will be in touch soon. "
            "Have a wonderful day!"
        )

    @staticmethod
    def lead_already_on_file(name: str) -> str:
        """Acknowledgement for a returning contact."""
        return (
            f"Thanks, {name}! We already have your details on file, "
            "and our team will be in touch soon."
        )
