"""OpenAI LLM client adapter."""

from typing import Optional

from openai import OpenAI, OpenAIError

from leadengine.application.ports.llm_client import LLMClient
from leadengine.domain.exceptions import ExternalServiceError
from leadengine.infrastructure.config.settings import settings

ALLOWED_HISTORY_ROLES = ("user", "assistant")


class OpenAILLMClient(LLMClient):
    """OpenAI LLM client implementation using official SDK."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout_seconds: Optional[int] = None,
    ) -> None:
        """
        Initialize OpenAI LLM client.

        Args:
            api_key: OpenAI API key (defaults to settings.openai_api_key)
            model: Model name (defaults to settings.openai_model)
            timeout_seconds: Request timeout in seconds (defaults to settings.openai_timeout_seconds)
        """
        self._api_key = api_key or settings.openai_api_key
        self._model = model or settings.openai_model
        self._timeout = timeout_seconds or settings.openai_timeout_seconds

        if not self._api_key:
            raise ValueError("OpenAI API key is required")

        self._client = OpenAI(
            api_key=self._api_key,
            timeout=self._timeout,
            max_retries=1,
        )

    def generate_reply(self, system_prompt: str, user_message: str, context: dict) -> str:
        """
        Generate a reply using OpenAI API.

        Args:
            system_prompt: Business context prompt
            user_message: Visitor message
            context: Additional context; ``history`` holds recent role/content entries

        Returns:
            Generated reply

        Raises:
            ExternalServiceError: If the call fails or returns an empty reply
        """
        messages = [{"role": "system", "content": system_prompt}]
        for entry in context.get("history", []):
            if entry.get("role") in ALLOWED_HISTORY_ROLES and entry.get("content"):
                messages.append({"role": entry["role"], "content": entry["content"]})
        messages.append({"role": "user", "content": user_message})

        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=0.7,
                max_tokens=300,
            )
        except OpenAIError as e:
            raise ExternalServiceError(f"OpenAI API call failed: {str(e)}") from e

        if not response.choices or response.choices[0].message.content is None:
            raise ExternalServiceError("Empty response from OpenAI API")
        reply = response.choices[0].message.content.strip()
        if not reply:
            raise ExternalServiceError("Empty reply from OpenAI API")
        return reply
