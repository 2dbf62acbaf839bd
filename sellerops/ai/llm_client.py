"""
OpenAI LLM client with strict JSON mode.
"""
import json
import logging
from typing import Any, Optional

from openai import OpenAI, OpenAIError

from ..config import get_config
from ..errors import ClassifierError


logger = logging.getLogger(__name__)


class LLMClient:
    """
    OpenAI LLM client with strict JSON mode.
    Every call carries a transport timeout; a timeout is reported like any
    other transport failure.
    """

    def __init__(self, model: Optional[str] = None, client: Optional[Any] = None):
        config = get_config()
        self.api_key = config.openai.api_key
        self.model = model or config.openai.model
        self.max_tokens = config.openai.max_tokens
        self.temperature = config.openai.temperature
        self.timeout = config.openai.timeout_seconds

        if client is not None:
            self.client = client
        elif not self.api_key:
            logger.warning("No OpenAI API key configured")
            self.client = None
        else:
            self.client = OpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=1)

    def is_available(self) -> bool:
        """Check if the LLM client is properly configured."""
        return self.client is not None

    def _call(
        self,
        system_prompt: str,
        user_prompt: str,
        response_format: Optional[dict] = None,
    ) -> str:
        """Make an API call and return the response text."""
        if not self.client:
            raise ClassifierError("LLM client not configured")

        kwargs = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }

        if response_format:
            kwargs["response_format"] = response_format

        response = self.client.chat.completions.create(**kwargs)
        return response.choices[0].message.content or ""

    def call_json(self, system_prompt: str, user_prompt: str) -> dict[str, Any]:
        """
        Make an API call in JSON mode and return the decoded object.

        Raises:
            ClassifierError: If the LLM is not configured, the call fails,
                or the response is not a JSON object
        """
        try:
            response_text = self._call(
                system_prompt=system_prompt,
                user_prompt=user_prompt,
                response_format={"type": "json_object"},
            )
        except OpenAIError as e:
            # Timeouts, auth and transport failures all land here
            raise ClassifierError(f"LLM call failed: {e}") from e

        if not response_text.strip():
            raise ClassifierError("No response from LLM")

        try:
            data = json.loads(response_text)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON from LLM: {e}")
            raise ClassifierError(f"Invalid JSON from LLM: {e}") from e

        if not isinstance(data, dict):
            raise ClassifierError("LLM response is not a JSON object")
        return data
