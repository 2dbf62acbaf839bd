"""
Command classifiers - turn raw seller text into intent, confidence and fields.
"""
import abc
import logging
from typing import Any, Optional

from ..models.intent import Intent
from ..registry import describe_schemas
from .llm_client import LLMClient


logger = logging.getLogger(__name__)


def build_system_prompt() -> str:
    """Fixed classification policy, with the schema block taken from the registry."""
    allowed = " ".join(intent.value for intent in Intent)
    return f"""You are a strict intent classifier and structured field extractor for a marketplace seller control plane.
You must:
Select exactly one intent from the allowed list.
Extract only fields defined in the schema for that intent.
Output valid JSON only - no markdown, no explanations, no text outside JSON.
Never invent fields not defined in the schema.
If uncertain about intent, return intent: "UNKNOWN".
If required fields are missing, still return the intent and include null for missing required fields.
Confidence must be a float between 0 and 1.

Allowed intents: {allowed}

Schemas:

{describe_schemas()}

Output format:
{{ "intent": "INTENT_NAME", "confidence": 0.00, "fields": {{ ... }} }}"""


SYSTEM_PROMPT = build_system_prompt()


class Classifier(abc.ABC):
    """Opaque text -> {intent, confidence, fields} classifier.

    Implementations may raise on any failure; the resolver treats every
    exception as an unrecognized command.
    """

    @abc.abstractmethod
    def classify(self, text: str) -> dict[str, Any]:
        """Return the raw classification payload for *text*."""


class LLMClassifier(Classifier):
    """Classifier backed by an OpenAI chat model in JSON mode."""

    def __init__(self, llm_client: Optional[LLMClient] = None):
        self.llm = llm_client or LLMClient()

    def classify(self, text: str) -> dict[str, Any]:
        logger.info(f"Classifying command ({len(text)} chars) with {self.llm.model}")
        return self.llm.call_json(SYSTEM_PROMPT, text)
