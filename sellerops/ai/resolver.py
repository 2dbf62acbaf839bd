"""
Intent resolver - classify raw text and enforce the schema contract on the result.
"""
import logging
from typing import Any, Optional

from ..config import get_config
from ..models.command import ParsedCommand
from ..models.intent import Intent
from ..registry import validate
from .classifier import Classifier, LLMClassifier


logger = logging.getLogger(__name__)


class IntentResolver:
    """
    Wraps the classifier and normalizes its output into a ParsedCommand.

    The classifier is untrusted input: its payload is re-validated against
    the registry. resolve() never raises; any classifier failure becomes
    the unrecognized command.
    """

    def __init__(
        self,
        classifier: Optional[Classifier] = None,
        min_confidence: Optional[float] = None,
    ):
        self.classifier = classifier or LLMClassifier()
        if min_confidence is None:
            min_confidence = get_config().policy.min_confidence
        self.min_confidence = min_confidence

    def resolve(self, raw_text: str) -> ParsedCommand:
        """
        Resolve seller text into a ParsedCommand.

        Args:
            raw_text: Free-form seller instruction

        Returns:
            ParsedCommand, or the unknown sentinel on any failure
        """
        if not isinstance(raw_text, str) or not raw_text.strip():
            return ParsedCommand.unknown()

        try:
            payload = self.classifier.classify(raw_text.strip())
            return self._normalize(payload)
        except Exception as e:
            logger.warning(f"Could not resolve command, treating as unknown: {e}")
            return ParsedCommand.unknown()

    def _normalize(self, payload: Any) -> ParsedCommand:
        if not isinstance(payload, dict):
            logger.warning(f"Malformed classifier payload: {type(payload).__name__}")
            return ParsedCommand.unknown()

        intent = Intent.parse(payload.get("intent"))
        if intent == Intent.UNKNOWN:
            return ParsedCommand.unknown()

        confidence = self._clamp_confidence(payload.get("confidence"))
        if confidence < self.min_confidence:
            logger.info(
                f"{intent.value} confidence {confidence:.2f} below threshold "
                f"{self.min_confidence:.2f}, treating as unknown"
            )
            return ParsedCommand.unknown()

        outcome = validate(intent, payload.get("fields"))
        if outcome.missing_required:
            logger.info(f"{intent.value} missing required fields: {outcome.missing_required}")

        return ParsedCommand(
            intent=intent,
            confidence=confidence,
            fields=outcome.cleaned_fields,
        )

    @staticmethod
    def _clamp_confidence(value: Any) -> float:
        if isinstance(value, bool):
            return 0.0
        try:
            confidence = float(value)
        except (TypeError, ValueError, OverflowError):
            return 0.0
        if confidence != confidence:  # NaN
            return 0.0
        return min(1.0, max(0.0, confidence))
