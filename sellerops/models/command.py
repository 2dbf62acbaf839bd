"""
Parsed command model - the normalized output of the intent resolver.
"""
from typing import Any

from pydantic import BaseModel, Field, model_validator

from .fields import FIELD_MODELS, IntentFields
from .intent import INTENT_META, Intent, IntentMeta


class ParsedCommand(BaseModel):
    """
    A classified seller command.

    `fields` only ever holds keys defined for the intent. Required fields the
    classifier could not fill are present with a None value.
    """
    intent: Intent = Intent.UNKNOWN
    confidence: float = Field(default=0.0, ge=0, le=1)
    fields: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _unknown_has_no_payload(self) -> "ParsedCommand":
        if self.intent == Intent.UNKNOWN:
            self.confidence = 0.0
            self.fields = {}
        return self

    @classmethod
    def unknown(cls) -> "ParsedCommand":
        """The sentinel 'unrecognized' command."""
        return cls(intent=Intent.UNKNOWN, confidence=0.0, fields={})

    @property
    def is_unknown(self) -> bool:
        return self.intent == Intent.UNKNOWN

    @property
    def meta(self) -> IntentMeta:
        return INTENT_META[self.intent]

    def typed_fields(self) -> IntentFields:
        """Return the fields as the intent's typed model."""
        return FIELD_MODELS[self.intent].model_validate(self.fields)

    def with_field(self, name: str, value: Any) -> "ParsedCommand":
        """Return a copy with one field replaced."""
        fields = dict(self.fields)
        fields[name] = value
        return self.model_copy(update={"fields": fields})
