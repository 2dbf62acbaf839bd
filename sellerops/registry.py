"""
Command schema registry - the per-intent field contract.

The registry drives three things: the classifier prompt, validation of
classifier output (which is untrusted), and the required-field check that
runs before any platform call.
"""
import logging
import math
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from .models.intent import (
    AMOUNT_TYPES,
    CONDITIONS,
    END_REASONS,
    SHIPPING_POLICIES,
    Intent,
)


logger = logging.getLogger(__name__)


FieldType = Literal["string", "number", "boolean", "enum"]

_TRUTHY = {"true", "yes", "on", "1", "enable", "enabled"}
_FALSY = {"false", "no", "off", "0", "disable", "disabled"}


class FieldSpec(BaseModel):
    """Type and requirement for one intent field."""
    type: FieldType
    required: bool = False
    enum_values: Optional[tuple[str, ...]] = None
    description: str = ""


class ValidationOutcome(BaseModel):
    """Result of validating a field mapping against an intent schema."""
    cleaned_fields: dict[str, Any] = Field(default_factory=dict)
    missing_required: list[str] = Field(default_factory=list)
    violations: list[str] = Field(
        default_factory=list,
        description="Stripped keys and values that could not be coerced",
    )

    @property
    def is_complete(self) -> bool:
        return not self.missing_required


FieldSchema = dict[str, FieldSpec]


def _req(type_: FieldType, description: str = "", enum_values=None) -> FieldSpec:
    return FieldSpec(type=type_, required=True, enum_values=enum_values, description=description)


def _opt(type_: FieldType, description: str = "", enum_values=None) -> FieldSpec:
    return FieldSpec(type=type_, required=False, enum_values=enum_values, description=description)


SCHEMAS: dict[Intent, FieldSchema] = {
    Intent.CREATE_LISTING: {
        "title": _req("string"),
        "price": _req("number"),
        "condition": _req("enum", enum_values=CONDITIONS),
        "quantity": _opt("number"),
        "auto_accept_threshold": _opt("number"),
        "shipping_policy": _opt("enum", enum_values=SHIPPING_POLICIES),
        "handling_time": _opt("number"),
    },
    Intent.UPDATE_PRICE: {
        "listing_id": _req("string"),
        "new_price": _req("number"),
    },
    Intent.ENABLE_OFFERS: {
        "listing_id": _req("string"),
        "auto_accept_threshold": _opt("number"),
    },
    Intent.BULK_PRICE_ADJUST: {
        "adjustment_type": _req("enum", enum_values=AMOUNT_TYPES),
        "adjustment_value": _req("number", "negative for decrease, positive for increase"),
        "filter_condition": _opt("enum", enum_values=CONDITIONS),
    },
    Intent.RESPOND_TO_BUYER: {
        "message": _req("string"),
        "buyer_id": _opt("string"),
        "listing_id": _opt("string"),
    },
    Intent.END_LISTING: {
        "listing_id": _req("string"),
        "reason": _opt("enum", enum_values=END_REASONS),
    },
    Intent.DUPLICATE_LISTING: {
        "listing_id": _req("string"),
        "price_override": _opt("number"),
        "quantity_override": _opt("number"),
    },
    Intent.SEND_OFFER_TO_WATCHERS: {
        "listing_id": _req("string"),
        "discount_type": _req("enum", enum_values=AMOUNT_TYPES),
        "discount_value": _req(
            "number", "positive number, e.g. 10 means 10% off or $10 off"
        ),
    },
    Intent.UPDATE_FULFILLMENT_SETTINGS: {
        "handling_time": _opt("number", "days"),
        "vacation_mode": _opt("boolean"),
        "auto_reply_message": _opt("string"),
    },
    Intent.BULK_END_LISTINGS: {
        "filter_condition": _opt("enum", enum_values=CONDITIONS),
        "older_than_days": _opt("number"),
        "below_price": _opt("number"),
    },
    Intent.UNKNOWN: {},
}


def get_schema(intent: Any) -> FieldSchema:
    """Return the field schema for an intent. Unregistered intents get UNKNOWN's."""
    return SCHEMAS.get(Intent.parse(intent), SCHEMAS[Intent.UNKNOWN])


class _Uncoercible(Exception):
    pass


def _coerce_number(value: Any) -> float:
    if isinstance(value, bool):
        raise _Uncoercible
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            raise _Uncoercible
    elif isinstance(value, str):
        cleaned = (
            value.strip()
            .replace("$", "")
            .replace(",", "")
            .replace("%", "")
            .replace(" ", "")
        )
        try:
            number = float(cleaned)
        except ValueError:
            raise _Uncoercible
    else:
        raise _Uncoercible
    if math.isnan(number) or math.isinf(number):
        raise _Uncoercible
    return number


def _coerce_string(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        raise _Uncoercible
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    raise _Uncoercible


def _coerce_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUTHY:
            return True
        if lowered in _FALSY:
            return False
    raise _Uncoercible


def _coerce_enum(value: Any, allowed: tuple[str, ...]) -> str:
    if not isinstance(value, str):
        raise _Uncoercible
    normalized = value.strip().lower().replace("-", "_").replace(" ", "_")
    if normalized not in allowed:
        raise _Uncoercible
    return normalized


def coerce_value(spec: FieldSpec, value: Any) -> Any:
    """
    Coerce a single value to the field's type.

    Returns None for None/empty input. Raises ValueError when the value
    cannot be coerced unambiguously.
    """
    if value is None:
        return None
    try:
        if spec.type == "number":
            return _coerce_number(value)
        if spec.type == "string":
            return _coerce_string(value)
        if spec.type == "boolean":
            return _coerce_boolean(value)
        return _coerce_enum(value, spec.enum_values or ())
    except _Uncoercible:
        raise ValueError(f"cannot coerce {value!r} to {spec.type}")


def validate(intent: Any, fields: Optional[dict[str, Any]]) -> ValidationOutcome:
    """
    Validate a field mapping against the intent's schema.

    Unknown keys are stripped, values are coerced where unambiguous, and
    required fields are always present in the output (None when missing).
    Pure function; never raises.
    """
    schema = get_schema(intent)
    fields = fields if isinstance(fields, dict) else {}

    cleaned: dict[str, Any] = {}
    violations: list[str] = []

    for key in fields:
        if key not in schema:
            violations.append(f"unknown field '{key}' stripped")

    for name, spec in schema.items():
        raw = fields.get(name)
        try:
            value = coerce_value(spec, raw)
        except ValueError as e:
            violations.append(f"{name}: {e}")
            value = None

        if value is not None or spec.required:
            cleaned[name] = value

    missing = [
        name for name, spec in schema.items()
        if spec.required and cleaned.get(name) is None
    ]

    if violations:
        logger.warning(f"Schema violations for {Intent.parse(intent).value}: {violations}")

    return ValidationOutcome(
        cleaned_fields=cleaned,
        missing_required=missing,
        violations=violations,
    )


def describe_schemas() -> str:
    """Render the registry as the plain-text schema block used in prompts."""
    blocks = []
    for intent, schema in SCHEMAS.items():
        if intent == Intent.UNKNOWN:
            continue
        lines = [f"{intent.value} fields:"]
        for name, spec in schema.items():
            type_str = spec.type
            if spec.type == "enum":
                type_str = "enum[" + ",".join(f'"{v}"' for v in spec.enum_values or ()) + "]"
            requirement = "required" if spec.required else "optional"
            if spec.description:
                requirement = f"{requirement} - {spec.description}"
            lines.append(f"{name}: {type_str} ({requirement})")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)
