"""
Tests for the command schema registry.
"""
import pytest

from sellerops.models.fields import FIELD_MODELS
from sellerops.models.intent import Intent
from sellerops.registry import (
    SCHEMAS,
    FieldSpec,
    coerce_value,
    describe_schemas,
    get_schema,
    validate,
)


class TestSchemas:
    """Tests for the schema table itself."""

    def test_every_intent_has_schema(self):
        """Every intent, including UNKNOWN, has a schema."""
        assert set(SCHEMAS) == set(Intent)

    def test_schema_keys_match_field_models(self):
        """Typed field models carry exactly the schema fields."""
        for intent, schema in SCHEMAS.items():
            assert set(schema) == set(FIELD_MODELS[intent].model_fields), intent

    def test_unknown_has_no_fields(self):
        assert get_schema(Intent.UNKNOWN) == {}

    def test_get_schema_accepts_wire_spellings(self):
        assert get_schema("update-price") is SCHEMAS[Intent.UPDATE_PRICE]
        assert get_schema("UPDATE_PRICE") is SCHEMAS[Intent.UPDATE_PRICE]

    def test_get_schema_unregistered_intent(self):
        assert get_schema("launch_rocket") == {}

    def test_required_fields(self):
        required = {
            name for name, spec in get_schema(Intent.SEND_OFFER_TO_WATCHERS).items()
            if spec.required
        }
        assert required == {"listing_id", "discount_type", "discount_value"}

    def test_describe_schemas_lists_intents(self):
        text = describe_schemas()
        assert "UPDATE_PRICE fields:" in text
        assert "new_price: number (required)" in text
        assert 'condition: enum["new","used","refurbished"] (required)' in text
        assert "UNKNOWN fields:" not in text


class TestCoercion:
    """Tests for single-value coercion."""

    @pytest.mark.parametrize("raw,expected", [
        (10, 10.0),
        ("19.99", 19.99),
        ("$1,250", 1250.0),
        ("-10%", -10.0),
        (" 5 ", 5.0),
    ])
    def test_number(self, raw, expected):
        assert coerce_value(FieldSpec(type="number"), raw) == expected

    @pytest.mark.parametrize("raw", [True, "ten", "nan", "1e400", 10**400, [1], {"v": 1}])
    def test_number_rejects(self, raw):
        with pytest.raises(ValueError):
            coerce_value(FieldSpec(type="number"), raw)

    def test_string_from_numbers(self):
        spec = FieldSpec(type="string")
        assert coerce_value(spec, 12345) == "12345"
        assert coerce_value(spec, 12345.0) == "12345"
        assert coerce_value(spec, "  abc ") == "abc"
        assert coerce_value(spec, "   ") is None

    @pytest.mark.parametrize("raw,expected", [
        ("yes", True), ("ON", True), (1, True), (True, True),
        ("no", False), ("off", False), (0, False),
    ])
    def test_boolean(self, raw, expected):
        assert coerce_value(FieldSpec(type="boolean"), raw) is expected

    def test_boolean_rejects_ambiguous(self):
        with pytest.raises(ValueError):
            coerce_value(FieldSpec(type="boolean"), "maybe")

    def test_enum_normalization(self):
        spec = get_schema(Intent.END_LISTING)["reason"]
        assert coerce_value(spec, "Out of Stock") == "out_of_stock"
        assert coerce_value(spec, "out-of-stock") == "out_of_stock"
        with pytest.raises(ValueError):
            coerce_value(spec, "sold elsewhere")

    def test_none_passes_through(self):
        assert coerce_value(FieldSpec(type="number"), None) is None


class TestValidate:
    """Tests for validate()."""

    def test_strips_unknown_keys(self):
        outcome = validate(Intent.UPDATE_PRICE, {
            "listing_id": "123",
            "new_price": 20,
            "currency": "USD",
        })
        assert outcome.cleaned_fields == {"listing_id": "123", "new_price": 20.0}
        assert any("currency" in v for v in outcome.violations)

    def test_missing_required_present_as_none(self):
        outcome = validate(Intent.UPDATE_PRICE, {"listing_id": "123"})
        assert outcome.cleaned_fields == {"listing_id": "123", "new_price": None}
        assert outcome.missing_required == ["new_price"]
        assert not outcome.is_complete

    def test_uncoercible_value_becomes_none(self):
        outcome = validate(Intent.BULK_PRICE_ADJUST, {
            "adjustment_type": "percentage",
            "adjustment_value": "a lot",
        })
        assert outcome.cleaned_fields["adjustment_value"] is None
        assert "adjustment_value" in outcome.missing_required

    def test_optional_none_omitted(self):
        outcome = validate(Intent.END_LISTING, {"listing_id": 55, "reason": None})
        assert outcome.cleaned_fields == {"listing_id": "55"}
        assert outcome.is_complete

    def test_non_dict_fields(self):
        outcome = validate(Intent.END_LISTING, "listing 55")
        assert outcome.cleaned_fields == {"listing_id": None}
        assert outcome.missing_required == ["listing_id"]

    def test_no_required_fields(self):
        outcome = validate(Intent.BULK_END_LISTINGS, {})
        assert outcome.cleaned_fields == {}
        assert outcome.is_complete
