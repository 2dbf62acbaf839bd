"""
Tests for the execution panel's field editor helpers.
"""
from sellerops.models.command import ParsedCommand
from sellerops.models.intent import Intent
from sellerops.ui.components.execution_panel import editor_key, editor_rows


class TestEditorRows:
    """Tests for which fields get an editor."""

    def test_optional_fields_the_classifier_omitted(self):
        command = ParsedCommand(intent=Intent.BULK_END_LISTINGS, confidence=0.8, fields={})

        assert editor_rows(command) == [
            ("filter_condition", ""),
            ("older_than_days", ""),
            ("below_price", ""),
        ]

    def test_present_values_are_shown(self):
        command = ParsedCommand(
            intent=Intent.ENABLE_OFFERS,
            confidence=0.8,
            fields={"listing_id": "12345"},
        )
        rows = dict(editor_rows(command))

        assert rows["listing_id"] == "12345"
        assert rows["auto_accept_threshold"] == ""

    def test_missing_required_is_blank(self):
        command = ParsedCommand(
            intent=Intent.UPDATE_PRICE,
            confidence=0.8,
            fields={"listing_id": "1", "new_price": None},
        )
        assert editor_rows(command) == [("listing_id", "1"), ("new_price", "")]

    def test_unknown_has_no_editors(self):
        assert editor_rows(ParsedCommand.unknown()) == []


class TestEditorKey:
    """Tests for widget keys."""

    def test_scoped_per_command(self):
        assert editor_key(1, "listing_id") != editor_key(2, "listing_id")

    def test_stable_within_command(self):
        assert editor_key(3, "new_price") == editor_key(3, "new_price")
