"""
Tests for the command session flow: submit, edit, preview, confirm, cancel.
"""
import pytest

from conftest import FakeClassifier, FakePlatform
from sellerops.ai.resolver import IntentResolver
from sellerops.errors import NoPendingCommandError
from sellerops.models.intent import Intent
from sellerops.pipeline.audit import AuditLog
from sellerops.pipeline.executor import ExecutionEngine
from sellerops.pipeline.preview import DiffPreviewer
from sellerops.pipeline.session import CommandSession


def session_for(platform: FakePlatform, payload) -> CommandSession:
    return CommandSession(
        resolver=IntentResolver(classifier=FakeClassifier(payload), min_confidence=0.0),
        previewer=DiffPreviewer(platform, price_floor=0.99, discount_cap_percent=40),
        engine=ExecutionEngine(platform, price_floor=0.99, discount_cap_percent=40, max_workers=1),
        audit=AuditLog(),
    )


END_1001 = {"intent": "END_LISTING", "confidence": 0.95, "fields": {"listing_id": "1001"}}


class TestCommandSession:
    """Tests for CommandSession."""

    def test_confirm_records_exactly_once(self, platform):
        session = session_for(platform, END_1001)
        session.submit("End listing 1001")

        entry = session.confirm()

        assert entry.status == "success"
        assert entry.raw_input == "End listing 1001"
        assert len(session.audit) == 1
        assert platform.calls == [("end_item", "1001", "other")]
        assert session.pending is None

    def test_second_confirm_raises(self, platform):
        session = session_for(platform, END_1001)
        session.submit("End listing 1001")
        session.confirm()

        with pytest.raises(NoPendingCommandError):
            session.confirm()
        assert len(session.audit) == 1
        assert len(platform.calls) == 1

    def test_failed_execution_is_recorded(self):
        session = session_for(FakePlatform(fail_ids={"1001"}), END_1001)
        session.submit("End listing 1001")

        entry = session.confirm()

        assert entry.status == "failed"
        assert entry.details == "Platform error: Item 1001 is locked"
        assert len(session.audit) == 1

    def test_cancel_and_preview_record_nothing(self, platform):
        session = session_for(platform, END_1001)
        session.submit("End listing 1001")
        session.preview()
        session.preview()
        session.cancel()

        assert len(session.audit) == 0
        assert platform.calls == []
        assert session.pending is None

    def test_update_field_fills_missing(self, platform):
        payload = {"intent": "UPDATE_PRICE", "confidence": 0.8, "fields": {"listing_id": "1003"}}
        session = session_for(platform, payload)
        session.submit("Change price of 1003")

        session.update_field("new_price", "$35")
        entry = session.confirm()

        assert entry.status == "success"
        assert platform.calls == [("set_price", "1003", 35.0)]

    def test_update_field_rejects_unknown_name(self, platform):
        session = session_for(platform, END_1001)
        session.submit("End listing 1001")

        with pytest.raises(ValueError):
            session.update_field("price", 10)

    def test_update_field_rejects_bad_value(self, platform):
        session = session_for(platform, END_1001)
        session.submit("End listing 1001")

        with pytest.raises(ValueError):
            session.update_field("reason", "sold elsewhere")

    def test_clearing_required_field_blocks_execution(self, platform):
        session = session_for(platform, END_1001)
        session.submit("End listing 1001")
        session.update_field("listing_id", "  ")

        entry = session.confirm()

        assert entry.status == "failed"
        assert entry.details == "Cannot execute, missing listing_id."
        assert platform.calls == []

    def test_engine_exception_recorded(self, platform):
        session = session_for(platform, END_1001)

        def explode(command):
            raise RuntimeError("engine crashed")

        session.engine.execute = explode
        session.submit("End listing 1001")

        entry = session.confirm()
        assert entry.status == "failed"
        assert entry.details == "Execution error: engine crashed"
        assert len(session.audit) == 1

    def test_unknown_command_confirm(self, platform):
        session = session_for(platform, {"intent": "?", "confidence": 0.9})
        command = session.submit("make me rich")

        assert command.intent == Intent.UNKNOWN
        entry = session.confirm()
        assert entry.status == "failed"
        assert entry.intent == Intent.UNKNOWN

    def test_nothing_pending(self, platform):
        session = session_for(platform, END_1001)
        with pytest.raises(NoPendingCommandError):
            session.preview()
        with pytest.raises(NoPendingCommandError):
            session.update_field("listing_id", "1")
