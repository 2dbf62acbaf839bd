"""
Tests for the HTTP platform client.
"""
from unittest.mock import MagicMock

import pytest
import requests
from tenacity import wait_none

from sellerops.client.platform import PlatformClient
from sellerops.errors import PlatformError


def response(status: int = 200, body=None, invalid_json: bool = False) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    if invalid_json:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        resp.json.return_value = body
    return resp


def client_with(*responses, max_attempts: int = 1) -> tuple[PlatformClient, MagicMock]:
    session = MagicMock()
    session.request.side_effect = list(responses)
    client = PlatformClient(
        base_url="http://backend.test/",
        timeout=5,
        max_attempts=max_attempts,
        session=session,
        wait=wait_none(),
    )
    return client, session


class TestListActiveItems:
    """Tests for reading active listings."""

    def test_normalizes_items(self):
        client, session = client_with(response(body={
            "success": True,
            "items": [
                {
                    "itemId": "1001",
                    "title": "Lens",
                    "price": "19.99",
                    "watchCount": 12,
                    "bids": 2,
                    "startTime": "2025-01-01T00:00:00.000Z",
                    "conditionDisplayName": "Used",
                },
                {"id": 1002, "price": 5, "watcherCount": "3", "bidCount": 0},
                {"title": "no id"},
                "garbage",
            ],
        }))

        items = client.list_active_items()

        assert [item.item_id for item in items] == ["1001", "1002"]
        first = items[0]
        assert first.price == 19.99
        assert (first.watcher_count, first.bid_count) == (12, 2)
        assert first.condition == "used"
        assert first.start_time.year == 2025
        assert items[1].watcher_count == 3
        assert items[1].title == "1002"

        method, url = session.request.call_args.args
        assert (method, url) == ("GET", "http://backend.test/api/active-listings")
        assert session.request.call_args.kwargs["timeout"] == 5

    def test_unsuccessful_response_raises(self):
        client, _ = client_with(response(500, {"success": False, "error": "eBay token expired"}))
        with pytest.raises(PlatformError, match="eBay token expired"):
            client.list_active_items()

    def test_invalid_json_raises(self):
        client, _ = client_with(response(invalid_json=True))
        with pytest.raises(PlatformError):
            client.list_active_items()

    def test_retries_transport_errors(self):
        client, session = client_with(
            requests.ConnectionError("refused"),
            requests.Timeout("slow"),
            response(body={"success": True, "items": []}),
            max_attempts=3,
        )

        assert client.list_active_items() == []
        assert session.request.call_count == 3

    def test_gives_up_after_max_attempts(self):
        client, session = client_with(
            requests.ConnectionError("refused"),
            requests.ConnectionError("refused"),
            max_attempts=2,
        )

        with pytest.raises(PlatformError, match="refused"):
            client.list_active_items()
        assert session.request.call_count == 2


class TestWrites:
    """Tests for write operations."""

    def test_set_price_body(self):
        client, session = client_with(response(body={"success": True}))

        outcome = client.set_price("1001", 17.99)

        assert outcome.success
        method, url = session.request.call_args.args
        assert (method, url) == ("POST", "http://backend.test/api/apply-optimization")
        assert session.request.call_args.kwargs["json"] == {"itemId": "1001", "changes": {"price": 17.99}}

    def test_errors_list_joined(self):
        client, _ = client_with(response(400, {"success": False, "errors": ["Price too low", "Item locked"]}))

        outcome = client.end_item("1001", "other")

        assert not outcome.success
        assert outcome.error == "Price too low, Item locked"
        assert not outcome.capability_missing

    @pytest.mark.parametrize("status", [404, 405, 501])
    def test_missing_route(self, status):
        client, _ = client_with(response(status, invalid_json=True))

        outcome = client.send_watcher_offer("1001", "percentage", 10)

        assert outcome.capability_missing
        assert not outcome.success

    def test_non_json_response(self):
        client, _ = client_with(response(502, invalid_json=True))

        outcome = client.update_fulfillment({"handling_time": 2})

        assert outcome.error == "Invalid response from platform (HTTP 502)"

    def test_transport_failure_is_outcome(self):
        client, _ = client_with(requests.ConnectionError("refused"))

        outcome = client.duplicate_item("1001", {"price": 20.0})

        assert not outcome.success
        assert outcome.error == "refused"

    def test_duplicate_body_and_data(self):
        client, session = client_with(response(body={"success": True, "newItemId": "2002"}))

        outcome = client.duplicate_item("1001", {"quantity": 3})

        assert outcome.data["newItemId"] == "2002"
        assert session.request.call_args.kwargs["json"] == {
            "itemId": "1001",
            "priceOverride": None,
            "quantityOverride": 3,
        }
