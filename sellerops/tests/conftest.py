"""
Shared fixtures: a scripted classifier and an in-memory seller platform.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import pytest

from sellerops.ai.classifier import Classifier
from sellerops.client.base import SellerPlatform
from sellerops.errors import PlatformError
from sellerops.models.listing import ActiveItem, PlatformOutcome


NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakeClassifier(Classifier):
    """Returns a canned payload, or raises a canned error."""

    def __init__(self, payload: Any = None, error: Optional[Exception] = None):
        self.payload = payload
        self.error = error
        self.calls: list[str] = []

    def classify(self, text: str) -> dict[str, Any]:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.payload


class FakePlatform(SellerPlatform):
    """
    In-memory platform that records every write.

    fail_ids: item ids whose writes report a platform error
    missing_routes: operation names that report capability_missing
    """

    def __init__(
        self,
        items: Optional[list[ActiveItem]] = None,
        fail_ids: Optional[set[str]] = None,
        missing_routes: Optional[set[str]] = None,
        fetch_error: Optional[str] = None,
    ):
        self.items = items or []
        self.fail_ids = fail_ids or set()
        self.missing_routes = missing_routes or set()
        self.fetch_error = fetch_error
        self.fetches = 0
        self.calls: list[tuple] = []

    def _outcome(self, route: str, item_id: Optional[str] = None, **data) -> PlatformOutcome:
        if route in self.missing_routes:
            return PlatformOutcome(success=False, capability_missing=True, error="HTTP 404")
        if item_id in self.fail_ids:
            return PlatformOutcome(success=False, error=f"Item {item_id} is locked")
        return PlatformOutcome(success=True, data=data)

    def list_active_items(self) -> list[ActiveItem]:
        self.fetches += 1
        if self.fetch_error:
            raise PlatformError(self.fetch_error)
        return list(self.items)

    def set_price(self, item_id: str, price: float) -> PlatformOutcome:
        self.calls.append(("set_price", item_id, price))
        return self._outcome("set_price", item_id)

    def end_item(self, item_id: str, reason: str) -> PlatformOutcome:
        self.calls.append(("end_item", item_id, reason))
        return self._outcome("end_item", item_id)

    def duplicate_item(self, item_id: str, overrides: Optional[dict[str, Any]] = None) -> PlatformOutcome:
        self.calls.append(("duplicate_item", item_id, overrides))
        return self._outcome("duplicate_item", item_id, newItemId=f"{item_id}-copy")

    def send_watcher_offer(self, item_id: str, discount_type: str, discount_value: float) -> PlatformOutcome:
        self.calls.append(("send_watcher_offer", item_id, discount_type, discount_value))
        return self._outcome("send_watcher_offer", item_id)

    def update_fulfillment(self, settings: dict[str, Any]) -> PlatformOutcome:
        self.calls.append(("update_fulfillment", settings))
        return self._outcome("update_fulfillment")


def make_item(
    item_id: str,
    price: float,
    title: Optional[str] = None,
    watchers: int = 0,
    bids: int = 0,
    age_days: Optional[int] = 10,
    condition: Optional[str] = "used",
) -> ActiveItem:
    return ActiveItem(
        item_id=item_id,
        title=title or f"Listing {item_id}",
        price=price,
        watcher_count=watchers,
        bid_count=bids,
        start_time=NOW - timedelta(days=age_days) if age_days is not None else None,
        condition=condition,
    )


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def inventory() -> list[ActiveItem]:
    """A small mixed inventory."""
    return [
        make_item("1001", 100.0, title="Vintage Camera Lens 50mm FREE SHIPPING fast", watchers=12, bids=2, age_days=120),
        make_item("1002", 0.50, title="Sticker pack", age_days=200),
        make_item("1003", 40.0, title="Mechanical keyboard", watchers=3, condition="new", age_days=5),
        make_item("1004", 8.0, title="Phone case", age_days=95, condition="used"),
        make_item("1005", 25.0, title="Refurb mouse", condition="refurbished", age_days=None),
    ]


@pytest.fixture
def platform(inventory) -> FakePlatform:
    return FakePlatform(items=inventory)
