"""Abstract seller platform interface."""

import abc
from typing import Any, Optional

from ..models.listing import ActiveItem, PlatformOutcome


class SellerPlatform(abc.ABC):
    """Read and write operations the previewer and execution engine rely on.

    Write operations report failure through :class:`PlatformOutcome` rather
    than raising. ``list_active_items`` raises
    :class:`~sellerops.errors.PlatformError` when the current state cannot be read.
    """

    @abc.abstractmethod
    def list_active_items(self) -> list[ActiveItem]:
        """Return every active listing, in platform order."""

    @abc.abstractmethod
    def set_price(self, item_id: str, price: float) -> PlatformOutcome:
        """Revise the price of one listing."""

    @abc.abstractmethod
    def end_item(self, item_id: str, reason: str) -> PlatformOutcome:
        """End one listing early."""

    @abc.abstractmethod
    def duplicate_item(
        self,
        item_id: str,
        overrides: Optional[dict[str, Any]] = None,
    ) -> PlatformOutcome:
        """Relist a copy of a listing, optionally overriding price/quantity."""

    @abc.abstractmethod
    def send_watcher_offer(
        self,
        item_id: str,
        discount_type: str,
        discount_value: float,
    ) -> PlatformOutcome:
        """Send a targeted discount offer to everyone watching a listing."""

    @abc.abstractmethod
    def update_fulfillment(self, settings: dict[str, Any]) -> PlatformOutcome:
        """Update account-level fulfillment settings."""
