"""
Diff previewer - read-only before/after projection of a command.

Nothing here writes to the platform; a preview can be retried or abandoned
freely.
"""
import logging
import re
from datetime import datetime, timezone
from typing import Callable, Optional

import numpy as np

from ..client.base import SellerPlatform
from ..config import get_config
from ..errors import PlatformError
from ..models.command import ParsedCommand
from ..models.fields import (
    FIELD_MODELS,
    BulkEndListingsFields,
    BulkPriceAdjustFields,
    DuplicateListingFields,
    EndListingFields,
    SendOfferToWatchersFields,
    UpdatePriceFields,
)
from ..models.intent import Intent
from ..models.listing import ActiveItem
from ..models.preview import DiffLine, PreviewResult
from ..registry import validate
from .filter import TargetFilter
from .pricing import exceeds_discount_cap, format_money, offer_price


logger = logging.getLogger(__name__)


StateFetcher = Callable[[], list[ActiveItem]]

_MARKETING_SUFFIX = re.compile(r"FREE\s*SHIP.*", re.I)
MAX_LABEL_LENGTH = 55


def short_title(title: str) -> str:
    """Strip shipping boilerplate and truncate a listing title for display."""
    return _MARKETING_SUFFIX.sub("", title or "").strip()[:MAX_LABEL_LENGTH]


def _find(items: list[ActiveItem], item_id: str) -> Optional[ActiveItem]:
    return next((item for item in items if item.item_id == item_id), None)


def _not_found(item_id: str) -> list[DiffLine]:
    return [DiffLine(label=f"Listing {item_id}", info="Not found in active listings")]


class DiffPreviewer:
    """
    Computes preview lines for commands whose effect can be inspected before
    commit. Other intents yield no lines, which means "no preview available".
    """

    def __init__(
        self,
        platform: Optional[SellerPlatform] = None,
        price_floor: Optional[float] = None,
        discount_cap_percent: Optional[float] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        policy = get_config().policy
        self.platform = platform
        self.price_floor = price_floor if price_floor is not None else policy.price_floor
        self.discount_cap_percent = (
            discount_cap_percent if discount_cap_percent is not None
            else policy.discount_cap_percent
        )
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self._loading = False

        self._builders: dict[Intent, Optional[Callable]] = {
            Intent.CREATE_LISTING: None,
            Intent.UPDATE_PRICE: self._preview_update_price,
            Intent.ENABLE_OFFERS: None,
            Intent.BULK_PRICE_ADJUST: self._preview_bulk_price_adjust,
            Intent.RESPOND_TO_BUYER: None,
            Intent.END_LISTING: self._preview_end_listing,
            Intent.DUPLICATE_LISTING: self._preview_duplicate_listing,
            Intent.SEND_OFFER_TO_WATCHERS: self._preview_send_offer,
            Intent.UPDATE_FULFILLMENT_SETTINGS: None,
            Intent.BULK_END_LISTINGS: self._preview_bulk_end,
            Intent.UNKNOWN: None,
        }

    @property
    def loading(self) -> bool:
        """True while the current-state fetch is outstanding."""
        return self._loading

    def supports(self, intent: Intent) -> bool:
        return self._builders.get(intent) is not None

    def preview(
        self,
        command: ParsedCommand,
        fetch_state: Optional[StateFetcher] = None,
    ) -> PreviewResult:
        """
        Build the preview for a command.

        Args:
            command: The parsed (possibly user-edited) command
            fetch_state: Reads the current active items; defaults to the
                platform's list_active_items

        Returns:
            PreviewResult; empty lines when no preview applies or the fetch failed
        """
        builder = self._builders.get(command.intent)
        if builder is None:
            return PreviewResult()

        fetch_state = fetch_state or self._default_fetcher()
        if fetch_state is None:
            return PreviewResult(error="No platform configured for preview")

        # Coerced exactly as the engine coerces before dispatch
        fields = FIELD_MODELS[command.intent].model_validate(
            validate(command.intent, command.fields).cleaned_fields
        )

        self._loading = True
        try:
            items = fetch_state()
        except PlatformError as e:
            logger.warning(f"Preview fetch failed for {command.intent.value}: {e}")
            return PreviewResult(error=str(e))
        except Exception as e:
            logger.warning(f"Preview fetch raised for {command.intent.value}: {e}", exc_info=True)
            return PreviewResult(error=str(e) or type(e).__name__)
        finally:
            self._loading = False

        lines = builder(fields, items)
        return PreviewResult(lines=lines)

    def _default_fetcher(self) -> Optional[StateFetcher]:
        if self.platform is None:
            return None
        return self.platform.list_active_items

    def _money(self, amount: float) -> str:
        return format_money(amount)

    # Single-target numeric change

    def _preview_update_price(
        self, f: UpdatePriceFields, items: list[ActiveItem]
    ) -> list[DiffLine]:
        if not f.listing_id:
            return []
        item = _find(items, f.listing_id)
        if item is None:
            return _not_found(f.listing_id)
        after = self._money(f.new_price) if f.new_price is not None else "—"
        return [DiffLine(label=short_title(item.title), before=self._money(item.price), after=after)]

    def _preview_send_offer(
        self, f: SendOfferToWatchersFields, items: list[ActiveItem]
    ) -> list[DiffLine]:
        if not f.listing_id or not f.discount_type or f.discount_value is None:
            return []
        item = _find(items, f.listing_id)
        if item is None:
            return _not_found(f.listing_id)

        offered = offer_price(item.price, f.discount_type, f.discount_value, self.price_floor)
        watchers = item.watcher_count
        lines = [
            DiffLine(
                label=short_title(item.title),
                before=self._money(item.price),
                after=f"{self._money(offered)} offered",
            ),
            DiffLine(
                label=f"{watchers} watcher{'s' if watchers != 1 else ''}",
                info="will receive this targeted offer",
            ),
        ]
        if f.discount_type == "percentage" and exceeds_discount_cap(
            f.discount_value, self.discount_cap_percent
        ):
            lines.append(DiffLine(
                label="Safety cap",
                warning=f"{f.discount_value:g}% exceeds the {self.discount_cap_percent:g}% cap; execution will be blocked",
            ))
        return lines

    # Bulk numeric change

    def _preview_bulk_price_adjust(
        self, f: BulkPriceAdjustFields, items: list[ActiveItem]
    ) -> list[DiffLine]:
        if not f.adjustment_type or f.adjustment_value is None:
            return []

        targets = TargetFilter(condition=f.filter_condition).filter(items)
        prices = np.array([item.price for item in targets], dtype=float)
        count = len(prices)
        total = float(prices.sum()) if count else 0.0
        avg = total / (count or 1)

        if f.adjustment_type == "percentage":
            factor = 1 + f.adjustment_value / 100
            new_avg = avg * factor
            new_total = total * factor
        else:
            new_avg = avg + f.adjustment_value
            new_total = total + f.adjustment_value * count

        lines = [
            DiffLine(
                label=f"{count} listings",
                before=f"avg {self._money(avg)}",
                after=f"avg {self._money(new_avg)}",
            ),
            DiffLine(
                label="Total listed value",
                before=format_money(total, 0),
                after=format_money(new_total, 0),
            ),
        ]
        if f.adjustment_type == "percentage" and exceeds_discount_cap(
            -f.adjustment_value, self.discount_cap_percent
        ):
            lines.append(DiffLine(
                label="Safety cap",
                warning=f"{-f.adjustment_value:g}% decrease exceeds the {self.discount_cap_percent:g}% cap; execution will be blocked",
            ))
        return lines

    # Destructive single target

    def _preview_end_listing(
        self, f: EndListingFields, items: list[ActiveItem]
    ) -> list[DiffLine]:
        if not f.listing_id:
            return []
        item = _find(items, f.listing_id)
        if item is None:
            return _not_found(f.listing_id)

        lines = [DiffLine(label=short_title(item.title), before=self._money(item.price), after="ENDED")]
        lost = []
        if item.watcher_count > 0:
            lost.append(f"{item.watcher_count} watchers")
        if item.bid_count > 0:
            lost.append(f"{item.bid_count} active bids")
        if lost:
            lines.append(DiffLine(label="Caution", warning=f"{', '.join(lost)} will be lost"))
        return lines

    # Destructive bulk

    def _preview_bulk_end(
        self, f: BulkEndListingsFields, items: list[ActiveItem]
    ) -> list[DiffLine]:
        target_filter = TargetFilter(
            condition=f.filter_condition,
            older_than_days=f.older_than_days,
            below_price=f.below_price,
        )
        targets = target_filter.filter(items, now=self.clock())
        total_value = sum(item.price for item in targets)
        with_watchers = sum(1 for item in targets if item.watcher_count > 0)

        lines = [
            DiffLine(label="Listings matched", before=f"{len(items)} active", after=f"{len(targets)} to end"),
            DiffLine(label="Capital removed", info=f"{format_money(total_value, 0)} in listed value"),
        ]
        if with_watchers > 0:
            lines.append(DiffLine(label="Caution", warning=f"{with_watchers} of these have watchers"))
        return lines

    # Duplication

    def _preview_duplicate_listing(
        self, f: DuplicateListingFields, items: list[ActiveItem]
    ) -> list[DiffLine]:
        if not f.listing_id:
            return []
        item = _find(items, f.listing_id)
        if item is None:
            return _not_found(f.listing_id)

        after = self._money(f.price_override) if f.price_override is not None else "unchanged"
        return [
            DiffLine(label=short_title(item.title), info="Source listing"),
            DiffLine(label="Price", before=self._money(item.price), after=after),
        ]
