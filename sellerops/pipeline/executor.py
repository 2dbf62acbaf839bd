"""
Execution engine - maps a confirmed command onto platform calls.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Callable, Optional

from ..client.base import SellerPlatform
from ..config import get_config
from ..errors import PlatformError
from ..models.audit import ExecutionResult, ItemLog
from ..models.command import ParsedCommand
from ..models.fields import (
    FIELD_MODELS,
    BulkEndListingsFields,
    BulkPriceAdjustFields,
    CreateListingFields,
    DuplicateListingFields,
    EnableOffersFields,
    EndListingFields,
    RespondToBuyerFields,
    SendOfferToWatchersFields,
    UnknownFields,
    UpdateFulfillmentSettingsFields,
    UpdatePriceFields,
)
from ..models.intent import Intent
from ..models.listing import ActiveItem, PlatformOutcome
from ..registry import validate
from .filter import TargetFilter
from .pricing import adjust_price, exceeds_discount_cap, format_money


logger = logging.getLogger(__name__)


UNKNOWN_ERROR = "unknown error"
NO_MATCHES = "No listings matched your filter criteria."


def failure(message: str) -> ExecutionResult:
    return ExecutionResult(success=False, message=message)


def bulk_message(verb: str, succeeded: int, total: int, failed: int) -> str:
    """'Adjusted 6/10 listings. 4 failed.'"""
    message = f"{verb} {succeeded}/{total} listings."
    if failed:
        message += f" {failed} failed."
    return message


class ExecutionEngine:
    """
    Executes confirmed commands against the seller platform.

    Single-target intents issue exactly one platform call. Bulk intents
    re-fetch the current item set, filter it, and fan out one call per
    target, recording an ItemLog for every target regardless of outcome.
    """

    def __init__(
        self,
        platform: SellerPlatform,
        price_floor: Optional[float] = None,
        discount_cap_percent: Optional[float] = None,
        max_workers: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        policy = get_config().policy
        self.platform = platform
        self.price_floor = price_floor if price_floor is not None else policy.price_floor
        self.discount_cap_percent = (
            discount_cap_percent if discount_cap_percent is not None
            else policy.discount_cap_percent
        )
        self.max_workers = max_workers or policy.bulk_max_workers
        self.clock = clock or (lambda: datetime.now(timezone.utc))

        self._handlers: dict[Intent, Callable] = {
            Intent.CREATE_LISTING: self._create_listing,
            Intent.UPDATE_PRICE: self._update_price,
            Intent.ENABLE_OFFERS: self._enable_offers,
            Intent.BULK_PRICE_ADJUST: self._bulk_price_adjust,
            Intent.RESPOND_TO_BUYER: self._respond_to_buyer,
            Intent.END_LISTING: self._end_listing,
            Intent.DUPLICATE_LISTING: self._duplicate_listing,
            Intent.SEND_OFFER_TO_WATCHERS: self._send_offer_to_watchers,
            Intent.UPDATE_FULFILLMENT_SETTINGS: self._update_fulfillment,
            Intent.BULK_END_LISTINGS: self._bulk_end_listings,
            Intent.UNKNOWN: self._unknown,
        }

    def execute(self, command: ParsedCommand) -> ExecutionResult:
        """
        Execute a confirmed command.

        Args:
            command: The confirmed command, possibly edited by the seller

        Returns:
            ExecutionResult with a human-readable message and, for bulk
            intents, one ItemLog per target
        """
        logger.info(f"Executing {command.intent.value}")

        outcome = validate(command.intent, command.fields)
        if outcome.missing_required:
            return failure(f"Cannot execute, missing {', '.join(outcome.missing_required)}.")

        fields = FIELD_MODELS[command.intent].model_validate(outcome.cleaned_fields)
        result = self._handlers[command.intent](fields)

        logger.info(f"{command.intent.value} finished: success={result.success} {result.message}")
        return result

    # Helpers

    def _single(
        self,
        outcome: PlatformOutcome,
        success_message: str,
        capability_message: str,
    ) -> ExecutionResult:
        """Map one platform outcome directly onto the result."""
        if outcome.success:
            return ExecutionResult(success=True, message=success_message)
        if outcome.capability_missing:
            return failure(capability_message)
        return failure(f"Platform error: {outcome.error or UNKNOWN_ERROR}")

    def _fetch_items(self) -> list[ActiveItem]:
        # Always re-read; a preview's snapshot may be stale
        return self.platform.list_active_items()

    def _fan_out(
        self,
        targets: list[ActiveItem],
        apply: Callable[[ActiveItem], ItemLog],
    ) -> list[ItemLog]:
        """Apply one call per target, collecting an ItemLog per target in fetch order."""

        def guarded(item: ActiveItem) -> ItemLog:
            try:
                return apply(item)
            except Exception as e:
                logger.warning(f"Call for {item.item_id} raised: {e}", exc_info=True)
                return ItemLog(
                    item_id=item.item_id,
                    title=item.title or item.item_id,
                    old_value=item.price,
                    success=False,
                    error=str(e) or UNKNOWN_ERROR,
                )

        if self.max_workers <= 1 or len(targets) <= 1:
            return [guarded(item) for item in targets]

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            # map() yields in input order
            return list(pool.map(guarded, targets))

    @staticmethod
    def _item_error(outcome: PlatformOutcome) -> Optional[str]:
        if outcome.success:
            return None
        return outcome.error or UNKNOWN_ERROR

    # Capability gaps

    def _unknown(self, f: UnknownFields) -> ExecutionResult:
        return failure(
            "Intent not recognized. Try being more specific, e.g. "
            "\"Update listing 12345 price to $50\" or \"End listing 12345, out of stock\"."
        )

    def _create_listing(self, f: CreateListingFields) -> ExecutionResult:
        return failure(
            "Create Listing requires image upload, which the command pipeline does not perform. "
            f"Upload photos in the listing studio to publish \"{f.title}\"."
        )

    def _enable_offers(self, f: EnableOffersFields) -> ExecutionResult:
        return failure(
            "Enable Offers requires a ReviseItem call with BestOfferEnabled=true, "
            f"which the platform backend does not expose. Listing: {f.listing_id}."
        )

    def _respond_to_buyer(self, f: RespondToBuyerFields) -> ExecutionResult:
        return failure(
            "Respond to Buyer requires the platform messaging capability "
            f"(GetMemberMessages + AddMemberMessageAAQToPartner). Message staged: \"{f.message}\""
        )

    # Single-target mutations

    def _update_price(self, f: UpdatePriceFields) -> ExecutionResult:
        outcome = self.platform.set_price(f.listing_id, f.new_price)
        return self._single(
            outcome,
            f"Listing {f.listing_id} price updated to {format_money(f.new_price)}.",
            f"Update Price requires /api/apply-optimization (ReviseItem). Listing: {f.listing_id}.",
        )

    def _end_listing(self, f: EndListingFields) -> ExecutionResult:
        reason = f.reason or "other"
        outcome = self.platform.end_item(f.listing_id, reason)
        return self._single(
            outcome,
            f"Listing {f.listing_id} ended.",
            f"End Listing requires /api/end-listing (EndItem). Listing: {f.listing_id}, reason: {reason}.",
        )

    def _duplicate_listing(self, f: DuplicateListingFields) -> ExecutionResult:
        overrides = {}
        if f.price_override is not None:
            overrides["price"] = f.price_override
        if f.quantity_override is not None:
            overrides["quantity"] = f.quantity_override

        outcome = self.platform.duplicate_item(f.listing_id, overrides)
        new_id = outcome.data.get("newItemId") or "see Seller Hub"
        price_note = f", new price: {format_money(f.price_override)}" if f.price_override is not None else ""
        return self._single(
            outcome,
            f"Listing {f.listing_id} duplicated. New ID: {new_id}.",
            "Duplicate Listing requires /api/duplicate-listing (GetItem + AddItem relist). "
            f"Source: {f.listing_id}{price_note}.",
        )

    def _send_offer_to_watchers(self, f: SendOfferToWatchersFields) -> ExecutionResult:
        if f.discount_value <= 0:
            return failure("Discount must be a positive amount.")
        if f.discount_type == "percentage" and exceeds_discount_cap(
            f.discount_value, self.discount_cap_percent
        ):
            logger.warning(f"Blocked {f.discount_value}% watcher offer on {f.listing_id}")
            return failure(
                f"Safety cap: discount cannot exceed {self.discount_cap_percent:g}%. "
                "Reduce discount_value and retry."
            )

        outcome = self.platform.send_watcher_offer(f.listing_id, f.discount_type, f.discount_value)
        unit = "%" if f.discount_type == "percentage" else " USD"
        return self._single(
            outcome,
            f"Offer sent to watchers on listing {f.listing_id}.",
            "Send Offer to Watchers requires /api/send-offer-to-watchers "
            f"(Marketing API sendOfferToInterestedBuyers). Listing: {f.listing_id}, "
            f"discount: {f.discount_value:g}{unit} off.",
        )

    def _update_fulfillment(self, f: UpdateFulfillmentSettingsFields) -> ExecutionResult:
        updates = []
        if f.handling_time is not None:
            updates.append(f"handling time -> {f.handling_time:g}d")
        if f.vacation_mode is not None:
            updates.append(f"vacation mode -> {'ON' if f.vacation_mode else 'OFF'}")
        if f.auto_reply_message:
            updates.append("auto-reply set")
        if not updates:
            return failure("No fulfillment settings specified.")

        settings = f.model_dump(exclude_none=True)
        outcome = self.platform.update_fulfillment(settings)
        return self._single(
            outcome,
            f"Fulfillment updated: {', '.join(updates)}.",
            "Update Fulfillment requires /api/update-fulfillment (Account API). "
            f"Intended: {', '.join(updates)}.",
        )

    # Bulk mutations

    def _bulk_price_adjust(self, f: BulkPriceAdjustFields) -> ExecutionResult:
        if f.adjustment_type == "percentage" and exceeds_discount_cap(
            -f.adjustment_value, self.discount_cap_percent
        ):
            logger.warning(f"Blocked {f.adjustment_value}% bulk adjustment")
            return failure(
                f"Safety cap: a bulk decrease cannot exceed {self.discount_cap_percent:g}%. "
                "Reduce adjustment_value and retry."
            )

        try:
            items = self._fetch_items()
        except PlatformError as e:
            logger.error(f"Could not fetch listings: {e}")
            return failure(f"Could not fetch listings: {e}")

        targets = TargetFilter(condition=f.filter_condition).filter(items)
        if not targets:
            return failure(NO_MATCHES)

        def apply(item: ActiveItem) -> ItemLog:
            new_price = adjust_price(
                item.price, f.adjustment_type, f.adjustment_value, self.price_floor
            )
            outcome = self.platform.set_price(item.item_id, new_price)
            return ItemLog(
                item_id=item.item_id,
                title=item.title or item.item_id,
                old_value=item.price,
                new_value=new_price,
                success=outcome.success,
                error=self._item_error(outcome),
            )

        item_logs = self._fan_out(targets, apply)
        return self._bulk_result("Adjusted", item_logs)

    def _bulk_end_listings(self, f: BulkEndListingsFields) -> ExecutionResult:
        try:
            items = self._fetch_items()
        except PlatformError as e:
            logger.error(f"Could not fetch listings: {e}")
            return failure(f"Could not fetch listings: {e}")

        target_filter = TargetFilter(
            condition=f.filter_condition,
            older_than_days=f.older_than_days,
            below_price=f.below_price,
        )
        targets = target_filter.filter(items, now=self.clock())
        if not targets:
            return failure(NO_MATCHES)

        missing_route = []

        def apply(item: ActiveItem) -> ItemLog:
            outcome = self.platform.end_item(item.item_id, "other")
            if outcome.capability_missing:
                missing_route.append(item.item_id)
            return ItemLog(
                item_id=item.item_id,
                title=item.title or item.item_id,
                old_value=item.price,
                new_value="ENDED",
                success=outcome.success,
                error=self._item_error(outcome),
            )

        item_logs = self._fan_out(targets, apply)
        if len(missing_route) == len(targets):
            return ExecutionResult(
                success=False,
                message=(
                    "Bulk End Listings requires /api/end-listing (EndItem). "
                    f"{len(targets)} listings matched your filter would be ended."
                ),
                item_logs=item_logs,
            )
        return self._bulk_result("Ended", item_logs)

    def _bulk_result(self, verb: str, item_logs: list[ItemLog]) -> ExecutionResult:
        succeeded = sum(1 for log in item_logs if log.success)
        failed = len(item_logs) - succeeded
        return ExecutionResult(
            success=succeeded > 0,
            message=bulk_message(verb, succeeded, len(item_logs), failed),
            item_logs=item_logs,
        )
