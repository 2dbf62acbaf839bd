"""
Typed field models - one per intent.

Required-ness is enforced by the command registry, not here: a command may
carry explicit nulls for required fields until the seller completes it.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .intent import (
    AdjustmentType,
    Condition,
    DiscountType,
    EndReason,
    Intent,
    ShippingPolicy,
)


class IntentFields(BaseModel):
    """Base for per-intent field models."""
    model_config = ConfigDict(extra="ignore")


class CreateListingFields(IntentFields):
    title: Optional[str] = None
    price: Optional[float] = None
    condition: Optional[Condition] = None
    quantity: Optional[float] = None
    auto_accept_threshold: Optional[float] = None
    shipping_policy: Optional[ShippingPolicy] = None
    handling_time: Optional[float] = None


class UpdatePriceFields(IntentFields):
    listing_id: Optional[str] = None
    new_price: Optional[float] = None


class EnableOffersFields(IntentFields):
    listing_id: Optional[str] = None
    auto_accept_threshold: Optional[float] = None


class BulkPriceAdjustFields(IntentFields):
    adjustment_type: Optional[AdjustmentType] = None
    adjustment_value: Optional[float] = None  # negative = decrease
    filter_condition: Optional[Condition] = None


class RespondToBuyerFields(IntentFields):
    message: Optional[str] = None
    buyer_id: Optional[str] = None
    listing_id: Optional[str] = None


class EndListingFields(IntentFields):
    listing_id: Optional[str] = None
    reason: Optional[EndReason] = None


class DuplicateListingFields(IntentFields):
    listing_id: Optional[str] = None
    price_override: Optional[float] = None
    quantity_override: Optional[float] = None


class SendOfferToWatchersFields(IntentFields):
    listing_id: Optional[str] = None
    discount_type: Optional[DiscountType] = None
    discount_value: Optional[float] = None  # positive, e.g. 10 = 10% or $10 off


class UpdateFulfillmentSettingsFields(IntentFields):
    handling_time: Optional[float] = None  # days
    vacation_mode: Optional[bool] = None
    auto_reply_message: Optional[str] = None


class BulkEndListingsFields(IntentFields):
    filter_condition: Optional[Condition] = None
    older_than_days: Optional[float] = None
    below_price: Optional[float] = None


class UnknownFields(IntentFields):
    pass


FIELD_MODELS: dict[Intent, type[IntentFields]] = {
    Intent.CREATE_LISTING: CreateListingFields,
    Intent.UPDATE_PRICE: UpdatePriceFields,
    Intent.ENABLE_OFFERS: EnableOffersFields,
    Intent.BULK_PRICE_ADJUST: BulkPriceAdjustFields,
    Intent.RESPOND_TO_BUYER: RespondToBuyerFields,
    Intent.END_LISTING: EndListingFields,
    Intent.DUPLICATE_LISTING: DuplicateListingFields,
    Intent.SEND_OFFER_TO_WATCHERS: SendOfferToWatchersFields,
    Intent.UPDATE_FULFILLMENT_SETTINGS: UpdateFulfillmentSettingsFields,
    Intent.BULK_END_LISTINGS: BulkEndListingsFields,
    Intent.UNKNOWN: UnknownFields,
}
