"""
Intent models - the closed set of seller actions and their display metadata.
"""
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel


class Intent(str, Enum):
    """Kind of action a natural-language command requests."""
    CREATE_LISTING = "CREATE_LISTING"
    UPDATE_PRICE = "UPDATE_PRICE"
    ENABLE_OFFERS = "ENABLE_OFFERS"
    BULK_PRICE_ADJUST = "BULK_PRICE_ADJUST"
    RESPOND_TO_BUYER = "RESPOND_TO_BUYER"
    END_LISTING = "END_LISTING"
    DUPLICATE_LISTING = "DUPLICATE_LISTING"
    SEND_OFFER_TO_WATCHERS = "SEND_OFFER_TO_WATCHERS"
    UPDATE_FULFILLMENT_SETTINGS = "UPDATE_FULFILLMENT_SETTINGS"
    BULK_END_LISTINGS = "BULK_END_LISTINGS"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Intent":
        """
        Map a classifier tag onto an Intent.

        Accepts the canonical upper snake case as well as kebab-case and
        lower-case spellings. Anything outside the closed set is UNKNOWN.
        """
        if isinstance(value, Intent):
            return value
        if not isinstance(value, str):
            return cls.UNKNOWN
        key = value.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls(key)
        except ValueError:
            return cls.UNKNOWN


Condition = Literal["new", "used", "refurbished"]
ShippingPolicy = Literal["free", "calculated", "flat"]
AdjustmentType = Literal["percentage", "fixed"]
DiscountType = Literal["percentage", "fixed"]
EndReason = Literal["out_of_stock", "damaged", "other"]

CONDITIONS = ("new", "used", "refurbished")
SHIPPING_POLICIES = ("free", "calculated", "flat")
AMOUNT_TYPES = ("percentage", "fixed")
END_REASONS = ("out_of_stock", "damaged", "other")


class IntentMeta(BaseModel):
    """Display metadata for an intent."""
    label: str
    category: Literal["Inventory", "Pricing", "Negotiation", "Account", "Command"]
    destructive: bool = False


INTENT_META: dict[Intent, IntentMeta] = {
    Intent.CREATE_LISTING: IntentMeta(label="Create Listing", category="Inventory"),
    Intent.UPDATE_PRICE: IntentMeta(label="Update Price", category="Pricing"),
    Intent.ENABLE_OFFERS: IntentMeta(label="Enable Offers", category="Negotiation"),
    Intent.BULK_PRICE_ADJUST: IntentMeta(label="Bulk Price Adjust", category="Pricing", destructive=True),
    Intent.RESPOND_TO_BUYER: IntentMeta(label="Respond to Buyer", category="Negotiation"),
    Intent.END_LISTING: IntentMeta(label="End Listing", category="Inventory", destructive=True),
    Intent.DUPLICATE_LISTING: IntentMeta(label="Duplicate Listing", category="Inventory"),
    Intent.SEND_OFFER_TO_WATCHERS: IntentMeta(label="Send Offer to Watchers", category="Negotiation"),
    Intent.UPDATE_FULFILLMENT_SETTINGS: IntentMeta(label="Update Fulfillment", category="Account"),
    Intent.BULK_END_LISTINGS: IntentMeta(label="Bulk End Listings", category="Inventory", destructive=True),
    Intent.UNKNOWN: IntentMeta(label="Unknown", category="Command"),
}
