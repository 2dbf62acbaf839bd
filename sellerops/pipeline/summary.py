"""
One-line human summaries of parsed commands.
"""
from ..models.command import ParsedCommand
from ..models.intent import Intent


def _num(value) -> str:
    if value is None:
        return "?"
    return f"{value:g}" if isinstance(value, float) else str(value)


def generate_summary(command: ParsedCommand) -> str:
    """Describe what the command will do, e.g. 'Decrease all used listings by 10%.'"""
    f = command.typed_fields()
    intent = command.intent

    if intent == Intent.CREATE_LISTING:
        return f"Create a new listing for \"{f.title}\" at ${_num(f.price)}."

    if intent == Intent.UPDATE_PRICE:
        return f"Update listing {f.listing_id} price to ${_num(f.new_price)}."

    if intent == Intent.ENABLE_OFFERS:
        auto = f" with auto-accept at ${_num(f.auto_accept_threshold)}" if f.auto_accept_threshold else ""
        return f"Enable Best Offer on listing {f.listing_id}{auto}."

    if intent == Intent.BULK_PRICE_ADJUST:
        value = f.adjustment_value or 0
        direction = "Increase" if value > 0 else "Decrease"
        unit = "%" if f.adjustment_type == "percentage" else "$"
        scope = f" all {f.filter_condition} listings" if f.filter_condition else " all listings"
        amount = f"{abs(value):g}{unit}" if unit == "%" else f"${abs(value):g}"
        return f"{direction}{scope} by {amount}."

    if intent == Intent.RESPOND_TO_BUYER:
        buyer = f" {f.buyer_id}" if f.buyer_id else ""
        return f"Send message to buyer{buyer}: \"{f.message}\""

    if intent == Intent.END_LISTING:
        reason = f" (reason: {f.reason.replace('_', ' ')})" if f.reason else ""
        return f"End listing {f.listing_id}{reason}."

    if intent == Intent.DUPLICATE_LISTING:
        overrides = []
        if f.price_override is not None:
            overrides.append(f"price ${_num(f.price_override)}")
        if f.quantity_override is not None:
            overrides.append(f"qty {_num(f.quantity_override)}")
        with_overrides = f" with {', '.join(overrides)}" if overrides else ""
        return f"Duplicate listing {f.listing_id}{with_overrides}."

    if intent == Intent.SEND_OFFER_TO_WATCHERS:
        if f.discount_type == "percentage":
            discount = f"{_num(f.discount_value)}% off"
        else:
            discount = f"${_num(f.discount_value)} off"
        return f"Send {discount} offer to all watchers on listing {f.listing_id}."

    if intent == Intent.UPDATE_FULFILLMENT_SETTINGS:
        parts = []
        if f.handling_time is not None:
            days = _num(f.handling_time)
            parts.append(f"handling time: {days} day{'s' if f.handling_time != 1 else ''}")
        if f.vacation_mode is not None:
            parts.append(f"vacation mode: {'ON' if f.vacation_mode else 'OFF'}")
        if f.auto_reply_message:
            parts.append("auto-reply message set")
        return f"Update fulfillment settings: {', '.join(parts) or 'no changes specified'}."

    if intent == Intent.BULK_END_LISTINGS:
        filters = []
        if f.filter_condition:
            filters.append(f"condition: {f.filter_condition}")
        if f.older_than_days is not None:
            filters.append(f"older than {_num(f.older_than_days)} days")
        if f.below_price is not None:
            filters.append(f"priced below ${_num(f.below_price)}")
        where = f" where {' and '.join(filters)}" if filters else ""
        return f"End all listings{where}."

    return "Command not recognized."
