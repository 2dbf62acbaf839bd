"""
Price arithmetic shared by the previewer and the execution engine.
"""
from typing import Optional

from ..config import get_config


def _floor(price_floor: Optional[float]) -> float:
    if price_floor is None:
        return get_config().policy.price_floor
    return price_floor


def clamp_price(price: float, price_floor: Optional[float] = None) -> float:
    """Round to cents and never go below the floor."""
    return max(_floor(price_floor), round(price, 2))


def adjust_price(
    current: float,
    adjustment_type: str,
    adjustment_value: float,
    price_floor: Optional[float] = None,
) -> float:
    """
    Apply a bulk adjustment to one price.

    Percentage: current * (1 + value/100), negative value = decrease.
    Fixed: current + value.
    """
    if adjustment_type == "percentage":
        raw = current * (1 + adjustment_value / 100)
    else:
        raw = current + adjustment_value
    return clamp_price(raw, price_floor)


def offer_price(
    current: float,
    discount_type: str,
    discount_value: float,
    price_floor: Optional[float] = None,
) -> float:
    """Price offered to watchers after a discount (value is positive)."""
    if discount_type == "percentage":
        raw = current * (1 - discount_value / 100)
    else:
        raw = current - discount_value
    return clamp_price(raw, price_floor)


def exceeds_discount_cap(
    percent_off: float,
    cap_percent: Optional[float] = None,
) -> bool:
    """True when a percentage discount is above the safety ceiling."""
    if cap_percent is None:
        cap_percent = get_config().policy.discount_cap_percent
    return percent_off > cap_percent


def format_money(amount: float, decimals: int = 2) -> str:
    return f"${amount:.{decimals}f}"
