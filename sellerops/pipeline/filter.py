"""
Target filter - reduce the active listing set to the targets of a bulk command.
"""
import logging
from datetime import datetime
from typing import Optional

from ..models.listing import ActiveItem


logger = logging.getLogger(__name__)


class TargetFilter:
    """
    Applies bulk-command filters conjunctively against the current item set.
    Original fetch order is preserved.
    """

    def __init__(
        self,
        condition: Optional[str] = None,
        older_than_days: Optional[float] = None,
        below_price: Optional[float] = None,
    ):
        """
        Args:
            condition: Keep only items with this condition (case-insensitive)
            older_than_days: Keep only items whose age in whole days is >= this
            below_price: Keep only items priced strictly below this
        """
        self.condition = condition.lower() if condition else None
        self.older_than_days = older_than_days
        self.below_price = below_price

    @property
    def is_empty(self) -> bool:
        return (
            self.condition is None
            and self.older_than_days is None
            and self.below_price is None
        )

    def filter(
        self,
        items: list[ActiveItem],
        now: Optional[datetime] = None,
    ) -> list[ActiveItem]:
        """
        Filter items to bulk targets.

        Args:
            items: Current active items, in fetch order
            now: Reference time for age checks (defaults to current UTC time)

        Returns:
            Matching items, in fetch order
        """
        if self.is_empty:
            return list(items)

        matched = [item for item in items if self._matches(item, now)]
        logger.info(f"Target filter matched {len(matched)}/{len(items)} listings")
        return matched

    def _matches(self, item: ActiveItem, now: Optional[datetime]) -> bool:
        if self.condition is not None:
            if (item.condition or "") != self.condition:
                return False

        if self.older_than_days is not None:
            age = item.age_days(now)
            # Items without a start time cannot be shown to be old enough
            if age is None or age < self.older_than_days:
                return False

        if self.below_price is not None:
            if not item.price < self.below_price:
                return False

        return True
