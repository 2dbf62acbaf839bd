"""
Listing models - active platform items and write outcomes.
"""
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class ActiveItem(BaseModel):
    """An active listing as reported by the seller platform."""
    item_id: str
    title: str = ""
    price: float = 0.0
    watcher_count: int = 0
    bid_count: int = 0
    start_time: Optional[datetime] = None
    condition: Optional[str] = None

    # Reference to original data
    raw: dict[str, Any] = Field(default_factory=dict)

    @field_validator("price", mode="before")
    @classmethod
    def parse_price(cls, v: Any) -> float:
        """Parse price from various formats."""
        if v is None:
            return 0.0
        if isinstance(v, (int, float)):
            return float(v)
        if isinstance(v, str):
            cleaned = v.replace(" ", "").replace(",", "").replace("$", "").replace("USD", "")
            try:
                return float(cleaned)
            except ValueError:
                return 0.0
        if isinstance(v, dict):
            return float(v.get("value") or v.get("amount") or 0)
        return 0.0

    @field_validator("watcher_count", "bid_count", mode="before")
    @classmethod
    def parse_count(cls, v: Any) -> int:
        try:
            return int(float(v))
        except (TypeError, ValueError):
            return 0

    @field_validator("condition", mode="before")
    @classmethod
    def normalize_condition(cls, v: Any) -> Optional[str]:
        if v is None or v == "":
            return None
        return str(v).strip().lower()

    def age_days(self, now: Optional[datetime] = None) -> Optional[int]:
        """Whole days since the listing started, or None if unknown."""
        if self.start_time is None:
            return None
        now = now or datetime.now(timezone.utc)
        start = self.start_time
        if start.tzinfo is None:
            start = start.replace(tzinfo=timezone.utc)
        return int((now - start).total_seconds() // 86400)


class PlatformOutcome(BaseModel):
    """Result of a single platform write."""
    success: bool
    error: Optional[str] = None
    capability_missing: bool = Field(
        default=False,
        description="The backend route for this operation does not exist",
    )
    data: dict[str, Any] = Field(default_factory=dict)
