"""
Seller platform HTTP client with retry logic and normalization.
"""
import logging
from datetime import datetime
from typing import Any, Optional

import requests
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..config import get_config
from ..errors import PlatformError
from ..models.listing import ActiveItem, PlatformOutcome
from .base import SellerPlatform


logger = logging.getLogger(__name__)


# Status codes meaning the backend has no route for the operation
CAPABILITY_MISSING_STATUSES = {404, 405, 501}


class PlatformClient(SellerPlatform):
    """
    Talks to the seller backend over HTTP.
    Returns normalized ActiveItem models instead of raw dicts.
    """

    ACTIVE_LISTINGS = "/api/active-listings"
    APPLY_OPTIMIZATION = "/api/apply-optimization"
    END_LISTING = "/api/end-listing"
    DUPLICATE_LISTING = "/api/duplicate-listing"
    SEND_OFFER_TO_WATCHERS = "/api/send-offer-to-watchers"
    UPDATE_FULFILLMENT = "/api/update-fulfillment"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
        session: Optional[requests.Session] = None,
        wait=None,
    ):
        config = get_config().platform
        self.base_url = (base_url or config.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config.timeout_seconds
        self.max_attempts = max_attempts or config.max_attempts
        self.session = session or requests.Session()
        self._wait = wait if wait is not None else wait_exponential(multiplier=1, min=2, max=10)
        logger.info(f"PlatformClient initialized for {self.base_url}")

    def _send(self, method: str, path: str, payload: Optional[dict] = None) -> requests.Response:
        """Send one request, retrying transport failures."""
        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self._wait,
            retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
            before_sleep=lambda retry_state: logger.warning(
                f"Retry attempt {retry_state.attempt_number} for {method} {path}"
            ),
            reraise=True,
        )
        return retrying(
            self.session.request,
            method,
            self.base_url + path,
            json=payload,
            timeout=self.timeout,
        )

    def _post(self, path: str, payload: dict[str, Any]) -> PlatformOutcome:
        """POST a write operation and map the response onto an outcome."""
        try:
            response = self._send("POST", path, payload)
        except requests.RequestException as e:
            logger.error(f"POST {path} failed: {e}")
            return PlatformOutcome(success=False, error=str(e) or type(e).__name__)

        if response.status_code in CAPABILITY_MISSING_STATUSES:
            logger.warning(f"POST {path} not available (HTTP {response.status_code})")
            return PlatformOutcome(
                success=False,
                capability_missing=True,
                error=f"HTTP {response.status_code}",
            )

        try:
            data = response.json()
        except ValueError:
            return PlatformOutcome(
                success=False,
                error=f"Invalid response from platform (HTTP {response.status_code})",
            )
        if not isinstance(data, dict):
            data = {}

        return PlatformOutcome(
            success=bool(data.get("success")),
            error=self._extract_error(data),
            data=data,
        )

    @staticmethod
    def _extract_error(data: dict[str, Any]) -> Optional[str]:
        errors = data.get("errors")
        if isinstance(errors, list) and errors:
            return ", ".join(str(e) for e in errors)
        error = data.get("error")
        return str(error) if error else None

    def list_active_items(self) -> list[ActiveItem]:
        """
        Fetch all active listings.

        Raises:
            PlatformError: If the listings cannot be read
        """
        logger.info("Fetching active listings")
        try:
            response = self._send("GET", self.ACTIVE_LISTINGS)
            data = response.json()
        except requests.RequestException as e:
            raise PlatformError(str(e) or type(e).__name__) from e
        except ValueError as e:
            raise PlatformError("Invalid response from platform") from e

        if not isinstance(data, dict) or not data.get("success"):
            error = self._extract_error(data) if isinstance(data, dict) else None
            raise PlatformError(error or f"HTTP {response.status_code}")

        items = []
        for raw in data.get("items") or []:
            normalized = self._normalize_raw_item(raw)
            if normalized:
                items.append(normalized)

        logger.info(f"Fetched {len(items)} active listings")
        return items

    def set_price(self, item_id: str, price: float) -> PlatformOutcome:
        return self._post(
            self.APPLY_OPTIMIZATION,
            {"itemId": item_id, "changes": {"price": price}},
        )

    def end_item(self, item_id: str, reason: str) -> PlatformOutcome:
        return self._post(self.END_LISTING, {"itemId": item_id, "reason": reason})

    def duplicate_item(
        self,
        item_id: str,
        overrides: Optional[dict[str, Any]] = None,
    ) -> PlatformOutcome:
        overrides = overrides or {}
        return self._post(
            self.DUPLICATE_LISTING,
            {
                "itemId": item_id,
                "priceOverride": overrides.get("price"),
                "quantityOverride": overrides.get("quantity"),
            },
        )

    def send_watcher_offer(
        self,
        item_id: str,
        discount_type: str,
        discount_value: float,
    ) -> PlatformOutcome:
        return self._post(
            self.SEND_OFFER_TO_WATCHERS,
            {
                "itemId": item_id,
                "discountType": discount_type,
                "discountValue": discount_value,
            },
        )

    def update_fulfillment(self, settings: dict[str, Any]) -> PlatformOutcome:
        return self._post(self.UPDATE_FULFILLMENT, settings)

    def _normalize_raw_item(self, raw: Any) -> Optional[ActiveItem]:
        """Normalize a raw listing dict to an ActiveItem model."""
        if not isinstance(raw, dict):
            return None

        item_id = str(raw.get("itemId") or raw.get("item_id") or raw.get("id") or "")
        if not item_id:
            return None

        start_time = None
        start_str = raw.get("startTime") or raw.get("start_time")
        if start_str:
            try:
                start_time = datetime.fromisoformat(str(start_str).replace("Z", "+00:00"))
            except ValueError:
                logger.warning(f"Unparseable startTime for {item_id}: {start_str}")

        try:
            return ActiveItem(
                item_id=item_id,
                title=raw.get("title") or item_id,
                price=raw.get("price"),
                watcher_count=raw.get("watchCount", raw.get("watcherCount", 0)),
                bid_count=raw.get("bids", raw.get("bidCount", 0)),
                start_time=start_time,
                condition=raw.get("condition") or raw.get("conditionDisplayName"),
                raw=raw,
            )
        except ValueError as e:
            logger.warning(f"Failed to normalize listing {item_id}: {e}")
            return None
