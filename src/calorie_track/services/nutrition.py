"""Nutrition service integrating USDA FDC."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

import httpx

from calorie_track.adapters.fdc_client import FdcClient
from calorie_track.domain.nutrition import FoodDetails, FoodSummary
from calorie_track.services.cache import Cache
from calorie_track.services.extraction import extract_nutrients

DEFAULT_DATA_TYPES = ["Foundation", "SR Legacy"]
HTTP_NOT_FOUND = 404
HTTP_CLIENT_ERROR = 400
HTTP_SERVER_ERROR = 500

T = TypeVar("T")

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


@dataclass
class NutritionService:
    """Service for nutrition lookups with caching."""

    fdc_client: FdcClient
    cache: Cache
    search_ttl_seconds: int = 3600
    food_ttl_seconds: int = 86400
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3
    default_data_types: list[str] = field(
        default_factory=lambda: list(DEFAULT_DATA_TYPES)
    )

    async def search(
        self, query: str, limit: int = 10, data_types: list[str] | None = None
    ) -> list[FoodSummary]:
        """Search FDC foods with caching; each hit carries its profile."""
        resolved_types = data_types or self.default_data_types
        cache_key = (
            f"fdc:search:{query.lower()}:{limit}:{','.join(sorted(resolved_types))}"
        )
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(
                query, page_size=limit, data_types=resolved_types
            ),
            action="search",
        )
        foods = [
            _to_summary(food)
            for food in payload.get("foods") or []
            if isinstance(food, dict) and "fdcId" in food
        ]
        self.cache.set(cache_key, foods, ttl_seconds=self.search_ttl_seconds)
        _logger.info("Nutrition search FDC: query=%s results=%s", query, len(foods))
        return foods

    async def get_food(self, fdc_id: int) -> FoodDetails | None:
        """Return a food's per-100 g profile, or None when FDC has no data."""
        cache_key = f"fdc:food:{fdc_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, FoodDetails):
            return cached

        try:
            payload = await self._call_with_retry(
                lambda: self.fdc_client.get_food(fdc_id),
                action=f"get_food:{fdc_id}",
            )
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code != HTTP_NOT_FOUND:
                raise
            _logger.info("FDC food %s not found, trying bulk lookup", fdc_id)
            payload = await self._bulk_lookup(fdc_id)
            if payload is None:
                return None

        details = FoodDetails(
            fdc_id=int(payload.get("fdcId", fdc_id)),
            name=str(payload.get("description", "")),
            data_type=payload.get("dataType"),
            profile=extract_nutrients(payload),
        )
        if details.profile.is_empty:
            _logger.warning("No nutrient data available for FDC food %s", fdc_id)
            return None
        self.cache.set(cache_key, details, ttl_seconds=self.food_ttl_seconds)
        return details

    async def _bulk_lookup(self, fdc_id: int) -> dict[str, object] | None:
        foods = await self._call_with_retry(
            lambda: self.fdc_client.get_foods([fdc_id]),
            action=f"get_foods:{fdc_id}",
        )
        if not foods or not isinstance(foods[0], dict):
            return None
        return foods[0]

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[T]]", *, action: str
    ) -> T:
        """Call an async function with a short retry for transient failures."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                status_code = _status_code_from_exception(exc)
                _logger.warning(
                    "Nutrition %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    status_code,
                    exc,
                )
                if attempt > self.retry_attempts or not _is_transient(exc):
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _to_summary(food: dict[str, object]) -> FoodSummary:
    return FoodSummary(
        fdc_id=int(food["fdcId"]),
        name=str(food.get("description", "")),
        data_type=food.get("dataType"),
        brand_owner=food.get("brandOwner") or None,
        published_date=food.get("publishedDate") or None,
        profile=extract_nutrients(food),
    )


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _is_transient(exc: Exception) -> bool:
    """Client errors are not retried; server and network errors are."""
    if isinstance(exc, httpx.HTTPStatusError):
        status_code = exc.response.status_code
        return not HTTP_CLIENT_ERROR <= status_code < HTTP_SERVER_ERROR
    return True
