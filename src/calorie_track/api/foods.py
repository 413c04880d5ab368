"""Food history and FoodData Central lookup endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from calorie_track.api.auth import require_user
from calorie_track.api.serializers import (
    serialize_food_details,
    serialize_food_history,
    serialize_food_summary,
)
from calorie_track.domain.models import UserRecord  # noqa: TC001
from calorie_track.services.foods import MAX_AUTOCOMPLETE
from calorie_track.services.scaling import scale_profile

if TYPE_CHECKING:
    from calorie_track.containers import AppContainer

MIN_SEARCH_LENGTH = 2

router = APIRouter(prefix="/api/foods", tags=["foods"])
_logger = logging.getLogger(__name__)


@router.get("")
async def list_foods(
    request: Request, user: UserRecord = Depends(require_user)
) -> dict[str, object]:
    """Return the user's food history, one item per name."""
    container: AppContainer = request.app.state.container
    foods = container.food_history_service.list_unique(user.id)
    return {"foods": [serialize_food_history(food) for food in foods]}


@router.get("/autocomplete")
async def autocomplete(
    request: Request,
    q: str | None = None,
    limit: int = Query(default=5, ge=1, le=MAX_AUTOCOMPLETE),
    user: UserRecord = Depends(require_user),
) -> dict[str, object]:
    """Suggest previously logged foods matching the query."""
    container: AppContainer = request.app.state.container
    foods = container.food_history_service.autocomplete(user.id, q, limit)
    return {"foods": [serialize_food_history(food) for food in foods]}


@router.get("/search/usda")
async def search_usda(
    request: Request,
    q: str = "",
    data_types: str | None = Query(default=None, alias="dataTypes"),
    limit: int = Query(default=10, ge=1, le=50),
    user: UserRecord = Depends(require_user),  # noqa: ARG001
) -> dict[str, object]:
    """Search FoodData Central; each hit carries its per-100 g profile."""
    container: AppContainer = request.app.state.container
    query = q.strip()
    if len(query) < MIN_SEARCH_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query must be at least 2 characters",
        )
    resolved_types = _parse_data_types(data_types)
    try:
        foods = await container.nutrition_service.search(
            query, limit=limit, data_types=resolved_types
        )
    except httpx.HTTPError as exc:
        _logger.warning("USDA search failed", extra={"error": str(exc)})
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to search USDA database",
        ) from exc
    return {"foods": [serialize_food_summary(food) for food in foods]}


@router.get("/usda/{fdc_id}")
async def get_usda_food(
    fdc_id: int,
    request: Request,
    quantity: str | None = None,
    user: UserRecord = Depends(require_user),  # noqa: ARG001
) -> dict[str, object]:
    """Return one FDC food, scaled to ``quantity`` when it names a weight."""
    container: AppContainer = request.app.state.container
    try:
        food = await container.nutrition_service.get_food(fdc_id)
    except httpx.HTTPError as exc:
        _logger.warning(
            "USDA lookup failed", extra={"fdc_id": fdc_id, "error": str(exc)}
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to fetch food details",
        ) from exc
    if food is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Food data not available - please enter nutrition manually",
        )
    scaled = scale_profile(food.profile, quantity)
    return serialize_food_details(food, scaled, quantity)


def _parse_data_types(raw: str | None) -> list[str] | None:
    if not raw:
        return None
    types = [chunk.strip() for chunk in raw.split(",")]
    return [item for item in types if item] or None
