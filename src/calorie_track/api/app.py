"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime, timedelta

import httpx
from fastapi import Depends, FastAPI, HTTPException, Query, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware

from calorie_track.api.auth import require_user
from calorie_track.api.foods import router as foods_router
from calorie_track.api.models import (
    CalorieGoalPayload,
    EntryPayload,
    UserProfilePayload,
)
from calorie_track.api.serializers import (
    serialize_daily_summary,
    serialize_day_progress,
    serialize_entry,
    serialize_period_totals,
    serialize_user,
)
from calorie_track.app_logging import configure_logging
from calorie_track.config import parse_origins
from calorie_track.containers import AppContainer
from calorie_track.domain.entries import EntryInput
from calorie_track.domain.models import UserRecord
from calorie_track.services.entries import (
    EntryValidationError,
    NutritionUnavailableError,
)

DEFAULT_SUMMARY_DAYS = 7


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_origins(container.settings.frontend_url),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(foods_router)

    @app.get("/health")
    async def health(request: Request) -> dict[str, object]:
        """Simple health check endpoint."""
        settings = request.app.state.container.settings
        return {
            "status": "ok",
            "environment": settings.environment,
            "hasFdcKey": bool(settings.fdc_api_key),
            "hasOpenaiKey": bool(settings.openai_api_key),
        }

    @app.get("/api/me")
    async def me(user: UserRecord = Depends(require_user)) -> dict[str, object]:
        """Return the authenticated user."""
        return serialize_user(user)

    @app.post("/api/users")
    async def update_profile(
        payload: UserProfilePayload,
        request: Request,
        user: UserRecord = Depends(require_user),
    ) -> dict[str, object]:
        """Update the user's display name."""
        state_container: AppContainer = request.app.state.container
        updated = state_container.user_service.update_display_name(
            user, payload.display_name
        )
        return serialize_user(updated)

    @app.get("/api/entries")
    async def list_entries(
        request: Request,
        day: date | None = Query(default=None, alias="date"),
        user: UserRecord = Depends(require_user),
    ) -> dict[str, object]:
        """Return the user's entries for a date, today by default."""
        state_container: AppContainer = request.app.state.container
        entries = state_container.entry_service.list_entries(user.id, day or _today())
        return {"entries": [serialize_entry(entry) for entry in entries]}

    @app.post("/api/entries", status_code=status.HTTP_201_CREATED)
    async def create_entry(
        payload: EntryPayload,
        request: Request,
        user: UserRecord = Depends(require_user),
    ) -> dict[str, object]:
        """Create an entry from manual nutrients or an FDC food."""
        state_container: AppContainer = request.app.state.container
        try:
            entry = await state_container.entry_service.create_entry(
                user.id, _entry_input(payload)
            )
        except EntryValidationError as exc:
            raise _validation_error(exc) from exc
        except NutritionUnavailableError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("Food lookup failed", extra={"fdc_id": payload.fdc_id})
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Failed to fetch food details",
            ) from exc
        return serialize_entry(entry)

    @app.put("/api/entries/{entry_id}")
    async def update_entry(
        entry_id: str,
        payload: EntryPayload,
        request: Request,
        user: UserRecord = Depends(require_user),
    ) -> dict[str, object]:
        """Update an owned entry."""
        state_container: AppContainer = request.app.state.container
        try:
            entry = await state_container.entry_service.update_entry(
                user.id, entry_id, _entry_input(payload)
            )
        except EntryValidationError as exc:
            raise _validation_error(exc) from exc
        except NutritionUnavailableError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("Food lookup failed", extra={"fdc_id": payload.fdc_id})
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Failed to fetch food details",
            ) from exc
        if entry is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Entry not found"
            )
        return serialize_entry(entry)

    @app.delete("/api/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_entry(
        entry_id: str,
        request: Request,
        user: UserRecord = Depends(require_user),
    ) -> Response:
        """Delete an owned entry."""
        state_container: AppContainer = request.app.state.container
        if not state_container.entry_service.delete_entry(user.id, entry_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Entry not found"
            )
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.get("/api/summary")
    async def summary(
        request: Request,
        start_date: date | None = Query(default=None, alias="startDate"),
        end_date: date | None = Query(default=None, alias="endDate"),
        user: UserRecord = Depends(require_user),
    ) -> dict[str, object]:
        """Return one summary per day in the range, newest first."""
        state_container: AppContainer = request.app.state.container
        start, end = _resolve_range(start_date, end_date)
        summaries = state_container.stats_service.get_summary(user.id, start, end)
        return {"summaries": [serialize_daily_summary(item) for item in summaries]}

    @app.get("/api/summary/today")
    async def summary_today(
        request: Request,
        day: date | None = Query(default=None, alias="date"),
        user: UserRecord = Depends(require_user),
    ) -> dict[str, object]:
        """Return a day's totals with calorie goal progress."""
        state_container: AppContainer = request.app.state.container
        goal = state_container.user_service.get_calorie_goal(user.id)
        progress = state_container.stats_service.get_day_progress(
            user.id, day or _today(), goal
        )
        return serialize_day_progress(progress)

    @app.get("/api/summary/period")
    async def summary_period(
        request: Request,
        start_date: date | None = Query(default=None, alias="startDate"),
        end_date: date | None = Query(default=None, alias="endDate"),
        user: UserRecord = Depends(require_user),
    ) -> dict[str, object]:
        """Return totals across the range."""
        state_container: AppContainer = request.app.state.container
        start, end = _resolve_range(start_date, end_date)
        totals = state_container.stats_service.get_period_totals(user.id, start, end)
        return {
            "startDate": start.isoformat(),
            "endDate": end.isoformat(),
            **serialize_period_totals(totals),
        }

    @app.get("/api/goal/calories")
    async def get_calorie_goal(
        request: Request, user: UserRecord = Depends(require_user)
    ) -> dict[str, object]:
        """Return the user's daily calorie goal."""
        state_container: AppContainer = request.app.state.container
        goal = state_container.user_service.get_calorie_goal(user.id)
        return {"calorieGoal": goal}

    @app.put("/api/goal/calories")
    async def set_calorie_goal(
        payload: CalorieGoalPayload,
        request: Request,
        user: UserRecord = Depends(require_user),
    ) -> dict[str, object]:
        """Update the user's daily calorie goal."""
        state_container: AppContainer = request.app.state.container
        goal = state_container.user_service.set_calorie_goal(
            user.id, payload.calorie_goal
        )
        return {"calorieGoal": goal}

    @app.get("/api/ai/suggestions")
    async def suggestions(
        request: Request,
        start_date: date | None = Query(default=None, alias="startDate"),
        end_date: date | None = Query(default=None, alias="endDate"),
        user: UserRecord = Depends(require_user),
    ) -> dict[str, object]:
        """Return food suggestions for the period's daily averages."""
        state_container: AppContainer = request.app.state.container
        start, end = _resolve_range(start_date, end_date)
        totals = state_container.stats_service.get_period_totals(user.id, start, end)
        goal = state_container.user_service.get_calorie_goal(user.id)
        try:
            text = await state_container.recommendation_service.suggest(
                totals, goal, start, end
            )
        except Exception as exc:
            logger.exception("Failed to generate suggestions")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Failed to generate suggestions",
            ) from exc
        return {"suggestions": text}

    return app


def _entry_input(payload: EntryPayload) -> EntryInput:
    return EntryInput(
        name=payload.name,
        quantity=payload.quantity,
        calories=payload.calories,
        protein=payload.protein,
        fat=payload.fat,
        carbs=payload.carbs,
        date=payload.entry_date,
        fdc_id=payload.fdc_id,
    )


def _validation_error(exc: EntryValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"error": str(exc), "missingFields": exc.missing_fields},
    )


def _resolve_range(start: date | None, end: date | None) -> tuple[date, date]:
    """Fill in the default week and order the bounds."""
    resolved_end = end or _today()
    resolved_start = start or resolved_end - timedelta(days=DEFAULT_SUMMARY_DAYS - 1)
    if resolved_start > resolved_end:
        return resolved_end, resolved_start
    return resolved_start, resolved_end


def _today() -> date:
    return datetime.now(tz=UTC).date()
