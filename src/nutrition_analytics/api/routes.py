"""Fasting and food match endpoints with simple token auth."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import (
    APIRouter,
    Depends,
    Header,
    HTTPException,
    Query,
    Request,
    Response,
    status,
)

from nutrition_analytics.config import validate_timezone_name
from nutrition_analytics.domain.matching import NutritionAnalysis  # noqa: TC001
from nutrition_analytics.errors import InvalidTimezoneError, MissingParameterError
from nutrition_analytics.services.fasting import parse_log_date, today_in_timezone
from nutrition_analytics.services.fasting_report import (
    describe_window,
    describe_windows,
)

if TYPE_CHECKING:
    from nutrition_analytics.containers import AppContainer
    from nutrition_analytics.domain.fasting import FastingWindow, LiveFast
    from nutrition_analytics.domain.matching import FoodMatch

router = APIRouter(tags=["analytics"])
logger = logging.getLogger(__name__)

_CACHE_CONTROL = "private, no-cache"


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


async def current_user_id(x_user_id: UUID = Header()) -> UUID:
    """Return the caller's user id, resolved upstream by the auth layer."""
    return x_user_id


@router.get("/fasting", dependencies=[Depends(require_api_token)])
async def get_fasting(  # noqa: PLR0913
    request: Request,
    response: Response,
    user_id: UUID = Depends(current_user_id),
    day: str | None = Query(default=None, alias="date"),
    start: str | None = Query(default=None, alias="from"),
    end: str | None = Query(default=None, alias="to"),
    timezone: str | None = None,
) -> dict[str, object]:
    """Return the fasting window for a date, or the windows for a range."""
    container: AppContainer = request.app.state.container
    service = container.fasting_service
    response.headers["Cache-Control"] = _CACHE_CONTROL

    if start is None and end is None:
        target = _require_date(day, "date")
        today = today_in_timezone(_resolve_timezone(container, timezone))
        try:
            fasting_status = service.fasting_status(user_id, target, today)
        except Exception:
            logger.exception("Failed to retrieve fasting window")
            raise
        logger.info(
            "Fasting window retrieved for %s (has_fast=%s, live=%s)",
            target.isoformat(),
            fasting_status.window is not None,
            fasting_status.live is not None,
        )
        return {
            "window": _serialize_window(fasting_status.window)
            if fasting_status.window is not None
            else None,
            "live": _serialize_live(fasting_status.live)
            if fasting_status.live is not None
            else None,
        }

    range_start, range_end = _require_range(start, end)
    try:
        windows = service.windows_for_range(user_id, range_start, range_end)
    except Exception:
        logger.exception("Failed to retrieve fasting windows")
        raise
    logger.info(
        "Fasting windows retrieved for %s..%s (count=%d)",
        range_start.isoformat(),
        range_end.isoformat(),
        len(windows),
    )
    return {"windows": [_serialize_window(window) for window in windows]}


@router.get("/fasting/summary", dependencies=[Depends(require_api_token)])
async def get_fasting_summary(  # noqa: PLR0913
    request: Request,
    response: Response,
    user_id: UUID = Depends(current_user_id),
    day: str | None = Query(default=None, alias="date"),
    start: str | None = Query(default=None, alias="from"),
    end: str | None = Query(default=None, alias="to"),
    timezone: str | None = None,
) -> dict[str, str]:
    """Return a plain-text description of fasting data.

    Without any date parameter the current day in the requested timezone is
    described.
    """
    container: AppContainer = request.app.state.container
    service = container.fasting_service
    response.headers["Cache-Control"] = _CACHE_CONTROL

    if start is None and end is None:
        if day is None:
            target = today_in_timezone(_resolve_timezone(container, timezone))
        else:
            target = parse_log_date(day, "date")
        try:
            window = service.window_for_date(user_id, target)
        except Exception:
            logger.exception("Failed to summarize fasting window")
            raise
        logger.info("Fasting summary rendered for %s", target.isoformat())
        return {"text": describe_window(target, window)}

    range_start, range_end = _require_range(start, end)
    try:
        windows = service.windows_for_range(user_id, range_start, range_end)
    except Exception:
        logger.exception("Failed to summarize fasting windows")
        raise
    logger.info(
        "Fasting summary rendered for %s..%s (count=%d)",
        range_start.isoformat(),
        range_end.isoformat(),
        len(windows),
    )
    return {"text": describe_windows(range_start, range_end, windows)}


@router.post("/find-matches", dependencies=[Depends(require_api_token)])
async def find_matches(
    analysis: NutritionAnalysis,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return custom foods that probably match the analysed food."""
    container: AppContainer = request.app.state.container
    try:
        matches = container.food_match_service.find_matches(user_id, analysis)
    except Exception:
        logger.exception("Failed to find matching foods")
        raise
    logger.info("Food matching complete (matches=%d)", len(matches))
    return {"matches": [_serialize_match(match) for match in matches]}


def _require_date(raw: str | None, field: str) -> date:
    if raw is None:
        raise MissingParameterError(f"Missing {field} parameter")
    return parse_log_date(raw, field)


def _require_range(start: str | None, end: str | None) -> tuple[date, date]:
    if start is None or end is None:
        raise MissingParameterError(
            "Both from and to parameters are required for date range queries"
        )
    return parse_log_date(start, "from"), parse_log_date(end, "to")


def _resolve_timezone(container: AppContainer, requested: str | None) -> str:
    if requested is None:
        return container.settings.default_timezone
    resolved = validate_timezone_name(requested)
    if resolved is None:
        raise InvalidTimezoneError(requested)
    return resolved


def _serialize_window(window: FastingWindow) -> dict[str, object]:
    return {
        "date": window.date.isoformat(),
        "lastMealTime": window.last_meal_time.isoformat(),
        "firstMealTime": window.first_meal_time.isoformat()
        if window.first_meal_time is not None
        else None,
        "durationMinutes": window.duration_minutes,
    }


def _serialize_live(live: LiveFast) -> dict[str, str]:
    return {
        "lastMealTime": live.last_meal_time.isoformat(),
        "startDate": live.start_date.isoformat(),
    }


def _serialize_match(match: FoodMatch) -> dict[str, object]:
    return {
        "customFoodId": match.custom_food_id,
        "foodName": match.food_name,
        "calories": match.calories,
        "proteinG": match.protein_g,
        "carbsG": match.carbs_g,
        "fatG": match.fat_g,
        "fitbitFoodId": match.fitbit_food_id,
        "matchRatio": match.match_ratio,
        "lastLoggedAt": match.last_logged_at.isoformat(),
        "amount": match.amount,
        "unitId": match.unit_id,
    }
