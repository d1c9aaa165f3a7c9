"""Admin dashboard overview router."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from kasupe.api.deps import get_current_admin, get_db
from kasupe.exceptions.custom import OverviewUnavailableError
from kasupe.models.user import AdminUser
from kasupe.schemas.overview import AdminOverviewResponse
from kasupe.services.overview_service import build_overview, load_overview_dataset

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/admin", tags=["admin-overview"])


@router.get("/overview", response_model=AdminOverviewResponse)
async def get_overview(
    db: AsyncSession = Depends(get_db),
    _admin: AdminUser = Depends(get_current_admin),
) -> JSONResponse:
    """Return KPIs, top cars, payment split, time series and recent bookings.

    Computed fresh from the full car and booking tables on every call. The
    payload is dumped inside the error guard, so serialization failures also
    map to ``OverviewUnavailableError``.
    """
    try:
        cars, bookings = await load_overview_dataset(db)
        overview = build_overview(cars, bookings, now=datetime.now(timezone.utc))
        payload = overview.model_dump(mode="json", by_alias=True)
    except Exception:
        logger.exception("Failed to build admin overview")
        raise OverviewUnavailableError() from None
    return JSONResponse(content=payload)
