import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.services.sync import SyncOrchestrator
from app.schemas.sync import SyncResponse, SyncStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sync", tags=["sync"])


@router.post("/{sport_key}", response_model=SyncResponse)
async def sync_sport(
    sport_key: str,
    season: str | None = Query(default=None),
    db: AsyncSession = Depends(get_db),
):
    """Perform a full data synchronization for one sport."""
    try:
        orchestrator = SyncOrchestrator(db)
        results = await orchestrator.sync(sport_key, season)

        return SyncResponse(
            sport=sport_key,
            season=results.get("season"),
            status=SyncStatus.SUCCESS,
            message=f"{sport_key} synchronization completed successfully",
            details=results,
        )
    except Exception as e:
        logger.exception(f"{sport_key} sync failed")
        return SyncResponse(
            sport=sport_key,
            season=season,
            status=SyncStatus.FAILED,
            message=f"Synchronization failed: {str(e)}",
            details=None,
        )
