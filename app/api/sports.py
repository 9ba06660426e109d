from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.models import Competition, Sport
from app.schemas.sport import (
    CompetitionListResponse,
    CompetitionResponse,
    SportListResponse,
    SportResponse,
)

router = APIRouter(prefix="/sports", tags=["sports"])


@router.get("", response_model=SportListResponse)
async def get_sports(db: AsyncSession = Depends(get_db)):
    """Get all synced sports."""
    result = await db.execute(select(Sport).order_by(Sport.name))
    sports = result.scalars().all()
    return SportListResponse(
        items=[SportResponse.model_validate(s) for s in sports],
        total=len(sports),
    )


@router.get("/{sport_key}/competitions", response_model=CompetitionListResponse)
async def get_sport_competitions(sport_key: str, db: AsyncSession = Depends(get_db)):
    """Get competitions of a sport."""
    sport_id = (
        await db.execute(select(Sport.id).where(Sport.key == sport_key))
    ).scalar_one_or_none()
    if sport_id is None:
        raise HTTPException(status_code=404, detail="Sport not found")

    result = await db.execute(
        select(Competition).where(Competition.sport_id == sport_id).order_by(Competition.name)
    )
    competitions = result.scalars().all()
    total = (
        await db.execute(select(func.count(Competition.id)).where(Competition.sport_id == sport_id))
    ).scalar_one()
    return CompetitionListResponse(
        items=[CompetitionResponse.model_validate(c) for c in competitions],
        total=total,
    )
