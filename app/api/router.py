from fastapi import APIRouter

from app.api.sports import router as sports_router
from app.api.competitions import router as competitions_router
from app.api.sync import router as sync_router

api_router = APIRouter()

# Calendar and standings (read-only)
api_router.include_router(sports_router)
api_router.include_router(competitions_router)

# Provider sync
api_router.include_router(sync_router)
