import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.database import engine
from app.services.sports import SPORT_KEYS

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting calendar API (sports: {', '.join(SPORT_KEYS)}, periodic sync: {settings.sync_enabled})")
    yield
    await engine.dispose()


app = FastAPI(
    title="Sport Calendar Backend",
    description="Multi-sport calendar, fixtures and standings API",
    version="1.0.0",
    lifespan=lifespan,
)

# Comma-separated origins, or "*" for any
origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    return {"status": "healthy", "sports": list(SPORT_KEYS)}


from app.api.router import api_router
app.include_router(api_router, prefix="/api/v1")
