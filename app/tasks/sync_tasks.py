from app.tasks import celery_app
from app.database import AsyncSessionLocal
from app.services.sync import SyncOrchestrator
from app.config import get_settings
from app.utils.async_celery import run_async

settings = get_settings()


async def _sync_sport(sport_key: str, season: str | None = None):
    """Full sync of one sport."""
    async with AsyncSessionLocal() as db:
        orchestrator = SyncOrchestrator(db)
        return await orchestrator.sync(sport_key, season)


async def _sync_all():
    """Sync every configured sport in order."""
    async with AsyncSessionLocal() as db:
        orchestrator = SyncOrchestrator(db)
        return await orchestrator.sync_all(settings.sync_sport_keys)


@celery_app.task(name="app.tasks.sync_tasks.sync_sport")
def sync_sport(sport_key: str, season: str | None = None):
    """Celery task: Full sync of one sport (football, basketball, f1)."""
    return run_async(_sync_sport(sport_key, season))


@celery_app.task(name="app.tasks.sync_tasks.sync_all")
def sync_all():
    """Celery task: Sync all configured sports."""
    return run_async(_sync_all())
