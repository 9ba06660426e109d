from celery import Celery
from celery.schedules import crontab

from app.config import get_settings

settings = get_settings()

celery_app = Celery(
    "sportcal_tasks",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["app.tasks.sync_tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
)

if settings.sync_enabled:
    celery_app.conf.beat_schedule = {
        "sync-football-every-6h": {
            "task": "app.tasks.sync_tasks.sync_sport",
            "schedule": crontab(minute=0, hour="*/6"),
            "args": ("football",),
        },
        "sync-basketball-every-6h": {
            "task": "app.tasks.sync_tasks.sync_sport",
            "schedule": crontab(minute=30, hour="*/6"),
            "args": ("basketball",),
        },
        "sync-f1-daily": {
            "task": "app.tasks.sync_tasks.sync_sport",
            "schedule": crontab(hour=5, minute=0),
            "args": ("f1",),
        },
    }
else:
    celery_app.conf.beat_schedule = {}
