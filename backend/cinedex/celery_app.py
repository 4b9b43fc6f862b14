"""Celery application configuration."""
from celery import Celery
from celery.schedules import crontab

from cinedex.config import settings

# Create Celery app
celery_app = Celery(
    "cinedex",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["cinedex.tasks.trending_refresh"]
)

# Configure Celery
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=10 * 60,  # 10 minutes
    task_soft_time_limit=8 * 60,  # 8 minutes
)

# Configure periodic tasks
celery_app.conf.beat_schedule = {
    "refresh-trending": {
        "task": "cinedex.tasks.trending_refresh.refresh_trending",
        "schedule": crontab(minute=0, hour=f"*/{settings.trending_refresh_hours}"),
    },
}
