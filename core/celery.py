"""
Celery configuration for the Smart Agriculture Management platform.

Tasks to run in background:
- Weather observation retention cleanup
- Purging of deactivated AI recommendations
"""
import os
from celery import Celery
from celery.schedules import crontab

# Set the default Django settings module
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'core.settings')

# Create Celery app
app = Celery('core')

# Load config from Django settings with CELERY_ prefix
app.config_from_object('django.conf:settings', namespace='CELERY')

# Auto-discover tasks in all installed apps
app.autodiscover_tasks()


# =============================================================================
# CELERY BEAT SCHEDULE - Periodic Tasks
# =============================================================================
app.conf.beat_schedule = {
    # Remove expired and poor quality weather observations (run at 2 AM)
    'cleanup-weather-data': {
        'task': 'weather.tasks.cleanup_weather_data',
        'schedule': crontab(hour=2, minute=0),
    },

    # Purge long-deactivated recommendations (run weekly on Sunday 3 AM)
    'purge-inactive-recommendations': {
        'task': 'recommendations.tasks.purge_inactive_recommendations',
        'schedule': crontab(hour=3, minute=0, day_of_week=0),
    },
}

# Celery configuration
app.conf.update(
    # Task result expiry
    result_expires=3600,  # 1 hour

    # Task time limits
    task_time_limit=300,  # 5 minutes hard limit
    task_soft_time_limit=240,  # 4 minutes soft limit

    # Retry policy
    task_acks_late=True,
    task_reject_on_worker_lost=True,

    # Prefetch multiplier (1 = fair distribution)
    worker_prefetch_multiplier=1,

    # Serialization
    task_serializer='json',
    result_serializer='json',
    accept_content=['json'],

    # Timezone
    timezone='Africa/Kigali',
    enable_utc=True,
)
