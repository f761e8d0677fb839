"""
Weather Celery tasks.

Retention cleanup for stored observations, scheduled via Celery Beat.
"""
from celery import shared_task
from django.conf import settings
import logging

logger = logging.getLogger(__name__)


@shared_task
def cleanup_weather_data(days_old=None, poor_quality_days_old=None):
    """
    Apply the weather data retention policy.

    Poor quality observations are dropped after
    WEATHER_POOR_QUALITY_RETENTION_DAYS, everything else after
    WEATHER_DATA_RETENTION_DAYS.
    """
    from weather.services import WeatherDataService

    if days_old is None:
        days_old = settings.WEATHER_DATA_RETENTION_DAYS
    if poor_quality_days_old is None:
        poor_quality_days_old = settings.WEATHER_POOR_QUALITY_RETENTION_DAYS

    logger.info("Running weather data cleanup...")

    poor_quality = WeatherDataService.cleanup_poor_quality_data(poor_quality_days_old)
    old = WeatherDataService.cleanup_old_data(days_old)

    logger.info(f"Weather cleanup complete: {poor_quality} poor quality, {old} expired")
    return {'poor_quality_deleted': poor_quality, 'old_deleted': old}
