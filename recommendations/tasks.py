"""
Recommendation Celery tasks.
"""
from celery import shared_task
from django.conf import settings
import logging

logger = logging.getLogger(__name__)


@shared_task
def purge_inactive_recommendations(older_than_days=None):
    """
    Delete long-deactivated recommendations.

    Scheduled via Celery Beat weekly on Sunday at 3 AM.
    """
    from recommendations.services import RecommendationService

    if older_than_days is None:
        older_than_days = settings.RECOMMENDATION_INACTIVE_RETENTION_DAYS

    deleted = RecommendationService.purge_inactive(older_than_days)
    logger.info(f"Inactive recommendation purge complete: {deleted} deleted")
    return deleted
