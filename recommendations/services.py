"""
Recommendation services: creation, farmer feedback and statistics.
"""

import logging
from datetime import timedelta

from django.db import transaction
from django.db.models import Avg
from django.utils import timezone

from .models import DEFAULT_GENERATED_BY, AIRecommendation

logger = logging.getLogger(__name__)

# Fields a caller may change through update_recommendation()
UPDATABLE_FIELDS = (
    'title', 'description', 'action_items', 'priority',
    'confidence_score', 'valid_until', 'is_active',
)


class RecommendationError(Exception):
    """Raised when a recommendation operation is not allowed."""


class RecommendationService:
    """Lifecycle and feedback handling for AI recommendations."""

    @staticmethod
    @transaction.atomic
    def create_recommendation(**data):
        """
        Validate and store a new recommendation.

        ``generated_by`` defaults to the current AI system label.
        """
        data.setdefault('generated_by', DEFAULT_GENERATED_BY)
        recommendation = AIRecommendation(**data)
        recommendation.full_clean()
        recommendation.save()

        logger.info(
            f"Created {recommendation.priority} recommendation {recommendation.id} "
            f"for farmer {recommendation.farmer_id}"
        )
        return recommendation

    @staticmethod
    def mark_as_read(recommendation):
        """Stamp ``read_at`` the first time a recommendation is read."""
        if recommendation.is_read:
            return recommendation

        recommendation.is_read = True
        recommendation.read_at = timezone.now()
        recommendation.save(update_fields=['is_read', 'read_at'])
        logger.info(f"Marked recommendation as read: {recommendation.id}")
        return recommendation

    @staticmethod
    def mark_as_implemented(recommendation, notes=None):
        recommendation.is_implemented = True
        recommendation.implementation_date = timezone.now()
        recommendation.implementation_notes = notes
        recommendation.save(
            update_fields=['is_implemented', 'implementation_date', 'implementation_notes']
        )
        logger.info(f"Marked recommendation as implemented: {recommendation.id}")
        return recommendation

    @staticmethod
    def rate_effectiveness(recommendation, rating, notes=None):
        """
        Record the farmer's 1-5 effectiveness rating.

        Raises:
            RecommendationError: rating outside 1-5
        """
        if rating is None or not 1 <= rating <= 5:
            raise RecommendationError("Rating must be between 1 and 5")

        recommendation.effectiveness_rating = rating
        recommendation.effectiveness_notes = notes
        recommendation.save(update_fields=['effectiveness_rating', 'effectiveness_notes'])
        logger.info(f"Rated recommendation effectiveness: {recommendation.id} - Rating: {rating}")
        return recommendation

    @staticmethod
    @transaction.atomic
    def update_recommendation(recommendation, **changes):
        """
        Apply the non-None values in ``changes``.

        Raises:
            RecommendationError: an unknown or read-only field was given
        """
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise RecommendationError(
                f"Cannot update field(s): {', '.join(sorted(unknown))}"
            )

        changed = [field for field, value in changes.items() if value is not None]
        for field in changed:
            setattr(recommendation, field, changes[field])

        if changed:
            recommendation.full_clean()
            recommendation.save(update_fields=changed)
            logger.info(f"Updated AI recommendation: {recommendation.id} ({', '.join(changed)})")
        return recommendation

    @staticmethod
    def deactivate(recommendation):
        recommendation.is_active = False
        recommendation.save(update_fields=['is_active'])
        logger.info(f"Deactivated recommendation: {recommendation.id}")
        return recommendation

    @staticmethod
    def statistics(farmer_id):
        """
        Feedback summary for one farmer's recommendations.

        Returns:
            dict with total, unread, urgent and implemented counts, the
            average effectiveness rating and the implementation rate (%)
        """
        recommendations = AIRecommendation.objects.for_farmer(farmer_id)

        total = recommendations.count()
        implemented = recommendations.implemented().count()
        average_rating = recommendations.filter(
            effectiveness_rating__isnull=False
        ).aggregate(avg=Avg('effectiveness_rating'))['avg']

        return {
            'total': total,
            'unread': recommendations.unread().count(),
            'urgent': recommendations.urgent().count(),
            'implemented': implemented,
            'average_effectiveness_rating': float(average_rating) if average_rating is not None else 0.0,
            'implementation_rate': (implemented * 100.0 / total) if total else 0.0,
        }

    @staticmethod
    def purge_inactive(older_than_days):
        """
        Delete recommendations deactivated more than ``older_than_days`` days ago.

        Age is measured from ``updated_at``, so any later save of an inactive
        recommendation (marking it read, rating it) restarts its retention
        period.
        """
        cutoff = timezone.now() - timedelta(days=older_than_days)
        deleted, _ = AIRecommendation.objects.filter(
            is_active=False,
            updated_at__lt=cutoff
        ).delete()
        logger.info(f"Purged {deleted} inactive recommendations older than {older_than_days} days")
        return deleted
