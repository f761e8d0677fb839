"""
Tests for AI recommendations: validity window, feedback and statistics.
"""
from datetime import timedelta
from io import StringIO
from unittest.mock import patch

import pytest
from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.utils import timezone

from recommendations.models import AIRecommendation
from recommendations.serializers import AIRecommendationSerializer, EffectivenessRatingSerializer
from recommendations.services import RecommendationError, RecommendationService
from recommendations.tasks import purge_inactive_recommendations

pytestmark = pytest.mark.django_db

FARMER_ID = 'F1234567ABCDEF'


# =============================================================================
# FIXTURES
# =============================================================================

def recommend(priority='MEDIUM', farmer_id=FARMER_ID, **extra):
    return RecommendationService.create_recommendation(
        farmer_id=farmer_id,
        recommendation_type=extra.pop('recommendation_type', AIRecommendation.RecommendationType.FERTILIZER),
        title=extra.pop('title', f'{priority} advice'),
        priority=priority,
        **extra
    )


@pytest.fixture
def recommendation():
    return recommend(
        'HIGH',
        title='Apply NPK 17-17-17 before the rains',
        confidence_score=0.87,
    )


# =============================================================================
# MODEL
# =============================================================================

class TestRecommendationDefaults:
    """Construction and insert defaults."""

    def test_fresh_instance(self):
        rec = AIRecommendation()
        assert rec.id.startswith('REC')
        assert len(rec.id) == 14
        assert rec.created_at is not None
        assert rec.updated_at is not None
        assert rec.is_read is False
        assert rec.is_implemented is False
        assert rec.is_active is True

    def test_insert_defaults_valid_from_and_null_flags(self):
        rec = AIRecommendation(
            farmer_id=FARMER_ID,
            recommendation_type='WATER',
            title='Irrigate early morning',
            priority='LOW',
            is_read=None,
            is_implemented=None,
            is_active=None,
        )
        rec.save()

        assert rec.valid_from is not None
        assert rec.is_read is False
        assert rec.is_implemented is False
        assert rec.is_active is True

    def test_generated_by_default(self, recommendation):
        assert recommendation.generated_by == 'AI System v1.0'

    def test_id_stored_in_recommendation_id_column(self):
        assert AIRecommendation._meta.pk.column == 'recommendation_id'


class TestRecommendationValidation:
    """full_clean() constraints."""

    def test_confidence_score_range(self, recommendation):
        recommendation.confidence_score = 1.2
        with pytest.raises(ValidationError) as exc:
            recommendation.full_clean()
        assert 'confidence_score' in exc.value.message_dict

    @pytest.mark.parametrize('rating', [0, 6])
    def test_effectiveness_rating_range(self, recommendation, rating):
        recommendation.effectiveness_rating = rating
        with pytest.raises(ValidationError) as exc:
            recommendation.full_clean()
        assert 'effectiveness_rating' in exc.value.message_dict

    def test_valid_until_before_valid_from(self, recommendation):
        recommendation.valid_until = recommendation.valid_from - timedelta(days=1)
        with pytest.raises(ValidationError) as exc:
            recommendation.full_clean()
        assert 'valid_until' in exc.value.message_dict

    def test_unknown_type_rejected_on_create(self):
        with pytest.raises(ValidationError):
            recommend(recommendation_type='ASTROLOGY')
        assert AIRecommendation.objects.count() == 0


class TestRecommendationPredicates:
    """Expiry, validity and urgency."""

    def test_no_end_never_expires(self):
        rec = AIRecommendation(valid_from=timezone.now(), valid_until=None)
        assert not rec.is_expired()
        assert rec.days_until_expiry is None

    def test_expired(self):
        rec = AIRecommendation(valid_from=timezone.now() - timedelta(days=5),
                               valid_until=timezone.now() - timedelta(minutes=1))
        assert rec.is_expired()
        assert rec.days_until_expiry is None
        assert not rec.is_valid()

    def test_days_until_expiry(self):
        rec = AIRecommendation(valid_from=timezone.now(),
                               valid_until=timezone.now() + timedelta(days=3, hours=1))
        assert not rec.is_expired()
        assert rec.days_until_expiry == 3

    def test_valid_window(self):
        now = timezone.now()
        assert AIRecommendation(valid_from=now - timedelta(hours=1)).is_valid()
        assert not AIRecommendation(valid_from=now + timedelta(hours=1)).is_valid()
        assert not AIRecommendation(valid_from=now - timedelta(hours=1), is_active=False).is_valid()

    @pytest.mark.parametrize('priority,urgent', [
        ('URGENT', True),
        ('HIGH', True),
        ('MEDIUM', False),
        ('LOW', False),
    ])
    def test_is_urgent(self, priority, urgent):
        assert AIRecommendation(priority=priority).is_urgent() is urgent


# =============================================================================
# QUERYSET
# =============================================================================

class TestRecommendationQuerySet:
    """Farmer-scoped lookups."""

    def test_urgent_orders_by_priority(self):
        high = recommend('HIGH')
        urgent = recommend('URGENT')
        recommend('LOW')
        read_urgent = recommend('URGENT')
        RecommendationService.mark_as_read(read_urgent)
        inactive = recommend('URGENT')
        RecommendationService.deactivate(inactive)

        assert list(AIRecommendation.objects.for_farmer(FARMER_ID).urgent()) == [urgent, high]

    def test_valid_at(self):
        now = timezone.now()
        current = recommend(valid_from=now - timedelta(days=1), valid_until=now + timedelta(days=1))
        open_ended = recommend(valid_from=now - timedelta(days=1))
        recommend(valid_from=now - timedelta(days=10), valid_until=now - timedelta(days=2))
        recommend(valid_from=now + timedelta(days=2))

        assert set(AIRecommendation.objects.valid_at(now)) == {current, open_ended}

    def test_for_farmer(self):
        mine = recommend()
        recommend(farmer_id='FOTHERFARMER00')
        assert list(AIRecommendation.objects.for_farmer(FARMER_ID)) == [mine]

    def test_of_type(self):
        irrigation = recommend(recommendation_type=AIRecommendation.RecommendationType.IRRIGATION)
        recommend(recommendation_type=AIRecommendation.RecommendationType.FERTILIZER)
        recommend(recommendation_type=AIRecommendation.RecommendationType.IRRIGATION, farmer_id='FOTHERFARMER00')

        result = AIRecommendation.objects.for_farmer(FARMER_ID).of_type('IRRIGATION')
        assert list(result) == [irrigation]
        assert not AIRecommendation.objects.of_type('HARVEST').exists()


# =============================================================================
# SERVICES
# =============================================================================

class TestFeedback:
    """Read, implementation and rating feedback."""

    def test_mark_as_read_is_idempotent(self, recommendation):
        RecommendationService.mark_as_read(recommendation)
        first_read_at = recommendation.read_at
        assert recommendation.is_read
        assert first_read_at is not None

        RecommendationService.mark_as_read(recommendation)
        recommendation.refresh_from_db()
        assert recommendation.read_at == first_read_at

    def test_mark_as_implemented(self, recommendation):
        RecommendationService.mark_as_implemented(recommendation, 'Applied 50kg on plot A')
        recommendation.refresh_from_db()
        assert recommendation.is_implemented
        assert recommendation.implementation_date is not None
        assert recommendation.implementation_notes == 'Applied 50kg on plot A'

    def test_rate_effectiveness(self, recommendation):
        RecommendationService.rate_effectiveness(recommendation, 4, 'Yield improved')
        recommendation.refresh_from_db()
        assert recommendation.effectiveness_rating == 4
        assert recommendation.effectiveness_notes == 'Yield improved'

    @pytest.mark.parametrize('rating', [0, 6, None])
    def test_rate_effectiveness_out_of_range(self, recommendation, rating):
        with pytest.raises(RecommendationError):
            RecommendationService.rate_effectiveness(recommendation, rating)
        recommendation.refresh_from_db()
        assert recommendation.effectiveness_rating is None


class TestUpdateAndDeactivate:
    """Partial updates and deactivation."""

    def test_update_ignores_none_values(self, recommendation):
        RecommendationService.update_recommendation(
            recommendation, title='Revised advice', description=None, priority='URGENT'
        )
        recommendation.refresh_from_db()
        assert recommendation.title == 'Revised advice'
        assert recommendation.priority == 'URGENT'
        assert recommendation.description is None

    def test_update_rejects_unknown_field(self, recommendation):
        with pytest.raises(RecommendationError):
            RecommendationService.update_recommendation(recommendation, farmer_id='FNEWOWNER00000')

    def test_update_validates(self, recommendation):
        with pytest.raises(ValidationError):
            RecommendationService.update_recommendation(recommendation, confidence_score=3.0)

    def test_deactivate(self, recommendation):
        RecommendationService.deactivate(recommendation)
        recommendation.refresh_from_db()
        assert recommendation.is_active is False
        assert not recommendation.is_valid()


class TestStatistics:
    """Per-farmer feedback statistics."""

    def test_empty(self):
        stats = RecommendationService.statistics(FARMER_ID)
        assert stats == {
            'total': 0,
            'unread': 0,
            'urgent': 0,
            'implemented': 0,
            'average_effectiveness_rating': 0.0,
            'implementation_rate': 0.0,
        }

    def test_counts_and_rates(self):
        first = recommend('URGENT')
        second = recommend('HIGH')
        recommend('LOW')
        recommend('MEDIUM')
        recommend('URGENT', farmer_id='FOTHERFARMER00')

        RecommendationService.mark_as_read(second)
        RecommendationService.mark_as_implemented(first)
        RecommendationService.rate_effectiveness(first, 5)
        RecommendationService.rate_effectiveness(second, 2)

        stats = RecommendationService.statistics(FARMER_ID)

        assert stats['total'] == 4
        assert stats['unread'] == 3
        assert stats['urgent'] == 1
        assert stats['implemented'] == 1
        assert stats['average_effectiveness_rating'] == pytest.approx(3.5)
        assert stats['implementation_rate'] == pytest.approx(25.0)


class TestPurgeInactive:
    """Retention for deactivated recommendations."""

    def _deactivate_days_ago(self, rec, days):
        past = timezone.now() - timedelta(days=days)
        with patch('django.utils.timezone.now', return_value=past):
            RecommendationService.deactivate(rec)

    def test_purge_inactive(self):
        stale = recommend()
        self._deactivate_days_ago(stale, 200)
        recently_inactive = recommend()
        self._deactivate_days_ago(recently_inactive, 10)
        active = recommend()

        assert RecommendationService.purge_inactive(180) == 1
        assert set(AIRecommendation.objects.all()) == {recently_inactive, active}

    def test_later_touch_restarts_retention(self):
        rec = recommend()
        self._deactivate_days_ago(rec, 200)
        RecommendationService.mark_as_read(rec)

        assert RecommendationService.purge_inactive(180) == 0
        assert AIRecommendation.objects.filter(pk=rec.pk).exists()

    def test_task_uses_retention_setting(self, settings):
        settings.RECOMMENDATION_INACTIVE_RETENTION_DAYS = 30
        self._deactivate_days_ago(recommend(), 45)

        assert purge_inactive_recommendations.delay().get() == 1
        assert AIRecommendation.objects.count() == 0

    def test_management_command(self):
        self._deactivate_days_ago(recommend(), 400)
        out = StringIO()

        call_command('purge_inactive_recommendations', '--days', '180', stdout=out)

        assert 'Purged 1 inactive recommendation' in out.getvalue()


class TestRecommendationSerializer:
    """Serialized recommendations."""

    def test_representation(self, recommendation):
        data = AIRecommendationSerializer(recommendation).data
        assert data['id'] == recommendation.id
        assert data['priority_display'] == 'High'
        assert data['is_urgent'] is True
        assert data['is_expired'] is False
        assert data['days_until_expiry'] is None

    def test_rejects_inverted_window(self):
        now = timezone.now()
        serializer = AIRecommendationSerializer(data={
            'farmer_id': FARMER_ID,
            'recommendation_type': 'GENERAL',
            'title': 'Check storage humidity',
            'priority': 'LOW',
            'valid_from': (now + timedelta(days=2)).isoformat(),
            'valid_until': now.isoformat(),
        })
        assert not serializer.is_valid()
        assert 'valid_until' in serializer.errors

    def test_create_defaults_valid_from(self):
        serializer = AIRecommendationSerializer(data={
            'farmer_id': FARMER_ID,
            'recommendation_type': 'GENERAL',
            'title': 'Check storage humidity',
            'priority': 'LOW',
        })
        assert serializer.is_valid(), serializer.errors
        rec = serializer.save()
        assert rec.valid_from is not None
        assert rec.id.startswith('REC')


class TestEffectivenessRatingSerializer:
    """Rating payload bounds."""

    @pytest.mark.parametrize('rating', [1, 3, 5])
    def test_accepts_ratings_in_range(self, rating):
        serializer = EffectivenessRatingSerializer(data={'rating': rating, 'notes': 'Yield improved'})
        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data['rating'] == rating

    @pytest.mark.parametrize('rating', [0, 6, -1])
    def test_rejects_ratings_out_of_range(self, rating):
        serializer = EffectivenessRatingSerializer(data={'rating': rating})
        assert not serializer.is_valid()
        assert 'rating' in serializer.errors

    def test_rating_required(self):
        serializer = EffectivenessRatingSerializer(data={'notes': 'No rating given'})
        assert not serializer.is_valid()
        assert 'rating' in serializer.errors
