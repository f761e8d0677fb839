"""
Tests for irrigation predictions.
"""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.utils import timezone

from irrigation.models import IrrigationPrediction
from irrigation.serializers import IrrigationPredictionSerializer

pytestmark = pytest.mark.django_db


def predict(farm_id, alert_level=None, days_ago=0, **extra):
    return IrrigationPrediction.objects.create(
        farm_id=farm_id,
        alert_level=alert_level,
        prediction_date=timezone.now() - timedelta(days=days_ago),
        **extra
    )


class TestIrrigationPrediction:
    """Defaults and alert classification."""

    def test_fresh_instance(self):
        prediction = IrrigationPrediction()
        assert prediction.id.startswith('IP')
        assert len(prediction.id) == 14
        assert prediction.prediction_date is not None
        assert prediction.created_at is not None
        assert prediction.updated_at is not None

    @pytest.mark.parametrize('level,description,action', [
        ('LOW', 'Low - Normal irrigation needed', False),
        ('MODERATE', 'Moderate - Increase monitoring', False),
        ('HIGH', 'High - Immediate action required', True),
        ('CRITICAL', 'Critical - Water stress imminent', True),
        (None, None, False),
    ])
    def test_alert_levels(self, level, description, action):
        prediction = IrrigationPrediction(alert_level=level)
        assert prediction.alert_description == description
        assert prediction.requires_action() is action

    def test_get_farm(self, farm):
        prediction = predict(farm.id)
        assert prediction.get_farm() == farm

    def test_get_farm_missing(self):
        assert IrrigationPrediction(farm_id='FMNOTHERE00000').get_farm() is None

    def test_full_clean_rejects_unknown_method(self, farm):
        prediction = IrrigationPrediction(farm_id=farm.id, recommended_method='CANAL')
        with pytest.raises(ValidationError) as exc:
            prediction.full_clean()
        assert 'recommended_method' in exc.value.message_dict


class TestIrrigationPredictionQuerySet:
    """Farm-scoped and alert lookups."""

    def test_critical_alerts(self, farm):
        high = predict(farm.id, 'HIGH', days_ago=2)
        critical = predict(farm.id, 'CRITICAL', days_ago=1)
        predict(farm.id, 'LOW')
        predict(farm.id, 'MODERATE')

        assert list(IrrigationPrediction.objects.critical_alerts()) == [critical, high]

    def test_for_crop_production(self, farm):
        maize = predict(farm.id, crop_production_id='CPMAIZE0000001')
        predict(farm.id, crop_production_id='CPBEANS0000001')
        predict(farm.id)

        assert list(IrrigationPrediction.objects.for_crop_production('CPMAIZE0000001')) == [maize]
        assert list(
            IrrigationPrediction.objects.for_farm(farm.id).for_crop_production('CPMAIZE0000001')
        ) == [maize]
        assert not IrrigationPrediction.objects.for_crop_production('CPNONE00000000').exists()

    def test_latest_for_farm(self, farm):
        predict(farm.id, days_ago=3)
        latest = predict(farm.id, days_ago=0)
        predict('FMOTHERFARM000', days_ago=0)

        assert IrrigationPrediction.objects.latest_for_farm(farm.id) == latest

    def test_latest_for_farm_without_predictions(self, farm):
        assert IrrigationPrediction.objects.latest_for_farm(farm.id) is None

    def test_between(self, farm):
        inside = predict(farm.id, days_ago=5)
        predict(farm.id, days_ago=20)
        predict('FMOTHERFARM000', days_ago=5)

        result = IrrigationPrediction.objects.between(
            farm.id, timezone.now() - timedelta(days=10), timezone.now()
        )
        assert list(result) == [inside]


class TestIrrigationPredictionSerializer:
    """Serialized predictions."""

    def test_representation(self, farm):
        prediction = predict(
            farm.id, 'CRITICAL',
            recommended_method='DRIP',
            predicted_water_need=Decimal('1250.00')
        )
        data = IrrigationPredictionSerializer(prediction).data
        assert data['alert_description'] == 'Critical - Water stress imminent'
        assert data['requires_action'] is True
        assert data['recommended_method_display'] == 'Drip'

    def test_unknown_farm_rejected(self):
        serializer = IrrigationPredictionSerializer(data={'farm_id': 'FMNOTHERE00000'})
        assert not serializer.is_valid()
        assert 'farm_id' in serializer.errors
