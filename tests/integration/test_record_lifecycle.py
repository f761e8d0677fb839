"""
Record Lifecycle Integration Tests

Covers identifier generation and timestamp stamping across every domain
record:
- Fresh instances carry an ID, timestamps and default flags
- Generated IDs keep their prefix, length and alphabet
- Rapid generation does not repeat IDs
- Inserts stamp both timestamps; updates only move updated_at
"""

import itertools
import random
import string
from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.utils import timezone

from accounts.models import User
from core.ids import IdGenerator, generate_alphanumeric_id
from farms.models import Farm, Farmer
from irrigation.models import IrrigationPrediction
from recommendations.models import AIRecommendation
from weather.models import WeatherData

pytestmark = pytest.mark.django_db

ALPHABET = set(string.ascii_uppercase + string.digits)

ENTITY_PREFIXES = [
    (User, ''),
    (Farmer, 'F'),
    (Farm, 'FM'),
    (WeatherData, 'WD'),
    (IrrigationPrediction, 'IP'),
    (AIRecommendation, 'REC'),
]


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def saved_records(farmer_user, farm):
    """One persisted record of every entity."""
    farmer = Farmer.objects.create(
        user_id=farmer_user.id,
        farmer_code='FRM-LIFE-01',
        location='Nyagatare',
        latitude=Decimal('-1.29780000'),
        longitude=Decimal('30.32740000'),
        province='Eastern',
        district='Nyagatare',
        sector='Rwimiyaga',
    )
    weather = WeatherData.objects.create(
        latitude=farm.latitude,
        longitude=farm.longitude,
        temperature=Decimal('24.5'),
        data_source='Station',
    )
    prediction = IrrigationPrediction.objects.create(farm_id=farm.id, alert_level='LOW')
    recommendation = AIRecommendation.objects.create(
        farmer_id=farmer.id,
        farm_id=farm.id,
        recommendation_type='IRRIGATION',
        title='Switch to drip irrigation',
        priority='MEDIUM',
    )
    return [farmer_user, farmer, farm, weather, prediction, recommendation]


# =============================================================================
# IDENTIFIERS
# =============================================================================

class TestIdentifierGeneration:
    """Shape and uniqueness of generated IDs."""

    def test_deterministic_with_injected_clock_and_rng(self):
        reference = random.Random(7)
        expected_random = ''.join(
            reference.choice(string.ascii_uppercase + string.digits) for _ in range(6)
        )

        result = generate_alphanumeric_id('FM', clock=lambda: 1700000123456, rng=random.Random(7))

        assert result == 'FM123456' + expected_random
        assert len(set(expected_random)) > 1

    def test_short_clock_is_zero_padded(self):
        result = generate_alphanumeric_id('WD', clock=lambda: 42, rng=random.Random(1))
        assert result[2:8] == '000042'

    def test_prefix_too_long(self):
        with pytest.raises(ValueError):
            generate_alphanumeric_id('TOOLONGPREFIX')

    @pytest.mark.parametrize('model,prefix', ENTITY_PREFIXES)
    def test_generated_id_shape(self, model, prefix):
        record_id = model().id
        assert len(record_id) == 14
        assert record_id.startswith(prefix)
        assert set(record_id) <= ALPHABET
        assert record_id[len(prefix):len(prefix) + 6].isdigit()

    @pytest.mark.parametrize('prefix', ['', 'F', 'FM', 'WD', 'IP'])
    def test_ten_thousand_ids_are_unique(self, prefix):
        generator = IdGenerator(prefix)
        ids = {generator() for _ in range(10_000)}
        assert len(ids) == 10_000

    def test_ten_thousand_recommendation_ids_are_unique(self):
        # Five random characters leave little headroom inside one millisecond,
        # so the clock ticks every ten generations here.
        ticks = itertools.count(1_700_000_000_000 * 10)
        ids = {
            generate_alphanumeric_id('REC', clock=lambda: next(ticks) // 10)
            for _ in range(10_000)
        }
        assert len(ids) == 10_000

    def test_generator_deconstructs_for_migrations(self):
        path, args, kwargs = IdGenerator('REC').deconstruct()
        assert path == 'core.ids.IdGenerator'
        assert args == ('REC',)
        assert IdGenerator('REC') == IdGenerator('REC')
        assert IdGenerator('REC') != IdGenerator('IP')


# =============================================================================
# LIFECYCLE
# =============================================================================

class TestFreshInstances:
    """Every entity is usable straight after construction."""

    @pytest.mark.parametrize('model,prefix', ENTITY_PREFIXES)
    def test_id_and_timestamps_present(self, model, prefix):
        record = model()
        assert record.id is not None
        assert record.created_at is not None
        assert record.updated_at is not None

    def test_default_flags(self):
        assert User().is_active is True
        assert Farm().electricity_available is False
        recommendation = AIRecommendation()
        assert recommendation.is_read is False
        assert recommendation.is_implemented is False
        assert recommendation.is_active is True


class TestTimestampStamping:
    """Insert and update timestamp rules."""

    def test_insert_stamps_both_timestamps(self, saved_records):
        for record in saved_records:
            assert record.created_at == record.updated_at

    def test_insert_replaces_construction_time(self, farmer_user):
        farm = Farm(
            farmer_id=farmer_user.id,
            farm_name='Late Save',
            farm_size=Decimal('1.00'),
            soil_type='Sand',
            latitude=Decimal('-2.0'),
            longitude=Decimal('29.5'),
        )
        constructed_at = farm.created_at
        later = constructed_at + timedelta(minutes=5)

        with patch('django.utils.timezone.now', return_value=later):
            farm.save()

        assert farm.created_at == later
        assert farm.updated_at == later

    def test_update_moves_only_updated_at(self, saved_records):
        later = timezone.now() + timedelta(hours=2)

        for record in saved_records:
            created_at = record.created_at
            with patch('django.utils.timezone.now', return_value=later):
                record.save()
            record.refresh_from_db()

            assert record.created_at == created_at, type(record).__name__
            assert record.updated_at == later, type(record).__name__

    def test_partial_update_includes_updated_at(self, farm):
        later = timezone.now() + timedelta(hours=1)

        with patch('django.utils.timezone.now', return_value=later):
            farm.farm_name = 'Renamed'
            farm.save(update_fields=['farm_name'])

        farm.refresh_from_db()
        assert farm.farm_name == 'Renamed'
        assert farm.updated_at == later

    def test_cleared_id_is_regenerated_on_insert(self, farmer_user):
        farm = Farm(
            farmer_id=farmer_user.id,
            farm_name='No Id Yet',
            farm_size=Decimal('1.00'),
            soil_type='Sand',
            latitude=Decimal('-2.0'),
            longitude=Decimal('29.5'),
        )
        farm.id = None
        farm.save()

        assert farm.id.startswith('FM')
        assert Farm.objects.filter(pk=farm.id).exists()

    def test_ids_survive_round_trip(self, saved_records):
        for record in saved_records:
            assert type(record).objects.get(pk=record.pk) == record
