"""
Tests for weather observations, their cleanup and statistics.
"""
from datetime import timedelta
from decimal import Decimal
from io import StringIO

import pytest
from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.utils import timezone

from weather.filters import WeatherDataFilter
from weather.models import TemperatureRange, WeatherData
from weather.serializers import WeatherDataSerializer
from weather.services import WeatherDataError, WeatherDataService
from weather.tasks import cleanup_weather_data

pytestmark = pytest.mark.django_db


# =============================================================================
# FIXTURES
# =============================================================================

def observation(temperature='22.0', days_ago=0, **extra):
    """Unsaved observation over Kigali."""
    return WeatherData(
        latitude=extra.pop('latitude', Decimal('-1.94410000')),
        longitude=extra.pop('longitude', Decimal('30.06190000')),
        record_date=timezone.now() - timedelta(days=days_ago),
        temperature=Decimal(temperature),
        data_source=extra.pop('data_source', 'Meteo Rwanda'),
        **extra
    )


def save_observation(*args, **kwargs):
    record = observation(*args, **kwargs)
    record.save()
    return record


# =============================================================================
# MODEL
# =============================================================================

class TestWeatherDataDefaults:
    """Construction defaults."""

    def test_fresh_instance(self):
        record = WeatherData()
        assert record.id.startswith('WD')
        assert len(record.id) == 14
        assert record.record_date is not None
        assert record.created_at is not None
        assert record.updated_at is not None
        assert record.data_quality == WeatherData.DataQuality.GOOD


class TestWeatherPredicates:
    """Hot, cold, rainy and windy classification."""

    @pytest.mark.parametrize('temperature,hot,cold', [
        ('30.0', False, False),
        ('30.1', True, False),
        ('10.0', False, False),
        ('9.9', False, True),
        ('22.0', False, False),
    ])
    def test_hot_and_cold(self, temperature, hot, cold):
        record = observation(temperature)
        assert record.is_hot() is hot
        assert record.is_cold() is cold

    def test_null_temperature(self):
        record = WeatherData(temperature=None)
        assert not record.is_hot()
        assert not record.is_cold()
        assert record.temperature_range is None

    def test_rainy(self):
        assert observation(rainfall=Decimal('0.50')).is_rainy()
        assert not observation(rainfall=Decimal('0')).is_rainy()
        assert not observation().is_rainy()

    def test_windy_above_twenty(self):
        assert observation(wind_speed=Decimal('20.1')).is_windy()
        assert not observation(wind_speed=Decimal('20.0')).is_windy()

    @pytest.mark.parametrize('temperature,band', [
        ('-50.0', TemperatureRange.FREEZING),
        ('-0.1', TemperatureRange.FREEZING),
        ('0.0', TemperatureRange.COLD),
        ('10.0', TemperatureRange.COOL),
        ('20.0', TemperatureRange.MILD),
        ('25.0', TemperatureRange.WARM),
        ('34.9', TemperatureRange.HOT),
        ('35.0', TemperatureRange.VERY_HOT),
        ('60.0', TemperatureRange.VERY_HOT),
    ])
    def test_temperature_range(self, temperature, band):
        assert observation(temperature).temperature_range is band

    def test_temperature_range_display_name(self):
        assert TemperatureRange.VERY_HOT.display_name == 'Very Hot'

    def test_is_stale(self, settings):
        settings.WEATHER_STALE_AFTER_HOURS = 24
        assert observation(days_ago=2).is_stale()
        assert not observation(days_ago=0).is_stale()
        assert not observation(days_ago=2).is_stale(max_age=timedelta(days=3))


class TestWeatherValidation:
    """full_clean() on observations."""

    def test_valid_observation(self):
        observation().full_clean()

    @pytest.mark.parametrize('field,value', [
        ('temperature', Decimal('60.5')),
        ('temperature', Decimal('-50.5')),
        ('humidity', Decimal('100.5')),
        ('rainfall', Decimal('-1.00')),
        ('wind_speed', Decimal('-0.1')),
        ('wind_direction', 361),
        ('atmospheric_pressure', Decimal('799.99')),
        ('uv_index', 16),
    ])
    def test_out_of_range(self, field, value):
        record = observation()
        setattr(record, field, value)
        with pytest.raises(ValidationError) as exc:
            record.full_clean()
        assert field in exc.value.message_dict

    def test_future_record_date(self):
        record = observation()
        record.record_date = timezone.now() + timedelta(hours=3)
        with pytest.raises(ValidationError) as exc:
            record.full_clean()
        assert 'record_date' in exc.value.message_dict

    def test_min_above_max(self):
        record = observation(temperature_min=Decimal('25.0'), temperature_max=Decimal('18.0'))
        with pytest.raises(ValidationError) as exc:
            record.full_clean()
        assert 'temperature_min' in exc.value.message_dict


# =============================================================================
# QUERYSET AND FILTER
# =============================================================================

class TestWeatherQuerySet:
    """Manager lookups."""

    def test_recent(self):
        fresh = save_observation(days_ago=1)
        save_observation(days_ago=10)
        assert list(WeatherData.objects.recent(7)) == [fresh]

    def test_hot_cold_rainy(self):
        hot = save_observation('33.0')
        cold = save_observation('4.0')
        wet = save_observation('18.0', rainfall=Decimal('12.50'))

        assert list(WeatherData.objects.hot()) == [hot]
        assert list(WeatherData.objects.cold()) == [cold]
        assert list(WeatherData.objects.rainy()) == [wet]

    def test_extreme_and_alerts(self):
        storm = save_observation('18.0', days_ago=0, rainfall=Decimal('75.00'))
        heat = save_observation('38.0', days_ago=3)
        save_observation('22.0', wind_speed=Decimal('10.0'))

        assert list(WeatherData.objects.extreme()) == [storm, heat]
        assert list(WeatherData.objects.alerts(timezone.now() - timedelta(days=1))) == [storm]

    def test_windy(self):
        gusty = save_observation(wind_speed=Decimal('22.5'))
        save_observation(wind_speed=Decimal('20.0'))
        save_observation()

        assert list(WeatherData.objects.windy()) == [gusty]
        assert set(WeatherData.objects.windy(threshold=Decimal('15'))) == {
            gusty,
            WeatherData.objects.get(wind_speed=Decimal('20.0')),
        }

    def test_near_accepts_float_radius(self):
        kigali = save_observation()
        huye = save_observation(latitude=Decimal('-2.59670000'), longitude=Decimal('29.73940000'))

        nearby = WeatherData.objects.near(Decimal('-1.95'), Decimal('30.06'), 0.1)

        assert list(nearby) == [kigali]
        assert huye not in nearby

    def test_near_accepts_plain_numbers(self):
        kigali = save_observation()

        assert list(WeatherData.objects.near(-1.95, 30.06, 0.05)) == [kigali]
        assert not WeatherData.objects.near(-2.6, 29.74, 0.01).exists()

    def test_filter_combines_criteria(self):
        match = save_observation('28.0', data_quality=WeatherData.DataQuality.EXCELLENT)
        save_observation('28.0', data_quality=WeatherData.DataQuality.POOR)
        save_observation('15.0', data_quality=WeatherData.DataQuality.EXCELLENT)

        result = WeatherDataFilter(
            {'min_temperature': '25', 'data_quality': 'EXCELLENT'},
            queryset=WeatherData.objects.all()
        ).qs
        assert list(result) == [match]

    def test_filter_by_source_is_case_insensitive(self):
        match = save_observation(data_source='Satellite')
        save_observation(data_source='Station')

        result = WeatherDataFilter({'data_source': 'satellite'}, queryset=WeatherData.objects.all()).qs
        assert list(result) == [match]


# =============================================================================
# SERVICES
# =============================================================================

class TestCreateBulk:
    """Bulk ingestion."""

    def test_creates_all(self):
        records = WeatherDataService.create_bulk([observation('20.0'), observation('21.0')])
        assert len(records) == 2
        assert WeatherData.objects.count() == 2

    def test_rejects_existing_record(self):
        existing = save_observation()
        with pytest.raises(WeatherDataError):
            WeatherDataService.create_bulk([observation(), existing])
        assert WeatherData.objects.count() == 1

    def test_invalid_record_saves_nothing(self):
        with pytest.raises(ValidationError) as exc:
            WeatherDataService.create_bulk([observation(), observation('75.0')])
        assert 'records[1]' in exc.value.message_dict
        assert WeatherData.objects.count() == 0


class TestCleanup:
    """Retention cleanup."""

    def test_cleanup_old_data(self):
        save_observation(days_ago=400)
        save_observation(days_ago=400, data_quality=WeatherData.DataQuality.POOR)
        kept = save_observation(days_ago=5)

        assert WeatherDataService.cleanup_old_data(365) == 2
        assert list(WeatherData.objects.all()) == [kept]

    def test_cleanup_poor_quality_only(self):
        save_observation(days_ago=100, data_quality=WeatherData.DataQuality.POOR)
        good = save_observation(days_ago=100)
        recent_poor = save_observation(days_ago=10, data_quality=WeatherData.DataQuality.POOR)

        assert WeatherDataService.cleanup_poor_quality_data(90) == 1
        assert set(WeatherData.objects.all()) == {good, recent_poor}

    def test_task_uses_retention_settings(self, settings):
        settings.WEATHER_DATA_RETENTION_DAYS = 365
        settings.WEATHER_POOR_QUALITY_RETENTION_DAYS = 30
        save_observation(days_ago=400)
        save_observation(days_ago=60, data_quality=WeatherData.DataQuality.POOR)
        save_observation(days_ago=60)

        result = cleanup_weather_data.delay().get()

        assert result == {'poor_quality_deleted': 1, 'old_deleted': 1}
        assert WeatherData.objects.count() == 1

    def test_management_command(self):
        save_observation(days_ago=400)
        save_observation(days_ago=1)
        out = StringIO()

        call_command('cleanup_weather_data', '--days', '365', '--poor-quality-days', '90', stdout=out)

        assert 'Deleted 0 poor quality and 1 expired' in out.getvalue()
        assert WeatherData.objects.count() == 1

    def test_management_command_dry_run(self):
        save_observation(days_ago=400)
        out = StringIO()

        call_command('cleanup_weather_data', '--days', '365', '--dry-run', stdout=out)

        assert 'Dry run' in out.getvalue()
        assert WeatherData.objects.count() == 1


class TestStatistics:
    """Aggregate statistics over a period."""

    def test_statistics(self):
        save_observation('20.0', rainfall=Decimal('0'), humidity=Decimal('60.0'))
        save_observation('25.0', rainfall=Decimal('5.50'), humidity=Decimal('80.0'))
        save_observation('33.0')
        save_observation('40.0', days_ago=30)

        stats = WeatherDataService.statistics(timezone.now() - timedelta(days=7), timezone.now())

        assert stats['total_records'] == 3
        assert stats['average_temperature'] == Decimal('26.00')
        assert stats['min_temperature'] == Decimal('20.00')
        assert stats['max_temperature'] == Decimal('33.00')
        assert stats['average_humidity'] == Decimal('70.00')
        assert stats['total_rainfall'] == Decimal('5.50')
        assert stats['rainy_records'] == 1
        assert stats['hot_records'] == 1
        assert stats['cold_records'] == 0

    def test_empty_period(self):
        stats = WeatherDataService.statistics(timezone.now() - timedelta(days=1), timezone.now())
        assert stats['total_records'] == 0
        assert stats['average_temperature'] == Decimal('0')
        assert stats['total_rainfall'] == Decimal('0')

    def test_every_aggregate_has_two_places(self):
        save_observation('20.5', wind_speed=Decimal('3.1'))
        save_observation('24.5', wind_speed=Decimal('4.2'))

        stats = WeatherDataService.statistics(timezone.now() - timedelta(days=1), timezone.now())

        assert stats['min_temperature'] == Decimal('20.50')
        assert stats['max_temperature'] == Decimal('24.50')
        for key in ('average_temperature', 'min_temperature', 'max_temperature',
                    'average_humidity', 'total_rainfall', 'average_wind_speed'):
            assert stats[key].as_tuple().exponent == -2, key

    def test_quality_breakdown(self):
        save_observation(data_quality=WeatherData.DataQuality.POOR)
        save_observation()
        save_observation()
        assert WeatherDataService.quality_breakdown() == {'Poor': 1, 'Good': 2}


class TestWeatherDataSerializer:
    """Serialized observations."""

    def test_derived_fields(self):
        record = save_observation('31.5', wind_speed=Decimal('25.0'))
        data = WeatherDataSerializer(record).data
        assert data['temperature_range'] == 'Hot'
        assert data['is_hot'] is True
        assert data['is_windy'] is True
        assert data['data_quality_display'] == 'Good'
