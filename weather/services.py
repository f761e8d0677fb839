"""
Weather data services: bulk ingestion, retention cleanup and statistics.
"""

import logging
from datetime import timedelta
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Avg, Count, Max, Min, Sum
from django.utils import timezone

from .models import WeatherData

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal('0.01')


class WeatherDataError(Exception):
    """Raised when weather records cannot be ingested."""


class WeatherDataService:
    """Ingestion and maintenance of weather observations."""

    @staticmethod
    @transaction.atomic
    def create_bulk(records):
        """
        Validate and insert a batch of unsaved observations.

        Args:
            records: iterable of unsaved WeatherData instances

        Returns:
            list of saved WeatherData

        Raises:
            WeatherDataError: a record is already persisted
            ValidationError: a record fails field validation, keyed by position
        """
        records = list(records)

        for index, record in enumerate(records):
            if not record._state.adding or WeatherData.objects.filter(pk=record.pk).exists():
                raise WeatherDataError(
                    f"Cannot create weather data with existing ID: {record.pk}"
                )
            try:
                record.full_clean()
            except ValidationError as exc:
                raise ValidationError({f'records[{index}]': exc.messages}) from exc

        for record in records:
            record.save()

        logger.info(f"Created {len(records)} weather records")
        return records

    @staticmethod
    def cleanup_old_data(days_old):
        """Delete observations recorded more than ``days_old`` days ago."""
        cutoff = timezone.now() - timedelta(days=days_old)
        deleted, _ = WeatherData.objects.filter(record_date__lt=cutoff).delete()
        logger.info(f"Deleted {deleted} weather records older than {days_old} days")
        return deleted

    @staticmethod
    def cleanup_poor_quality_data(days_old):
        """Delete POOR quality observations recorded more than ``days_old`` days ago."""
        cutoff = timezone.now() - timedelta(days=days_old)
        deleted, _ = WeatherData.objects.filter(
            record_date__lt=cutoff,
            data_quality=WeatherData.DataQuality.POOR
        ).delete()
        logger.info(f"Deleted {deleted} poor quality weather records older than {days_old} days")
        return deleted

    @staticmethod
    def statistics(start, end):
        """
        Summary of observations recorded between ``start`` and ``end``.

        Every aggregate is rounded to two places; missing aggregates are
        reported as Decimal('0.00').
        """
        observations = WeatherData.objects.between(start, end)
        totals = observations.aggregate(
            total_records=Count('id'),
            average_temperature=Avg('temperature'),
            min_temperature=Min('temperature'),
            max_temperature=Max('temperature'),
            average_humidity=Avg('humidity'),
            total_rainfall=Sum('rainfall'),
            average_wind_speed=Avg('wind_speed'),
        )

        stats = {'total_records': totals.pop('total_records')}
        for key, value in totals.items():
            value = Decimal(value) if value is not None else Decimal('0')
            stats[key] = value.quantize(TWO_PLACES)

        stats['rainy_records'] = observations.rainy().count()
        stats['hot_records'] = observations.hot().count()
        stats['cold_records'] = observations.cold().count()
        return stats

    @staticmethod
    def quality_breakdown():
        """Observation counts per data quality label."""
        rows = WeatherData.objects.order_by().values('data_quality').annotate(count=Count('id'))
        labels = dict(WeatherData.DataQuality.choices)
        return {labels.get(row['data_quality'], row['data_quality']): row['count'] for row in rows}
