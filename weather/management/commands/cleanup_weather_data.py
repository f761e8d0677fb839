"""
Cleanup Weather Data Management Command

Deletes observations past the retention window. Also scheduled through
Celery Beat; run manually with:

    python manage.py cleanup_weather_data --days 365 --poor-quality-days 30
"""

from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand
from django.utils import timezone

from weather.models import WeatherData
from weather.services import WeatherDataService


class Command(BaseCommand):
    help = 'Delete weather observations older than the retention window'

    def add_arguments(self, parser):
        parser.add_argument(
            '--days',
            type=int,
            default=settings.WEATHER_DATA_RETENTION_DAYS,
            help='Delete all observations older than this many days',
        )
        parser.add_argument(
            '--poor-quality-days',
            type=int,
            default=settings.WEATHER_POOR_QUALITY_RETENTION_DAYS,
            help='Delete POOR quality observations older than this many days',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Report what would be deleted without deleting',
        )

    def handle(self, *args, **options):
        days = options['days']
        poor_quality_days = options['poor_quality_days']

        if options['dry_run']:
            now = timezone.now()
            old = WeatherData.objects.filter(
                record_date__lt=now - timedelta(days=days)
            ).count()
            poor = WeatherData.objects.filter(
                record_date__lt=now - timedelta(days=poor_quality_days),
                data_quality=WeatherData.DataQuality.POOR
            ).count()
            self.stdout.write(
                self.style.WARNING(
                    f'Dry run: {poor} poor quality and {old} expired record(s) would be deleted'
                )
            )
            return

        poor = WeatherDataService.cleanup_poor_quality_data(poor_quality_days)
        old = WeatherDataService.cleanup_old_data(days)

        self.stdout.write(
            self.style.SUCCESS(f'✓ Deleted {poor} poor quality and {old} expired record(s)')
        )
