"""
Purge Inactive Recommendations Management Command

Deletes recommendations that were deactivated long ago:

    python manage.py purge_inactive_recommendations --days 180
"""

from django.conf import settings
from django.core.management.base import BaseCommand

from recommendations.services import RecommendationService


class Command(BaseCommand):
    help = 'Delete recommendations deactivated more than N days ago'

    def add_arguments(self, parser):
        parser.add_argument(
            '--days',
            type=int,
            default=settings.RECOMMENDATION_INACTIVE_RETENTION_DAYS,
            help='Age in days after which inactive recommendations are deleted',
        )

    def handle(self, *args, **options):
        deleted = RecommendationService.purge_inactive(options['days'])

        if deleted:
            self.stdout.write(self.style.SUCCESS(f'✓ Purged {deleted} inactive recommendation(s)'))
        else:
            self.stdout.write(self.style.SUCCESS('✓ No inactive recommendations to purge'))
