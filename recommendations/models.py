"""
AI-generated agronomic recommendations addressed to farmers.
"""

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Case, IntegerField, Q, Value, When
from django.utils import timezone

from core.ids import IdGenerator
from core.models import TrackedModel
from farms.models import Farm, Farmer

DEFAULT_GENERATED_BY = 'AI System v1.0'


class AIRecommendationQuerySet(models.QuerySet):

    def for_farmer(self, farmer_id):
        return self.filter(farmer_id=farmer_id)

    def active(self):
        return self.filter(is_active=True)

    def unread(self):
        return self.filter(is_read=False)

    def implemented(self):
        return self.filter(is_implemented=True)

    def of_type(self, recommendation_type):
        return self.filter(recommendation_type=recommendation_type)

    def by_priority(self):
        """Order URGENT first down to LOW, newest first within a priority."""
        Priority = AIRecommendation.Priority
        return self.annotate(
            priority_rank=Case(
                When(priority=Priority.URGENT, then=Value(0)),
                When(priority=Priority.HIGH, then=Value(1)),
                When(priority=Priority.MEDIUM, then=Value(2)),
                default=Value(3),
                output_field=IntegerField(),
            )
        ).order_by('priority_rank', '-created_at')

    def urgent(self):
        """Unread, active URGENT and HIGH recommendations."""
        Priority = AIRecommendation.Priority
        return self.active().unread().filter(
            priority__in=[Priority.URGENT, Priority.HIGH]
        ).by_priority()

    def valid_at(self, when=None):
        """Active recommendations whose validity window contains ``when``."""
        when = when or timezone.now()
        return self.active().filter(valid_from__lte=when).filter(
            Q(valid_until__isnull=True) | Q(valid_until__gte=when)
        )


class AIRecommendation(TrackedModel):
    """
    Advisory record for a farmer, optionally scoped to a farm or crop
    production. Read, implementation and effectiveness feedback is tracked
    on the record itself.
    """

    class RecommendationType(models.TextChoices):
        FERTILIZER = 'FERTILIZER', 'Fertilizer'
        WATER = 'WATER', 'Water'
        SEEDS = 'SEEDS', 'Seeds'
        PESTICIDE = 'PESTICIDE', 'Pesticide'
        HARVEST = 'HARVEST', 'Harvest'
        PLANTING = 'PLANTING', 'Planting'
        SOIL_MANAGEMENT = 'SOIL_MANAGEMENT', 'Soil Management'
        PEST_CONTROL = 'PEST_CONTROL', 'Pest Control'
        DISEASE_PREVENTION = 'DISEASE_PREVENTION', 'Disease Prevention'
        IRRIGATION = 'IRRIGATION', 'Irrigation'
        CROP_ROTATION = 'CROP_ROTATION', 'Crop Rotation'
        MARKET_TIMING = 'MARKET_TIMING', 'Market Timing'
        STORAGE = 'STORAGE', 'Storage'
        WEATHER_ADAPTATION = 'WEATHER_ADAPTATION', 'Weather Adaptation'
        GENERAL = 'GENERAL', 'General'

    class Priority(models.TextChoices):
        URGENT = 'URGENT', 'Urgent'
        HIGH = 'HIGH', 'High'
        MEDIUM = 'MEDIUM', 'Medium'
        LOW = 'LOW', 'Low'

    id = models.CharField(
        primary_key=True,
        max_length=14,
        db_column='recommendation_id',
        default=IdGenerator('REC'),
        editable=False
    )

    farmer_id = models.CharField(max_length=14, db_index=True)
    farm_id = models.CharField(max_length=14, blank=True, null=True)
    crop_production_id = models.CharField(max_length=14, blank=True, null=True)

    recommendation_type = models.CharField(max_length=30, choices=RecommendationType.choices)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    action_items = models.TextField(blank=True, null=True)
    priority = models.CharField(max_length=10, choices=Priority.choices)
    confidence_score = models.FloatField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0.0), MaxValueValidator(1.0)]
    )
    generated_by = models.CharField(max_length=50, blank=True, null=True)

    # Feedback
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)
    is_implemented = models.BooleanField(default=False)
    implementation_date = models.DateTimeField(null=True, blank=True)
    implementation_notes = models.TextField(blank=True, null=True)
    effectiveness_rating = models.IntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    effectiveness_notes = models.TextField(blank=True, null=True)

    # Validity
    valid_from = models.DateTimeField(blank=True)
    valid_until = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    objects = AIRecommendationQuerySet.as_manager()

    class Meta:
        db_table = 'ai_recommendations'
        ordering = ['-created_at']
        verbose_name = 'AI Recommendation'
        verbose_name_plural = 'AI Recommendations'
        indexes = [
            models.Index(fields=['farmer_id', 'is_active'], name='airec_farmer_active_idx'),
            models.Index(fields=['priority', 'is_read'], name='airec_priority_read_idx'),
        ]

    def __str__(self):
        return f"[{self.priority}] {self.title}"

    def before_insert(self):
        if self.valid_from is None:
            self.valid_from = timezone.now()
        if self.is_read is None:
            self.is_read = False
        if self.is_implemented is None:
            self.is_implemented = False
        if self.is_active is None:
            self.is_active = True

    def clean(self):
        if self.valid_from and self.valid_until and self.valid_from > self.valid_until:
            raise ValidationError({
                'valid_until': 'Valid until must not be earlier than valid from'
            })

    def get_farmer(self):
        return Farmer.objects.filter(pk=self.farmer_id).first()

    def get_farm(self):
        if not self.farm_id:
            return None
        return Farm.objects.filter(pk=self.farm_id).first()

    def is_expired(self):
        return self.valid_until is not None and timezone.now() > self.valid_until

    @property
    def days_until_expiry(self):
        """Whole days left before ``valid_until``; None without an end or once expired."""
        if self.valid_until is None or self.is_expired():
            return None
        return (self.valid_until - timezone.now()).days

    def is_valid(self):
        now = timezone.now()
        return (
            bool(self.is_active)
            and self.valid_from is not None
            and self.valid_from <= now
            and (self.valid_until is None or self.valid_until >= now)
        )

    def is_urgent(self):
        return self.priority in (self.Priority.URGENT, self.Priority.HIGH)
