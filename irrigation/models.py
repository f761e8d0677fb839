"""
Irrigation forecasts produced for a farm.

Predictions are computed elsewhere and stored here as records; this module
only persists them and classifies their alert level.
"""

from django.db import models
from django.utils import timezone

from core.ids import IdGenerator
from core.models import TrackedModel
from farms.models import Farm


class IrrigationPredictionQuerySet(models.QuerySet):

    def for_farm(self, farm_id):
        return self.filter(farm_id=farm_id)

    def for_crop_production(self, crop_production_id):
        return self.filter(crop_production_id=crop_production_id)

    def critical_alerts(self):
        """HIGH and CRITICAL predictions, newest first."""
        return self.filter(
            alert_level__in=[
                IrrigationPrediction.AlertLevel.HIGH,
                IrrigationPrediction.AlertLevel.CRITICAL,
            ]
        ).order_by('-prediction_date')

    def between(self, farm_id, start, end):
        return self.for_farm(farm_id).filter(
            prediction_date__range=(start, end)
        ).order_by('-prediction_date')

    def latest_for_farm(self, farm_id):
        """Most recent prediction for the farm, or None."""
        return self.for_farm(farm_id).order_by('-prediction_date', '-created_at').first()


class IrrigationPrediction(TrackedModel):
    """
    Forecast of a farm's irrigation needs.
    """

    class AlertLevel(models.TextChoices):
        LOW = 'LOW', 'Low - Normal irrigation needed'
        MODERATE = 'MODERATE', 'Moderate - Increase monitoring'
        HIGH = 'HIGH', 'High - Immediate action required'
        CRITICAL = 'CRITICAL', 'Critical - Water stress imminent'

    class IrrigationMethod(models.TextChoices):
        SPRINKLER = 'SPRINKLER', 'Sprinkler'
        DRIP = 'DRIP', 'Drip'
        FLOOD = 'FLOOD', 'Flood'
        FURROW = 'FURROW', 'Furrow'
        MANUAL = 'MANUAL', 'Manual'

    id = models.CharField(
        primary_key=True,
        max_length=20,
        default=IdGenerator('IP'),
        editable=False
    )

    farm_id = models.CharField(max_length=20, db_index=True)
    crop_production_id = models.CharField(max_length=20, blank=True, null=True)
    prediction_date = models.DateTimeField(default=timezone.now)

    # Forecast
    predicted_water_need = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True,
        help_text="Litres"
    )
    predicted_irrigation_frequency = models.IntegerField(
        null=True, blank=True,
        help_text="Times per week"
    )
    recommended_method = models.CharField(
        max_length=20,
        choices=IrrigationMethod.choices,
        blank=True,
        null=True
    )
    water_stress_risk = models.DecimalField(
        max_digits=5, decimal_places=2, null=True, blank=True,
        help_text="Percent"
    )
    predicted_yield_impact = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    optimal_duration = models.IntegerField(null=True, blank=True, help_text="Minutes")
    cost_estimation = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    confidence_level = models.DecimalField(
        max_digits=5, decimal_places=2, null=True, blank=True,
        help_text="Percent"
    )
    weather_factor = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    soil_moisture_target = models.DecimalField(max_digits=4, decimal_places=2, null=True, blank=True)

    alert_level = models.CharField(
        max_length=20,
        choices=AlertLevel.choices,
        blank=True,
        null=True
    )
    recommendations = models.TextField(blank=True, null=True)
    based_on_historical_days = models.IntegerField(null=True, blank=True)

    objects = IrrigationPredictionQuerySet.as_manager()

    class Meta:
        db_table = 'irrigation_predictions'
        ordering = ['-prediction_date']
        indexes = [
            models.Index(fields=['farm_id', 'prediction_date'], name='irrig_farm_date_idx'),
            models.Index(fields=['alert_level'], name='irrig_alert_idx'),
        ]

    def __str__(self):
        return f"{self.id} for farm {self.farm_id} ({self.alert_level or 'no alert'})"

    @property
    def alert_description(self):
        return self.get_alert_level_display() if self.alert_level else None

    def requires_action(self):
        return self.alert_level in (self.AlertLevel.HIGH, self.AlertLevel.CRITICAL)

    def get_farm(self):
        """Referenced Farm, or None."""
        return Farm.objects.filter(pk=self.farm_id).first()
