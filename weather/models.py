"""
Weather observations keyed by coordinates.
"""

import enum
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone

from core.ids import IdGenerator
from core.models import TrackedModel
from core.validators import LATITUDE_VALIDATORS, LONGITUDE_VALIDATORS, format_coordinates

HOT_THRESHOLD = Decimal('30.0')
COLD_THRESHOLD = Decimal('10.0')
WINDY_THRESHOLD = Decimal('20.0')

# Thresholds for observations worth alerting on
ALERT_HOT = Decimal('35')
ALERT_COLD = Decimal('0')
ALERT_WIND = Decimal('25')
ALERT_RAIN = Decimal('50')

# Record dates may run slightly ahead of the server clock
RECORD_DATE_TOLERANCE = timedelta(hours=1)


class TemperatureRange(enum.Enum):
    """Named temperature bands, lower bound inclusive."""

    FREEZING = ('Freezing', -50.0, 0.0)
    COLD = ('Cold', 0.0, 10.0)
    COOL = ('Cool', 10.0, 20.0)
    MILD = ('Mild', 20.0, 25.0)
    WARM = ('Warm', 25.0, 30.0)
    HOT = ('Hot', 30.0, 35.0)
    VERY_HOT = ('Very Hot', 35.0, 60.0)

    def __init__(self, display_name, min_value, max_value):
        self.display_name = display_name
        self.min_value = min_value
        self.max_value = max_value

    @classmethod
    def from_value(cls, temperature):
        temperature = float(temperature)
        for band in cls:
            if band.min_value <= temperature < band.max_value:
                return band
        return cls.VERY_HOT


class WeatherDataQuerySet(models.QuerySet):

    def recent(self, days):
        return self.filter(record_date__gte=timezone.now() - timedelta(days=days))

    def between(self, start, end):
        return self.filter(record_date__range=(start, end))

    def hot(self, threshold=HOT_THRESHOLD):
        return self.filter(temperature__gt=threshold)

    def cold(self, threshold=COLD_THRESHOLD):
        return self.filter(temperature__lt=threshold)

    def rainy(self):
        return self.filter(rainfall__gt=0)

    def windy(self, threshold=WINDY_THRESHOLD):
        return self.filter(wind_speed__gt=threshold)

    def extreme(self, hot=ALERT_HOT, cold=ALERT_COLD, wind=ALERT_WIND, rain=ALERT_RAIN):
        """Observations at or beyond any of the given thresholds, newest first."""
        return self.filter(
            Q(temperature__gte=hot)
            | Q(temperature__lte=cold)
            | Q(wind_speed__gte=wind)
            | Q(rainfall__gte=rain)
        ).order_by('-record_date')

    def alerts(self, since):
        return self.extreme().filter(record_date__gte=since)

    def near(self, latitude, longitude, radius):
        """Observations inside a square of half-width ``radius`` degrees."""
        latitude, longitude, radius = (
            Decimal(str(value)) for value in (latitude, longitude, radius)
        )
        return self.filter(
            latitude__range=(latitude - radius, latitude + radius),
            longitude__range=(longitude - radius, longitude + radius),
        )


class WeatherData(TrackedModel):
    """
    A single weather observation at a point.
    """

    class DataQuality(models.TextChoices):
        EXCELLENT = 'EXCELLENT', 'Excellent'
        GOOD = 'GOOD', 'Good'
        FAIR = 'FAIR', 'Fair'
        POOR = 'POOR', 'Poor'

    class WeatherCondition(models.TextChoices):
        SUNNY = 'SUNNY', 'Sunny'
        PARTLY_CLOUDY = 'PARTLY_CLOUDY', 'Partly Cloudy'
        CLOUDY = 'CLOUDY', 'Cloudy'
        OVERCAST = 'OVERCAST', 'Overcast'
        LIGHT_RAIN = 'LIGHT_RAIN', 'Light Rain'
        RAIN = 'RAIN', 'Rain'
        HEAVY_RAIN = 'HEAVY_RAIN', 'Heavy Rain'
        THUNDERSTORM = 'THUNDERSTORM', 'Thunderstorm'
        SNOW = 'SNOW', 'Snow'
        FOG = 'FOG', 'Fog'
        WINDY = 'WINDY', 'Windy'
        HAIL = 'HAIL', 'Hail'
        DRIZZLE = 'DRIZZLE', 'Drizzle'

    id = models.CharField(
        primary_key=True,
        max_length=20,
        default=IdGenerator('WD'),
        editable=False
    )

    latitude = models.DecimalField(max_digits=10, decimal_places=8, validators=LATITUDE_VALIDATORS)
    longitude = models.DecimalField(max_digits=11, decimal_places=8, validators=LONGITUDE_VALIDATORS)
    record_date = models.DateTimeField(default=timezone.now, db_index=True)

    # Temperature (°C)
    temperature = models.DecimalField(
        max_digits=4,
        decimal_places=1,
        validators=[
            MinValueValidator(Decimal('-50'), message='Temperature must be between -50°C and 60°C'),
            MaxValueValidator(Decimal('60'), message='Temperature must be between -50°C and 60°C'),
        ]
    )
    temperature_min = models.DecimalField(max_digits=4, decimal_places=1, null=True, blank=True)
    temperature_max = models.DecimalField(max_digits=4, decimal_places=1, null=True, blank=True)

    humidity = models.DecimalField(
        max_digits=4,
        decimal_places=1,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))],
        help_text="Relative humidity (%)"
    )
    rainfall = models.DecimalField(
        max_digits=6,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0'), message='Rainfall cannot be negative')],
        help_text="Rainfall (mm)"
    )
    wind_speed = models.DecimalField(
        max_digits=4,
        decimal_places=1,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0'), message='Wind speed cannot be negative')],
        help_text="Wind speed (km/h)"
    )
    wind_direction = models.IntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(360)],
        help_text="Degrees from north"
    )
    weather_condition = models.CharField(
        max_length=50,
        choices=WeatherCondition.choices,
        blank=True,
        null=True
    )
    solar_radiation = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True)
    evapotranspiration = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True)
    atmospheric_pressure = models.DecimalField(
        max_digits=7,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('800')), MaxValueValidator(Decimal('1200'))],
        help_text="Pressure (hPa)"
    )
    uv_index = models.IntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(15)]
    )

    # Provenance
    data_source = models.CharField(max_length=50)
    station_id = models.CharField(max_length=20, blank=True, null=True, db_index=True)
    data_quality = models.CharField(
        max_length=20,
        choices=DataQuality.choices,
        default=DataQuality.GOOD
    )

    objects = WeatherDataQuerySet.as_manager()

    class Meta:
        db_table = 'weather_data'
        ordering = ['-record_date']
        verbose_name = 'Weather Data'
        verbose_name_plural = 'Weather Data'
        indexes = [
            models.Index(fields=['latitude', 'longitude'], name='weather_lat_lon_idx'),
            models.Index(fields=['data_quality', 'record_date'], name='weather_quality_date_idx'),
        ]

    def __str__(self):
        return f"{self.data_source} {self.coordinates} @ {self.record_date}"

    def clean(self):
        errors = {}

        if self.record_date and self.record_date > timezone.now() + RECORD_DATE_TOLERANCE:
            errors['record_date'] = 'Record date cannot be in the future'

        if (
            self.temperature_min is not None
            and self.temperature_max is not None
            and self.temperature_min > self.temperature_max
        ):
            errors['temperature_min'] = 'Minimum temperature cannot exceed maximum temperature'

        if errors:
            raise ValidationError(errors)

    @property
    def coordinates(self):
        return format_coordinates(self.latitude, self.longitude)

    def is_rainy(self):
        return self.rainfall is not None and self.rainfall > 0

    def is_windy(self):
        return self.wind_speed is not None and self.wind_speed > WINDY_THRESHOLD

    def is_hot(self):
        return self.temperature is not None and self.temperature > HOT_THRESHOLD

    def is_cold(self):
        return self.temperature is not None and self.temperature < COLD_THRESHOLD

    @property
    def temperature_range(self):
        if self.temperature is None:
            return None
        return TemperatureRange.from_value(self.temperature)

    def is_stale(self, max_age=None):
        """True when the observation is older than ``max_age`` (a timedelta)."""
        if max_age is None:
            max_age = timedelta(hours=settings.WEATHER_STALE_AFTER_HOURS)
        return self.record_date is None or self.record_date < timezone.now() - max_age
