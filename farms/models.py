"""
Farmer profiles and farm parcels.

A Farmer is the agricultural profile of a User account; a Farm is a land
parcel owned by a farmer user. Both reference their owner through a plain
ID column and resolve it with an explicit lookup.
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Avg, Count, Q, Sum
from django.db.models.functions import Trim

from accounts.models import User
from core.ids import IdGenerator
from core.models import TrackedModel
from core.validators import LATITUDE_VALIDATORS, LONGITUDE_VALIDATORS, format_coordinates

SMALL_FARM_MAX_SIZE = Decimal('2.0')
LARGE_FARM_MIN_SIZE = Decimal('10.0')


# =============================================================================
# FARMER
# =============================================================================

class FarmerQuerySet(models.QuerySet):
    """Lookups by account, location hierarchy, certification and land size."""

    def for_user(self, user_id):
        return self.filter(user_id=user_id)

    def with_code(self, farmer_code):
        return self.filter(farmer_code=farmer_code)

    def by_location(self, province, district=None, sector=None):
        """Farmers in a province, optionally narrowed to a district and sector."""
        farmers = self.filter(province=province)
        if district is not None:
            farmers = farmers.filter(district=district)
        if sector is not None:
            farmers = farmers.filter(sector=sector)
        return farmers

    def with_experience(self, experience_level):
        return self.filter(experience_level=experience_level)

    def _uncertified_q(self):
        # Whitespace-only levels count as no certification
        return Q(certification_level__isnull=True) | Q(certification_trimmed='')

    def certified(self):
        return self.alias(certification_trimmed=Trim('certification_level')).exclude(self._uncertified_q())

    def uncertified(self):
        return self.alias(certification_trimmed=Trim('certification_level')).filter(self._uncertified_q())

    def in_cooperative(self, cooperative_name=None):
        """Cooperative members; all of them unless a cooperative is named."""
        if cooperative_name is not None:
            return self.filter(cooperative_name=cooperative_name)
        return self.exclude(Q(cooperative_name__isnull=True) | Q(cooperative_name=''))

    def independent(self):
        return self.filter(Q(cooperative_name__isnull=True) | Q(cooperative_name=''))

    def within_bounds(self, min_lat, max_lat, min_lon, max_lon):
        return self.filter(
            latitude__range=(min_lat, max_lat),
            longitude__range=(min_lon, max_lon)
        )

    def land_size_between(self, min_size=None, max_size=None):
        """Farmers whose total land size lies in the inclusive range; either bound may be open."""
        farmers = self.filter(total_land_size__isnull=False)
        if min_size is not None:
            farmers = farmers.filter(total_land_size__gte=min_size)
        if max_size is not None:
            farmers = farmers.filter(total_land_size__lte=max_size)
        return farmers

    def counts_by_experience_level(self):
        """Number of farmers per experience level, every level present."""
        rows = self.order_by().values('experience_level').annotate(count=Count('id'))
        counts = {level: 0 for level in Farmer.ExperienceLevel.values}
        counts.update({row['experience_level']: row['count'] for row in rows})
        return counts

    def counts_by_province(self):
        rows = self.order_by('province').values('province').annotate(count=Count('id'))
        return {row['province']: row['count'] for row in rows}


class Farmer(TrackedModel):
    """
    Agricultural profile attached one-to-one to a User account.
    """

    class ExperienceLevel(models.TextChoices):
        BEGINNER = 'BEGINNER', 'Beginner'
        INTERMEDIATE = 'INTERMEDIATE', 'Intermediate'
        EXPERT = 'EXPERT', 'Expert'

    id = models.CharField(
        primary_key=True,
        max_length=20,
        default=IdGenerator('F'),
        editable=False
    )

    user_id = models.CharField(
        max_length=20,
        unique=True,
        help_text="ID of the owning User account"
    )
    farmer_code = models.CharField(max_length=20, unique=True)
    cooperative_name = models.CharField(max_length=100, blank=True, null=True)

    total_land_size = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.01'), message='Land size must be positive')],
        help_text="Total land size in hectares"
    )

    # Location
    location = models.CharField(max_length=255)
    latitude = models.DecimalField(max_digits=10, decimal_places=8, validators=LATITUDE_VALIDATORS)
    longitude = models.DecimalField(max_digits=11, decimal_places=8, validators=LONGITUDE_VALIDATORS)
    province = models.CharField(max_length=50)
    district = models.CharField(max_length=50)
    sector = models.CharField(max_length=50)

    experience_level = models.CharField(
        max_length=20,
        choices=ExperienceLevel.choices,
        default=ExperienceLevel.BEGINNER
    )
    certification_level = models.CharField(max_length=50, blank=True, null=True)

    # Business details
    contact_person = models.CharField(max_length=100, blank=True, null=True)
    bank_account = models.CharField(max_length=50, blank=True, null=True)
    tax_number = models.CharField(max_length=30, blank=True, null=True)

    objects = FarmerQuerySet.as_manager()

    class Meta:
        db_table = 'farmers'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['province', 'district'], name='farmers_prov_district_idx'),
        ]

    def __str__(self):
        return f"{self.farmer_code} - {self.location}"

    def get_user(self):
        """Referenced User account, or None if it no longer exists."""
        return User.objects.filter(pk=self.user_id).first()

    def is_beginner(self):
        return self.experience_level == self.ExperienceLevel.BEGINNER

    def is_intermediate(self):
        return self.experience_level == self.ExperienceLevel.INTERMEDIATE

    def is_expert(self):
        return self.experience_level == self.ExperienceLevel.EXPERT

    def has_certification(self):
        return bool(self.certification_level and self.certification_level.strip())

    @property
    def full_location(self):
        """Location, sector, district, province joined with commas."""
        parts = [self.location, self.sector, self.district, self.province]
        return ', '.join(part for part in parts if part)

    @property
    def coordinates(self):
        return format_coordinates(self.latitude, self.longitude)


# =============================================================================
# FARM
# =============================================================================

class FarmQuerySet(models.QuerySet):
    """Lookups by owner, size class and bounding box."""

    def for_farmer(self, farmer_id):
        return self.filter(farmer_id=farmer_id)

    def small(self):
        return self.filter(farm_size__lte=SMALL_FARM_MAX_SIZE)

    def medium(self):
        return self.filter(farm_size__gt=SMALL_FARM_MAX_SIZE, farm_size__lte=LARGE_FARM_MIN_SIZE)

    def large(self):
        return self.filter(farm_size__gt=LARGE_FARM_MIN_SIZE)

    def within_bounds(self, min_lat, max_lat, min_lon, max_lon):
        return self.filter(
            latitude__range=(min_lat, max_lat),
            longitude__range=(min_lon, max_lon)
        )

    def with_electricity(self):
        return self.filter(electricity_available=True)

    def size_summary(self, farmer_id):
        """
        Aggregate farm sizes for one farmer.

        Returns:
            dict with ``count``, ``total_size`` and ``average_size``;
            sizes are Decimal('0') when the farmer has no farms.
        """
        summary = self.for_farmer(farmer_id).aggregate(
            count=Count('id'),
            total_size=Sum('farm_size'),
            average_size=Avg('farm_size'),
        )
        summary['total_size'] = summary['total_size'] or Decimal('0')
        summary['average_size'] = summary['average_size'] or Decimal('0')
        return summary


class Farm(TrackedModel):
    """
    Land parcel owned by a farmer user.

    ``farmer_id`` holds a User ID (not a Farmer profile ID).
    """

    class IrrigationSystem(models.TextChoices):
        RAIN_FED = 'RAIN_FED', 'Rain Fed'
        SPRINKLER = 'SPRINKLER', 'Sprinkler'
        DRIP = 'DRIP', 'Drip'
        FLOOD = 'FLOOD', 'Flood'
        MANUAL = 'MANUAL', 'Manual'

    class Topography(models.TextChoices):
        FLAT = 'FLAT', 'Flat'
        HILLY = 'HILLY', 'Hilly'
        MOUNTAINOUS = 'MOUNTAINOUS', 'Mountainous'

    class RoadAccess(models.TextChoices):
        GOOD = 'GOOD', 'Good'
        MODERATE = 'MODERATE', 'Moderate'
        POOR = 'POOR', 'Poor'

    id = models.CharField(
        primary_key=True,
        max_length=20,
        default=IdGenerator('FM'),
        editable=False
    )

    farmer_id = models.CharField(
        max_length=20,
        db_index=True,
        help_text="ID of the owning User account"
    )
    farm_name = models.CharField(max_length=100)
    farm_code = models.CharField(max_length=20, unique=True, blank=True, null=True)

    farm_size = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'), message='Farm size must be positive')],
        help_text="Size in hectares"
    )
    soil_type = models.CharField(max_length=50)

    # Location
    latitude = models.DecimalField(max_digits=10, decimal_places=8, validators=LATITUDE_VALIDATORS)
    longitude = models.DecimalField(max_digits=11, decimal_places=8, validators=LONGITUDE_VALIDATORS)
    altitude = models.DecimalField(
        max_digits=6,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0'), message='Altitude cannot be negative')],
        help_text="Metres above sea level"
    )

    # Infrastructure
    irrigation_system = models.CharField(
        max_length=20,
        choices=IrrigationSystem.choices,
        default=IrrigationSystem.RAIN_FED
    )
    topography = models.CharField(
        max_length=50,
        choices=Topography.choices,
        blank=True,
        null=True
    )
    water_source = models.CharField(max_length=100, blank=True, null=True)
    electricity_available = models.BooleanField(default=False)
    road_access_quality = models.CharField(
        max_length=20,
        choices=RoadAccess.choices,
        default=RoadAccess.MODERATE
    )

    objects = FarmQuerySet.as_manager()

    class Meta:
        db_table = 'farms'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['latitude', 'longitude'], name='farms_lat_lon_idx'),
        ]

    def __str__(self):
        return f"{self.farm_name} ({self.id})"

    def clean(self):
        # Blank codes are stored as NULL so they don't collide on the unique index
        if self.farm_code is not None and not self.farm_code.strip():
            self.farm_code = None

    def get_farmer(self):
        """Owning User account, or None."""
        return User.objects.filter(pk=self.farmer_id).first()

    def has_farmer_with_valid_role(self):
        farmer = self.get_farmer()
        return farmer is not None and farmer.is_farmer()

    @property
    def coordinates(self):
        return format_coordinates(self.latitude, self.longitude)

    @property
    def altitude_display(self):
        return f"{self.altitude} m" if self.altitude is not None else "N/A"

    def has_electricity(self):
        return bool(self.electricity_available)

    def is_large_farm(self):
        return self.farm_size is not None and self.farm_size > LARGE_FARM_MIN_SIZE

    def is_small_farm(self):
        return self.farm_size is not None and self.farm_size <= SMALL_FARM_MAX_SIZE

    @property
    def size_category(self):
        if self.farm_size is None:
            return "Unknown"
        if self.farm_size <= SMALL_FARM_MAX_SIZE:
            return "Small Farm"
        if self.farm_size <= LARGE_FARM_MIN_SIZE:
            return "Medium Farm"
        return "Large Farm"
