"""
Validators shared by models that store geographic coordinates.
"""
from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator

LATITUDE_VALIDATORS = [
    MinValueValidator(Decimal('-90.0'), message='Latitude must be between -90 and 90'),
    MaxValueValidator(Decimal('90.0'), message='Latitude must be between -90 and 90'),
]

LONGITUDE_VALIDATORS = [
    MinValueValidator(Decimal('-180.0'), message='Longitude must be between -180 and 180'),
    MaxValueValidator(Decimal('180.0'), message='Longitude must be between -180 and 180'),
]


def format_coordinates(latitude, longitude):
    """Render a coordinate pair with six decimal places, or None if either is missing."""
    if latitude is None or longitude is None:
        return None
    return f"{latitude:.6f}, {longitude:.6f}"
