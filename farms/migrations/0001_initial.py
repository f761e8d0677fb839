# Generated manually for the initial farmer and farm schema
from decimal import Decimal

from django.db import migrations, models
import django.core.validators
import django.utils.timezone

import core.ids


LATITUDE_VALIDATORS = [
    django.core.validators.MinValueValidator(Decimal('-90.0'), message='Latitude must be between -90 and 90'),
    django.core.validators.MaxValueValidator(Decimal('90.0'), message='Latitude must be between -90 and 90'),
]

LONGITUDE_VALIDATORS = [
    django.core.validators.MinValueValidator(Decimal('-180.0'), message='Longitude must be between -180 and 180'),
    django.core.validators.MaxValueValidator(Decimal('180.0'), message='Longitude must be between -180 and 180'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Farmer',
            fields=[
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('updated_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('id', models.CharField(default=core.ids.IdGenerator('F'), editable=False, max_length=20, primary_key=True, serialize=False)),
                ('user_id', models.CharField(help_text='ID of the owning User account', max_length=20, unique=True)),
                ('farmer_code', models.CharField(max_length=20, unique=True)),
                ('cooperative_name', models.CharField(blank=True, max_length=100, null=True)),
                ('total_land_size', models.DecimalField(blank=True, decimal_places=2, help_text='Total land size in hectares', max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.01'), message='Land size must be positive')])),
                ('location', models.CharField(max_length=255)),
                ('latitude', models.DecimalField(decimal_places=8, max_digits=10, validators=LATITUDE_VALIDATORS)),
                ('longitude', models.DecimalField(decimal_places=8, max_digits=11, validators=LONGITUDE_VALIDATORS)),
                ('province', models.CharField(max_length=50)),
                ('district', models.CharField(max_length=50)),
                ('sector', models.CharField(max_length=50)),
                ('experience_level', models.CharField(choices=[('BEGINNER', 'Beginner'), ('INTERMEDIATE', 'Intermediate'), ('EXPERT', 'Expert')], default='BEGINNER', max_length=20)),
                ('certification_level', models.CharField(blank=True, max_length=50, null=True)),
                ('contact_person', models.CharField(blank=True, max_length=100, null=True)),
                ('bank_account', models.CharField(blank=True, max_length=50, null=True)),
                ('tax_number', models.CharField(blank=True, max_length=30, null=True)),
            ],
            options={
                'db_table': 'farmers',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['province', 'district'], name='farmers_prov_district_idx')],
            },
        ),
        migrations.CreateModel(
            name='Farm',
            fields=[
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('updated_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('id', models.CharField(default=core.ids.IdGenerator('FM'), editable=False, max_length=20, primary_key=True, serialize=False)),
                ('farmer_id', models.CharField(db_index=True, help_text='ID of the owning User account', max_length=20)),
                ('farm_name', models.CharField(max_length=100)),
                ('farm_code', models.CharField(blank=True, max_length=20, null=True, unique=True)),
                ('farm_size', models.DecimalField(decimal_places=2, help_text='Size in hectares', max_digits=8, validators=[django.core.validators.MinValueValidator(Decimal('0.01'), message='Farm size must be positive')])),
                ('soil_type', models.CharField(max_length=50)),
                ('latitude', models.DecimalField(decimal_places=8, max_digits=10, validators=LATITUDE_VALIDATORS)),
                ('longitude', models.DecimalField(decimal_places=8, max_digits=11, validators=LONGITUDE_VALIDATORS)),
                ('altitude', models.DecimalField(blank=True, decimal_places=2, help_text='Metres above sea level', max_digits=6, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0'), message='Altitude cannot be negative')])),
                ('irrigation_system', models.CharField(choices=[('RAIN_FED', 'Rain Fed'), ('SPRINKLER', 'Sprinkler'), ('DRIP', 'Drip'), ('FLOOD', 'Flood'), ('MANUAL', 'Manual')], default='RAIN_FED', max_length=20)),
                ('topography', models.CharField(blank=True, choices=[('FLAT', 'Flat'), ('HILLY', 'Hilly'), ('MOUNTAINOUS', 'Mountainous')], max_length=50, null=True)),
                ('water_source', models.CharField(blank=True, max_length=100, null=True)),
                ('electricity_available', models.BooleanField(default=False)),
                ('road_access_quality', models.CharField(choices=[('GOOD', 'Good'), ('MODERATE', 'Moderate'), ('POOR', 'Poor')], default='MODERATE', max_length=20)),
            ],
            options={
                'db_table': 'farms',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['latitude', 'longitude'], name='farms_lat_lon_idx')],
            },
        ),
    ]
