# Generated manually for the initial weather observation schema
from decimal import Decimal

from django.db import migrations, models
import django.core.validators
import django.utils.timezone

import core.ids


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='WeatherData',
            fields=[
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('updated_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('id', models.CharField(default=core.ids.IdGenerator('WD'), editable=False, max_length=20, primary_key=True, serialize=False)),
                ('latitude', models.DecimalField(decimal_places=8, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('-90.0'), message='Latitude must be between -90 and 90'), django.core.validators.MaxValueValidator(Decimal('90.0'), message='Latitude must be between -90 and 90')])),
                ('longitude', models.DecimalField(decimal_places=8, max_digits=11, validators=[django.core.validators.MinValueValidator(Decimal('-180.0'), message='Longitude must be between -180 and 180'), django.core.validators.MaxValueValidator(Decimal('180.0'), message='Longitude must be between -180 and 180')])),
                ('record_date', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('temperature', models.DecimalField(decimal_places=1, max_digits=4, validators=[django.core.validators.MinValueValidator(Decimal('-50'), message='Temperature must be between -50°C and 60°C'), django.core.validators.MaxValueValidator(Decimal('60'), message='Temperature must be between -50°C and 60°C')])),
                ('temperature_min', models.DecimalField(blank=True, decimal_places=1, max_digits=4, null=True)),
                ('temperature_max', models.DecimalField(blank=True, decimal_places=1, max_digits=4, null=True)),
                ('humidity', models.DecimalField(blank=True, decimal_places=1, help_text='Relative humidity (%)', max_digits=4, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0')), django.core.validators.MaxValueValidator(Decimal('100'))])),
                ('rainfall', models.DecimalField(blank=True, decimal_places=2, help_text='Rainfall (mm)', max_digits=6, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0'), message='Rainfall cannot be negative')])),
                ('wind_speed', models.DecimalField(blank=True, decimal_places=1, help_text='Wind speed (km/h)', max_digits=4, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0'), message='Wind speed cannot be negative')])),
                ('wind_direction', models.IntegerField(blank=True, help_text='Degrees from north', null=True, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(360)])),
                ('weather_condition', models.CharField(blank=True, choices=[('SUNNY', 'Sunny'), ('PARTLY_CLOUDY', 'Partly Cloudy'), ('CLOUDY', 'Cloudy'), ('OVERCAST', 'Overcast'), ('LIGHT_RAIN', 'Light Rain'), ('RAIN', 'Rain'), ('HEAVY_RAIN', 'Heavy Rain'), ('THUNDERSTORM', 'Thunderstorm'), ('SNOW', 'Snow'), ('FOG', 'Fog'), ('WINDY', 'Windy'), ('HAIL', 'Hail'), ('DRIZZLE', 'Drizzle')], max_length=50, null=True)),
                ('solar_radiation', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ('evapotranspiration', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ('atmospheric_pressure', models.DecimalField(blank=True, decimal_places=2, help_text='Pressure (hPa)', max_digits=7, null=True, validators=[django.core.validators.MinValueValidator(Decimal('800')), django.core.validators.MaxValueValidator(Decimal('1200'))])),
                ('uv_index', models.IntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(15)])),
                ('data_source', models.CharField(max_length=50)),
                ('station_id', models.CharField(blank=True, db_index=True, max_length=20, null=True)),
                ('data_quality', models.CharField(choices=[('EXCELLENT', 'Excellent'), ('GOOD', 'Good'), ('FAIR', 'Fair'), ('POOR', 'Poor')], default='GOOD', max_length=20)),
            ],
            options={
                'verbose_name': 'Weather Data',
                'verbose_name_plural': 'Weather Data',
                'db_table': 'weather_data',
                'ordering': ['-record_date'],
                'indexes': [
                    models.Index(fields=['latitude', 'longitude'], name='weather_lat_lon_idx'),
                    models.Index(fields=['data_quality', 'record_date'], name='weather_quality_date_idx'),
                ],
            },
        ),
    ]
