# Generated manually for the initial AI recommendation schema
from django.db import migrations, models
import django.core.validators
import django.utils.timezone

import core.ids


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='AIRecommendation',
            fields=[
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('updated_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('id', models.CharField(db_column='recommendation_id', default=core.ids.IdGenerator('REC'), editable=False, max_length=14, primary_key=True, serialize=False)),
                ('farmer_id', models.CharField(db_index=True, max_length=14)),
                ('farm_id', models.CharField(blank=True, max_length=14, null=True)),
                ('crop_production_id', models.CharField(blank=True, max_length=14, null=True)),
                ('recommendation_type', models.CharField(choices=[('FERTILIZER', 'Fertilizer'), ('WATER', 'Water'), ('SEEDS', 'Seeds'), ('PESTICIDE', 'Pesticide'), ('HARVEST', 'Harvest'), ('PLANTING', 'Planting'), ('SOIL_MANAGEMENT', 'Soil Management'), ('PEST_CONTROL', 'Pest Control'), ('DISEASE_PREVENTION', 'Disease Prevention'), ('IRRIGATION', 'Irrigation'), ('CROP_ROTATION', 'Crop Rotation'), ('MARKET_TIMING', 'Market Timing'), ('STORAGE', 'Storage'), ('WEATHER_ADAPTATION', 'Weather Adaptation'), ('GENERAL', 'General')], max_length=30)),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, null=True)),
                ('action_items', models.TextField(blank=True, null=True)),
                ('priority', models.CharField(choices=[('URGENT', 'Urgent'), ('HIGH', 'High'), ('MEDIUM', 'Medium'), ('LOW', 'Low')], max_length=10)),
                ('confidence_score', models.FloatField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(0.0), django.core.validators.MaxValueValidator(1.0)])),
                ('generated_by', models.CharField(blank=True, max_length=50, null=True)),
                ('is_read', models.BooleanField(default=False)),
                ('read_at', models.DateTimeField(blank=True, null=True)),
                ('is_implemented', models.BooleanField(default=False)),
                ('implementation_date', models.DateTimeField(blank=True, null=True)),
                ('implementation_notes', models.TextField(blank=True, null=True)),
                ('effectiveness_rating', models.IntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(5)])),
                ('effectiveness_notes', models.TextField(blank=True, null=True)),
                ('valid_from', models.DateTimeField(blank=True)),
                ('valid_until', models.DateTimeField(blank=True, null=True)),
                ('is_active', models.BooleanField(default=True)),
            ],
            options={
                'verbose_name': 'AI Recommendation',
                'verbose_name_plural': 'AI Recommendations',
                'db_table': 'ai_recommendations',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['farmer_id', 'is_active'], name='airec_farmer_active_idx'),
                    models.Index(fields=['priority', 'is_read'], name='airec_priority_read_idx'),
                ],
            },
        ),
    ]
