# Generated manually for the initial irrigation prediction schema
from django.db import migrations, models
import django.utils.timezone

import core.ids


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='IrrigationPrediction',
            fields=[
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('updated_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('id', models.CharField(default=core.ids.IdGenerator('IP'), editable=False, max_length=20, primary_key=True, serialize=False)),
                ('farm_id', models.CharField(db_index=True, max_length=20)),
                ('crop_production_id', models.CharField(blank=True, max_length=20, null=True)),
                ('prediction_date', models.DateTimeField(default=django.utils.timezone.now)),
                ('predicted_water_need', models.DecimalField(blank=True, decimal_places=2, help_text='Litres', max_digits=10, null=True)),
                ('predicted_irrigation_frequency', models.IntegerField(blank=True, help_text='Times per week', null=True)),
                ('recommended_method', models.CharField(blank=True, choices=[('SPRINKLER', 'Sprinkler'), ('DRIP', 'Drip'), ('FLOOD', 'Flood'), ('FURROW', 'Furrow'), ('MANUAL', 'Manual')], max_length=20, null=True)),
                ('water_stress_risk', models.DecimalField(blank=True, decimal_places=2, help_text='Percent', max_digits=5, null=True)),
                ('predicted_yield_impact', models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ('optimal_duration', models.IntegerField(blank=True, help_text='Minutes', null=True)),
                ('cost_estimation', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('confidence_level', models.DecimalField(blank=True, decimal_places=2, help_text='Percent', max_digits=5, null=True)),
                ('weather_factor', models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ('soil_moisture_target', models.DecimalField(blank=True, decimal_places=2, max_digits=4, null=True)),
                ('alert_level', models.CharField(blank=True, choices=[('LOW', 'Low - Normal irrigation needed'), ('MODERATE', 'Moderate - Increase monitoring'), ('HIGH', 'High - Immediate action required'), ('CRITICAL', 'Critical - Water stress imminent')], max_length=20, null=True)),
                ('recommendations', models.TextField(blank=True, null=True)),
                ('based_on_historical_days', models.IntegerField(blank=True, null=True)),
            ],
            options={
                'db_table': 'irrigation_predictions',
                'ordering': ['-prediction_date'],
                'indexes': [
                    models.Index(fields=['farm_id', 'prediction_date'], name='irrig_farm_date_idx'),
                    models.Index(fields=['alert_level'], name='irrig_alert_idx'),
                ],
            },
        ),
    ]
