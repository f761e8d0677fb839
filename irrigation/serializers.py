"""
Serializers for irrigation predictions.
"""

from rest_framework import serializers

from farms.models import Farm

from .models import IrrigationPrediction


class IrrigationPredictionSerializer(serializers.ModelSerializer):
    """Irrigation forecast with its alert description."""
    alert_description = serializers.CharField(read_only=True)
    requires_action = serializers.BooleanField(read_only=True)
    recommended_method_display = serializers.CharField(
        source='get_recommended_method_display', read_only=True
    )

    class Meta:
        model = IrrigationPrediction
        fields = [
            'id', 'farm_id', 'crop_production_id', 'prediction_date',
            'predicted_water_need', 'predicted_irrigation_frequency',
            'recommended_method', 'recommended_method_display',
            'water_stress_risk', 'predicted_yield_impact', 'optimal_duration',
            'cost_estimation', 'confidence_level', 'weather_factor',
            'soil_moisture_target', 'alert_level', 'alert_description',
            'requires_action', 'recommendations', 'based_on_historical_days',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_farm_id(self, value):
        if not Farm.objects.filter(pk=value).exists():
            raise serializers.ValidationError("Farm not found.")
        return value
