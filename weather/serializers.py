"""
Serializers for weather observations.
"""

from rest_framework import serializers

from .models import WeatherData


class WeatherDataSerializer(serializers.ModelSerializer):
    """Weather observation with derived classification fields."""
    data_quality_display = serializers.CharField(source='get_data_quality_display', read_only=True)
    temperature_range = serializers.SerializerMethodField()
    is_rainy = serializers.BooleanField(read_only=True)
    is_windy = serializers.BooleanField(read_only=True)
    is_hot = serializers.BooleanField(read_only=True)
    is_cold = serializers.BooleanField(read_only=True)

    class Meta:
        model = WeatherData
        fields = [
            'id', 'latitude', 'longitude', 'record_date',
            'temperature', 'temperature_min', 'temperature_max', 'temperature_range',
            'humidity', 'rainfall', 'wind_speed', 'wind_direction',
            'weather_condition', 'solar_radiation', 'evapotranspiration',
            'atmospheric_pressure', 'uv_index',
            'data_source', 'station_id', 'data_quality', 'data_quality_display',
            'is_rainy', 'is_windy', 'is_hot', 'is_cold',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_temperature_range(self, obj):
        band = obj.temperature_range
        return band.display_name if band else None

    def validate(self, attrs):
        """Minimum temperature must not exceed maximum temperature."""
        low = attrs.get('temperature_min')
        high = attrs.get('temperature_max')
        if low is not None and high is not None and low > high:
            raise serializers.ValidationError(
                {"temperature_min": "Minimum temperature cannot exceed maximum temperature."}
            )
        return attrs
