"""
Combined filtering for weather observations.
"""
import django_filters

from .models import WeatherData


class WeatherDataFilter(django_filters.FilterSet):
    """Date range, temperature range, source, quality and condition in one pass."""

    start_date = django_filters.IsoDateTimeFilter(field_name='record_date', lookup_expr='gte')
    end_date = django_filters.IsoDateTimeFilter(field_name='record_date', lookup_expr='lte')
    min_temperature = django_filters.NumberFilter(field_name='temperature', lookup_expr='gte')
    max_temperature = django_filters.NumberFilter(field_name='temperature', lookup_expr='lte')
    data_source = django_filters.CharFilter(field_name='data_source', lookup_expr='iexact')
    data_quality = django_filters.ChoiceFilter(choices=WeatherData.DataQuality.choices)
    weather_condition = django_filters.ChoiceFilter(choices=WeatherData.WeatherCondition.choices)
    station_id = django_filters.CharFilter()

    class Meta:
        model = WeatherData
        fields = [
            'start_date', 'end_date', 'min_temperature', 'max_temperature',
            'data_source', 'data_quality', 'weather_condition', 'station_id'
        ]
