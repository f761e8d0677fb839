"""
Serializers for AI recommendations.
"""

from rest_framework import serializers

from .models import AIRecommendation


class AIRecommendationSerializer(serializers.ModelSerializer):
    """Recommendation with expiry and urgency derived fields."""
    recommendation_type_display = serializers.CharField(
        source='get_recommendation_type_display', read_only=True
    )
    priority_display = serializers.CharField(source='get_priority_display', read_only=True)
    is_expired = serializers.BooleanField(read_only=True)
    days_until_expiry = serializers.IntegerField(read_only=True, allow_null=True)
    is_urgent = serializers.BooleanField(read_only=True)

    class Meta:
        model = AIRecommendation
        fields = [
            'id', 'farmer_id', 'farm_id', 'crop_production_id',
            'recommendation_type', 'recommendation_type_display',
            'title', 'description', 'action_items',
            'priority', 'priority_display', 'is_urgent', 'confidence_score', 'generated_by',
            'is_read', 'read_at', 'is_implemented', 'implementation_date',
            'implementation_notes', 'effectiveness_rating', 'effectiveness_notes',
            'valid_from', 'valid_until', 'is_active', 'is_expired', 'days_until_expiry',
            'created_at', 'updated_at'
        ]
        read_only_fields = [
            'id', 'is_read', 'read_at', 'implementation_date',
            'created_at', 'updated_at'
        ]

    def validate(self, attrs):
        """valid_from must not come after valid_until."""
        valid_from = attrs.get('valid_from', getattr(self.instance, 'valid_from', None))
        valid_until = attrs.get('valid_until', getattr(self.instance, 'valid_until', None))
        if valid_from and valid_until and valid_from > valid_until:
            raise serializers.ValidationError(
                {"valid_until": "Valid until must not be earlier than valid from."}
            )
        return attrs


class EffectivenessRatingSerializer(serializers.Serializer):
    """Farmer feedback on an implemented recommendation."""
    rating = serializers.IntegerField(min_value=1, max_value=5)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
