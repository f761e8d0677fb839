"""
Serializers for farmer profiles and farms.
"""

from rest_framework import serializers

from accounts.models import User

from .models import Farm, Farmer


# =============================================================================
# FARMER SERIALIZERS
# =============================================================================

class FarmerSerializer(serializers.ModelSerializer):
    """Farmer profile with its derived location fields."""
    experience_level_display = serializers.CharField(
        source='get_experience_level_display', read_only=True
    )
    full_location = serializers.CharField(read_only=True)
    coordinates = serializers.CharField(read_only=True)

    class Meta:
        model = Farmer
        fields = [
            'id', 'user_id', 'farmer_code', 'cooperative_name', 'total_land_size',
            'location', 'latitude', 'longitude', 'province', 'district', 'sector',
            'full_location', 'coordinates',
            'experience_level', 'experience_level_display', 'certification_level',
            'contact_person', 'bank_account', 'tax_number',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        # Uniqueness is checked in validate_* with domain messages
        extra_kwargs = {
            'user_id': {'validators': []},
            'farmer_code': {'validators': []},
        }

    def _others(self):
        farmers = Farmer.objects.all()
        if self.instance is not None:
            farmers = farmers.exclude(pk=self.instance.pk)
        return farmers

    def validate_user_id(self, value):
        """The profile must belong to an existing account with no other profile."""
        if not User.objects.filter(pk=value).exists():
            raise serializers.ValidationError("User account does not exist.")
        if self._others().for_user(value).exists():
            raise serializers.ValidationError("A farmer with this user ID already exists.")
        return value

    def validate_farmer_code(self, value):
        if self._others().with_code(value).exists():
            raise serializers.ValidationError("A farmer with this farmer code already exists.")
        return value


# =============================================================================
# FARM SERIALIZERS
# =============================================================================

class FarmSerializer(serializers.ModelSerializer):
    """Farm parcel with size classification."""
    size_category = serializers.CharField(read_only=True)
    altitude_display = serializers.CharField(read_only=True)
    coordinates = serializers.CharField(read_only=True)
    irrigation_system_display = serializers.CharField(
        source='get_irrigation_system_display', read_only=True
    )

    class Meta:
        model = Farm
        fields = [
            'id', 'farmer_id', 'farm_name', 'farm_code', 'farm_size', 'size_category',
            'soil_type', 'latitude', 'longitude', 'coordinates',
            'altitude', 'altitude_display',
            'irrigation_system', 'irrigation_system_display', 'topography',
            'water_source', 'electricity_available', 'road_access_quality',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_farmer_id(self, value):
        """The owner must be an existing FARMER account."""
        if not User.objects.filter(pk=value, role=User.Role.FARMER).exists():
            raise serializers.ValidationError("Farm owner must be an existing user with the FARMER role.")
        return value
