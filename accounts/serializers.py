from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

User = get_user_model()


class UserRegistrationSerializer(serializers.ModelSerializer):
    """
    Serializer for user registration.
    Handles password validation and user creation.
    """
    password = serializers.CharField(
        write_only=True,
        required=True,
        min_length=8,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )

    class Meta:
        model = User
        fields = (
            'id', 'username', 'email', 'password', 'password_confirm',
            'full_name', 'phone_number', 'role'
        )
        read_only_fields = ('id',)

    def validate(self, attrs):
        """Validate that passwords match."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError(
                {"password": "Password fields didn't match."}
            )
        return attrs

    def create(self, validated_data):
        """Create a new user with encrypted password."""
        validated_data.pop('password_confirm')
        return User.objects.create_user(**validated_data)


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for user details.
    Password and stored image bytes never leave the server.
    """
    role_display = serializers.CharField(source='get_role_display', read_only=True)
    has_valid_reset_token = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = (
            'id', 'username', 'email', 'full_name', 'phone_number',
            'role', 'role_display', 'is_active', 'last_login',
            'profile_image_url', 'has_valid_reset_token',
            'created_at', 'updated_at'
        )
        read_only_fields = (
            'id', 'last_login', 'created_at', 'updated_at'
        )

    def get_has_valid_reset_token(self, obj):
        return obj.has_valid_reset_token()


class PasswordResetSerializer(serializers.Serializer):
    """Payload for redeeming a reset token."""
    email = serializers.EmailField()
    reset_token = serializers.CharField(max_length=100)
    new_password = serializers.CharField(
        write_only=True,
        min_length=8,
        validators=[validate_password]
    )
    new_password_confirm = serializers.CharField(write_only=True)

    def validate(self, attrs):
        """Validate that new passwords match."""
        if attrs['new_password'] != attrs['new_password_confirm']:
            raise serializers.ValidationError(
                {"new_password": "New password fields didn't match."}
            )
        return attrs
