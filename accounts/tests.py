"""
Tests for user accounts and the password reset flow.
"""
from datetime import timedelta
from unittest.mock import patch

import pytest
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.utils import timezone

from accounts.serializers import (
    PasswordResetSerializer,
    UserRegistrationSerializer,
    UserSerializer,
)
from accounts.services import PasswordResetError, PasswordResetService

User = get_user_model()

pytestmark = pytest.mark.django_db


# =============================================================================
# USER MODEL
# =============================================================================

class TestUserCreation:
    """Creating accounts through the manager."""

    def test_create_user_hashes_password(self, make_user):
        user = make_user(password='s3cretpass')
        assert user.password != 's3cretpass'
        assert user.check_password('s3cretpass')

    def test_id_is_fourteen_alphanumeric_characters(self, farmer_user):
        assert len(farmer_user.id) == 14
        assert farmer_user.id.isalnum()
        assert farmer_user.id.upper() == farmer_user.id

    def test_defaults_on_fresh_instance(self):
        user = User(username='fresh', email='fresh@test.com', full_name='Fresh')
        assert user.id
        assert user.created_at is not None
        assert user.updated_at is not None
        assert user.is_active is True

    def test_short_password_rejected(self):
        with pytest.raises(ValueError):
            User.objects.create_user(
                username='shorty',
                email='shorty@test.com',
                password='short',
                full_name='Short Password'
            )

    def test_email_lookup_normalizes_domain(self, make_user):
        user = make_user(email='Mixed.Case@Test.com')
        assert User.objects.by_email('Mixed.Case@test.COM') == user

    def test_email_lookup_keeps_local_part_case(self, make_user):
        upper = make_user(email='Bob@farm.rw')
        lower = make_user(email='bob@farm.rw')

        assert User.objects.by_email('Bob@farm.rw') == upper
        assert User.objects.by_email('bob@farm.rw') == lower
        with pytest.raises(User.DoesNotExist):
            User.objects.by_email('BOB@farm.rw')

    def test_role_filters(self, make_user):
        buyer = make_user(role=User.Role.BUYER)
        make_user(role=User.Role.FARMER)
        make_user(role=User.Role.BUYER, is_active=False)

        assert list(User.objects.with_role(User.Role.BUYER).active()) == [buyer]
        assert list(User.objects.active().with_role(User.Role.BUYER)) == [buyer]

    def test_lookups_chain_from_filtered_queryset(self, make_user):
        buyer = make_user(role=User.Role.BUYER, email='buyer@market.rw')
        make_user(role=User.Role.FARMER, email='farmer@market.rw')

        assert User.objects.with_role(User.Role.BUYER).by_email('buyer@market.rw') == buyer
        with pytest.raises(User.DoesNotExist):
            User.objects.with_role(User.Role.BUYER).by_email('farmer@market.rw')


class TestUserValidation:
    """Field-level validation through full_clean()."""

    def test_username_too_short(self, farmer_user):
        farmer_user.username = 'ab'
        with pytest.raises(ValidationError) as exc:
            farmer_user.full_clean()
        assert 'username' in exc.value.message_dict

    def test_bad_phone_number(self, farmer_user):
        farmer_user.phone_number = '078-ABC'
        with pytest.raises(ValidationError) as exc:
            farmer_user.full_clean()
        assert 'phone_number' in exc.value.message_dict

    def test_unknown_role(self, farmer_user):
        farmer_user.role = 'OWNER'
        with pytest.raises(ValidationError) as exc:
            farmer_user.full_clean()
        assert 'role' in exc.value.message_dict

    def test_valid_user_passes(self, farmer_user):
        farmer_user.full_clean()


class TestUserPredicates:
    """Role checks and account state."""

    @pytest.mark.parametrize('role,check', [
        (User.Role.FARMER, 'is_farmer'),
        (User.Role.BUYER, 'is_buyer'),
        (User.Role.ADMIN, 'is_admin'),
        (User.Role.ANALYST, 'is_analyst'),
        (User.Role.GOVERNMENT, 'is_government'),
    ])
    def test_role_checks(self, role, check):
        user = User(role=role)
        assert getattr(user, check)() is True
        others = {'is_farmer', 'is_buyer', 'is_admin', 'is_analyst', 'is_government'} - {check}
        assert not any(getattr(user, other)() for other in others)

    def test_authority(self):
        user = User(role=User.Role.GOVERNMENT)
        assert user.authority == 'ROLE_GOVERNMENT'
        assert user.get_authorities() == ['ROLE_GOVERNMENT']

    def test_str_uses_role_display(self):
        user = User(full_name='Alice Mukamana', role=User.Role.ADMIN)
        assert str(user) == 'Alice Mukamana (Administrator)'

    def test_account_state_follows_is_active(self):
        user = User(is_active=False)
        assert user.is_enabled() is False
        assert user.is_account_non_locked() is False
        assert user.is_account_non_expired() is True
        assert user.is_credentials_non_expired() is True

    def test_null_is_active_counts_as_enabled(self):
        user = User(is_active=None)
        assert user.is_enabled() is True

    def test_update_last_login(self):
        user = User()
        assert user.last_login is None
        user.update_last_login()
        assert user.last_login is not None


class TestResetTokenValidity:
    """has_valid_reset_token() and clear_reset_token()."""

    def test_no_token(self):
        user = User(reset_token_expiration=timezone.now() + timedelta(hours=1))
        assert user.has_valid_reset_token() is False

    def test_no_expiration(self):
        user = User(reset_token='abc')
        assert user.has_valid_reset_token() is False

    def test_future_expiration(self):
        user = User(reset_token='abc', reset_token_expiration=timezone.now() + timedelta(minutes=5))
        assert user.has_valid_reset_token() is True

    def test_past_expiration(self):
        user = User(reset_token='abc', reset_token_expiration=timezone.now() - timedelta(seconds=1))
        assert user.has_valid_reset_token() is False

    def test_clear(self):
        user = User(reset_token='abc', reset_token_expiration=timezone.now())
        user.clear_reset_token()
        assert user.reset_token is None
        assert user.reset_token_expiration is None


# =============================================================================
# PASSWORD RESET SERVICE
# =============================================================================

class TestPasswordResetService:
    """Issuing and redeeming reset tokens."""

    def test_issue_reset_token_stores_token(self, farmer_user):
        token = PasswordResetService.issue_reset_token(farmer_user)

        farmer_user.refresh_from_db()
        assert farmer_user.reset_token == token
        assert farmer_user.has_valid_reset_token()

    def test_token_lifetime_is_one_hour(self, farmer_user, settings):
        settings.PASSWORD_RESET_TOKEN_LIFETIME_MINUTES = 60
        now = timezone.now()
        with patch('accounts.services.timezone.now', return_value=now):
            PasswordResetService.issue_reset_token(farmer_user)
        assert farmer_user.reset_token_expiration == now + timedelta(hours=1)

    def test_reset_password_with_token(self, farmer_user):
        token = PasswordResetService.issue_reset_token(farmer_user)

        PasswordResetService.reset_password_with_token(farmer_user.email, token, 'brandnewpass')

        farmer_user.refresh_from_db()
        assert farmer_user.check_password('brandnewpass')
        assert farmer_user.reset_token is None
        assert farmer_user.reset_token_expiration is None

    def test_unknown_email(self):
        with pytest.raises(User.DoesNotExist):
            PasswordResetService.reset_password_with_token('nobody@test.com', 'x', 'brandnewpass')

    def test_no_active_request(self, farmer_user):
        with pytest.raises(PasswordResetError, match='No active reset request'):
            PasswordResetService.reset_password_with_token(farmer_user.email, 'x', 'brandnewpass')

    def test_wrong_token(self, farmer_user):
        PasswordResetService.issue_reset_token(farmer_user)
        with pytest.raises(PasswordResetError, match='Invalid reset token'):
            PasswordResetService.reset_password_with_token(farmer_user.email, 'wrong', 'brandnewpass')

    def test_expired_token(self, farmer_user):
        token = PasswordResetService.issue_reset_token(farmer_user, lifetime=timedelta(minutes=-1))
        with pytest.raises(PasswordResetError, match='expired'):
            PasswordResetService.reset_password_with_token(farmer_user.email, token, 'brandnewpass')

        farmer_user.refresh_from_db()
        assert farmer_user.check_password('testpass123')

    def test_reset_targets_exact_email_among_case_variants(self, make_user):
        upper = make_user(email='Bob@farm.rw')
        lower = make_user(email='bob@farm.rw')
        token = PasswordResetService.issue_reset_token(upper)

        PasswordResetService.reset_password_with_token('Bob@farm.rw', token, 'brandnewpass')

        upper.refresh_from_db()
        lower.refresh_from_db()
        assert upper.check_password('brandnewpass')
        assert lower.check_password('testpass123')


# =============================================================================
# SERIALIZERS
# =============================================================================

class TestUserSerializers:
    """Serialized representation of accounts."""

    def test_password_and_image_bytes_not_serialized(self, farmer_user):
        farmer_user.profile_image_data = b'\x89PNG'
        data = UserSerializer(farmer_user).data

        assert 'password' not in data
        assert 'profile_image_data' not in data
        assert data['role_display'] == 'Farmer'
        assert data['id'] == farmer_user.id

    def test_registration_hashes_password(self):
        serializer = UserRegistrationSerializer(data={
            'username': 'newfarmer',
            'email': 'newfarmer@test.com',
            'password': 'longenough1',
            'password_confirm': 'longenough1',
            'full_name': 'New Farmer',
            'role': 'FARMER',
        })
        assert serializer.is_valid(), serializer.errors
        user = serializer.save()

        assert user.check_password('longenough1')
        assert 'password' not in serializer.data

    def test_registration_rejects_short_password(self):
        serializer = UserRegistrationSerializer(data={
            'username': 'newfarmer',
            'email': 'newfarmer@test.com',
            'password': 'short',
            'password_confirm': 'short',
            'full_name': 'New Farmer',
            'role': 'FARMER',
        })
        assert not serializer.is_valid()
        assert 'password' in serializer.errors

    def test_password_reset_accepts_matching_passwords(self):
        serializer = PasswordResetSerializer(data={
            'email': 'jean@farm.rw',
            'reset_token': 'abc123',
            'new_password': 'brandnewpass',
            'new_password_confirm': 'brandnewpass',
        })
        assert serializer.is_valid(), serializer.errors

    def test_password_reset_rejects_confirmation_mismatch(self):
        serializer = PasswordResetSerializer(data={
            'email': 'jean@farm.rw',
            'reset_token': 'abc123',
            'new_password': 'brandnewpass',
            'new_password_confirm': 'differentpass',
        })
        assert not serializer.is_valid()
        assert 'new_password' in serializer.errors
