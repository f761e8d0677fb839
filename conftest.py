"""
Shared pytest fixtures for the domain apps.
"""
import uuid
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

User = get_user_model()


@pytest.fixture
def make_user(db):
    """Factory for users with unique usernames and emails."""
    def _make_user(role=User.Role.FARMER, password='testpass123', **extra):
        unique_id = uuid.uuid4().hex[:8]
        return User.objects.create_user(
            username=extra.pop('username', f'user_{unique_id}'),
            email=extra.pop('email', f'user_{unique_id}@test.com'),
            password=password,
            full_name=extra.pop('full_name', 'Test User'),
            role=role,
            **extra
        )
    return _make_user


@pytest.fixture
def farmer_user(make_user):
    """Account with the FARMER role."""
    return make_user(full_name='Jean Uwimana', phone_number='+250 788 123 456')


@pytest.fixture
def farm(farmer_user):
    """Medium-sized farm owned by ``farmer_user``."""
    from farms.models import Farm

    return Farm.objects.create(
        farmer_id=farmer_user.id,
        farm_name='Uwimana Hillside',
        farm_size=Decimal('4.50'),
        soil_type='Loam',
        latitude=Decimal('-1.94995000'),
        longitude=Decimal('30.05885000'),
    )
