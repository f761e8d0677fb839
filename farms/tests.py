"""
Tests for farmer profiles and farms.
"""
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from farms.models import Farm, Farmer
from farms.serializers import FarmSerializer, FarmerSerializer

pytestmark = pytest.mark.django_db


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def farmer_profile(farmer_user):
    """Farmer profile for ``farmer_user`` in Musanze."""
    return Farmer.objects.create(
        user_id=farmer_user.id,
        farmer_code='FRM-0001',
        location='Kinigi Village',
        latitude=Decimal('-1.49950000'),
        longitude=Decimal('29.63450000'),
        province='Northern',
        district='Musanze',
        sector='Kinigi',
    )


def make_farm(farmer_id, size, **extra):
    return Farm.objects.create(
        farmer_id=farmer_id,
        farm_name=extra.pop('farm_name', f'Plot {size}'),
        farm_size=Decimal(size),
        soil_type='Clay',
        latitude=extra.pop('latitude', Decimal('-1.95000000')),
        longitude=extra.pop('longitude', Decimal('30.06000000')),
        **extra
    )


# =============================================================================
# FARMER
# =============================================================================

class TestFarmer:
    """Farmer profile defaults and predicates."""

    def test_id_has_farmer_prefix(self, farmer_profile):
        assert farmer_profile.id.startswith('F')
        assert len(farmer_profile.id) == 14

    def test_defaults_to_beginner(self, farmer_profile):
        assert farmer_profile.experience_level == Farmer.ExperienceLevel.BEGINNER
        assert farmer_profile.is_beginner()
        assert not farmer_profile.is_intermediate()
        assert not farmer_profile.is_expert()

    def test_full_location(self, farmer_profile):
        assert farmer_profile.full_location == 'Kinigi Village, Kinigi, Musanze, Northern'

    def test_coordinates(self, farmer_profile):
        assert farmer_profile.coordinates == '-1.499500, 29.634500'

    def test_coordinates_missing(self):
        assert Farmer(latitude=None, longitude=Decimal('29.6')).coordinates is None

    @pytest.mark.parametrize('value,expected', [
        (None, False),
        ('', False),
        ('   ', False),
        ('Organic', True),
    ])
    def test_has_certification(self, value, expected):
        assert Farmer(certification_level=value).has_certification() is expected

    def test_get_user(self, farmer_profile, farmer_user):
        assert farmer_profile.get_user() == farmer_user

    def test_get_user_missing(self, farmer_profile):
        farmer_profile.user_id = 'NOSUCHUSER0000'
        assert farmer_profile.get_user() is None

    def test_latitude_out_of_range(self, farmer_profile):
        farmer_profile.latitude = Decimal('91.0')
        with pytest.raises(ValidationError) as exc:
            farmer_profile.full_clean()
        assert 'latitude' in exc.value.message_dict

    def test_land_size_must_be_positive(self, farmer_profile):
        farmer_profile.total_land_size = Decimal('0')
        with pytest.raises(ValidationError) as exc:
            farmer_profile.full_clean()
        assert 'total_land_size' in exc.value.message_dict

    def test_serializer_exposes_full_location(self, farmer_profile):
        data = FarmerSerializer(farmer_profile).data
        assert data['full_location'] == 'Kinigi Village, Kinigi, Musanze, Northern'
        assert data['experience_level_display'] == 'Beginner'


def make_farmer(make_user, code, **extra):
    """Farmer profile with its own account, in Kigali unless overridden."""
    defaults = {
        'location': 'Kacyiru',
        'latitude': Decimal('-1.94410000'),
        'longitude': Decimal('30.06190000'),
        'province': 'Kigali',
        'district': 'Gasabo',
        'sector': 'Kacyiru',
    }
    defaults.update(extra)
    return Farmer.objects.create(user_id=make_user().id, farmer_code=code, **defaults)


class TestFarmerQuerySet:
    """Account, location, certification and land size lookups."""

    def test_for_user_and_code(self, farmer_profile, farmer_user):
        assert Farmer.objects.for_user(farmer_user.id).get() == farmer_profile
        assert Farmer.objects.with_code('FRM-0001').get() == farmer_profile
        assert not Farmer.objects.for_user('NOSUCHUSER0000').exists()
        assert not Farmer.objects.with_code('FRM-9999').exists()

    def test_by_location_hierarchy(self, make_user):
        kacyiru = make_farmer(make_user, 'K-1')
        remera = make_farmer(make_user, 'K-2', sector='Remera')
        nyarugenge = make_farmer(make_user, 'K-3', district='Nyarugenge', sector='Nyamirambo')
        make_farmer(make_user, 'S-1', province='Southern', district='Huye', sector='Tumba')

        assert set(Farmer.objects.by_location('Kigali')) == {kacyiru, remera, nyarugenge}
        assert set(Farmer.objects.by_location('Kigali', 'Gasabo')) == {kacyiru, remera}
        assert list(Farmer.objects.by_location('Kigali', 'Gasabo', 'Remera')) == [remera]
        assert not Farmer.objects.by_location('Eastern').exists()

    def test_certified_and_uncertified(self, make_user):
        organic = make_farmer(make_user, 'C-1', certification_level='Organic')
        missing = make_farmer(make_user, 'C-2')
        blank = make_farmer(make_user, 'C-3', certification_level='   ')

        assert list(Farmer.objects.certified()) == [organic]
        assert set(Farmer.objects.uncertified()) == {missing, blank}

    def test_cooperative_and_independent(self, make_user):
        member = make_farmer(make_user, 'CO-1', cooperative_name='Abahuzamugambi')
        other_member = make_farmer(make_user, 'CO-2', cooperative_name='Twitezimbere')
        loner = make_farmer(make_user, 'CO-3')

        assert set(Farmer.objects.in_cooperative()) == {member, other_member}
        assert list(Farmer.objects.in_cooperative('Abahuzamugambi')) == [member]
        assert list(Farmer.objects.independent()) == [loner]

    def test_within_bounds(self, farmer_profile, make_user):
        kigali = make_farmer(make_user, 'B-1')

        result = Farmer.objects.within_bounds(
            Decimal('-2.0'), Decimal('-1.8'), Decimal('30.0'), Decimal('30.2')
        )
        assert list(result) == [kigali]

    def test_land_size_between(self, make_user):
        smallholder = make_farmer(make_user, 'L-1', total_land_size=Decimal('1.50'))
        mid = make_farmer(make_user, 'L-2', total_land_size=Decimal('5.00'))
        estate = make_farmer(make_user, 'L-3', total_land_size=Decimal('25.00'))
        make_farmer(make_user, 'L-4')

        assert set(Farmer.objects.land_size_between(Decimal('1.50'), Decimal('5.00'))) == {smallholder, mid}
        assert list(Farmer.objects.land_size_between(min_size=Decimal('10'))) == [estate]
        assert Farmer.objects.land_size_between().count() == 3

    def test_chains_with_location(self, make_user):
        match = make_farmer(make_user, 'X-1', certification_level='GAP', cooperative_name='Koperative')
        make_farmer(make_user, 'X-2', certification_level='GAP')
        make_farmer(make_user, 'X-3', province='Western', district='Rubavu', sector='Gisenyi',
                    certification_level='GAP', cooperative_name='Koperative')

        assert list(Farmer.objects.by_location('Kigali').certified().in_cooperative()) == [match]

    def test_counts(self, make_user):
        make_farmer(make_user, 'N-1')
        make_farmer(make_user, 'N-2', experience_level=Farmer.ExperienceLevel.EXPERT)
        make_farmer(make_user, 'N-3', province='Southern', district='Huye', sector='Tumba')

        assert Farmer.objects.counts_by_experience_level() == {
            'BEGINNER': 2, 'INTERMEDIATE': 0, 'EXPERT': 1,
        }
        assert Farmer.objects.counts_by_province() == {'Kigali': 2, 'Southern': 1}


class TestFarmerSerializer:
    """Account and uniqueness checks on farmer profiles."""

    def payload(self, user_id, code='FRM-0100'):
        return {
            'user_id': user_id,
            'farmer_code': code,
            'location': 'Kacyiru',
            'latitude': '-1.94410000',
            'longitude': '30.06190000',
            'province': 'Kigali',
            'district': 'Gasabo',
            'sector': 'Kacyiru',
        }

    def test_creates_profile(self, make_user):
        user = make_user()
        serializer = FarmerSerializer(data=self.payload(user.id))
        assert serializer.is_valid(), serializer.errors
        farmer = serializer.save()
        assert farmer.get_user() == user

    def test_rejects_unknown_user(self):
        serializer = FarmerSerializer(data=self.payload('NOSUCHUSER0000'))
        assert not serializer.is_valid()
        assert serializer.errors['user_id'] == ['User account does not exist.']

    def test_rejects_second_profile_for_user(self, farmer_profile, farmer_user):
        serializer = FarmerSerializer(data=self.payload(farmer_user.id))
        assert not serializer.is_valid()
        assert serializer.errors['user_id'] == ['A farmer with this user ID already exists.']

    def test_rejects_duplicate_farmer_code(self, farmer_profile, make_user):
        serializer = FarmerSerializer(data=self.payload(make_user().id, code='FRM-0001'))
        assert not serializer.is_valid()
        assert serializer.errors['farmer_code'] == ['A farmer with this farmer code already exists.']

    def test_update_keeps_own_user_and_code(self, farmer_profile, farmer_user):
        serializer = FarmerSerializer(
            farmer_profile,
            data={'user_id': farmer_user.id, 'farmer_code': 'FRM-0001', 'sector': 'Nyange'},
            partial=True
        )
        assert serializer.is_valid(), serializer.errors
        assert serializer.save().sector == 'Nyange'


# =============================================================================
# FARM
# =============================================================================

class TestFarmDefaults:
    """Construction defaults for farms."""

    def test_fresh_instance(self):
        farm = Farm()
        assert farm.id.startswith('FM')
        assert len(farm.id) == 14
        assert farm.created_at is not None
        assert farm.updated_at is not None
        assert farm.electricity_available is False
        assert farm.irrigation_system == Farm.IrrigationSystem.RAIN_FED
        assert farm.road_access_quality == Farm.RoadAccess.MODERATE

    def test_blank_farm_code_stored_as_null(self, farm):
        farm.farm_code = '  '
        farm.full_clean()
        assert farm.farm_code is None


class TestFarmSizeCategory:
    """Size classification boundaries at 2.0 and 10.0 hectares."""

    @pytest.mark.parametrize('size,category,small,large', [
        ('0.50', 'Small Farm', True, False),
        ('2.00', 'Small Farm', True, False),
        ('2.01', 'Medium Farm', False, False),
        ('10.00', 'Medium Farm', False, False),
        ('10.01', 'Large Farm', False, True),
    ])
    def test_boundaries(self, size, category, small, large):
        farm = Farm(farm_size=Decimal(size))
        assert farm.size_category == category
        assert farm.is_small_farm() is small
        assert farm.is_large_farm() is large

    def test_unknown_size(self):
        farm = Farm(farm_size=None)
        assert farm.size_category == 'Unknown'
        assert not farm.is_small_farm()
        assert not farm.is_large_farm()


class TestFarmPredicates:
    """Derived display values and owner checks."""

    def test_altitude_display(self):
        assert Farm(altitude=Decimal('1567.50')).altitude_display == '1567.50 m'
        assert Farm(altitude=None).altitude_display == 'N/A'

    def test_has_electricity(self):
        assert Farm(electricity_available=True).has_electricity()
        assert not Farm().has_electricity()

    def test_coordinates(self, farm):
        assert farm.coordinates == '-1.949950, 30.058850'

    def test_owner_with_farmer_role(self, farm, farmer_user):
        assert farm.get_farmer() == farmer_user
        assert farm.has_farmer_with_valid_role()

    def test_owner_with_other_role(self, make_user):
        buyer = make_user(role='BUYER')
        farm = make_farm(buyer.id, '3.00')
        assert not farm.has_farmer_with_valid_role()

    def test_missing_owner(self):
        farm = Farm(farmer_id='NOSUCHUSER0000')
        assert farm.get_farmer() is None
        assert not farm.has_farmer_with_valid_role()


class TestFarmValidation:
    """Field validation through full_clean()."""

    def test_valid_farm(self, farm):
        farm.full_clean()

    def test_size_must_be_positive(self, farm):
        farm.farm_size = Decimal('0.00')
        with pytest.raises(ValidationError) as exc:
            farm.full_clean()
        assert 'farm_size' in exc.value.message_dict

    def test_negative_altitude(self, farm):
        farm.altitude = Decimal('-5.00')
        with pytest.raises(ValidationError) as exc:
            farm.full_clean()
        assert 'altitude' in exc.value.message_dict

    def test_longitude_out_of_range(self, farm):
        farm.longitude = Decimal('181.0')
        with pytest.raises(ValidationError) as exc:
            farm.full_clean()
        assert 'longitude' in exc.value.message_dict


class TestFarmQuerySet:
    """Owner, size class and bounding box lookups."""

    def test_size_classes(self, farmer_user):
        small = make_farm(farmer_user.id, '1.50')
        medium = make_farm(farmer_user.id, '4.50')
        large = make_farm(farmer_user.id, '12.00')

        assert list(Farm.objects.small()) == [small]
        assert list(Farm.objects.medium()) == [medium]
        assert list(Farm.objects.large()) == [large]

    def test_for_farmer(self, farmer_user, make_user):
        other = make_user()
        mine = make_farm(farmer_user.id, '3.00')
        make_farm(other.id, '3.00')

        assert list(Farm.objects.for_farmer(farmer_user.id)) == [mine]

    def test_within_bounds(self, farmer_user):
        inside = make_farm(farmer_user.id, '3.00', latitude=Decimal('-1.90'), longitude=Decimal('30.10'))
        make_farm(farmer_user.id, '3.00', latitude=Decimal('-2.60'), longitude=Decimal('29.70'))

        result = Farm.objects.within_bounds(
            Decimal('-2.0'), Decimal('-1.5'), Decimal('30.0'), Decimal('30.5')
        )
        assert list(result) == [inside]

    def test_with_electricity(self, farmer_user):
        powered = make_farm(farmer_user.id, '3.00', electricity_available=True)
        make_farm(farmer_user.id, '3.00', electricity_available=False)
        make_farm(farmer_user.id, '3.00')

        assert list(Farm.objects.with_electricity()) == [powered]
        assert list(Farm.objects.large().with_electricity()) == []

    def test_size_summary(self, farmer_user):
        make_farm(farmer_user.id, '1.50')
        make_farm(farmer_user.id, '4.50')
        make_farm(farmer_user.id, '12.00')

        summary = Farm.objects.size_summary(farmer_user.id)

        assert summary['count'] == 3
        assert summary['total_size'] == Decimal('18.00')
        assert summary['average_size'] == Decimal('6.00')

    def test_size_summary_without_farms(self):
        summary = Farm.objects.size_summary('NOFARMS0000000')
        assert summary == {'count': 0, 'total_size': Decimal('0'), 'average_size': Decimal('0')}


class TestFarmSerializer:
    """Serialized farm representation."""

    def test_derived_fields(self, farm):
        data = FarmSerializer(farm).data
        assert data['size_category'] == 'Medium Farm'
        assert data['altitude_display'] == 'N/A'
        assert data['irrigation_system_display'] == 'Rain Fed'

    def test_rejects_non_farmer_owner(self, make_user):
        buyer = make_user(role='BUYER')
        serializer = FarmSerializer(data={
            'farmer_id': buyer.id,
            'farm_name': 'Buyer Plot',
            'farm_size': '3.00',
            'soil_type': 'Loam',
            'latitude': '-1.95000000',
            'longitude': '30.06000000',
        })
        assert not serializer.is_valid()
        assert 'farmer_id' in serializer.errors

    def test_creates_farm_for_farmer(self, farmer_user):
        serializer = FarmSerializer(data={
            'farmer_id': farmer_user.id,
            'farm_name': 'New Plot',
            'farm_size': '3.00',
            'soil_type': 'Loam',
            'latitude': '-1.95000000',
            'longitude': '30.06000000',
        })
        assert serializer.is_valid(), serializer.errors
        farm = serializer.save()
        assert farm.id.startswith('FM')
