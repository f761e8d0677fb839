from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.core.validators import MinLengthValidator, RegexValidator
from django.db import models
from django.utils import timezone

from core.ids import IdGenerator
from core.models import TrackedModel


class UserQuerySet(models.QuerySet):
    """Chainable lookups over accounts."""

    def by_email(self, email):
        """
        Fetch the account registered under ``email``.

        The domain part is lowercased the same way create_user stores it;
        the local part must match exactly since the unique constraint on
        ``email`` is case-sensitive.
        """
        return self.get(email=BaseUserManager.normalize_email(email))

    def with_role(self, role):
        return self.filter(role=role)

    def active(self):
        return self.filter(is_active=True)


class UserManager(BaseUserManager.from_queryset(UserQuerySet)):
    """Manager for the platform's User accounts."""

    use_in_migrations = True

    def create_user(self, username, email, password, full_name, role=None, **extra_fields):
        """Create and save a user with a hashed password."""
        if not username:
            raise ValueError('Username is required')
        if not email:
            raise ValueError('Email is required')
        if not password or len(password) < 8:
            raise ValueError('Password must be at least 8 characters')

        user = self.model(
            username=username,
            email=self.normalize_email(email),
            full_name=full_name,
            role=role or self.model.Role.FARMER,
            **extra_fields
        )
        user.set_password(password)
        user.save(using=self._db)
        return user


class User(AbstractBaseUser, TrackedModel):
    """
    Platform account.

    Farmers, buyers, administrators, analysts and government officials all
    sign in through this model; the farmer's agricultural profile lives in
    farms.Farmer and points back here through ``user_id``.
    """

    id = models.CharField(
        primary_key=True,
        max_length=20,
        default=IdGenerator(''),
        editable=False
    )

    class Role(models.TextChoices):
        FARMER = 'FARMER', 'Farmer'
        BUYER = 'BUYER', 'Buyer'
        ADMIN = 'ADMIN', 'Administrator'
        ANALYST = 'ANALYST', 'Analyst'
        GOVERNMENT = 'GOVERNMENT', 'Government'

    username = models.CharField(
        max_length=50,
        unique=True,
        validators=[MinLengthValidator(3)],
        help_text="Login name (3-50 characters)"
    )

    email = models.EmailField(
        max_length=100,
        unique=True
    )

    full_name = models.CharField(max_length=100)

    phone_number = models.CharField(
        max_length=20,
        blank=True,
        null=True,
        validators=[
            RegexValidator(
                regex=r'^[+]?[0-9\-\s()]*$',
                message='Invalid phone number format'
            )
        ]
    )

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        db_index=True,
        help_text="User's primary role in the system"
    )

    is_active = models.BooleanField(default=True)

    profile_image_url = models.CharField(max_length=255, blank=True, null=True)
    profile_image_data = models.BinaryField(blank=True, null=True)

    # Password reset
    reset_token = models.CharField(
        max_length=100,
        blank=True,
        null=True,
        help_text="Token for password reset"
    )

    reset_token_expiration = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Expiration time for password reset token"
    )

    objects = UserManager()

    USERNAME_FIELD = 'username'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['email', 'full_name']

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        indexes = [
            models.Index(fields=['role', 'is_active'], name='users_role_active_idx'),
        ]

    def __str__(self):
        return f"{self.get_full_name()} ({self.get_role_display()})"

    def before_insert(self):
        if self.is_active is None:
            self.is_active = True

    def get_full_name(self):
        """Return the user's full name or username if name is not set."""
        return self.full_name if self.full_name else self.username

    def get_short_name(self):
        return self.username

    # Role checks

    @property
    def authority(self):
        """Granted authority name, e.g. ROLE_FARMER."""
        return f"ROLE_{self.role}"

    def get_authorities(self):
        return [self.authority]

    def is_admin(self):
        return self.role == self.Role.ADMIN

    def is_farmer(self):
        return self.role == self.Role.FARMER

    def is_buyer(self):
        return self.role == self.Role.BUYER

    def is_analyst(self):
        return self.role == self.Role.ANALYST

    def is_government(self):
        return self.role == self.Role.GOVERNMENT

    # Account state

    def is_account_non_expired(self):
        return True

    def is_account_non_locked(self):
        return self.is_active if self.is_active is not None else True

    def is_credentials_non_expired(self):
        return True

    def is_enabled(self):
        return self.is_active if self.is_active is not None else True

    def update_last_login(self):
        self.last_login = timezone.now()

    # Password reset

    def has_valid_reset_token(self):
        """True while a reset token is set and its expiration is still ahead."""
        return (
            self.reset_token is not None
            and self.reset_token_expiration is not None
            and timezone.now() < self.reset_token_expiration
        )

    def clear_reset_token(self):
        self.reset_token = None
        self.reset_token_expiration = None
