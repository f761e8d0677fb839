"""
Account services: password reset token issuing and redemption.
"""

import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

logger = logging.getLogger(__name__)

User = get_user_model()


class PasswordResetError(Exception):
    """Raised when a password reset request cannot be honoured."""


class PasswordResetService:
    """Handle password reset functionality."""

    @staticmethod
    def generate_reset_token():
        """Generate a secure password reset token."""
        return secrets.token_urlsafe(32)

    @classmethod
    def issue_reset_token(cls, user, lifetime=None):
        """
        Store a fresh reset token on the user.

        Args:
            user: User instance
            lifetime: timedelta the token stays valid for
                (defaults to PASSWORD_RESET_TOKEN_LIFETIME_MINUTES)

        Returns:
            The token string
        """
        if lifetime is None:
            lifetime = timedelta(minutes=settings.PASSWORD_RESET_TOKEN_LIFETIME_MINUTES)

        token = cls.generate_reset_token()
        user.reset_token = token
        user.reset_token_expiration = timezone.now() + lifetime
        user.save(update_fields=['reset_token', 'reset_token_expiration'])

        logger.info(f"Reset token issued for user {user.id}, expires {user.reset_token_expiration}")
        return token

    @classmethod
    @transaction.atomic
    def reset_password_with_token(cls, email, token, new_password):
        """
        Set a new password for the account owning ``email``.

        Raises:
            User.DoesNotExist: no account with that email
            PasswordResetError: no pending request, wrong token or expired token
        """
        user = User.objects.by_email(email)

        if user.reset_token is None or user.reset_token_expiration is None:
            logger.warning(f"No reset token found for user: {email}")
            raise PasswordResetError(
                "No active reset request found. Please request a new password reset."
            )

        if not secrets.compare_digest(user.reset_token, token):
            logger.warning(f"Invalid reset token for user: {email}")
            raise PasswordResetError("Invalid reset token.")

        if user.reset_token_expiration <= timezone.now():
            logger.warning(f"Expired reset token for user: {email}")
            raise PasswordResetError("Reset token has expired. Please request a new one.")

        user.set_password(new_password)
        user.clear_reset_token()
        user.save(update_fields=['password', 'reset_token', 'reset_token_expiration'])

        logger.info(f"Password reset successfully for email: {email}")
        return user
