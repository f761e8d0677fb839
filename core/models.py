"""
Shared model base for the domain apps.
"""
from django.db import models
from django.utils import timezone


class TrackedModel(models.Model):
    """
    Abstract base that stamps lifecycle timestamps.

    Concrete models declare their own ``id`` CharField with an
    ``IdGenerator`` default so a freshly constructed instance already has
    its key. On insert the key is filled in if it was cleared and both
    timestamps are set to now; on update only ``updated_at`` moves.
    """

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        now = timezone.now()

        if self._state.adding:
            if not self.pk:
                self.pk = self._meta.pk.get_default()
            self.created_at = now
            self.before_insert()

        self.updated_at = now

        update_fields = kwargs.get('update_fields')
        if update_fields is not None:
            kwargs['update_fields'] = set(update_fields) | {'updated_at'}

        super().save(*args, **kwargs)

    def before_insert(self):
        """Hook for per-model defaults applied on first save."""
